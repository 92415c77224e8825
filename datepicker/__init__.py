"""Date Picker - headless date picker engine with a terminal front end.

The engine tracks selection, grid focus and segmented field entry; the
``datepicker.ui`` and ``datepicker.display`` packages drive it from a
keyboard and render it as text.
"""

__version__ = "1.0.0"
__author__ = "Date Picker Team"
__description__ = "Headless date picker state machine with segmented date entry"

# Package metadata
__all__ = [
    "__author__",
    "__description__",
    "__version__",
]
