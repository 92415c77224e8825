"""Text rendering of the picker state."""

from .console_renderer import ConsoleRenderer

__all__ = ["ConsoleRenderer"]
