"""Console renderer drawing the picker as a month grid and a segmented field."""

import logging
from datetime import date
from typing import Optional

from ..dates.formatting import SegmentType
from ..engine.cells import CellState
from ..engine.machine import DatePickerEngine
from ..engine.types import PickerState
from ..utils.helpers import secure_clear_screen

logger = logging.getLogger(__name__)

CELL_WIDTH = 5


class ConsoleRenderer:
    """Renders a ``DatePickerEngine`` to plain text.

    Cell markers: ``[15]`` selected, ``>15<`` focused, ``{15}`` focused and
    selected, ``15*`` today, ``~15`` unavailable, ``··`` disabled. Days
    outside the displayed month are left blank.
    """

    def __init__(self, width: int = 40) -> None:
        """Initialize console renderer.

        Args:
            width: Width of the header rules
        """
        self.width = max(width, CELL_WIDTH * 7)
        logger.debug("Console renderer initialized")

    def render(self, engine: DatePickerEngine, help_text: Optional[str] = None) -> str:
        """Render the full picker: heading, grid, field and value lines."""
        try:
            lines = [
                "=" * self.width,
                self._render_heading(engine),
                "=" * self.width,
                "".join(label[:2].rjust(CELL_WIDTH) for label in engine.week_days),
            ]

            states = engine.get_grid_states()
            for week in engine.weeks:
                lines.append("".join(self.format_cell(day, states[day]) for day in week))

            lines.append("-" * self.width)
            lines.append(f"Field: {self.render_field(engine)}")
            lines.append(f"Value: {engine.value_as_string or '(none)'}")
            lines.append(f"State: {engine.state.value}")
            if help_text:
                lines.append("-" * self.width)
                lines.append(help_text)
            lines.append("=" * self.width)
            return "\n".join(lines)

        except Exception as e:
            logger.exception("Failed to render picker")
            return f"Error rendering picker: {e}"

    def _render_heading(self, engine: DatePickerEngine) -> str:
        prev_marker = "<" if engine.is_prev_visible_range_valid else " "
        next_marker = ">" if engine.is_next_visible_range_valid else " "
        title = engine.visible_range_text.center(self.width - 4)
        return f"{prev_marker} {title} {next_marker}"

    def format_cell(self, day: date, state: CellState) -> str:
        """Text for one grid cell, right-aligned to the cell width."""
        if state.is_outside_range:
            return " " * CELL_WIDTH

        text = f"{day.day:>2}"
        if state.is_disabled:
            text = "··"
        elif state.is_unavailable:
            text = f"~{day.day}"

        if state.is_focused and state.is_selected:
            text = f"{{{text}}}"
        elif state.is_selected:
            text = f"[{text}]"
        elif state.is_focused:
            text = f">{text}<"
        elif state.is_today:
            text = f"{text}*"
        return text.rjust(CELL_WIDTH)

    def render_field(self, engine: DatePickerEngine) -> str:
        """Segmented field text with the focused segment bracketed."""
        editing = engine.state == PickerState.EDITING_SEGMENT
        parts = []
        for segment in engine.segments:
            if editing and segment.type == engine.focused_segment and segment.type != SegmentType.LITERAL:
                parts.append(f"[{segment.text}]")
            else:
                parts.append(segment.text)
        return "".join(parts)

    def render_error(self, error_message: str) -> str:
        """Render an error banner."""
        return "\n".join(
            [
                "=" * self.width,
                "DATE PICKER ERROR",
                "=" * self.width,
                "",
                f"   {error_message}",
                "",
                "=" * self.width,
            ]
        )

    def clear_screen(self) -> bool:
        """Clear the console screen securely."""
        return secure_clear_screen()

    def display_with_clear(self, content: str) -> None:
        """Display content after clearing screen."""
        self.clear_screen()
        print(content)
        print()
