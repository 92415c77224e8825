"""Interactive terminal controller driving a date picker engine."""

import logging
from typing import Any, Optional

from ..display.console_renderer import ConsoleRenderer
from ..engine.events import BlurSegment, FocusCell, FocusSegment
from ..engine.machine import DatePickerEngine
from ..engine.segments import first_editable
from ..engine.types import FocusChangeDetails, PickerState, ValueChangeDetails
from .keyboard import KeyboardHandler, KeyCode, translate_key

logger = logging.getLogger(__name__)


class InteractiveController:
    """Forwards keystrokes to the engine and redraws after each one."""

    def __init__(
        self,
        engine: DatePickerEngine,
        renderer: Optional[ConsoleRenderer] = None,
        keyboard: Optional[KeyboardHandler] = None,
    ):
        """Initialize interactive controller.

        Args:
            engine: Engine to drive
            renderer: Renderer for the picker, a default ``ConsoleRenderer`` if omitted
            keyboard: Keyboard source, a default ``KeyboardHandler`` if omitted
        """
        self.engine = engine
        self.renderer = renderer or ConsoleRenderer()
        self.keyboard = keyboard or KeyboardHandler()

        self._running = False
        self.last_value: Optional[ValueChangeDetails] = None

        self._setup_keyboard_handlers()
        self.engine.on_value_change(self._on_value_changed)
        self.engine.on_focus_change(self._on_focus_changed)

        logger.info("Interactive controller initialized")

    def _setup_keyboard_handlers(self) -> None:
        """Set up keyboard event handlers."""
        self.keyboard.register_key_handler(KeyCode.TAB, self._handle_tab)
        self.keyboard.register_key_handler(KeyCode.SPACE, self._handle_jump_to_today)
        self.keyboard.register_key_handler(KeyCode.ESCAPE, self._handle_exit)
        self.keyboard.register_default_handler(self._handle_key)

        logger.debug("Keyboard handlers configured")

    async def _handle_key(self, key_data: str) -> None:
        """Translate a keystroke into an engine event."""
        key_code = self.keyboard.parse_key_sequence(key_data)
        event = translate_key(key_code, key_data)
        if event is None:
            logger.debug(f"No engine event for key {key_code}")
            return
        self.engine.send(event)
        self._update_display()

    async def _handle_tab(self, _key_data: str) -> None:
        """Tab toggles between the grid and the segmented field."""
        if self.engine.state == PickerState.EDITING_SEGMENT:
            self.engine.send(BlurSegment())
        else:
            segment = first_editable(self.engine.segments)
            if segment is not None:
                self.engine.send(FocusSegment(segment))
        self._update_display()

    async def _handle_jump_to_today(self, _key_data: str) -> None:
        """Space focuses today's cell."""
        self.engine.send(FocusCell(self.engine.today))
        self._update_display()
        logger.debug("User jumped to today")

    async def _handle_exit(self, _key_data: str) -> None:
        """Escape or q leaves interactive mode."""
        logger.info("User requested exit from interactive mode")
        await self.stop()

    def _on_value_changed(self, details: ValueChangeDetails) -> None:
        self.last_value = details
        logger.info(f"Value changed to {details.value_as_string}")

    def _on_focus_changed(self, details: FocusChangeDetails) -> None:
        logger.debug(f"Focus moved to {details.focused_value} in {details.visible_range.month:%B %Y}")

    async def start(self) -> None:
        """Start interactive mode and block until the user exits."""
        if self._running:
            logger.warning("Interactive controller already running")
            return

        self._running = True
        logger.info("Starting interactive date picker")

        try:
            self._update_display()
            await self.keyboard.start_listening()
        except Exception:
            logger.exception("Error in interactive mode")
        finally:
            self._running = False
            logger.info("Interactive mode stopped")

    async def stop(self) -> None:
        """Stop interactive mode."""
        self._running = False
        self.keyboard.stop_listening()
        logger.debug("Interactive controller stop requested")

    def _update_display(self) -> None:
        content = self.renderer.render(self.engine, self.keyboard.get_help_text())
        self.renderer.display_with_clear(content)

    @property
    def is_running(self) -> bool:
        """Check if interactive controller is running."""
        return self._running

    def get_navigation_state(self) -> dict[str, Any]:
        """Snapshot of the picker for status output."""
        return {
            "state": self.engine.state.value,
            "focused_value": self.engine.focused_value.isoformat(),
            "visible_month": self.engine.visible_range_text,
            "value": self.engine.value_as_string,
            "field": self.renderer.render_field(self.engine),
        }
