"""Keyboard input handling and key-to-event translation for the terminal picker."""

import asyncio
import logging
import sys
from collections.abc import Awaitable
from enum import Enum
from typing import Any, Callable, Optional, Union

from ..engine.events import (
    ArrowDown,
    ArrowLeft,
    ArrowRight,
    ArrowUp,
    Backspace,
    ClearValue,
    ClickNext,
    ClickPrev,
    End,
    Enter,
    Event,
    Home,
    PageDown,
    PageUp,
    TypeDigit,
)

logger = logging.getLogger(__name__)


class KeyCode(Enum):
    """Key codes understood by the terminal picker."""

    LEFT_ARROW = "left"
    RIGHT_ARROW = "right"
    UP_ARROW = "up"
    DOWN_ARROW = "down"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    SHIFT_PAGE_UP = "shift_page_up"
    SHIFT_PAGE_DOWN = "shift_page_down"
    HOME = "home"
    END = "end"
    ENTER = "enter"
    TAB = "tab"
    BACKSPACE = "backspace"
    DIGIT = "digit"
    SPACE = "space"
    NEXT_MONTH = "next_month"
    PREV_MONTH = "prev_month"
    CLEAR = "clear"
    ESCAPE = "escape"
    UNKNOWN = "unknown"


KeyCallback = Union[Callable[[str], None], Callable[[str], Awaitable[None]]]

# Keys that map to an engine event without looking at picker state
_KEY_EVENTS: dict[KeyCode, Event] = {
    KeyCode.LEFT_ARROW: ArrowLeft(),
    KeyCode.RIGHT_ARROW: ArrowRight(),
    KeyCode.UP_ARROW: ArrowUp(),
    KeyCode.DOWN_ARROW: ArrowDown(),
    KeyCode.PAGE_UP: PageUp(),
    KeyCode.PAGE_DOWN: PageDown(),
    KeyCode.SHIFT_PAGE_UP: PageUp(larger=True),
    KeyCode.SHIFT_PAGE_DOWN: PageDown(larger=True),
    KeyCode.HOME: Home(),
    KeyCode.END: End(),
    KeyCode.ENTER: Enter(),
    KeyCode.BACKSPACE: Backspace(),
    KeyCode.NEXT_MONTH: ClickNext(),
    KeyCode.PREV_MONTH: ClickPrev(),
    KeyCode.CLEAR: ClearValue(),
}


def translate_key(key_code: KeyCode, key_data: str = "") -> Optional[Event]:
    """Map a parsed key to the engine event it stands for.

    Args:
        key_code: Parsed key code
        key_data: Raw key data, needed for digits

    Returns:
        The event, or None for keys the controller handles itself (Tab,
        Space, Escape) and unknown keys
    """
    if key_code == KeyCode.DIGIT:
        return TypeDigit(key_data.strip()) if key_data.strip().isdigit() else None
    return _KEY_EVENTS.get(key_code)


class KeyboardHandler:
    """Reads keystrokes from the terminal and dispatches them to callbacks."""

    def __init__(self) -> None:
        """Initialize keyboard handler."""
        self._running = False
        self._key_callbacks: dict[KeyCode, KeyCallback] = {}
        self._default_callback: Optional[KeyCallback] = None

        self._setup_platform_input()

        logger.debug("Keyboard handler initialized")

    def _setup_platform_input(self) -> None:
        """Set up platform-specific keyboard input handling."""
        self._fallback_mode = False
        self._old_settings: Optional[list[Any]] = None

        try:
            if sys.platform == "win32":
                import msvcrt  # noqa: PLC0415

                self._getch = msvcrt.getwch
                self._kbhit = msvcrt.kbhit
            else:

                def _getch() -> str:
                    """Read a single character in raw mode."""
                    return sys.stdin.read(1)

                def _kbhit() -> bool:
                    """Check for available input using select."""
                    import select  # noqa: PLC0415

                    return select.select([sys.stdin], [], [], 0) == ([sys.stdin], [], [])

                self._getch = _getch
                self._kbhit = _kbhit

        except ImportError as e:
            logger.warning(f"Could not import platform-specific keyboard modules: {e}")
            self._setup_fallback_input()

    def _setup_terminal(self) -> None:
        """Set up terminal for raw input mode on Unix systems."""
        if sys.platform == "win32":
            return
        try:
            import termios  # noqa: PLC0415

            fd = sys.stdin.fileno()
            self._old_settings = termios.tcgetattr(fd)

            new_settings = termios.tcgetattr(fd)
            new_settings[3] &= ~(termios.ICANON | termios.ECHO)
            new_settings[6][termios.VMIN] = 0
            new_settings[6][termios.VTIME] = 1  # 0.1s read timeout

            termios.tcsetattr(fd, termios.TCSAFLUSH, new_settings)
            logger.debug("Terminal set to raw input mode with timeout")

        except Exception as e:
            logger.warning(f"Could not set terminal to raw mode: {e}")
            self._setup_fallback_input()

    def _setup_fallback_input(self) -> None:
        """Line-based input used when raw mode is unavailable."""
        logger.info("Using fallback input method - press Enter after each key")
        self._fallback_mode = True

        def _getch_fallback() -> str:
            try:
                return input("Key (left/right/up/down, pgup/pgdn, 0-9, tab, q): ").strip()
            except EOFError:
                return "q"

        def _kbhit_fallback() -> bool:
            return True

        self._getch = _getch_fallback
        self._kbhit = _kbhit_fallback

    def _restore_terminal(self) -> None:
        """Restore terminal settings on Unix systems."""
        if sys.platform != "win32" and self._old_settings:
            try:
                import termios  # noqa: PLC0415

                fd = sys.stdin.fileno()
                termios.tcsetattr(fd, termios.TCSADRAIN, self._old_settings)

                logger.debug("Terminal settings restored")
            except Exception as e:
                logger.warning(f"Could not restore terminal settings: {e}")

    def parse_key_sequence(self, key_data: str) -> KeyCode:
        """Parse raw key data into a KeyCode.

        Args:
            key_data: Raw key data from input

        Returns:
            Corresponding KeyCode
        """
        if not key_data:
            return KeyCode.UNKNOWN

        if self._fallback_mode:
            return self._parse_fallback_mode(key_data)
        if len(key_data) == 1:
            return self._parse_single_char(key_data)
        if key_data.startswith("\x1b["):
            return self._parse_escape_sequence(key_data[2:])
        if sys.platform == "win32":
            return self._parse_windows_sequence(key_data)

        return KeyCode.UNKNOWN

    def _parse_fallback_mode(self, key_data: str) -> KeyCode:
        """Parse a typed word in fallback mode."""
        fallback_mappings = {
            "left": KeyCode.LEFT_ARROW,
            "right": KeyCode.RIGHT_ARROW,
            "up": KeyCode.UP_ARROW,
            "down": KeyCode.DOWN_ARROW,
            "pgup": KeyCode.PAGE_UP,
            "pgdn": KeyCode.PAGE_DOWN,
            "+pgup": KeyCode.SHIFT_PAGE_UP,
            "+pgdn": KeyCode.SHIFT_PAGE_DOWN,
            "home": KeyCode.HOME,
            "end": KeyCode.END,
            "enter": KeyCode.ENTER,
            "tab": KeyCode.TAB,
            "bs": KeyCode.BACKSPACE,
            "backspace": KeyCode.BACKSPACE,
            "space": KeyCode.SPACE,
            "next": KeyCode.NEXT_MONTH,
            "prev": KeyCode.PREV_MONTH,
            "clear": KeyCode.CLEAR,
            "esc": KeyCode.ESCAPE,
            "q": KeyCode.ESCAPE,
            "quit": KeyCode.ESCAPE,
        }

        key_lower = key_data.lower().strip()
        if len(key_lower) == 1 and key_lower.isdigit():
            return KeyCode.DIGIT
        return fallback_mappings.get(key_lower, KeyCode.UNKNOWN)

    def _parse_single_char(self, key_data: str) -> KeyCode:
        """Parse a single character input."""
        if key_data.isdigit():
            return KeyCode.DIGIT

        char_mappings = {
            " ": KeyCode.SPACE,
            "\x1b": KeyCode.ESCAPE,
            "\r": KeyCode.ENTER,
            "\n": KeyCode.ENTER,
            "\t": KeyCode.TAB,
            "\x7f": KeyCode.BACKSPACE,
            "\x08": KeyCode.BACKSPACE,
            "]": KeyCode.NEXT_MONTH,
            "[": KeyCode.PREV_MONTH,
            "c": KeyCode.CLEAR,
            "q": KeyCode.ESCAPE,
        }

        return char_mappings.get(key_data.lower(), KeyCode.UNKNOWN)

    def _parse_escape_sequence(self, sequence: str) -> KeyCode:
        """Parse an escape sequence.

        Args:
            sequence: The escape sequence without the '\x1b[' prefix
        """
        escape_mappings = {
            "A": KeyCode.UP_ARROW,
            "B": KeyCode.DOWN_ARROW,
            "C": KeyCode.RIGHT_ARROW,
            "D": KeyCode.LEFT_ARROW,
            "5~": KeyCode.PAGE_UP,
            "6~": KeyCode.PAGE_DOWN,
            "5;2~": KeyCode.SHIFT_PAGE_UP,
            "6;2~": KeyCode.SHIFT_PAGE_DOWN,
            "Z": KeyCode.TAB,
        }

        # Home and End keys can have multiple representations
        if sequence in {"H", "1~"}:
            return KeyCode.HOME
        if sequence in {"F", "4~"}:
            return KeyCode.END

        return escape_mappings.get(sequence, KeyCode.UNKNOWN)

    def _parse_windows_sequence(self, key_data: Union[str, bytes]) -> KeyCode:
        """Parse Windows extended-key scan codes."""
        windows_mappings = {
            b"H": KeyCode.UP_ARROW,
            b"P": KeyCode.DOWN_ARROW,
            b"M": KeyCode.RIGHT_ARROW,
            b"K": KeyCode.LEFT_ARROW,
            b"I": KeyCode.PAGE_UP,
            b"Q": KeyCode.PAGE_DOWN,
            b"G": KeyCode.HOME,
            b"O": KeyCode.END,
        }

        if isinstance(key_data, str):
            try:
                key_data = key_data.encode("latin1")
            except (UnicodeError, AttributeError):
                return KeyCode.UNKNOWN

        return windows_mappings.get(key_data[-1:], KeyCode.UNKNOWN)

    def register_key_handler(self, key_code: KeyCode, callback: KeyCallback) -> None:
        """Register a callback for a specific key.

        The callback receives the raw key data so digit handlers can tell
        which digit was pressed.
        """
        self._key_callbacks[key_code] = callback
        logger.debug(f"Registered handler for key: {key_code}")

    def register_default_handler(self, callback: KeyCallback) -> None:
        """Register a callback for keys without a dedicated handler."""
        self._default_callback = callback
        logger.debug("Registered default key handler")

    def unregister_key_handler(self, key_code: KeyCode) -> None:
        """Unregister a key handler."""
        if key_code in self._key_callbacks:
            del self._key_callbacks[key_code]
            logger.debug(f"Unregistered handler for key: {key_code}")

    async def start_listening(self) -> None:
        """Start listening for keyboard input."""
        if self._running:
            logger.warning("Keyboard handler already running")
            return

        self._running = True
        self._setup_terminal()

        logger.info("Started keyboard input listening")
        logger.debug(f"Platform: {sys.platform}")

        try:
            await self._input_loop()
        finally:
            self._restore_terminal()
            self._running = False
            logger.info("Stopped keyboard input listening")

    def stop_listening(self) -> None:
        """Stop listening for keyboard input."""
        self._running = False
        logger.debug("Keyboard handler stop requested")

    async def _input_loop(self) -> None:
        """Main input loop for capturing keystrokes."""
        while self._running:
            try:
                if self._fallback_mode:
                    if self._kbhit():
                        key_data = self._getch()
                        if key_data:
                            await self.handle_key_input(key_data)
                    await asyncio.sleep(0.1)
                    continue

                if not self._kbhit():
                    await asyncio.sleep(0.05)
                    continue

                if sys.platform == "win32":
                    key_data = self._getch()
                    if key_data in ("\x00", "\xe0"):
                        key_data += self._getch()
                else:
                    key_data = self._read_key_sequence()

                if key_data:
                    await self.handle_key_input(key_data)

            except KeyboardInterrupt:
                logger.info("Keyboard interrupt received")
                break
            except Exception:
                logger.exception("Error in keyboard input loop")
                await asyncio.sleep(0.1)

    def _read_key_sequence(self) -> str:
        """Read a complete key sequence, collecting escape sequences."""
        key_data = self._getch()
        if key_data != "\x1b":
            return str(key_data)

        sequence = key_data
        # With VTIME=1 _getch() returns "" once the sequence is exhausted
        while len(sequence) < 8:
            next_char = self._getch()
            if not next_char:
                break
            sequence += next_char
            if next_char.isalpha() or next_char == "~":
                break

        logger.debug(f"Read escape sequence: {sequence!r}")
        return sequence

    async def handle_key_input(self, key_data: str) -> None:
        """Parse raw key data and run the matching callback."""
        try:
            key_code = self.parse_key_sequence(key_data)
            logger.debug(f"Received key_data={key_data!r}, parsed as={key_code}")

            callback = self._key_callbacks.get(key_code, self._default_callback)
            if key_code == KeyCode.UNKNOWN or callback is None:
                logger.debug(f"No handler for key sequence: {key_data!r}")
                return

            if asyncio.iscoroutinefunction(callback):
                await callback(key_data)
            else:
                callback(key_data)

        except Exception:
            logger.exception("Error handling key input")

    @property
    def is_running(self) -> bool:
        """Check if keyboard handler is currently running."""
        return self._running

    def get_help_text(self) -> str:
        """One-line key legend."""
        return (
            "←→↑↓ Move | PgUp/PgDn Month | Shift+PgUp/PgDn Year | Home/End Week | "
            "Enter Select | Tab Edit field | 0-9 Type | [ ] Page | c Clear | q Quit"
        )
