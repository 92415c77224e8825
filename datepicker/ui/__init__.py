"""Keyboard-driven terminal front end for the picker engine."""

from .interactive import InteractiveController
from .keyboard import KeyboardHandler, KeyCode, translate_key

__all__ = ["InteractiveController", "KeyCode", "KeyboardHandler", "translate_key"]
