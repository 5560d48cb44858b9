"""Keyboard controls."""

from .input_handler import InputHandler, KeyCodes

__all__ = ["InputHandler", "KeyCodes"]
