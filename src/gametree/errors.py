"""Error types shared by the parsing helpers, the CLI and callers embedding the engine.

The search itself never raises for well-formed input: a finished game is reported as
"no move" (``None``). These errors cover the boundary where raw user input becomes a
game state.
"""
from __future__ import annotations

from typing import Dict


class EngineError(Exception):
    """Base error with the envelope fields a front end needs to react to it."""

    error_type = "EngineError"

    def __init__(self, message: str, recoverable: bool = True) -> None:
        super().__init__(message)
        self.message = message
        self.recoverable = recoverable

    def to_dict(self) -> Dict[str, object]:
        return {
            "message": self.message,
            "errorType": self.error_type,
            "recoverable": self.recoverable,
        }


class InvalidPositionError(EngineError, ValueError):
    """A board string, row grid, player symbol or heap list could not be parsed."""

    error_type = "InvalidPosition"
