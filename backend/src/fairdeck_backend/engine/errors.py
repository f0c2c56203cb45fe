from __future__ import annotations

from fairdeck_backend.engine.models import EngineError, ErrorCode


class EngineRejectedOperation(Exception):
    """A deterministic precondition failure; state is left untouched."""

    def __init__(self, code: ErrorCode, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def to_error(self) -> EngineError:
        return EngineError(code=self.code, message=self.message)
