"""Custom exceptions for the rendering context."""

from typing import Optional


class ExportFailedError(Exception):
    """
    Exception raised when the rendering engine fails to produce a PDF.

    Attributes:
        message: Error description
        stage: Export stage at the time of failure (ExportStage value)
        cause: The underlying engine error
    """

    def __init__(
        self,
        message: str,
        stage: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ):
        self.message = message
        self.stage = stage
        self.cause = cause

        parts = [message]

        if stage:
            parts.append(f"Stage: {stage}")

        if cause is not None:
            parts.append(f"Original error: {type(cause).__name__}: {cause}")

        super().__init__("\n".join(parts))

    @property
    def details(self) -> str:
        """Operator-facing diagnostic string (underlying error when available)."""
        if self.cause is not None:
            return f"{type(self.cause).__name__}: {self.cause}"
        return self.message
