"""Custom exceptions for the templating context."""

from pathlib import Path
from typing import Iterable, Optional


class InputMalformedError(ValueError):
    """
    Exception raised when resume input does not have the expected JSON shape.

    Attributes:
        message: Error description
        field_path: Dotted path to the offending field (e.g., 'projects[1].links')
    """

    def __init__(self, message: str, field_path: Optional[str] = None):
        self.message = message
        self.field_path = field_path

        if field_path:
            super().__init__(f"{message} (at '{field_path}')")
        else:
            super().__init__(message)


class TemplateMismatchError(Exception):
    """
    Exception raised when a loaded template is not the resume skeleton.

    This is a deployment/configuration error: the asset on disk does not carry
    the placeholder set the compositor substitutes.

    Attributes:
        message: Error description
        missing: Placeholder tokens (or elements) not found in the template
        template_path: Path of the offending template, when loaded from disk
    """

    def __init__(
        self,
        message: str,
        missing: Iterable[str] = (),
        template_path: Optional[Path] = None,
    ):
        self.message = message
        self.missing = list(missing)
        self.template_path = template_path

        parts = [message]

        if template_path:
            parts.append(f"\nTemplate: {template_path}")

        if self.missing:
            parts.append(f"Missing: {', '.join(self.missing)}")

        super().__init__("\n".join(parts))
