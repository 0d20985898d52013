"""Custom exceptions for templating context with template references."""

from pathlib import Path
from typing import Optional

# Resolved-text snippets attached to errors are truncated to this many characters
SNIPPET_LENGTH = 300


class TemplateError(Exception):
    """
    Base class for template resolution failures.

    Attributes:
        message: Error description
        template_path: Path to the template source (None for in-memory sources)
    """

    def __init__(self, message: str, template_path: Optional[Path] = None, details=()):
        self.message = message
        self.template_path = template_path

        parts = [message]
        if template_path:
            parts.append(f"\nTemplate: {template_path}")
        parts.extend(d for d in details if d)

        super().__init__("\n".join(parts))


class TemplateSyntaxError(TemplateError):
    """
    Raised when substituting resume data into a template source fails.

    Covers malformed directives, references to undefined helpers or variables,
    and helpers that raise while being evaluated.

    Attributes:
        original_error: The underlying Jinja2 (or helper) error
        lineno: Line in the template source, when known
    """

    def __init__(
        self,
        message: str,
        template_path: Optional[Path] = None,
        original_error: Optional[Exception] = None,
        lineno: Optional[int] = None,
    ):
        self.original_error = original_error
        self.lineno = lineno
        details = []
        if lineno is not None:
            details.append(f"Line: {lineno}")
        if original_error is not None:
            details.append(f"\nOriginal error: {original_error}")
        super().__init__(message, template_path, details)


class TemplateStructureError(TemplateError, ValueError):
    """
    Raised when resolved template text is not a valid document description.

    Attributes:
        location: Path to the offending field (e.g., "rows[2].cols[0].text.size")
        snippet: Beginning of the resolved text, for diagnosis
    """

    def __init__(
        self,
        message: str,
        location: Optional[str] = None,
        template_path: Optional[Path] = None,
        snippet: Optional[str] = None,
    ):
        self.location = location
        self.snippet = snippet
        details = []
        if location:
            details.append(f"Location: {location}")
        if snippet:
            truncated = snippet[:SNIPPET_LENGTH] + "..." if len(snippet) > SNIPPET_LENGTH else snippet
            details.append(f"\nResolved text:\n{truncated}")
        super().__init__(message, template_path, details)
