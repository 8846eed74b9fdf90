"""
Errors raised while collecting files and submitting a gist.

Every error derives from GistError so callers can render any of them.
"""

from __future__ import annotations


class GistError(Exception):
    """Base class for all gister errors."""
    pass


class ConfigurationError(GistError):
    """
    Raised before any network I/O when the submission cannot be sent,
    e.g. no credentials were provided and anonymous is false.
    """
    pass


class FileReadErrors(GistError):
    """One or more input files could not be read."""

    def __init__(self, failures: dict[str, str]):
        self.failures = dict(failures)
        super().__init__(str(self))

    def __str__(self) -> str:
        lines = ["ERROR: unable to read files"]
        lines.extend(f"{path}: {reason}" for path, reason in self.failures.items())
        return "\n".join(lines)


class TransportError(GistError):
    """The HTTP exchange failed (connection, TLS or timeout)."""
    pass


class ValidationErrors(GistError):
    """The service rejected the gist with per-field or per-file reasons."""

    def __init__(self, message: str, errors: dict[str, str]):
        self.message = message
        self.errors = dict(errors)
        super().__init__(str(self))

    def __str__(self) -> str:
        lines = [f"ERROR: {self.message}"]
        lines.extend(f"{name}: {reason}" for name, reason in self.errors.items())
        return "\n".join(lines)


class DecodeError(GistError):
    """The response body is not the JSON document we expected."""
    pass


__all__ = [
    "GistError",
    "ConfigurationError",
    "FileReadErrors",
    "TransportError",
    "ValidationErrors",
    "DecodeError",
]
