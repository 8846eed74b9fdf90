"""Upload files to GitHub as a gist."""

__version__ = "0.1.0"

from .errors import (
    GistError,
    ConfigurationError,
    FileReadErrors,
    TransportError,
    ValidationErrors,
    DecodeError,
)
from .files import FileRecord, CollectedFiles, collect_files, must_collect_files
from .gist import GITHUB_API_URL, Gister, SubmissionConfig, parse_credentials
from .messages import GistPayload, GistResponse

__all__ = [
    "__version__",
    "GistError",
    "ConfigurationError",
    "FileReadErrors",
    "TransportError",
    "ValidationErrors",
    "DecodeError",
    "FileRecord",
    "CollectedFiles",
    "collect_files",
    "must_collect_files",
    "GITHUB_API_URL",
    "Gister",
    "SubmissionConfig",
    "parse_credentials",
    "GistPayload",
    "GistResponse",
]
