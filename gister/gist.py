from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Optional, Tuple

import aiohttp
from pydantic import ValidationError

from . import __version__
from .debug import make_debug_logger
from .errors import ConfigurationError, DecodeError, TransportError, ValidationErrors
from .files import FileRecord
from .messages import ErrorReply, GistFile, GistPayload, GistResponse

GITHUB_API_URL = "https://api.github.com/gists"
# GitHub rejects API requests without a User-Agent
DEFAULT_USER_AGENT = f"gister/{__version__}"

dbg = make_debug_logger("gist")


def parse_credentials(token: str) -> Optional[Tuple[str, str]]:
    """Split a `username:password` token.

    Returns None unless the trimmed token has exactly two non-empty parts.
    """
    parts = token.strip().split(":")
    if len(parts) != 2 or not parts[0] or not parts[1]:
        return None
    return parts[0], parts[1]


@dataclass(frozen=True)
class SubmissionConfig:
    """Everything needed to create or update one gist.

    Built with the `with_*` methods, each returning a new config; the last
    value applied to a field wins. Nothing here does I/O or validates;
    checks happen in `Gister.send`.
    """
    anonymous: bool = False
    public: bool = False
    description: str = ""
    update: Optional[str] = None
    username: str = ""
    password: str = field(default="", repr=False)
    files: Mapping[str, FileRecord] = field(default_factory=dict)

    def with_anonymous(self, anonymous: bool) -> SubmissionConfig:
        return replace(self, anonymous=anonymous)

    def with_public(self, public: bool) -> SubmissionConfig:
        return replace(self, public=public)

    def with_description(self, description: str) -> SubmissionConfig:
        return replace(self, description=description)

    def with_update(self, gist_id: Optional[str]) -> SubmissionConfig:
        return replace(self, update=gist_id or None)

    def with_credentials(self, token: str) -> SubmissionConfig:
        # Malformed tokens are dropped silently and leave anonymous as is
        creds = parse_credentials(token)
        if creds is None:
            return self
        username, password = creds
        return replace(self, anonymous=False, username=username, password=password)

    def with_files(self, files: Mapping[str, FileRecord]) -> SubmissionConfig:
        return replace(self, files=dict(files))

    def payload(self) -> GistPayload:
        return GistPayload(
            description=self.description,
            public=self.public,
            files={name: GistFile(content=rec.content) for name, rec in self.files.items()},
        )


class Gister:
    """Sends a single SubmissionConfig to the gists API."""

    def __init__(
        self,
        config: SubmissionConfig,
        *,
        api_url: str = GITHUB_API_URL,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        self.config = config
        self.api_url = api_url.rstrip("/")
        self.user_agent = user_agent

    @property
    def endpoint(self) -> str:
        if self.config.update:
            return f"{self.api_url}/{self.config.update}"
        return self.api_url

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": self.user_agent,
        }

    def _auth(self) -> Optional[aiohttp.BasicAuth]:
        if not self.config.username:
            return None
        return aiohttp.BasicAuth(self.config.username, self.config.password)

    async def send(self, session: Optional[aiohttp.ClientSession] = None) -> GistResponse:
        """Create (or update) the gist and return the API's descriptor.

        Raises:
            ConfigurationError: no credentials and not anonymous; nothing is sent.
            TransportError: the request could not be completed.
            ValidationErrors: the API answered with an `errors` list.
            DecodeError: the body was not a gist descriptor.
        """
        opts = self.config
        if not opts.username and not opts.anonymous:
            raise ConfigurationError("no credentials provided and anonymous is false")

        body = opts.payload().to_json()

        if session is not None:
            return await self._post(session, body)
        async with aiohttp.ClientSession() as own:
            return await self._post(own, body)

    async def _post(self, session: aiohttp.ClientSession, body: str) -> GistResponse:
        url = self.endpoint
        dbg(f"Sending... POST {url} ({len(self.config.files)} files)")
        try:
            async with session.post(url, data=body, headers=self._headers(), auth=self._auth()) as resp:
                raw = await resp.read()
                status = resp.status
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransportError(f"request to {url} failed: {e}") from e
        dbg(f"HTTP {status}, {len(raw)} bytes")
        return decode_response(raw)


def decode_response(raw: bytes) -> GistResponse:
    """Turn a response body into a GistResponse.

    The body is probed for an `errors` key first; its presence means the
    request failed whatever the HTTP status said.
    """
    try:
        doc: Any = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DecodeError(f"response is not valid JSON: {e}") from e
    if not isinstance(doc, dict):
        raise DecodeError(f"expected a JSON object, got {type(doc).__name__}")

    if "errors" in doc:
        try:
            reply = ErrorReply.model_validate(doc)
        except ValidationError as e:
            raise DecodeError(f"malformed errors field: {e}") from e
        dbg(f"service rejected gist: {reply.message}")
        raise ValidationErrors(reply.message, reply.reasons())

    try:
        response = GistResponse.model_validate(doc)
    except ValidationError as e:
        raise DecodeError(f"unexpected gist response: {e}") from e
    if not response.html_url:
        dbg(f"response has no html_url (message: {doc.get('message', '')!r})")
    return response


__all__ = [
    "GITHUB_API_URL",
    "DEFAULT_USER_AGENT",
    "parse_credentials",
    "SubmissionConfig",
    "Gister",
    "decode_response",
]
