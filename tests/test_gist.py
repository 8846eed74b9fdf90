import json

import aiohttp
import pytest

from gister.errors import ConfigurationError, DecodeError, TransportError, ValidationErrors
from gister.files import FileRecord
from gister.gist import GITHUB_API_URL, Gister, SubmissionConfig, decode_response, parse_credentials

from stubs import StubResponse, StubSession

FILES = {"foo.txt": FileRecord(name="foo.txt", content="hello")}


def authed() -> SubmissionConfig:
    return SubmissionConfig().with_files(FILES).with_credentials("octo:s3cret")


@pytest.mark.parametrize("token,expected", [
    ("u:p", ("u", "p")),
    ("  octo:tok123\n", ("octo", "tok123")),
])
def test_parse_credentials_valid(token, expected):
    assert parse_credentials(token) == expected


@pytest.mark.parametrize("token", ["", "nocolon", ":p", "u:", "a:b:c", "   "])
def test_parse_credentials_malformed(token):
    assert parse_credentials(token) is None


def test_credentials_force_anonymous_off():
    cfg = SubmissionConfig().with_anonymous(True).with_credentials("u:p")
    assert (cfg.username, cfg.password, cfg.anonymous) == ("u", "p", False)


@pytest.mark.parametrize("token", ["nocolon", ":p", "u:"])
def test_malformed_credentials_leave_config_unchanged(token):
    before = SubmissionConfig().with_anonymous(True).with_public(True)
    assert before.with_credentials(token) == before


def test_last_applied_value_wins():
    cfg = (
        SubmissionConfig()
        .with_description("first")
        .with_public(True)
        .with_description("second")
        .with_public(False)
        .with_update("abc")
        .with_update("")
    )
    assert cfg.description == "second"
    assert cfg.public is False
    assert cfg.update is None


def test_payload_omits_empty_description():
    body = json.loads(authed().payload().to_json())
    assert body == {"public": False, "files": {"foo.txt": {"content": "hello"}}}


def test_payload_keeps_description_and_hides_internal_fields():
    cfg = authed().with_description("my snippet").with_public(True).with_update("abc123")
    body = json.loads(cfg.payload().to_json())
    assert body["description"] == "my snippet"
    assert body["public"] is True
    assert set(body) == {"description", "public", "files"}


def test_endpoint_targets_existing_gist_on_update():
    assert Gister(authed()).endpoint == GITHUB_API_URL
    assert Gister(authed().with_update("abc123")).endpoint == f"{GITHUB_API_URL}/abc123"


@pytest.mark.asyncio
async def test_missing_credentials_makes_no_request():
    session = StubSession(StubResponse({"html_url": "x"}))
    gister = Gister(SubmissionConfig().with_files(FILES))

    with pytest.raises(ConfigurationError):
        await gister.send(session=session)

    assert session.calls == []


@pytest.mark.asyncio
async def test_send_success_returns_descriptor():
    resp = StubResponse({"id": "abc123", "html_url": "https://snip.example/abc123", "public": True})
    session = StubSession(resp)

    result = await Gister(authed(), api_url="https://snip.example/gists").send(session=session)

    assert result.html_url == "https://snip.example/abc123"
    assert result.id == "abc123"
    assert resp.released
    call = session.calls[0]
    assert call["url"] == "https://snip.example/gists"
    assert call["headers"]["Content-Type"] == "application/json"
    assert call["headers"]["Accept"] == "application/json"
    assert call["auth"] == aiohttp.BasicAuth("octo", "s3cret")
    assert json.loads(call["data"]) == {"public": False, "files": {"foo.txt": {"content": "hello"}}}


@pytest.mark.asyncio
async def test_anonymous_send_has_no_auth():
    session = StubSession(StubResponse({"html_url": "https://snip.example/anon"}))
    cfg = SubmissionConfig().with_files(FILES).with_anonymous(True).with_public(True)

    result = await Gister(cfg).send(session=session)

    assert result.html_url == "https://snip.example/anon"
    assert session.calls[0]["auth"] is None


@pytest.mark.asyncio
async def test_update_posts_to_gist_id():
    session = StubSession(StubResponse({"html_url": "https://snip.example/abc123"}, status=200))

    await Gister(authed().with_update("abc123"), api_url="https://snip.example/gists/").send(session=session)

    assert session.calls[0]["url"] == "https://snip.example/gists/abc123"


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [200, 201, 422])
async def test_errors_field_wins_over_status(status):
    resp = StubResponse({"errors": [{"foo.txt": "something bad"}]}, status=status)

    with pytest.raises(ValidationErrors) as excinfo:
        await Gister(authed()).send(session=StubSession(resp))

    assert excinfo.value.errors == {"foo.txt": "something bad"}
    assert resp.released


@pytest.mark.asyncio
async def test_transport_error_is_wrapped():
    exc = aiohttp.ClientConnectionError("connection refused")
    session = StubSession(exc=exc)

    with pytest.raises(TransportError) as excinfo:
        await Gister(authed()).send(session=session)

    assert excinfo.value.__cause__ is exc
    assert len(session.calls) == 1


def test_validation_errors_render_each_entry():
    body = {"message": "Validation Failed", "errors": [{"a.txt": "empty"}, {"b.txt": "too big"}]}
    with pytest.raises(ValidationErrors) as excinfo:
        decode_response(json.dumps(body).encode())
    assert str(excinfo.value) == "ERROR: Validation Failed\na.txt: empty\nb.txt: too big"


@pytest.mark.parametrize("raw", [b"<html>oops</html>", b"[1, 2]", b'{"errors": "nope"}', b'{"comments": "many"}'])
def test_undecodable_bodies(raw):
    with pytest.raises(DecodeError):
        decode_response(raw)


def test_descriptor_decodes_owner_and_ignores_unknown_keys():
    body = {
        "html_url": "https://gist.github.com/abc",
        "user": {"login": "octo", "id": 1, "site_admin": False},
        "owner": {"login": "octo"},
        "truncated": True,
        "history": [{"version": "1"}],
        "something_new": 42,
    }
    result = decode_response(json.dumps(body).encode())
    assert result.user is not None and result.user.login == "octo"
    assert result.truncated is True
    assert result.history == [{"version": "1"}]


def test_body_without_html_url_is_logged(monkeypatch):
    import gister.gist as gg

    logged = []
    monkeypatch.setattr(gg, "dbg", logged.append)

    result = decode_response(b'{"message": "Not Found", "documentation_url": "https://docs.example"}')

    assert result.html_url == ""
    assert any("no html_url" in line and "Not Found" in line for line in logged)
