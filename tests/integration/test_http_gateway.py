"""
Integration tests for HttpAccountGateway against httpx.MockTransport.

Covers the wire contract: paths, JSON bodies, cookie handling and the
mapping of responses to Result values.
"""

import json

import httpx
import pytest
from portal_auth.adapters.http_gateway import HttpAccountGateway
from portal_auth.config import PortalConfig
from portal_auth.domain.result import Err, FailureKind, Ok

API_URL = "http://portal.test"


def make_gateway(handler):
    return HttpAccountGateway.from_config(
        PortalConfig(api_url=API_URL, timeout=2),
        transport=httpx.MockTransport(handler),
    )


def recorder(responses):
    """Handler returning canned responses per path and recording requests."""
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return responses[request.url.path]

    return handler, seen


@pytest.mark.asyncio
async def test_probe_authenticated():
    """2xx with identity -> authenticated."""
    handler, seen = recorder({
        "/api/me": httpx.Response(200, json={"user_id": 3, "username": "alice"}),
    })
    gateway = make_gateway(handler)

    outcome = await gateway.probe()

    assert outcome.is_authenticated
    assert outcome.identity.user_id == "3"
    assert seen[0].method == "GET"
    await gateway.aclose()


@pytest.mark.asyncio
@pytest.mark.parametrize("response", [
    httpx.Response(401, json={"error": "unauthorized"}),
    httpx.Response(500, text="boom"),
    httpx.Response(200, text="not json"),
    httpx.Response(200, json={"message": "no identity"}),
    httpx.Response(200, json=["a", "list"]),
])
async def test_probe_non_success_is_unauthenticated(response):
    """Anything but a readable identity is unauthenticated."""
    gateway = make_gateway(lambda request: response)

    outcome = await gateway.probe()

    assert not outcome.is_authenticated
    await gateway.aclose()


@pytest.mark.asyncio
async def test_probe_network_failure_is_unauthenticated():
    """Transport errors never propagate from the probe."""
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    gateway = make_gateway(handler)

    outcome = await gateway.probe()

    assert not outcome.is_authenticated
    await gateway.aclose()


@pytest.mark.asyncio
async def test_login_with_credentials_mfa():
    """POST /api/login {id, password} -> LoginChallenge."""
    handler, seen = recorder({
        "/api/login": httpx.Response(
            200, json={"mfa_required": True, "method": "email_otp", "expires_in": 5}
        ),
    })
    gateway = make_gateway(handler)

    result = await gateway.login_with_credentials("alice@example.com", "pw")

    assert isinstance(result, Ok)
    assert result.value.mfa_required is True
    assert result.value.expires_in_minutes == 5
    assert json.loads(seen[0].content) == {"id": "alice@example.com", "password": "pw"}
    await gateway.aclose()


@pytest.mark.asyncio
async def test_rejection_carries_server_message():
    """Non-2xx -> Err(REJECTED) with the error text verbatim."""
    handler, _ = recorder({
        "/api/login/mfa": httpx.Response(401, json={"error": "invalid code"}),
        "/api/password/reset": httpx.Response(400, json={"message": "token expired or used"}),
        "/api/password/change": httpx.Response(500, text="<html>oops</html>"),
    })
    gateway = make_gateway(handler)

    code = await gateway.login_with_code("alice", "123456")
    reset = await gateway.consume_password_reset("tok", "pw")
    change = await gateway.change_password("old", "new")

    assert isinstance(code, Err)
    assert code.failure.kind == FailureKind.REJECTED
    assert code.failure.message == "invalid code"
    assert code.failure.status == 401
    assert reset.failure.message == "token expired or used"
    assert change.failure.message is None
    assert change.failure.status == 500
    await gateway.aclose()


@pytest.mark.asyncio
async def test_transport_failure_is_err():
    """Timeouts map to Err(TRANSPORT)."""
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    gateway = make_gateway(handler)

    result = await gateway.request_password_reset("alice@example.com")

    assert isinstance(result, Err)
    assert result.failure.kind == FailureKind.TRANSPORT
    assert result.failure.message is None
    await gateway.aclose()


@pytest.mark.asyncio
async def test_request_bodies():
    """Field names on the wire."""
    handler, seen = recorder({
        "/api/password/forgot": httpx.Response(200, json={"message": "sent"}),
        "/api/password/reset": httpx.Response(200, json={"message": "ok"}),
        "/api/password/change": httpx.Response(200, json={"message": "check email"}),
        "/api/login/mfa": httpx.Response(200, json={"message": "ok"}),
        "/api/logout": httpx.Response(200),
    })
    gateway = make_gateway(handler)

    await gateway.request_password_reset("alice@example.com")
    await gateway.consume_password_reset("raw-token_", "new-password")
    await gateway.change_password("old-pw", "new-pw")
    await gateway.login_with_code("alice", "123456")
    logout = await gateway.logout()

    bodies = [(r.url.path, json.loads(r.content)) for r in seen]
    assert bodies == [
        ("/api/password/forgot", {"email": "alice@example.com"}),
        ("/api/password/reset", {"token": "raw-token_", "new_password": "new-password"}),
        ("/api/password/change", {"old_password": "old-pw", "new_password": "new-pw"}),
        ("/api/login/mfa", {"id": "alice", "code": "123456"}),
        ("/api/logout", {}),
    ]
    assert isinstance(logout, Ok)
    assert logout.value == {}
    await gateway.aclose()


@pytest.mark.asyncio
async def test_session_cookie_sent_except_on_register():
    """Cookie from login rides along on later calls, but not on registration."""
    cookies_seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        cookies_seen[request.url.path] = request.headers.get("cookie")
        if request.url.path == "/api/login/mfa":
            return httpx.Response(
                200,
                json={"message": "ok"},
                headers={"set-cookie": "session=opaque-value; Path=/; HttpOnly"},
            )
        if request.url.path == "/api/me":
            return httpx.Response(200, json={"user_id": 1, "username": "alice"})
        return httpx.Response(200, json={})

    gateway = make_gateway(handler)

    await gateway.login_with_code("alice", "123456")
    outcome = await gateway.probe()
    await gateway.register("carol", "carol@example.com", "pw")

    assert outcome.is_authenticated
    assert cookies_seen["/api/login/mfa"] is None
    assert cookies_seen["/api/me"] == "session=opaque-value"
    assert cookies_seen["/api/register"] is None
    await gateway.aclose()
