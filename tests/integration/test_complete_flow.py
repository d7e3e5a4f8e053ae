"""
Integration test for the complete portal journey over HTTP.

PortalClient -> HttpAccountGateway -> httpx.MockTransport -> fake backend.
The fake backend reuses InMemoryAccountServer for account logic and adds
the cookie handling a real server does.
"""

import json

import httpx
import pytest
from portal_auth import PortalClient, PortalConfig
from portal_auth.adapters.memory_navigator import HistoryNavigator
from portal_auth.adapters.memory_server import InMemoryAccountServer
from portal_auth.domain.login import LoginStep
from portal_auth.domain.result import Err
from portal_auth.flows import messages

SESSION_COOKIE = "session=s3ss10n"


class FakeBackend:
    """HTTP front for InMemoryAccountServer with a session cookie."""

    def __init__(self, accounts: InMemoryAccountServer):
        self.accounts = accounts

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        body = json.loads(request.content) if request.content else {}
        has_cookie = SESSION_COOKIE in (request.headers.get("cookie") or "")

        if path == "/api/me":
            outcome = await self.accounts.probe()
            if not has_cookie or not outcome.is_authenticated:
                return httpx.Response(401, json={"error": "unauthorized"})
            return httpx.Response(200, json=outcome.identity.to_dict())

        if path == "/api/login":
            result = await self.accounts.login_with_credentials(body["id"], body["password"])
            if isinstance(result, Err):
                return self._error(result)
            challenge = result.value
            if challenge.mfa_required:
                return httpx.Response(200, json={
                    "mfa_required": True,
                    "method": challenge.method,
                    "expires_in": challenge.expires_in_minutes,
                })
            return self._with_session({"message": "ok"})

        if path == "/api/login/mfa":
            result = await self.accounts.login_with_code(body["id"], body["code"])
            return self._error(result) if isinstance(result, Err) else self._with_session(result.value)

        if path == "/api/logout":
            await self.accounts.logout()
            return httpx.Response(
                200,
                json={"message": "logged out"},
                headers={"set-cookie": "session=; Path=/; Max-Age=0"},
            )

        if path == "/api/password/change":
            if not has_cookie:
                return httpx.Response(401, json={"error": "unauthorized"})
            result = await self.accounts.change_password(body["old_password"], body["new_password"])
            return self._error(result) if isinstance(result, Err) else httpx.Response(200, json=result.value)

        if path == "/api/password/forgot":
            await self.accounts.request_password_reset(body["email"])
            return httpx.Response(200, json={"message": messages.RESET_LINK_SENT})

        if path == "/api/password/reset":
            result = await self.accounts.consume_password_reset(body["token"], body["new_password"])
            return self._error(result) if isinstance(result, Err) else httpx.Response(200, json=result.value)

        return httpx.Response(404, json={"error": "not found"})

    @staticmethod
    def _error(result: Err) -> httpx.Response:
        return httpx.Response(result.failure.status or 400, json={"error": result.failure.message})

    @staticmethod
    def _with_session(payload) -> httpx.Response:
        return httpx.Response(
            200,
            json=payload,
            headers={"set-cookie": f"{SESSION_COOKIE}; Path=/; HttpOnly"},
        )


@pytest.fixture
def portal(server):
    navigator = HistoryNavigator(start="/")
    config = PortalConfig(api_url="http://portal.test", redirect_delay=0)
    return PortalClient.from_config(
        config,
        navigator=navigator,
        transport=httpx.MockTransport(FakeBackend(server)),
    )


@pytest.mark.asyncio
async def test_complete_login_journey(portal, server):
    """Dashboard bounces to login, two-step login, dashboard renders, sign out."""
    assert await portal.open_dashboard() is None
    assert portal.navigator.current == "/login"

    login = await portal.open_login()
    assert login is not None

    assert await login.submit_credentials("alice@example.com", "correct-horse-1") == LoginStep.ONE_TIME_CODE
    assert login.attempt.otp_expiry_minutes == 5

    assert await login.submit_code("000000") == LoginStep.ONE_TIME_CODE
    assert login.error == "invalid code"

    assert await login.submit_code("123456") == LoginStep.AUTHENTICATED
    assert portal.navigator.current == "/dashboard"

    dashboard = await portal.open_dashboard()
    assert dashboard is not None
    assert dashboard.identity.username == "alice"

    # Signed in: the login page now bounces to the dashboard
    assert await portal.open_login() is None
    assert portal.navigator.current == "/dashboard"

    await portal.sign_out()
    assert portal.navigator.current == "/login"
    assert not (await portal.whoami()).is_authenticated

    await portal.aclose()


@pytest.mark.asyncio
async def test_login_without_mfa(portal):
    """Accounts without MFA go straight to the dashboard."""
    login = await portal.open_login()

    assert await login.submit_credentials("bob", "bobs-password") == LoginStep.AUTHENTICATED
    assert (await portal.whoami()).identity.username == "bob"

    await portal.aclose()


@pytest.mark.asyncio
async def test_password_recovery_journey(portal, server):
    """Forgot -> emailed link -> reset -> login with the new password."""
    forgot = await portal.open_forgot_password()
    notice = await forgot.submit("alice@example.com")
    assert notice.text == messages.RESET_LINK_SENT

    unknown = await forgot.submit("ghost@example.com")
    assert unknown == notice

    link = f"http://portal.test/reset?token={server.sent_reset_links[-1]}"
    reset = await portal.open_password_reset(link)
    await reset.submit("a-fresh-password")
    await reset.pending_redirect
    assert portal.navigator.current == "/login"

    login = await portal.open_login()
    assert await login.submit_credentials("alice", "a-fresh-password") == LoginStep.ONE_TIME_CODE

    await portal.aclose()


@pytest.mark.asyncio
async def test_reset_page_without_token(portal, server):
    """Reset page with no token is terminal and never contacts the server."""
    reset = await portal.open_password_reset("http://portal.test/reset")

    assert reset.terminal
    assert reset.notice.text == messages.MISSING_TOKEN
    await reset.submit("whatever-password")
    assert server.calls_to("consume_password_reset") == []

    await portal.aclose()


@pytest.mark.asyncio
async def test_credential_change_requires_session(portal, server):
    """Change page is guarded; once signed in it reaches the server."""
    assert await portal.open_credential_change() is None
    assert portal.navigator.current == "/login"

    login = await portal.open_login()
    await login.submit_credentials("bob", "bobs-password")

    change = await portal.open_credential_change()
    notice = await change.submit("bobs-password", "a-longer-password", "a-longer-password")
    assert notice.text == messages.CHANGE_REQUESTED

    await change.pending_redirect
    assert portal.navigator.current == "/dashboard"

    await portal.aclose()
