"""
HTTP Account Gateway - Talks to the account backend over httpx.

The session cookie lives in the httpx client's cookie jar. This adapter
never reads or writes it; the server sets it on login and clears it on
logout.
"""

import logging
from typing import Dict, Any, Optional

import httpx

from portal_auth.config import PortalConfig
from portal_auth.domain.identity import Identity
from portal_auth.domain.login import LoginChallenge
from portal_auth.domain.result import Err, Failure, Ok, Result
from portal_auth.domain.session import ProbeOutcome
from portal_auth.ports.account_port import AccountGateway
from portal_auth.ports.session_port import SessionOracle

logger = logging.getLogger(__name__)


class HttpAccountGateway(SessionOracle, AccountGateway):
    """
    httpx-based session oracle and account gateway.

    Endpoints:
        GET  /api/me                session probe
        POST /api/login             credential exchange
        POST /api/login/mfa         one-time-code exchange
        POST /api/logout            end session
        POST /api/password/forgot   request reset link
        POST /api/password/reset    consume reset token
        POST /api/password/change   change password (session required)
        POST /api/register          create account (no cookie sent)

    Example:
        async with httpx.AsyncClient(base_url="http://localhost:8080") as http:
            gateway = HttpAccountGateway(http)
            outcome = await gateway.probe()
    """

    def __init__(self, client: httpx.AsyncClient):
        """
        Initialize the gateway.

        Args:
            client: Async client configured with the backend base URL.
                Its cookie jar carries the session credential.
        """
        self._client = client

    @classmethod
    def from_config(
        cls,
        config: PortalConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "HttpAccountGateway":
        """Create a gateway that owns a fresh httpx client."""
        client = httpx.AsyncClient(
            base_url=config.api_url,
            timeout=config.timeout,
            transport=transport,
        )
        return cls(client)

    async def aclose(self):
        """Close the underlying httpx client."""
        await self._client.aclose()

    async def probe(self) -> ProbeOutcome:
        """Probe GET /api/me. Anything but a readable 2xx is unauthenticated."""
        try:
            response = await self._client.get("/api/me")
        except httpx.HTTPError as e:
            logger.info("Session probe failed: %s", type(e).__name__)
            return ProbeOutcome.unauthenticated()

        if not response.is_success:
            logger.debug("Session probe answered %s", response.status_code)
            return ProbeOutcome.unauthenticated()

        try:
            identity = Identity.from_dict(response.json())
        except (ValueError, TypeError, AttributeError):
            logger.warning("Session probe returned an unreadable identity")
            return ProbeOutcome.unauthenticated()

        return ProbeOutcome.authenticated(identity)

    async def login_with_credentials(
        self,
        identifier: str,
        password: str,
    ) -> Result[LoginChallenge]:
        result = await self._post("/api/login", {"id": identifier, "password": password})
        if isinstance(result, Err):
            return result
        return Ok(LoginChallenge.from_dict(result.value))

    async def login_with_code(self, identifier: str, code: str) -> Result[Dict[str, Any]]:
        return await self._post("/api/login/mfa", {"id": identifier, "code": code})

    async def logout(self) -> Result[Dict[str, Any]]:
        return await self._post("/api/logout", {})

    async def request_password_reset(self, email: str) -> Result[Dict[str, Any]]:
        return await self._post("/api/password/forgot", {"email": email})

    async def consume_password_reset(
        self,
        token: str,
        new_password: str,
    ) -> Result[Dict[str, Any]]:
        return await self._post(
            "/api/password/reset",
            {"token": token, "new_password": new_password},
        )

    async def change_password(
        self,
        old_password: str,
        new_password: str,
    ) -> Result[Dict[str, Any]]:
        return await self._post(
            "/api/password/change",
            {"old_password": old_password, "new_password": new_password},
        )

    async def register(
        self,
        username: str,
        email: str,
        password: str,
    ) -> Result[Dict[str, Any]]:
        return await self._post(
            "/api/register",
            {"username": username, "email": email, "password": password},
            send_cookies=False,
        )

    async def _post(
        self,
        path: str,
        body: Dict[str, Any],
        send_cookies: bool = True,
    ) -> Result[Dict[str, Any]]:
        """POST JSON and map the response to a Result."""
        request = self._client.build_request("POST", path, json=body)
        if not send_cookies and "Cookie" in request.headers:
            del request.headers["Cookie"]

        try:
            response = await self._client.send(request)
        except httpx.HTTPError as e:
            logger.warning("POST %s failed: %s", path, type(e).__name__)
            return Err(Failure.transport())

        if not response.is_success:
            message = self._error_message(response)
            logger.info("POST %s rejected with %s", path, response.status_code)
            return Err(Failure.rejected(message=message, status=response.status_code))

        return Ok(self._json_body(response))

    @staticmethod
    def _json_body(response: httpx.Response) -> Dict[str, Any]:
        """JSON object body, or {} when there is none."""
        try:
            data = response.json()
        except ValueError:
            return {}
        return data if isinstance(data, dict) else {}

    @classmethod
    def _error_message(cls, response: httpx.Response) -> Optional[str]:
        """Server-provided message from {"error": ...} or {"message": ...}."""
        data = cls._json_body(response)
        message = data.get("error") or data.get("message")
        return message if isinstance(message, str) and message else None
