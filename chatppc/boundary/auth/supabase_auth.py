"""
Hosted auth provider client.

Validates admin bearer tokens by asking the provider who the token
belongs to (GET {provider_url}/auth/v1/user). A non-200 answer means the
token is not valid; transport failures propagate to the caller.

Dependencies: httpx
System role: Admin identity verification
"""

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class SupabaseAuthClient:
    """Thin async client for the provider's user endpoint."""

    def __init__(
        self,
        provider_url: str,
        anon_key: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize auth client.

        Args:
            provider_url: Provider base URL (trailing slash tolerated)
            anon_key: Public key sent as the "apikey" header
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.provider_url = provider_url.rstrip("/")
        self.anon_key = anon_key
        self.timeout = timeout
        self._transport = transport

    @property
    def user_endpoint(self) -> str:
        return f"{self.provider_url}/auth/v1/user"

    async def get_user(self, token: str) -> dict[str, Any] | None:
        """
        Resolve the user owning an access token.

        Args:
            token: Bearer access token

        Returns:
            User payload if the provider accepts the token, None otherwise

        Raises:
            httpx.HTTPError: Provider unreachable or timed out
        """
        headers = {"Authorization": f"Bearer {token}"}
        if self.anon_key:
            headers["apikey"] = self.anon_key

        async with httpx.AsyncClient(
            timeout=self.timeout,
            transport=self._transport,
        ) as client:
            response = await client.get(self.user_endpoint, headers=headers)

        if response.status_code != 200:
            logger.info(
                "Token rejected by auth provider",
                extra={"status_code": response.status_code},
            )
            return None

        user = response.json()
        if not isinstance(user, dict) or not user.get("id"):
            return None
        return user
