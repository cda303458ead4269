"""
Hosted identity provider client.

Resolves a bearer access token to a user through the provider's
`/auth/v1/user` endpoint.
"""
import asyncio
import logging

import aiohttp

from storefront.application.interfaces import AuthenticatedUser, IIdentityProvider
from storefront.domain.errors import AuthError, UpstreamGatewayError
from storefront.settings.sections.auth import AuthSettings


logger = logging.getLogger(__name__)


class HostedAuthClient(IIdentityProvider):
    """Identity provider backed by the hosted auth service."""

    def __init__(self, settings: AuthSettings):
        self.settings = settings
        self.user_url = f"{settings.url.rstrip('/')}/auth/v1/user"
        self.timeout = aiohttp.ClientTimeout(total=settings.timeout_seconds)

    async def resolve(self, access_token: str) -> AuthenticatedUser:
        if not access_token:
            raise AuthError("Missing access token")

        headers = {
            "apikey": self.settings.anon_key,
            "Authorization": f"Bearer {access_token}",
        }
        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.get(self.user_url, headers=headers) as response:
                    if response.status in (401, 403):
                        raise AuthError("Invalid or expired access token")
                    if response.status != 200:
                        error_text = await response.text()
                        logger.error(f"Auth API error: {response.status} - {error_text[:200]}")
                        raise UpstreamGatewayError("Identity provider unavailable")
                    body = await response.json(content_type=None)
        except asyncio.TimeoutError as exc:
            raise UpstreamGatewayError("Identity provider timed out") from exc
        except aiohttp.ClientError as exc:
            raise UpstreamGatewayError(f"Identity provider unreachable: {exc}") from exc

        user_id = body.get("id") if isinstance(body, dict) else None
        if not user_id:
            raise AuthError("Invalid or expired access token")
        return AuthenticatedUser(id=user_id, email=body.get("email"), role=body.get("role"))
