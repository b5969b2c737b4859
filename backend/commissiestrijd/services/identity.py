from __future__ import annotations
from dataclasses import dataclass
from urllib.parse import urljoin
import httpx
import structlog
from commissiestrijd.errors import Unauthorized

log = structlog.get_logger()


class IdentityProviderError(Exception):
    pass


@dataclass(frozen=True)
class Principal:
    subject: str
    is_admin: bool = False
    name: str | None = None


class IdentityProvider:
    """
    OIDC provider client.

    `discover()` must succeed before tokens can be checked; it is awaited once at
    startup so the app never serves requests with an unknown userinfo endpoint.
    """

    def __init__(self, provider_url: str, client: httpx.AsyncClient | None = None, timeout: float = 10.0):
        self.provider_url = provider_url if provider_url.endswith("/") else provider_url + "/"
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._owns_client = client is None
        self.userinfo_endpoint: str | None = None

    async def discover(self) -> str:
        url = urljoin(self.provider_url, ".well-known/openid-configuration")
        try:
            r = await self._client.get(url)
            r.raise_for_status()
            endpoint = r.json().get("userinfo_endpoint")
        except (httpx.HTTPError, ValueError) as e:
            raise IdentityProviderError(f"OIDC discovery failed for {url}: {e}") from e
        if not endpoint:
            raise IdentityProviderError(f"OIDC discovery at {url} returned no userinfo_endpoint")
        self.userinfo_endpoint = endpoint
        log.info("oidc_discovered", provider=self.provider_url, userinfo_endpoint=endpoint)
        return endpoint

    async def principal_for(self, access_token: str) -> Principal:
        if not self.userinfo_endpoint:
            raise IdentityProviderError("Identity provider not initialised; call discover() first")
        try:
            r = await self._client.get(self.userinfo_endpoint, headers={"Authorization": f"Bearer {access_token}"})
        except httpx.HTTPError as e:
            log.warning("oidc_userinfo_failed", error=str(e))
            raise Unauthorized("Could not verify access token")
        if r.status_code != 200:
            raise Unauthorized("Invalid token")
        try:
            profile = r.json()
        except ValueError:
            raise Unauthorized("Invalid token")
        return Principal(
            subject=str(profile.get("sub") or ""),
            is_admin=profile.get("is_admin") is True,
            name=profile.get("name"),
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
