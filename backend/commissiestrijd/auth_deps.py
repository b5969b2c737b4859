from __future__ import annotations
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from commissiestrijd.errors import Unauthorized
from commissiestrijd.services.identity import IdentityProvider, Principal

security = HTTPBearer(auto_error=False)

def get_identity_provider(request: Request) -> IdentityProvider:
    provider = getattr(request.app.state, "identity", None)
    if provider is None:
        raise Unauthorized("Identity provider unavailable")
    return provider

async def get_principal(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    provider: IdentityProvider = Depends(get_identity_provider),
) -> Principal:
    if credentials is None or not credentials.credentials:
        raise Unauthorized("Missing access token")
    return await provider.principal_for(credentials.credentials)

async def require_admin(principal: Principal = Depends(get_principal)) -> Principal:
    if not principal.is_admin:
        raise Unauthorized("You do not have permission to perform this action.")
    return principal
