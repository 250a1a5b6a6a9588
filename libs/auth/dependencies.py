from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from pydantic import ValidationError

from libs.auth.models import (
    AccountType,
    AuthUser,
    ConsumerSession,
    ModeratorSession,
    PortalRole,
    ProviderSession,
)
from libs.common.config import get_settings

security = HTTPBearer(auto_error=False)


def _cookie_name(role: PortalRole) -> str:
    settings = get_settings()
    return {
        PortalRole.PROVIDER: settings.PROVIDER_COOKIE,
        PortalRole.CONSUMER: settings.CONSUMER_COOKIE,
        PortalRole.MODERATOR: settings.MODERATOR_COOKIE,
    }[role]


def decode_identity(token: str) -> AuthUser:
    """
    Decode a portal identity token (HS256) into its claims.
    """
    settings = get_settings()
    payload = jwt.decode(token, settings.AUTH_JWT_SECRET, algorithms=["HS256"])
    return AuthUser(**payload)


def issue_identity(claims: dict) -> str:
    """Sign identity claims; used by tests and local tooling."""
    settings = get_settings()
    return jwt.encode(claims, settings.AUTH_JWT_SECRET, algorithm="HS256")


def _authenticate(
    role: PortalRole,
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials],
) -> AuthUser:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    token = request.cookies.get(_cookie_name(role))
    if not token and credentials:
        token = credentials.credentials
    if not token:
        raise credentials_exception

    try:
        user = decode_identity(token)
    except (JWTError, ValidationError):
        raise credentials_exception

    if user.role != role:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"{role.value.capitalize()} access required",
        )
    return user


async def get_provider_session(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> ProviderSession:
    user = _authenticate(PortalRole.PROVIDER, request, credentials)
    return ProviderSession(
        provider_id=user.user_id,
        name=user.name or "",
        admin_name=user.admin_name or "",
        account_type=user.account_type or AccountType.ORGANIZATION,
        phone=user.phone or "",
    )


async def get_consumer_session(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> ConsumerSession:
    user = _authenticate(PortalRole.CONSUMER, request, credentials)
    return ConsumerSession(consumer_id=user.user_id, name=user.name or "")


async def get_moderator_session(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> ModeratorSession:
    user = _authenticate(PortalRole.MODERATOR, request, credentials)
    return ModeratorSession(moderator_id=user.user_id)


def forwarded_cookies(request: Request) -> dict[str, str]:
    """Identity cookies to pass through to the API layer."""
    settings = get_settings()
    names = (
        settings.PROVIDER_COOKIE,
        settings.CONSUMER_COOKIE,
        settings.MODERATOR_COOKIE,
    )
    return {name: request.cookies[name] for name in names if name in request.cookies}
