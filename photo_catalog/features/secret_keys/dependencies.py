"""Secret-key extraction and checks for route handlers.

A key is read from ``Authorization: Bearer <key>`` first and from the
``secret-key`` cookie (set by browser sessions) otherwise.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated

from fastapi import Depends, Request

from photo_catalog.core.dependencies import DbSessionDep
from photo_catalog.core.exceptions import ForbiddenException, UnauthorizedException
from photo_catalog.features.secret_keys.repository import (
    SecretKeyRepository,
    get_secret_key_repository,
)

SECRET_KEY_COOKIE = "secret-key"


class KeyStatus(StrEnum):
    MISSING = "missing"
    INVALID = "invalid"
    VALID = "valid"


def presented_key(request: Request) -> str | None:
    """Return the key the client presented, if any."""
    authorization = request.headers.get("Authorization")
    if authorization is not None:
        scheme, _, credentials = authorization.partition(" ")
        # A non-bearer Authorization header still counts as a presented (bad) key.
        return credentials if scheme == "Bearer" else ""
    return request.cookies.get(SECRET_KEY_COOKIE)


async def get_key_status(
    request: Request,
    session: DbSessionDep,
    keys: Annotated[SecretKeyRepository, Depends(get_secret_key_repository)],
) -> KeyStatus:
    key = presented_key(request)
    if key is None:
        return KeyStatus.MISSING
    if await keys.is_valid(session, key):
        return KeyStatus.VALID
    return KeyStatus.INVALID


KeyStatusDep = Annotated[KeyStatus, Depends(get_key_status)]


async def require_secret_key(status: KeyStatusDep) -> None:
    """Reject requests without a valid key (401 missing, 403 invalid)."""
    match status:
        case KeyStatus.MISSING:
            raise UnauthorizedException("A secret key is required for this operation")
        case KeyStatus.INVALID:
            raise ForbiddenException("The secret key is not valid")
        case KeyStatus.VALID:
            return
