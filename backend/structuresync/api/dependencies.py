"""API Dependencies — request-scoped providers shared by route modules.

Invariants:
    - Edit permission is a bearer token compared in constant time
    - No token configured (edit_api_token unset) → every caller may edit
    - The composition service is built over a snapshot loaded in the request's session
"""

import hmac

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from structuresync.config import Settings, get_settings
from structuresync.core.errors import PermissionDeniedError
from structuresync.infrastructure.database import get_db
from structuresync.services.composition_service import (
    CompositionService, load_composition_service,
)


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        return None
    return token.strip()


def has_edit_permission(authorization: str | None, settings: Settings) -> bool:
    if not settings.edit_api_token:
        return True
    token = _bearer_token(authorization)
    return token is not None and hmac.compare_digest(token, settings.edit_api_token)


def require_edit_permission(action: str):
    """Dependency factory: raise PermissionDeniedError unless the caller may edit."""

    async def dependency(
        authorization: str | None = Header(None),
        settings: Settings = Depends(get_settings),
    ):
        if not has_edit_permission(authorization, settings):
            raise PermissionDeniedError(action)

    return dependency


async def get_composition_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> CompositionService:
    return await load_composition_service(db, settings)
