"""
Dépendances d'authentification et d'autorisation / Authentication and authorization dependencies.
Injectées dans les routes via Depends().
"""

import logging

from fastapi import Cookie, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from edms.database import get_db
from edms.models.user import User
from edms.utils.auth import decode_token

logger = logging.getLogger(__name__)

# auto_error=False : le token peut aussi venir du cookie / token may also come from the cookie
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    token: str | None = Cookie(default=None),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Extraire et valider l'utilisateur depuis le JWT / Extract and validate user from JWT.

    Header `Authorization: Bearer` prioritaire, sinon cookie `token`.
    """
    raw = credentials.credentials if credentials else token
    if not raw:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")

    payload = decode_token(raw)
    if payload is None or payload.get("type") != "access":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired token")

    user = await db.get(User, int(payload["sub"]))
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")

    return user


async def require_admin(user: User = Depends(get_current_user)) -> User:
    """Réservé aux administrateurs / Admin only."""
    if not user.is_admin:
        logger.info("User %s denied admin action", user.username)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You do not have permission to access this page/action",
        )
    return user
