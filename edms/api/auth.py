"""
Routes d'authentification / Authentication routes.
Login, refresh token, logout, profil, inscription.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from edms.config import settings
from edms.database import get_db
from edms.models.user import User, UserRole
from edms.rate_limit import limiter
from edms.schemas.auth import LoginRequest, RefreshRequest, RegisterRequest, TokenResponse
from edms.schemas.user import UserRead
from edms.utils.auth import create_access_token, create_refresh_token, decode_token, hash_password, verify_password
from edms.api.deps import get_current_user
from edms.api.users import ensure_unique_user

logger = logging.getLogger(__name__)

router = APIRouter()

# Cookie lu par get_current_user / Cookie read by get_current_user
TOKEN_COOKIE = "token"


def _issue_tokens(user: User) -> TokenResponse:
    return TokenResponse(
        access_token=create_access_token(user.id, user.username, user.role),
        refresh_token=create_refresh_token(user.id),
    )


@router.post("/login", response_model=TokenResponse)
@limiter.limit(settings.RATE_LIMIT_LOGIN)
async def login(request: Request, response: Response, data: LoginRequest, db: AsyncSession = Depends(get_db)):
    """Connexion par identifiants / Login with credentials."""
    result = await db.execute(select(User).where(User.username == data.username))
    user = result.scalar_one_or_none()

    if user is None or not verify_password(data.password, user.hashed_password):
        logger.warning("Failed login for %r", data.username)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid username or password")

    tokens = _issue_tokens(user)
    response.set_cookie(
        TOKEN_COOKIE,
        tokens.access_token,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        httponly=True,
        samesite="lax",
        secure=not settings.DEBUG,
    )
    logger.info("User %s logged in", user.username)
    return tokens


@router.post("/refresh", response_model=TokenResponse)
async def refresh(data: RefreshRequest, db: AsyncSession = Depends(get_db)):
    """Rafraîchir les tokens / Refresh tokens."""
    payload = decode_token(data.refresh_token)
    if payload is None or payload.get("type") != "refresh":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid refresh token")

    user = await db.get(User, int(payload["sub"]))
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")

    return _issue_tokens(user)


@router.post("/logout")
async def logout(response: Response):
    response.delete_cookie(TOKEN_COOKIE)
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=UserRead)
async def me(user: User = Depends(get_current_user)):
    """Profil de l'utilisateur connecté / Current user profile."""
    return user


@router.post("/register", response_model=UserRead, status_code=201)
@limiter.limit(settings.RATE_LIMIT_REGISTER)
async def register(request: Request, data: RegisterRequest, db: AsyncSession = Depends(get_db)):
    """Inscription avec le rôle User / Self-registration with the User role."""
    await ensure_unique_user(db, data.username, data.email)

    user = User(
        username=data.username,
        email=data.email,
        hashed_password=hash_password(data.password),
        role=UserRole.USER.value,
    )
    db.add(user)
    await db.flush()
    await db.refresh(user)
    logger.info("User %s registered", user.username)
    return user
