"""
CRUD Utilisateurs / User CRUD routes.
Réservé aux administrateurs / Admin only.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from edms.database import get_db
from edms.models.inspection import Inspection
from edms.models.user import User, UserRole
from edms.schemas.user import UserCreate, UserRead, UserUpdate
from edms.api.deps import require_admin
from edms.utils.auth import hash_password

logger = logging.getLogger(__name__)

router = APIRouter()


async def ensure_unique_user(
    db: AsyncSession, username: str | None, email: str | None, exclude_id: int | None = None,
) -> None:
    """Vérifier unicité nom / email / Check username and email uniqueness (409)."""
    if username is not None:
        query = select(User.id).where(User.username == username)
        if exclude_id is not None:
            query = query.where(User.id != exclude_id)
        if await db.scalar(query) is not None:
            raise HTTPException(status_code=409, detail="Username already exists")
    if email is not None:
        query = select(User.id).where(User.email == email)
        if exclude_id is not None:
            query = query.where(User.id != exclude_id)
        if await db.scalar(query) is not None:
            raise HTTPException(status_code=409, detail="Email already exists")


async def _get_user_or_404(db: AsyncSession, user_id: int) -> User:
    target = await db.get(User, user_id)
    if not target:
        raise HTTPException(status_code=404, detail="User not found")
    return target


@router.get("/", response_model=list[UserRead])
async def list_users(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_admin),
):
    """Lister tous les utilisateurs / List all users."""
    result = await db.execute(select(User).order_by(User.username))
    return result.scalars().all()


@router.get("/{user_id}", response_model=UserRead)
async def get_user(
    user_id: int,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_admin),
):
    return await _get_user_or_404(db, user_id)


@router.post("/", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def create_user(
    data: UserCreate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_admin),
):
    """Créer un utilisateur / Create a user."""
    await ensure_unique_user(db, data.username, data.email)
    new_user = User(
        username=data.username,
        email=data.email,
        hashed_password=hash_password(data.password),
        role=data.role,
    )
    db.add(new_user)
    await db.flush()
    await db.refresh(new_user)
    logger.info("User %s created by %s", new_user.username, user.username)
    return new_user


@router.put("/{user_id}", response_model=UserRead)
async def update_user(
    user_id: int,
    data: UserUpdate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_admin),
):
    """Modifier un utilisateur / Update a user."""
    target = await _get_user_or_404(db, user_id)
    await ensure_unique_user(db, data.username, data.email, exclude_id=target.id)

    if target.is_default_admin and data.role is not None and data.role != UserRole.ADMIN.value:
        raise HTTPException(status_code=400, detail="Cannot change the role of the default admin")

    if data.username is not None:
        target.username = data.username
    if data.email is not None:
        target.email = data.email
    if data.password is not None:
        target.hashed_password = hash_password(data.password)
    if data.role is not None:
        target.role = data.role

    await db.flush()
    await db.refresh(target)
    return target


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: int,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_admin),
):
    """Supprimer un utilisateur / Delete a user."""
    target = await _get_user_or_404(db, user_id)
    if target.is_default_admin:
        raise HTTPException(status_code=400, detail="Cannot delete the default admin")
    inspections = await db.scalar(select(func.count(Inspection.id)).where(Inspection.user_id == user_id))
    if inspections:
        raise HTTPException(status_code=400, detail="Cannot delete a user with recorded inspections")
    await db.delete(target)
    logger.info("User %s deleted by %s", target.username, user.username)
