# path: assetdesk/core/api/api_v1/users.py
from __future__ import annotations

from typing import Annotated, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from assetdesk.app_logging import get_logger
from assetdesk.core.dependencies import (
    Identity,
    get_auth_service,
    get_current_identity,
    get_unit_repository,
    get_user_repository,
    require_capability,
)
from assetdesk.core.exceptions import NotFoundError
from assetdesk.core.models import db_helper
from assetdesk.core.roles import TECHNICIAN_ROLES, Capability, Role
from assetdesk.core.schemas.common import MessageOut
from assetdesk.core.schemas.user import PasswordReset, UserCreate, UserRead, UserUpdate
from assetdesk.core.security import hash_password
from assetdesk.core.services.auth_service import AuthService
from assetdesk.crud.unit_repository import IUnitRepository
from assetdesk.crud.user_repository import IUserRepository


router = APIRouter(tags=["users"])
log = get_logger("api.users")

AdminOnly = Annotated[Identity, Depends(require_capability(Capability.MANAGE_USERS))]


async def _ensure_unit(session: AsyncSession, unit_repo: IUnitRepository, unit_id: Optional[int]) -> None:
    if unit_id is not None and await unit_repo.get_by_id(session, unit_id=unit_id) is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Unknown unit")


@router.get("", response_model=list[UserRead])
async def list_users(
    _: Annotated[Identity, Depends(get_current_identity)],
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    user_repo: Annotated[IUserRepository, Depends(get_user_repository)],
    role: Optional[Role] = None,
    unit_id: Optional[int] = None,
    role_type: Optional[Literal["technician"]] = None,
):
    """
    Список пользователей.

    - role_type=technician -> все три роли техников (role тогда игнорируется)
    - role / unit_id -> точные фильтры
    """
    roles = None
    if role_type == "technician":
        roles = TECHNICIAN_ROLES
    elif role is not None:
        roles = [role]
    return await user_repo.list_users(session, roles=roles, unit_id=unit_id)


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def create_user(
    body: UserCreate,
    _: AdminOnly,
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    user_repo: Annotated[IUserRepository, Depends(get_user_repository)],
    unit_repo: Annotated[IUnitRepository, Depends(get_unit_repository)],
):
    """
    Создать пользователя (admin).

    Важно:
    - репозиторий принимает hashed_password (хэширование - не DB-операция);
    - дубликат username/email -> 409.
    """
    fields = body.model_dump(exclude={"password"})
    try:
        async with session.begin():
            await _ensure_unit(session, unit_repo, body.unit_id)
            user = await user_repo.create_user(
                session,
                hashed_password=hash_password(body.password),
                **fields,
            )
            user = await user_repo.get_by_id(session, user_id=int(user.id))
    except IntegrityError:
        log.info({"event": "create_user_conflict", "username": body.username})
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Username or email already in use",
        )
    return user


@router.put("/reset-password", response_model=MessageOut)
async def reset_password(
    body: PasswordReset,
    _: AdminOnly,
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    service: Annotated[AuthService, Depends(get_auth_service)],
):
    try:
        await service.reset_password(session, username=body.username.strip(), new_password=body.new_password)
    except NotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return MessageOut(message=f"Password for user '{body.username.strip()}' changed")


@router.put("/{user_id}", response_model=UserRead)
async def update_user(
    user_id: int,
    body: UserUpdate,
    _: AdminOnly,
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    user_repo: Annotated[IUserRepository, Depends(get_user_repository)],
    unit_repo: Annotated[IUnitRepository, Depends(get_unit_repository)],
):
    try:
        async with session.begin():
            user = await user_repo.get_by_id(session, user_id=user_id)
            if user is None:
                raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
            await _ensure_unit(session, unit_repo, body.unit_id)
            await user_repo.update_user_fields(session, user_id=user_id, **body.model_dump())
            user = await user_repo.get_by_id(session, user_id=user_id)
    except IntegrityError:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already in use")
    return user


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: int,
    identity: AdminOnly,
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    user_repo: Annotated[IUserRepository, Depends(get_user_repository)],
):
    if identity.user_id == user_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You cannot delete yourself")

    try:
        async with session.begin():
            user = await user_repo.get_by_id(session, user_id=user_id)
            if user is None:
                raise NotFoundError("User not found")
            await user_repo.delete_user(session, user=user)
    except NotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    except IntegrityError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="User is referenced by existing records",
        )
    log.info({"event": "delete_user", "user_id": user_id, "by": identity.user_id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)
