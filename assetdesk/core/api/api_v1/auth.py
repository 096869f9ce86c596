# path: assetdesk/core/api/api_v1/auth.py
from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.ext.asyncio import AsyncSession

from assetdesk.core.dependencies import Identity, get_auth_service, get_current_identity
from assetdesk.core.exceptions import AuthError, NotFoundError
from assetdesk.core.models import db_helper
from assetdesk.core.schemas.auth import ChangePasswordRequest, LoginRequest, LoginUser, TokenResponse
from assetdesk.core.schemas.common import MessageOut
from assetdesk.core.services.auth_service import AuthService


router = APIRouter(tags=["auth"])


@router.post("/login", response_model=TokenResponse)
async def login(
    body: LoginRequest,
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    service: Annotated[AuthService, Depends(get_auth_service)],
):
    """
    JSON-логин: {"username": "...", "password": "..."} -> JWT + краткая информация о пользователе.
    """
    try:
        token, user = await service.authenticate(session, username=body.username, password=body.password)
    except AuthError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )
    return TokenResponse(
        access_token=token,
        user=LoginUser(id=int(user.id), full_name=user.full_name, role=user.role),
    )


@router.post("/token")
async def auth_token(
    form: Annotated[OAuth2PasswordRequestForm, Depends()],
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    service: Annotated[AuthService, Depends(get_auth_service)],
):
    """
    OAuth2 Password (для /docs):
    - Принимает form.username и form.password (x-www-form-urlencoded)
    - Возвращает {"access_token": "...", "token_type": "bearer"}
    """
    try:
        token, _ = await service.authenticate(session, username=form.username, password=form.password)
        return {"access_token": token, "token_type": "bearer"}
    except AuthError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )


@router.put("/change-password", response_model=MessageOut)
async def change_password(
    body: ChangePasswordRequest,
    identity: Annotated[Identity, Depends(get_current_identity)],
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    service: Annotated[AuthService, Depends(get_auth_service)],
):
    try:
        await service.change_password(
            session,
            user_id=identity.user_id,
            current_password=body.current_password,
            new_password=body.new_password,
        )
    except AuthError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Current password is incorrect")
    except NotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return MessageOut(message="Password changed")
