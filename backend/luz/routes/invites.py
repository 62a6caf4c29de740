# backend/luz/routes/invites.py
"""Invite link creation for operators."""

import asyncio

from fastapi import APIRouter, Depends, status

from ..api.dependencies import get_current_user, get_invite_service
from ..core.exceptions import DomainException
from ..models.user import User
from ..schemas.invite import InviteCreate, InviteResponse
from ..services.invite_service import InviteService
from .common import handle_domain_exception

router = APIRouter(tags=["invites"])


@router.post("", response_model=InviteResponse, status_code=status.HTTP_201_CREATED)
async def create_invite(
    payload: InviteCreate,
    current_user: User = Depends(get_current_user),
    invite_service: InviteService = Depends(get_invite_service),
) -> InviteResponse:
    """
    Mint an invite link for a customer of the studio.

    An existing customer with the same email or phone is reused; otherwise
    one is created from ``customer``.
    """
    try:
        invite = await asyncio.to_thread(invite_service.create_invite, current_user, payload)
        return InviteResponse.model_validate(invite)
    except DomainException as e:
        handle_domain_exception(e)
