"""
Messages router
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from grant_portal.database import get_db
from grant_portal.models.user import User
from grant_portal.schemas.message import MessageInbox, MessageResponse
from grant_portal.services.auth import get_current_user
from grant_portal.services.messages import list_user_messages, mark_message_read
from grant_portal.routers.applications import to_message_response

router = APIRouter(prefix="/messages", tags=["Messages"])


@router.get("", response_model=MessageInbox)
async def my_messages(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Messages received and sent by the current user
    """
    received, sent = list_user_messages(db, current_user)
    return MessageInbox(
        received=[to_message_response(m) for m in received],
        sent=[to_message_response(m) for m in sent],
    )


@router.patch("/{message_id}/read", response_model=MessageResponse)
async def mark_read(
    message_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return to_message_response(mark_message_read(db, message_id, current_user))
