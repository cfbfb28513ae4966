"""
Messages exchanged about an application
"""
import logging
from typing import List, Tuple

from sqlalchemy.orm import Session

from grant_portal.errors import ForbiddenError, NotFoundError, ValidationError
from grant_portal.models.message import Message
from grant_portal.models.user import User
from grant_portal.services.applications import get_application, is_participant

logger = logging.getLogger(__name__)


def get_message(db: Session, message_id: int) -> Message:
    message = db.query(Message).filter(Message.id == message_id).first()
    if not message:
        raise NotFoundError(f"Message {message_id} not found")
    return message


def send_message(db: Session, application_id: int, sender: User, receiver_id: int, content: str) -> Message:
    """
    Send a message about an application

    Sender and receiver must both be participants of the application:
    the applicant, or an administrator, reviewer or donor.

    Raises:
        NotFoundError: Unknown application or receiver
        ForbiddenError: Sender is not a participant
        ValidationError: Receiver is the sender or not a participant
    """
    application = get_application(db, application_id)
    if not is_participant(application, sender):
        raise ForbiddenError("No permission to send messages about this application")

    receiver = db.query(User).filter(User.id == receiver_id).first()
    if not receiver:
        raise NotFoundError(f"User {receiver_id} not found")
    if receiver.id == sender.id:
        raise ValidationError("Cannot send a message to yourself")
    if not is_participant(application, receiver):
        raise ValidationError(f"User {receiver.username} is not involved in application {application.auto_code}")

    message = Message(
        application_id=application.id,
        sender_id=sender.id,
        receiver_id=receiver.id,
        content=content,
        read=False,
    )
    db.add(message)
    db.commit()
    db.refresh(message)

    logger.info(f"Message {message.id} on application {application.auto_code}: user {sender.id} -> {receiver.id}")
    return message


def list_application_messages(db: Session, application_id: int, user: User) -> List[Message]:
    """Messages of an application, oldest first"""
    application = get_application(db, application_id)
    if not is_participant(application, user):
        raise ForbiddenError("No permission to view messages of this application")
    return (
        db.query(Message)
        .filter(Message.application_id == application_id)
        .order_by(Message.id)
        .all()
    )


def list_user_messages(db: Session, user: User) -> Tuple[List[Message], List[Message]]:
    """(received, sent), newest first"""
    received = db.query(Message).filter(Message.receiver_id == user.id).order_by(Message.id.desc()).all()
    sent = db.query(Message).filter(Message.sender_id == user.id).order_by(Message.id.desc()).all()
    return received, sent


def mark_message_read(db: Session, message_id: int, user: User) -> Message:
    """
    Mark a message as read

    Raises:
        NotFoundError: Unknown message
        ForbiddenError: User is not the receiver
    """
    message = get_message(db, message_id)
    if message.receiver_id != user.id:
        raise ForbiddenError("Only the receiver can mark a message as read")

    if not message.read:
        message.read = True
        db.commit()
        db.refresh(message)
    return message
