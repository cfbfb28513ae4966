"""
Message schemas
"""
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime


class MessageCreate(BaseModel):
    """Schema for sending a message about an application"""
    receiver_id: int
    content: str = Field(..., min_length=1, max_length=5000)


class MessageResponse(BaseModel):
    """Schema for message response"""
    id: int
    application_id: int
    sender_id: int
    receiver_id: int
    content: str
    read: bool
    created_at: Optional[datetime]

    # Relations
    sender_name: Optional[str] = None

    class Config:
        from_attributes = True


class MessageInbox(BaseModel):
    """Messages received and sent by the current user"""
    received: List[MessageResponse]
    sent: List[MessageResponse]
