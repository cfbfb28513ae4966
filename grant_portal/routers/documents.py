"""
Verification documents router
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from grant_portal.database import get_db
from grant_portal.domain import DocumentStatus
from grant_portal.models.user import User
from grant_portal.schemas.registration import DocumentReview, VerificationDocumentResponse
from grant_portal.services.auth import get_current_user, get_current_active_admin
from grant_portal.services.document_review import (
    get_verification_document, validate_document_with_ai, review_document
)
from grant_portal.services.registration import get_registration_process
from grant_portal.routers.registrations import check_process_access

router = APIRouter(prefix="/documents", tags=["Documents"])


@router.get("/{document_id}", response_model=VerificationDocumentResponse)
async def get_document(
    document_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    document = get_verification_document(db, document_id)
    check_process_access(get_registration_process(db, document.registration_process_id), current_user)
    return document


@router.post("/{document_id}/ai-verify", response_model=VerificationDocumentResponse)
async def ai_verify_document(
    document_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Run automated verification on a document

    85+ approves, 60-84 leaves the document pending for a reviewer,
    below 60 asks for resubmission
    """
    document = get_verification_document(db, document_id)
    check_process_access(get_registration_process(db, document.registration_process_id), current_user)
    return validate_document_with_ai(db, document_id)


@router.post("/{document_id}/review", response_model=VerificationDocumentResponse)
async def review(
    document_id: int,
    data: DocumentReview,
    current_user: User = Depends(get_current_active_admin),
    db: Session = Depends(get_db)
):
    """
    Manual document decision (admin only)
    """
    return review_document(db, document_id, current_user.id, DocumentStatus(data.status), data.comment)
