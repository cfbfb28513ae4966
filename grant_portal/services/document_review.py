"""
Verification document lifecycle: upload, automated verification, manual review
"""
import logging
from datetime import datetime, timezone
from typing import Dict, Optional, Union

from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from grant_portal.domain import DocumentStatus, DocumentType
from grant_portal.errors import ConflictError, ForbiddenError, NotFoundError, ValidationError
from grant_portal.models.verification_document import VerificationDocument
from grant_portal.services.document_verifier import (
    DocumentVerifier,
    derive_verification_status,
    get_document_verifier,
)
from grant_portal.services.registration import get_registration_process

logger = logging.getLogger(__name__)


def get_verification_document(db: Session, document_id: int, lock: bool = False) -> VerificationDocument:
    """Load a verification document or raise NotFoundError"""
    query = db.query(VerificationDocument).filter(VerificationDocument.id == document_id)
    if lock:
        query = query.with_for_update()
    document = query.first()
    if not document:
        raise NotFoundError(f"Document {document_id} not found")
    return document


def _commit(db: Session, document: VerificationDocument):
    try:
        db.commit()
    except StaleDataError:
        db.rollback()
        raise ConflictError(f"Document {document.id} was modified concurrently, retry the request")
    db.refresh(document)


def upload_verification_document(
    db: Session,
    registration_process_id: int,
    owner_id: int,
    document_type: Union[DocumentType, str],
    file_path: str,
    extracted_fields: Optional[Dict[str, str]] = None
) -> VerificationDocument:
    """
    Record an uploaded document

    A re-upload of the same document type creates a new record; earlier
    uploads are kept.

    Raises:
        NotFoundError: Unknown registration process
        ForbiddenError: owner_id does not own the registration process
        ValidationError: Unknown document type
    """
    try:
        document_type = DocumentType(document_type)
    except ValueError:
        raise ValidationError(f"Unknown document type: {document_type}")

    process = get_registration_process(db, registration_process_id)
    if process.user_id != owner_id:
        raise ForbiddenError("Documents can only be uploaded to your own registration process")

    document = VerificationDocument(
        owner_id=owner_id,
        registration_process_id=registration_process_id,
        document_type=document_type.value,
        file_path=file_path,
        verification_status=DocumentStatus.PENDING.value,
        ai_verified=False,
        extracted_fields=dict(extracted_fields or {}),
    )
    db.add(document)
    db.commit()
    db.refresh(document)

    logger.info(
        f"Document {document.id} ({document_type.value}) uploaded to registration process {registration_process_id}"
    )
    return document


def validate_document_with_ai(
    db: Session,
    document_id: int,
    verifier: Optional[DocumentVerifier] = None
) -> VerificationDocument:
    """
    Run automated verification and store the derived status

    Documents with a manual decision are never re-verified; the reviewer's
    status stands until the applicant uploads a new document.

    Raises:
        NotFoundError: Unknown document
        ConflictError: Document already reviewed, or concurrent modification
    """
    verifier = verifier or get_document_verifier()
    document = get_verification_document(db, document_id, lock=True)
    if document.reviewed_by is not None:
        db.rollback()
        raise ConflictError(
            f"Document {document_id} was reviewed by an administrator ({document.verification_status}); "
            f"upload a new document instead"
        )

    result = verifier.verify(document.document_type, document.extracted_fields or {}, document.file_path)
    status = derive_verification_status(result.score)

    document.ai_verified = True
    document.ai_verification_score = result.score
    document.ai_verification_result = result.to_dict()
    document.extracted_fields = result.extracted_fields
    document.issues = result.issues or None
    document.verification_status = status.value
    document.updated_at = datetime.now(timezone.utc)
    _commit(db, document)

    logger.info(f"Document {document_id} verified: score {result.score}, status {status.value}")
    return document


def review_document(
    db: Session,
    document_id: int,
    reviewer_id: int,
    status: DocumentStatus,
    comment: Optional[str] = None
) -> VerificationDocument:
    """
    Manual decision by an administrator

    This is the only way a document becomes rejected.

    Raises:
        NotFoundError: Unknown document
        ConflictError: Concurrent modification
    """
    status = DocumentStatus(status)
    document = get_verification_document(db, document_id, lock=True)

    previous = document.verification_status
    document.verification_status = status.value
    document.reviewed_by = reviewer_id
    document.review_comment = comment
    document.updated_at = datetime.now(timezone.utc)
    _commit(db, document)

    logger.info(f"Document {document_id} reviewed by {reviewer_id}: {previous} -> {status.value}")
    return document
