"""
Document completeness for a registration process
"""
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

from sqlalchemy.orm import Session

from grant_portal.domain import DocumentStatus, DocumentType, get_applicant_type_config
from grant_portal.errors import NotFoundError
from grant_portal.models.applicant_type import ApplicantType
from grant_portal.models.verification_document import VerificationDocument
from grant_portal.services.registration import get_registration_process

logger = logging.getLogger(__name__)

RESUBMIT_STATUSES = (DocumentStatus.REJECTED.value, DocumentStatus.REQUIRES_RESUBMISSION.value)


@dataclass
class DocumentVerificationStatus:
    all_uploaded: bool
    all_verified: bool
    pending_documents: List[str] = field(default_factory=list)
    rejected_documents: List[str] = field(default_factory=list)


def aggregate_document_status(
    required_documents: Sequence[str],
    documents: Iterable
) -> DocumentVerificationStatus:
    """
    Compare uploaded documents against the required document types

    Args:
        required_documents: Required document type names, in registry order
        documents: Objects with document_type and verification_status, in upload order

    Every required type needs at least one approved upload before the set
    counts as verified; extra approvals of one type never make up for a
    missing type.
    """
    required = [DocumentType(doc).value for doc in required_documents]
    uploaded_types = set()
    approved_types = set()
    rejected_documents = []

    for document in documents:
        uploaded_types.add(document.document_type)
        if document.verification_status == DocumentStatus.APPROVED.value:
            approved_types.add(document.document_type)
        elif document.verification_status in RESUBMIT_STATUSES:
            rejected_documents.append(document.document_type)

    pending_documents = [doc for doc in required if doc not in uploaded_types]

    return DocumentVerificationStatus(
        all_uploaded=not pending_documents,
        all_verified=all(doc in approved_types for doc in required),
        pending_documents=pending_documents,
        rejected_documents=rejected_documents,
    )


def check_document_verification_status(db: Session, registration_process_id: int) -> DocumentVerificationStatus:
    """
    Document completeness of one registration process

    Raises:
        NotFoundError: Unknown process, or its applicant type cannot be resolved
    """
    process = get_registration_process(db, registration_process_id)

    applicant_type = db.query(ApplicantType).filter(ApplicantType.id == process.applicant_type_id).first()
    config = get_applicant_type_config(applicant_type.name) if applicant_type else None
    if config is None:
        raise NotFoundError(f"Applicant type of registration process {registration_process_id} not found")

    documents = (
        db.query(VerificationDocument)
        .filter(VerificationDocument.registration_process_id == registration_process_id)
        .order_by(VerificationDocument.id)
        .all()
    )

    status = aggregate_document_status([doc.value for doc in config.required_documents], documents)
    logger.debug(
        f"Registration process {registration_process_id}: "
        f"{len(status.pending_documents)} missing, {len(status.rejected_documents)} to resubmit"
    )
    return status
