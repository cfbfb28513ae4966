"""
Registration process router
"""
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from grant_portal.database import get_db
from grant_portal.domain import UserRole
from grant_portal.models.registration_process import RegistrationProcess
from grant_portal.models.user import User
from grant_portal.models.verification_document import VerificationDocument
from grant_portal.schemas.registration import (
    RegistrationStart, RegistrationStepUpdate, RegistrationVerify, RegistrationResponse,
    DocumentUpload, VerificationDocumentResponse, DocumentVerificationStatusResponse
)
from grant_portal.services.auth import get_current_user, get_current_active_admin, is_staff
from grant_portal.services.registration import (
    create_registration_process, get_registration_process,
    update_registration_step, verify_registration_process
)
from grant_portal.services.document_review import upload_verification_document
from grant_portal.services.verification_aggregator import check_document_verification_status

router = APIRouter(prefix="/registrations", tags=["Registrations"])


def check_process_access(process: RegistrationProcess, user: User, allow_staff: bool = True):
    """Owner always, staff when allowed"""
    if process.user_id == user.id:
        return
    if allow_staff and is_staff(user):
        return
    raise HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="No permission to access this registration process"
    )


@router.post("", response_model=RegistrationResponse, status_code=status.HTTP_201_CREATED)
async def start_registration(
    data: RegistrationStart,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Start a registration process

    Administrators may start a process for another user
    """
    user_id = data.user_id or current_user.id
    if user_id != current_user.id and current_user.role != UserRole.ADMINISTRATOR.value:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin privileges required to register another user"
        )
    return create_registration_process(db, user_id, data.applicant_type_id)


@router.get("", response_model=List[RegistrationResponse])
async def list_registrations(
    status_filter: str = None,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    List registration processes

    Staff see every process, other users only their own
    """
    query = db.query(RegistrationProcess)
    if not is_staff(current_user):
        query = query.filter(RegistrationProcess.user_id == current_user.id)
    if status_filter:
        query = query.filter(RegistrationProcess.status == status_filter)
    return query.order_by(RegistrationProcess.id).all()


@router.get("/{process_id}", response_model=RegistrationResponse)
async def get_registration(
    process_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    process = get_registration_process(db, process_id)
    check_process_access(process, current_user)
    return process


@router.post("/{process_id}/steps", response_model=RegistrationResponse)
async def complete_step(
    process_id: int,
    data: RegistrationStepUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Move to a step, optionally marking a step as completed
    """
    process = get_registration_process(db, process_id)
    check_process_access(process, current_user, allow_staff=False)
    return update_registration_step(db, process_id, data.new_step, data.completed_step)


@router.post("/{process_id}/verify", response_model=RegistrationResponse)
async def verify_registration(
    process_id: int,
    data: RegistrationVerify,
    current_user: User = Depends(get_current_active_admin),
    db: Session = Depends(get_db)
):
    """
    Approve or reject a registration (admin only)
    """
    return verify_registration_process(
        db, process_id, current_user.id, data.approved, data.rejection_reason
    )


@router.get("/{process_id}/document-status", response_model=DocumentVerificationStatusResponse)
async def document_status(
    process_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Which required documents are missing, need resubmission, or are all verified
    """
    process = get_registration_process(db, process_id)
    check_process_access(process, current_user)
    result = check_document_verification_status(db, process_id)
    return DocumentVerificationStatusResponse(
        all_uploaded=result.all_uploaded,
        all_verified=result.all_verified,
        pending_documents=result.pending_documents,
        rejected_documents=result.rejected_documents,
    )


@router.post(
    "/{process_id}/documents",
    response_model=VerificationDocumentResponse,
    status_code=status.HTTP_201_CREATED
)
async def upload_document(
    process_id: int,
    data: DocumentUpload,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Register an uploaded document for this registration process
    """
    return upload_verification_document(
        db, process_id, current_user.id, data.document_type, data.file_path, data.extracted_fields
    )


@router.get("/{process_id}/documents", response_model=List[VerificationDocumentResponse])
async def list_documents(
    process_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    process = get_registration_process(db, process_id)
    check_process_access(process, current_user)
    return db.query(VerificationDocument).filter(
        VerificationDocument.registration_process_id == process_id
    ).order_by(VerificationDocument.id).all()
