"""
Registration and verification document schemas
"""
from pydantic import BaseModel, Field
from typing import Optional, List, Dict
from datetime import datetime
from grant_portal.domain import DocumentType


class ApplicantTypeResponse(BaseModel):
    """Schema for applicant type response"""
    id: int
    name: str
    description: Optional[str]
    required_documents: List[str]
    registration_steps: List[str]
    verification_requirements: Dict[str, List[str]]

    class Config:
        from_attributes = True


class EmailValidationRequest(BaseModel):
    """Schema for standalone email admission check"""
    email: str
    applicant_type_id: int


class EmailValidationResponse(BaseModel):
    """Schema for email admission result"""
    valid: bool
    message: Optional[str] = None


class RegistrationStart(BaseModel):
    """Schema for starting a registration process"""
    applicant_type_id: int
    user_id: Optional[int] = None  # administrators may start a process for another user


class RegistrationStepUpdate(BaseModel):
    """Schema for completing a registration step"""
    new_step: int = Field(..., ge=1)
    completed_step: Optional[str] = None


class RegistrationVerify(BaseModel):
    """Schema for the administrator decision"""
    approved: bool
    rejection_reason: Optional[str] = None


class RegistrationResponse(BaseModel):
    """Schema for registration process response"""
    id: int
    user_id: int
    applicant_type_id: int
    status: str
    current_step: int
    total_steps: int
    step_names: List[str]
    completed_steps: List[str]
    verification_date: Optional[datetime]
    verified_by: Optional[int]
    rejection_reason: Optional[str]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    class Config:
        from_attributes = True


class DocumentUpload(BaseModel):
    """Schema for registering an uploaded document"""
    document_type: DocumentType
    file_path: str = Field(..., min_length=1, max_length=500)
    extracted_fields: Dict[str, str] = Field(default_factory=dict)


class DocumentReview(BaseModel):
    """Schema for manual document review"""
    status: str = Field(..., pattern="^(approved|rejected|requires_resubmission|pending)$")
    comment: Optional[str] = None


class VerificationDocumentResponse(BaseModel):
    """Schema for verification document response"""
    id: int
    owner_id: int
    registration_process_id: int
    document_type: str
    file_path: str
    verification_status: str
    ai_verified: bool
    ai_verification_score: Optional[int]
    extracted_fields: Optional[Dict[str, str]]
    issues: Optional[List[str]]
    reviewed_by: Optional[int]
    review_comment: Optional[str]
    uploaded_at: Optional[datetime]

    class Config:
        from_attributes = True


class DocumentVerificationStatusResponse(BaseModel):
    """Schema for the document completeness check"""
    all_uploaded: bool
    all_verified: bool
    pending_documents: List[str]
    rejected_documents: List[str]
