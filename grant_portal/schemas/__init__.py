"""
Pydantic schemas
"""
from grant_portal.schemas.user import (
    UserBase, UserRegister, UserUpdate, UserResponse, Token, TokenData
)
from grant_portal.schemas.application import (
    ProgramBase, ProgramCreate, ProgramResponse,
    ApplicationCreate, ApplicationUpdate, ApplicationResponse,
    ApplicationDocumentCreate, ApplicationDocumentResponse
)
from grant_portal.schemas.evaluation import (
    EvaluationInsights, EvaluationResultResponse, EvaluationCreate, EvaluationResponse
)
from grant_portal.schemas.message import MessageCreate, MessageResponse, MessageInbox
from grant_portal.schemas.registration import (
    ApplicantTypeResponse, EmailValidationRequest, EmailValidationResponse,
    RegistrationStart, RegistrationStepUpdate, RegistrationVerify, RegistrationResponse,
    DocumentUpload, DocumentReview, VerificationDocumentResponse,
    DocumentVerificationStatusResponse
)

__all__ = [
    # User
    "UserBase", "UserRegister", "UserUpdate", "UserResponse", "Token", "TokenData",
    # Program / Application
    "ProgramBase", "ProgramCreate", "ProgramResponse",
    "ApplicationCreate", "ApplicationUpdate", "ApplicationResponse",
    "ApplicationDocumentCreate", "ApplicationDocumentResponse",
    # Message
    "MessageCreate", "MessageResponse", "MessageInbox",
    # Evaluation
    "EvaluationInsights", "EvaluationResultResponse", "EvaluationCreate", "EvaluationResponse",
    # Registration
    "ApplicantTypeResponse", "EmailValidationRequest", "EmailValidationResponse",
    "RegistrationStart", "RegistrationStepUpdate", "RegistrationVerify", "RegistrationResponse",
    "DocumentUpload", "DocumentReview", "VerificationDocumentResponse",
    "DocumentVerificationStatusResponse",
]
