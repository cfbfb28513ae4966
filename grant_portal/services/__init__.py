"""
Service layer
"""
from grant_portal.services.auth import (
    verify_password, get_password_hash, authenticate_user,
    create_access_token, decode_token, get_current_user,
    get_current_active_admin, get_current_staff, update_last_login
)
from grant_portal.services.email_admission import validate_email_for_applicant_type
from grant_portal.services.registration import (
    create_registration_process, update_registration_step, verify_registration_process
)
from grant_portal.services.document_verifier import (
    DocumentVerifier, FieldCoverageVerifier, LLMDocumentVerifier,
    derive_verification_status, get_document_verifier
)
from grant_portal.services.document_review import (
    upload_verification_document, validate_document_with_ai, review_document
)
from grant_portal.services.verification_aggregator import (
    aggregate_document_status, check_document_verification_status
)
from grant_portal.services.application_scorer import score_application
from grant_portal.services.messages import (
    send_message, list_application_messages, list_user_messages, mark_message_read
)

__all__ = [
    # Auth
    "verify_password", "get_password_hash", "authenticate_user",
    "create_access_token", "decode_token", "get_current_user",
    "get_current_active_admin", "get_current_staff", "update_last_login",
    # Eligibility engine
    "validate_email_for_applicant_type",
    "create_registration_process", "update_registration_step", "verify_registration_process",
    "DocumentVerifier", "FieldCoverageVerifier", "LLMDocumentVerifier",
    "derive_verification_status", "get_document_verifier",
    "upload_verification_document", "validate_document_with_ai", "review_document",
    "aggregate_document_status", "check_document_verification_status",
    "score_application",
    # Messages
    "send_message", "list_application_messages", "list_user_messages", "mark_message_read",
]
