"""
Domain rules: closed enums and the applicant type registry
"""
from grant_portal.domain.enums import (
    ApplicantTypeName, DocumentType, RegistrationStep, RegistrationStatus,
    DocumentStatus, Decision, UserRole, ApplicationStatus, EvaluatorType
)
from grant_portal.domain.registry import (
    ApplicantTypeConfig, APPLICANT_TYPES, VERIFICATION_REQUIREMENTS,
    DEFAULT_TOTAL_STEPS, get_applicant_type_config, get_required_fields
)

__all__ = [
    # Enums
    "ApplicantTypeName", "DocumentType", "RegistrationStep", "RegistrationStatus",
    "DocumentStatus", "Decision", "UserRole", "ApplicationStatus", "EvaluatorType",
    # Registry
    "ApplicantTypeConfig", "APPLICANT_TYPES", "VERIFICATION_REQUIREMENTS",
    "DEFAULT_TOTAL_STEPS", "get_applicant_type_config", "get_required_fields",
]
