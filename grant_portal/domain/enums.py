"""
Closed value sets used across the portal
"""
from enum import Enum
from typing import Optional


class ApplicantTypeName(str, Enum):
    INDIVIDUAL = "individual"
    ORGANIZATION = "organization"
    CORPORATION = "corporation"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["ApplicantTypeName"]:
        """Case-insensitive lookup, None for unknown names"""
        if value is None:
            return None
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


class DocumentType(str, Enum):
    ID_CARD = "id_card"
    PROOF_OF_ADDRESS = "proof_of_address"
    RESUME_CV = "resume_cv"
    MOTIVATION_LETTER = "motivation_letter"
    REGISTRATION_CERTIFICATE = "registration_certificate"
    TAX_ID_DOCUMENT = "tax_id_document"
    FINANCIAL_STATEMENTS = "financial_statements"
    STATUTE_BYLAWS = "statute_bylaws"
    BOARD_MEMBER_LIST = "board_member_list"
    ORGANIZATIONAL_STRUCTURE = "organizational_structure"
    BUSINESS_REGISTRATION = "business_registration"
    COMPANY_STRUCTURE = "company_structure"
    BOARD_RESOLUTION = "board_resolution"
    ANNUAL_REPORT = "annual_report"


class RegistrationStep(str, Enum):
    ACCOUNT_CREATION = "account_creation"
    PERSONAL_INFORMATION = "personal_information"
    CONTACT_DETAILS = "contact_details"
    IDENTITY_VERIFICATION = "identity_verification"
    COMPLETE_PROFILE = "complete_profile"
    ORGANIZATION_INFORMATION = "organization_information"
    LEGAL_STATUS = "legal_status"
    CONTACT_PERSON = "contact_person"
    DOCUMENTATION = "documentation"
    VERIFICATION_SUBMISSION = "verification_submission"
    COMPANY_INFORMATION = "company_information"
    LEGAL_REGISTRATION = "legal_registration"
    FINANCIAL_INFORMATION = "financial_information"


class RegistrationStatus(str, Enum):
    INCOMPLETE = "incomplete"
    PENDING_VERIFICATION = "pending_verification"
    VERIFIED = "verified"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        return self in (RegistrationStatus.VERIFIED, RegistrationStatus.REJECTED)


class DocumentStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    REQUIRES_RESUBMISSION = "requires_resubmission"


class Decision(str, Enum):
    RECOMMENDED = "preporučeno"
    REJECTED = "odbijeno"
    REVISIT = "revisit"


class UserRole(str, Enum):
    ADMINISTRATOR = "administrator"
    APPLICANT = "applicant"
    REVIEWER = "reviewer"
    DONOR = "donor"


class ApplicationStatus(str, Enum):
    DRAFT = "draft"
    SUBMITTED = "submitted"
    IN_PROGRESS = "u obradi"
    RECOMMENDED = "preporučeno"
    REJECTED = "odbijeno"
    APPROVED = "odobreno"
    COMPLETED = "completed"


class EvaluatorType(str, Enum):
    AI = "AI"
    USER = "USER"
