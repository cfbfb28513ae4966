"""
Applicant type registry

Per applicant type: required documents, registration steps and the
fields each document type must yield. Read-only after import.
"""
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from grant_portal.domain.enums import ApplicantTypeName, DocumentType, RegistrationStep

# Step count for an applicant type the registry does not know about
DEFAULT_TOTAL_STEPS = 5


@dataclass(frozen=True)
class ApplicantTypeConfig:
    name: ApplicantTypeName
    description: str
    required_documents: Tuple[DocumentType, ...]
    registration_steps: Tuple[RegistrationStep, ...]


APPLICANT_TYPES: Mapping[ApplicantTypeName, ApplicantTypeConfig] = MappingProxyType({
    ApplicantTypeName.INDIVIDUAL: ApplicantTypeConfig(
        name=ApplicantTypeName.INDIVIDUAL,
        description="Private person applying for sponsorship or donation",
        required_documents=(
            DocumentType.ID_CARD,
            DocumentType.PROOF_OF_ADDRESS,
            DocumentType.RESUME_CV,
            DocumentType.MOTIVATION_LETTER,
        ),
        registration_steps=(
            RegistrationStep.ACCOUNT_CREATION,
            RegistrationStep.PERSONAL_INFORMATION,
            RegistrationStep.CONTACT_DETAILS,
            RegistrationStep.IDENTITY_VERIFICATION,
            RegistrationStep.COMPLETE_PROFILE,
        ),
    ),
    ApplicantTypeName.ORGANIZATION: ApplicantTypeConfig(
        name=ApplicantTypeName.ORGANIZATION,
        description="Non-profit organization, association or NGO",
        required_documents=(
            DocumentType.REGISTRATION_CERTIFICATE,
            DocumentType.TAX_ID_DOCUMENT,
            DocumentType.FINANCIAL_STATEMENTS,
            DocumentType.STATUTE_BYLAWS,
            DocumentType.BOARD_MEMBER_LIST,
            DocumentType.PROOF_OF_ADDRESS,
            DocumentType.ORGANIZATIONAL_STRUCTURE,
        ),
        registration_steps=(
            RegistrationStep.ACCOUNT_CREATION,
            RegistrationStep.ORGANIZATION_INFORMATION,
            RegistrationStep.LEGAL_STATUS,
            RegistrationStep.CONTACT_PERSON,
            RegistrationStep.DOCUMENTATION,
            RegistrationStep.VERIFICATION_SUBMISSION,
        ),
    ),
    ApplicantTypeName.CORPORATION: ApplicantTypeConfig(
        name=ApplicantTypeName.CORPORATION,
        description="Registered company",
        required_documents=(
            DocumentType.BUSINESS_REGISTRATION,
            DocumentType.TAX_ID_DOCUMENT,
            DocumentType.FINANCIAL_STATEMENTS,
            DocumentType.COMPANY_STRUCTURE,
            DocumentType.BOARD_RESOLUTION,
            DocumentType.PROOF_OF_ADDRESS,
            DocumentType.ANNUAL_REPORT,
        ),
        registration_steps=(
            RegistrationStep.ACCOUNT_CREATION,
            RegistrationStep.COMPANY_INFORMATION,
            RegistrationStep.LEGAL_REGISTRATION,
            RegistrationStep.FINANCIAL_INFORMATION,
            RegistrationStep.CONTACT_PERSON,
            RegistrationStep.DOCUMENTATION,
            RegistrationStep.VERIFICATION_SUBMISSION,
        ),
    ),
})

VERIFICATION_REQUIREMENTS: Mapping[DocumentType, Tuple[str, ...]] = MappingProxyType({
    DocumentType.ID_CARD: ("document_type", "full_name", "document_number", "expiry_date", "issuing_authority"),
    DocumentType.PROOF_OF_ADDRESS: ("document_type", "full_name", "address", "issue_date"),
    DocumentType.REGISTRATION_CERTIFICATE: ("organization_name", "registration_number", "registration_date", "issuing_authority"),
    DocumentType.TAX_ID_DOCUMENT: ("entity_name", "tax_id_number", "issue_date"),
    DocumentType.BUSINESS_REGISTRATION: ("company_name", "registration_number", "registration_date", "legal_structure"),
})


def get_applicant_type_config(name: Optional[str]) -> Optional[ApplicantTypeConfig]:
    """Registry entry for an applicant type name, None when unknown"""
    applicant_type = ApplicantTypeName.parse(name)
    if applicant_type is None:
        return None
    return APPLICANT_TYPES[applicant_type]


def get_required_fields(document_type: Optional[str]) -> Tuple[str, ...]:
    """Fields a document type must yield; unknown types require nothing"""
    try:
        return VERIFICATION_REQUIREMENTS.get(DocumentType(document_type), ())
    except ValueError:
        return ()
