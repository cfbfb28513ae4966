"""
Email admission rule

Decides whether an email address may be used to register as a given
applicant type. Pure function, no database access.
"""
import logging
import re
from dataclasses import dataclass
from typing import Optional, Union

from grant_portal.domain import ApplicantTypeName

logger = logging.getLogger(__name__)

# Personal mailbox providers, never accepted for legal entities
DISALLOWED_DOMAINS = frozenset({
    "gmail.com", "yahoo.com", "hotmail.com", "outlook.com", "live.com",
    "icloud.com", "aol.com",
    "gmail.ba", "yahoo.ba", "hotmail.ba", "outlook.ba",
})

ORGANIZATION_DOMAIN_PATTERN = re.compile(r"\.(org|ngo|ba|net|com)$")

# Applicant type names outside ApplicantTypeName are admitted
UNKNOWN_APPLICANT_TYPE_POLICY = "admit"


@dataclass(frozen=True)
class EmailValidationResult:
    valid: bool
    message: Optional[str] = None


def extract_domain(email: str) -> Optional[str]:
    """Lower-cased domain part of an email, None unless there is exactly one @"""
    if email.count("@") != 1:
        return None
    domain = email.split("@")[1].strip().lower()
    return domain or None


def validate_email_for_applicant_type(
    email: Optional[str],
    applicant_type: Union[ApplicantTypeName, str, None]
) -> EmailValidationResult:
    """
    Validate an email address against the admission rule of an applicant type

    Args:
        email: Email address as entered by the user
        applicant_type: Applicant type enum member or name

    Returns:
        EmailValidationResult with a message when the email is rejected
    """
    if not email:
        return EmailValidationResult(False, "Email is required")

    domain = extract_domain(email)
    if domain is None:
        return EmailValidationResult(False, "Invalid email format")

    parsed_type = ApplicantTypeName.parse(applicant_type)
    if parsed_type is None:
        logger.warning(
            f"Unknown applicant type '{applicant_type}', policy '{UNKNOWN_APPLICANT_TYPE_POLICY}' applied"
        )
        return EmailValidationResult(True)

    if parsed_type is ApplicantTypeName.INDIVIDUAL:
        return EmailValidationResult(True)

    if parsed_type is ApplicantTypeName.ORGANIZATION:
        if domain in DISALLOWED_DOMAINS:
            return EmailValidationResult(
                False,
                "Organizations cannot use personal email domains like gmail.com, yahoo.com, etc."
            )
        if not ORGANIZATION_DOMAIN_PATTERN.search(domain):
            return EmailValidationResult(
                False,
                "Organizations should use official domain names ending with .org, .ngo, .ba, .net, or .com"
            )
        return EmailValidationResult(True)

    if parsed_type is ApplicantTypeName.CORPORATION:
        if domain in DISALLOWED_DOMAINS:
            return EmailValidationResult(
                False,
                "Corporations cannot use personal email domains like gmail.com, yahoo.com, etc."
            )
        return EmailValidationResult(True)

    raise AssertionError(f"Unhandled applicant type: {parsed_type}")
