#!/usr/bin/env python3
"""
Email admission rule tests
"""
import pytest

from grant_portal.domain import ApplicantTypeName
from grant_portal.services.email_admission import (
    DISALLOWED_DOMAINS, UNKNOWN_APPLICANT_TYPE_POLICY, extract_domain,
    validate_email_for_applicant_type,
)


@pytest.mark.parametrize("email", [
    "john@gmail.com",
    "amra@yahoo.com",
    "someone@example.xyz",
    "person@sub.domain.ba",
])
def test_individual_accepts_any_domain(email):
    assert validate_email_for_applicant_type(email, ApplicantTypeName.INDIVIDUAL).valid


@pytest.mark.parametrize("email, valid", [
    ("info@ngo.org", True),
    ("admin@udruzenje.net", True),
    ("kontakt@udruzenje.ba", True),
    ("office@foundation.ngo", True),
    ("info@gmail.com", False),
    ("info@hotmail.ba", False),
    ("info@association.de", False),
])
def test_organization_rules(email, valid):
    assert validate_email_for_applicant_type(email, ApplicantTypeName.ORGANIZATION).valid is valid


@pytest.mark.parametrize("email, valid", [
    ("business@gmail.com", False),
    ("ceo@outlook.com", False),
    ("support@company.ba", True),
    ("sales@company.de", True),
])
def test_corporation_rules(email, valid):
    assert validate_email_for_applicant_type(email, ApplicantTypeName.CORPORATION).valid is valid


def test_organization_personal_domain_message():
    result = validate_email_for_applicant_type("info@gmail.com", "organization")
    assert result.message == "Organizations cannot use personal email domains like gmail.com, yahoo.com, etc."


def test_organization_suffix_message():
    result = validate_email_for_applicant_type("info@association.de", "organization")
    assert result.message == (
        "Organizations should use official domain names ending with .org, .ngo, .ba, .net, or .com"
    )


def test_corporation_message():
    result = validate_email_for_applicant_type("business@gmail.com", "corporation")
    assert result.message == "Corporations cannot use personal email domains like gmail.com, yahoo.com, etc."


def test_disallowed_domain_checked_before_suffix():
    """Every disallowed domain already ends in an accepted suffix, and is still refused"""
    for domain in DISALLOWED_DOMAINS:
        result = validate_email_for_applicant_type(f"info@{domain}", ApplicantTypeName.ORGANIZATION)
        assert not result.valid
        assert "personal email domains" in result.message


def test_domain_comparison_is_case_insensitive():
    assert not validate_email_for_applicant_type("Info@GMAIL.com", "organization").valid
    assert validate_email_for_applicant_type("Info@NGO.ORG", "organization").valid


def test_applicant_type_name_is_case_insensitive():
    assert not validate_email_for_applicant_type("info@gmail.com", "Organization").valid


def test_empty_email():
    result = validate_email_for_applicant_type("", ApplicantTypeName.INDIVIDUAL)
    assert not result.valid
    assert result.message == "Email is required"


@pytest.mark.parametrize("email", ["no-at-sign", "trailing@", "trailing@   "])
def test_missing_domain(email):
    result = validate_email_for_applicant_type(email, ApplicantTypeName.INDIVIDUAL)
    assert not result.valid
    assert result.message == "Invalid email format"


def test_unknown_applicant_type_is_admitted():
    assert UNKNOWN_APPLICANT_TYPE_POLICY == "admit"
    result = validate_email_for_applicant_type("someone@gmail.com", "foundation")
    assert result.valid
    assert result.message is None


def test_extract_domain():
    assert extract_domain("a@Example.BA") == "example.ba"
    assert extract_domain("a@b@example.ba") is None
    assert extract_domain("nodomain") is None


@pytest.mark.parametrize("applicant_type", list(ApplicantTypeName))
def test_several_at_signs_are_invalid(applicant_type):
    """A personal domain cannot hide in front of an organizational one"""
    result = validate_email_for_applicant_type("x@gmail.com@corp.org", applicant_type)
    assert not result.valid
    assert result.message == "Invalid email format"
