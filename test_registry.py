#!/usr/bin/env python3
"""
Applicant type registry tests
"""
import pytest

from grant_portal.domain import (
    APPLICANT_TYPES, VERIFICATION_REQUIREMENTS, ApplicantTypeName, DocumentType,
    RegistrationStatus, get_applicant_type_config, get_required_fields,
)
from grant_portal.services.email_admission import validate_email_for_applicant_type


def test_every_applicant_type_is_configured():
    assert set(APPLICANT_TYPES) == set(ApplicantTypeName)


@pytest.mark.parametrize("applicant_type", list(ApplicantTypeName))
def test_every_applicant_type_has_an_email_rule(applicant_type):
    """An unhandled member would raise AssertionError"""
    validate_email_for_applicant_type("someone@company.ba", applicant_type)


def test_step_and_document_counts():
    assert len(APPLICANT_TYPES[ApplicantTypeName.INDIVIDUAL].registration_steps) == 5
    assert len(APPLICANT_TYPES[ApplicantTypeName.ORGANIZATION].registration_steps) == 6
    assert len(APPLICANT_TYPES[ApplicantTypeName.CORPORATION].registration_steps) == 7
    assert len(APPLICANT_TYPES[ApplicantTypeName.INDIVIDUAL].required_documents) == 4
    assert len(APPLICANT_TYPES[ApplicantTypeName.ORGANIZATION].required_documents) == 7
    assert len(APPLICANT_TYPES[ApplicantTypeName.CORPORATION].required_documents) == 7


def test_no_duplicates_in_config():
    for config in APPLICANT_TYPES.values():
        assert len(set(config.required_documents)) == len(config.required_documents)
        assert len(set(config.registration_steps)) == len(config.registration_steps)


def test_registry_is_read_only():
    with pytest.raises(TypeError):
        APPLICANT_TYPES[ApplicantTypeName.INDIVIDUAL] = None


def test_lookup_by_name():
    assert get_applicant_type_config("CORPORATION").name is ApplicantTypeName.CORPORATION
    assert get_applicant_type_config("foundation") is None
    assert get_applicant_type_config(None) is None


def test_required_fields():
    assert get_required_fields("id_card") == VERIFICATION_REQUIREMENTS[DocumentType.ID_CARD]
    assert get_required_fields("annual_report") == ()
    assert get_required_fields("unknown_document") == ()
    assert get_required_fields(None) == ()


def test_terminal_statuses():
    assert RegistrationStatus.VERIFIED.is_terminal
    assert RegistrationStatus.REJECTED.is_terminal
    assert not RegistrationStatus.INCOMPLETE.is_terminal
    assert not RegistrationStatus.PENDING_VERIFICATION.is_terminal
