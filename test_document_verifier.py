#!/usr/bin/env python3
"""
Document verifier and status derivation tests
"""
from types import SimpleNamespace

import pytest

from grant_portal.domain import DocumentStatus
from grant_portal.errors import ValidationError
from grant_portal.services.document_verifier import (
    FieldCoverageVerifier, LLMDocumentVerifier, derive_verification_status,
)
from grant_portal.services.rate_limiter import RateLimiter

ID_CARD_FIELDS = {
    "document_type": "Lična karta",
    "full_name": "Amra Hodžić",
    "document_number": "1A2B3C4D5",
    "expiry_date": "2030-01-01",
    "issuing_authority": "MUP KS",
}


@pytest.mark.parametrize("score, expected", [
    (100, DocumentStatus.APPROVED),
    (90, DocumentStatus.APPROVED),
    (85, DocumentStatus.APPROVED),
    (84, DocumentStatus.PENDING),
    (70, DocumentStatus.PENDING),
    (60, DocumentStatus.PENDING),
    (59, DocumentStatus.REQUIRES_RESUBMISSION),
    (40, DocumentStatus.REQUIRES_RESUBMISSION),
    (0, DocumentStatus.REQUIRES_RESUBMISSION),
])
def test_derive_verification_status(score, expected):
    assert derive_verification_status(score) is expected


def test_no_score_derives_rejected():
    assert all(derive_verification_status(score) is not DocumentStatus.REJECTED for score in range(101))


@pytest.mark.parametrize("score", [-1, 101])
def test_score_out_of_range(score):
    with pytest.raises(ValidationError):
        derive_verification_status(score)


def test_all_fields_present():
    result = FieldCoverageVerifier().verify("id_card", ID_CARD_FIELDS)
    assert result.score == 100
    assert result.verified is True
    assert result.issues == []
    assert result.extracted_fields == ID_CARD_FIELDS


def test_missing_fields_lower_the_score():
    fields = dict(ID_CARD_FIELDS, expiry_date="", issuing_authority="   ")
    result = FieldCoverageVerifier().verify("id_card", fields)
    assert result.score == 60
    assert result.verified is False
    assert result.issues == [
        "Missing required field: expiry_date",
        "Missing required field: issuing_authority",
    ]
    assert derive_verification_status(result.score) is DocumentStatus.PENDING


def test_no_fields_scores_zero():
    result = FieldCoverageVerifier().verify("tax_id_document", {})
    assert result.score == 0
    assert len(result.issues) == 3


def test_score_is_rounded():
    result = FieldCoverageVerifier().verify("tax_id_document", {"entity_name": "NVO", "tax_id_number": "42"})
    assert result.score == 67


@pytest.mark.parametrize("document_type", ["annual_report", "unknown_document"])
def test_document_type_without_requirements(document_type):
    result = FieldCoverageVerifier(unverifiable_score=70).verify(document_type, None)
    assert result.score == 70
    assert result.issues == []
    assert derive_verification_status(result.score) is DocumentStatus.PENDING


class FakeLLM:
    def __init__(self, content):
        self.content = content
        self.prompts = []

    def invoke(self, prompt):
        self.prompts.append(prompt)
        return SimpleNamespace(content=self.content)


def no_wait_limiter():
    return RateLimiter(max_calls=100, time_window=60, clock=lambda: 0.0, sleep=lambda seconds: None)


def test_llm_verifier_reads_fields_from_document(tmp_path):
    document = tmp_path / "tax.txt"
    document.write_text("Poreska uprava FBiH\nNaziv: Udruženje Most\nPIB: 4200000000\nDatum: 2024-05-01", encoding="utf-8")
    llm = FakeLLM(
        '```json\n{"entity_name": "Udruženje Most", "tax_id_number": "4200000000", "issue_date": "2024-05-01"}\n```'
    )
    verifier = LLMDocumentVerifier(llm=llm, rate_limiter=no_wait_limiter())

    result = verifier.verify("tax_id_document", {}, str(document))
    assert result.score == 100
    assert result.extracted_fields["tax_id_number"] == "4200000000"
    assert "Udruženje Most" in llm.prompts[0][-1].content


def test_llm_verifier_keeps_supplied_fields(tmp_path):
    document = tmp_path / "tax.txt"
    document.write_text("PIB: 4200000000", encoding="utf-8")
    llm = FakeLLM('{"entity_name": "", "tax_id_number": "999", "issue_date": null}')
    verifier = LLMDocumentVerifier(llm=llm, rate_limiter=no_wait_limiter())

    result = verifier.verify("tax_id_document", {"tax_id_number": "4200000000"}, str(document))
    assert result.extracted_fields == {"tax_id_number": "4200000000"}
    assert result.score == 33


def test_llm_verifier_without_file_scores_supplied_fields():
    llm = FakeLLM("{}")
    verifier = LLMDocumentVerifier(llm=llm, rate_limiter=no_wait_limiter())

    result = verifier.verify("id_card", ID_CARD_FIELDS, "/nonexistent/id.txt")
    assert result.score == 100
    assert llm.prompts == []
