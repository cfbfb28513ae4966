#!/usr/bin/env python3
"""
Document completeness tests
"""
from types import SimpleNamespace

import pytest

from grant_portal.domain import APPLICANT_TYPES, ApplicantTypeName, DocumentType
from grant_portal.errors import ConflictError, ForbiddenError, NotFoundError, ValidationError
from grant_portal.models.applicant_type import ApplicantType
from grant_portal.models.user import User
from grant_portal.models.verification_document import VerificationDocument
from grant_portal.services.document_review import (
    review_document, upload_verification_document, validate_document_with_ai,
)
from grant_portal.services.document_verifier import FieldCoverageVerifier
from grant_portal.services.registration import create_registration_process
from grant_portal.services.verification_aggregator import (
    aggregate_document_status, check_document_verification_status,
)

INDIVIDUAL_DOCS = [doc.value for doc in APPLICANT_TYPES[ApplicantTypeName.INDIVIDUAL].required_documents]


def doc(document_type, status):
    return SimpleNamespace(document_type=document_type, verification_status=status)


def test_nothing_uploaded():
    status = aggregate_document_status(INDIVIDUAL_DOCS, [])
    assert status.pending_documents == INDIVIDUAL_DOCS
    assert status.all_uploaded is False
    assert status.all_verified is False
    assert status.rejected_documents == []


def test_all_approved():
    status = aggregate_document_status(INDIVIDUAL_DOCS, [doc(d, "approved") for d in INDIVIDUAL_DOCS])
    assert status.all_uploaded is True
    assert status.all_verified is True
    assert status.pending_documents == []


def test_uploaded_but_not_all_approved():
    documents = [doc(d, "approved") for d in INDIVIDUAL_DOCS[:-1]] + [doc(INDIVIDUAL_DOCS[-1], "pending")]
    status = aggregate_document_status(INDIVIDUAL_DOCS, documents)
    assert status.all_uploaded is True
    assert status.all_verified is False


def test_duplicate_approvals_do_not_cover_a_missing_type():
    """Four approved uploads, but one required type has none"""
    documents = [doc(d, "approved") for d in INDIVIDUAL_DOCS[:-1]] + [doc(INDIVIDUAL_DOCS[0], "approved")]
    status = aggregate_document_status(INDIVIDUAL_DOCS, documents)
    assert status.all_verified is False
    assert status.pending_documents == [INDIVIDUAL_DOCS[-1]]


def test_reupload_after_resubmission_counts_as_verified():
    documents = [doc(d, "approved") for d in INDIVIDUAL_DOCS]
    documents.insert(0, doc(INDIVIDUAL_DOCS[0], "requires_resubmission"))
    status = aggregate_document_status(INDIVIDUAL_DOCS, documents)
    assert status.all_verified is True
    assert status.rejected_documents == [INDIVIDUAL_DOCS[0]]


def test_rejected_and_resubmission_are_listed():
    documents = [
        doc("id_card", "rejected"),
        doc("proof_of_address", "requires_resubmission"),
        doc("resume_cv", "pending"),
    ]
    status = aggregate_document_status(INDIVIDUAL_DOCS, documents)
    assert status.rejected_documents == ["id_card", "proof_of_address"]
    assert status.pending_documents == ["motivation_letter"]


def test_pending_ignores_status():
    """A rejected upload still counts as uploaded"""
    status = aggregate_document_status(INDIVIDUAL_DOCS, [doc("id_card", "rejected")])
    assert "id_card" not in status.pending_documents


@pytest.fixture
def process(seeded_db):
    individual = seeded_db.query(ApplicantType).filter(ApplicantType.name == "individual").first()
    user = User(username="amra", full_name="Amra", email="amra@gmail.com", password_hash="x",
                role="applicant", applicant_type_id=individual.id)
    seeded_db.add(user)
    seeded_db.commit()
    return create_registration_process(seeded_db, user.id, individual.id)


def test_upload_verify_review_flow(seeded_db, process):
    verifier = FieldCoverageVerifier(unverifiable_score=70)
    fields = {
        "id_card": {"document_type": "LK", "full_name": "Amra", "document_number": "1",
                    "expiry_date": "2030-01-01", "issuing_authority": "MUP"},
        "proof_of_address": {"document_type": "CIPS", "full_name": "Amra", "address": "Titova 1"},
        "resume_cv": {},
        "motivation_letter": {},
    }
    documents = {
        document_type: upload_verification_document(
            seeded_db, process.id, process.user_id, document_type, f"/uploads/{document_type}.pdf", extracted
        )
        for document_type, extracted in fields.items()
    }
    assert all(d.verification_status == "pending" for d in documents.values())

    id_card = validate_document_with_ai(seeded_db, documents["id_card"].id, verifier)
    assert id_card.ai_verified is True
    assert id_card.ai_verification_score == 100
    assert id_card.verification_status == "approved"

    address = validate_document_with_ai(seeded_db, documents["proof_of_address"].id, verifier)
    assert address.ai_verification_score == 75
    assert address.verification_status == "pending"
    assert address.issues == ["Missing required field: issue_date"]

    cv = validate_document_with_ai(seeded_db, documents["resume_cv"].id, verifier)
    assert cv.verification_status == "pending"

    status = check_document_verification_status(seeded_db, process.id)
    assert status.all_uploaded is True
    assert status.all_verified is False

    for document_type in ("proof_of_address", "resume_cv", "motivation_letter"):
        review_document(seeded_db, documents[document_type].id, 1, "approved", "Looks fine")

    status = check_document_verification_status(seeded_db, process.id)
    assert status.all_verified is True


def test_manual_rejection(seeded_db, process):
    document = upload_verification_document(seeded_db, process.id, process.user_id, "id_card", "/uploads/id.pdf")
    reviewed = review_document(seeded_db, document.id, 1, "rejected", "Photo unreadable")
    assert reviewed.verification_status == "rejected"
    assert reviewed.reviewed_by == 1
    assert check_document_verification_status(seeded_db, process.id).rejected_documents == ["id_card"]


def test_reupload_creates_new_record(seeded_db, process):
    first = upload_verification_document(seeded_db, process.id, process.user_id, "id_card", "/uploads/id1.pdf")
    second = upload_verification_document(seeded_db, process.id, process.user_id, "id_card", "/uploads/id2.pdf")
    assert first.id != second.id


def test_upload_to_foreign_process(seeded_db, process):
    with pytest.raises(ForbiddenError):
        upload_verification_document(seeded_db, process.id, process.user_id + 100, "id_card", "/uploads/id.pdf")


def test_missing_process_and_document(seeded_db):
    with pytest.raises(NotFoundError):
        check_document_verification_status(seeded_db, 404)
    with pytest.raises(NotFoundError):
        upload_verification_document(seeded_db, 404, 1, "id_card", "/uploads/id.pdf")
    with pytest.raises(NotFoundError):
        validate_document_with_ai(seeded_db, 404, FieldCoverageVerifier())
    with pytest.raises(NotFoundError):
        review_document(seeded_db, 404, 1, "approved")


def test_applicant_type_outside_registry(seeded_db):
    foundation = ApplicantType(name="foundation")
    seeded_db.add(foundation)
    user = User(username="f", full_name="F", email="f@f.org", password_hash="x", role="applicant")
    seeded_db.add(user)
    seeded_db.commit()
    process = create_registration_process(seeded_db, user.id, foundation.id)

    with pytest.raises(NotFoundError):
        check_document_verification_status(seeded_db, process.id)


def test_automated_verification_keeps_manual_rejection(seeded_db, process):
    fields = {"document_type": "LK", "full_name": "Amra", "document_number": "1",
              "expiry_date": "2030-01-01", "issuing_authority": "MUP"}
    document = upload_verification_document(
        seeded_db, process.id, process.user_id, "id_card", "/uploads/id.pdf", fields
    )
    review_document(seeded_db, document.id, 1, "rejected", "Forged stamp")

    with pytest.raises(ConflictError):
        validate_document_with_ai(seeded_db, document.id, FieldCoverageVerifier())

    seeded_db.expire_all()
    document = seeded_db.get(VerificationDocument, document.id)
    assert document.verification_status == "rejected"
    assert document.ai_verified is False
    assert check_document_verification_status(seeded_db, process.id).rejected_documents == ["id_card"]


def test_automated_verification_after_manual_approval(seeded_db, process):
    document = upload_verification_document(seeded_db, process.id, process.user_id, "resume_cv", "/uploads/cv.pdf")
    review_document(seeded_db, document.id, 1, "approved")

    with pytest.raises(ConflictError):
        validate_document_with_ai(seeded_db, document.id, FieldCoverageVerifier())


@pytest.mark.parametrize("document_type", ["idcard", "", "ID card"])
def test_unknown_document_type_is_refused(seeded_db, process, document_type):
    with pytest.raises(ValidationError):
        upload_verification_document(seeded_db, process.id, process.user_id, document_type, "/uploads/x.pdf")
    assert seeded_db.query(VerificationDocument).count() == 0


def test_document_type_enum_is_accepted(seeded_db, process):
    document = upload_verification_document(
        seeded_db, process.id, process.user_id, DocumentType.ID_CARD, "/uploads/id.pdf"
    )
    assert document.document_type == "id_card"
