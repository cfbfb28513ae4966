#!/usr/bin/env python3
"""
Registration process state machine tests
"""
import pytest
from sqlalchemy.orm.exc import StaleDataError

from grant_portal.database import SessionLocal
from grant_portal.domain import DEFAULT_TOTAL_STEPS, RegistrationStatus
from grant_portal.errors import ConflictError, NotFoundError, ValidationError
from grant_portal.models.applicant_type import ApplicantType
from grant_portal.models.registration_process import RegistrationProcess
from grant_portal.models.user import User
from grant_portal.services.registration import (
    create_registration_process, derive_registration_status,
    update_registration_step, verify_registration_process,
)


def make_user(db, username="applicant", applicant_type=None):
    user = User(
        username=username,
        full_name=username.title(),
        email=f"{username}@example.ba",
        password_hash="x",
        role="applicant",
        applicant_type_id=applicant_type.id if applicant_type else None,
    )
    db.add(user)
    db.commit()
    return user


def applicant_type(db, name):
    return db.query(ApplicantType).filter(ApplicantType.name == name).first()


@pytest.fixture
def individual_process(seeded_db):
    individual = applicant_type(seeded_db, "individual")
    user = make_user(seeded_db, applicant_type=individual)
    return create_registration_process(seeded_db, user.id, individual.id)


def test_create_snapshots_registry(individual_process):
    assert individual_process.status == RegistrationStatus.INCOMPLETE.value
    assert individual_process.current_step == 1
    assert individual_process.total_steps == 5
    assert individual_process.completed_steps == []
    assert individual_process.step_names[0] == "account_creation"
    assert individual_process.version == 1


def test_create_for_corporation(seeded_db):
    corporation = applicant_type(seeded_db, "corporation")
    user = make_user(seeded_db, "firma", corporation)
    process = create_registration_process(seeded_db, user.id, corporation.id)
    assert process.total_steps == 7


def test_create_unknown_applicant_type(seeded_db):
    user = make_user(seeded_db)
    with pytest.raises(NotFoundError):
        create_registration_process(seeded_db, user.id, 999)
    assert seeded_db.query(RegistrationProcess).count() == 0


def test_create_unknown_user(seeded_db):
    with pytest.raises(NotFoundError):
        create_registration_process(seeded_db, 999, applicant_type(seeded_db, "individual").id)


def test_create_with_type_outside_registry_uses_default_steps(seeded_db):
    foundation = ApplicantType(name="foundation", description="Not in the registry")
    seeded_db.add(foundation)
    seeded_db.commit()
    user = make_user(seeded_db)

    process = create_registration_process(seeded_db, user.id, foundation.id)
    assert process.total_steps == DEFAULT_TOTAL_STEPS == 5
    assert process.step_names == []


def test_completing_all_steps_moves_to_pending_verification(seeded_db, individual_process):
    steps = individual_process.step_names
    for number, step in enumerate(steps, start=1):
        assert individual_process.status == RegistrationStatus.INCOMPLETE.value
        individual_process = update_registration_step(seeded_db, individual_process.id, number, step)

    assert individual_process.completed_steps == steps
    assert individual_process.status == RegistrationStatus.PENDING_VERIFICATION.value
    assert individual_process.current_step == 5


def test_completing_a_step_twice_is_idempotent(seeded_db, individual_process):
    for _ in range(6):
        process = update_registration_step(seeded_db, individual_process.id, 2, "account_creation")
    assert process.completed_steps == ["account_creation"]
    assert process.status == RegistrationStatus.INCOMPLETE.value


def test_step_without_completion_only_moves_pointer(seeded_db, individual_process):
    process = update_registration_step(seeded_db, individual_process.id, 3)
    assert process.current_step == 3
    assert process.completed_steps == []


@pytest.mark.parametrize("new_step", [0, 6, -1])
def test_step_out_of_range(seeded_db, individual_process, new_step):
    with pytest.raises(ValidationError):
        update_registration_step(seeded_db, individual_process.id, new_step, "account_creation")
    seeded_db.rollback()
    process = seeded_db.get(RegistrationProcess, individual_process.id)
    assert process.current_step == 1
    assert process.completed_steps == []


def test_unknown_step_name(seeded_db, individual_process):
    with pytest.raises(ValidationError):
        update_registration_step(seeded_db, individual_process.id, 2, "legal_status")


def test_update_missing_process(seeded_db):
    with pytest.raises(NotFoundError):
        update_registration_step(seeded_db, 404, 1)


def test_verify_approves_and_marks_user(seeded_db, individual_process):
    admin = seeded_db.query(User).filter(User.role == "administrator").first()
    process = verify_registration_process(seeded_db, individual_process.id, admin.id, approved=True)

    assert process.status == RegistrationStatus.VERIFIED.value
    assert process.verified_by == admin.id
    assert process.verification_date is not None
    assert seeded_db.get(User, process.user_id).is_verified is True


def test_verify_rejects_with_reason(seeded_db, individual_process):
    process = verify_registration_process(
        seeded_db, individual_process.id, 1, approved=False, rejection_reason="Documents expired"
    )
    assert process.status == RegistrationStatus.REJECTED.value
    assert process.rejection_reason == "Documents expired"
    assert seeded_db.get(User, process.user_id).is_verified is False


def test_terminal_status_survives_step_updates(seeded_db, individual_process):
    verify_registration_process(seeded_db, individual_process.id, 1, approved=False)
    process = update_registration_step(seeded_db, individual_process.id, 2, "account_creation")
    assert process.status == RegistrationStatus.REJECTED.value


def test_verify_missing_process(seeded_db):
    with pytest.raises(NotFoundError):
        verify_registration_process(seeded_db, 404, 1, approved=True)


def test_concurrent_update_is_a_conflict(seeded_db, individual_process):
    """A second session working on a stale copy must not overwrite the first"""
    other = SessionLocal()
    try:
        stale = other.get(RegistrationProcess, individual_process.id)
        update_registration_step(seeded_db, individual_process.id, 2, "account_creation")

        stale.current_step = 4
        with pytest.raises(StaleDataError):
            other.commit()
    finally:
        other.rollback()
        other.close()


def test_conflict_error_status_code():
    assert ConflictError("x").status_code == 409


@pytest.mark.parametrize("current, completed, total, expected", [
    (RegistrationStatus.INCOMPLETE, 0, 5, RegistrationStatus.INCOMPLETE),
    (RegistrationStatus.INCOMPLETE, 5, 5, RegistrationStatus.PENDING_VERIFICATION),
    (RegistrationStatus.PENDING_VERIFICATION, 4, 5, RegistrationStatus.INCOMPLETE),
    (RegistrationStatus.VERIFIED, 0, 5, RegistrationStatus.VERIFIED),
    (RegistrationStatus.REJECTED, 5, 5, RegistrationStatus.REJECTED),
])
def test_derive_registration_status(current, completed, total, expected):
    assert derive_registration_status(current, completed, total) is expected
