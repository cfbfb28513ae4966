"""
Registration process state machine

incomplete -> pending_verification -> verified | rejected
"""
import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from grant_portal.domain import DEFAULT_TOTAL_STEPS, RegistrationStatus, get_applicant_type_config
from grant_portal.errors import ConflictError, NotFoundError, ValidationError
from grant_portal.models.applicant_type import ApplicantType
from grant_portal.models.registration_process import RegistrationProcess
from grant_portal.models.user import User

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def derive_registration_status(
    current: RegistrationStatus,
    completed_count: int,
    total_steps: int
) -> RegistrationStatus:
    """Status after step completion; terminal states are kept"""
    if current.is_terminal:
        return current
    if completed_count >= total_steps:
        return RegistrationStatus.PENDING_VERIFICATION
    return RegistrationStatus.INCOMPLETE


def get_registration_process(db: Session, process_id: int, lock: bool = False) -> RegistrationProcess:
    """Load a registration process or raise NotFoundError"""
    query = db.query(RegistrationProcess).filter(RegistrationProcess.id == process_id)
    if lock:
        query = query.with_for_update()
    process = query.first()
    if not process:
        raise NotFoundError(f"Registration process {process_id} not found")
    return process


def _commit(db: Session, process: RegistrationProcess):
    try:
        db.commit()
    except StaleDataError:
        db.rollback()
        raise ConflictError(f"Registration process {process.id} was modified concurrently, retry the request")
    db.refresh(process)


def create_registration_process(db: Session, user_id: int, applicant_type_id: int) -> RegistrationProcess:
    """
    Create a registration process for a user

    total_steps and the step names are copied from the registry now and
    never follow later registry changes.

    Raises:
        NotFoundError: Unknown applicant type or user
    """
    applicant_type = db.query(ApplicantType).filter(ApplicantType.id == applicant_type_id).first()
    if not applicant_type:
        raise NotFoundError(f"Applicant type {applicant_type_id} not found")

    if not db.query(User).filter(User.id == user_id).first():
        raise NotFoundError(f"User {user_id} not found")

    config = get_applicant_type_config(applicant_type.name)
    if config is None:
        logger.warning(
            f"Applicant type '{applicant_type.name}' not in registry, using {DEFAULT_TOTAL_STEPS} steps"
        )
        step_names = []
        total_steps = DEFAULT_TOTAL_STEPS
    else:
        step_names = [step.value for step in config.registration_steps]
        total_steps = len(step_names)

    now = _utc_now()
    process = RegistrationProcess(
        user_id=user_id,
        applicant_type_id=applicant_type_id,
        status=RegistrationStatus.INCOMPLETE.value,
        current_step=1,
        total_steps=total_steps,
        step_names=step_names,
        completed_steps=[],
        created_at=now,
        updated_at=now,
    )
    db.add(process)
    db.commit()
    db.refresh(process)

    logger.info(
        f"Registration process {process.id} created for user {user_id} "
        f"({applicant_type.name}, {total_steps} steps)"
    )
    return process


def update_registration_step(
    db: Session,
    process_id: int,
    new_step: int,
    completed_step: Optional[str] = None
) -> RegistrationProcess:
    """
    Move a registration process to new_step, optionally marking a step as completed

    Completing the same step twice has no effect on completed_steps.

    Raises:
        NotFoundError: Unknown process
        ValidationError: Step number out of range or unknown step name
        ConflictError: Concurrent modification
    """
    process = get_registration_process(db, process_id, lock=True)

    if new_step < 1 or new_step > process.total_steps:
        raise ValidationError(f"Step must be between 1 and {process.total_steps}, got {new_step}")

    completed_steps = list(process.completed_steps or [])
    if completed_step:
        if process.step_names and completed_step not in process.step_names:
            raise ValidationError(f"Unknown registration step '{completed_step}'")
        if completed_step not in completed_steps:
            completed_steps.append(completed_step)

    previous = RegistrationStatus(process.status)
    status = derive_registration_status(previous, len(completed_steps), process.total_steps)

    process.completed_steps = completed_steps
    process.current_step = new_step
    process.status = status.value
    process.updated_at = _utc_now()
    _commit(db, process)

    if status != previous:
        logger.info(f"Registration process {process_id}: {previous.value} -> {status.value}")
    else:
        logger.info(
            f"Registration process {process_id} at step {new_step}/{process.total_steps} "
            f"({len(completed_steps)} completed)"
        )
    return process


def verify_registration_process(
    db: Session,
    process_id: int,
    admin_id: int,
    approved: bool,
    rejection_reason: Optional[str] = None
) -> RegistrationProcess:
    """
    Record the administrator's final decision

    Approval also marks the owning user as verified, in the same transaction.

    Raises:
        NotFoundError: Unknown process
        ConflictError: Concurrent modification
    """
    process = get_registration_process(db, process_id, lock=True)

    previous = RegistrationStatus(process.status)
    if previous != RegistrationStatus.PENDING_VERIFICATION:
        logger.warning(f"Registration process {process_id} finalized from status '{previous.value}'")

    now = _utc_now()
    if approved:
        process.status = RegistrationStatus.VERIFIED.value
        process.rejection_reason = None
        user = db.query(User).filter(User.id == process.user_id).first()
        if user:
            user.is_verified = True
    else:
        process.status = RegistrationStatus.REJECTED.value
        process.rejection_reason = rejection_reason or None

    process.verification_date = now
    process.verified_by = admin_id
    process.updated_at = now
    _commit(db, process)

    logger.info(f"Registration process {process_id} {process.status} by admin {admin_id}")
    return process
