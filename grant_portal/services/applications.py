"""
Grant application lifecycle and evaluations
"""
import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.orm import Session

from grant_portal.domain import ApplicationStatus, Decision, EvaluatorType, UserRole
from grant_portal.errors import ConflictError, ForbiddenError, NotFoundError, ValidationError
from grant_portal.models.applicant_type import ApplicantType
from grant_portal.models.application import Application
from grant_portal.models.application_document import ApplicationDocument
from grant_portal.models.evaluation import Evaluation
from grant_portal.models.program import Program
from grant_portal.models.user import User
from grant_portal.services.application_scorer import EvaluationResult, score_application

logger = logging.getLogger(__name__)

# Decisions that move the application status along
DECISION_STATUS = {
    Decision.RECOMMENDED: ApplicationStatus.RECOMMENDED,
    Decision.REJECTED: ApplicationStatus.REJECTED,
}

# Roles that may follow any application besides its applicant
PARTICIPANT_ROLES = (UserRole.ADMINISTRATOR.value, UserRole.REVIEWER.value, UserRole.DONOR.value)
DOCUMENT_EDITOR_ROLES = (UserRole.ADMINISTRATOR.value, UserRole.REVIEWER.value)


def format_auto_code(application_id: int, created: datetime) -> str:
    """NNNN/MM/YYYY"""
    return f"{application_id:04d}/{created.month:02d}/{created.year}"


def get_application(db: Session, application_id: int) -> Application:
    application = db.query(Application).filter(Application.id == application_id).first()
    if not application:
        raise NotFoundError(f"Application {application_id} not found")
    return application


def get_program(db: Session, program_id: int) -> Program:
    program = db.query(Program).filter(Program.id == program_id).first()
    if not program:
        raise NotFoundError(f"Program {program_id} not found")
    return program


def _applicant_type_name(db: Session, applicant: User) -> Optional[str]:
    if not applicant.applicant_type_id:
        return None
    applicant_type = db.query(ApplicantType).filter(ApplicantType.id == applicant.applicant_type_id).first()
    return applicant_type.name if applicant_type else None


def create_application(
    db: Session,
    applicant: User,
    program_id: int,
    summary: str,
    requested_amount: Optional[int] = None,
    project_duration: Optional[int] = None,
    organization: Optional[str] = None,
    description: Optional[str] = None
) -> Application:
    """
    Create a draft application

    Raises:
        NotFoundError: Unknown program
        ValidationError: Program inactive or closed to the applicant's type
    """
    program = get_program(db, program_id)
    if not program.active:
        raise ValidationError(f"Program '{program.name}' is not accepting applications")

    eligible = program.eligible_applicant_types or []
    if eligible:
        type_name = _applicant_type_name(db, applicant)
        if type_name not in eligible:
            raise ValidationError(
                f"Program '{program.name}' is open to {', '.join(eligible)} applicants only"
            )

    now = datetime.now(timezone.utc)
    application = Application(
        applicant_id=applicant.id,
        program_id=program.id,
        status=ApplicationStatus.DRAFT.value,
        summary=summary,
        requested_amount=requested_amount,
        project_duration=project_duration,
        organization=organization,
        description=description,
        created_at=now,
    )
    db.add(application)
    db.flush()
    application.auto_code = format_auto_code(application.id, now)
    db.commit()
    db.refresh(application)

    logger.info(f"Application {application.auto_code} created by user {applicant.id} for program {program.id}")
    return application


def submit_application(db: Session, application_id: int, user: User) -> Application:
    """
    Submit a draft application

    Raises:
        NotFoundError: Unknown application
        ForbiddenError: User is not the applicant
        ConflictError: Application is not a draft
    """
    application = get_application(db, application_id)
    if application.applicant_id != user.id:
        raise ForbiddenError("Only the applicant can submit this application")
    if application.status != ApplicationStatus.DRAFT.value:
        raise ConflictError(f"Application {application.auto_code} is already '{application.status}'")

    application.status = ApplicationStatus.SUBMITTED.value
    application.submitted_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(application)

    logger.info(f"Application {application.auto_code} submitted")
    return application


def evaluate_application(db: Session, application_id: int, persist: bool = False):
    """
    Score an application with the rubric

    Returns:
        (EvaluationResult, Evaluation or None) - the Evaluation row only when persist is set
    """
    application = get_application(db, application_id)
    program = get_program(db, application.program_id)
    applicant = db.query(User).filter(User.id == application.applicant_id).first()

    result: EvaluationResult = score_application(application, program, applicant)
    logger.info(
        f"Application {application.auto_code} scored {result.score} ({result.decision.value})"
    )

    evaluation = None
    if persist:
        evaluation = Evaluation(
            application_id=application.id,
            evaluated_by=None,
            evaluator_type=EvaluatorType.AI.value,
            score=result.score,
            decision=result.decision.value,
            comment=result.comment,
            insights=result.to_dict()["insights"],
        )
        db.add(evaluation)
        db.commit()
        db.refresh(evaluation)

    return result, evaluation


def record_evaluation(
    db: Session,
    application_id: int,
    evaluator: User,
    decision: str,
    comment: str,
    score: Optional[int] = None
) -> Evaluation:
    """
    Store a reviewer's evaluation

    preporučeno and odbijeno move the application to the same status,
    revisit leaves the status untouched.
    """
    decision = Decision(decision)
    application = get_application(db, application_id)

    evaluation = Evaluation(
        application_id=application.id,
        evaluated_by=evaluator.id,
        evaluator_type=EvaluatorType.USER.value,
        score=score,
        decision=decision.value,
        comment=comment,
    )
    db.add(evaluation)

    new_status = DECISION_STATUS.get(decision)
    if new_status is not None:
        application.status = new_status.value

    db.commit()
    db.refresh(evaluation)

    logger.info(f"Application {application.auto_code} evaluated by user {evaluator.id}: {decision.value}")
    return evaluation


def list_evaluations(db: Session, application_id: int) -> List[Evaluation]:
    get_application(db, application_id)
    return (
        db.query(Evaluation)
        .filter(Evaluation.application_id == application_id)
        .order_by(Evaluation.created_at.desc(), Evaluation.id.desc())
        .all()
    )


def is_participant(application: Application, user: User) -> bool:
    """Applicant, or a user whose role follows every application"""
    return application.applicant_id == user.id or user.role in PARTICIPANT_ROLES


def add_application_document(
    db: Session,
    application_id: int,
    user: User,
    file_name: str,
    file_type: str,
    file_path: str
) -> ApplicationDocument:
    """
    Record a file attached to an application

    Raises:
        NotFoundError: Unknown application
        ForbiddenError: User is neither the applicant nor a reviewer/administrator
    """
    application = get_application(db, application_id)
    if application.applicant_id != user.id and user.role not in DOCUMENT_EDITOR_ROLES:
        raise ForbiddenError("Only the applicant or portal staff can attach documents")

    document = ApplicationDocument(
        application_id=application.id,
        file_name=file_name,
        file_type=file_type,
        file_path=file_path,
        uploaded_by=user.id,
    )
    db.add(document)
    db.commit()
    db.refresh(document)

    logger.info(f"Document '{file_name}' attached to application {application.auto_code} by user {user.id}")
    return document


def list_application_documents(db: Session, application_id: int, user: User) -> List[ApplicationDocument]:
    application = get_application(db, application_id)
    if not is_participant(application, user):
        raise ForbiddenError("No permission to view documents of this application")
    return (
        db.query(ApplicationDocument)
        .filter(ApplicationDocument.application_id == application_id)
        .order_by(ApplicationDocument.id)
        .all()
    )
