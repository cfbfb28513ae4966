"""
Applications management router
"""
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from grant_portal.database import get_db
from grant_portal.domain import ApplicationStatus, UserRole
from grant_portal.errors import ConflictError
from grant_portal.models.application import Application
from grant_portal.models.user import User
from grant_portal.schemas.application import (
    ApplicationCreate, ApplicationUpdate, ApplicationResponse,
    ApplicationDocumentCreate, ApplicationDocumentResponse
)
from grant_portal.schemas.evaluation import (
    EvaluationCreate, EvaluationResponse, EvaluationResultResponse
)
from grant_portal.schemas.message import MessageCreate, MessageResponse
from grant_portal.services.auth import get_current_user, get_current_staff, is_staff
from grant_portal.services.applications import (
    add_application_document, create_application, evaluate_application, get_application,
    list_application_documents, list_evaluations, record_evaluation, submit_application
)
from grant_portal.services.messages import list_application_messages, send_message

router = APIRouter(prefix="/applications", tags=["Applications"])


def to_application_response(application: Application) -> ApplicationResponse:
    app_data = ApplicationResponse.model_validate(application)
    if application.program:
        app_data.program_name = application.program.name
    if application.applicant:
        app_data.applicant_name = application.applicant.full_name
    return app_data


def check_application_access(application: Application, user: User):
    if application.applicant_id != user.id and not is_staff(user):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="No permission to view this application"
        )


@router.get("", response_model=List[ApplicationResponse])
async def list_applications(
    program_id: int = None,
    status_filter: str = None,
    skip: int = 0,
    limit: int = 50,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    List applications

    Staff see every application, applicants only their own
    """
    query = db.query(Application)
    if not is_staff(current_user):
        query = query.filter(Application.applicant_id == current_user.id)
    if program_id:
        query = query.filter(Application.program_id == program_id)
    if status_filter:
        query = query.filter(Application.status == status_filter)

    applications = query.order_by(Application.id.desc()).offset(skip).limit(limit).all()
    return [to_application_response(application) for application in applications]


@router.post("", response_model=ApplicationResponse, status_code=status.HTTP_201_CREATED)
async def create(
    data: ApplicationCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Create a draft application (applicants only)
    """
    if current_user.role != UserRole.APPLICANT.value:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only applicants can create applications"
        )
    application = create_application(db, current_user, **data.model_dump())
    return to_application_response(application)


@router.get("/{application_id}", response_model=ApplicationResponse)
async def get_application_detail(
    application_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    application = get_application(db, application_id)
    check_application_access(application, current_user)
    return to_application_response(application)


@router.patch("/{application_id}", response_model=ApplicationResponse)
async def update_application(
    application_id: int,
    update_data: ApplicationUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Update an application

    The applicant may edit a draft; administrators may edit any application
    and set its status.
    """
    application = get_application(db, application_id)
    is_admin = current_user.role == UserRole.ADMINISTRATOR.value
    update_dict = update_data.model_dump(exclude_unset=True)

    if not is_admin:
        if application.applicant_id != current_user.id:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="No permission to update this application"
            )
        if "status" in update_dict:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Only administrators can change the status"
            )
        if application.status != ApplicationStatus.DRAFT.value:
            raise ConflictError(f"Application {application.auto_code} can no longer be edited")

    if "status" in update_dict:
        update_dict["status"] = ApplicationStatus(update_dict["status"]).value

    for field, value in update_dict.items():
        setattr(application, field, value)

    db.commit()
    db.refresh(application)
    return to_application_response(application)


@router.post("/{application_id}/submit", response_model=ApplicationResponse)
async def submit(
    application_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    application = submit_application(db, application_id, current_user)
    return to_application_response(application)


@router.post("/{application_id}/ai-evaluation", response_model=EvaluationResultResponse)
async def ai_evaluation(
    application_id: int,
    persist: bool = False,
    current_user: User = Depends(get_current_staff),
    db: Session = Depends(get_db)
):
    """
    Score an application with the rubric (reviewers and admins)

    With persist=true the recommendation is stored as an AI evaluation
    """
    result, evaluation = evaluate_application(db, application_id, persist=persist)
    data = result.to_dict()
    return EvaluationResultResponse(
        evaluation_id=evaluation.id if evaluation else None,
        **data
    )


@router.get("/{application_id}/evaluations", response_model=List[EvaluationResponse])
async def get_application_evaluations(
    application_id: int,
    current_user: User = Depends(get_current_staff),
    db: Session = Depends(get_db)
):
    """
    All evaluations of an application, newest first
    """
    result = []
    for evaluation in list_evaluations(db, application_id):
        eval_data = EvaluationResponse.model_validate(evaluation)
        if evaluation.evaluator:
            eval_data.evaluator_name = evaluation.evaluator.full_name
        result.append(eval_data)
    return result


@router.post(
    "/{application_id}/evaluations",
    response_model=EvaluationResponse,
    status_code=status.HTTP_201_CREATED
)
async def submit_evaluation(
    application_id: int,
    data: EvaluationCreate,
    current_user: User = Depends(get_current_staff),
    db: Session = Depends(get_db)
):
    """
    Submit a reviewer evaluation

    preporučeno and odbijeno also set the application status
    """
    evaluation = record_evaluation(
        db, application_id, current_user, data.decision, data.comment, data.score
    )
    eval_data = EvaluationResponse.model_validate(evaluation)
    eval_data.evaluator_name = current_user.full_name
    return eval_data


@router.get("/{application_id}/documents", response_model=List[ApplicationDocumentResponse])
async def get_application_documents(
    application_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return list_application_documents(db, application_id, current_user)


@router.post(
    "/{application_id}/documents",
    response_model=ApplicationDocumentResponse,
    status_code=status.HTTP_201_CREATED
)
async def attach_document(
    application_id: int,
    data: ApplicationDocumentCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Attach an uploaded file to an application (applicant, reviewers, admins)
    """
    return add_application_document(db, application_id, current_user, **data.model_dump())


def to_message_response(message) -> MessageResponse:
    message_data = MessageResponse.model_validate(message)
    if message.sender:
        message_data.sender_name = message.sender.full_name
    return message_data


@router.get("/{application_id}/messages", response_model=List[MessageResponse])
async def get_application_messages(
    application_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Conversation about an application, oldest first
    """
    return [to_message_response(m) for m in list_application_messages(db, application_id, current_user)]


@router.post(
    "/{application_id}/messages",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED
)
async def post_message(
    application_id: int,
    data: MessageCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    message = send_message(db, application_id, current_user, data.receiver_id, data.content)
    return to_message_response(message)
