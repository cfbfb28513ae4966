"""
Authentication router
"""
from datetime import timedelta
from fastapi import APIRouter, Depends, HTTPException, status, Response
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session
from grant_portal.database import get_db
from grant_portal.schemas.user import UserRegister, Token, UserResponse
from grant_portal.services.auth import (
    authenticate_user, create_access_token, get_current_user,
    get_password_hash, update_last_login
)
from grant_portal.services.email_admission import validate_email_for_applicant_type
from grant_portal.services.registration import create_registration_process
from grant_portal.config import settings
from grant_portal.domain import UserRole
from grant_portal.models.applicant_type import ApplicantType
from grant_portal.models.user import User

router = APIRouter(prefix="/auth", tags=["Authentication"])


def to_user_response(user: User) -> UserResponse:
    user_data = UserResponse.model_validate(user)
    if user.applicant_type:
        user_data.applicant_type_name = user.applicant_type.name
    return user_data


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserRegister,
    db: Session = Depends(get_db)
):
    """
    Self-registration

    Applicants must pick an applicant type; the email is checked against the
    type's admission rule and a registration process is started.
    """
    applicant_type = None
    if user_data.role == UserRole.APPLICANT.value:
        if not user_data.applicant_type_id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Applicant type is required for applicants"
            )
        applicant_type = db.query(ApplicantType).filter(ApplicantType.id == user_data.applicant_type_id).first()
        if not applicant_type:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Applicant type not found"
            )

        admission = validate_email_for_applicant_type(user_data.email, applicant_type.name)
        if not admission.valid:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=admission.message
            )

    if db.query(User).filter(User.username == user_data.username).first():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Username already exists"
        )
    if db.query(User).filter(User.email == user_data.email).first():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email already registered"
        )

    new_user = User(
        username=user_data.username,
        full_name=user_data.full_name,
        email=user_data.email,
        password_hash=get_password_hash(user_data.password),
        role=user_data.role,
        applicant_type_id=applicant_type.id if applicant_type else None,
        is_verified=False,
        is_active=True,
    )
    db.add(new_user)
    db.commit()
    db.refresh(new_user)

    if applicant_type:
        create_registration_process(db, new_user.id, applicant_type.id)
        db.refresh(new_user)

    return to_user_response(new_user)


@router.post("/login", response_model=Token)
async def login(
    response: Response,
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db)
):
    """
    Login endpoint

    Returns JWT access token and sets it in cookie
    """
    user = authenticate_user(db, form_data.username, form_data.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    # Update last login
    update_last_login(db, user)

    # Create access token
    access_token_expires = timedelta(minutes=settings.access_token_expire_minutes)
    access_token = create_access_token(
        data={"sub": user.username, "role": user.role},
        expires_delta=access_token_expires
    )

    # Set cookie
    response.set_cookie(
        key="access_token",
        value=access_token,
        httponly=True,
        max_age=settings.access_token_expire_minutes * 60,
        samesite="lax"
    )

    return {"access_token": access_token, "token_type": "bearer"}


@router.post("/logout")
async def logout(
    response: Response,
    current_user: User = Depends(get_current_user)
):
    """
    Logout endpoint - clears cookie
    """
    response.delete_cookie(key="access_token")
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    current_user: User = Depends(get_current_user)
):
    """
    Get current user information
    """
    return to_user_response(current_user)
