"""
Applicant types router
"""
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from grant_portal.database import get_db
from grant_portal.models.applicant_type import ApplicantType
from grant_portal.schemas.registration import (
    ApplicantTypeResponse, EmailValidationRequest, EmailValidationResponse
)
from grant_portal.services.email_admission import validate_email_for_applicant_type

router = APIRouter(tags=["Applicant Types"])


@router.get("/applicant-types", response_model=List[ApplicantTypeResponse])
async def list_applicant_types(db: Session = Depends(get_db)):
    """
    List applicant types with their required documents and steps
    """
    return db.query(ApplicantType).order_by(ApplicantType.id).all()


@router.get("/applicant-types/{applicant_type_id}", response_model=ApplicantTypeResponse)
async def get_applicant_type(
    applicant_type_id: int,
    db: Session = Depends(get_db)
):
    applicant_type = db.query(ApplicantType).filter(ApplicantType.id == applicant_type_id).first()
    if not applicant_type:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Applicant type not found"
        )
    return applicant_type


@router.post("/validate-email", response_model=EmailValidationResponse)
async def validate_email(
    request: EmailValidationRequest,
    db: Session = Depends(get_db)
):
    """
    Check an email against the admission rule of an applicant type

    200 when the email is accepted, 400 with the reason otherwise
    """
    applicant_type = db.query(ApplicantType).filter(ApplicantType.id == request.applicant_type_id).first()
    if not applicant_type:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Applicant type not found"
        )

    result = validate_email_for_applicant_type(request.email, applicant_type.name)
    response = EmailValidationResponse(valid=result.valid, message=result.message)
    if not result.valid:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=response.model_dump())
    return response
