"""
Programs router
"""
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from grant_portal.database import get_db
from grant_portal.domain import ApplicantTypeName
from grant_portal.errors import ValidationError
from grant_portal.models.program import Program
from grant_portal.models.user import User
from grant_portal.schemas.application import ProgramCreate, ProgramResponse
from grant_portal.services.auth import get_current_user, get_current_active_admin
from grant_portal.services.applications import get_program

router = APIRouter(prefix="/programs", tags=["Programs"])


@router.get("", response_model=List[ProgramResponse])
async def list_programs(
    active_only: bool = False,
    year: int = None,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    query = db.query(Program)
    if active_only:
        query = query.filter(Program.active == True)
    if year:
        query = query.filter(Program.year == year)
    return query.order_by(Program.id).all()


@router.get("/{program_id}", response_model=ProgramResponse)
async def get_program_detail(
    program_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return get_program(db, program_id)


@router.post("", response_model=ProgramResponse, status_code=status.HTTP_201_CREATED)
async def create_program(
    program_data: ProgramCreate,
    current_user: User = Depends(get_current_active_admin),
    db: Session = Depends(get_db)
):
    """
    Create program (admin only)
    """
    eligible = []
    for name in program_data.eligible_applicant_types:
        applicant_type = ApplicantTypeName.parse(name)
        if applicant_type is None:
            raise ValidationError(f"Unknown applicant type '{name}'")
        eligible.append(applicant_type.value)

    program = Program(**program_data.model_dump(exclude={"eligible_applicant_types"}))
    program.eligible_applicant_types = eligible
    db.add(program)
    db.commit()
    db.refresh(program)
    return program
