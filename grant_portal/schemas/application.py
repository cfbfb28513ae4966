"""
Application and program schemas
"""
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime


class ProgramBase(BaseModel):
    """Base program schema"""
    name: str = Field(..., max_length=200)
    type: str = Field(..., pattern="^(sponzorstvo|donacija)$")
    budget_total: int = Field(..., ge=0)
    year: int = Field(..., ge=2000, le=2100)
    description: Optional[str] = None
    active: bool = True
    eligible_applicant_types: List[str] = Field(default_factory=list)


class ProgramCreate(ProgramBase):
    """Schema for creating program"""
    pass


class ProgramResponse(ProgramBase):
    """Schema for program response"""
    id: int

    class Config:
        from_attributes = True


class ApplicationCreate(BaseModel):
    """Schema for creating application"""
    program_id: int
    summary: str = Field(..., min_length=5, max_length=500)
    requested_amount: Optional[int] = Field(None, ge=0)
    project_duration: Optional[int] = Field(None, ge=0)
    organization: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = None


class ApplicationUpdate(BaseModel):
    """Schema for updating application"""
    summary: Optional[str] = Field(None, min_length=5, max_length=500)
    requested_amount: Optional[int] = Field(None, ge=0)
    project_duration: Optional[int] = Field(None, ge=0)
    organization: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = None
    status: Optional[str] = None


class ApplicationResponse(BaseModel):
    """Schema for application response"""
    id: int
    applicant_id: int
    program_id: int
    status: str
    auto_code: Optional[str]
    summary: str
    requested_amount: Optional[int]
    project_duration: Optional[int]
    organization: Optional[str]
    description: Optional[str]
    submitted_at: Optional[datetime]
    created_at: Optional[datetime]

    # Relations
    program_name: Optional[str] = None
    applicant_name: Optional[str] = None

    class Config:
        from_attributes = True


class ApplicationDocumentCreate(BaseModel):
    """Schema for attaching an uploaded file to an application"""
    file_name: str = Field(..., min_length=1, max_length=255)
    file_type: str = Field(..., min_length=1, max_length=100)
    file_path: str = Field(..., min_length=1, max_length=500)


class ApplicationDocumentResponse(BaseModel):
    """Schema for application document response"""
    id: int
    application_id: int
    file_name: str
    file_type: str
    file_path: str
    uploaded_by: int
    uploaded_at: Optional[datetime]

    class Config:
        from_attributes = True
