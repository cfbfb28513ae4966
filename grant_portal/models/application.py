"""
Application model
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from grant_portal.database import Base


class Application(Base):
    """Grant application model"""
    __tablename__ = "applications"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    applicant_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    program_id = Column(Integer, ForeignKey("programs.id"), nullable=False, index=True)
    status = Column(String(20), nullable=False, default="draft", index=True)
    auto_code = Column(String(20), unique=True, index=True)  # NNNN/MM/YYYY

    # Application content
    summary = Column(String(500), nullable=False)
    requested_amount = Column(Integer)
    project_duration = Column(Integer)  # months
    organization = Column(String(200))
    description = Column(Text)

    # Meta
    submitted_at = Column(DateTime(timezone=True))
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    applicant = relationship("User", back_populates="applications")
    program = relationship("Program", back_populates="applications")
    evaluations = relationship("Evaluation", back_populates="application")
    documents = relationship("ApplicationDocument", back_populates="application")
    messages = relationship("Message", back_populates="application")
