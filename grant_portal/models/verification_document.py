"""
Verification document model
"""
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from grant_portal.database import Base


class VerificationDocument(Base):
    """Uploaded eligibility document"""
    __tablename__ = "verification_documents"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    registration_process_id = Column(Integer, ForeignKey("registration_processes.id"), nullable=False, index=True)
    document_type = Column(String(50), nullable=False, index=True)
    file_path = Column(String(500), nullable=False)
    verification_status = Column(String(30), nullable=False, default="pending")

    # Automated verification
    ai_verified = Column(Boolean, default=False, nullable=False)
    ai_verification_score = Column(Integer)
    ai_verification_result = Column(JSON)
    extracted_fields = Column(JSON, default=dict)
    issues = Column(JSON)

    # Manual review
    reviewed_by = Column(Integer, ForeignKey("users.id"))
    review_comment = Column(Text)

    version = Column(Integer, nullable=False)
    uploaded_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    __mapper_args__ = {"version_id_col": version}

    # Relationships
    registration_process = relationship("RegistrationProcess", back_populates="documents")
