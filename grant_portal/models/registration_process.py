"""
Registration process model
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from grant_portal.database import Base


class RegistrationProcess(Base):
    """Registration process model"""
    __tablename__ = "registration_processes"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    applicant_type_id = Column(Integer, ForeignKey("applicant_types.id"), nullable=False)
    status = Column(String(30), nullable=False, default="incomplete", index=True)

    # Snapshot of the registry at creation
    current_step = Column(Integer, nullable=False, default=1)
    total_steps = Column(Integer, nullable=False)
    step_names = Column(JSON, default=list)
    completed_steps = Column(JSON, default=list)  # distinct step names

    # Administrator decision
    verification_date = Column(DateTime(timezone=True))
    verified_by = Column(Integer, ForeignKey("users.id"))
    rejection_reason = Column(Text)

    version = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())

    __mapper_args__ = {"version_id_col": version}

    # Relationships
    user = relationship("User", back_populates="registration_processes", foreign_keys=[user_id])
    applicant_type = relationship("ApplicantType")
    documents = relationship(
        "VerificationDocument",
        back_populates="registration_process",
        order_by="VerificationDocument.id"
    )
