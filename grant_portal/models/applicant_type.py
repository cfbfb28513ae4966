"""
Applicant type model
"""
from sqlalchemy import Column, Integer, String, Text, JSON
from grant_portal.database import Base


class ApplicantType(Base):
    """Applicant type reference data, seeded from the domain registry"""
    __tablename__ = "applicant_types"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(30), unique=True, nullable=False, index=True)  # individual, organization, corporation
    description = Column(Text)
    required_documents = Column(JSON, default=list)  # ["id_card", ...] in upload order
    registration_steps = Column(JSON, default=list)  # ["account_creation", ...]
    verification_requirements = Column(JSON, default=dict)  # {"id_card": ["full_name", ...]}
