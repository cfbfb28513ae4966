"""
Program model
"""
from sqlalchemy import Column, Integer, String, Text, Boolean, JSON
from sqlalchemy.orm import relationship
from grant_portal.database import Base


class Program(Base):
    """Sponsorship or donation program"""
    __tablename__ = "programs"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    type = Column(String(20), nullable=False)  # sponzorstvo, donacija
    budget_total = Column(Integer, nullable=False, default=0)
    year = Column(Integer, nullable=False)
    description = Column(Text)
    active = Column(Boolean, default=True)
    eligible_applicant_types = Column(JSON, default=list)  # empty = open to every type

    # Relationships
    applications = relationship("Application", back_populates="program")
