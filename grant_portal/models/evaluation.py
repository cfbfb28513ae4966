"""
Evaluation model
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from grant_portal.database import Base


class Evaluation(Base):
    """Evaluation of an application by a reviewer or by the scoring rubric"""
    __tablename__ = "evaluations"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    application_id = Column(Integer, ForeignKey("applications.id"), nullable=False, index=True)
    evaluated_by = Column(Integer, ForeignKey("users.id"))  # NULL for AI
    evaluator_type = Column(String(10), nullable=False)  # 'AI' or 'USER'
    score = Column(Integer)
    decision = Column(String(20))  # preporučeno, odbijeno, revisit
    comment = Column(Text)
    insights = Column(JSON)  # {"strengths": [...], "weaknesses": [...], "recommendation": "..."}
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    application = relationship("Application", back_populates="evaluations")
    evaluator = relationship("User", foreign_keys=[evaluated_by])
