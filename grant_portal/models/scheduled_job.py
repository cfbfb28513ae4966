"""
Scheduled Job model for cron jobs
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, JSON
from sqlalchemy.sql import func
from grant_portal.database import Base


class ScheduledJob(Base):
    """Cron-driven batch job (document verification, application scoring)"""
    __tablename__ = "scheduled_jobs"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    job_type = Column(String(50), unique=True, nullable=False, index=True)  # 'document_verification', 'application_scoring'
    name = Column(String(200), nullable=False)
    description = Column(Text)

    cron_expression = Column(String(100))  # e.g. "*/30 * * * *"
    is_active = Column(Boolean, default=False, index=True)

    # Last execution
    last_run_at = Column(DateTime(timezone=True))
    last_run_status = Column(String(20))  # 'success', 'failed', 'running'
    last_run_message = Column(Text)
    last_run_result = Column(JSON)  # {"processed": 3, "failed": 0}
    next_run_at = Column(DateTime(timezone=True))

    total_runs = Column(Integer, default=0)
    successful_runs = Column(Integer, default=0)
    failed_runs = Column(Integer, default=0)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
