"""
Scheduled Jobs router
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from datetime import datetime, timezone
from apscheduler.triggers.cron import CronTrigger
from grant_portal.database import get_db
from grant_portal.errors import GrantPortalError
from grant_portal.models.scheduled_job import ScheduledJob
from grant_portal.models.user import User
from grant_portal.services.auth import get_current_active_admin
from grant_portal.services.scheduler import JOB_FUNCTIONS, job_scheduler
from pydantic import BaseModel


class ScheduledJobResponse(BaseModel):
    id: int
    job_type: str
    name: str
    description: Optional[str]
    cron_expression: Optional[str]
    is_active: bool
    last_run_at: Optional[datetime]
    last_run_status: Optional[str]
    last_run_message: Optional[str]
    last_run_result: Optional[dict]
    next_run_at: Optional[datetime]
    total_runs: int
    successful_runs: int
    failed_runs: int

    class Config:
        from_attributes = True


class ScheduledJobUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    cron_expression: Optional[str] = None
    is_active: Optional[bool] = None


router = APIRouter(prefix="/scheduled-jobs", tags=["Scheduled Jobs"])


def get_job_or_404(db: Session, job_id: int) -> ScheduledJob:
    job = db.query(ScheduledJob).filter(ScheduledJob.id == job_id).first()
    if not job:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Scheduled job not found"
        )
    return job


@router.get("", response_model=List[ScheduledJobResponse])
async def list_scheduled_jobs(
    current_user: User = Depends(get_current_active_admin),
    db: Session = Depends(get_db)
):
    """
    List all scheduled jobs (Admin only)
    """
    return db.query(ScheduledJob).order_by(ScheduledJob.job_type).all()


@router.get("/{job_id}", response_model=ScheduledJobResponse)
async def get_scheduled_job(
    job_id: int,
    current_user: User = Depends(get_current_active_admin),
    db: Session = Depends(get_db)
):
    """
    Get scheduled job details (Admin only)
    """
    return get_job_or_404(db, job_id)


@router.put("/{job_id}", response_model=ScheduledJobResponse)
async def update_scheduled_job(
    job_id: int,
    job_data: ScheduledJobUpdate,
    current_user: User = Depends(get_current_active_admin),
    db: Session = Depends(get_db)
):
    """
    Update scheduled job (Admin only)
    """
    job = get_job_or_404(db, job_id)
    update_data = job_data.model_dump(exclude_unset=True)

    if update_data.get("cron_expression"):
        try:
            CronTrigger.from_crontab(update_data["cron_expression"])
        except ValueError as e:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Invalid cron expression: {e}"
            )

    # Store previous active state
    was_active = job.is_active

    for field, value in update_data.items():
        setattr(job, field, value)

    job.updated_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(job)

    # Update scheduler
    if job.is_active and (not was_active or 'cron_expression' in update_data):
        job_scheduler.schedule_job(job)
    elif not job.is_active and was_active:
        job_scheduler.unschedule_job(job.job_type)

    return job


@router.post("/{job_id}/run")
async def run_scheduled_job_now(
    job_id: int,
    current_user: User = Depends(get_current_active_admin),
    db: Session = Depends(get_db)
):
    """
    Manually trigger a scheduled job to run immediately (Admin only)
    """
    job = get_job_or_404(db, job_id)

    job_func = JOB_FUNCTIONS.get(job.job_type)
    if not job_func:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown job type: {job.job_type}"
        )

    job.last_run_status = 'running'
    job.last_run_at = datetime.now(timezone.utc)
    job.total_runs = (job.total_runs or 0) + 1
    db.commit()

    try:
        result_data = job_func(db)
    except GrantPortalError as e:
        db.rollback()
        job.last_run_status = 'failed'
        job.last_run_message = e.message[:500]
        job.failed_runs = (job.failed_runs or 0) + 1
        db.commit()
        raise

    job.last_run_status = 'success'
    job.last_run_result = result_data
    job.last_run_message = (
        f"Processed {result_data['processed']} of {result_data['total_count']}, "
        f"{result_data['failed']} failed"
    )
    job.successful_runs = (job.successful_runs or 0) + 1
    db.commit()

    return {
        "message": f"Job '{job.name}' executed successfully",
        "result": result_data,
        "status": job.last_run_status,
        "details": job.last_run_message
    }
