"""
Job Scheduler Service using APScheduler
"""
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger
from apscheduler.events import EVENT_JOB_EXECUTED, EVENT_JOB_ERROR
from apscheduler.jobstores.base import JobLookupError
from datetime import datetime, timezone
from sqlalchemy.orm import Session
from grant_portal.database import SessionLocal
from grant_portal.domain import ApplicationStatus, DocumentStatus, EvaluatorType
from grant_portal.models.scheduled_job import ScheduledJob
from grant_portal.models.application import Application
from grant_portal.models.evaluation import Evaluation
from grant_portal.models.verification_document import VerificationDocument
from grant_portal.errors import GrantPortalError
from grant_portal.services.applications import evaluate_application
from grant_portal.services.document_review import validate_document_with_ai
import logging

logger = logging.getLogger(__name__)


def run_document_verification(db: Session) -> dict:
    """Verify every pending document that has not been checked yet"""
    documents = db.query(VerificationDocument).filter(
        VerificationDocument.ai_verified == False,
        VerificationDocument.reviewed_by.is_(None),
        VerificationDocument.verification_status == DocumentStatus.PENDING.value
    ).order_by(VerificationDocument.id).all()

    processed = 0
    failed = 0
    for document in documents:
        try:
            validate_document_with_ai(db, document.id)
            processed += 1
        except GrantPortalError as e:
            logger.error(f"Error verifying document {document.id}: {e.message}")
            failed += 1

    logger.info(f"Document verification completed: {processed} verified, {failed} failed")
    return {"total_count": len(documents), "processed": processed, "failed": failed}


def run_application_scoring(db: Session) -> dict:
    """Store an AI evaluation for every submitted application that has none"""
    scored_ids = db.query(Evaluation.application_id).filter(
        Evaluation.evaluator_type == EvaluatorType.AI.value
    )
    applications = db.query(Application).filter(
        Application.status == ApplicationStatus.SUBMITTED.value,
        Application.id.notin_(scored_ids)
    ).order_by(Application.id).all()

    processed = 0
    failed = 0
    for application in applications:
        try:
            evaluate_application(db, application.id, persist=True)
            processed += 1
        except GrantPortalError as e:
            logger.error(f"Error scoring application {application.id}: {e.message}")
            failed += 1

    logger.info(f"Application scoring completed: {processed} scored, {failed} failed")
    return {"total_count": len(applications), "processed": processed, "failed": failed}


JOB_FUNCTIONS = {
    'document_verification': run_document_verification,
    'application_scoring': run_application_scoring,
}


class JobScheduler:
    """Background job scheduler"""

    def __init__(self):
        self.scheduler = BackgroundScheduler()
        self.scheduler.add_listener(self._job_listener, EVENT_JOB_EXECUTED | EVENT_JOB_ERROR)

    def start(self):
        """Start the scheduler"""
        if not self.scheduler.running:
            self.scheduler.start()
            logger.info("Job scheduler started")
            self.load_jobs_from_db()

    def shutdown(self):
        """Shutdown the scheduler"""
        if self.scheduler.running:
            self.scheduler.shutdown()
            logger.info("Job scheduler stopped")

    def load_jobs_from_db(self):
        """Load active jobs from database and schedule them"""
        db = SessionLocal()
        try:
            jobs = db.query(ScheduledJob).filter(ScheduledJob.is_active == True).all()
            for job in jobs:
                self.schedule_job(job)
            logger.info(f"Loaded {len(jobs)} active jobs from database")
        finally:
            db.close()

    def schedule_job(self, job: ScheduledJob):
        """Schedule a job based on its configuration"""
        self.unschedule_job(job.job_type)

        if not job.is_active:
            return

        if job.job_type not in JOB_FUNCTIONS:
            logger.error(f"Unknown job type: {job.job_type}")
            return

        try:
            trigger = CronTrigger.from_crontab(job.cron_expression)
        except ValueError as e:
            logger.error(f"Invalid cron expression for {job.job_type}: {e}")
            return

        if not self.scheduler.running:
            logger.info(f"Scheduler not running, {job.job_type} will be scheduled at startup")
            return

        self.scheduler.add_job(
            self._run_job,
            trigger=trigger,
            args=[job.job_type],
            id=job.job_type,
            name=job.name,
            replace_existing=True
        )

        # Update next run time
        db = SessionLocal()
        try:
            db_job = db.query(ScheduledJob).filter(ScheduledJob.job_type == job.job_type).first()
            scheduled_job = self.scheduler.get_job(job.job_type)
            if db_job and scheduled_job:
                db_job.next_run_at = scheduled_job.next_run_time
                db.commit()
        finally:
            db.close()

        logger.info(f"Scheduled job: {job.name} with cron: {job.cron_expression}")

    def unschedule_job(self, job_type: str):
        """Remove a job from scheduler"""
        try:
            self.scheduler.remove_job(job_type)
            logger.info(f"Unscheduled job: {job_type}")
        except JobLookupError:
            pass

    def _run_job(self, job_type: str):
        """Run a job body in its own session"""
        logger.info(f"Starting scheduled job {job_type}")
        db = SessionLocal()
        try:
            job = db.query(ScheduledJob).filter(ScheduledJob.job_type == job_type).first()
            if job:
                job.last_run_status = 'running'
                job.last_run_at = datetime.now(timezone.utc)
                db.commit()

            result = JOB_FUNCTIONS[job_type](db)

            if job:
                job.last_run_result = result
                db.commit()
            return result
        finally:
            db.close()

    def _job_listener(self, event):
        """Listen to job execution events"""
        db = SessionLocal()
        try:
            job_id = event.job_id
            job = db.query(ScheduledJob).filter(ScheduledJob.job_type == job_id).first()

            if not job:
                return

            job.total_runs = (job.total_runs or 0) + 1

            if event.exception:
                job.last_run_status = 'failed'
                job.last_run_message = str(event.exception)[:500]
                job.failed_runs = (job.failed_runs or 0) + 1
                logger.error(f"Job {job_id} failed: {event.exception}")
            else:
                job.last_run_status = 'success'
                job.last_run_message = 'Job completed successfully'
                job.successful_runs = (job.successful_runs or 0) + 1
                logger.info(f"Job {job_id} completed successfully")

            job.last_run_at = datetime.now(timezone.utc)

            # Update next run time
            scheduled_job = self.scheduler.get_job(job_id)
            if scheduled_job:
                job.next_run_at = scheduled_job.next_run_time

            db.commit()
        finally:
            db.close()


# Global scheduler instance
job_scheduler = JobScheduler()
