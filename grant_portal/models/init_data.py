"""
Initialize database with default data
"""
import logging

from sqlalchemy.orm import Session

from grant_portal.config import settings
from grant_portal.domain import APPLICANT_TYPES, VERIFICATION_REQUIREMENTS, UserRole
from grant_portal.models.applicant_type import ApplicantType
from grant_portal.models.program import Program
from grant_portal.models.scheduled_job import ScheduledJob
from grant_portal.models.user import User
from grant_portal.services.auth import get_password_hash

logger = logging.getLogger(__name__)


def seed_applicant_types(db: Session) -> int:
    """Create missing applicant types from the domain registry"""
    created = 0
    for config in APPLICANT_TYPES.values():
        existing = db.query(ApplicantType).filter(ApplicantType.name == config.name.value).first()
        if existing:
            continue

        requirements = {
            doc.value: list(VERIFICATION_REQUIREMENTS.get(doc, ()))
            for doc in config.required_documents
        }
        db.add(ApplicantType(
            name=config.name.value,
            description=config.description,
            required_documents=[doc.value for doc in config.required_documents],
            registration_steps=[step.value for step in config.registration_steps],
            verification_requirements=requirements,
        ))
        created += 1
    return created


def init_default_data(db: Session):
    """Initialize database with default data"""

    # Default administrator
    admin_user = db.query(User).filter(User.username == settings.default_admin_username).first()
    if not admin_user:
        db.add(User(
            username=settings.default_admin_username,
            full_name="System Administrator",
            email=settings.default_admin_email,
            password_hash=get_password_hash(settings.default_admin_password),
            role=UserRole.ADMINISTRATOR.value,
            is_verified=True,
            is_active=True,
        ))
        print(f"✅ Default admin user created (username: {settings.default_admin_username})")

    created_types = seed_applicant_types(db)
    if created_types:
        print(f"✅ {created_types} applicant types created")

    # Programs
    programs_data = [
        {"name": "Korporativno sponzorstvo", "type": "sponzorstvo", "budget_total": 100000, "year": 2025,
         "description": "Program korporativnog sponzorstva za 2025. godinu",
         "eligible_applicant_types": ["organization", "corporation"]},
        {"name": "Lokalno sponzorstvo", "type": "sponzorstvo", "budget_total": 50000, "year": 2025,
         "description": "Program lokalnog sponzorstva za 2025. godinu",
         "eligible_applicant_types": []},
        {"name": "Humanitarne donacije", "type": "donacija", "budget_total": 75000, "year": 2025,
         "description": "Program humanitarnih donacija za 2025. godinu",
         "eligible_applicant_types": ["individual", "organization"]},
    ]
    if db.query(Program).count() == 0:
        for program_data in programs_data:
            db.add(Program(**program_data))
        print(f"✅ {len(programs_data)} programs created")

    # Scheduled jobs (inactive until an administrator enables them)
    jobs_data = [
        {"job_type": "document_verification", "name": "Automated document verification",
         "description": "Runs the document verifier on uploads that were not verified yet",
         "cron_expression": "*/30 * * * *"},
        {"job_type": "application_scoring", "name": "Application scoring",
         "description": "Stores a rubric recommendation for submitted applications without one",
         "cron_expression": "0 2 * * *"},
    ]
    for job_data in jobs_data:
        if not db.query(ScheduledJob).filter(ScheduledJob.job_type == job_data["job_type"]).first():
            db.add(ScheduledJob(is_active=False, **job_data))

    db.commit()
    logger.info("Database initialization completed")
