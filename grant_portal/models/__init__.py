"""
Database models
"""
from grant_portal.models.user import User
from grant_portal.models.applicant_type import ApplicantType
from grant_portal.models.registration_process import RegistrationProcess
from grant_portal.models.verification_document import VerificationDocument
from grant_portal.models.program import Program
from grant_portal.models.application import Application
from grant_portal.models.evaluation import Evaluation
from grant_portal.models.application_document import ApplicationDocument
from grant_portal.models.message import Message
from grant_portal.models.scheduled_job import ScheduledJob

__all__ = [
    "User",
    "ApplicantType",
    "RegistrationProcess",
    "VerificationDocument",
    "Program",
    "Application",
    "Evaluation",
    "ApplicationDocument",
    "Message",
    "ScheduledJob",
]
