"""
Generate demo data for local testing
"""
from datetime import datetime
from sqlalchemy.orm import Session

from grant_portal.domain import ApplicantTypeName, UserRole
from grant_portal.models.applicant_type import ApplicantType
from grant_portal.models.application import Application
from grant_portal.models.evaluation import Evaluation
from grant_portal.models.program import Program
from grant_portal.models.user import User
from grant_portal.services.auth import get_password_hash


def generate_dummy_data(db: Session):
    """Generate demo applicants, a reviewer and sample applications"""
    print("🔄 Generating demo data...")

    existing_apps = db.query(Application).count()
    if existing_apps > 0:
        print(f"⚠️  Demo data already exists ({existing_apps} applications). Skipping...")
        return

    programs = db.query(Program).order_by(Program.id).all()
    if len(programs) < 3:
        print("⚠️  Default programs missing, run init_default_data first. Skipping...")
        return

    type_ids = {t.name: t.id for t in db.query(ApplicantType).all()}
    password_hash = get_password_hash("password123")

    users_data = [
        {"username": "kulturni_centar", "full_name": "Kulturni centar", "email": "info@kulturnicentar.ba",
         "role": UserRole.APPLICANT.value, "applicant_type": ApplicantTypeName.ORGANIZATION.value},
        {"username": "amra", "full_name": "Amra Hodžić", "email": "amra@gmail.com",
         "role": UserRole.APPLICANT.value, "applicant_type": ApplicantTypeName.INDIVIDUAL.value},
        {"username": "referent", "full_name": "Referent Programa", "email": "referent@grantportal.ba",
         "role": UserRole.REVIEWER.value, "applicant_type": None},
        {"username": "don_corp", "full_name": "Don Korporativni", "email": "don@corporate.com",
         "role": UserRole.DONOR.value, "applicant_type": None},
    ]

    users = {}
    for data in users_data:
        applicant_type = data.pop("applicant_type")
        user = db.query(User).filter(User.username == data["username"]).first()
        if not user:
            user = User(
                password_hash=password_hash,
                applicant_type_id=type_ids.get(applicant_type) if applicant_type else None,
                is_verified=True,
                **data
            )
            db.add(user)
        users[data["username"]] = user
    db.flush()
    print(f"✅ Created {len(users)} demo users")

    applications_data = [
        {"applicant": "kulturni_centar", "program": programs[2], "status": "u obradi",
         "submitted_at": datetime(2025, 3, 25, 13, 20), "auto_code": "0001/03/2025",
         "summary": "Donacija za dječije pozorište", "requested_amount": 5000, "project_duration": 6,
         "organization": "Kulturni centar",
         "description": "Projekt dječijeg pozorišta za promociju kulturnih vrijednosti"},
        {"applicant": "kulturni_centar", "program": programs[0], "status": "odbijeno",
         "submitted_at": datetime(2025, 3, 20, 10, 10), "auto_code": "0002/03/2025",
         "summary": "Sponzorstvo za koncert \"Zvuk Mira\"", "requested_amount": 3000, "project_duration": 2,
         "organization": "Muzički kolektiv",
         "description": "Koncert klasične muzike s temom mira i pomirenja"},
        {"applicant": "amra", "program": programs[1], "status": "odobreno",
         "submitted_at": datetime(2025, 3, 15, 9, 30), "auto_code": "0003/04/2025",
         "summary": "Podrška lokalnom umjetničkom festivalu", "requested_amount": 8000, "project_duration": 12,
         "organization": "Art Centar",
         "description": "Godišnji umjetnički festival s lokalnim umjetnicima"},
    ]

    applications = []
    for data in applications_data:
        applicant = users[data.pop("applicant")]
        program = data.pop("program")
        application = Application(applicant_id=applicant.id, program_id=program.id, **data)
        db.add(application)
        applications.append(application)
    db.flush()

    db.add(Evaluation(
        application_id=applications[0].id,
        evaluated_by=users["referent"].id,
        evaluator_type="USER",
        score=85,
        decision="preporučeno",
        comment="Kompletna dokumentacija, pozitivan utisak",
    ))

    db.commit()
    print(f"✅ Created {len(applications)} applications")
    print("✅ Demo data generation completed!")
