"""
FastAPI Main Application
"""
import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from grant_portal.config import settings
from grant_portal.database import init_db
from grant_portal.errors import GrantPortalError
from grant_portal.routers import (
    auth, users, applicant_types, registrations, documents, programs, applications, messages,
    scheduled_jobs
)

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

# Initialize database
init_db()

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    debug=settings.debug
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Exception handlers
@app.exception_handler(GrantPortalError)
async def grant_portal_error_handler(request: Request, exc: GrantPortalError):
    """Typed service errors: 400, 403, 404, 409"""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


# Auth router (no /api prefix)
app.include_router(auth.router)

# API routers (with /api prefix)
app.include_router(applicant_types.router, prefix="/api")
app.include_router(registrations.router, prefix="/api")
app.include_router(documents.router, prefix="/api")
app.include_router(programs.router, prefix="/api")
app.include_router(applications.router, prefix="/api")
app.include_router(messages.router, prefix="/api")
app.include_router(users.router, prefix="/api")
app.include_router(scheduled_jobs.router, prefix="/api")


@app.on_event("startup")
async def startup_event():
    """Startup event"""
    print(f"🚀 {settings.app_name} v{settings.app_version} started")

    # Initialize default data
    from grant_portal.database import SessionLocal
    from grant_portal.models.init_data import init_default_data
    from grant_portal.models.generate_dummy_data import generate_dummy_data

    db = SessionLocal()
    try:
        init_default_data(db)
        if settings.seed_demo_data:
            generate_dummy_data(db)
    finally:
        db.close()

    # Start job scheduler
    if settings.scheduler_enabled:
        from grant_portal.services.scheduler import job_scheduler
        job_scheduler.start()
        print("⏰ Job scheduler started")


@app.on_event("shutdown")
async def shutdown_event():
    """Shutdown event"""
    from grant_portal.services.scheduler import job_scheduler
    job_scheduler.shutdown()
    print("⏰ Job scheduler stopped")


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "version": settings.app_version}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000, reload=settings.debug)
