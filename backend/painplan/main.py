"""
Wound Pain Management - Clinical Decision Support API
Turns a pain assessment and comorbidity profile into an analgesic and
monitoring plan with safety alerts. Stateless: no patient data is stored.
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import pain_plans
from .core.audit_middleware import AuditMiddleware
from .core.config import settings, setup_logging

setup_logging(settings.LOG_LEVEL)

app = FastAPI(
    title=settings.APP_NAME,
    description=(
        "Comorbidity risk flagging, WHO-ladder analgesic recommendations, "
        "procedural pain planning, monitoring plans and red-flag alerts."
    ),
    version=settings.VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

if settings.AUDIT_LOG_ENABLED:
    app.add_middleware(AuditMiddleware)

app.include_router(pain_plans.router, prefix="/api/v1")


@app.get("/health")
def health_check():
    return {"status": "healthy", "service": settings.APP_NAME, "version": settings.VERSION}
