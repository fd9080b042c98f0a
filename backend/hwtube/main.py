"""FastAPI application entry point."""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from hwtube.config import settings
from hwtube.database import Base, engine
from hwtube.errors import ConflictError, ForbiddenError, NotFoundError, ServiceError, ValidationError

# Import routers
from hwtube.routers import invitations, networks, users, videos

# Import all models so Base.metadata knows about them
from hwtube.models.user import User                            # noqa: F401
from hwtube.models.network import Network, NetworkMembership   # noqa: F401
from hwtube.models.invitation import NetworkInvitation         # noqa: F401
from hwtube.models.application import NetworkApplication       # noqa: F401
from hwtube.models.video import Video                          # noqa: F401

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Engine errors carry no HTTP knowledge; this is the only place kinds become codes.
ERROR_STATUS_CODES = {
    ValidationError: 400,
    NotFoundError: 404,
    ForbiddenError: 403,
    ConflictError: 409,
}

app = FastAPI(
    title="Hello World! Tube",
    description="Video sharing with creator Networks: owners, members, invitations and applications",
    version="0.1.0",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(users.router, prefix="/api")
app.include_router(networks.router, prefix="/api")
app.include_router(invitations.router, prefix="/api")
app.include_router(videos.router, prefix="/api")


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    return JSONResponse(status_code=ERROR_STATUS_CODES.get(type(exc), 500), content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    fields = [
        {
            "field": ".".join(str(part) for part in error["loc"] if part != "body"),
            "message": error["msg"],
        }
        for error in exc.errors()
    ]
    detail = f"{fields[0]['field']}: {fields[0]['message']}" if fields else "Invalid request"
    return JSONResponse(
        status_code=400,
        content=ValidationError(detail, fields=fields).to_dict(),
    )


@app.on_event("startup")
def on_startup():
    """Create database tables on startup (for SQLite dev mode)."""
    if settings.DATABASE_URL.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)


@app.get("/api/health")
def health_check():
    return {"status": "ok"}
