import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from quidz.config import settings
from quidz.modules.auth import routes as auth_routes
from quidz.modules.profiles import routes as profiles_routes
from quidz.modules.tasks import routes as tasks_routes
from quidz.modules.absences import routes as absences_routes
from quidz.modules.documents import routes as documents_routes
from quidz.modules.projects import routes as projects_routes
from quidz.modules.skills import routes as skills_routes
from quidz.modules.flashcards import routes as flashcards_routes
from quidz.modules.badges import routes as badges_routes
from quidz.modules.feedback import routes as feedback_routes
from quidz.modules.chat import routes as chat_routes
from quidz.modules.assistant import routes as assistant_routes
from quidz.modules.events import routes as events_routes
from quidz.modules.tools import routes as tools_routes
from quidz.modules.progress import routes as progress_routes
from quidz.modules.reports import routes as reports_routes

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit])
app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    redirect_slashes=False,
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception on %s: %s", request.url.path, exc)
    if settings.is_production:
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})
    return JSONResponse(status_code=500, content={"detail": str(exc)})


class SecurityHeadersMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def send_with_headers(message):
            if message["type"] == "http.response.start":
                message.setdefault("headers", [])
                message["headers"].extend([
                    (b"X-Content-Type-Options", b"nosniff"),
                    (b"X-Frame-Options", b"DENY"),
                    (b"X-XSS-Protection", b"1; mode=block"),
                ])
            await send(message)

        await self.app(scope, receive, send_with_headers)


app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

API_PREFIX = "/api/v1"

for module_routes in (
    auth_routes,
    profiles_routes,
    tasks_routes,
    absences_routes,
    documents_routes,
    projects_routes,
    skills_routes,
    flashcards_routes,
    badges_routes,
    feedback_routes,
    chat_routes,
    assistant_routes,
    events_routes,
    tools_routes,
    progress_routes,
    reports_routes,
):
    app.include_router(module_routes.router, prefix=API_PREFIX)
app.include_router(progress_routes.dashboard_router, prefix=API_PREFIX)


@app.on_event("startup")
async def startup_event():
    logger.info(f"Application startup ({settings.environment})")
    if settings.s3_configured:
        logger.info(f"Uploads go to S3 bucket {settings.s3_bucket_name}")


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Application shutdown")


@app.get("/")
async def root():
    return {"message": "Welcome to quidz-backend", "status": "healthy"}


@app.get("/health")
@limiter.exempt
async def health():
    return {"status": "healthy"}


@app.get("/ready")
@limiter.exempt
async def ready():
    return {"status": "ready"}
