import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from .config import settings
from .database import get_redis
from .limiter import limiter
from .middleware.security import SecurityHeadersMiddleware

# Import routes
from .routes import auth, scan

APP_VERSION = "1.0.0"

# Logging
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger("plantcare")

error_logger = logging.getLogger("plantcare.errors")
if not error_logger.handlers:
    fh = logging.FileHandler(settings.LOG_FILE, encoding="utf-8")
    fh.setLevel(logging.ERROR)
    fh.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
    error_logger.addHandler(fh)

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="PlantCare AI - phone OTP sign-in and plant disease scans (demo mode)",
    version=APP_VERSION,
    docs_url="/api/docs" if settings.ENABLE_API_DOCS else None,
    redoc_url="/api/redoc" if settings.ENABLE_API_DOCS else None
)

# Rate limiter
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies are client input errors like any other: answer 400"""
    messages = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{field}: {error.get('msg')}" if field else error.get("msg", "Invalid request"))
    return JSONResponse(status_code=400, content={"detail": "; ".join(messages) or "Invalid request"})


# Registered first so CORS and security headers wrap its 500 response
@app.middleware("http")
async def capture_unhandled_errors(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception as exc:
        error_logger.exception("Unhandled server error on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# CORS Middleware
if settings.APP_ENV == "development":
    ALLOWED_ORIGINS = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]
else:
    ALLOWED_ORIGINS = settings.origins_list

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
    max_age=3600,
)

app.add_middleware(SecurityHeadersMiddleware)


# Uploaded plant photos
app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")

# Include routers
app.include_router(auth.router, prefix="/api")
app.include_router(scan.router, prefix="/api")


@app.on_event("startup")
async def startup_event():
    logger.info(f"✅ {settings.APP_NAME} started ({settings.APP_ENV})")
    logger.info(f"🔑 OTP store: {settings.OTP_STORE_BACKEND}")
    logger.info(f"📁 Upload directory: {settings.UPLOAD_DIR}")
    if not settings.SMS_API_URL:
        logger.info("📱 SMS gateway not configured - running in demo mode, OTPs are logged")


@app.on_event("shutdown")
async def shutdown_event():
    logger.info(f"🛑 {settings.APP_NAME} shutting down")


@app.get("/")
async def root():
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": APP_VERSION,
        "status": "running",
        "docs": "/api/docs" if settings.ENABLE_API_DOCS else "disabled"
    }


@app.get("/api/health")
async def health_check():
    otp_store = settings.OTP_STORE_BACKEND
    redis_client = get_redis()
    if redis_client is not None:
        try:
            redis_client.ping()
        except Exception as e:
            logger.warning(f"Redis health check failed: {e}")
            otp_store = "redis (unreachable)"

    return {
        "status": "ok",
        "message": "PlantCare API is running",
        "environment": settings.APP_ENV,
        "otp_store": otp_store
    }


def run():
    """Console entry point: serve the API with uvicorn"""
    import uvicorn

    uvicorn.run(
        "plantcare.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG and settings.APP_ENV == "development",
        log_level=settings.LOG_LEVEL.lower()
    )
