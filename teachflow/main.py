import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

from teachflow.core.config import (
    CERT_CACHE_SECONDS,
    CORS_ORIGINS,
    FIREBASE_PROJECT_ID,
    LOG_LEVEL,
    PAYMENT_CURRENCY,
    STRIPE_SECRET_KEY,
    VERIFIER_TIMEOUT_SECONDS,
)
from teachflow.core.identity import FirebaseTokenVerifier
from teachflow.core.logging_middleware import LoggingMiddleware
from teachflow.core.payments import StripePaymentProvider
from teachflow.db.init_db import init_db
from teachflow.db.session import create_client, get_database
from teachflow.routers.assignments import router as assignments_router
from teachflow.routers.classes import router as classes_router
from teachflow.routers.enrollments import router as enrollments_router
from teachflow.routers.feedback import router as feedback_router
from teachflow.routers.payments import router as payments_router
from teachflow.routers.stats import router as stats_router
from teachflow.routers.teacher_requests import router as teacher_requests_router
from teachflow.routers.users import router as users_router

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    client = create_client()
    app.state.db = get_database(client)
    app.state.identity_verifier = FirebaseTokenVerifier(
        FIREBASE_PROJECT_ID, timeout=VERIFIER_TIMEOUT_SECONDS, cert_ttl=CERT_CACHE_SECONDS
    )
    app.state.payment_provider = StripePaymentProvider(STRIPE_SECRET_KEY, currency=PAYMENT_CURRENCY)
    init_db(app.state.db)
    logger.info("Connected to database %s", app.state.db.name)
    yield
    client.close()


app = FastAPI(title="TeachFlow API", lifespan=lifespan)

# Middleware
app.add_middleware(LoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Every error leaves as {"message": ...}
@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first.get('msg')}" if field else first.get("msg")
    else:
        message = "Invalid request"
    return JSONResponse(status_code=400, content={"message": message})


@app.exception_handler(PyMongoError)
async def store_error_handler(request: Request, exc: PyMongoError):
    logger.exception("Unhandled database error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": "Database error"})


@app.get("/")
def root():
    return {"message": "TeachFlow server is running"}


# Health check
@app.get("/health")
def health():
    return {"status": "ok"}


# Include routers
app.include_router(users_router, tags=["users"])
app.include_router(teacher_requests_router, tags=["teacher-requests"])
app.include_router(classes_router, tags=["classes"])
app.include_router(assignments_router, tags=["assignments"])
app.include_router(payments_router, tags=["payments"])
app.include_router(enrollments_router, tags=["enrollments"])
app.include_router(feedback_router, tags=["feedback"])
app.include_router(stats_router)
