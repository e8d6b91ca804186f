import logging
from contextlib import asynccontextmanager

import firebase_admin
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from firebase_admin import credentials
from starlette.middleware.cors import CORSMiddleware

from config import load_settings
from context import RequestContextMiddleware, RequestContextFilter
from errors import AppError, InternalError
from routes.auth import router as auth_router
from routes.posts import router as posts_router
from routes.users import router as users_router
from services.firestore import FirestoreDB
from services.tokens import TokenService

logger = logging.getLogger(__name__)

settings = load_settings()

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(method)s %(path)s: %(message)s"

# Client facing messages for invalid (present but rejected) body fields
FIELD_MESSAGES = {
    "name": "Name is required",
    "email": "Please include a valid email",
    "password": "Please enter a password with 6 to 72 characters",
    "text": "Text is required",
}


def configure_logging(level: str):
    logging.basicConfig(level=level, format=LOG_FORMAT)
    for handler in logging.getLogger().handlers:
        handler.addFilter(RequestContextFilter())


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.log_level)

    # Initialize Firebase Admin SDK
    cred = credentials.Certificate(settings.firebase_credentials_path)
    firebase_app = firebase_admin.initialize_app(cred)

    # Initialize dependencies
    app.state.token_service = TokenService(
        secret=settings.jwt_secret,
        expires_in=settings.jwt_expires_in,
        algorithm=settings.jwt_algorithm,
    )
    app.state.firestore = FirestoreDB(firebase_app)
    logger.info("Application started")

    yield
    # Cleanup resources
    firebase_admin.delete_app(firebase_app)
    logger.info("Application stopped")


app = FastAPI(lifespan=lifespan)

# middleware to set request context
app.add_middleware(RequestContextMiddleware)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def handle_request_validation(request: Request, exc: RequestValidationError):
    errors = []
    for error in exc.errors():
        location, *field = error["loc"]
        param = ".".join(str(part) for part in field)
        if error["type"] == "missing":
            msg = f"{(param or location).capitalize()} is required"
        else:
            msg = FIELD_MESSAGES.get(param, error["msg"])
        errors.append({
            "msg": msg,
            "param": param,
            "location": location,
        })
    return JSONResponse(status_code=400, content={"errors": errors})


@app.exception_handler(AppError)
async def handle_app_error(request: Request, exc: AppError):
    if isinstance(exc, InternalError):
        logger.error("Internal error: %s", exc.msg)
    return JSONResponse(status_code=exc.status_code, content=exc.body())


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception("Unhandled error: %s", exc)
    return JSONResponse(status_code=500, content={"msg": "Server error"})


# Include routers
app.include_router(users_router, prefix="/users", tags=["users"])
app.include_router(auth_router, prefix="/auth", tags=["auth"])
app.include_router(posts_router, prefix="/posts", tags=["posts"])


def run():
    """Serve the API with uvicorn"""
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
