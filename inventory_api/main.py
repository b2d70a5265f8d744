import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from inventory_api.config import settings, get_firebase_project_id
from inventory_api.routers import health, models, purchases, users, dashboard
from inventory_api.db.database import create_store
from inventory_api.domain.errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from inventory_api.infrastructure.token_verifier import FirebaseTokenVerifier
from inventory_api.application.event_handlers import register_event_handlers

logger = logging.getLogger(__name__)

app = FastAPI(
    title="AI Model Inventory API",
    description="Marketplace API for listing, browsing and purchasing ML models",
    version=settings.VERSION,
)


@app.on_event("startup")
def startup_event():
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    register_event_handlers()

    store = create_store(settings)
    try:
        store.ensure_indexes()
    except PyMongoError as e:
        logger.warning(f"Could not ensure indexes at startup: {e}")
    app.state.store = store

    try:
        app.state.token_verifier = FirebaseTokenVerifier(
            project_id=get_firebase_project_id(settings),
            jwks_url=settings.FIREBASE_JWKS_URL,
            cache_ttl_hours=settings.JWKS_CACHE_TTL_HOURS,
            min_refresh_seconds=settings.JWKS_MIN_REFRESH_SECONDS,
        )
    except ValueError as e:
        logger.warning(f"Token verifier not configured: {e}")


@app.on_event("shutdown")
def shutdown_event():
    store = getattr(app.state, "store", None)
    if store is not None:
        store.close()


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Domain error handlers
@app.exception_handler(AuthenticationError)
async def authentication_error_handler(request: Request, exc: AuthenticationError):
    return JSONResponse(status_code=401, content={"message": str(exc)})


@app.exception_handler(AuthorizationError)
async def authorization_error_handler(request: Request, exc: AuthorizationError):
    return JSONResponse(status_code=403, content={"message": str(exc)})


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"message": str(exc)})


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=400, content={"message": str(exc)})


@app.exception_handler(ConflictError)
async def conflict_error_handler(request: Request, exc: ConflictError):
    return JSONResponse(status_code=400, content={"message": str(exc)})


@app.exception_handler(PyMongoError)
async def store_error_handler(request: Request, exc: PyMongoError):
    logger.exception(f"Store failure on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if not errors:
        return JSONResponse(status_code=422, content={"message": "Invalid request"})
    first = errors[0]
    # Drop the "body"/"query"/"path" prefix from the location
    location = ".".join(str(part) for part in first.get("loc", ())[1:])
    message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
    return JSONResponse(status_code=422, content={"message": message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


# Include routers
app.include_router(health.router, tags=["Health"])  # Health check endpoints first
app.include_router(models.router, tags=["Models"])
app.include_router(purchases.router, tags=["Purchases"])
app.include_router(users.router, tags=["Users"])
app.include_router(dashboard.router, tags=["Dashboard"])
