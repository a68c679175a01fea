import os
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import APIRouter, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from pymongo.database import Database
from starlette.exceptions import HTTPException as StarletteHTTPException

import auth
import jobs
from auth import ADMIN, AUTH, PUBLIC, hash_password
from database import create_document, db
from messages import messages_router
from resources import crud_router, populate_category
from schemas import (
    Category, CategoryUpdate, Project, ProjectUpdate, Resume, ResumeUpdate,
    Service, ServiceUpdate, Testimonial, TestimonialUpdate,
)
from settings import settings_router
from uploads import UPLOAD_DIR, upload_router
from users import users_router

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

CORS_ORIGIN = os.getenv("CORS_ORIGIN", "*")
ADMIN_EMAIL = os.getenv("ADMIN_EMAIL")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD")

# ====================
# Authorization policy
# ====================
# path, collection, create schema, update schema, label, read level, write level
CONTENT_RESOURCES = [
    ("services", "service", Service, ServiceUpdate, "Service", PUBLIC, AUTH),
    ("projects", "project", Project, ProjectUpdate, "Project", PUBLIC, AUTH),
    ("categories", "category", Category, CategoryUpdate, "Category", PUBLIC, AUTH),
    ("testimonials", "testimonial", Testimonial, TestimonialUpdate, "Testimonial", PUBLIC, AUTH),
    ("resume", "resume", Resume, ResumeUpdate, "Resume item", PUBLIC, AUTH),
]
MESSAGES_READ, MESSAGES_CREATE = ADMIN, PUBLIC
USERS_LEVEL = ADMIN
SETTINGS_LEVEL = ADMIN
UPLOAD_LEVEL = AUTH

LIST_OPTIONS = {
    "projects": {"populate": populate_category, "filters": ("category", "project_type")},
    "resume": {"filters": ("type",), "sort": [("order", 1)]},
}


def ensure_admin(database: Optional[Database], email: Optional[str], password: Optional[str]) -> Optional[str]:
    """Create the bootstrap admin account if it does not exist yet."""
    if database is None or not email or not password:
        return None
    email = email.strip().lower()
    if database["user"].find_one({"email": email}):
        return None
    _id = create_document(database, "user", {
        "name": "Admin",
        "email": email,
        "password": hash_password(password),
        "role": "admin",
        "is_active": True,
    })
    logger.info("Created bootstrap admin %s", email)
    return _id


@asynccontextmanager
async def lifespan(app: FastAPI):
    os.makedirs(app.state.upload_dir, exist_ok=True)
    ensure_admin(app.state.db, ADMIN_EMAIL, ADMIN_PASSWORD)
    task = jobs.start()
    yield
    await jobs.stop(task)


# ==============
# Error handlers
# ==============
async def http_error(request: Request, exc: StarletteHTTPException):
    return JSONResponse({"message": exc.detail}, status_code=exc.status_code, headers=getattr(exc, "headers", None))


async def validation_error(request: Request, exc: RequestValidationError):
    errors = jsonable_encoder(exc.errors())
    parts = []
    for err in errors:
        field = ".".join(str(p) for p in err.get("loc", ())[1:]) or "body"
        parts.append(f"{field}: {err.get('msg')}")
    return JSONResponse({"message": "; ".join(parts) or "Invalid request", "errors": errors}, status_code=400)


async def internal_error(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse({"message": "Internal server error"}, status_code=500)


# ==================
# FastAPI app config
# ==================
def create_app(database: Optional[Database] = db, upload_dir: str = UPLOAD_DIR) -> FastAPI:
    app = FastAPI(title="Portfolio API", lifespan=lifespan)
    app.state.db = database
    app.state.upload_dir = upload_dir

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in CORS_ORIGIN.split(",")],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(StarletteHTTPException, http_error)
    app.add_exception_handler(RequestValidationError, validation_error)
    app.add_exception_handler(Exception, internal_error)

    api = APIRouter(prefix="/api")
    api.include_router(auth.router)
    for path, collection, schema, update_schema, label, read, write in CONTENT_RESOURCES:
        api.include_router(crud_router(
            path, collection, schema, update_schema, label,
            read=read, write=write, **LIST_OPTIONS.get(path, {}),
        ))
    api.include_router(messages_router(read=MESSAGES_READ, create=MESSAGES_CREATE))
    api.include_router(users_router(USERS_LEVEL))
    api.include_router(settings_router(SETTINGS_LEVEL))
    api.include_router(upload_router(upload_dir, UPLOAD_LEVEL))
    app.include_router(api)

    app.mount("/uploads", StaticFiles(directory=upload_dir, check_dir=False), name="uploads")

    @app.get("/")
    def root():
        return {"status": "ok", "service": "portfolio-api"}

    @app.get("/test")
    def test_database():
        handle = app.state.db
        ok = handle is not None
        collections = []
        if ok:
            try:
                collections = handle.list_collection_names()
            except Exception as e:
                logger.warning("Database check failed: %s", e)
                ok = False
        return {"backend": "running", "database": "connected" if ok else "not-available", "collections": collections[:10]}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 8000))
    uvicorn.run(app, host="0.0.0.0", port=port)
