# app/main.py
import logging
import time
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app.config import settings
from app.database import Base, engine
from app.errors import register_exception_handlers
from app.logging_config import setup_logging
from app.models import (  # noqa: F401  registers every table on Base.metadata
    admin_user,
    course,
    enrollment,
    semester,
    slide,
    student_user,
    study_tool,
    topic,
    video,
)
from app.routers import (
    admin_courses,
    admin_semesters,
    admin_slides,
    admin_study_tools,
    admin_topics,
    admin_videos,
    auth,
    content,
    courses,
    profile,
    semesters,
    student_users,
)


setup_logging()
logger = logging.getLogger("app")


# create tables if they do not exist yet
Base.metadata.create_all(bind=engine)

app = FastAPI(title="Course Catalog Backend", version="1.0.0")

static_dir = Path(settings.STATIC_DIR)
static_dir.mkdir(parents=True, exist_ok=True)
app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    try:
        response = await call_next(request)
        ms = int((time.time() - start) * 1000)
        logger.info("%s %s -> %s (%dms)", request.method, request.url.path, response.status_code, ms)
        return response
    except Exception:
        ms = int((time.time() - start) * 1000)
        logger.exception("Unhandled error %s %s (%dms)", request.method, request.url.path, ms)
        raise


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Routers
app.include_router(courses.router)
app.include_router(semesters.router)
app.include_router(content.router)
app.include_router(student_users.router)
app.include_router(auth.router)
app.include_router(profile.router)
app.include_router(admin_semesters.router)
app.include_router(admin_courses.router)
app.include_router(admin_topics.router)
app.include_router(admin_slides.router)
app.include_router(admin_videos.router)
app.include_router(admin_study_tools.router)


@app.get("/")
def root():
    return {"message": "Course catalog backend is running!"}
