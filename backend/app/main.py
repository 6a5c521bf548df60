# app/main.py
import os
import time
import logging
import uuid
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app.routers.auth import router as auth_router
from app.routers.users import router as users_router
from app.routers.follows import router as follows_router
from app.routers.posts import router as posts_router
from app.routers.likes import router as likes_router
from app.routers.comments import router as comments_router
from app.routers.notifications import router as notifications_router
from app.routers.exercises import router as exercises_router
from app.routers.goals import router as goals_router
from app.routers.analytics import router as analytics_router
from app.db import SessionLocal  # for healthz DB check
from app.settings import get_settings

log = logging.getLogger("uvicorn")
logging.getLogger("app").setLevel(get_settings().LOG_LEVEL)

app = FastAPI(
    title="Musclegram API",
    openapi_tags=[
        {"name": "auth", "description": "Current identity"},
        {"name": "users", "description": "Profiles and user search"},
        {"name": "follows", "description": "Follow graph"},
        {"name": "posts", "description": "Workout posts and feeds"},
        {"name": "likes", "description": "Likes and engagement counts"},
        {"name": "comments", "description": "Comments and replies"},
        {"name": "notifications", "description": "Like/comment/follow notifications"},
        {"name": "exercises", "description": "Exercise catalog and custom exercises"},
        {"name": "goals", "description": "Monthly training-day goal"},
        {"name": "analytics", "description": "Training analytics"},
    ],
)


# CORS (relax for local dev; tighten origins in prod via env)
ALLOW_ORIGINS = os.getenv("ALLOW_ORIGINS", "*").split(",")
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOW_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.middleware("http")
async def add_request_id_and_log(request: Request, call_next):
    req_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000
    response.headers["X-Request-ID"] = req_id
    log.info("rid=%s %s %s -> %s in %.1fms",
             req_id, request.method, request.url.path, response.status_code, duration_ms)
    return response

@app.exception_handler(SQLAlchemyError)
async def store_failure(request: Request, exc: SQLAlchemyError):
    # No retry: the action just didn't happen
    log.error("store failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": "store operation failed"})

@app.get("/")
def root():
    return {"ok": True, "name": "Musclegram API"}

@app.get("/ping")
def ping():
    return {"pong": True}

@app.get("/healthz")
def healthz():
    # Quick DB sanity check
    try:
        with SessionLocal() as db:
            db.execute(text("SELECT 1"))
        return {"status": "ok"}
    except Exception as e:
        return {"status": "degraded", "error": str(e)}

@app.get("/version")
def version():
    return {"version": os.getenv("API_VERSION", "dev")}

# Routers
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(follows_router)
app.include_router(posts_router)
app.include_router(likes_router)
app.include_router(comments_router)
app.include_router(notifications_router)
app.include_router(exercises_router)
app.include_router(goals_router)
app.include_router(analytics_router)
