"""Main FastAPI application."""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from logging_setup import setup_console_logging
from practice_api.database import init_db
from practice_api.routes import bookmarks, questions, session
from practice_api.services.session_service import start_controller

setup_console_logging()

app = FastAPI(title="Quiz Practice API")

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# Startup events
@app.on_event("startup")
def startup_events() -> None:
    """Initialize database and load the question bank on startup."""
    init_db()
    start_controller()


# Include routers
app.include_router(questions.router)
app.include_router(session.router)
app.include_router(bookmarks.router)
