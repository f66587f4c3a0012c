import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlmodel import Session

from .config import Settings, settings as default_settings
from .db import build_engine, init_db
from .errors import StreakQuestError
from .logging_config import configure_logging
from .routers import achievements, attendance, auth, dashboard, gamification, homework, qr
from .services.seeding import seed_all

log = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        engine = app.state.engine
        init_db(engine)
        with Session(engine) as session:
            seed_all(session, demo=settings.SEED_DEMO_DATA)
        log.info("%s ready on %s", settings.APP_NAME, engine.url)
        yield
        engine.dispose()

    app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
    app.state.settings = settings
    app.state.engine = build_engine(settings.DATABASE_URL)

    @app.exception_handler(StreakQuestError)
    async def handle_domain_error(request: Request, exc: StreakQuestError):
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
    app.include_router(dashboard.router, prefix="/api/dashboard", tags=["dashboard"])
    app.include_router(attendance.router, prefix="/api/attendance", tags=["attendance"])
    app.include_router(qr.router, prefix="/api/qr", tags=["qr"])
    app.include_router(gamification.router, prefix="/api/gamification", tags=["gamification"])
    app.include_router(achievements.router, prefix="/api/achievements", tags=["achievements"])
    app.include_router(homework.router, prefix="/api/homework", tags=["homework"])

    @app.get("/api/health")
    async def health():
        return {"status": "ok", "app": settings.APP_NAME}

    return app


app = create_app()
