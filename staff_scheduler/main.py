import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from staff_scheduler.api.routes import availability, conflicts, imports, schedules, staff, templates, time_off_requests
from staff_scheduler.core.config import Settings, get_settings
from staff_scheduler.db.database import build_engine, build_session_factory, init_db
from staff_scheduler.services.scheduling import (
    BusinessHours,
    InputError,
    NotFoundError,
    ReferentialError,
    ScheduleStateError,
    SchedulingError,
    ValidationError,
)

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    InputError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ValidationError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ReferentialError: status.HTTP_409_CONFLICT,
    ScheduleStateError: status.HTTP_409_CONFLICT,
}


def scheduling_error_handler(request: Request, exc: SchedulingError) -> JSONResponse:
    status_code = ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
    logger.info("%s %s -> %d: %s", request.method, request.url.path, status_code, exc)
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL)

    engine = build_engine(settings.DATABASE_URL)
    init_db(engine)

    app = FastAPI(title="Staff Scheduler API", version="0.1.0", debug=settings.DEBUG)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.business_hours = BusinessHours.from_settings(settings)

    app.add_exception_handler(SchedulingError, scheduling_error_handler)

    app.include_router(staff.router, prefix="/api/v1")
    app.include_router(availability.router, prefix="/api/v1")
    app.include_router(templates.router, prefix="/api/v1")
    app.include_router(schedules.router, prefix="/api/v1")
    app.include_router(conflicts.router, prefix="/api/v1")
    app.include_router(imports.router, prefix="/api/v1")
    app.include_router(time_off_requests.router, prefix="/api/v1")

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    return app
