from datetime import datetime
import logging

from fastapi import Depends, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from workbooster.core.config import settings
from workbooster.db import engine, get_db
from workbooster.api.lookups import router as lookups_router
from workbooster.api.accounts import router as accounts_router
from workbooster.api.account_details import router as account_details_router
from workbooster.api.leads import router as leads_router, webhook_router
from workbooster.api.calls import router as calls_router
from workbooster.api.meetings import router as meetings_router
from workbooster.api.dashboard import router as dashboard_router
from workbooster.api.master import router as master_router
from workbooster.api.stage_views import router as stage_views_router
from workbooster.api.auth import router as auth_router
from workbooster.api.users import router as users_router

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="API for tracking accounts, leads, calls and meetings through the sales pipeline",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)


@app.on_event("startup")
async def startup_event():
    """Check the database is reachable. Schema changes belong to alembic."""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        logger.info("Database connection OK")
    except Exception as e:
        logger.error(f"Database connection failed: {e}")


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request, exc):
    if isinstance(exc.detail, dict):
        content = exc.detail
    else:
        content = {"error": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request, exc):
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", [])[1:]) or None
    message = f"Invalid {field}: {first.get('msg')}" if field else "Invalid request"
    return JSONResponse(
        status_code=400,
        content={"error": message, "field": field, "details": jsonable_errors(errors)},
    )


def jsonable_errors(errors):
    return [
        {"loc": [str(part) for part in e.get("loc", [])], "msg": e.get("msg"), "type": e.get("type")}
        for e in errors
    ]


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error"},
    )


@app.get("/health")
def health(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
        return {"status": "healthy", "timestamp": datetime.now().isoformat()}
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        return JSONResponse(status_code=500, content={"status": "unhealthy", "error": str(e)})


@app.get("/")
def root():
    return {"message": settings.PROJECT_NAME}

# lookups and other fixed /leads paths must be registered before /leads/{lead_id}
app.include_router(lookups_router, prefix=settings.API_PREFIX)
app.include_router(calls_router, prefix=settings.API_PREFIX)
app.include_router(meetings_router, prefix=settings.API_PREFIX)
app.include_router(leads_router, prefix=settings.API_PREFIX)
app.include_router(webhook_router, prefix=settings.API_PREFIX)
app.include_router(accounts_router, prefix=settings.API_PREFIX)
app.include_router(account_details_router, prefix=settings.API_PREFIX)
app.include_router(dashboard_router, prefix=settings.API_PREFIX)
app.include_router(master_router, prefix=settings.API_PREFIX)
app.include_router(stage_views_router, prefix=settings.API_PREFIX)
app.include_router(auth_router, prefix=settings.API_PREFIX)
app.include_router(users_router, prefix=settings.API_PREFIX)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
