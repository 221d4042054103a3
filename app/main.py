import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from app.api.budgets import router as budgets_router
from app.api.categories import router as categories_router
from app.api.reports import router as reports_router
from app.db.settings import get_settings
from app.services.errors import DataSourceError

settings = get_settings()
logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name, version="0.1.0")


@app.exception_handler(DataSourceError)
async def data_source_error_handler(request: Request, exc: DataSourceError) -> JSONResponse:
    logger.warning("Data source failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content={"detail": str(exc)})


@app.get("/health", tags=["health"])
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


app.include_router(categories_router)
app.include_router(budgets_router)
app.include_router(reports_router)
