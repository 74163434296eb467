from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from database import engine, SessionLocal, verify_db_connection
from routers import cms, wms, ros, routes, driver
from middleware.security import SecurityMiddleware
from utils.errors import ServiceError, error_body
from utils.logger import DatabaseLogger
from init_db import init_database
from config import settings
import models  # noqa: F401  registers every table on Base
import traceback
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Swift Courier ESB API",
    description="Order lifecycle and authorization backend for the courier tracking app",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    kind = exc.kind if isinstance(exc, ServiceError) else "HTTPError"
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(kind, str(exc.detail)),
        headers=getattr(exc, "headers", None)
    )

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        problems.append(f"{location}: {error.get('msg')}" if location else error.get("msg", ""))
    return JSONResponse(
        status_code=400,
        content=error_body("ValidationError", "; ".join(problems) or "Invalid request")
    )

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler to prevent information leakage"""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    DatabaseLogger.log_error(
        error_type=type(exc).__name__,
        error_message=str(exc),
        stack_trace=traceback.format_exc(),
        endpoint=request.url.path
    )
    return JSONResponse(
        status_code=500,
        content=error_body("InternalError", "An internal error occurred. Please try again later.")
    )

app.add_middleware(SecurityMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
    max_age=600,
)

app.include_router(cms.router)
app.include_router(wms.router)
app.include_router(ros.router)
app.include_router(routes.router)
app.include_router(driver.router)

@app.on_event("startup")
def startup_event():
    """Create tables and seed an empty database"""
    init_database(engine, SessionLocal)

@app.get("/")
def root():
    return {
        "message": "Swift Courier ESB API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health"
    }

@app.get("/health")
def health_check():
    db_status = "connected" if verify_db_connection() else "not connected"
    return {
        "status": "healthy",
        "database": db_status
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=settings.port)
