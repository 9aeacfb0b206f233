import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from app.config import LOG_LEVEL
from app.database import init_db
from app.errors import LLMProviderError, TaskMasterError
from app.logging_setup import setup_logging
from app.routers import ai, auth, tasks

setup_logging(LOG_LEVEL)
logger = logging.getLogger(__name__)

init_db()

app = FastAPI(title="TaskMaster AI")

# API routers
app.include_router(auth.router)
app.include_router(tasks.router)
app.include_router(ai.router)


@app.exception_handler(TaskMasterError)
async def taskmaster_error_handler(request: Request, exc: TaskMasterError):
    content = {"error": exc.message}
    if isinstance(exc, LLMProviderError):
        content.update({"code": exc.code, "type": exc.type})
    return JSONResponse(status_code=exc.status_code, content=content)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    messages = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        messages.append(f"{loc}: {err.get('msg')}" if loc else err.get("msg"))
    return JSONResponse(status_code=422, content={"error": "; ".join(messages) or "Invalid request"})


# Generic error handler to return JSON errors for unexpected exceptions
@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})
