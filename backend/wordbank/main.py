import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import models  # noqa: F401  (registers tables on Base.metadata)
from .api.routes_reviews import router as reviews_router
from .api.routes_status import router as status_router
from .api.routes_words import router as words_router
from .config import settings
from .core.auth import api_key_gate
from .core.database import Base, engine
from .core.errors import ERRORS_BY_STATUS, UnexpectedFailure, ValidationFailure, WordbankError

logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)


app = FastAPI(
    title=settings.app_name,
    version="0.1.0",
)


@app.on_event("startup")
async def startup_event():
    # Create tables
    Base.metadata.create_all(bind=engine)
    logger.info("database tables ready (%s)", engine.url.get_backend_name())


# ---------- Errors ----------

@app.exception_handler(WordbankError)
async def wordbank_error_handler(request: Request, exc: WordbankError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    error_cls = ERRORS_BY_STATUS.get(exc.status_code)
    payload = error_cls().to_payload() if error_cls else {"error": str(exc.detail)}
    return JSONResponse(status_code=exc.status_code, content=payload, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    err = ValidationFailure()
    return JSONResponse(status_code=err.status_code, content=err.to_payload())


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("unexpected error on %s %s", request.method, request.url.path)
    err = UnexpectedFailure()
    return JSONResponse(status_code=err.status_code, content=err.to_payload())


app.middleware("http")(api_key_gate)

app.include_router(status_router)
app.include_router(words_router)
app.include_router(reviews_router)
