import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import get_prefix, settings
from .context import CallerContext
from .dependencies import CurrentCaller
from .errors import ErrorCode, FunctionError
from .logging_config import setup_logging
from .notifications.router import router as notifications_router
from .users.router import router as users_router

setup_logging()
logger = logging.getLogger(__name__)

API_VERSION = '/api/v1'
PREFIX = get_prefix(API_VERSION)

ERROR_STATUS = {
    ErrorCode.UNAUTHENTICATED: 401,
    ErrorCode.PERMISSION_DENIED: 403,
    ErrorCode.INVALID_ARGUMENT: 400,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.ALREADY_EXISTS: 409,
    ErrorCode.INTERNAL: 500,
}

app = FastAPI(root_path=PREFIX, title="BytePlus Functions API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(FunctionError)
async def function_error_handler(request: Request, exc: FunctionError):
    status_code = ERROR_STATUS.get(exc.code, 500)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(
        status_code=status_code,
        content={'code': exc.code.value, 'detail': exc.message, 'details': exc.details},
    )


@app.get("/whoami", tags=["Dev test"], response_model=CallerContext)
async def whoami(caller: CurrentCaller):
    return caller


app.include_router(notifications_router)
app.include_router(users_router)

logger.info(f"HTTP surface ready with prefix: {PREFIX}")
