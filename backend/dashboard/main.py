import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from dashboard.core.config import settings
from dashboard.core.errors import LedgerError, StoreError
from dashboard.api.routes.auth import router as auth_router
from dashboard.api.routes.bank import router as bank_router

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI()

origins = [o.strip() for o in (settings.cors_origins or "").split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@app.exception_handler(StoreError)
async def _store_error(request: Request, exc: StoreError):
    logger.error("store failure on %s %s: %s", request.method, request.url.path, exc)
    return _error(500, "internal error")


@app.exception_handler(LedgerError)
async def _ledger_error(request: Request, exc: LedgerError):
    return _error(400, exc.message)


@app.exception_handler(RequestValidationError)
async def _parsing_error(request: Request, exc: RequestValidationError):
    issues = exc.errors()
    if len(issues) == 1:
        return _error(400, f"Parsing error: {issues[0].get('msg')}")
    return _error(400, "Parsing errors:\n" + "".join(f"{i.get('msg')}\n" for i in issues))


@app.exception_handler(StarletteHTTPException)
async def _http_error(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)}, headers=getattr(exc, "headers", None))


@app.get("/health")
@app.get("/api/health")
def health():
    return {"status": "ok"}

app.include_router(auth_router)
app.include_router(bank_router)
