# backend/app/main.py

import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional, Tuple

import uvicorn
from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel, Field, ValidationError, field_validator
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException

from app.cache import make_store, save_result
from app.config import Settings, load_settings
from app.errors import AccessDeniedError, ApiError, InvalidInputError
from app.extract import resolve_input
from app.guard import check_origin, cors_origin_regex
from app.llm import CompletionClient
from app.prompts import Audience

logger = logging.getLogger("uvicorn.error")

RATING_ERROR = "Rating must be a number between 1 and 10"


# ---------- Schemas ----------
class SimplifyResponse(BaseModel):
    simplifiedText: str


class WordInfo(BaseModel):
    word: str
    definition: str
    synonyms: List[str]


class FeedbackEntry(BaseModel):
    rating: float = Field(..., ge=1, le=10)
    text: str = ""

    @field_validator("text", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        # comments are free-form; only the rating is validated
        return "" if v is None else str(v)


class Message(BaseModel):
    message: str


# ---------- Request helpers ----------
def parse_audience(raw: Optional[str]) -> Audience:
    if not raw:
        return Audience.GENERAL_PUBLIC
    try:
        return Audience(raw)
    except ValueError:
        raise InvalidInputError(f"Unknown audience: {raw}")


async def read_simplify_body(request: Request) -> Tuple[Dict[str, Any], Optional[UploadFile]]:
    """Accepts either a JSON body or a multipart/urlencoded form with an optional ``file``."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except ValueError:
            raise InvalidInputError("Malformed JSON body")
        if not isinstance(body, dict):
            raise InvalidInputError("No valid input provided")
        return body, None

    try:
        form = await request.form()
    except HTTPException as e:
        raise InvalidInputError(str(e.detail))
    upload = form.get("file")
    fields = {k: v for k, v in form.items() if isinstance(v, str)}
    # browsers send an empty, nameless file part when no file was picked
    if not isinstance(upload, UploadFile) or not upload.filename:
        upload = None
    return fields, upload


async def read_upload(upload: UploadFile) -> bytes:
    try:
        return await upload.read()
    finally:
        await upload.close()


def _opt_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


# ---------- Routes ----------
router = APIRouter()


@router.post("/simplify", response_model=SimplifyResponse)
async def simplify(request: Request):
    logger.info("Simplify request received")
    settings: Settings = request.app.state.settings
    llm: CompletionClient = request.app.state.llm

    try:
        fields, upload = await read_simplify_body(request)
        audience = parse_audience(_opt_str(fields.get("audience")))
        file_data = await read_upload(upload) if upload is not None else None
        input_text = await resolve_input(
            file_data,
            upload.content_type if upload is not None else None,
            _opt_str(fields.get("url")),
            _opt_str(fields.get("text")),
            settings.word_limit,
        )

        simplified = await llm.simplify(input_text, audience)
        key = await save_result(request.app.state.store, input_text, audience, simplified)
        logger.info(f"Cached simplification ({len(simplified)} chars) under {key[-13:]}")
    except ApiError:
        raise
    except Exception as e:
        logger.exception("Error in /simplify endpoint")
        raise ApiError(str(e) or "An error occurred during text simplification.") from e

    return SimplifyResponse(simplifiedText=simplified)


@router.get("/word-info", response_model=WordInfo)
async def word_info(request: Request, word: Optional[str] = None):
    if not word or not word.strip():
        raise InvalidInputError("No word provided")
    info = await request.app.state.llm.word_info(word.strip())
    return WordInfo(**info)


@router.post("/feedback", response_model=Message)
async def feedback(request: Request):
    try:
        payload = await request.json()
        entry = FeedbackEntry.model_validate(payload)
    except (ValueError, ValidationError):
        raise InvalidInputError(RATING_ERROR)

    logger.info(f"User rated: {entry.rating:g}")
    logger.info(f"User feedback: {entry.text}")
    return Message(message="Rating submitted successfully")


@router.get("/", response_class=HTMLResponse)
def health():
    return "<h1>Server Working</h1>"


# ---------- Error handlers ----------
async def handle_access_denied(request: Request, exc: AccessDeniedError):
    logger.warning(f"Rejected request from origin {request.headers.get('origin') or request.headers.get('referer')!r}")
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def handle_api_error(request: Request, exc: ApiError):
    if exc.status_code >= 500:
        logger.error(f"{request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


# ---------- App ----------
def create_app(
    settings: Optional[Settings] = None,
    llm: Optional[CompletionClient] = None,
    store: Any = None,
) -> FastAPI:
    settings = settings or load_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await app.state.store.close()

    app = FastAPI(
        title="Simplify My Text - Backend",
        version="1.0",
        dependencies=[Depends(check_origin)],
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.llm = llm or CompletionClient(settings)
    app.state.store = store if store is not None else make_store(settings.redis_url)

    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=cors_origin_regex(settings),
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(AccessDeniedError, handle_access_denied)
    app.add_exception_handler(ApiError, handle_api_error)
    app.include_router(router)
    return app


def run() -> None:
    """Serve ``create_app`` with uvicorn; same as ``uvicorn app.main:create_app --factory``."""
    settings = load_settings()
    ssl: Dict[str, str] = {}
    if settings.deploy:
        if not (settings.ssl_key_path and settings.ssl_cert_path):
            raise RuntimeError("APP_ENV=deploy requires SSL_KEY_PATH and SSL_CERT_PATH")
        ssl = {"ssl_keyfile": settings.ssl_key_path, "ssl_certfile": settings.ssl_cert_path}

    scheme = "https" if ssl else "http"
    logger.info(f"Backend listening at {scheme}://0.0.0.0:{settings.port}")
    uvicorn.run("app.main:create_app", factory=True, host="0.0.0.0", port=settings.port, **ssl)


if __name__ == "__main__":
    run()
