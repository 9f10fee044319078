# backend/app/guard.py

import hashlib
import re
from typing import Optional

from fastapi import Request

from app.config import LOCALHOST_ORIGINS, Settings
from app.errors import AccessDeniedError

# what may follow an allowed origin: a port, a path, or nothing
_BOUNDARY = ("/", ":")


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def origin_matches(origin: str, prefix: str) -> bool:
    if not origin.startswith(prefix):
        return False
    rest = origin[len(prefix):]
    return not rest or rest.startswith(_BOUNDARY)


def is_allowed(origin: Optional[str], token: Optional[str], settings: Settings) -> bool:
    """Origin allow-list check. Extension origins must also carry the hashed dev token."""
    if not origin:
        return False
    if origin_matches(origin, settings.allowed_origin):
        return True
    if any(origin_matches(origin, p) for p in LOCALHOST_ORIGINS):
        return True
    if settings.extension_id and origin_matches(origin, settings.extension_id):
        return token == hash_token(settings.dev_token)
    return False


def cors_origin_regex(settings: Settings) -> str:
    prefixes = [settings.allowed_origin, *LOCALHOST_ORIGINS]
    if settings.extension_id:
        prefixes.append(settings.extension_id)
    # starlette full-matches this against the Origin header
    return "(" + "|".join(re.escape(p) for p in prefixes) + ")([/:].*)?"


async def check_origin(request: Request) -> None:
    settings: Settings = request.app.state.settings
    origin = request.headers.get("origin") or request.headers.get("referer")
    token = request.headers.get("token")
    if not is_allowed(origin, token, settings):
        raise AccessDeniedError()
