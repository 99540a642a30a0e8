"""
User endpoints for API v1.

``POST /users`` registers a user by name (or returns the existing one)
and ``GET /users?name=`` looks a user up.  Both attach a freshly
fetched avatar URL.  Failures are answered with the raw error text as
a plain‑text body rather than FastAPI's usual ``{"detail": ...}``.
"""

import json
import logging

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from user_registry_api.app.core.db import StoreError, UserNotFoundError
from user_registry_api.app.schemas.user import UserCreate, UserRead
from user_registry_api.app.services.user_service import UserService, get_user_service


logger = logging.getLogger(__name__)

router = APIRouter()

_ERROR_RESPONSES = {
    status.HTTP_500_INTERNAL_SERVER_ERROR: {
        "description": "Store failure or unknown user; body is the error text",
        "content": {"text/plain": {}},
    },
}


def _error(code: int, exc: Exception) -> PlainTextResponse:
    return PlainTextResponse(str(exc), status_code=code)


def _decode_body(raw: bytes) -> UserCreate:
    """Decode the first JSON value in ``raw`` into ``UserCreate``.

    Data after that value is ignored and a JSON ``null`` reads as an
    empty object.  Anything else that is not an object is rejected.
    """
    text = raw.decode("utf-8").lstrip(" \t\r\n")
    payload, _ = json.JSONDecoder().raw_decode(text)
    if payload is None:
        payload = {}
    return UserCreate.model_validate(payload)


@router.post(
    "",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_400_BAD_REQUEST: {
            "description": "Body is not a JSON object; body is the parser error text",
            "content": {"text/plain": {}},
        },
        **_ERROR_RESPONSES,
    },
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": UserCreate.model_json_schema()}},
        }
    },
)
async def create_user(
    request: Request,
    service: UserService = Depends(get_user_service),
):
    """Register a user, or return the one already stored under that name.

    Responds 201 in both cases.  The body is decoded by hand so that a
    malformed payload is answered with 400 and the parser's message,
    which is why this handler is async: reading the body needs
    ``await``.  The blocking store and avatar calls run in the thread
    pool.
    """
    raw = await request.body()
    try:
        data = _decode_body(raw)
    except (ValueError, ValidationError) as exc:
        return _error(status.HTTP_400_BAD_REQUEST, exc)

    try:
        user, created = await run_in_threadpool(service.create_user, data)
    except StoreError as exc:
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, exc)
    if not created:
        logger.debug("User %r already exists", user.name)
    return user


@router.get("", response_model=UserRead, responses=_ERROR_RESPONSES)
def find_user(
    name: str = Query("", description="Exact user name to look up"),
    service: UserService = Depends(get_user_service),
):
    """Return the user with the given name.

    An unknown name is reported as a 500 with the body ``not found``.
    """
    try:
        return service.find_user(name)
    except (UserNotFoundError, StoreError) as exc:
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, exc)
