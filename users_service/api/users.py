# users_service/api/users.py

import logging
from typing import Optional
from pydantic import BaseModel, ConfigDict, ValidationError
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from users_service.core.repository import RepositoryError, create_user, list_users
from users_service.database import get_db


logger = logging.getLogger(__name__)

router = APIRouter()

USERS_PATH = "/api/users"
ALLOWED_METHODS = ("GET", "POST")


class AddUserRequest(BaseModel):
    """
    Request schema for creating a user. Unknown fields are rejected.
    """
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = None


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.get(USERS_PATH)
def get_users(db: Session = Depends(get_db)):
    """
    Lists every stored user. An empty table gives an empty list.
    """
    try:
        users = list_users(db)
    except RepositoryError as e:
        logger.exception("Error listing users")
        return PlainTextResponse(e.detail, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return {"users": [user.to_dict() for user in users]}


@router.post(USERS_PATH, status_code=status.HTTP_201_CREATED)
async def add_user(request: Request, db: Session = Depends(get_db)):
    """
    Creates one user from a {"name": ...} body and returns it with its new id.
    """
    body = await request.body()
    try:
        req = AddUserRequest.model_validate_json(body)
    except ValidationError as e:
        logger.warning("Error decoding request body: %s", e)
        return _error(status.HTTP_400_BAD_REQUEST, "Invalid request payload")

    if not req.name:
        return _error(status.HTTP_400_BAD_REQUEST, "Name is required")

    try:
        user = await run_in_threadpool(create_user, db, req.name)
    except RepositoryError:
        logger.exception("Error inserting user")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to add user to database")

    return user.to_dict()


@router.api_route(
    USERS_PATH,
    methods=["PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"],
    include_in_schema=False,
)
def method_not_allowed():
    return JSONResponse(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        content={"error": "Method not allowed"},
        headers={"Allow": ", ".join(ALLOWED_METHODS)},
    )
