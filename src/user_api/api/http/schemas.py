"""Uniform JSON envelope returned by every user endpoint."""

from pydantic import BaseModel, Field
from starlette.responses import JSONResponse

from src.user_api.entities.user.entity import User


class ApiResponse(BaseModel):
    """``{success, message?, data?, count?}``; unset optional fields are omitted."""

    success: bool
    message: str | None = None
    data: User | list[User] | None = None
    count: int | None = Field(default=None, description="Present only on list responses")


def envelope(
    status_code: int,
    *,
    success: bool,
    message: str | None = None,
    data: User | list[User] | None = None,
    count: int | None = None,
) -> JSONResponse:
    body = ApiResponse(success=success, message=message, data=data, count=count)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", exclude_none=True),
    )
