from typing import Any, Generic, Optional, TypeVar

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Envelope every endpoint answers with; used for the OpenAPI docs."""
    status_code: int = 200
    status: str = "success"
    message: str
    data: T


def api_response(
    *,
    data: Optional[Any] = None,
    message: str = "Operation successful",
    status_code: int = status.HTTP_200_OK,
) -> JSONResponse:
    """
    Wrap a payload in the {status_code, status, message, data} envelope.
    status is "success" below 400 and "error" from 400 up.
    """
    return JSONResponse(
        status_code=status_code,
        content={
            "status_code": status_code,
            "status": "success" if status_code < 400 else "error",
            "message": message,
            "data": jsonable_encoder(data) if data is not None else {},
        },
    )
