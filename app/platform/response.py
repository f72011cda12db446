from typing import Any, Optional

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def api_response(
    *,
    data: Optional[Any] = None,
    status_code: int = status.HTTP_200_OK,
) -> JSONResponse:
    """
    JSON response with the payload at the top level.
    Pydantic models are dumped by alias so wire keys stay camelCase.
    """
    content = jsonable_encoder(data, by_alias=True) if data is not None else {}
    return JSONResponse(status_code=status_code, content=content)


def error_response(
    message: str,
    *,
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
    details: Optional[Any] = None,
) -> JSONResponse:
    content = {"error": message}
    if details is not None:
        content["details"] = jsonable_encoder(details)
    return JSONResponse(status_code=status_code, content=content)
