# mockapi/api/responses.py
from typing import Any

from fastapi.responses import JSONResponse
from pydantic import BaseModel


def _wire(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(by_alias=True, mode="json")
    if isinstance(data, list):
        return [_wire(item) for item in data]
    return data


def ok(data: Any = None, status_code: int = 200) -> JSONResponse:
    content = {"success": True}
    if data is not None:
        content["data"] = _wire(data)
    return JSONResponse(content=content, status_code=status_code)


def fail(error: str, status_code: int) -> JSONResponse:
    return JSONResponse(content={"success": False, "error": error}, status_code=status_code)
