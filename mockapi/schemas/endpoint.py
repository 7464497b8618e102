# mockapi/schemas/endpoint.py
from typing import Any, Dict, Literal, Optional
from pydantic import Field, field_validator

from mockapi.schemas.base import CamelModel, reject_null, require_leading_slash

HttpMethod = Literal["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS", "HEAD"]


class MockResponse(CamelModel):
    status: int = Field(default=200, ge=100, le=599)
    headers: Dict[str, str] = Field(default_factory=dict)
    body: Any = None
    delay: Optional[int] = Field(default=None, ge=0)  # milliseconds

    @field_validator("headers", mode="before")
    @classmethod
    def default_headers(cls, v):
        return {} if v is None else v


class Endpoint(CamelModel):
    id: str
    project_id: str
    path: str
    method: HttpMethod
    response: MockResponse
    enabled: bool = True
    created_at: int
    updated_at: int


class EndpointCreate(CamelModel):
    project_id: str
    path: str
    method: HttpMethod
    response: MockResponse = Field(default_factory=MockResponse)
    enabled: bool = True

    @field_validator("path")
    @classmethod
    def check_path(cls, v: str) -> str:
        return require_leading_slash(v, "path")


class EndpointUpdate(CamelModel):
    project_id: Optional[str] = None
    path: Optional[str] = None
    method: Optional[HttpMethod] = None
    response: Optional[MockResponse] = None
    enabled: Optional[bool] = None

    @field_validator("project_id", "method", "response", "enabled")
    @classmethod
    def check_not_null(cls, v, info):
        return reject_null(v, info.field_name)

    @field_validator("path")
    @classmethod
    def check_path(cls, v):
        return require_leading_slash(reject_null(v, "path"), "path")
