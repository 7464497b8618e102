# mockapi/schemas/project.py
from typing import Optional
from pydantic import Field, field_validator

from mockapi.schemas.base import CamelModel, reject_null, require_leading_slash


class Project(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    base_path: str
    created_at: int
    updated_at: int


class ProjectCreate(CamelModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    base_path: str

    @field_validator("base_path")
    @classmethod
    def check_base_path(cls, v: str) -> str:
        return require_leading_slash(v, "basePath")


class ProjectUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    base_path: Optional[str] = None

    @field_validator("name")
    @classmethod
    def check_name(cls, v):
        return reject_null(v, "name")

    @field_validator("base_path")
    @classmethod
    def check_base_path(cls, v):
        return require_leading_slash(reject_null(v, "basePath"), "basePath")
