# mockapi/schemas/settings.py
from typing import Dict, List, Optional
from pydantic import Field, field_validator

from mockapi.schemas.base import CamelModel, reject_null


class GlobalSettings(CamelModel):
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    cors_headers: List[str] = Field(default_factory=lambda: ["Content-Type", "Authorization", "X-Requested-With"])
    cors_methods: List[str] = Field(default_factory=lambda: ["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"])
    default_headers: Dict[str, str] = Field(default_factory=lambda: {"Content-Type": "application/json"})
    auth_enabled: bool = True


class SettingsUpdate(CamelModel):
    cors_origins: Optional[List[str]] = None
    cors_headers: Optional[List[str]] = None
    cors_methods: Optional[List[str]] = None
    default_headers: Optional[Dict[str, str]] = None
    auth_enabled: Optional[bool] = None

    @field_validator("*")
    @classmethod
    def check_not_null(cls, v, info):
        return reject_null(v, info.field_name)
