# mockapi/schemas/base.py
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case attributes in Python, camelCase keys on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


def reject_null(value, field_name: str):
    if value is None:
        raise ValueError(f"{field_name} cannot be null")
    return value


def require_leading_slash(value: str, field_name: str) -> str:
    if not value.startswith("/"):
        raise ValueError(f"{field_name} must start with /")
    return value
