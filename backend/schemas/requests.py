"""Request body models for the Users API."""

from pydantic import BaseModel, StrictInt, StrictStr, field_validator


class UserPayload(BaseModel):
    """Create/update body. Missing or null fields decode to zero values; ``id`` is ignored."""

    name: StrictStr = ""
    age: StrictInt = 0

    @field_validator("name", mode="before")
    @classmethod
    def _null_name(cls, v):
        return "" if v is None else v

    @field_validator("age", mode="before")
    @classmethod
    def _null_age(cls, v):
        return 0 if v is None else v


class UserRef(BaseModel):
    id: StrictInt

    @field_validator("id", mode="before")
    @classmethod
    def _null_id(cls, v):
        return 0 if v is None else v
