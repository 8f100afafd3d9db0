"""Pydantic schemas for Link model."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class LinkCreate(BaseModel):
    """Fields accepted when adding a link."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    platform: str = Field(min_length=1, max_length=50)
    url: str = Field(min_length=1, max_length=2048)
    title: str | None = Field(None, max_length=100)
    active: bool = True


class LinkUpdate(BaseModel):
    """Partial update. Unknown keys such as order or userId are dropped."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    url: str | None = Field(None, max_length=2048)
    title: str | None = Field(None, max_length=100)
    active: bool | None = None


class LinkRead(BaseModel):
    """Full link output."""

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: int
    user_id: int
    platform: str
    url: str
    title: str | None = None
    active: bool = True
    order: int = 0
    created_at: datetime
    updated_at: datetime
