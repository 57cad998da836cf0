from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class HealthResponse(BaseModel):
    status: str
    time: str
    environment: str


class Prompt(BaseModel):
    key: str
    title: str


class PlaylistIdsResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    wrapped_id: Optional[str] = Field(default=None, alias="wrappedId")
    peace_id: Optional[str] = Field(default=None, alias="peaceId")
    worship_id: Optional[str] = Field(default=None, alias="worshipId")
