from pydantic import BaseModel, ConfigDict, Field
from typing import Dict


class AdminEnabledResponse(BaseModel):
    enabled: bool


class AdminLoginResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    token: str
    expires_at: str = Field(alias="expiresAt")


class OkResponse(BaseModel):
    ok: bool = True


class SyncResponse(BaseModel):
    ok: bool = True
    count: int
    tracks: Dict[str, int]
