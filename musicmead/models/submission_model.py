from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

ROUND_KEYS = ("wrapped", "peace", "worship")


class Track(BaseModel):
    """A song picked for a round, plus the submitter's optional caption"""
    id: str
    uri: str
    name: str
    artists: str
    album: Optional[str] = None
    image: Optional[str] = None
    caption: Optional[str] = None


class Rounds(BaseModel):
    wrapped: Optional[Track] = None
    peace: Optional[Track] = None
    worship: Optional[Track] = None


class Submission(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    rounds: Rounds
    created_at: str = Field(alias="createdAt")
    updated_at: Optional[str] = Field(default=None, alias="updatedAt")


class SubmissionRequest(BaseModel):
    name: str
    rounds: Rounds


class SubmissionResponse(BaseModel):
    ok: bool = True
    mode: str
    submission: Submission
