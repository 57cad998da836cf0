from pydantic import BaseModel
from typing import Optional


class TrackSummary(BaseModel):
    """Normalized search result from the catalog"""
    id: str
    uri: str
    name: str
    artists: str
    album: str
    image: Optional[str] = None
