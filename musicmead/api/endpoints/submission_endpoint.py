from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import ValidationError
from typing import Any, List, Tuple
import logging
from musicmead.utils.request_utils import read_json_body
from musicmead.models.submission_model import ROUND_KEYS, Rounds, Submission, SubmissionResponse, Track
from musicmead.services.submission_store import (
    SubmissionExistsError,
    SubmissionNotFoundError,
    SubmissionStore,
    get_submission_store,
)

logger = logging.getLogger(__name__)
router = APIRouter()

REQUIRED_TRACK_FIELDS = ("id", "uri", "name", "artists")


def parse_submission_body(body: Any) -> Tuple[str, Rounds]:
    """Validate a {name, rounds} payload; every round needs a complete track"""
    if not isinstance(body, dict):
        raise HTTPException(status_code=400, detail="Request body must be a JSON object")

    name = body.get("name")
    if not isinstance(name, str) or not name.strip():
        raise HTTPException(status_code=400, detail="Name is required")

    rounds = body.get("rounds")
    if not isinstance(rounds, dict):
        rounds = {}

    tracks = {}
    for key in ROUND_KEYS:
        raw = rounds.get(key)
        if not isinstance(raw, dict) or not all(raw.get(field) for field in REQUIRED_TRACK_FIELDS):
            raise HTTPException(status_code=400, detail=f"Missing track info for {key}")
        try:
            tracks[key] = Track.model_validate(raw)
        except ValidationError:
            raise HTTPException(status_code=400, detail=f"Missing track info for {key}")

    return name.strip(), Rounds(**tracks)


@router.post("/submit", response_model=SubmissionResponse)
async def create_submission(
    request: Request,
    store: SubmissionStore = Depends(get_submission_store)
) -> SubmissionResponse:
    """Save a new set of picks for a name that has not submitted yet"""
    name, rounds = parse_submission_body(await read_json_body(request))
    try:
        submission = store.create_submission(name, rounds)
    except SubmissionExistsError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return SubmissionResponse(mode="create", submission=submission)


@router.put("/submit", response_model=SubmissionResponse)
async def update_submission(
    request: Request,
    store: SubmissionStore = Depends(get_submission_store)
) -> SubmissionResponse:
    """Replace the picks of an existing submission, matched by name"""
    name, rounds = parse_submission_body(await read_json_body(request))
    try:
        submission = store.update_submission_by_name(name, {"name": name, "rounds": rounds})
    except SubmissionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return SubmissionResponse(mode="update", submission=submission)


@router.get("/submission", response_model=Submission)
async def get_submission(
    name: str = "",
    store: SubmissionStore = Depends(get_submission_store)
) -> Submission:
    """Look up a submission by name so it can be edited"""
    name = name.strip()
    if not name:
        raise HTTPException(status_code=400, detail="Name is required")

    submission = store.get_submission_by_name(name)
    if submission is None:
        raise HTTPException(status_code=404, detail="No submission for that name.")
    return submission


@router.get("/submissions", response_model=List[Submission])
async def list_submissions(
    store: SubmissionStore = Depends(get_submission_store)
) -> List[Submission]:
    return store.list_submissions()
