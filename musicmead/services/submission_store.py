"""
JSON file backed store for song submissions.

The whole collection is read on every call and rewritten on every mutation.
There is no locking: concurrent writers race and the last write wins.
"""
import json
import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union
from zoneinfo import ZoneInfo

from pydantic import ValidationError

from musicmead.core import config
from musicmead.models.submission_model import Rounds, Submission

logger = logging.getLogger(__name__)


class SubmissionStoreError(Exception):
    """Base class for submission store errors"""


class SubmissionExistsError(SubmissionStoreError):
    def __init__(self, name: str):
        super().__init__("A submission with that name already exists.")
        self.name = name


class SubmissionNotFoundError(SubmissionStoreError):
    def __init__(self, name: str):
        super().__init__("No existing submission found for that name.")
        self.name = name


def _normalize_name(name: str) -> str:
    return name.strip().lower()


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class SubmissionStore:
    """Create/read/update/delete submissions kept in a single JSON array file"""

    def __init__(self, file_path: Union[str, Path]):
        self.file_path = Path(file_path)

    def _ensure_file_exists(self) -> None:
        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        if not self.file_path.exists():
            self.file_path.write_text("[]", encoding="utf-8")

    def _load(self) -> Tuple[List[Submission], List[Any]]:
        """
        Read the file into (submissions, unreadable records).

        Records that fail validation are kept aside untouched so the next
        write puts them back instead of dropping them.
        """
        try:
            self._ensure_file_exists()
            text = self.file_path.read_text(encoding="utf-8")
            items = json.loads(text or "[]")
        except (OSError, ValueError) as e:
            logger.error(f"Error reading {self.file_path}: {str(e)}")
            return [], []
        if not isinstance(items, list):
            logger.error(f"Error reading {self.file_path}: expected a JSON array of submissions")
            return [], []

        submissions = []
        unreadable = []
        for idx, item in enumerate(items):
            try:
                submissions.append(Submission.model_validate(item))
            except ValidationError as e:
                logger.error(f"Skipping unreadable submission at index {idx} in {self.file_path}: {str(e)}")
                unreadable.append(item)
        return submissions, unreadable

    def _read_raw(self) -> List[Submission]:
        return self._load()[0]

    def _write_raw(self, submissions: List[Submission], unreadable: Optional[List[Any]] = None) -> None:
        self._ensure_file_exists()
        data = [s.model_dump(by_alias=True) for s in submissions] + list(unreadable or [])
        self.file_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        self._log_snapshot(data)

    def _log_snapshot(self, data: List[Dict[str, Any]]) -> None:
        """Dump the full collection to the log so it can be rebuilt from there"""
        timestamp = datetime.now(ZoneInfo(config.DISPLAY_TIMEZONE)).strftime("%m/%d/%Y, %H:%M:%S")
        logger.info(f"SUBMISSIONS_SNAPSHOT [{timestamp} PT]: {json.dumps(data)}")

    @staticmethod
    def _find_index_by_name(submissions: List[Submission], name: str) -> int:
        target = _normalize_name(name)
        for idx, submission in enumerate(submissions):
            if _normalize_name(submission.name) == target:
                return idx
        return -1

    def list_submissions(self) -> List[Submission]:
        return self._read_raw()

    def get_submission_by_name(self, name: str) -> Optional[Submission]:
        submissions = self._read_raw()
        idx = self._find_index_by_name(submissions, name)
        if idx == -1:
            return None
        return submissions[idx]

    def create_submission(self, name: str, rounds: Rounds) -> Submission:
        """Add a submission for a name that has none yet"""
        submissions, unreadable = self._load()
        if self._find_index_by_name(submissions, name) != -1:
            logger.info(f"Rejected duplicate submission for name: {name}")
            raise SubmissionExistsError(name)

        submission = Submission(
            id=uuid.uuid4().hex,
            name=name.strip(),
            rounds=rounds,
            created_at=_utc_now(),
            updated_at=None,
        )
        submissions.append(submission)
        self._write_raw(submissions, unreadable)
        logger.info(f"Created submission {submission.id} for {submission.name}")
        return submission

    def update_submission_by_name(self, name: str, changes: Dict[str, Any]) -> Submission:
        """
        Merge changes into the submission matching name.

        id and createdAt are never overwritten; updatedAt is stamped with the
        current time.
        """
        submissions, unreadable = self._load()
        idx = self._find_index_by_name(submissions, name)
        if idx == -1:
            raise SubmissionNotFoundError(name)

        changes = {k: v for k, v in changes.items() if k not in ("id", "created_at")}
        if "name" in changes:
            changes["name"] = changes["name"].strip()
        changes["updated_at"] = _utc_now()

        updated = submissions[idx].model_copy(update=changes)
        submissions[idx] = updated
        self._write_raw(submissions, unreadable)
        logger.info(f"Updated submission {updated.id} for {updated.name}")
        return updated

    def delete_submission(self, submission_id: str) -> bool:
        """Remove a submission by id. Returns False when no submission has that id."""
        submissions, unreadable = self._load()
        remaining = [s for s in submissions if s.id != submission_id]
        if len(remaining) == len(submissions):
            return False

        self._write_raw(remaining, unreadable)
        logger.info(f"Deleted submission {submission_id}")
        return True


# Global instance
submission_store = SubmissionStore(config.DATA_FILE)


def get_submission_store() -> SubmissionStore:
    return submission_store
