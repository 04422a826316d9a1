"""
Session record loading and export.

Text in, validated domain Session out (and back). Shape failures surface
as MalformedSessionError so callers never see a half-loaded session.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

from pydantic import ValidationError

from app.helpers.exception_handler import MalformedSessionError
from app.motion.core.data_types import Session
from app.schemas.sche_session import SessionRecord

logger = logging.getLogger(__name__)


def _validation_message(error: ValidationError) -> str:
    first = error.errors()[0]
    location = '.'.join(str(p) for p in first.get('loc', ()))
    return f"{location}: {first.get('msg')}" if location else first.get('msg', 'invalid record')


def parse_session_record(payload: Dict[str, Any], require_frames: bool = True) -> SessionRecord:
    """
    Validate a decoded JSON object as a session record.

    Args:
        payload: Decoded JSON object
        require_frames: Reject records with an empty frames array

    Raises:
        MalformedSessionError: On any shape violation
    """
    if not isinstance(payload, dict):
        raise MalformedSessionError("session record must be a JSON object")
    try:
        record = SessionRecord.model_validate(payload)
    except ValidationError as e:
        raise MalformedSessionError(_validation_message(e)) from e
    if require_frames:
        ensure_frames(record)
    return record


def ensure_frames(record: SessionRecord) -> SessionRecord:
    if not record.frames:
        raise MalformedSessionError(f"session {record.id} has no frames")
    return record


def load_session_record(text: Union[str, bytes]) -> Session:
    """
    Load a session record from JSON text.

    Raises:
        MalformedSessionError: Invalid JSON, wrong shape or no frames
    """
    try:
        payload = json.loads(text)
    except (TypeError, ValueError) as e:
        raise MalformedSessionError(f"invalid JSON: {e}") from e
    record = parse_session_record(payload)
    logger.debug("Loaded session %s with %d frames", record.id, len(record.frames))
    return record.to_domain()


def load_session_file(path: Union[str, Path]) -> Session:
    return load_session_record(Path(path).read_text(encoding='utf-8'))


def dump_session_record(session: Session) -> str:
    """Serialize a session as indented JSON in the canonical field names."""
    return json.dumps(SessionRecord.from_domain(session).to_json_dict(), indent=2)


def export_session(session: Session, output_dir: Union[str, Path]) -> Path:
    """Write a session to `<output_dir>/<id>.json` and return the path."""
    directory = Path(output_dir)
    directory.mkdir(parents=True, exist_ok=True)
    safe_id = "".join(c if c.isalnum() or c in "-_" else "_" for c in session.id)
    path = directory / f"{safe_id}.json"
    path.write_text(dump_session_record(session), encoding='utf-8')
    logger.info("Exported session %s to %s", session.id, path)
    return path
