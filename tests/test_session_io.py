import json

import pytest

from app.helpers.exception_handler import MalformedSessionError
from app.helpers.session_io import (
    dump_session_record, export_session, load_session_file, load_session_record, parse_session_record,
)

from conftest import linear_frames, make_session, session_payload


def test_load_canonical_record():
    session = load_session_record(json.dumps(session_payload()))
    assert session.id == 'session_a'
    assert session.duration_ms == 5000
    assert session.wave_start_ms == 0
    assert len(session.frames) == 20
    assert session.frames[0].shoulder is not None
    assert session.frames[-1].wrist.x == pytest.approx(0.8)


def test_load_legacy_field_names():
    session = load_session_record(json.dumps(session_payload(legacy=True)))
    assert len(session.frames) == 20
    assert session.frames[1].timestamp_ms == 33
    assert session.frames[1].wrist.confidence == 1.0
    assert session.frames[1].shoulder is None


@pytest.mark.parametrize('text', [
    'not json',
    '[]',
    '{"id": "x", "frames": [{"timestampMs": 0}]}',
    '{"id": "x", "durationMs": -5, "frames": []}',
])
def test_malformed_records_are_rejected(text):
    with pytest.raises(MalformedSessionError):
        load_session_record(text)


def test_empty_frames_are_rejected_on_load():
    payload = session_payload()
    payload['frames'] = []
    with pytest.raises(MalformedSessionError, match='no frames'):
        load_session_record(json.dumps(payload))
    assert parse_session_record(payload, require_frames=False).frames == []


def test_dump_uses_canonical_names():
    session = make_session(linear_frames(n=5), wave_start_ms=33, wave_end_ms=None)
    data = json.loads(dump_session_record(session))
    assert data['createdAt'] == '2025-01-12T10:31:05.120Z'
    assert data['durationMs'] == 5000
    assert data['waveStartMs'] == 33
    assert data['waveEndMs'] is None
    assert set(data['frames'][0]) == {'timestampMs', 'wrist', 'shoulder', 'elbow', 'elbowAngleDeg'}


def test_dump_keeps_integer_milliseconds():
    session = make_session(linear_frames(n=5), wave_start_ms=33, wave_end_ms=132)
    text = dump_session_record(session)
    assert '"durationMs": 5000,' in text
    assert '"timestampMs": 33,' in text

    data = json.loads(text)
    assert isinstance(data['durationMs'], int)
    assert isinstance(data['waveStartMs'], int)
    assert isinstance(data['waveEndMs'], int)
    assert all(isinstance(f['timestampMs'], int) for f in data['frames'])


def test_fractional_milliseconds_are_kept():
    payload = json.loads(dump_session_record(make_session(linear_frames(n=5))))
    payload['durationMs'] = 4999.5
    payload['frames'][1]['timestampMs'] = 33.25
    data = json.loads(dump_session_record(parse_session_record(payload).to_domain()))
    assert data['durationMs'] == 4999.5
    assert data['frames'][1]['timestampMs'] == 33.25


def test_export_and_reload(tmp_path):
    session = make_session(linear_frames(n=6), wave_start_ms=0, wave_end_ms=165,
                           session_id='session_2025-01-12T10:31:05.120Z')
    path = export_session(session, tmp_path / 'sessions')
    assert path.name == 'session_2025-01-12T10_31_05_120Z.json'
    assert load_session_file(path) == session
