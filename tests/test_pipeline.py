import pytest

from workbooster.services.exceptions import PipelineError
from workbooster.services.pipeline import first_stage_id, first_status_id, resolve_status


def test_first_stage_and_status(db):
    assert first_stage_id(db) == 1
    assert first_status_id(db, 4) == 7


def test_explicit_status_must_match_stage(db):
    assert resolve_status(db, 4, status_id=8) == 8
    with pytest.raises(PipelineError):
        resolve_status(db, 4, status_id=1)
    with pytest.raises(PipelineError):
        resolve_status(db, 4, status_id=999)


def test_current_status_kept_when_valid(db):
    assert resolve_status(db, 4, current_status_id=8) == 8


def test_current_status_reset_when_stage_changes(db):
    assert resolve_status(db, 5, current_status_id=8) == 9


def test_unknown_stage(db):
    with pytest.raises(PipelineError):
        resolve_status(db, 99)
