# tests/test_job_store.py

from __future__ import annotations

from pathlib import Path

import pytest

from switchbuddy.core.errors import AuthenticationRequiredError, OwnershipError, RecordNotFoundError
from switchbuddy.jobs.job_models import JobStage
from switchbuddy.jobs.job_store import JobApplicationStore, build_board


def test_add_move_delete(tmp_path: Path) -> None:
    store = JobApplicationStore(tmp_path / "jobs.sqlite3")

    a = store.add_application("u1", company="Acme", title="Backend Engineer")
    b = store.add_application("u1", company="Globex", title="SRE", stage=JobStage.APPLYING)

    store.move_application("u1", a, JobStage.INTERVIEW)
    apps = {x.id: x for x in store.list_applications("u1")}
    assert apps[a].stage == JobStage.INTERVIEW
    assert apps[b].stage == JobStage.APPLYING

    store.delete_application("u1", b)
    assert [x.id for x in store.list_applications("u1")] == [a]


def test_board_has_every_column_in_order(tmp_path: Path) -> None:
    store = JobApplicationStore(tmp_path / "jobs.sqlite3")
    store.add_application("u1", company="Acme", title="Dev", stage=JobStage.OFFER)

    board = build_board(store.list_applications("u1"))

    assert list(board) == [JobStage.WISHLIST, JobStage.APPLYING, JobStage.INTERVIEW, JobStage.OFFER, JobStage.REJECTED]
    assert [x.company for x in board[JobStage.OFFER]] == ["Acme"]
    assert board[JobStage.WISHLIST] == []


def test_ownership_and_validation(tmp_path: Path) -> None:
    store = JobApplicationStore(tmp_path / "jobs.sqlite3")
    a = store.add_application("u1", company="Acme", title="Dev")

    with pytest.raises(AuthenticationRequiredError):
        store.add_application("", company="X", title="Y")
    with pytest.raises(ValueError):
        store.add_application("u1", company=" ", title="Y")
    with pytest.raises(OwnershipError):
        store.move_application("u2", a, JobStage.REJECTED)
    with pytest.raises(RecordNotFoundError):
        store.delete_application("u1", "missing")
    assert store.list_applications("") == []


@pytest.mark.parametrize("raw", ["offer", "OFFER", " Offer "])
def test_stage_parse_is_case_insensitive(raw: str) -> None:
    assert JobStage.parse(raw) == JobStage.OFFER


def test_stage_parse_rejects_unknown() -> None:
    with pytest.raises(ValueError):
        JobStage.parse("ghosted")
