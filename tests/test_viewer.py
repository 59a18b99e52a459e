from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import pytest

from config import get_settings
from images import create_synthetic_pairs
from session import Session
from viewer import KEY_DOWN, KEY_UP, build_session, handle_key


@pytest.fixture
def session() -> Session:
    return Session(pairs=create_synthetic_pairs(3, size=(24, 32)))


def test_digit_selects_pair(session: Session) -> None:
    assert handle_key(session, ord('2'))
    assert session.pair_index == 1


def test_digit_without_pair_is_ignored(session: Session) -> None:
    assert handle_key(session, ord('9'))
    assert session.pair_index == 0


@pytest.mark.parametrize("key", sorted(KEY_UP))
def test_up_keys_raise_threshold(session: Session, key: int) -> None:
    handle_key(session, key)
    assert session.threshold == pytest.approx(0.21)


@pytest.mark.parametrize("key", sorted(KEY_DOWN))
def test_down_keys_lower_threshold(session: Session, key: int) -> None:
    handle_key(session, key)
    assert session.threshold == pytest.approx(0.19)


def test_quit_keys(session: Session) -> None:
    assert not handle_key(session, ord('q'))
    assert not handle_key(session, 27)


def test_no_key_keeps_running(session: Session) -> None:
    assert handle_key(session, -1)
    assert session.threshold == pytest.approx(0.2)
    assert session.pair_index == 0


def test_build_session_falls_back_to_synthetic_pairs(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("AXIS_IMAGE_DIR", raising=False)
    settings = replace(get_settings(), synthetic_pairs=4)

    built = build_session(settings, threshold=0.5)

    assert len(built.pairs) == 4
    assert built.threshold == pytest.approx(0.5)


def test_build_session_reports_missing_directory(tmp_path: Path) -> None:
    settings = get_settings()

    with pytest.raises(FileNotFoundError):
        build_session(settings, image_dir=str(tmp_path / "missing"))
