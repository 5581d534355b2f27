from __future__ import annotations

import warnings

import pytest

from gdr.replay import (
    ReplayFormatVersionWarning,
    Replay,
    export_replay,
    import_replay,
    warn_on_format_version_mismatch,
)


def test_replay_version_is_carried_through_unchanged() -> None:
    replay = Replay.create("echo", "1.2", version=2.5)

    decoded = import_replay(export_replay(replay))

    assert decoded is not None
    assert decoded.version == 2.5


def test_replay_version_mismatch_warns() -> None:
    replay = Replay.create("echo", "1.2", version=2.0)

    with pytest.warns(ReplayFormatVersionWarning, match="mismatch"):
        assert warn_on_format_version_mismatch(replay, action="conversion")


def test_replay_version_match_is_silent() -> None:
    replay = Replay.create("echo", "1.2")

    with warnings.catch_warnings():
        warnings.simplefilter("error")
        assert warn_on_format_version_mismatch(replay) is False
