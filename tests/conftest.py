from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from gdr.replay import Replay


def pytest_configure(config: pytest.Config) -> None:
    # Ensure the local `src/` tree wins over any other editable install that may exist
    # (e.g. a different git worktree pointing at the same project).
    src_dir = Path(__file__).resolve().parents[1] / "src"
    src_str = str(src_dir)
    if src_str not in sys.path:
        sys.path.insert(0, src_str)


@pytest.fixture
def sample_replay() -> Replay:
    from gdr.replay import BUTTON_JUMP, BUTTON_RIGHT, Input, Level, Replay

    replay = Replay.create(
        "mega hack",
        "v8.2",
        level=Level(id=128, name="Stereo Madness"),
        author="robtop",
        description="first try",
        duration=12.5,
        game_version=2.206,
        framerate=360.0,
        seed=0x1234,
        coins=3,
        low_detail_mode=True,
    )
    replay.add_input(Input.hold(10, BUTTON_JUMP))
    replay.add_input(Input.release(14, BUTTON_JUMP))
    replay.add_input(Input.hold(20, BUTTON_RIGHT, player2=True))
    return replay
