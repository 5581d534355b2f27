from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Final, TypeAlias

FORMAT_VERSION: Final[float] = 1.0
DEFAULT_FRAMERATE: Final[float] = 240.0
UINT32_MAX: Final[int] = 0xFFFFFFFF

BUTTON_JUMP: Final[int] = 1
BUTTON_LEFT: Final[int] = 2
BUTTON_RIGHT: Final[int] = 3

ExtensionTree: TypeAlias = dict[str, Any]


@dataclass(slots=True)
class Bot:
    name: str
    version: str


@dataclass(slots=True)
class Level:
    id: int = 0
    name: str = ""


@dataclass(slots=True)
class Input:
    frame: int
    button: int
    player2: bool = False
    down: bool = True
    extra: ExtensionTree = field(default_factory=dict)

    @classmethod
    def hold(cls, frame: int, button: int, player2: bool = False) -> Input:
        return cls(frame=int(frame), button=int(button), player2=bool(player2), down=True)

    @classmethod
    def release(cls, frame: int, button: int, player2: bool = False) -> Input:
        return cls(frame=int(frame), button=int(button), player2=bool(player2), down=False)

    def __lt__(self, other: object) -> bool:
        # Frame-only ordering for callers that want to sort; the replay itself never does.
        if not isinstance(other, Input):
            return NotImplemented
        return self.frame < other.frame


@dataclass(slots=True)
class Replay:
    """One recorded playback session.

    The model holds data only. Wire validity is checked by the codec, so a
    `Replay` built in memory may carry any values (including `framerate <= 0`,
    which makes `frame_for_time` meaningless).
    """

    bot: Bot
    level: Level = field(default_factory=Level)
    author: str = ""
    description: str = ""
    duration: float = 0.0
    game_version: float = 0.0
    version: float = FORMAT_VERSION
    framerate: float = DEFAULT_FRAMERATE
    seed: int = 0
    coins: int = 0
    low_detail_mode: bool = False
    inputs: list[Input] = field(default_factory=list)
    extra: ExtensionTree = field(default_factory=dict)

    @classmethod
    def create(cls, bot_name: str, bot_version: str, **fields: Any) -> Replay:
        return cls(bot=Bot(name=str(bot_name), version=str(bot_version)), **fields)

    def frame_for_time(self, time: float) -> int:
        """Map a time offset in seconds to a frame index at `framerate`."""

        return int(math.floor(float(time) * float(self.framerate)))

    def add_input(self, inp: Input) -> None:
        self.inputs.append(inp)
