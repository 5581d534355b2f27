from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Annotated, Any, Final

import msgspec

from .types import UINT32_MAX

UInt32 = Annotated[int, msgspec.Meta(ge=0, le=UINT32_MAX)]


@dataclass(frozen=True, slots=True)
class WireField:
    """One wire key and the attribute it fills.

    `type` drives strict decoding through `msgspec.convert`; `cast` normalizes
    the in-memory value on export.
    """

    key: str
    attr: str
    type: Any
    cast: Callable[[Any], Any]
    required: bool = True


# Wire keys are fixed strings; attribute names are the in-memory side.
REPLAY_FIELDS: Final[tuple[WireField, ...]] = (
    WireField("gameVersion", "game_version", float, float),
    WireField("description", "description", str, str),
    WireField("version", "version", float, float),
    WireField("duration", "duration", float, float),
    WireField("author", "author", str, str),
    WireField("seed", "seed", int, int),
    WireField("coins", "coins", int, int),
    WireField("ldm", "low_detail_mode", bool, bool),
    WireField("framerate", "framerate", float, float, required=False),
)

BOT_FIELDS: Final[tuple[WireField, ...]] = (
    WireField("name", "name", str, str),
    WireField("version", "version", str, str),
)

LEVEL_FIELDS: Final[tuple[WireField, ...]] = (
    WireField("id", "id", UInt32, int),
    WireField("name", "name", str, str),
)

INPUT_FIELDS: Final[tuple[WireField, ...]] = (
    WireField("frame", "frame", UInt32, int),
    WireField("btn", "button", int, int),
    WireField("2p", "player2", bool, bool),
    WireField("down", "down", bool, bool),
)

BOT_KEY: Final[str] = "bot"
LEVEL_KEY: Final[str] = "level"
INPUTS_KEY: Final[str] = "inputs"

# (section key, rows); `None` is the top-level object.
REPLAY_SECTIONS: Final[tuple[tuple[str | None, tuple[WireField, ...]], ...]] = (
    (None, REPLAY_FIELDS),
    (BOT_KEY, BOT_FIELDS),
    (LEVEL_KEY, LEVEL_FIELDS),
)

REPLAY_KEYS: Final[frozenset[str]] = frozenset(
    {row.key for row in REPLAY_FIELDS} | {BOT_KEY, LEVEL_KEY, INPUTS_KEY}
)
BOT_KEYS: Final[frozenset[str]] = frozenset(row.key for row in BOT_FIELDS)
LEVEL_KEYS: Final[frozenset[str]] = frozenset(row.key for row in LEVEL_FIELDS)
INPUT_KEYS: Final[frozenset[str]] = frozenset(row.key for row in INPUT_FIELDS)
