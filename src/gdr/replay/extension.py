from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Final, Protocol

from .fields import BOT_KEY, BOT_KEYS, INPUT_KEYS, LEVEL_KEY, LEVEL_KEYS, REPLAY_KEYS
from .types import ExtensionTree, Input, Replay


class ReplayExtension(Protocol):
    """Consumer-specific fields carried through the codec.

    `parse_*` hooks run during import with the full decoded tree of the entity,
    after the known fields are assigned. `save_*` hooks run during export and
    seed the output tree; known fields are written over whatever they return.
    Exceptions raised by a hook propagate out of the codec unchanged.
    """

    def parse_replay(self, replay: Replay, tree: ExtensionTree) -> None: ...

    def save_replay(self, replay: Replay) -> ExtensionTree: ...

    def parse_input(self, inp: Input, tree: ExtensionTree) -> None: ...

    def save_input(self, inp: Input) -> ExtensionTree: ...


ReplayParseHook = Callable[[Replay, ExtensionTree], None]
ReplaySaveHook = Callable[[Replay], ExtensionTree]
InputParseHook = Callable[[Input, ExtensionTree], None]
InputSaveHook = Callable[[Input], ExtensionTree]


@dataclass(frozen=True, slots=True)
class ExtensionHooks:
    """Build an extension from plain functions; a missing function is a no-op."""

    on_parse_replay: ReplayParseHook | None = None
    on_save_replay: ReplaySaveHook | None = None
    on_parse_input: InputParseHook | None = None
    on_save_input: InputSaveHook | None = None

    def parse_replay(self, replay: Replay, tree: ExtensionTree) -> None:
        if self.on_parse_replay is not None:
            self.on_parse_replay(replay, tree)

    def save_replay(self, replay: Replay) -> ExtensionTree:
        if self.on_save_replay is None:
            return {}
        return self.on_save_replay(replay)

    def parse_input(self, inp: Input, tree: ExtensionTree) -> None:
        if self.on_parse_input is not None:
            self.on_parse_input(inp, tree)

    def save_input(self, inp: Input) -> ExtensionTree:
        if self.on_save_input is None:
            return {}
        return self.on_save_input(inp)


NO_EXTENSION: Final[ExtensionHooks] = ExtensionHooks()


def _unknown_keys(tree: ExtensionTree, known: frozenset[str]) -> ExtensionTree:
    return {key: value for key, value in tree.items() if key not in known}


def _copy_tree(tree: ExtensionTree) -> ExtensionTree:
    out: dict[str, Any] = {}
    for key, value in tree.items():
        out[key] = dict(value) if isinstance(value, dict) else value
    return out


class PassthroughExtension:
    """Keep every unrecognized key in `.extra` so it survives a round trip.

    Unknown keys nested under `bot` and `level` are kept under the same key in
    `replay.extra`, e.g. `{"bot": {"build": 7}}`.
    """

    def parse_replay(self, replay: Replay, tree: ExtensionTree) -> None:
        extra = _unknown_keys(tree, REPLAY_KEYS)
        for section, known in ((BOT_KEY, BOT_KEYS), (LEVEL_KEY, LEVEL_KEYS)):
            nested = tree.get(section)
            if isinstance(nested, dict):
                unknown = _unknown_keys(nested, known)
                if unknown:
                    extra[section] = unknown
        replay.extra = extra

    def save_replay(self, replay: Replay) -> ExtensionTree:
        return _copy_tree(replay.extra)

    def parse_input(self, inp: Input, tree: ExtensionTree) -> None:
        inp.extra = _unknown_keys(tree, INPUT_KEYS)

    def save_input(self, inp: Input) -> ExtensionTree:
        return dict(inp.extra)
