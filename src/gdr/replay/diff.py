from __future__ import annotations

from dataclasses import dataclass

from .types import Input, Replay

REPLAY_DIFF_FIELDS: tuple[str, ...] = (
    "author",
    "description",
    "duration",
    "game_version",
    "version",
    "framerate",
    "seed",
    "coins",
    "low_detail_mode",
    "bot.name",
    "bot.version",
    "level.id",
    "level.name",
    "extra",
)


@dataclass(frozen=True, slots=True)
class ReplayDiffFailure:
    kind: str
    field: str | None = None
    input_index: int | None = None
    expected: object = None
    actual: object = None


@dataclass(frozen=True, slots=True)
class ReplayDiffResult:
    ok: bool
    checked_count: int
    failure: ReplayDiffFailure | None = None


def _resolve(replay: Replay, dotted: str) -> object:
    value: object = replay
    for part in dotted.split("."):
        value = getattr(value, part)
    return value


def _input_row(inp: Input) -> tuple[int, int, bool, bool, dict[str, object]]:
    return (int(inp.frame), int(inp.button), bool(inp.player2), bool(inp.down), dict(inp.extra))


def compare_replays(
    expected: Replay,
    actual: Replay,
    *,
    fields: tuple[str, ...] = REPLAY_DIFF_FIELDS,
) -> ReplayDiffResult:
    """Report the first difference between two replays.

    Metadata is checked first (in `fields` order), then the input count, then
    inputs pairwise in stored order. `checked_count` counts compared inputs.
    """

    for name in fields:
        exp_value = _resolve(expected, name)
        act_value = _resolve(actual, name)
        if exp_value != act_value:
            return ReplayDiffResult(
                ok=False,
                checked_count=0,
                failure=ReplayDiffFailure(
                    kind="field_mismatch",
                    field=name,
                    expected=exp_value,
                    actual=act_value,
                ),
            )

    if len(expected.inputs) != len(actual.inputs):
        return ReplayDiffResult(
            ok=False,
            checked_count=0,
            failure=ReplayDiffFailure(
                kind="input_count_mismatch",
                expected=len(expected.inputs),
                actual=len(actual.inputs),
            ),
        )

    checked_count = 0
    for index, (exp, act) in enumerate(zip(expected.inputs, actual.inputs)):
        checked_count += 1
        if _input_row(exp) != _input_row(act):
            return ReplayDiffResult(
                ok=False,
                checked_count=checked_count,
                failure=ReplayDiffFailure(
                    kind="input_mismatch",
                    input_index=index,
                    expected=exp,
                    actual=act,
                ),
            )

    return ReplayDiffResult(ok=True, checked_count=checked_count, failure=None)
