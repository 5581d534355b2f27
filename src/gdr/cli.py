from __future__ import annotations

from pathlib import Path

import typer

from .replay import (
    PassthroughExtension,
    Replay,
    ReplayDecodeError,
    compare_replays,
    dump_replay_file,
    load_replay_file,
    sniff_encoding,
    warn_on_format_version_mismatch,
)

app = typer.Typer(add_completion=False)
replay_app = typer.Typer(add_completion=False)
app.add_typer(replay_app, name="replay")


def _load_or_exit(path: Path, *, import_inputs: bool = True) -> Replay:
    if not path.is_file():
        typer.echo(f"replay file not found: {path}", err=True)
        raise typer.Exit(code=1)
    try:
        return load_replay_file(path, import_inputs=import_inputs, extension=PassthroughExtension())
    except ReplayDecodeError as exc:
        typer.echo(f"invalid replay ({exc.reason}): {path}: {exc}", err=True)
        raise typer.Exit(code=1) from exc


@replay_app.command("info")
def cmd_replay_info(
    replay_file: Path = typer.Argument(..., help="replay file path (.gdr or .json)"),
    inputs: bool = typer.Option(True, "--inputs/--no-inputs", help="parse the input list (default: yes)"),
) -> None:
    """Print replay metadata."""
    replay = _load_or_exit(Path(replay_file), import_inputs=inputs)
    encoding = sniff_encoding(Path(replay_file).read_bytes())
    warn_on_format_version_mismatch(replay, action="inspection")

    typer.echo(f"encoding: {encoding}")
    typer.echo(f"bot: {replay.bot.name} {replay.bot.version}")
    typer.echo(f"level: {replay.level.name} (id={int(replay.level.id)})")
    typer.echo(f"author: {replay.author}")
    typer.echo(f"game_version: {replay.game_version} format_version: {replay.version}")
    typer.echo(f"duration: {replay.duration:.3f}s framerate: {replay.framerate}")
    typer.echo(f"seed: {replay.seed} coins: {replay.coins} ldm: {replay.low_detail_mode}")
    if inputs:
        p2_count = sum(1 for inp in replay.inputs if inp.player2)
        typer.echo(f"inputs: {len(replay.inputs)} (p1={len(replay.inputs) - p2_count}, p2={p2_count})")
    if replay.extra:
        typer.echo(f"extension keys: {', '.join(sorted(replay.extra))}")


@replay_app.command("convert")
def cmd_replay_convert(
    replay_file: Path = typer.Argument(..., help="input replay (either encoding)"),
    output_file: Path = typer.Argument(..., help="output replay path"),
    output_format: str = typer.Option(
        "auto",
        "--format",
        help="output encoding: auto, json, msgpack (auto: JSON for a .json suffix, MessagePack otherwise)",
    ),
) -> None:
    """Re-encode a replay, keeping unrecognized extension keys."""
    format_map: dict[str, bool | None] = {"auto": None, "json": True, "msgpack": False}
    key = str(output_format).strip().lower()
    if key not in format_map:
        raise typer.BadParameter(f"unknown format {output_format!r}", param_hint="--format")
    replay = _load_or_exit(Path(replay_file))
    dump_replay_file(Path(output_file), replay, as_text=format_map[key], extension=PassthroughExtension())
    typer.echo(f"wrote {output_file} ({len(replay.inputs)} inputs)")


@replay_app.command("diff")
def cmd_replay_diff(
    expected_file: Path = typer.Argument(..., help="expected replay"),
    actual_file: Path = typer.Argument(..., help="actual replay"),
) -> None:
    """Compare two replays and report the first divergence."""
    expected = _load_or_exit(Path(expected_file))
    actual = _load_or_exit(Path(actual_file))
    diff = compare_replays(expected, actual)
    if not diff.ok:
        failure = diff.failure
        assert failure is not None
        if failure.kind == "field_mismatch":
            typer.echo(f"field mismatch: {failure.field}", err=True)
        elif failure.kind == "input_count_mismatch":
            typer.echo("input count mismatch", err=True)
        else:
            typer.echo(f"input mismatch at index={failure.input_index}", err=True)
        typer.echo(f"  expected={failure.expected!r}", err=True)
        typer.echo(f"  actual={failure.actual!r}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"ok: {diff.checked_count} inputs match")


def main(argv: list[str] | None = None) -> None:
    app(prog_name="gdr", args=argv)


if __name__ == "__main__":
    main()
