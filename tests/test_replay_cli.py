from __future__ import annotations

from pathlib import Path

import msgspec
from typer.testing import CliRunner

from gdr.cli import app
from gdr.replay import Replay, dump_replay_file, load_replay_file, replay_to_tree


def test_replay_info_prints_metadata(tmp_path: Path, sample_replay: Replay) -> None:
    path = tmp_path / "run.gdr"
    dump_replay_file(path, sample_replay)

    result = CliRunner().invoke(app, ["replay", "info", str(path)])

    assert result.exit_code == 0, result.output
    assert "encoding: msgpack" in result.output
    assert "bot: mega hack v8.2" in result.output
    assert "level: Stereo Madness (id=128)" in result.output
    assert "inputs: 3 (p1=2, p2=1)" in result.output


def test_replay_info_rejects_invalid_payload(tmp_path: Path) -> None:
    path = tmp_path / "broken.gdr"
    path.write_bytes(b"\xc1")

    result = CliRunner().invoke(app, ["replay", "info", str(path)])

    assert result.exit_code == 1
    assert "invalid replay (sniff)" in result.output


def test_replay_info_reports_missing_file(tmp_path: Path) -> None:
    result = CliRunner().invoke(app, ["replay", "info", str(tmp_path / "nope.gdr")])

    assert result.exit_code == 1
    assert "replay file not found" in result.output


def test_replay_convert_keeps_extension_keys(tmp_path: Path, sample_replay: Replay) -> None:
    tree = replay_to_tree(sample_replay)
    tree["accuracy"] = 0.75
    src = tmp_path / "run.gdr"
    src.write_bytes(msgspec.msgpack.encode(tree))
    dst = tmp_path / "run.json"

    result = CliRunner().invoke(app, ["replay", "convert", str(src), str(dst)])

    assert result.exit_code == 0, result.output
    assert msgspec.json.decode(dst.read_bytes())["accuracy"] == 0.75
    assert load_replay_file(dst) == sample_replay


def test_replay_convert_honors_explicit_format(tmp_path: Path, sample_replay: Replay) -> None:
    src = tmp_path / "run.gdr"
    dump_replay_file(src, sample_replay)
    dst = tmp_path / "run.json"

    result = CliRunner().invoke(app, ["replay", "convert", str(src), str(dst), "--format", "msgpack"])

    assert result.exit_code == 0, result.output
    assert not dst.read_bytes().startswith(b"{")
    assert load_replay_file(dst) == sample_replay


def test_replay_diff_command(tmp_path: Path, sample_replay: Replay) -> None:
    expected = tmp_path / "a.gdr"
    same = tmp_path / "b.json"
    other = tmp_path / "c.gdr"
    dump_replay_file(expected, sample_replay)
    dump_replay_file(same, sample_replay)
    sample_replay.author = "someone else"
    dump_replay_file(other, sample_replay)

    ok = CliRunner().invoke(app, ["replay", "diff", str(expected), str(same)])
    assert ok.exit_code == 0, ok.output
    assert "ok: 3 inputs match" in ok.output

    bad = CliRunner().invoke(app, ["replay", "diff", str(expected), str(other)])
    assert bad.exit_code == 1
    assert "field mismatch: author" in bad.output
