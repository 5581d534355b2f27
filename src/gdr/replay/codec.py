from __future__ import annotations

from pathlib import Path
from typing import Any, Literal, TypeAlias

import msgspec

from .extension import NO_EXTENSION, ReplayExtension
from .fields import INPUT_FIELDS, INPUTS_KEY, REPLAY_SECTIONS, WireField
from .types import Bot, Input, Replay

WireEncoding: TypeAlias = Literal["msgpack", "json"]
DecodeFailureReason: TypeAlias = Literal["sniff", "structure", "field", "input"]

_MSGPACK_DECODER = msgspec.msgpack.Decoder()
_JSON_DECODER = msgspec.json.Decoder()
_MSGPACK_ENCODER = msgspec.msgpack.Encoder()
_JSON_ENCODER = msgspec.json.Encoder()


class ReplayCodecError(ValueError):
    pass


class ReplayDecodeError(ReplayCodecError):
    """A wire payload could not be turned into a `Replay`.

    `reason` tells which stage rejected it:
      - "sniff": bytes are neither MessagePack nor JSON
      - "structure": root, `bot` or `level` is not an object
      - "field": a replay/bot/level field is missing or has the wrong type
      - "input": `inputs` or one of its entries is malformed
    """

    def __init__(self, reason: DecodeFailureReason, message: str) -> None:
        super().__init__(message)
        self.reason: DecodeFailureReason = reason


def _sniff_tree(data: bytes) -> tuple[Any, WireEncoding]:
    # Deeply nested payloads surface as RecursionError from either decoder.
    msgpack_ok = False
    tree: Any = None
    try:
        tree = _MSGPACK_DECODER.decode(data)
        msgpack_ok = True
    except (msgspec.DecodeError, RecursionError):
        pass
    if msgpack_ok and isinstance(tree, dict):
        return tree, "msgpack"
    try:
        return _JSON_DECODER.decode(data), "json"
    except (msgspec.DecodeError, RecursionError) as exc:
        if msgpack_ok:
            # Well-formed MessagePack with a non-map root; the structure check rejects it.
            return tree, "msgpack"
        raise ReplayDecodeError("sniff", f"replay payload is neither MessagePack nor JSON: {exc}") from None


def sniff_encoding(data: bytes) -> WireEncoding | None:
    """Return which wire encoding `data` decodes as, or None."""

    try:
        _, encoding = _sniff_tree(data)
    except ReplayDecodeError:
        return None
    return encoding


def _assign_fields(
    target: object,
    rows: tuple[WireField, ...],
    tree: dict[str, Any],
    *,
    where: str,
    reason: DecodeFailureReason,
) -> None:
    missing = [row.key for row in rows if row.required and row.key not in tree]
    if missing:
        raise ReplayDecodeError(reason, f"{where} missing fields: {', '.join(missing)}")
    for row in rows:
        if row.key not in tree:
            continue
        try:
            value = msgspec.convert(tree[row.key], row.type)
        except msgspec.ValidationError as exc:
            raise ReplayDecodeError(reason, f"{where} field {row.key!r}: {exc}") from None
        setattr(target, row.attr, value)


def _input_from_tree(tree: object, index: int, extension: ReplayExtension) -> Input:
    if not isinstance(tree, dict):
        raise ReplayDecodeError("input", f"replay input {index} must be an object")
    inp = Input(frame=0, button=0)
    _assign_fields(inp, INPUT_FIELDS, tree, where=f"replay input {index}", reason="input")
    extension.parse_input(inp, tree)
    return inp


def replay_from_tree(
    tree: object,
    *,
    import_inputs: bool = True,
    extension: ReplayExtension = NO_EXTENSION,
) -> Replay:
    if not isinstance(tree, dict):
        raise ReplayDecodeError("structure", "replay root must be an object")
    for section, _rows in REPLAY_SECTIONS:
        if section is not None and not isinstance(tree.get(section), dict):
            raise ReplayDecodeError("structure", f"replay {section!r} must be an object")

    replay = Replay(bot=Bot(name="", version=""))
    for section, rows in REPLAY_SECTIONS:
        if section is None:
            _assign_fields(replay, rows, tree, where="replay", reason="field")
        else:
            # Section keys double as the attribute names on `Replay`.
            _assign_fields(getattr(replay, section), rows, tree[section], where=f"replay {section}", reason="field")

    extension.parse_replay(replay, tree)

    if not import_inputs:
        return replay

    # A missing (or null) `inputs` entry means a replay without inputs.
    inputs_in = tree.get(INPUTS_KEY)
    if inputs_in is None:
        inputs_in = []
    if not isinstance(inputs_in, list):
        raise ReplayDecodeError("input", "replay inputs must be a list")
    for index, entry in enumerate(inputs_in):
        replay.inputs.append(_input_from_tree(entry, index, extension))
    return replay


def _input_to_tree(inp: Input, extension: ReplayExtension) -> dict[str, Any]:
    out = dict(extension.save_input(inp))
    for row in INPUT_FIELDS:
        out[row.key] = row.cast(getattr(inp, row.attr))
    return out


def replay_to_tree(replay: Replay, *, extension: ReplayExtension = NO_EXTENSION) -> dict[str, Any]:
    """Build the structured tree for `replay`; known fields win over extension keys."""

    tree = dict(extension.save_replay(replay))
    for section, rows in REPLAY_SECTIONS:
        if section is None:
            target = tree
            source: object = replay
        else:
            base = tree.get(section)
            target = dict(base) if isinstance(base, dict) else {}
            tree[section] = target
            source = getattr(replay, section)
        for row in rows:
            target[row.key] = row.cast(getattr(source, row.attr))
    tree[INPUTS_KEY] = [_input_to_tree(inp, extension) for inp in replay.inputs]
    return tree


def decode_replay(
    data: bytes,
    *,
    import_inputs: bool = True,
    extension: ReplayExtension = NO_EXTENSION,
) -> Replay:
    """Decode a MessagePack or JSON payload, raising `ReplayDecodeError` on failure."""

    tree, _encoding = _sniff_tree(data)
    return replay_from_tree(tree, import_inputs=import_inputs, extension=extension)


def import_replay(
    data: bytes,
    *,
    import_inputs: bool = True,
    extension: ReplayExtension = NO_EXTENSION,
) -> Replay | None:
    """Decode a payload in either wire encoding.

    Returns None when the payload is unreadable or misses a required field.
    With `import_inputs=False` the `inputs` list is skipped entirely (not even
    validated) and the returned replay has no inputs.
    """

    try:
        return decode_replay(data, import_inputs=import_inputs, extension=extension)
    except ReplayDecodeError:
        return None


def export_replay(
    replay: Replay,
    *,
    as_text: bool = False,
    extension: ReplayExtension = NO_EXTENSION,
) -> bytes:
    """Serialize as MessagePack, or as UTF-8 JSON when `as_text` is set."""

    tree = replay_to_tree(replay, extension=extension)
    if as_text:
        return _JSON_ENCODER.encode(tree)
    return _MSGPACK_ENCODER.encode(tree)


def dump_replay_file(
    path: Path,
    replay: Replay,
    *,
    as_text: bool | None = None,
    extension: ReplayExtension = NO_EXTENSION,
) -> None:
    path = Path(path)
    if as_text is None:
        as_text = path.suffix.lower() == ".json"
    path.write_bytes(export_replay(replay, as_text=as_text, extension=extension))


def load_replay_file(
    path: Path,
    *,
    import_inputs: bool = True,
    extension: ReplayExtension = NO_EXTENSION,
) -> Replay:
    path = Path(path)
    return decode_replay(path.read_bytes(), import_inputs=import_inputs, extension=extension)
