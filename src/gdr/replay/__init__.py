from __future__ import annotations

from .codec import (
    ReplayCodecError,
    ReplayDecodeError,
    decode_replay,
    dump_replay_file,
    export_replay,
    import_replay,
    load_replay_file,
    replay_from_tree,
    replay_to_tree,
    sniff_encoding,
)
from .diff import ReplayDiffFailure, ReplayDiffResult, compare_replays
from .extension import NO_EXTENSION, ExtensionHooks, PassthroughExtension, ReplayExtension
from .recorder import ReplayRecorder
from .types import (
    BUTTON_JUMP,
    BUTTON_LEFT,
    BUTTON_RIGHT,
    DEFAULT_FRAMERATE,
    FORMAT_VERSION,
    Bot,
    Input,
    Level,
    Replay,
)
from .versioning import ReplayFormatVersionWarning, warn_on_format_version_mismatch

__all__ = [
    "BUTTON_JUMP",
    "BUTTON_LEFT",
    "BUTTON_RIGHT",
    "DEFAULT_FRAMERATE",
    "FORMAT_VERSION",
    "NO_EXTENSION",
    "Bot",
    "ExtensionHooks",
    "Input",
    "Level",
    "PassthroughExtension",
    "Replay",
    "ReplayCodecError",
    "ReplayDecodeError",
    "ReplayDiffFailure",
    "ReplayDiffResult",
    "ReplayExtension",
    "ReplayFormatVersionWarning",
    "ReplayRecorder",
    "compare_replays",
    "decode_replay",
    "dump_replay_file",
    "export_replay",
    "import_replay",
    "load_replay_file",
    "replay_from_tree",
    "replay_to_tree",
    "sniff_encoding",
    "warn_on_format_version_mismatch",
]
