from __future__ import annotations

import warnings

from .types import FORMAT_VERSION, Replay


class ReplayFormatVersionWarning(UserWarning):
    """Warnings related to the replay's recorded format `version`."""


def warn_on_format_version_mismatch(
    replay: Replay,
    *,
    action: str = "playback",
    supported: float = FORMAT_VERSION,
) -> bool:
    """Warn if `replay.version` doesn't match the format version the caller supports.

    Returns True if a warning was emitted. The codec carries the version through
    unchanged, so this is the only place a mismatch surfaces.

    Intended call sites:
      - replay playback
      - replay conversion tools
    """

    got = float(replay.version)
    expected = float(supported)
    if got != expected:
        warnings.warn(
            f"Replay format version mismatch; {action} may misread fields (replay={got!r}, supported={expected!r}).",
            category=ReplayFormatVersionWarning,
            stacklevel=2,
        )
        return True

    return False
