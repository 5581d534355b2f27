from __future__ import annotations

from typing import Any

from .types import DEFAULT_FRAMERATE, Input, Replay


class ReplayRecorder:
    """Accumulate press/release inputs into a `Replay`.

    Frames are stored as given; out-of-order frames are kept in call order.
    """

    def __init__(
        self,
        bot_name: str,
        bot_version: str,
        *,
        framerate: float = DEFAULT_FRAMERATE,
        **fields: Any,
    ) -> None:
        if float(framerate) <= 0.0:
            raise ValueError(f"framerate must be positive, got {framerate}")
        self._replay = Replay.create(bot_name, bot_version, framerate=float(framerate), **fields)
        self._frame = 0
        self._finished = False

    @property
    def replay(self) -> Replay:
        return self._replay

    @property
    def frame(self) -> int:
        """Frame of the most recently recorded input (0 before any input)."""

        return int(self._frame)

    def record(self, inp: Input) -> Input:
        if self._finished:
            raise RuntimeError("recorder already finished")
        self._replay.add_input(inp)
        self._frame = int(inp.frame)
        return inp

    def hold(self, frame: int, button: int, player2: bool = False) -> Input:
        return self.record(Input.hold(frame, button, player2))

    def release(self, frame: int, button: int, player2: bool = False) -> Input:
        return self.record(Input.release(frame, button, player2))

    def hold_at(self, time: float, button: int, player2: bool = False) -> Input:
        return self.hold(self._replay.frame_for_time(time), button, player2)

    def release_at(self, time: float, button: int, player2: bool = False) -> Input:
        return self.release(self._replay.frame_for_time(time), button, player2)

    def finish(self, *, duration: float | None = None) -> Replay:
        """Close the recording; `duration` defaults to the last input frame in seconds."""

        if duration is None:
            last_frame = max((int(inp.frame) for inp in self._replay.inputs), default=0)
            duration = last_frame / float(self._replay.framerate)
        self._replay.duration = float(duration)
        self._finished = True
        return self._replay
