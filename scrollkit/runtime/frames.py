"""Deterministic next-frame callback scheduler."""

from __future__ import annotations

import logging

from scrollkit.api.scheduling import FrameCallback

_LOG = logging.getLogger("scrollkit.frames")


class ManualFrameScheduler:
    """Frame scheduler driven explicitly by the host loop or by tests.

    Callbacks requested while a frame is running are deferred to the next
    frame, so a callback that reschedules itself runs exactly once per frame.
    """

    def __init__(
        self,
        *,
        frame_interval_seconds: float = 1.0 / 60.0,
        max_frames_per_advance: int = 8,
    ) -> None:
        if frame_interval_seconds <= 0.0:
            raise ValueError("frame_interval_seconds must be > 0")
        if max_frames_per_advance <= 0:
            raise ValueError("max_frames_per_advance must be > 0")
        self._frame_interval_seconds = frame_interval_seconds
        self._max_frames_per_advance = max_frames_per_advance
        self._accumulated_seconds = 0.0
        self._next_handle = 1
        self._frame_index = 0
        self._pending: dict[int, FrameCallback] = {}

    @property
    def frame_index(self) -> int:
        """Number of frames run so far."""
        return self._frame_index

    @property
    def pending_count(self) -> int:
        """Return count of live callbacks waiting for a frame."""
        return len(self._pending)

    def schedule(self, callback: FrameCallback) -> int:
        """Queue a one-shot callback for the next frame."""
        handle = self._next_handle
        self._next_handle += 1
        self._pending[handle] = callback
        return handle

    def cancel(self, handle: int) -> None:
        """Cancel a pending callback if it exists."""
        self._pending.pop(handle, None)

    def run_frame(self) -> int:
        """Run callbacks pending at frame start and return how many ran."""
        due_handles = list(self._pending)
        self._frame_index += 1
        executed = 0
        for handle in due_handles:
            # Cancelled by an earlier callback in this frame.
            callback = self._pending.pop(handle, None)
            if callback is None:
                continue
            callback()
            executed += 1
        if executed and _LOG.isEnabledFor(logging.DEBUG):
            _LOG.debug("frame_run index=%d callbacks=%d", self._frame_index, executed)
        return executed

    def advance(self, delta_seconds: float) -> int:
        """Advance wall time, run the whole frames it covers and return frame count.

        Frames beyond `max_frames_per_advance` are dropped rather than queued.
        """
        if delta_seconds < 0.0:
            raise ValueError("delta_seconds must be >= 0")
        self._accumulated_seconds += delta_seconds
        frames = int(self._accumulated_seconds // self._frame_interval_seconds)
        self._accumulated_seconds -= frames * self._frame_interval_seconds
        bounded_frames = min(frames, self._max_frames_per_advance)
        for _ in range(bounded_frames):
            self.run_frame()
        return bounded_frames

    def run_until_idle(self, *, max_frames: int = 10_000) -> int:
        """Run frames until nothing is pending; return frames run."""
        if max_frames <= 0:
            raise ValueError("max_frames must be > 0")
        frames = 0
        while self._pending and frames < max_frames:
            self.run_frame()
            frames += 1
        return frames
