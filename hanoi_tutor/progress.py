from __future__ import annotations

import importlib
import sys
import threading
from typing import Any


class FrameProgressReporter:
    def on_frame_written(self, frame: dict[str, Any]) -> None:
        raise NotImplementedError

    def close(self) -> None:
        raise NotImplementedError


class NoopFrameProgressReporter(FrameProgressReporter):
    def on_frame_written(self, frame: dict[str, Any]) -> None:  # noqa: ARG002
        return

    def close(self) -> None:
        return


class TqdmFrameProgressReporter(FrameProgressReporter):
    def __init__(self, *, total_frames: int, tqdm_cls: Any) -> None:
        self._lock = threading.Lock()
        self._bar = tqdm_cls(
            total=max(0, int(total_frames)),
            desc="Frames",
            unit="frame",
            dynamic_ncols=True,
            file=sys.stderr,
            leave=True,
        )

    def on_frame_written(self, frame: dict[str, Any]) -> None:
        with self._lock:
            postfix = {
                "move": f"{frame.get('move_index', 0)}/{frame.get('total_moves', 0)}",
                "depth": str(frame.get("depth", "-")),
            }
            self._bar.set_postfix(postfix, refresh=False)
            self._bar.update(1)

    def close(self) -> None:
        with self._lock:
            self._bar.close()


def build_frame_progress_reporter(
    *, enabled: bool, total_frames: int
) -> FrameProgressReporter:
    if not enabled or total_frames <= 0:
        return NoopFrameProgressReporter()

    try:
        tqdm_module = importlib.import_module("tqdm")
    except ImportError:
        print(
            "Progress requested but missing dependency: tqdm. Install with "
            "pip install 'hanoi-tutor[progress]'.",
            file=sys.stderr,
            flush=True,
        )
        return NoopFrameProgressReporter()

    tqdm_cls = getattr(tqdm_module, "tqdm", None)
    if tqdm_cls is None:
        print(
            "Progress requested but tqdm could not be loaded. Install with "
            "pip install 'hanoi-tutor[progress]'.",
            file=sys.stderr,
            flush=True,
        )
        return NoopFrameProgressReporter()
    return TqdmFrameProgressReporter(total_frames=total_frames, tqdm_cls=tqdm_cls)
