"""Progress updates and a console spinner."""

from __future__ import annotations

import queue
import sys
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum
from typing import IO


class ProgressType(IntEnum):
    """Kinds of progress update."""

    SPINNER = 0
    STEP = 1
    COMPLETE = 2
    ERROR = 3


@dataclass
class StepInfo:
    """Details of the step being processed."""

    name: str
    model: str
    action: str


@dataclass
class ProgressUpdate:
    """One progress update."""

    type: ProgressType
    message: str = ""
    error: BaseException | None = None
    step: StepInfo | None = None


class ProgressWriter(ABC):
    """Receiver of progress updates."""

    @abstractmethod
    def write_progress(self, update: ProgressUpdate) -> None:
        """Deliver one update."""


class QueueProgressWriter(ProgressWriter):
    """Puts every update on a queue."""

    def __init__(self, target: queue.Queue) -> None:
        self.queue = target

    def write_progress(self, update: ProgressUpdate) -> None:
        self.queue.put(update)


class Spinner:
    """Animated console indicator that runs in a background thread."""

    CHARS = ("|", "/", "-", "\\")

    def __init__(
        self,
        progress: ProgressWriter | None = None,
        stream: IO[str] | None = None,
        interval: float = 0.1,
    ) -> None:
        self.progress = progress
        self._stream = stream
        self._interval = interval
        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._stopped = False
        self._disabled = False
        self._message = ""
        self._index = 0
        self._threads: list[threading.Thread] = []

    def _write(self, text: str) -> None:
        stream = self._stream if self._stream is not None else sys.stdout
        stream.write(text)
        stream.flush()

    def disable(self) -> None:
        """Suppress all output from now on."""
        with self._lock:
            self._disabled = True

    def start(self, message: str) -> None:
        """Show *message* with a turning indicator until ``stop``."""
        with self._lock:
            if self._disabled:
                return
            if self._stopped:
                self._stop_event = threading.Event()
                self._stopped = False
            self._message = message
            event = self._stop_event

        if self.progress is not None:
            self.progress.write_progress(
                ProgressUpdate(type=ProgressType.STEP, message=message)
            )

        thread = threading.Thread(target=self._run, args=(event,), daemon=True)
        with self._lock:
            self._threads.append(thread)
        thread.start()

    def stop(self) -> None:
        """Finish the current message and wait for the indicator to end."""
        with self._lock:
            if not self._stopped:
                self._stop_event.set()
                self._stopped = True
            threads, self._threads = self._threads, []
        for thread in threads:
            thread.join()

    def _run(self, event: threading.Event) -> None:
        while True:
            if event.is_set():
                with self._lock:
                    done = f"{self._message}... Done!"
                    if not self._disabled:
                        self._write(f"\r{done}     \n")
                    if self.progress is not None:
                        self.progress.write_progress(
                            ProgressUpdate(type=ProgressType.STEP, message=done)
                        )
                return
            with self._lock:
                if not self._disabled:
                    self._write(f"\r{self._message}... {self.CHARS[self._index]}")
                    self._index = (self._index + 1) % len(self.CHARS)
            event.wait(self._interval)