"""
Status Display

Live terminal view of the commit pipeline. The controller pushes a Phase in,
the display redraws the whole frame. Rendering is a pure function of
(phase, elapsed seconds, spinner frame); the only state the display owns is
the elapsed-seconds counter and the ticker thread that advances it.
"""

import re
import shutil
import sys
import threading
import time
from dataclasses import dataclass
from enum import Enum

from llmc.output import Colors, CHECK, CROSS, SPINNER_FRAMES, colorize

ANSI_RE = re.compile(r"\033\[[0-9;]*[A-Za-z]")


class PhaseKind(Enum):
    CHECKING = "checking"
    GENERATING = "generating"
    RETRYING = "retrying"
    COMMITTING = "committing"
    SUCCESS = "success"
    ERROR = "error"
    MESSAGE_ONLY = "message-only"


@dataclass(frozen=True)
class Phase:
    """Current pipeline state plus the detail shown with it."""
    kind: PhaseKind
    attempt: int | None = None
    max_attempts: int | None = None
    message: str | None = None
    error: str | None = None

    @classmethod
    def checking(cls) -> 'Phase':
        return cls(PhaseKind.CHECKING)

    @classmethod
    def generating(cls) -> 'Phase':
        return cls(PhaseKind.GENERATING)

    @classmethod
    def retrying(cls, attempt: int, max_attempts: int) -> 'Phase':
        return cls(PhaseKind.RETRYING, attempt=attempt, max_attempts=max_attempts)

    @classmethod
    def committing(cls, message: str) -> 'Phase':
        return cls(PhaseKind.COMMITTING, message=message)

    @classmethod
    def success(cls, message: str) -> 'Phase':
        return cls(PhaseKind.SUCCESS, message=message)

    @classmethod
    def message_only(cls, message: str) -> 'Phase':
        return cls(PhaseKind.MESSAGE_ONLY, message=message)

    @classmethod
    def failure(cls, error: str) -> 'Phase':
        return cls(PhaseKind.ERROR, error=error)

    @property
    def busy(self) -> bool:
        return _STYLES[self.kind].glyph is None

    @property
    def timed(self) -> bool:
        return _STYLES[self.kind].timed


@dataclass(frozen=True)
class PhaseStyle:
    label: str
    color: str
    glyph: str | None = None  # None means spinner
    timed: bool = False


# Checking is near-instant, so the elapsed counter only runs for the slow phases
_STYLES = {
    PhaseKind.CHECKING: PhaseStyle("Checking for staged changes...", Colors.CYAN),
    PhaseKind.GENERATING: PhaseStyle("Generating commit message...", Colors.CYAN, timed=True),
    PhaseKind.RETRYING: PhaseStyle(
        "Retrying commit message generation (attempt {attempt}/{max_attempts})...", Colors.CYAN, timed=True),
    PhaseKind.COMMITTING: PhaseStyle("Committing changes...", Colors.CYAN, timed=True),
    PhaseKind.SUCCESS: PhaseStyle("Committed successfully!", Colors.GREEN, glyph=CHECK),
    PhaseKind.MESSAGE_ONLY: PhaseStyle("Generated commit message:", Colors.BLUE, glyph=CHECK),
    PhaseKind.ERROR: PhaseStyle("Error occurred", Colors.RED, glyph=CROSS),
}


def _indent(text: str, prefix: str = "  ") -> str:
    return "\n".join(prefix + line for line in text.split("\n"))


def render_frame(phase: Phase, elapsed: int = 0, spinner: str = SPINNER_FRAMES[0]) -> str:
    """Render one full frame for phase. Same arguments, same output."""
    style = _STYLES[phase.kind]
    label = style.label.format(attempt=phase.attempt, max_attempts=phase.max_attempts)
    indicator = style.glyph or spinner

    head = colorize(f"{indicator} {label}", style.color)
    if style.timed:
        head += " " + colorize(f"Time elapsed: {elapsed}s", Colors.GRAY)
    lines = [head]

    if phase.kind is PhaseKind.RETRYING and phase.attempt and phase.max_attempts:
        failed = phase.attempt - 1
        lines += ["", colorize(f"Previous attempt failed. Retrying... ({failed} failed attempts)", Colors.YELLOW)]

    if phase.message:
        lines += ["", colorize(_indent(phase.message), Colors.GREEN)]

    if phase.error:
        lines += ["", colorize(phase.error, Colors.RED)]

    return "\n".join(lines)


def screen_rows(frame: str, columns: int) -> int:
    """Terminal rows a frame occupies once lines wider than the terminal wrap."""
    columns = max(columns, 1)
    rows = 0
    for line in frame.split("\n"):
        width = len(ANSI_RE.sub("", line))
        rows += max(1, -(-width // columns))
    return rows


class StatusDisplay:
    """Redraws the current phase in place. Use start() / update() / stop()."""

    FRAME_INTERVAL = 0.08
    TICK_INTERVAL = 1.0

    def __init__(self, stream=None, animate: bool | None = None):
        self.stream = stream or sys.stdout
        self.is_tty = hasattr(self.stream, 'isatty') and self.stream.isatty()
        # animate=False: no ticker thread, tests call tick() by hand
        self.animate = self.is_tty if animate is None else animate
        self._phase: Phase | None = None
        self._elapsed = 0
        self._frame_idx = 0
        self._drawn_lines = 0
        self._lock = threading.RLock()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def phase(self) -> Phase | None:
        return self._phase

    @property
    def elapsed(self) -> int:
        return self._elapsed

    def start(self, phase: Phase) -> 'StatusDisplay':
        self.update(phase)
        return self

    def update(self, phase: Phase) -> None:
        """Switch to phase and replace the previous frame."""
        self._stop_ticker()
        with self._lock:
            if not phase.timed:
                self._elapsed = 0
            self._phase = phase
            self._draw()
        if self.animate and phase.busy:
            self._start_ticker()

    def tick(self) -> None:
        """Advance the elapsed counter by one second if the phase is timed."""
        with self._lock:
            if self._phase is None or not self._phase.timed:
                return
            self._elapsed += 1
            self._redraw()

    def render(self) -> str:
        if self._phase is None:
            return ""
        spinner = SPINNER_FRAMES[self._frame_idx % len(SPINNER_FRAMES)]
        return render_frame(self._phase, self._elapsed, spinner)

    def stop(self) -> None:
        self._stop_ticker()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.stop()

    def _draw(self) -> None:
        frame = self.render()
        if self.is_tty and self._drawn_lines:
            # Cursor to the start of the old frame, clear everything below
            self.stream.write(f"\033[{self._drawn_lines}F\033[J")
        self.stream.write(frame + "\n")
        self.stream.flush()
        self._drawn_lines = screen_rows(frame, shutil.get_terminal_size().columns)

    def _redraw(self) -> None:
        # Piped output gets one copy of each phase, not every tick
        if self.is_tty:
            self._draw()

    def _spin(self) -> None:
        last_tick = time.monotonic()
        while not self._stop_event.wait(self.FRAME_INTERVAL):
            with self._lock:
                self._frame_idx += 1
                if time.monotonic() - last_tick >= self.TICK_INTERVAL:
                    last_tick += self.TICK_INTERVAL
                    self.tick()
                else:
                    self._redraw()

    def _start_ticker(self) -> None:
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._spin, daemon=True)
        self._thread.start()

    def _stop_ticker(self) -> None:
        self._stop_event.set()
        if self._thread and self._thread is not threading.current_thread():
            self._thread.join()
        self._thread = None
