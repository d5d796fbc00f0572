"""
Commit Flow

Validate the repository, fetch the staged diff, generate a message with a
bounded number of attempts, then commit it or print it. Every path ends in an
ExitOutcome; execute() only decides it, run() applies it (final-frame delay,
display teardown, process exit).
"""

import sys
import time
from dataclasses import dataclass
from typing import Callable, NoReturn, Protocol

from llmc.cli.status import Phase, StatusDisplay
from llmc.config import Config
from llmc.git import GitRepo, ValidationResult
from llmc.message import generate_commit_message
from llmc.output import dim

MAX_ATTEMPTS = 3
RETRY_DELAY = 1.0  # fixed, not exponential

# How long the final frame stays on screen before exit (interactive only)
VALIDATION_EXIT_DELAY = 1.0
FAILURE_EXIT_DELAY = 2.0
SUCCESS_EXIT_DELAY = 1.5


class GitPort(Protocol):
    def validate_state(self) -> ValidationResult: ...

    def get_staged_diff(self) -> str: ...

    def commit(self, message: str) -> None: ...


@dataclass(frozen=True)
class RunOptions:
    message_only: bool = False


@dataclass(frozen=True)
class ExitOutcome:
    code: int
    delay: float = 0.0


def describe_error(exc: BaseException) -> str:
    """Message text of an exception, falling back to its type name."""
    return str(exc) or type(exc).__name__


def _isatty(stream) -> bool:
    return hasattr(stream, 'isatty') and stream.isatty()


class CommitFlow:
    """Runs the diff -> message -> commit pipeline once."""

    def __init__(
        self,
        config: Config,
        git: GitPort | None = None,
        generate: Callable[[str, Config], str] = generate_commit_message,
        display_factory: Callable[..., StatusDisplay] = StatusDisplay,
        stdout=None,
        stderr=None,
        sleep: Callable[[float], None] = time.sleep,
        verbose: bool = False,
    ):
        self.config = config
        self.git = git or GitRepo()
        self.generate = generate
        self.display_factory = display_factory
        self.stdout = stdout or sys.stdout
        self.stderr = stderr or sys.stderr
        self.sleep = sleep
        self.verbose = verbose
        self.non_interactive = False
        self.display: StatusDisplay | None = None
        self._notes: list[str] = []

    def run(self, options: RunOptions) -> NoReturn:
        outcome = self.execute(options)
        sys.exit(self.settle(outcome))

    def settle(self, outcome: ExitOutcome) -> int:
        """Hold the final frame, tear the display down, return the exit code."""
        try:
            if outcome.delay > 0:
                self.sleep(outcome.delay)
        finally:
            if self.display is not None:
                self.display.stop()
        for note in self._notes:
            print(dim(note), file=self.stderr)
        return outcome.code

    def execute(self, options: RunOptions) -> ExitOutcome:
        """Run the pipeline and decide the exit outcome. Never exits the process."""
        self.non_interactive = options.message_only and not _isatty(self.stdout)
        if not self.non_interactive:
            self.display = self.display_factory(self.stdout)
            self.display.start(Phase.checking())

        try:
            return self._pipeline(options)
        except Exception as e:
            return self._fail(f"Error: {describe_error(e)}", FAILURE_EXIT_DELAY)

    def _pipeline(self, options: RunOptions) -> ExitOutcome:
        validation = self.git.validate_state()
        if not validation.is_valid:
            return self._fail(validation.full_message, VALIDATION_EXIT_DELAY)

        diff = self.git.get_staged_diff()
        self._note(f"Staged diff: {len(diff)} chars, provider={self.config.provider}, model={self.config.model or 'default'}")

        message, last_error = self._generate_with_retries(diff)
        if not message:
            reason = (describe_error(last_error) if last_error else "") or "Unknown error occurred"
            return self._fail(
                f"Failed to generate commit message after {MAX_ATTEMPTS} attempts. Last error: {reason}",
                FAILURE_EXIT_DELAY,
            )

        if options.message_only:
            if self.non_interactive:
                print(message, file=self.stdout)
                self.stdout.flush()
                return ExitOutcome(0)
            self._show(Phase.message_only(message))
            return ExitOutcome(0, SUCCESS_EXIT_DELAY)

        self._show(Phase.committing(f"Commit message: {message}"))
        self.git.commit(message)
        self._show(Phase.success(f"Committed with message: {message}"))
        return ExitOutcome(0, SUCCESS_EXIT_DELAY)

    def _generate_with_retries(self, diff: str) -> tuple[str | None, Exception | None]:
        attempt = 1
        message = None
        last_error = None

        while attempt <= MAX_ATTEMPTS and not message:
            if attempt == 1:
                self._show(Phase.generating())
            else:
                self._show(Phase.retrying(attempt, MAX_ATTEMPTS))

            started = time.monotonic()
            try:
                message = self.generate(diff, self.config)
            except Exception as e:
                last_error = e
                self._note(f"Attempt {attempt}/{MAX_ATTEMPTS} failed: {describe_error(e)}")
                if attempt == MAX_ATTEMPTS:
                    break
                # Give a rate-limited API room before the next attempt
                self.sleep(RETRY_DELAY)
                attempt += 1
                continue

            self._note(f"Attempt {attempt}/{MAX_ATTEMPTS} generated in {time.monotonic() - started:.2f}s")
            break

        return message, last_error

    def _show(self, phase: Phase) -> None:
        if self.display is not None:
            self.display.update(phase)

    def _fail(self, text: str, delay: float) -> ExitOutcome:
        if self.non_interactive:
            print(text, file=self.stderr)
            return ExitOutcome(1)
        self._show(Phase.failure(text))
        return ExitOutcome(1, delay)

    def _note(self, text: str) -> None:
        # Printed after the display stops so the live frame is not torn
        if self.verbose:
            self._notes.append(text)
