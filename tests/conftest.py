"""Shared fixtures and fakes."""

import io
import re

import pytest

from llmc.cli.status import StatusDisplay
from llmc.git import ValidationResult

ANSI_RE = re.compile(r'\033\[[0-9;]*[A-Za-z]')


class TTYStringIO(io.StringIO):
    """StringIO that claims to be a terminal."""

    def isatty(self):
        return True


class FakeGit:
    """In-memory GitPort that records every call."""

    def __init__(self, validation=None, diff="diff --git a/x.py b/x.py\n+x = 1\n", commit_error=None):
        self.validation = validation or ValidationResult(True)
        self.diff = diff
        self.commit_error = commit_error
        self.calls = []
        self.commits = []

    def validate_state(self):
        self.calls.append('validate_state')
        return self.validation

    def get_staged_diff(self):
        self.calls.append('get_staged_diff')
        if isinstance(self.diff, Exception):
            raise self.diff
        return self.diff

    def commit(self, message):
        self.calls.append('commit')
        if self.commit_error:
            raise self.commit_error
        self.commits.append(message)


class ScriptedGenerator:
    """Generator that replays a script of results; exceptions are raised."""

    def __init__(self, *results):
        self.results = list(results)
        self.calls = []

    def __call__(self, diff, config):
        self.calls.append(diff)
        result = self.results[len(self.calls) - 1]
        if isinstance(result, BaseException):
            raise result
        return result


class RecordingDisplay(StatusDisplay):
    """StatusDisplay without a ticker thread that remembers every phase."""

    instances = []

    def __init__(self, stream):
        super().__init__(stream, animate=False)
        self.history = []
        self.stopped = False
        RecordingDisplay.instances.append(self)

    def update(self, phase):
        self.history.append(phase)
        super().update(phase)

    def stop(self):
        self.stopped = True
        super().stop()


@pytest.fixture
def strip_ansi():
    """Return a function that removes ANSI escape codes."""
    def _strip(text: str) -> str:
        return ANSI_RE.sub('', text)
    return _strip


@pytest.fixture(autouse=True)
def _reset_displays():
    RecordingDisplay.instances.clear()
    yield
    RecordingDisplay.instances.clear()
