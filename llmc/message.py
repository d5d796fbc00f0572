"""Commit message generation: diff in, ready-to-use message out."""

import re

from llmc import COMMIT_TYPE_NAMES
from llmc.config import Config
from llmc.llm import LLMError, get_client
from llmc.prompts import build_prompt

TYPES_PATTERN = '|'.join(COMMIT_TYPE_NAMES)

_TAGGED_RE = re.compile(r'<commit_message>(.*?)</commit_message>', re.DOTALL)
_OPEN_TAG_RE = re.compile(r'<commit_message>(.*)', re.DOTALL)
# Lines that mean the model started echoing the diff or closing a code block
_JUNK_RE = re.compile(r'^(diff --git |@@\s|[+-]{3}\s[ab]/|index [0-9a-f]|```)')


def clean_commit_message(text: str) -> str:
    """Strip preamble, code fences and echoed diff lines around a commit message."""
    lines = text.strip().split('\n')
    start_idx = 0
    for i, line in enumerate(lines):
        if re.match(rf'^[`\s]*({TYPES_PATTERN})[\(!:]', line):
            start_idx = i
            break
    else:
        # No conventional subject; only drop a leading fence
        if lines and lines[0].strip().startswith('```'):
            start_idx = 1

    end_idx = len(lines)
    for i in range(start_idx + 1, len(lines)):
        if _JUNK_RE.match(lines[i]):
            end_idx = i
            break

    lines = lines[start_idx:end_idx]
    if lines:
        lines[0] = lines[0].strip('`').strip()

    return '\n'.join(lines).strip()


def extract_commit_message(text: str) -> str:
    """Pull the message out of a raw model response."""
    match = _TAGGED_RE.search(text) or _OPEN_TAG_RE.search(text)
    message = match.group(1).strip() if match else clean_commit_message(text)
    if not message:
        raise LLMError("Model response did not contain a commit message")
    return message


def generate_commit_message(diff: str, config: Config) -> str:
    """Ask the configured provider for a commit message describing diff."""
    prompt = build_prompt(diff, config.prompt)
    client = get_client(config)
    response = client.generate(prompt)
    return extract_commit_message(response.content)
