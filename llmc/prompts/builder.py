"""Prompt Builder - Construct LLM prompts for commit message generation."""

from llmc import COMMIT_TYPES

DIFF_PLACEHOLDER = "${diff}"

_TYPE_LIST = "\n".join(f"   - {name}: {desc}" for name, desc in COMMIT_TYPES.items())

_PROMPT_HEAD = f"""\
You are tasked with writing a commit message that follows the Conventional Commits \
specification based on a given git diff. The commit message should accurately describe \
the changes made in the code while adhering to the specified format.

Here's a summary of the Conventional Commits specification:

1. The commit message should have this structure:
   <type>[optional scope]: <description>

   [optional body]

   [optional footer(s)]

2. Types include:
{_TYPE_LIST}
3. A scope may be provided after the type, within parentheses
4. The description should be a short summary of the code changes
5. A longer commit body may be provided after the short description
6. Footer(s) may be provided one blank line after the body
7. Breaking changes must be indicated by "!" after the type/scope, or "BREAKING CHANGE:" in the footer

Now, analyze the following git diff:

<git_diff>
"""

_PROMPT_TAIL = """
</git_diff>

To write an appropriate commit message:

1. Examine the changes in the git diff carefully
2. Determine the primary purpose of the changes (e.g., bug fix, new feature, refactor)
3. Identify the appropriate type based on the changes
4. If applicable, determine a relevant scope
5. Write a concise description of the changes
6. If necessary, add a more detailed explanation in the commit body
7. Include any relevant footer information, especially for breaking changes

Provide your commit message within <commit_message> tags. Do not include any explanation \
or reasoning outside of these tags; the commit message itself should be the only output."""


def default_prompt(diff: str) -> str:
    # Concatenation, not str.format: diffs are full of braces
    return _PROMPT_HEAD + diff + _PROMPT_TAIL


def build_prompt(diff: str, template: str | None = None) -> str:
    """Fill a user template's ${diff} placeholders, or fall back to the default prompt."""
    if template:
        return diff.join(template.split(DIFF_PLACEHOLDER))
    return default_prompt(diff)
