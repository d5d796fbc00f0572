"""
llmc

LLM-written commit messages from staged git changes.
"""

__version__ = "1.0.0"

# Conventional commit types, listed in the default prompt
COMMIT_TYPES = {
    'feat': 'A new feature or capability',
    'fix': 'A bug fix',
    'build': 'Build system or external dependency changes',
    'chore': 'Maintenance tasks, dependencies, tooling',
    'ci': 'CI/CD configuration changes',
    'docs': 'Documentation only changes',
    'style': 'Formatting, whitespace, no code change',
    'refactor': 'Code restructuring without behavior change',
    'perf': 'Performance improvement',
    'test': 'Adding or updating tests',
}

COMMIT_TYPE_NAMES = list(COMMIT_TYPES.keys())
