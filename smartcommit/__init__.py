"""
SmartCommit

Interactive assistant that interviews you about your staged changes and
drafts a Conventional Commits message.
"""

__version__ = "1.0.0"

# Centralized commit types - single source of truth
# Used by: prompts/builder.py (local rules), tests
COMMIT_TYPES = {
    'feat': 'A new feature or capability',
    'fix': 'A bug fix',
    'docs': 'Documentation only changes',
    'style': 'Formatting, whitespace, no code change',
    'refactor': 'Code restructuring without behavior change',
    'perf': 'Performance improvement',
    'test': 'Adding or updating tests',
    'build': 'Build system or external dependency changes',
    'ci': 'CI/CD configuration changes',
    'chore': 'Maintenance tasks, dependencies, tooling',
    'revert': 'Reverts a previous commit',
}
