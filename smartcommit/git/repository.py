"""Repository Accessor - Query and commit staged changes through git."""

import subprocess
from dataclasses import dataclass
from pathlib import Path

HISTORY_FORMAT = "Commit: %h\nSubject: %s\nBody:\n%b\n---"


@dataclass
class FileChange:
    """Represents a single staged file's changes."""
    path: str
    additions: int
    deletions: int



class GitError(Exception):
    """Raised when git operations fail."""
    pass


class NothingStagedError(GitError):
    """Raised when the index holds no changes to commit."""

    def __init__(self, message: str = "no staged changes found"):
        super().__init__(message)


class Repository:
    """Thin wrapper around the git binary for the current working tree."""

    def __init__(self, cwd: str | Path | None = None):
        self.cwd = cwd

    def _run_git(self, *args: str) -> str:
        """Run a git command and return stdout."""
        try:
            result = subprocess.run(
                ['git', *args],
                cwd=self.cwd,
                capture_output=True,
                text=True,
                check=True,
                encoding='utf-8',
                errors='replace'
            )
            return result.stdout
        except subprocess.CalledProcessError as e:
            raise GitError(f"Git command failed: git {' '.join(args)}\n{e.stderr}")
        except FileNotFoundError:
            raise GitError("Git is not installed or not in PATH")

    def is_inside_repository(self) -> bool:
        try:
            return self._run_git('rev-parse', '--is-inside-work-tree').strip() == 'true'
        except GitError:
            return False

    def staged_diff(self) -> str:
        """Full text of the staged changes."""
        try:
            return self._run_git('diff', '--cached')
        except GitError as e:
            raise GitError(f"failed to get staged diff: {e}")

    def staged_files(self) -> list[FileChange]:
        """Parse 'git diff --cached --numstat' output."""
        output = self._run_git('diff', '--cached', '--numstat')

        files = []
        for line in output.strip().split('\n'):
            parts = line.split('\t')
            if len(parts) >= 3:
                additions = int(parts[0]) if parts[0] != '-' else 0
                deletions = int(parts[1]) if parts[1] != '-' else 0
                files.append(FileChange(path=parts[2], additions=additions, deletions=deletions))

        return files

    def _has_commits(self) -> bool:
        try:
            self._run_git('rev-parse', '--verify', '--quiet', 'HEAD')
            return True
        except GitError:
            return False

    def recent_history(self, count: int) -> str:
        """The last `count` commits as hash / subject / body blocks."""
        if not self._has_commits():
            return ""
        try:
            return self._run_git('log', f'-n{count}', f'--pretty=format:{HISTORY_FORMAT}')
        except GitError as e:
            raise GitError(f"failed to get git history: {e}")

    def commit_command(self, message: str) -> list[str]:
        """Build the commit invocation.

        An empty message opens the editor with nothing pre-filled; otherwise the
        message is pre-filled and the editor still opens for review.
        """
        if not message:
            return ['git', 'commit']
        return ['git', 'commit', '-e', '-m', message]

    def commit(self, message: str) -> subprocess.CompletedProcess:
        """Run the commit attached to the terminal so the editor can take over."""
        cmd = self.commit_command(message)
        try:
            result = subprocess.run(cmd, cwd=self.cwd)
        except FileNotFoundError:
            raise GitError("Git is not installed or not in PATH")
        if result.returncode != 0:
            raise GitError(f"git commit exited with status {result.returncode}")
        return result
