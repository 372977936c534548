"""Command Executor - Run one command and report its outcome as one event."""

import os
import time

from smartcommit.config import ConfigError, ConfigManager
from smartcommit.git import GitError, Repository
from smartcommit.llm import LLMError, Provider, get_client
from smartcommit.session.events import (
    AnalyzeHistory,
    CheckPrerequisites,
    CommitFinished,
    ConfigSaved,
    Failed,
    GenerateMessage,
    GenerateQuestions,
    HistoryAnalyzed,
    MessageGenerated,
    PrerequisitesChecked,
    QuestionsGenerated,
    RunCommit,
    SaveConfig,
)
from smartcommit.session.prerequisites import check_prerequisites

# Everything a command can legitimately fail with; anything else is a bug
EXPECTED_ERRORS = (ConfigError, GitError, LLMError, OSError)


class CommandExecutor:
    """Owns the collaborators the state machine never touches directly."""

    def __init__(self, config_manager: ConfigManager | None = None, repo: Repository | None = None,
                 client_factory=get_client, environ=None):
        self.environ = os.environ if environ is None else environ
        # First-run defaults and key detection read the same environment
        self.config_manager = config_manager or ConfigManager(environ=self.environ)
        self.repo = repo or Repository()
        self.client_factory = client_factory
        self.provider: Provider | None = None
        self.last_duration = 0.0

    def execute(self, command):
        """Run `command` and return its result event; failures become Failed."""
        t0 = time.time()
        try:
            return self._dispatch(command)
        except EXPECTED_ERRORS as e:
            return Failed(error=e)
        finally:
            self.last_duration = time.time() - t0

    def _dispatch(self, command):
        if isinstance(command, CheckPrerequisites):
            return self._check_prerequisites(command)
        if isinstance(command, SaveConfig):
            self.config_manager.save(command.config)
            return ConfigSaved(config=command.config)
        if isinstance(command, AnalyzeHistory):
            analysis = self._require_provider().analyze_history(command.diff, command.history)
            return HistoryAnalyzed(analysis=analysis)
        if isinstance(command, GenerateQuestions):
            questions = self._require_provider().generate_questions(command.diff, command.history)
            return QuestionsGenerated(questions=questions)
        if isinstance(command, GenerateMessage):
            draft = self._require_provider().generate_commit_message(command.diff, command.history, command.answers)
            return MessageGenerated(draft=draft)
        if isinstance(command, RunCommit):
            self.repo.commit(command.draft.message)
            return CommitFinished()
        raise TypeError(f"unknown command: {command!r}")

    def _check_prerequisites(self, command: CheckPrerequisites):
        event = check_prerequisites(self.config_manager, self.repo, self.environ, command.force_setup)
        if isinstance(event, PrerequisitesChecked):
            self.provider = self.client_factory(event.config)
        return event

    def _require_provider(self) -> Provider:
        if self.provider is None:
            raise LLMError("no provider configured")
        return self.provider
