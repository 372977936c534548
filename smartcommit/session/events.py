"""Events consumed and commands emitted by the interview state machine.

Input events come from the terminal, result events from the CommandExecutor.
Every command produces exactly one result event.
"""

from dataclasses import dataclass, field

from smartcommit.config import Config
from smartcommit.git import FileChange
from smartcommit.llm import CommitDraft, HistoryAnalysis
from smartcommit.session.models import SetupStep


# ---------------------------------------------------------------------------
# Input events
# ---------------------------------------------------------------------------

@dataclass
class TextSubmitted:
    text: str


@dataclass
class Interrupted:
    """Ctrl+C or end of input."""


# ---------------------------------------------------------------------------
# Result events
# ---------------------------------------------------------------------------

@dataclass
class PrerequisitesChecked:
    config: Config
    diff: str
    history: str
    staged_files: list[FileChange] = field(default_factory=list)
    detected_api_key: str = ""


@dataclass
class SetupRequired:
    config: Config
    step: SetupStep = SetupStep.PROVIDER
    detected_api_key: str = ""


@dataclass
class NotARepository:
    pass


@dataclass
class DiffTooLarge:
    size: int


@dataclass
class ConfigSaved:
    config: Config


@dataclass
class HistoryAnalyzed:
    analysis: HistoryAnalysis


@dataclass
class QuestionsGenerated:
    questions: list[str]


@dataclass
class MessageGenerated:
    draft: CommitDraft


@dataclass
class CommitFinished:
    pass


@dataclass
class Failed:
    error: Exception


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

@dataclass
class CheckPrerequisites:
    force_setup: bool = False


@dataclass
class SaveConfig:
    config: Config


@dataclass
class AnalyzeHistory:
    diff: str
    history: str


@dataclass
class GenerateQuestions:
    diff: str
    history: str


@dataclass
class GenerateMessage:
    diff: str
    history: str
    answers: dict[str, str]


@dataclass
class RunCommit:
    draft: CommitDraft


@dataclass
class Quit:
    exit_code: int = 0


RESULT_EVENTS = (
    PrerequisitesChecked, SetupRequired, NotARepository, DiffTooLarge, ConfigSaved,
    HistoryAnalyzed, QuestionsGenerated, MessageGenerated, CommitFinished, Failed,
)
