"""Session state for one interview, from launch to commit or exit."""

from dataclasses import dataclass, field
from enum import Enum

from smartcommit.config import Config
from smartcommit.git import FileChange
from smartcommit.llm import CommitDraft


class State(Enum):
    LOADING = "loading"
    SETUP = "setup"
    WELCOME = "welcome"
    HISTORY_ANALYSIS = "history_analysis"
    ANALYSIS = "analysis"
    QUESTIONING = "questioning"
    COMMIT = "commit"
    SUCCESS = "success"
    ERROR = "error"
    NO_REPO = "no_repo"
    DIFF_TOO_LARGE = "diff_too_large"


class SetupStep(Enum):
    PROVIDER = "provider"
    OPENAI_KEY = "openai_key"
    CONFIRM_OPENAI_KEY = "confirm_openai_key"
    OLLAMA_URL = "ollama_url"
    OLLAMA_MODEL = "ollama_model"


# States in the middle of a text interview, where "q" is an ordinary answer
TEXT_ENTRY_STATES = frozenset({State.QUESTIONING, State.SETUP, State.WELCOME})


@dataclass
class Session:
    """Everything the interview accumulates. Mutated only by InterviewMachine."""
    state: State = State.LOADING
    setup_step: SetupStep = SetupStep.PROVIDER
    config: Config | None = None
    detected_api_key: str = ""
    input_default: str = ""
    diff: str = ""
    diff_size: int = 0
    history: str = ""
    staged_files: list[FileChange] = field(default_factory=list)
    key_context: list[str] = field(default_factory=list)
    questions: list[str] = field(default_factory=list)
    answers: dict[str, str] = field(default_factory=dict)
    question_index: int = 0
    draft: CommitDraft | None = None
    error: Exception | None = None
    pending: object | None = None

    @property
    def current_question(self) -> str | None:
        if self.state is State.QUESTIONING and self.question_index < len(self.questions):
            return self.questions[self.question_index]
        return None
