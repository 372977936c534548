"""Interview State Machine

Drives one session: prerequisite check, optional provider setup, history
analysis, clarifying questions, message generation and the final commit.

The machine never performs I/O. `handle()` takes one event, updates the
session and returns the next command (or None when it is waiting for
input). The caller runs the command and feeds the result event back, so at
most one command is ever in flight.
"""

from smartcommit.config import DEFAULT_OLLAMA_MODEL, DEFAULT_OLLAMA_URL, PROVIDER_OLLAMA, PROVIDER_OPENAI
from smartcommit.llm import CommitDraft
from smartcommit.prompts import with_key_context
from smartcommit.session.events import (
    RESULT_EVENTS,
    AnalyzeHistory,
    CheckPrerequisites,
    CommitFinished,
    ConfigSaved,
    DiffTooLarge,
    Failed,
    GenerateMessage,
    GenerateQuestions,
    HistoryAnalyzed,
    Interrupted,
    MessageGenerated,
    NotARepository,
    PrerequisitesChecked,
    QuestionsGenerated,
    Quit,
    RunCommit,
    SaveConfig,
    SetupRequired,
    TextSubmitted,
)
from smartcommit.session.models import Session, SetupStep, State, TEXT_ENTRY_STATES

QUIT_KEY = "q"

# "q" is an answer here, not a quit request
QUIT_EXEMPT_STATES = TEXT_ENTRY_STATES | {State.DIFF_TOO_LARGE}


class InterviewMachine:
    """Transition function over a single Session."""

    def __init__(self, session: Session | None = None):
        self.session = session or Session()

    def start(self, force_setup: bool = False):
        self.session.state = State.LOADING
        return self._dispatch(CheckPrerequisites(force_setup=force_setup))

    def handle(self, event):
        """Apply one event and return the next command, or None."""
        session = self.session

        if isinstance(event, Interrupted):
            session.pending = None
            return self._quit()

        if isinstance(event, RESULT_EVENTS):
            session.pending = None
            return self._on_result(event)

        if isinstance(event, TextSubmitted):
            if session.pending is not None:
                return None
            return self._on_text(event.text)

        raise TypeError(f"unknown event: {event!r}")

    # -- helpers -------------------------------------------------------------

    def _dispatch(self, command):
        self.session.pending = command
        return command

    def _quit(self) -> Quit:
        return Quit(exit_code=1 if self.session.state is State.ERROR else 0)

    def _commit(self, draft: CommitDraft):
        self.session.draft = draft
        self.session.state = State.COMMIT
        return self._dispatch(RunCommit(draft=draft))

    def _generate_message(self):
        s = self.session
        s.state = State.LOADING
        return self._dispatch(GenerateMessage(
            diff=s.diff,
            history=with_key_context(s.history, s.key_context),
            answers=dict(s.answers),
        ))

    def _enter_setup(self, step: SetupStep) -> None:
        s = self.session
        s.state = State.SETUP
        s.setup_step = step
        if step is SetupStep.OLLAMA_URL:
            s.input_default = DEFAULT_OLLAMA_URL
        elif step is SetupStep.OLLAMA_MODEL:
            s.input_default = DEFAULT_OLLAMA_MODEL
        else:
            s.input_default = ""

    def _save_config(self):
        self.session.state = State.LOADING
        self.session.input_default = ""
        return self._dispatch(SaveConfig(config=self.session.config))

    # -- result events -------------------------------------------------------

    def _on_result(self, event):
        s = self.session

        if isinstance(event, Failed):
            s.error = event.error
            s.state = State.ERROR
            return None

        if isinstance(event, SetupRequired):
            s.config = event.config
            s.detected_api_key = event.detected_api_key
            self._enter_setup(event.step)
            return None

        if isinstance(event, NotARepository):
            s.state = State.NO_REPO
            return None

        if isinstance(event, DiffTooLarge):
            s.diff_size = event.size
            s.state = State.DIFF_TOO_LARGE
            return None

        if isinstance(event, PrerequisitesChecked):
            s.config = event.config
            s.detected_api_key = event.detected_api_key
            s.diff = event.diff
            s.diff_size = len(event.diff)
            s.history = event.history
            s.staged_files = list(event.staged_files)
            s.state = State.WELCOME
            return None

        if isinstance(event, ConfigSaved):
            s.config = event.config
            s.state = State.LOADING
            return self._dispatch(CheckPrerequisites())

        if isinstance(event, HistoryAnalyzed):
            analysis = event.analysis
            s.key_context = list(analysis.key_context) if analysis.is_relevant else []
            s.state = State.ANALYSIS
            return self._dispatch(GenerateQuestions(diff=s.diff, history=s.history))

        if isinstance(event, QuestionsGenerated):
            # Duplicates would collapse in the answer map
            s.questions = list(dict.fromkeys(q for q in event.questions if q.strip()))
            s.answers = {}
            s.question_index = 0
            if not s.questions:
                return self._generate_message()
            s.state = State.QUESTIONING
            return None

        if isinstance(event, MessageGenerated):
            return self._commit(event.draft)

        if isinstance(event, CommitFinished):
            s.state = State.SUCCESS
            return Quit(exit_code=0)

        raise TypeError(f"unhandled result: {event!r}")

    # -- input events --------------------------------------------------------

    def _on_text(self, text: str):
        s = self.session
        value = text.strip()

        if value == QUIT_KEY and s.state not in QUIT_EXEMPT_STATES:
            return self._quit()

        if s.state is State.WELCOME:
            return self._on_welcome(value)
        if s.state is State.SETUP:
            return self._on_setup(value)
        if s.state is State.QUESTIONING:
            return self._on_answer(value)
        if s.state is State.DIFF_TOO_LARGE:
            return self._on_diff_too_large(value)
        return None

    def _on_welcome(self, value: str):
        choice = value.lower()
        if choice in ("1", ""):
            self.session.state = State.HISTORY_ANALYSIS
            return self._dispatch(AnalyzeHistory(diff=self.session.diff, history=self.session.history))
        if choice == "2":
            return self._commit(CommitDraft.empty())
        if choice == "c":
            self._enter_setup(SetupStep.PROVIDER)
        return None

    def _on_diff_too_large(self, value: str):
        choice = value.lower()
        if choice in ("m", ""):
            return self._commit(CommitDraft.empty())
        if choice == QUIT_KEY:
            return Quit(exit_code=0)
        return None

    def _on_answer(self, value: str):
        s = self.session
        if not value:
            return None

        s.answers[s.questions[s.question_index]] = value
        s.question_index += 1

        if s.question_index >= len(s.questions):
            return self._generate_message()
        return None

    def _on_setup(self, value: str):
        s = self.session
        config = s.config
        step = s.setup_step

        if step is SetupStep.PROVIDER:
            if value == "1":
                self._enter_setup(SetupStep.CONFIRM_OPENAI_KEY if s.detected_api_key else SetupStep.OPENAI_KEY)
            elif value == "2":
                self._enter_setup(SetupStep.OLLAMA_URL)
            return None

        if step is SetupStep.CONFIRM_OPENAI_KEY:
            answer = value.lower()
            if answer in ("y", "yes", ""):
                config.provider = PROVIDER_OPENAI
                config.openai_api_key = s.detected_api_key
                return self._save_config()
            if answer in ("n", "no"):
                self._enter_setup(SetupStep.OPENAI_KEY)
            return None

        value = value or s.input_default
        if not value:
            return None

        if step is SetupStep.OPENAI_KEY:
            config.provider = PROVIDER_OPENAI
            config.openai_api_key = value
            return self._save_config()

        if step is SetupStep.OLLAMA_URL:
            config.ollama_url = value
            self._enter_setup(SetupStep.OLLAMA_MODEL)
            return None

        if step is SetupStep.OLLAMA_MODEL:
            config.provider = PROVIDER_OLLAMA
            config.ollama_model = value
            return self._save_config()

        return None
