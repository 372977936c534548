"""Shared fakes for driving the interview without git or a network."""

from smartcommit.git import FileChange
from smartcommit.llm import CommitDraft, HistoryAnalysis, Provider
from smartcommit.session import CommandExecutor, InterviewMachine
from smartcommit.session.events import Quit, TextSubmitted

SAMPLE_DIFF = (
    "diff --git a/src/app.py b/src/app.py\n"
    "+    timeout = 5\n"
)
SAMPLE_HISTORY = "Commit: abc123\nSubject: feat: add retries\nBody:\n\n---"


class FakeRepository:
    """Stands in for smartcommit.git.Repository."""

    def __init__(self, diff=SAMPLE_DIFF, history=SAMPLE_HISTORY, inside=True, files=None):
        self.diff = diff
        self.history = history
        self.inside = inside
        self.files = files if files is not None else [FileChange("src/app.py", 1, 0)]
        self.history_counts = []
        self.commits = []
        self.commit_error = None

    def is_inside_repository(self):
        return self.inside

    def staged_diff(self):
        return self.diff

    def staged_files(self):
        return list(self.files)

    def recent_history(self, count):
        self.history_counts.append(count)
        return self.history

    def commit(self, message):
        if self.commit_error:
            raise self.commit_error
        self.commits.append(message)


class FakeProvider(Provider):
    """Scripted backend that records every call."""

    def __init__(self, questions=None, analysis=None, draft=None):
        self.questions = ["Why 5 seconds?", "Is this user facing?", "Any follow-up?"] if questions is None else questions
        self.analysis = analysis or HistoryAnalysis(is_relevant=True, key_context=["retries were added last week"])
        self.draft = draft or CommitDraft(subject="fix(app): raise request timeout", body="Slow mirrors timed out.")
        self.errors = {}
        self.calls = []

    @property
    def name(self):
        return "Fake"

    def _record(self, op, *args):
        self.calls.append((op, *args))
        if op in self.errors:
            raise self.errors[op]

    def analyze_history(self, diff, history):
        self._record("analyze_history", diff, history)
        return self.analysis

    def generate_questions(self, diff, history):
        self._record("generate_questions", diff, history)
        return list(self.questions)

    def generate_commit_message(self, diff, history, answers):
        self._record("generate_commit_message", diff, history, dict(answers))
        return self.draft


class Harness:
    """Runs machine commands through a real CommandExecutor until input is needed."""

    def __init__(self, repo, provider, config_manager):
        self.machine = InterviewMachine()
        self.executor = CommandExecutor(
            config_manager=config_manager,
            repo=repo,
            client_factory=lambda config: provider,
            environ=config_manager.environ,
        )
        self.commands = []
        self.states = []

    @property
    def session(self):
        return self.machine.session

    def run(self, command):
        while command is not None and not isinstance(command, Quit):
            self.commands.append(command)
            command = self.machine.handle(self.executor.execute(command))
            self.states.append(self.session.state)
        return command

    def start(self, force_setup=False):
        return self.run(self.machine.start(force_setup=force_setup))

    def submit(self, text):
        result = self.run(self.machine.handle(TextSubmitted(text)))
        self.states.append(self.session.state)
        return result
