"""
Tests for CLI output: one screen per session state, the interactive loop, and subcommands.

Shows sample output for each scenario. Run with:
    pytest tests/test_display.py -v
    pytest tests/test_display.py -v -s   # see actual terminal output
"""

import re

import pytest

from smartcommit.cli.app import InteractiveApp
from smartcommit.cli.commands import display_config, mask_secret
from smartcommit.cli.main import main
from smartcommit.cli.views import input_prompt, render, spinner_label
from smartcommit.config import Config, ConfigManager, PROVIDER_OLLAMA
from smartcommit.git import FileChange
from smartcommit.llm import CommitDraft, LLMError, ModelNotFoundError
from smartcommit.session import CommandExecutor, InterviewMachine, Session, SetupStep, State
from smartcommit.session.events import GenerateMessage, SaveConfig

from tests.helpers import FakeProvider, FakeRepository

ANSI_RE = re.compile(r'\033\[[0-9;]*m')


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def strip_ansi():
    """Return a function that removes ANSI escape codes."""
    def _strip(text: str) -> str:
        return ANSI_RE.sub('', text)
    return _strip


@pytest.fixture
def print_sample(capsys):
    """Return a function that replays a rendered screen for -s viewing."""
    def _print(out: str):
        with capsys.disabled():
            try:
                print(out)
            except UnicodeEncodeError:
                cleaned = ANSI_RE.sub('', out)
                print(cleaned.encode('ascii', errors='replace').decode('ascii'))
    return _print


def scripted_input(*lines):
    """input() replacement that replays `lines`, then behaves like ctrl+d."""
    remaining = list(lines)
    prompts = []

    def _input(prompt=""):
        prompts.append(prompt)
        if not remaining:
            raise EOFError
        line = remaining.pop(0)
        if isinstance(line, BaseException):
            raise line
        return line

    _input.prompts = prompts
    return _input


# ---------------------------------------------------------------------------
# Screens
# ---------------------------------------------------------------------------

class TestRender:

    def test_welcome(self, strip_ansi, print_sample):
        session = Session(
            state=State.WELCOME,
            config=Config(provider=PROVIDER_OLLAMA, ollama_model="llama3.1"),
            staged_files=[FileChange("src/app.py", 15, 3)],
        )
        out = strip_ansi(render(session))
        print_sample(render(session))

        assert "SmartCommit (using Ollama: llama3.1)" in out
        assert "Staged changes:" in out
        assert "src/app.py (+15 -3)" in out
        assert "1. I need help writing a commit message (Recommended)" in out
        assert "2. I already know what to write" in out
        assert "Press c to reconfigure provider" in out

    def test_welcome_openai(self, strip_ansi):
        session = Session(state=State.WELCOME, config=Config(openai_api_key="sk"))
        assert "(using OpenAI)" in strip_ansi(render(session))

    def test_long_file_list_collapses(self, strip_ansi):
        files = [FileChange(f"src/module_{i}.py", i, 0) for i in range(12)]
        out = strip_ansi(render(Session(state=State.WELCOME, staged_files=files)))

        assert "src/module_7.py" in out
        assert "src/module_8.py" not in out
        assert "... and 4 more files" in out

    def test_diff_too_large(self, strip_ansi):
        out = strip_ansi(render(Session(state=State.DIFF_TOO_LARGE, diff_size=52_000)))
        assert "Warning: Large Diff Detected" in out
        assert "52,000 characters, the limit is 40k" in out
        assert "'m'" in out

    @pytest.mark.parametrize("step, expected", [
        (SetupStep.PROVIDER, "Choose your AI provider:"),
        (SetupStep.CONFIRM_OPENAI_KEY, "OpenAI API Key Detected"),
        (SetupStep.OPENAI_KEY, "Please enter your OpenAI API Key:"),
        (SetupStep.OLLAMA_URL, "Please enter your Ollama URL:"),
        (SetupStep.OLLAMA_MODEL, "Please enter the Ollama model name:"),
    ])
    def test_setup_steps(self, strip_ansi, step, expected):
        assert expected in strip_ansi(render(Session(state=State.SETUP, setup_step=step)))

    def test_questioning(self, strip_ansi):
        session = Session(
            state=State.QUESTIONING,
            questions=["Why 5 seconds?", "Is this user facing?"],
            question_index=1,
        )
        out = strip_ansi(render(session))
        assert "Question 2/2:" in out
        assert "Is this user facing?" in out
        assert "Why 5 seconds?" not in out

    def test_commit_with_draft(self, strip_ansi, print_sample):
        draft = CommitDraft(subject="fix(app): raise request timeout", body="Slow mirrors timed out.")
        rendered = render(Session(state=State.COMMIT, draft=draft))
        print_sample(rendered)
        out = strip_ansi(rendered)

        assert "fix(app): raise request timeout" in out
        assert "Slow mirrors timed out." in out
        assert "Opening editor for review..." in out

    def test_commit_without_draft(self, strip_ansi):
        out = strip_ansi(render(Session(state=State.COMMIT, draft=CommitDraft.empty())))
        assert "Opening editor..." in out
        assert "review" not in out

    def test_no_repo(self, strip_ansi):
        out = strip_ansi(render(Session(state=State.NO_REPO)))
        assert "Not a git repository." in out
        assert "Press q to quit." in out

    def test_success(self, strip_ansi):
        assert "Successfully committed!" in strip_ansi(render(Session(state=State.SUCCESS)))

    def test_error(self, strip_ansi):
        out = strip_ansi(render(Session(state=State.ERROR, error=LLMError("failed to generate questions: boom"))))
        assert "Error: failed to generate questions: boom" in out
        assert "Press ctrl+c to quit." in out

    def test_missing_model_remediation(self, strip_ansi, print_sample):
        rendered = render(Session(state=State.ERROR, error=ModelNotFoundError("mistral")))
        print_sample(rendered)
        out = strip_ansi(rendered)

        assert "Model 'mistral' not found." in out
        assert "ollama pull mistral" in out
        assert "Press ctrl+c to quit." in out

    def test_loading_shows_spinner_label(self, strip_ansi):
        session = Session(state=State.LOADING, pending=GenerateMessage(diff="", history="", answers={}))
        assert "Writing your commit message..." in strip_ansi(render(session))


class TestPromptsAndLabels:

    def test_input_prompt_with_default(self, strip_ansi):
        session = Session(state=State.SETUP, input_default="http://localhost:11434")
        assert strip_ansi(input_prompt(session)) == " [http://localhost:11434] > "

    def test_input_prompt_plain(self):
        assert input_prompt(Session(state=State.QUESTIONING)) == " > "

    @pytest.mark.parametrize("session, expected", [
        (Session(state=State.HISTORY_ANALYSIS), "Analyzing history context..."),
        (Session(state=State.ANALYSIS), "Analyzing changes and generating questions..."),
        (Session(state=State.LOADING, pending=SaveConfig(config=Config())), "Saving configuration..."),
    ])
    def test_spinner_label(self, session, expected):
        assert spinner_label(session) == expected


# ---------------------------------------------------------------------------
# Interactive loop
# ---------------------------------------------------------------------------

def make_app(config_manager, repo=None, provider=None, inputs=(), verbose=False):
    repo = repo or FakeRepository()
    provider = provider or FakeProvider()
    executor = CommandExecutor(
        config_manager=config_manager,
        repo=repo,
        client_factory=lambda config: provider,
        environ=config_manager.environ,
    )
    app = InteractiveApp(InterviewMachine(), executor, verbose=verbose, input_fn=scripted_input(*inputs))
    return app, repo, provider


class TestInteractiveApp:

    def test_full_interview(self, configured, capsys, strip_ansi):
        app, repo, provider = make_app(
            configured, inputs=["1", "Mirrors are slow", "No", "Not yet"],
        )

        assert app.run() == 0

        out = strip_ansi(capsys.readouterr().out)
        assert "SmartCommit" in out
        assert "Question 1/3:" in out
        assert "Question 3/3:" in out
        assert "Successfully committed!" in out
        assert repo.commits == ["fix(app): raise request timeout\n\nSlow mirrors timed out."]
        assert provider.calls[-1][3] == {
            "Why 5 seconds?": "Mirrors are slow",
            "Is this user facing?": "No",
            "Any follow-up?": "Not yet",
        }

    def test_manual_commit(self, configured, capsys, strip_ansi):
        app, repo, provider = make_app(configured, inputs=["2"])

        assert app.run() == 0
        assert repo.commits == [""]
        assert provider.calls == []
        assert "Opening editor..." in strip_ansi(capsys.readouterr().out)

    def test_eof_at_welcome_quits_cleanly(self, configured):
        app, repo, _ = make_app(configured)
        assert app.run() == 0
        assert repo.commits == []

    def test_quit_key_at_no_repo(self, configured, capsys, strip_ansi):
        app, _, _ = make_app(configured, repo=FakeRepository(inside=False), inputs=["q"])
        assert app.run() == 0
        assert "Not a git repository." in strip_ansi(capsys.readouterr().out)

    def test_error_then_interrupt_exits_nonzero(self, configured, capsys, strip_ansi):
        provider = FakeProvider()
        provider.errors["analyze_history"] = LLMError("failed to analyze history: boom")
        app, repo, _ = make_app(configured, provider=provider, inputs=["1", KeyboardInterrupt()])

        assert app.run() == 1

        out = strip_ansi(capsys.readouterr().out)
        assert "Error: failed to analyze history: boom" in out
        assert repo.commits == []

    def test_input_on_error_screen_is_ignored(self, configured, capsys):
        provider = FakeProvider()
        provider.errors["generate_questions"] = LLMError("failed to generate questions: boom")
        app, _, _ = make_app(configured, provider=provider, inputs=["1", "2", "", KeyboardInterrupt()])

        assert app.run() == 1
        assert capsys.readouterr().out.count("failed to generate questions: boom") == 1

    def test_setup_prompts_show_defaults(self, configured, strip_ansi):
        app, repo, _ = make_app(configured, inputs=["2", "", "", "2"])

        assert app.run(force_setup=True) == 0

        saved = configured.load()
        assert saved.provider == "ollama"
        assert saved.ollama_url == "http://localhost:11434"
        assert saved.ollama_model == "llama3.1"
        prompts = [strip_ansi(p) for p in app._input.prompts]
        assert " [http://localhost:11434] > " in prompts
        assert " [llama3.1] > " in prompts
        assert repo.commits == [""]

    def test_first_run_without_key_shows_provider_choice(self, config_manager, capsys, strip_ansi):
        app, repo, _ = make_app(config_manager, inputs=["2", "", "", "2"])

        assert app.run() == 0

        out = strip_ansi(capsys.readouterr().out)
        assert out.index("Choose your AI provider:") < out.index("Please enter your Ollama URL:")
        assert "Please enter your OpenAI API Key:" not in out
        assert config_manager.load().provider == "ollama"
        assert repo.commits == [""]

    def test_verbose_prints_stats_to_stderr(self, configured, capsys):
        app, _, _ = make_app(configured, verbose=True)
        app.run()
        err = capsys.readouterr().err
        assert "CheckPrerequisites:" in err


# ---------------------------------------------------------------------------
# Subcommands
# ---------------------------------------------------------------------------

class TestSubcommands:

    @pytest.mark.parametrize("value, expected", [
        ("", "(not set)"),
        ("short", "*****"),
        ("sk-proj-abcdef123456", "sk-...3456"),
    ])
    def test_mask_secret(self, value, expected):
        assert mask_secret(value) == expected

    def test_display_config(self, configured, capsys, strip_ansi):
        assert display_config(configured) == 0
        out = strip_ansi(capsys.readouterr().out)
        assert "Current Configuration" in out
        assert "provider:        openai" in out
        assert "sk-test" not in out

    def test_display_config_malformed(self, tmp_path, capsys):
        path = tmp_path / "config.json"
        path.write_text("{broken")
        assert display_config(ConfigManager(path=path)) == 1
        assert "Could not parse" in capsys.readouterr().err

    def test_main_display_config(self, tmp_path, monkeypatch, capsys):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)

        assert main(["--display-config"]) == 0
        assert "defaults" in capsys.readouterr().out

    def test_main_reports_unexpected_errors(self, monkeypatch, capsys):
        def explode(self, force_setup=False):
            raise RuntimeError("terminal went away")
        monkeypatch.setattr(InteractiveApp, "run", explode)

        assert main([]) == 1
        assert "Alas, there's been an error: terminal went away" in capsys.readouterr().err

    def test_setup_flag_forces_setup(self, monkeypatch):
        seen = {}

        def record(self, force_setup=False):
            seen["force_setup"] = force_setup
            return 0
        monkeypatch.setattr(InteractiveApp, "run", record)

        assert main(["--setup"]) == 0
        assert seen == {"force_setup": True}
