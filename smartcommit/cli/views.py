"""Presentation - one screen per session state."""

from smartcommit.config import API_KEY_ENV, PROVIDER_OLLAMA, PROVIDER_OPENAI
from smartcommit.git import FileChange
from smartcommit.llm import ModelNotFoundError
from smartcommit.output import CHECK, bold, box, colorize_commit_type, dim, error, highlight, info, success, wrap
from smartcommit.session.events import CheckPrerequisites, GenerateMessage, SaveConfig
from smartcommit.session.machine import QUIT_KEY
from smartcommit.session.models import Session, SetupStep, State
from smartcommit.session.prerequisites import MAX_DIFF_CHARS

MAX_FILE_DISPLAY = 8


def spinner_label(session: Session) -> str:
    """Text shown next to the spinner while a command runs."""
    if session.state is State.HISTORY_ANALYSIS:
        return "Analyzing history context..."
    if session.state is State.ANALYSIS:
        return "Analyzing changes and generating questions..."
    if isinstance(session.pending, SaveConfig):
        return "Saving configuration..."
    if isinstance(session.pending, GenerateMessage):
        return "Writing your commit message..."
    if isinstance(session.pending, CheckPrerequisites):
        return "Checking prerequisites..."
    return "Working..."


def input_prompt(session: Session) -> str:
    if session.input_default:
        return f" {dim(f'[{session.input_default}]')} > "
    return " > "


def render(session: Session) -> str:
    """Render the screen for the current state."""
    if session.error is not None:
        return _render_error(session.error)

    renderer = _RENDERERS.get(session.state)
    if renderer is None:
        return f"\n {spinner_label(session)}\n"
    return renderer(session)


def _render_error(err: Exception) -> str:
    if isinstance(err, ModelNotFoundError):
        cmd = highlight(f"ollama pull {err.model}")
        return (
            f"\n {error('Error:')} Model '{err.model}' not found.\n\n"
            f" You don't have this model installed through Ollama.\n"
            f" To install it, run the following command:\n\n"
            f"   {cmd}\n\n"
            f" Press ctrl+c to quit.\n"
        )
    return f"\n {error('Error:')} {err}\n Press ctrl+c to quit.\n"


def _render_file_list(files: list[FileChange]) -> str:
    """Staged files, collapsing long lists."""
    if not files:
        return ""
    lines = [f" {bold('Staged changes:')}"]
    shown = files[:MAX_FILE_DISPLAY]
    for change in shown:
        lines.append(dim(f"   {change.path} (+{change.additions} -{change.deletions})"))
    remaining = len(files) - len(shown)
    if remaining > 0:
        lines.append(dim(f"   ... and {remaining} more files"))
    return "\n".join(lines) + "\n"


def _provider_info(session: Session) -> str:
    config = session.config
    if config is None:
        return ""
    if config.provider == PROVIDER_OPENAI:
        return info(" (using OpenAI)")
    if config.provider == PROVIDER_OLLAMA:
        return info(f" (using Ollama: {config.ollama_model})")
    return ""


def _render_welcome(session: Session) -> str:
    return (
        f"\n {bold('SmartCommit')}{_provider_info(session)}\n\n"
        f"{_render_file_list(session.staged_files)}\n"
        f" How would you like to proceed?\n\n"
        f" 1. I need help writing a commit message (Recommended)\n"
        f" 2. I already know what to write\n\n"
        f" {dim('Press c to reconfigure provider')}\n"
        f" {dim('(Enter 1 or 2)')}\n"
    )


def _render_diff_too_large(session: Session) -> str:
    limit = f"{MAX_DIFF_CHARS // 1000}k"
    return (
        f"\n {error('Warning: Large Diff Detected')}\n\n"
        f" The staged changes are too large for AI analysis.\n"
        f" ({session.diff_size:,} characters, the limit is {limit})\n\n"
        f" You can:\n"
        f" 1. Enter 'm' (or just press Enter) to write the commit message manually.\n"
        f" 2. Enter '{QUIT_KEY}' to quit and stage fewer changes.\n"
    )


def _render_setup(session: Session) -> str:
    step = session.setup_step
    if step is SetupStep.PROVIDER:
        return (
            f"\n Choose your AI provider:\n\n"
            f" 1. OpenAI (GPT-4o)\n"
            f"    {dim('Not private, costs money, great accuracy/performance')}\n\n"
            f" 2. Ollama (llama3.1)\n"
            f"    {dim('Private, free, lower accuracy/performance')}\n\n"
            f" {dim('(Enter 1 or 2)')}\n"
        )
    if step is SetupStep.CONFIRM_OPENAI_KEY:
        return (
            f"\n {bold('OpenAI API Key Detected')}\n\n"
            f" Found {API_KEY_ENV} in your environment.\n"
            f" Would you like to use it?\n\n"
            f" {dim('(y/n)')}\n"
        )
    titles = {
        SetupStep.OPENAI_KEY: ("Please enter your OpenAI API Key:", "(Press Enter to save)"),
        SetupStep.OLLAMA_URL: ("Please enter your Ollama URL:", "(Press Enter to continue)"),
        SetupStep.OLLAMA_MODEL: ("Please enter the Ollama model name:", "(Press Enter to save)"),
    }
    title, hint = titles[step]
    return f"\n {bold(title)}\n {dim(hint)}\n"


def _render_questioning(session: Session) -> str:
    question = session.current_question
    if question is None:
        return ""
    heading = bold(f"Question {session.question_index + 1}/{len(session.questions)}:")
    return (
        f"\n {heading}\n"
        f"{wrap(question, indent=' ')}\n"
        f" {dim('(Press Enter to submit)')}\n"
    )


def _render_commit(session: Session) -> str:
    draft = session.draft
    if draft is None or draft.is_empty:
        return "\n Opening editor...\n"
    return f"\n{box(colorize_commit_type(draft.message))}\n\n Opening editor for review...\n"


def _render_no_repo(session: Session) -> str:
    return (
        f"\n {error('Error:')} Not a git repository.\n\n"
        f" Please run smartcommit inside a git repository.\n"
        f" Press {QUIT_KEY} to quit.\n"
    )


def _render_success(session: Session) -> str:
    return f"\n {success(CHECK)} Successfully committed!\n"


_RENDERERS = {
    State.WELCOME: _render_welcome,
    State.DIFF_TOO_LARGE: _render_diff_too_large,
    State.SETUP: _render_setup,
    State.QUESTIONING: _render_questioning,
    State.COMMIT: _render_commit,
    State.NO_REPO: _render_no_repo,
    State.SUCCESS: _render_success,
}
