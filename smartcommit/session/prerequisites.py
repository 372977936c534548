"""Prerequisite check run before every interview (and after every setup)."""

from smartcommit.config import API_KEY_ENV, Config, ConfigManager, PROVIDER_OLLAMA, PROVIDER_OPENAI
from smartcommit.git import NothingStagedError, Repository
from smartcommit.session.events import (
    DiffTooLarge,
    NotARepository,
    PrerequisitesChecked,
    SetupRequired,
)
from smartcommit.session.models import SetupStep

# ~10k tokens; larger diffs go straight to manual entry
MAX_DIFF_CHARS = 40_000
HISTORY_DEPTH = 10


def required_setup_step(config: Config) -> SetupStep | None:
    """Return the setup step that must run before `config` is usable, or None.

    An incomplete record always restarts setup at the provider choice; a
    detected environment key is offered once the user picks OpenAI.
    """
    if config.provider == PROVIDER_OPENAI and config.openai_api_key:
        return None
    if config.provider == PROVIDER_OLLAMA and config.ollama_url and config.ollama_model:
        return None
    return SetupStep.PROVIDER


def check_prerequisites(config_manager: ConfigManager, repo: Repository, environ, force_setup: bool = False):
    """Load the configuration and inspect the working tree.

    Returns one of PrerequisitesChecked, SetupRequired, NotARepository or
    DiffTooLarge. Raises ConfigError, GitError or NothingStagedError.
    """
    config = config_manager.load()
    detected = environ.get(API_KEY_ENV, "")

    if force_setup:
        return SetupRequired(config=config, step=SetupStep.PROVIDER, detected_api_key=detected)

    step = required_setup_step(config)
    if step is not None:
        return SetupRequired(config=config, step=step, detected_api_key=detected)

    if not repo.is_inside_repository():
        return NotARepository()

    diff = repo.staged_diff()
    if not diff.strip():
        raise NothingStagedError()

    if len(diff) > MAX_DIFF_CHARS:
        return DiffTooLarge(size=len(diff))

    history = repo.recent_history(HISTORY_DEPTH)
    return PrerequisitesChecked(
        config=config,
        diff=diff,
        history=history,
        staged_files=repo.staged_files(),
        detected_api_key=detected,
    )
