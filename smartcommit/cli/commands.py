"""CLI Commands"""

import os
import sys

from smartcommit.config import API_KEY_ENV, ConfigError, ConfigManager, PROVIDER_OLLAMA
from smartcommit.output import bold, dim, info, print_error


def mask_secret(value: str) -> str:
    if not value:
        return "(not set)"
    if len(value) <= 8:
        return "*" * len(value)
    return f"{value[:3]}...{value[-4:]}"


def display_config(manager: ConfigManager | None = None) -> int:
    """Display current configuration."""
    manager = manager or ConfigManager()
    try:
        config = manager.load()
    except ConfigError as e:
        print_error(str(e))
        return 1

    print(f"\n{bold('Current Configuration')}\n")

    if manager.exists():
        print(f"  {dim('Loaded from:')} {manager.path}")
    else:
        print(f"  {dim('Loaded from:')} defaults (no {manager.path} yet)")

    if os.environ.get(API_KEY_ENV):
        print(f"  {dim('Environment:')} {API_KEY_ENV} is set")

    print()
    print(f"  {bold('Settings:')}")
    print(f"    provider:        {info(config.provider or '(not set)')}")
    print(f"    openai_api_key:  {info(mask_secret(config.openai_api_key))}")
    if config.provider == PROVIDER_OLLAMA:
        print(f"    ollama_url:      {info(config.ollama_url or '(not set)')}")
        print(f"    ollama_model:    {info(config.ollama_model or '(not set)')}")

    print(f"\n  {dim('Run')} smartcommit --setup {dim('to configure')}\n")
    return 0


def run_install_completion() -> int:
    """Install shell tab completion."""
    shell = os.environ.get('SHELL', '')
    line = 'eval "$(register-python-argcomplete smartcommit)"'

    print(f"\n{bold('Tab Completion Setup')}\n")

    if 'zsh' in shell or 'bash' in shell:
        rc_name = '~/.zshrc' if 'zsh' in shell else '~/.bashrc'
        rc_file = os.path.expanduser(rc_name)
        print(f"Add this line to {dim(rc_file)}:\n")
        print(f"  {line}\n")
        print(f"Then run: {dim(f'source {rc_name}')}")
    elif sys.platform == 'win32':
        print("For PowerShell, run:\n")
        print("  register-python-argcomplete --shell powershell smartcommit | Out-String | Invoke-Expression\n")
        print("To make it permanent, add it to your $PROFILE.")
    else:
        print("Run one of these based on your shell:\n")
        print(f"  {dim('# Bash/Zsh')}")
        print(f"  {line}\n")
        print(f"  {dim('# Fish')}")
        print("  register-python-argcomplete --shell fish smartcommit | source")

    print(f"\n{dim('After setup, press TAB to autocomplete flags.')}")
    return 0
