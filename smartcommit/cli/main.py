"""CLI Main Entry Point"""

import sys

from smartcommit.cli.app import InteractiveApp
from smartcommit.cli.args import parse_args
from smartcommit.cli.commands import display_config, run_install_completion
from smartcommit.output import print_error
from smartcommit.session import CommandExecutor, InterviewMachine


def _handle_subcommands(args):
    """Handle subcommands that exit early.

    Returns:
        tuple: (exit_code, should_exit) - exit_code if should_exit is True
    """
    if args.install_completion:
        return run_install_completion(), True
    if args.display_config:
        return display_config(), True
    return 0, False


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    args = parse_args(argv)

    exit_code, should_exit = _handle_subcommands(args)
    if should_exit:
        return exit_code

    app = InteractiveApp(InterviewMachine(), CommandExecutor(), verbose=args.verbose)
    try:
        return app.run(force_setup=args.setup)
    except Exception as e:
        # Session failures are shown on the error screen; this is the loop itself
        print_error(f"Alas, there's been an error: {e}")
        return 1


def run() -> None:
    sys.exit(main())
