"""CLI Argument Parsing"""

import argparse
import argcomplete

from smartcommit import __version__


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='smartcommit',
        description='Write Conventional Commits messages by answering a few questions about your staged changes',
        epilog='Example: git add -p && smartcommit'
    )

    parser.add_argument('-v', '--version', action='version', version=f'%(prog)s {__version__}')

    parser.add_argument('--setup', action='store_true', help='Choose the AI provider before starting')
    parser.add_argument('--verbose', action='store_true', help='Show debug info (timings, diff and prompt sizes)')

    parser.add_argument('--display-config', action='store_true', help='Show current configuration')
    parser.add_argument('--install-completion', action='store_true', help='Install shell tab completion')

    argcomplete.autocomplete(parser)
    return parser.parse_args(argv)
