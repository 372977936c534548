"""Command Line Interface Package"""

from smartcommit.cli.main import main, run

__all__ = ["main", "run"]
