"""Interview Session Package"""

from smartcommit.session.effects import CommandExecutor
from smartcommit.session.machine import InterviewMachine
from smartcommit.session.models import Session, SetupStep, State
from smartcommit.session.prerequisites import HISTORY_DEPTH, MAX_DIFF_CHARS, check_prerequisites, required_setup_step

__all__ = [
    "CommandExecutor",
    "HISTORY_DEPTH",
    "InterviewMachine",
    "MAX_DIFF_CHARS",
    "Session",
    "SetupStep",
    "State",
    "check_prerequisites",
    "required_setup_step",
]
