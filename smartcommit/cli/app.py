"""Interactive App - the event loop around the interview state machine."""

import sys

from smartcommit.cli.views import input_prompt, render, spinner_label
from smartcommit.output import Spinner, dim
from smartcommit.session import CommandExecutor, InterviewMachine, State
from smartcommit.session.events import Interrupted, Quit, RunCommit, TextSubmitted


class InteractiveApp:
    """Runs one command at a time and reads input only when nothing is pending."""

    def __init__(self, machine: InterviewMachine, executor: CommandExecutor,
                 verbose: bool = False, input_fn=input):
        self.machine = machine
        self.executor = executor
        self.verbose = verbose
        self._input = input_fn
        self._last_view = None

    @property
    def session(self):
        return self.machine.session

    def run(self, force_setup: bool = False) -> int:
        """Drive the session to completion and return the exit code."""
        command = self.machine.start(force_setup=force_setup)

        while True:
            if isinstance(command, Quit):
                if self.session.state is State.SUCCESS:
                    self._show(render(self.session))
                return command.exit_code

            if command is not None:
                command = self.machine.handle(self._execute(command))
                continue

            self._show(render(self.session))
            command = self.machine.handle(self._read_input())

    def _show(self, view: str) -> None:
        # Invalid input leaves the screen unchanged; don't repaint it
        if view != self._last_view:
            print(view)
            self._last_view = view

    def _read_input(self):
        try:
            return TextSubmitted(self._input(input_prompt(self.session)))
        except (KeyboardInterrupt, EOFError):
            print()
            return Interrupted()

    def _execute(self, command):
        try:
            if isinstance(command, RunCommit):
                # The editor needs the terminal, no spinner
                self._show(render(self.session))
                event = self.executor.execute(command)
            else:
                with Spinner(spinner_label(self.session)):
                    event = self.executor.execute(command)
        except KeyboardInterrupt:
            return Interrupted()

        if self.verbose:
            self._print_verbose_stats(command)
        return event

    def _print_verbose_stats(self, command) -> None:
        parts = [f"{type(command).__name__}: {self.executor.last_duration:.2f}s"]
        diff = getattr(command, 'diff', None)
        if diff is not None:
            parts.append(f"diff={len(diff)} chars (~{len(diff) // 4} tokens)")
        history = getattr(command, 'history', None)
        if history is not None:
            parts.append(f"history={len(history)} chars")
        answers = getattr(command, 'answers', None)
        if answers is not None:
            parts.append(f"answers={len(answers)}")
        print(dim("  " + ", ".join(parts)), file=sys.stderr)
