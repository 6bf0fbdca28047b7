"""Interactive confirmation prompts.

Implements the Confirmer interface on top of Rich prompts. The engine
never reads terminal input itself.
"""

import logging

from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt

from cleanctl.core.policy import Confirmer, Decision
from cleanctl.filesystem.models import ResolvedTarget
from cleanctl.models.profile import Entry
from cleanctl.utils.formatting import console as default_console

logger = logging.getLogger(__name__)

# Prompt answers mapped to decisions
_ANSWERS: dict[str, Decision] = {
    "y": Decision.YES,
    "n": Decision.NO,
    "a": Decision.ABORT,
}


class ConsoleConfirmer(Confirmer):
    """Asks the operator on the terminal.

    Answers are ``y`` (delete), ``n`` (skip, the default) and ``a``
    (abort: skip this and everything after it). End of input or Ctrl-C
    counts as abort.
    """

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or default_console

    def ask(self, target: ResolvedTarget) -> Decision:
        kind = "directory" if target.is_directory else "file"
        return self._prompt(f"Delete {kind} [path]{escape(target.path)}[/]?")

    def ask_entry(self, entry: Entry) -> Decision:
        return self._prompt(f"Include entry [path]{escape(entry.describe())}[/]?")

    def _prompt(self, question: str) -> Decision:
        try:
            answer = Prompt.ask(
                question,
                console=self._console,
                choices=list(_ANSWERS),
                default="n",
                case_sensitive=False,
            )
        except (EOFError, KeyboardInterrupt):
            logger.debug("Input closed, treating as abort")
            self._console.print()
            return Decision.ABORT
        return _ANSWERS[answer.lower()]
