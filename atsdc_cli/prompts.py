"""Interactive terminal prompts.

Thin wrapper around ``rich.prompt.Prompt`` that reads one line per question
and normalises the answer.  Passing an input *stream* (any object with
``readline``) replaces the terminal, which is how the tests drive prompts.
"""

from __future__ import annotations

from typing import Callable, Optional, TextIO, TypeVar

from rich.console import Console
from rich.prompt import Prompt

from atsdc_cli.adapters import ADAPTER_MENU, ADAPTERS, Adapter, default_adapter
from atsdc_cli.utils import Style, console, print_warning, styled

T = TypeVar("T")

_YES_ANSWERS = frozenset({"y", "yes"})


class Prompter:
    """Asks free-text, yes/no and menu questions on the terminal."""

    def __init__(
        self,
        console: Console = console,
        stream: Optional[TextIO] = None,
    ) -> None:
        self.console = console
        self.stream = stream

    def _ask(self, question: str) -> str:
        try:
            answer = Prompt.ask(
                styled(question, Style.CYAN),
                console=self.console,
                default="",
                show_default=False,
                stream=self.stream,
            )
        except EOFError:
            # Closed stdin behaves like an empty answer so defaults apply.
            return ""
        return (answer or "").strip()

    def ask_text(self, question: str) -> str:
        """Ask a free-text question and return the stripped answer."""
        return self._ask(question)

    def ask_yes_no(self, question: str, default: bool = False) -> bool:
        """Ask a yes/no question.

        An empty answer returns *default*; otherwise only ``y``/``yes``
        (any case) count as yes.
        """
        hint = "Y/n" if default else "y/N"
        answer = self._ask(f"{question} ({hint})")
        if not answer:
            return default
        return answer.lower() in _YES_ANSWERS

    def ask_adapter(self, default: Optional[Adapter] = None) -> Adapter:
        """Show the numbered adapter menu and return the chosen adapter.

        An empty answer picks *default*; unknown choices fall back to it with
        a warning.
        """
        default = default or default_adapter()
        default_number = next(
            number for number, name in ADAPTER_MENU.items() if name == default.value
        )

        self.console.print()
        self.console.print(styled("Select deployment adapter:", Style.CYAN))
        for number, name in ADAPTER_MENU.items():
            label = ADAPTERS[name].name
            if number == default_number:
                self.console.print(f"  {styled(number, Style.GREEN)}. {label} (default)")
            else:
                self.console.print(f"  {number}. {label}")

        choice = self._ask(f"Enter your choice (1-{len(ADAPTER_MENU)})") or default_number
        selected = ADAPTER_MENU.get(choice)
        if selected is None:
            print_warning(f"Invalid choice, defaulting to {default.name}", self.console)
            return default
        return ADAPTERS[selected]


def resolve_option(
    value: Optional[T],
    prompt: Callable[[T], T],
    default: T,
) -> T:
    """Return *value* when it was supplied, otherwise ask *prompt*.

    The prompt receives *default* so the question can show and fall back to
    it.  ``None`` means "not supplied on the command line".
    """
    if value is not None:
        return value
    return prompt(default)
