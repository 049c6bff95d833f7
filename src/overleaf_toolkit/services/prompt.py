"""Yes/no decision sources for the interactive upgrade workflow.

The upgrade controller never reads the terminal itself. It asks a
`DecisionSource`, which is a blocking terminal prompt in normal use and a
scripted list of answers in tests.
"""

from typing import Iterable, List, Protocol, Tuple, runtime_checkable

import click


@runtime_checkable
class DecisionSource(Protocol):
    """Answers a yes/no question."""

    def confirm(self, message: str) -> bool:
        ...


class ConsoleDecisionSource:
    """Blocks on the terminal until the operator answers y or n."""

    def confirm(self, message: str) -> bool:
        return click.confirm(click.style(message, fg="yellow"), default=None)


class ScriptedDecisionSource:
    """Replays pre-programmed answers and records every prompt."""

    def __init__(self, answers: Iterable[bool] = ()):
        self.answers: List[bool] = list(answers)
        self.prompts: List[Tuple[str, bool]] = []

    def confirm(self, message: str) -> bool:
        if len(self.prompts) >= len(self.answers):
            raise IndexError(
                f"No scripted answer for prompt {len(self.prompts) + 1}: {message!r} "
                f"({len(self.answers)} provided)"
            )
        answer = self.answers[len(self.prompts)]
        self.prompts.append((message, answer))
        return answer
