"""Classification of what launched a run from its oldest ancestor."""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from wf_reporter.core.constants import BOOTSTRAP_COMMANDS


class RunContextKind(str, Enum):
    """What triggered a run."""

    INTERACTIVE = "interactive"
    BOOTSTRAPPER = "bootstrapper"
    CRON = "cron"
    OTHER = "other"


@dataclass(slots=True, frozen=True)
class RunContext:
    """Classified run context, keeping the command it was derived from."""

    kind: RunContextKind
    command: str

    @property
    def value(self) -> str:
        """Tag value: the category name, or the raw command for OTHER."""
        if self.kind is RunContextKind.OTHER:
            return self.command
        return self.kind.value


@dataclass(slots=True, frozen=True)
class ClassificationRule:
    kind: RunContextKind
    matches: Callable[[str], bool]
    description: str


# Order matters: the patterns overlap and the first match wins.
DEFAULT_RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule(
        RunContextKind.INTERACTIVE,
        lambda command: re.search(r"/sshd$", command) is not None,
        "ends in /sshd",
    ),
    ClassificationRule(
        RunContextKind.BOOTSTRAPPER,
        lambda command: command in BOOTSTRAP_COMMANDS,
        f"one of {', '.join(BOOTSTRAP_COMMANDS)}",
    ),
    ClassificationRule(
        RunContextKind.CRON,
        lambda command: "cron" in command,
        "contains cron",
    ),
)


class RunContextClassifier:
    """Ordered first-match classifier over an ancestor's command string."""

    def __init__(self, rules: tuple[ClassificationRule, ...] = DEFAULT_RULES) -> None:
        self.rules = rules

    def classify(self, command: str) -> RunContext:
        for rule in self.rules:
            if rule.matches(command):
                return RunContext(rule.kind, command)
        return RunContext(RunContextKind.OTHER, command)
