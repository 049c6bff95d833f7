"""Shared domain models for the Overleaf toolkit."""

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence, Tuple


@dataclass(frozen=True)
class ToolkitConfiguration:
    """Flat key/value options read from `config/overleaf.rc`."""

    values: Mapping[str, str] = field(default_factory=dict)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        value = self.values.get(key)
        if value is None or value == "":
            return default
        return value

    def flag(self, key: str) -> bool:
        return self.values.get(key) == "true"

    def path(self, key: str, root: str, default: Optional[str] = None) -> Optional[str]:
        """Return the value of `key` as an absolute path under `root`, or None when unset."""
        value = self.get(key, default)
        if value is None:
            return None
        return str(Path(root, value).resolve())

    def __contains__(self, key: str) -> bool:
        return key in self.values


@dataclass(frozen=True)
class ComposeInvocation:
    """Ordered overlays, exported variables and trailing compose arguments."""

    project_name: str
    overlays: Tuple[str, ...]
    environment: Mapping[str, str]
    args: Tuple[str, ...] = ()

    @property
    def arguments(self) -> List[str]:
        arguments = ["-p", self.project_name]
        for overlay in self.overlays:
            arguments.extend(["-f", overlay])
        arguments.extend(self.args)
        return arguments

    def command(self, compose_cmd: Sequence[str]) -> List[str]:
        return list(compose_cmd) + self.arguments

    def process_environment(self, base: Mapping[str, str]) -> Dict[str, str]:
        environment = dict(base)
        environment.update(self.environment)
        return environment


@dataclass
class UpgradeSession:
    """Run-scoped state of one upgrade run. Never persisted."""

    branch: Optional[str] = None
    commit: Optional[str] = None
    services_stopped: bool = False
    decisions: List[Tuple[str, bool]] = field(default_factory=list)

    def record(self, prompt: str, answer: bool) -> bool:
        self.decisions.append((prompt, answer))
        return answer


class CodeSyncOutcome(enum.Enum):
    NO_UPDATE = "no_update"
    UP_TO_DATE = "up_to_date"
    PULLED = "pulled"
    DECLINED = "declined"


class ImageUpgradeOutcome(enum.Enum):
    NO_CHANGE = "no_change"
    DECLINED = "declined"
    ABORTED = "aborted"
    UPGRADED = "upgraded"
