from __future__ import annotations

from dataclasses import dataclass, field

from flutter_tools.logger import Logger
from flutter_tools.runtime import context


@dataclass(frozen=True)
class UsageEvent:
    category: str
    name: str


@dataclass
class Usage:
    """Analytics sink. Events are recorded in-process only."""

    suppress_analytics: bool = False
    events: list[UsageEvent] = field(default_factory=list)

    def send_command(self, name: str) -> None:
        if self.suppress_analytics:
            return
        self.events.append(UsageEvent(category="command", name=name))
        context.get(Logger).print_trace(f"usage: command {name}")


context.register_default(Usage, Usage)
