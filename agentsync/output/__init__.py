# AgentSync Output Module
# Rich console output

from agentsync.output.console import Console, create_console

__all__ = [
    "Console",
    "create_console",
]
