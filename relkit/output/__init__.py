"""Output abstraction layer."""

from .console import ConsoleProtocol, MockConsole, RichConsole, Style
from .logfile import TeeConsole, open_release_log

__all__ = [
    "ConsoleProtocol",
    "MockConsole",
    "RichConsole",
    "Style",
    "TeeConsole",
    "open_release_log",
]
