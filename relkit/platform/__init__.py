"""Platform layer: subprocesses, files, OS detection."""

from .detection import Platform, detect_platform
from .files import atomic_write_text
from .process import ProcessError, ProcessOutput, run, run_output

__all__ = [
    "Platform",
    "ProcessError",
    "ProcessOutput",
    "atomic_write_text",
    "detect_platform",
    "run",
    "run_output",
]
