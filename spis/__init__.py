"""Spis - spoken inventory entry.

Turns a finished speech transcript into a structured inventory command.
"""

from pathlib import Path

# Path constants
PROJECT_ROOT = Path(__file__).parent.parent
ARGS_DIR = PROJECT_ROOT / "args"

__all__ = [
    "ARGS_DIR",
    "PROJECT_ROOT",
]
