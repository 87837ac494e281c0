"""Core layer — logging, error taxonomy, permission flags and authorization gates.

This package is framework-agnostic. It must NEVER import from ``bot/`` or ``sdk/``.
"""

from core.gates import authorize
from core.logger import SwitchboardLogger
from core.permissions import Permission

__all__ = [
    "authorize",
    "SwitchboardLogger",
    "Permission",
]
