"""
Environment revision checker.

Reports which dependency revision each environment branch carries and when
it last changed.
"""

from .config import CheckerConfig, Environment, SyncMode
from .core import RevisionChecker
from .data_models import AggregateResult, RevisionRecord

__all__ = [
    "RevisionChecker",
    "CheckerConfig",
    "Environment",
    "SyncMode",
    "AggregateResult",
    "RevisionRecord",
]
