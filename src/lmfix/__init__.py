"""lmfix — ask a local model for a bug fix and apply it with a backup."""

from lmfix._version import __version__
from lmfix.core.models import ApplyResult, ApplyStatus, FixResult
from lmfix.fix.applier import FileUpdater
from lmfix.fix.client import InferenceClient

__all__ = [
    "__version__",
    "ApplyResult",
    "ApplyStatus",
    "FileUpdater",
    "FixResult",
    "InferenceClient",
]
