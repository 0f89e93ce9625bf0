"""Detection, normalization and policy evaluation for audit reports."""

from .detector import describe_unrecognized, detect
from .normalizer import normalize
from .pipeline import run_audit
from .policy import evaluate

__all__ = ["describe_unrecognized", "detect", "evaluate", "normalize", "run_audit"]
