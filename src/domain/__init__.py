"""Domain layer: pure models, errors and rules with no I/O."""

from src.domain.exceptions import TMLError

__all__ = ["TMLError"]
