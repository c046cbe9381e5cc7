"""Ports (interfaces) owned by the domain layer.

Domain services depend on these protocols only; adapters live in
``src.infrastructure``.
"""

from src.domain.ports.random_source import RandomSourceProtocol

__all__: list[str] = ["RandomSourceProtocol"]
