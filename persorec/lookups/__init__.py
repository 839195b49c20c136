from typing import Optional

from .base import BaseNormLookup, LookupOutcome, LookupResult
from .memory import InMemoryNormLookup
from .table import TabularNormLookup

__all__ = [
    "BaseNormLookup",
    "LookupOutcome",
    "LookupResult",
    "InMemoryNormLookup",
    "TabularNormLookup",
    "get_lookup",
]


def get_lookup(name: str, config: Optional[dict] = None) -> BaseNormLookup:
    """Factory function to get a norm lookup backend by name."""
    backends = {
        "memory": InMemoryNormLookup,
        "table": TabularNormLookup,
    }

    backend_class = backends.get(name.lower())
    if not backend_class:
        raise ValueError(
            f"Unknown norm lookup backend: {name}. Available: {list(backends.keys())}"
        )

    return backend_class(config=config if config else {})
