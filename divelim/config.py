"""Configuration classes for divelim components."""

from dataclasses import dataclass


@dataclass(frozen=True)
class EliminationConfig:
    """Configuration for elimination queries on a division."""

    # Try the O(1) leader comparison before building a flow network
    trivial_check: bool = True

    # Keep the most recent result and reuse it for repeated queries on the
    # same competitor
    cache_results: bool = True


# Global configuration instance
DEFAULT_CONFIG = EliminationConfig()
