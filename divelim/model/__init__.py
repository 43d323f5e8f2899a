"""Division data model."""

from divelim.model.standings import Standings

__all__ = ["Standings"]
