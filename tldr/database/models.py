"""Data models for tldr."""

from dataclasses import dataclass
from typing import Any, Mapping as MappingType


@dataclass(frozen=True)
class Mapping:
    """A persisted token -> destination URL mapping."""
    
    url: str
    short: str
    valid: bool = True
    
    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "url": self.url,
            "short": self.short,
            "valid": self.valid,
        }
    
    @classmethod
    def from_row(cls, row: MappingType[str, Any]) -> "Mapping":
        """Create from a database row (anything indexable by column name)."""
        return cls(
            url=row["url"],
            short=row["short"],
            valid=bool(row["valid"]),
        )
