"""Data models for URL shortener."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UrlRecord:
    """Represents a stored URL record."""

    id: str
    url: str
    shortened: str

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "url": self.url,
            "shortened": self.shortened,
        }

    @classmethod
    def from_dict(cls, data) -> "UrlRecord":
        """Create from a dictionary or database row."""
        return cls(
            id=str(data["id"]),
            url=data["url"],
            shortened=data["shortened"],
        )
