from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional


@dataclass
class Report:
    """One submitted incident/observation. ``id`` 0 means not yet stored."""

    id: int = 0
    header: str = ""
    description: str = ""
    author: str = ""
    lat: float = 0.0
    lon: float = 0.0
    community: str = ""

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Report":
        # NULL columns become zero values here and nowhere else
        return cls(
            id=int(row["id"]),
            header=_text(row["header"]),
            description=_text(row["description"]),
            author=_text(row["author"]),
            lat=_coord(row["lat"]),
            lon=_coord(row["lon"]),
            community=_text(row["community"]),
        )


def _text(v: Optional[str]) -> str:
    return "" if v is None else str(v)


def _coord(v: Optional[float]) -> float:
    return 0.0 if v is None else float(v)
