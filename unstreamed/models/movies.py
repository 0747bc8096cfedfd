from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field
from typing import Any, Mapping

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]")


def clean_title(title: str) -> str:
    return _NON_ALNUM_RE.sub("", str(title).lower())


def _normalize_year(value: Any) -> str | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        s = value.strip()
        return s or None
    return None


@dataclass(frozen=True)
class RawMovie:
    """
    A movie as supplied by the source list.

    `payload` keeps the full source object so passthrough and enriched records
    carry every field the source sent, not only the ones used for lookups.
    """

    title: str
    release_year: str | None = None
    payload: Mapping[str, Any] | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> RawMovie:
        if not isinstance(payload, Mapping):
            raise ValueError(f"Movie entry must be an object (got {type(payload).__name__}).")
        title = payload.get("title")
        if not isinstance(title, str) or not title.strip():
            raise ValueError(f"Movie entry is missing a title: {dict(payload)!r}")
        return cls(
            title=title,
            release_year=_normalize_year(payload.get("release_year")),
            payload=dict(payload),
        )

    @classmethod
    def untitled(cls, payload: Mapping[str, Any]) -> RawMovie:
        """A source object without a usable title; it is kept as-is and never looked up."""
        return cls(title="", payload=dict(payload))

    @property
    def has_title(self) -> bool:
        return bool(self.title.strip())

    def to_payload(self) -> dict[str, Any]:
        if self.payload is not None:
            return dict(self.payload)
        out: dict[str, Any] = {"title": self.title}
        if self.release_year is not None:
            out["release_year"] = self.release_year
        return out


@dataclass(frozen=True)
class ResolvedIdentity:
    id: int
    release_year: str | None
    adult: bool | None


def build_enriched_movie(raw: RawMovie, identity: ResolvedIdentity) -> dict[str, Any]:
    """
    Merge the source record with the resolved TMDb identity.

    `release_year` is overwritten by the resolved value; when neither the match
    nor the source had a year the key is left out rather than written as null.
    `adult` is copied from the match as-is and likewise left out when TMDb omits it.
    """

    record = raw.to_payload()
    record["id"] = identity.id
    if identity.release_year is not None:
        record["release_year"] = identity.release_year
    else:
        record.pop("release_year", None)
    if identity.adult is not None:
        record["adult"] = identity.adult
    else:
        record.pop("adult", None)
    record["clean_title"] = clean_title(raw.title)
    return record


class MovieDecision(str, enum.Enum):
    NOT_FOUND = "not_found"
    INCLUDED = "included"
    EXCLUDED = "excluded"


@dataclass(frozen=True)
class MovieOutcome:
    index: int
    raw: RawMovie
    decision: MovieDecision
    record: dict[str, Any] | None = None
    identity: ResolvedIdentity | None = None
    available: frozenset[str] = frozenset()


@dataclass(frozen=True)
class FilterSummary:
    attempted: int
    included: int
    passthrough: int
    excluded: int
    outcomes: list[MovieOutcome] = field(default_factory=list)

    @property
    def movies(self) -> list[dict[str, Any]]:
        return [o.record for o in self.outcomes if o.record is not None]
