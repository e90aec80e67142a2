"""Pydantic models for the OMDb search payload and the search screen state."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

NO_POSTER = "N/A"


class MovieSummary(BaseModel):
    """One row of an OMDb ``Search`` array."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    title: str = Field(alias="Title")
    # Not always numeric, series come back as "2001–2003" or "2019–".
    year: str = Field(alias="Year")
    external_id: str = Field(alias="imdbID")
    poster_url: str = Field(alias="Poster")
    kind: str | None = Field(default=None, alias="Type")

    @property
    def has_poster(self) -> bool:
        poster = self.poster_url.strip()
        return bool(poster) and poster != NO_POSTER


class SearchResult(BaseModel):
    """Outcome of a single search request.

    OMDb reports success through the string flag ``Response`` ("True" or
    "False"). Anything other than "True", including a missing flag, is
    treated as a failed search.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    items: list[MovieSummary] | None = Field(default=None, alias="Search")
    total_count: str | None = Field(default=None, alias="totalResults")
    succeeded: bool = Field(default=False, alias="Response")
    error: str | None = Field(default=None, alias="Error")

    @field_validator("succeeded", mode="before")
    @classmethod
    def _parse_response_flag(cls, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.strip() == "True"
        return False

    @property
    def total_results(self) -> int | None:
        if self.total_count is None:
            return None
        try:
            return int(self.total_count)
        except ValueError:
            return None

    @classmethod
    def failure(cls, message: str) -> "SearchResult":
        return cls(items=[], total_count=None, succeeded=False, error=message)


@dataclass(frozen=True, slots=True)
class SearchState:
    query: str = ""
    results: tuple[MovieSummary, ...] = ()
    is_loading: bool = False
    error_message: str | None = None


__all__ = [
    "MovieSummary",
    "NO_POSTER",
    "SearchResult",
    "SearchState",
]
