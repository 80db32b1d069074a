"""Data models for command-bar address classification."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import ClassVar, Dict, Iterable, Optional


@dataclass(frozen=True)
class AddressQuery:
    original: str

    @classmethod
    def from_words(cls, words: Iterable[str]) -> "AddressQuery":
        return cls(" ".join(words))

    @property
    def first_word(self) -> str:
        return self.original.split(" ", 1)[0]

    @property
    def remainder(self) -> str:
        # Drops exactly one separating space; "a  b" keeps " b".
        return self.original[len(self.first_word) + 1 :]


@dataclass(frozen=True)
class SearchEngine:
    alias: Optional[str]
    name: str


def find_engine(engines: Iterable[SearchEngine], alias: str) -> Optional[SearchEngine]:
    """First engine registered under ``alias``; browsers allow duplicates."""
    for engine in engines:
        if engine.alias == alias:
            return engine
    return None


class ClassifiedAddress:
    kind: ClassVar[str] = ""

    def as_dict(self) -> Dict:
        payload = {"kind": self.kind}
        payload.update(asdict(self))
        return payload


@dataclass(frozen=True)
class Empty(ClassifiedAddress):
    kind: ClassVar[str] = "empty"


@dataclass(frozen=True)
class DirectURL(ClassifiedAddress):
    kind: ClassVar[str] = "url"

    href: str


@dataclass(frozen=True)
class ConfiguredSearchURL(ClassifiedAddress):
    kind: ClassVar[str] = "searchurl"

    alias: str
    href: str


@dataclass(frozen=True)
class NamedEngineSearch(ClassifiedAddress):
    kind: ClassVar[str] = "engine"

    alias: str
    engine: str
    query: str


@dataclass(frozen=True)
class DefaultEngineSearch(ClassifiedAddress):
    kind: ClassVar[str] = "default_search"

    query: str
