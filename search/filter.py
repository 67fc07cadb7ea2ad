"""
Use-case filter: case-insensitive substring match over a fixed record list.

Each record is flattened into a single lower-cased haystack:
    title + subtitle + tags + points   (space-separated, in that order)

A record matches when the normalised query (stripped, lower-cased) is a
substring of its haystack. An empty normalised query matches everything.
Results keep the original record order; no match is an empty tuple, not an
error.

Public API:
    normalize_query(query)           → str
    build_haystack(use_case)         → str
    filter_use_cases(query, records) → tuple[UseCase, ...]
    UseCaseFilter(records).query(text) → tuple[UseCase, ...]
"""

from collections.abc import Sequence

from content.models import UseCase


def normalize_query(query: str) -> str:
    return query.strip().lower()


def build_haystack(use_case: UseCase) -> str:
    parts = [use_case.title, use_case.subtitle, *use_case.tags, *use_case.points]
    return " ".join(parts).lower()


def filter_use_cases(query: str, records: Sequence[UseCase]) -> tuple[UseCase, ...]:
    """Return the records whose haystack contains the query, in input order."""
    q = normalize_query(query)
    if not q:
        return tuple(records)
    return tuple(r for r in records if q in build_haystack(r))


class UseCaseFilter:
    """Same semantics as filter_use_cases, with haystacks built once up front."""

    def __init__(self, records: Sequence[UseCase]):
        self.records    = tuple(records)
        self._haystacks = [build_haystack(r) for r in self.records]

    def __len__(self) -> int:
        return len(self.records)

    def query(self, text: str) -> tuple[UseCase, ...]:
        q = normalize_query(text)
        if not q:
            return self.records
        return tuple(
            record
            for record, hay in zip(self.records, self._haystacks)
            if q in hay
        )
