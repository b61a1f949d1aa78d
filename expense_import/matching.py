"""
Matching of free-text cell values against a canonical list.

Tiers are tried in order and the first hit wins:
alias table, exact (normalized) equality, then substring containment
in either direction. Inside a tier, list order breaks ties.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

from .text import normalize_text

logger = logging.getLogger(__name__)

# Below this length a value may only match exactly or through the alias table.
MIN_PARTIAL_LENGTH = 3


@dataclass(frozen=True)
class Accepted:
    value: str
    via_alias: bool = field(default=False, compare=False)


@dataclass(frozen=True)
class Rejected:
    value: str


MatchResult = Union[Accepted, Rejected]


class FieldMatcher:
    """Matches raw values for one field. Build once per import, reuse per row."""

    def __init__(self, canonical: Optional[Iterable[str]], aliases: Optional[Mapping[str, str]] = None):
        if canonical is None:
            raise ValueError("canonical list is required")

        self.canonical: Tuple[str, ...] = tuple(canonical)
        self._normalized: List[Tuple[str, str]] = [(normalize_text(c), c) for c in self.canonical]

        self._aliases: Dict[str, str] = {}
        for alias, target in (aliases or {}).items():
            self._aliases[normalize_text(alias)] = target

    def match(self, raw: object) -> Optional[MatchResult]:
        """
        Resolve `raw` to a canonical entry.

        Returns None when there is no value at all, Accepted with the
        canonical spelling on a hit, Rejected with the original value otherwise.
        """
        key = normalize_text(raw)
        if not key:
            return None

        if key in self._aliases:
            target = self._aliases[key]
            if target in self.canonical:
                return Accepted(target, via_alias=normalize_text(target) != key)
            logger.debug("alias %r points to %r, which is not a canonical value", key, target)
            return Rejected(str(raw))

        for norm, entry in self._normalized:
            if norm == key:
                return Accepted(entry)

        if len(key) >= MIN_PARTIAL_LENGTH:
            for norm, entry in self._normalized:
                if len(norm) >= MIN_PARTIAL_LENGTH and (key in norm or norm in key):
                    return Accepted(entry)

        return Rejected(str(raw))


def match(raw: object, canonical: Optional[Iterable[str]], aliases: Optional[Mapping[str, str]] = None) -> Optional[MatchResult]:
    return FieldMatcher(canonical, aliases).match(raw)
