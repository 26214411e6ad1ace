"""Phrase-to-component match strategies for chain expansion.

Phrases come from free text, so matching is lossy. Strategies are
injectable; the resolver only asks for ``match(phrase, source)``.
"""

from __future__ import annotations

from typing import Protocol

from comprel.config.models import MatchStrategyName
from comprel.relations.models import ComponentRef, ComponentSource


class MatchStrategy(Protocol):
    """Resolves a free-text phrase to a component, or None."""

    def match(self, phrase: str, source: ComponentSource) -> ComponentRef | None: ...


class ExactMatch:
    """Case-insensitive name equality only."""

    def match(self, phrase: str, source: ComponentSource) -> ComponentRef | None:
        info = source.find_component(phrase)
        return info.ref if info is not None else None


class ExactThenSubstringMatch:
    """Exact name first, then the first component whose name contains the phrase."""

    def match(self, phrase: str, source: ComponentSource) -> ComponentRef | None:
        info = source.find_component(phrase)
        if info is not None:
            return info.ref
        return source.find_component_like(phrase)


_STRATEGIES: dict[str, type[ExactMatch] | type[ExactThenSubstringMatch]] = {
    "exact": ExactMatch,
    "exact_then_substring": ExactThenSubstringMatch,
}


def get_match_strategy(name: MatchStrategyName) -> MatchStrategy:
    """Build the strategy configured under resolver.match_strategy."""
    try:
        return _STRATEGIES[name]()
    except KeyError:
        raise ValueError(f"Unknown match strategy: {name}") from None
