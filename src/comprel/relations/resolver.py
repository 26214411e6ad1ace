"""Dependency graph resolution across components.

Edges are derived from guidance text, so the graph may contain cycles,
diamonds and dangling phrases. The chain walk is a pre-order depth-first
traversal over an explicit stack, guarded by a visited set of case-folded
component names.
"""

from __future__ import annotations

import structlog

from comprel.core.errors import ComponentNotFoundError
from comprel.relations.extractor import RelationExtractor
from comprel.relations.matching import ExactThenSubstringMatch, MatchStrategy
from comprel.relations.models import (
    ChainEntry,
    ComponentAnalysis,
    ComponentInfo,
    ComponentSource,
    ConflictDependencies,
    DependencyRecord,
    RequiredDependencies,
    SuggestedDependencies,
)
from comprel.relations.scanner import is_script, scan

log = structlog.get_logger(__name__)


class DependencyResolver:
    """Builds dependency records and chains from a ComponentSource.

    Holds no per-analysis state; the visited set lives inside resolve_chain.
    """

    def __init__(
        self,
        source: ComponentSource,
        *,
        extractor: RelationExtractor | None = None,
        match_strategy: MatchStrategy | None = None,
    ) -> None:
        self._source = source
        self._extractor = extractor or RelationExtractor()
        self._match = match_strategy or ExactThenSubstringMatch()

    def analyze(self, component_name: str, *, recursive: bool = False) -> ComponentAnalysis:
        """Resolve one component's record, and its chain when recursive.

        Raises:
            ComponentNotFoundError: If no component has this name.
        """
        info = self._source.find_component(component_name)
        if info is None:
            raise ComponentNotFoundError.for_name(component_name)

        record = self.build_record(info)
        analysis = ComponentAnalysis(
            component=info,
            record=record,
            accessibility=self._source.get_accessibility_requirements(info.id),
        )
        if recursive:
            analysis.chain = self.resolve_chain(info, record.required.components)
        return analysis

    def build_record(self, info: ComponentInfo) -> DependencyRecord:
        """Merge extracted relations, scanned references and metadata flags."""
        notes = self._source.get_guidance_notes(info.id)
        samples = self._source.get_markup_samples(info.id)

        relations = self._extractor.extract(notes)
        refs = scan(samples)

        needs_scripting = (
            info.requires_scripting or bool(refs.scripts) or any(is_script(s) for s in samples)
        )

        return DependencyRecord(
            required=RequiredDependencies(
                stylesheets=refs.stylesheets,
                scripts=refs.scripts,
                components=relations.required,
                needs_scripting=needs_scripting,
            ),
            suggested=SuggestedDependencies(
                components=relations.suggested,
                enhancements=relations.enhancements,
            ),
            conflicts=ConflictDependencies(
                components=relations.conflicts,
                warnings=relations.warnings,
            ),
        )

    def resolve_chain(self, start: ComponentInfo, phrases: list[str]) -> list[ChainEntry]:
        """Expand required phrases into a deduplicated pre-order chain.

        The start component is never part of its own chain. Phrases that match
        no component are skipped; they stay in the flat record unresolved.
        """
        visited = {start.name.casefold()}
        chain: list[ChainEntry] = []
        stack = list(reversed(phrases))

        while stack:
            phrase = stack.pop()
            ref = self._match.match(phrase, self._source)
            if ref is None:
                log.debug("chain_phrase_unmatched", phrase=phrase, start=start.name)
                continue

            key = ref.name.casefold()
            if key in visited:
                continue
            visited.add(key)

            requires = self._extractor.extract(self._source.get_guidance_notes(ref.id)).required
            chain.append(ChainEntry(component=ref.name, requires=tuple(requires)))
            stack.extend(reversed(requires))

        log.debug("chain_resolved", start=start.name, length=len(chain))
        return chain
