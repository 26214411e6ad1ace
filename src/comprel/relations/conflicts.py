"""Conflict analysis across a set of components.

Pairs are checked in both directions: a note of one component that names the
other and carries a conflict cue marks the pair incompatible. Cautionary notes
that name the other component become pair warnings. Combination-level warnings
(too many complex or scripted components) and recommendations (alternatives
named in guidance, shared feature tags) complete the report.
"""

from __future__ import annotations

import re
from collections import Counter
from collections.abc import Sequence

import structlog

from comprel.config.constants import (
    COMPLEX_COMPONENT_THRESHOLD,
    SCRIPTED_COMPONENT_THRESHOLD,
)
from comprel.core.errors import ComponentNotFoundError, ConflictInputError
from comprel.relations.extractor import CUE_TABLE, normalize_text
from comprel.relations.models import (
    ComponentInfo,
    ComponentSource,
    ConflictFinding,
    ConflictReport,
    Recommendation,
    RelationKind,
)

log = structlog.get_logger(__name__)

_CONFLICT_CUES: tuple[str, ...] = tuple(
    cue for family in CUE_TABLE if family.kind is RelationKind.CONFLICT for cue in family.cues
)
# Only checked on the naming component's own notes
_FORWARD_CONFLICT_CUES = (*_CONFLICT_CUES, "avoid using with")
_WARNING_CUES: tuple[str, ...] = (
    *(cue for family in CUE_TABLE if family.kind is RelationKind.WARNING for cue in family.cues),
    "careful",
)

_ALTERNATIVE_PATTERNS = (
    re.compile(r"use\s+(?:the\s+)?([a-z-]+)\s+instead"),
    re.compile(r"([a-z-]+)\s+is\s+an\s+alternative"),
    re.compile(r"alternative\s+is\s+(?:the\s+)?([a-z-]+)"),
    re.compile(r"consider\s+using\s+(?:the\s+)?([a-z-]+)"),
)

_SENTENCE_SPLIT = re.compile(r"[.!?]+")


def relevant_sentences(text: str, keyword: str) -> str:
    """Sentences of ``text`` that contain ``keyword``, rejoined; empty if none."""
    keyword = keyword.casefold()
    picked = [s.strip() for s in _SENTENCE_SPLIT.split(text) if keyword in s.casefold()]
    picked = [s for s in picked if s]
    return ". ".join(picked) + "." if picked else ""


def find_alternatives(text: str) -> list[str]:
    """Component names offered as replacements ("use X instead", "consider using X")."""
    found: list[str] = []
    for pattern in _ALTERNATIVE_PATTERNS:
        for match in pattern.finditer(text):
            name = match.group(1).strip()
            if name and name not in found:
                found.append(name)
    return found


def _names(text: str, name: str) -> bool:
    return re.search(rf"(?<![a-z0-9]){re.escape(name)}(?![a-z0-9])", text) is not None


def _has_any(text: str, cues: Sequence[str]) -> bool:
    return any(cue in text for cue in cues)


class ConflictAnalyzer:
    """Builds a ConflictReport for two or more components of one source."""

    def __init__(self, source: ComponentSource) -> None:
        self._source = source

    def _resolve(self, names: Sequence[str]) -> list[ComponentInfo]:
        distinct: list[str] = []
        for name in names:
            key = name.strip().casefold()
            if key and key not in distinct:
                distinct.append(key)
        if len(distinct) < 2:
            raise ConflictInputError.too_few(len(distinct))

        found: list[ComponentInfo] = []
        missing: list[str] = []
        for key in distinct:
            info = self._source.find_component(key)
            if info is None:
                missing.append(key)
            elif all(existing.id != info.id for existing in found):
                found.append(info)
        if missing:
            raise ComponentNotFoundError.for_names(missing)
        return found

    def analyze(
        self,
        names: Sequence[str],
        *,
        include_warnings: bool = True,
        include_recommendations: bool = True,
    ) -> ConflictReport:
        """Analyze the named components as one combination.

        Raises:
            ConflictInputError: Fewer than two distinct names
            ComponentNotFoundError: Some names are not in the store
        """
        components = self._resolve(names)
        notes = {
            info.id: [normalize_text(note.text) for note in self._source.get_guidance_notes(info.id)]
            for info in components
        }
        report = ConflictReport(components=components)

        for i, first in enumerate(components):
            for second in components[i + 1 :]:
                self._check_pair(report, first, second, notes, include_warnings=include_warnings)

        self._check_combination(report)
        if include_recommendations:
            self._recommend(report, notes)

        log.debug(
            "conflicts_analyzed",
            conflicts=len(report.conflicts),
            warnings=len(report.warnings),
            recommendations=len(report.recommendations),
        )
        return report

    @staticmethod
    def _check_pair(
        report: ConflictReport,
        first: ComponentInfo,
        second: ComponentInfo,
        notes: dict[int, list[str]],
        *,
        include_warnings: bool,
    ) -> None:
        other = second.name.casefold()
        conflict: ConflictFinding | None = None
        warning: ConflictFinding | None = None

        for text in notes[first.id]:
            if not _names(text, other):
                continue
            if conflict is None and _has_any(text, _FORWARD_CONFLICT_CUES):
                conflict = ConflictFinding(
                    severity="error",
                    component1=first.name,
                    component2=second.name,
                    issue=f"{first.name} is incompatible with {second.name}",
                    details=relevant_sentences(text, other),
                    recommendation="Remove one of these components or use an alternative",
                )
            elif (
                include_warnings
                and warning is None
                and not _has_any(text, _FORWARD_CONFLICT_CUES)
                and _has_any(text, _WARNING_CUES)
            ):
                warning = ConflictFinding(
                    severity="warning",
                    component1=first.name,
                    component2=second.name,
                    issue="Potential issue when combining these components",
                    details=relevant_sentences(text, other),
                    recommendation="Review guidance before using together",
                )

        if conflict is None:
            this = first.name.casefold()
            for text in notes[second.id]:
                if _names(text, this) and _has_any(text, _CONFLICT_CUES):
                    conflict = ConflictFinding(
                        severity="error",
                        component1=second.name,
                        component2=first.name,
                        issue=f"{second.name} is incompatible with {first.name}",
                        details=relevant_sentences(text, this),
                        recommendation="Remove one of these components or use an alternative",
                    )
                    break

        if conflict is not None:
            report.conflicts.append(conflict)
        if warning is not None:
            report.warnings.append(warning)

    @staticmethod
    def _check_combination(report: ConflictReport) -> None:
        complex_names = tuple(c.name for c in report.components if c.complexity == "complex")
        if len(complex_names) > COMPLEX_COMPONENT_THRESHOLD:
            report.warnings.append(
                ConflictFinding(
                    severity="warning",
                    issue="High complexity combination",
                    details=f"Using {len(complex_names)} complex components together may impact performance",
                    components=complex_names,
                    recommendation="Consider simplifying the design or lazy-loading some components",
                )
            )

        scripted = tuple(c.name for c in report.components if c.requires_scripting)
        if len(scripted) > SCRIPTED_COMPONENT_THRESHOLD:
            report.warnings.append(
                ConflictFinding(
                    severity="warning",
                    issue="Multiple JavaScript dependencies",
                    details=f"{len(scripted)} components require JavaScript initialization",
                    components=scripted,
                    recommendation=(
                        "Ensure proper initialization order with ECL.autoInit() or initialize individually"
                    ),
                )
            )

    def _recommend(self, report: ConflictReport, notes: dict[int, list[str]]) -> None:
        for info in report.components:
            for text in notes[info.id]:
                if "instead" not in text and "alternative" not in text:
                    continue
                alternatives = find_alternatives(text)
                if alternatives:
                    report.recommendations.append(
                        Recommendation(
                            type="alternative",
                            component=info.name,
                            suggestion=f"Consider alternatives to {info.name}",
                            alternatives=tuple(alternatives),
                            reason=relevant_sentences(text, "alternative"),
                        )
                    )

        counts: Counter[str] = Counter()
        for info in report.components:
            counts.update(dict.fromkeys(self._source.get_feature_tags(info.id)))
        shared = tuple(tag for tag, count in counts.items() if count >= 2)
        if shared:
            report.recommendations.append(
                Recommendation(
                    type="compatibility",
                    suggestion="Components share common features",
                    shared_features=shared,
                    reason="These components are designed to work together",
                )
            )
