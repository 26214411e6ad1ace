"""Value types for relationship resolution.

Everything here is derived, read-only and recomputed on each analysis.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol


class GuidanceKind(str, Enum):
    """Classification tag of a usage guidance note."""

    WHEN_TO_USE = "when-to-use"
    BEST_PRACTICE = "best-practice"
    CAVEAT = "caveat"
    LIMITATION = "limitation"
    NOTE = "note"

    @classmethod
    def parse(cls, value: str | None) -> GuidanceKind:
        """Map a stored guidance_type to a kind; unknown tags become NOTE."""
        if not value:
            return cls.NOTE
        normalized = value.strip().lower().replace("_", "-").replace(" ", "-")
        try:
            return cls(normalized)
        except ValueError:
            return cls.NOTE


class RelationKind(str, Enum):
    """Kind of a relation mention extracted from guidance text."""

    REQUIRED = "required"
    SUGGESTED = "suggested"
    ENHANCEMENT = "enhancement"
    CONFLICT = "conflict"
    WARNING = "warning"


# =============================================================================
# Store-facing types
# =============================================================================


@dataclass(frozen=True)
class ComponentRef:
    """Lightweight component identity returned by fuzzy lookups."""

    id: int
    name: str


@dataclass(frozen=True)
class ComponentInfo:
    """Component metadata joined from the page and its classification row."""

    id: int
    name: str
    title: str | None = None
    complexity: str | None = None
    requires_scripting: bool = False
    framework_specific: bool = False

    @property
    def ref(self) -> ComponentRef:
        return ComponentRef(id=self.id, name=self.name)


@dataclass(frozen=True)
class GuidanceNote:
    """Usage advice with its classification tag."""

    text: str
    kind: GuidanceKind = GuidanceKind.NOTE
    priority: int = 0


@dataclass(frozen=True)
class MarkupSample:
    """Code sample; only its language and literal text matter here."""

    language: str
    code: str


@dataclass(frozen=True)
class AccessibilityItem:
    """WCAG requirement listed alongside a dependency analysis."""

    requirement: str
    wcag_criterion: str | None = None
    description: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "requirement": self.requirement,
            "wcag_criterion": self.wcag_criterion,
            "description": self.description,
        }


class ComponentSource(Protocol):
    """Read-only lookups the resolver needs from the metadata store."""

    def find_component(self, name: str) -> ComponentInfo | None: ...

    def find_component_like(self, phrase: str) -> ComponentRef | None: ...

    def get_guidance_notes(self, component_id: int) -> list[GuidanceNote]: ...

    def get_markup_samples(self, component_id: int) -> list[MarkupSample]: ...

    def get_accessibility_requirements(self, component_id: int) -> list[AccessibilityItem]: ...

    def get_feature_tags(self, component_id: int) -> list[str]: ...


# =============================================================================
# Extraction results
# =============================================================================


@dataclass(frozen=True)
class RelationMention:
    """Typed edge from one note to an unresolved target phrase.

    For WARNING mentions the target is the (truncated) note text itself.
    """

    kind: RelationKind
    target_phrase: str


@dataclass
class ExtractedRelations:
    """Relation mentions of one component, grouped by kind."""

    required: list[str] = field(default_factory=list)
    suggested: list[str] = field(default_factory=list)
    enhancements: list[str] = field(default_factory=list)
    conflicts: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


@dataclass
class ExternalReferences:
    """Stylesheet and script URLs found in markup samples."""

    stylesheets: list[str] = field(default_factory=list)
    scripts: list[str] = field(default_factory=list)


# =============================================================================
# Dependency record
# =============================================================================


@dataclass
class RequiredDependencies:
    stylesheets: list[str] = field(default_factory=list)
    scripts: list[str] = field(default_factory=list)
    components: list[str] = field(default_factory=list)
    needs_scripting: bool = False


@dataclass
class SuggestedDependencies:
    components: list[str] = field(default_factory=list)
    enhancements: list[str] = field(default_factory=list)


@dataclass
class ConflictDependencies:
    components: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


@dataclass
class DependencyRecord:
    """Aggregated required/suggested/conflict structure for one component."""

    required: RequiredDependencies = field(default_factory=RequiredDependencies)
    suggested: SuggestedDependencies = field(default_factory=SuggestedDependencies)
    conflicts: ConflictDependencies = field(default_factory=ConflictDependencies)

    def total(self, *, include_suggestions: bool = True) -> int:
        """Count of concrete dependencies (conflicts are not dependencies)."""
        count = (
            len(self.required.stylesheets)
            + len(self.required.scripts)
            + len(self.required.components)
        )
        if include_suggestions:
            count += len(self.suggested.components) + len(self.suggested.enhancements)
        return count


@dataclass(frozen=True)
class ChainEntry:
    """One expanded component in a dependency chain."""

    component: str
    requires: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"component": self.component, "requires": list(self.requires)}


@dataclass
class ComponentAnalysis:
    """Record plus the component it was computed for."""

    component: ComponentInfo
    record: DependencyRecord
    accessibility: list[AccessibilityItem] = field(default_factory=list)
    chain: list[ChainEntry] | None = None


# =============================================================================
# Conflict analysis
# =============================================================================


@dataclass(frozen=True)
class ConflictFinding:
    """A conflict or warning; pair findings name two components, system ones list several."""

    severity: str
    issue: str
    details: str
    recommendation: str
    component1: str | None = None
    component2: str | None = None
    components: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"severity": self.severity}
        if self.component1 is not None:
            data["component1"] = self.component1
            data["component2"] = self.component2
        data["issue"] = self.issue
        data["details"] = self.details
        if self.components:
            data["components"] = list(self.components)
        data["recommendation"] = self.recommendation
        return data


@dataclass(frozen=True)
class Recommendation:
    """Alternative or compatibility hint attached to a conflict analysis."""

    type: str
    suggestion: str
    reason: str
    component: str | None = None
    alternatives: tuple[str, ...] = ()
    shared_features: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.type}
        if self.component is not None:
            data["component"] = self.component
        data["suggestion"] = self.suggestion
        if self.alternatives:
            data["alternatives"] = list(self.alternatives)
        if self.shared_features:
            data["shared_features"] = list(self.shared_features)
        data["reason"] = self.reason
        return data


@dataclass
class ConflictReport:
    """Findings for a set of components, before formatting."""

    components: list[ComponentInfo]
    conflicts: list[ConflictFinding] = field(default_factory=list)
    warnings: list[ConflictFinding] = field(default_factory=list)
    recommendations: list[Recommendation] = field(default_factory=list)

    @property
    def risk_score(self) -> int:
        return min(len(self.conflicts) * 30 + len(self.warnings) * 10, 100)

    @property
    def risk_level(self) -> str:
        score = self.risk_score
        if score == 0:
            return "none"
        if score < 20:
            return "low"
        if score < 50:
            return "moderate"
        if score < 80:
            return "high"
        return "critical"
