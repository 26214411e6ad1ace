"""Relation operations - dependency and conflict analysis entry points.

Every call returns a result dict; failures are reported as
``{"success": False, "error": ...}`` and never raised to the caller.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any

import structlog
from sqlalchemy.exc import SQLAlchemyError

from comprel.config.constants import (
    DEFAULT_COMPLEXITY,
    FRAMEWORK_AGNOSTIC_LABEL,
    FRAMEWORK_SPECIFIC_LABEL,
)
from comprel.core.errors import (
    ComponentNotFoundError,
    ComprelError,
    ConflictInputError,
    StoreError,
)
from comprel.core.logging import analysis_context
from comprel.relations.conflicts import ConflictAnalyzer
from comprel.relations.extractor import RelationExtractor
from comprel.relations.matching import get_match_strategy
from comprel.relations.notes import synthesize
from comprel.relations.resolver import DependencyResolver

if TYPE_CHECKING:
    from comprel.config.models import ResolverConfig
    from comprel.relations.models import ComponentAnalysis, ComponentSource

log = structlog.get_logger(__name__)


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


def _failure(error: ComprelError, start: float) -> dict[str, Any]:
    return {
        "success": False,
        "error": error.message,
        "error_code": error.error_name,
        "metadata": {"execution_time_ms": _elapsed_ms(start)},
    }


class RelationOps:
    """Dependency and conflict analysis over a read-only component source."""

    def __init__(self, source: ComponentSource, config: ResolverConfig | None = None) -> None:
        from comprel.config.models import ResolverConfig

        config = config or ResolverConfig()
        self._resolver = DependencyResolver(
            source,
            extractor=RelationExtractor(
                warning_limit=config.warning_limit,
                warning_max_chars=config.warning_max_chars,
            ),
            match_strategy=get_match_strategy(config.match_strategy),
        )
        self._conflicts = ConflictAnalyzer(source)

    @property
    def resolver(self) -> DependencyResolver:
        return self._resolver

    def analyze_dependencies(
        self,
        component_name: str,
        *,
        include_suggestions: bool = True,
        include_conflicts: bool = True,
        recursive: bool = False,
    ) -> dict[str, Any]:
        """Analyze what a component requires, pairs with, and conflicts with.

        Args:
            component_name: Component to analyze (case-insensitive)
            include_suggestions: Include suggested components and enhancements
            include_conflicts: Include conflicting components and warnings
            recursive: Follow required components into a dependency chain

        Returns:
            Result dict with ``success`` plus either the analysis or ``error``.
        """
        start = time.perf_counter()
        with analysis_context(component=component_name):
            try:
                analysis = self._resolver.analyze(component_name, recursive=recursive)
            except ComponentNotFoundError as e:
                log.info("component_not_found")
                return _failure(e, start)
            except SQLAlchemyError as e:
                log.error("dependency_analysis_failed", error=str(e))
                log.debug("dependency_analysis_failed_traceback", exc_info=True)
                return _failure(StoreError.query_failed("Dependency analysis", str(e)), start)

        result = self._format(
            analysis,
            include_suggestions=include_suggestions,
            include_conflicts=include_conflicts,
        )
        result["metadata"] = {
            "execution_time_ms": _elapsed_ms(start),
            "total_dependencies": analysis.record.total(include_suggestions=include_suggestions),
        }
        log.info(
            "dependency_analysis_complete",
            component=analysis.component.name,
            recursive=recursive,
            total_dependencies=result["metadata"]["total_dependencies"],
            chain_length=len(analysis.chain) if analysis.chain is not None else None,
        )
        return result

    def analyze_conflicts(
        self,
        component_names: list[str],
        *,
        include_warnings: bool = True,
        include_recommendations: bool = True,
    ) -> dict[str, Any]:
        """Check whether a set of components can be used together.

        Args:
            component_names: Two or more components (case-insensitive)
            include_warnings: Include pair warnings and the warnings list
            include_recommendations: Include alternatives and shared features

        Returns:
            Result dict with ``success`` plus either the analysis or ``error``.
        """
        start = time.perf_counter()
        with analysis_context(components=list(component_names)):
            try:
                report = self._conflicts.analyze(
                    component_names,
                    include_warnings=include_warnings,
                    include_recommendations=include_recommendations,
                )
            except (ConflictInputError, ComponentNotFoundError) as e:
                log.info("conflict_analysis_rejected", error_code=e.error_name)
                return _failure(e, start)
            except SQLAlchemyError as e:
                log.error("conflict_analysis_failed", error=str(e))
                log.debug("conflict_analysis_failed_traceback", exc_info=True)
                return _failure(StoreError.query_failed("Conflict analysis", str(e)), start)

        analysis: dict[str, Any] = {"conflicts": [c.to_dict() for c in report.conflicts]}
        if include_warnings:
            analysis["warnings"] = [w.to_dict() for w in report.warnings]
        if include_recommendations:
            analysis["recommendations"] = [r.to_dict() for r in report.recommendations]
        analysis["risk_score"] = report.risk_score
        analysis["risk_level"] = report.risk_level

        result: dict[str, Any] = {
            "success": True,
            "components": [c.name for c in report.components],
            "analysis": analysis,
            "summary": {
                "total_conflicts": len(report.conflicts),
                "total_warnings": len(report.warnings),
                "components_analyzed": len(report.components),
                "safe_to_combine": not report.conflicts,
            },
            "metadata": {"execution_time_ms": _elapsed_ms(start)},
        }
        log.info(
            "conflict_analysis_complete",
            components=result["components"],
            conflicts=len(report.conflicts),
            risk_level=report.risk_level,
        )
        return result

    @staticmethod
    def _format(
        analysis: ComponentAnalysis,
        *,
        include_suggestions: bool,
        include_conflicts: bool,
    ) -> dict[str, Any]:
        info = analysis.component
        record = analysis.record

        dependencies: dict[str, Any] = {
            "required": {
                "stylesheets": list(record.required.stylesheets),
                "scripts": list(record.required.scripts),
                "components": list(record.required.components),
                "needs_scripting": record.required.needs_scripting,
                "framework": (
                    FRAMEWORK_SPECIFIC_LABEL if info.framework_specific else FRAMEWORK_AGNOSTIC_LABEL
                ),
            },
        }
        if include_suggestions:
            dependencies["suggested"] = {
                "components": list(record.suggested.components),
                "enhancements": list(record.suggested.enhancements),
            }
        if include_conflicts:
            dependencies["conflicts"] = {
                "components": list(record.conflicts.components),
                "warnings": list(record.conflicts.warnings),
            }

        result: dict[str, Any] = {
            "success": True,
            "component": {
                "name": info.name,
                "title": info.title,
                "complexity": info.complexity or DEFAULT_COMPLEXITY,
                "requires_javascript": record.required.needs_scripting,
                "framework_specific": info.framework_specific,
            },
            "dependencies": dependencies,
            "accessibility_requirements": [item.to_dict() for item in analysis.accessibility],
        }
        if analysis.chain is not None:
            result["dependency_chain"] = [entry.to_dict() for entry in analysis.chain]
        result["installation_notes"] = synthesize(
            record,
            info,
            include_suggestions=include_suggestions,
            include_conflicts=include_conflicts,
        )
        return result
