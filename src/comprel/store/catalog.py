"""Read-only component catalog over the metadata store.

Implements the ComponentSource lookups used by the resolver. Every call
opens its own short-lived session, so one catalog can serve independent
analyses concurrently.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from sqlalchemy import func
from sqlmodel import col, select

from comprel.relations.models import (
    AccessibilityItem,
    ComponentInfo,
    ComponentRef,
    GuidanceKind,
    GuidanceNote,
    MarkupSample,
)
from comprel.store.models import (
    AccessibilityRequirement,
    CodeExample,
    ComponentMetadata,
    ComponentTag,
    Page,
    UsageGuidance,
)

if TYPE_CHECKING:
    from comprel.store.db import Database

log = structlog.get_logger(__name__)


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class ComponentCatalog:
    """ComponentSource backed by the SQLite store."""

    def __init__(self, db: Database) -> None:
        self._db = db

    def find_component(self, name: str) -> ComponentInfo | None:
        """Exact, case-insensitive lookup by component name."""
        name = name.strip()
        if not name:
            return None
        stmt = (
            select(Page, ComponentMetadata)
            .join(ComponentMetadata, col(ComponentMetadata.page_id) == col(Page.id), isouter=True)
            .where(func.lower(col(Page.component_name)) == name.lower())
            .order_by(col(Page.id))
            .limit(1)
        )
        with self._db.session() as session:
            row = session.exec(stmt).first()
        if row is None:
            return None

        page, meta = row
        if page.id is None:
            return None
        return ComponentInfo(
            id=page.id,
            name=page.component_name,
            title=page.title,
            complexity=meta.complexity if meta else None,
            requires_scripting=bool(meta.requires_js) if meta else False,
            framework_specific=bool(meta.framework_specific) if meta else False,
        )

    def find_component_like(self, phrase: str) -> ComponentRef | None:
        """First component (lowest id) whose name contains the phrase."""
        phrase = phrase.strip().lower()
        if not phrase:
            return None
        stmt = (
            select(Page)
            .where(func.lower(col(Page.component_name)).like(f"%{_escape_like(phrase)}%", escape="\\"))
            .order_by(col(Page.id))
            .limit(1)
        )
        with self._db.session() as session:
            page = session.exec(stmt).first()
        if page is None or page.id is None:
            return None
        return ComponentRef(id=page.id, name=page.component_name)

    def get_guidance_notes(self, component_id: int) -> list[GuidanceNote]:
        stmt = (
            select(UsageGuidance)
            .where(UsageGuidance.page_id == component_id)
            .order_by(col(UsageGuidance.priority).desc(), col(UsageGuidance.id))
        )
        with self._db.session() as session:
            rows = session.exec(stmt).all()
        return [
            GuidanceNote(
                text=row.content,
                kind=GuidanceKind.parse(row.guidance_type),
                priority=row.priority or 0,
            )
            for row in rows
        ]

    def get_markup_samples(self, component_id: int) -> list[MarkupSample]:
        stmt = select(CodeExample).where(CodeExample.page_id == component_id).order_by(col(CodeExample.id))
        with self._db.session() as session:
            rows = session.exec(stmt).all()
        return [MarkupSample(language=row.language or "", code=row.code) for row in rows]

    def get_accessibility_requirements(self, component_id: int) -> list[AccessibilityItem]:
        stmt = (
            select(AccessibilityRequirement)
            .where(AccessibilityRequirement.page_id == component_id)
            .order_by(col(AccessibilityRequirement.id))
        )
        with self._db.session() as session:
            rows = session.exec(stmt).all()
        return [
            AccessibilityItem(
                requirement=row.requirement_type,
                wcag_criterion=row.wcag_criterion,
                description=row.description,
            )
            for row in rows
        ]

    def get_feature_tags(self, component_id: int) -> list[str]:
        """Tags of type 'feature', in insertion order."""
        stmt = (
            select(ComponentTag.tag)
            .where(ComponentTag.page_id == component_id, ComponentTag.tag_type == "feature")
            .order_by(col(ComponentTag.id))
        )
        with self._db.session() as session:
            return list(session.exec(stmt).all())
