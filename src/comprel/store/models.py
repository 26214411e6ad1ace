"""SQLModel definitions for the component metadata store.

The store is populated by the documentation crawler; comprel only reads it.
One page per documented component; every other table hangs off ``pages.id``.
"""

from sqlmodel import Field, SQLModel

from comprel.relations.models import GuidanceKind

# ============================================================================
# TABLES
# ============================================================================


class Page(SQLModel, table=True):
    """Documentation page of a single component."""

    __tablename__ = "pages"

    id: int | None = Field(default=None, primary_key=True)
    component_name: str = Field(index=True)
    title: str | None = None
    url: str | None = None


class ComponentMetadata(SQLModel, table=True):
    """Classification flags of a component page."""

    __tablename__ = "component_metadata"

    id: int | None = Field(default=None, primary_key=True)
    page_id: int = Field(foreign_key="pages.id", index=True)
    component_type: str | None = None
    complexity: str | None = None
    status: str | None = None
    requires_js: bool = Field(default=False)
    framework_specific: bool = Field(default=False)


class UsageGuidance(SQLModel, table=True):
    """Free-text usage advice attached to a component page."""

    __tablename__ = "usage_guidance"

    id: int | None = Field(default=None, primary_key=True)
    page_id: int = Field(foreign_key="pages.id", index=True)
    guidance_type: str = Field(default=GuidanceKind.NOTE.value)
    content: str
    priority: int = Field(default=0)


class CodeExample(SQLModel, table=True):
    """Markup or script sample shown on a component page."""

    __tablename__ = "code_examples"

    id: int | None = Field(default=None, primary_key=True)
    page_id: int = Field(foreign_key="pages.id", index=True)
    language: str = Field(default="html")
    code: str
    example_type: str | None = None
    description: str | None = None


class AccessibilityRequirement(SQLModel, table=True):
    """WCAG requirement documented for a component page."""

    __tablename__ = "accessibility_requirements"

    id: int | None = Field(default=None, primary_key=True)
    page_id: int = Field(foreign_key="pages.id", index=True)
    requirement_type: str
    wcag_criterion: str | None = None
    description: str | None = None


class ComponentTag(SQLModel, table=True):
    """Classification tag of a component page (``tag_type`` 'feature', 'category', ...)."""

    __tablename__ = "component_tags"

    id: int | None = Field(default=None, primary_key=True)
    page_id: int = Field(foreign_key="pages.id", index=True)
    tag: str
    tag_type: str | None = None
