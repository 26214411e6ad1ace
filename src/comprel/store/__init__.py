"""Component metadata store - SQLModel schema and read-only catalog.

Public API:
- Database: engine/session manager for the SQLite file
- ComponentCatalog: ComponentSource lookups used by the resolver
"""

from comprel.store.catalog import ComponentCatalog
from comprel.store.db import Database
from comprel.store.models import (
    AccessibilityRequirement,
    CodeExample,
    ComponentMetadata,
    ComponentTag,
    Page,
    UsageGuidance,
)

__all__ = [
    "AccessibilityRequirement",
    "CodeExample",
    "ComponentCatalog",
    "ComponentMetadata",
    "ComponentTag",
    "Database",
    "Page",
    "UsageGuidance",
]
