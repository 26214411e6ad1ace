"""Installation-note synthesis from a dependency record."""

from __future__ import annotations

from comprel.config.constants import (
    BASE_INSTALL_NOTES,
    BASE_SCRIPT_INIT_HINT,
    BASE_SCRIPT_NOTE,
    SCANNED_SCRIPT_INIT_HINT,
)
from comprel.relations.models import ComponentInfo, DependencyRecord


def synthesize(
    record: DependencyRecord,
    component: ComponentInfo,
    *,
    include_suggestions: bool = True,
    include_conflicts: bool = True,
) -> list[str]:
    """Ordered setup instructions for a component.

    Order is fixed: base install, stylesheets, scripts, required components,
    suggested components, conflict warning. Empty categories are omitted.
    """
    notes = list(BASE_INSTALL_NOTES)
    required = record.required

    if required.stylesheets:
        notes.append(f"Additional stylesheets: {', '.join(required.stylesheets)}")

    if required.scripts:
        notes.append(f"Include ECL scripts: {', '.join(required.scripts)}")
        notes.append(SCANNED_SCRIPT_INIT_HINT)
    elif required.needs_scripting or component.requires_scripting:
        notes.append(BASE_SCRIPT_NOTE)
        notes.append(BASE_SCRIPT_INIT_HINT)

    if required.components:
        notes.append(f"Required components: {', '.join(required.components)}")

    if include_suggestions and record.suggested.components:
        notes.append(f"Commonly paired with: {', '.join(record.suggested.components)}")

    if include_conflicts and record.conflicts.components:
        notes.append(f"⚠️  Avoid using with: {', '.join(record.conflicts.components)}")

    return notes
