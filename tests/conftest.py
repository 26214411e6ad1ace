"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages and
provides a seeded component store.
"""

import logging
import sys
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
import structlog

_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

for module_name in list(sys.modules.keys()):
    if module_name.startswith("comprel"):
        del sys.modules[module_name]

from comprel.store.db import Database  # noqa: E402
from comprel.store.models import (  # noqa: E402
    AccessibilityRequirement,
    CodeExample,
    ComponentMetadata,
    ComponentTag,
    Page,
    UsageGuidance,
)

SeedFn = Callable[..., int]


def seed_component(
    db: Database,
    name: str,
    *,
    title: str | None = None,
    guidance: list[str] | list[tuple[str, str]] | None = None,
    examples: list[tuple[str, str]] | None = None,
    accessibility: list[tuple[str, str | None, str | None]] | None = None,
    complexity: str | None = None,
    requires_js: bool = False,
    framework_specific: bool = False,
    with_metadata: bool = True,
    tags: list[tuple[str, str]] | None = None,
) -> int:
    """Insert one component page with its related rows; returns the page id."""
    with db.session() as session:
        page = Page(component_name=name, title=title or name.title())
        session.add(page)
        session.commit()
        session.refresh(page)
        assert page.id is not None
        page_id = page.id

        if with_metadata:
            session.add(
                ComponentMetadata(
                    page_id=page_id,
                    complexity=complexity,
                    requires_js=requires_js,
                    framework_specific=framework_specific,
                )
            )
        for item in guidance or []:
            kind, content = item if isinstance(item, tuple) else ("note", item)
            session.add(UsageGuidance(page_id=page_id, guidance_type=kind, content=content))
        for language, code in examples or []:
            session.add(CodeExample(page_id=page_id, language=language, code=code))
        for requirement, criterion, description in accessibility or []:
            session.add(
                AccessibilityRequirement(
                    page_id=page_id,
                    requirement_type=requirement,
                    wcag_criterion=criterion,
                    description=description,
                )
            )
        for tag, tag_type in tags or []:
            session.add(ComponentTag(page_id=page_id, tag=tag, tag_type=tag_type))
        session.commit()
    return page_id


@pytest.fixture(autouse=True)
def _reset_logging() -> Generator[None, None, None]:
    """Drop handlers a test configured; CliRunner streams close after invoke."""
    yield
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "components.db"


@pytest.fixture
def database(db_path: Path) -> Generator[Database, None, None]:
    """Empty component store with the schema created."""
    db = Database(db_path)
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def seed(database: Database) -> SeedFn:
    """Seed helper bound to the test database."""

    def _seed(name: str, **kwargs: Any) -> int:
        return seed_component(database, name, **kwargs)

    return _seed
