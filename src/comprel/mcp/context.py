"""Application context for MCP handlers.

Single object passed to all tool handlers with access to ops classes.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from comprel.config.models import ComprelConfig
    from comprel.relations.ops import RelationOps
    from comprel.store.db import Database


@dataclass
class AppContext:
    """Context object passed to all MCP tool handlers."""

    db_path: Path
    database: Database
    relation_ops: RelationOps

    @classmethod
    def create(cls, db_path: Path, config: ComprelConfig | None = None) -> AppContext:
        """Factory to create context with all ops wired together.

        Args:
            db_path: Path to the component SQLite database
            config: Resolved configuration (defaults if None)
        """
        from comprel.config.models import ComprelConfig
        from comprel.relations.ops import RelationOps
        from comprel.store.catalog import ComponentCatalog
        from comprel.store.db import Database

        config = config or ComprelConfig()
        database = Database(db_path, busy_timeout_ms=config.database.busy_timeout_ms)
        relation_ops = RelationOps(ComponentCatalog(database), config.resolver)

        return cls(
            db_path=db_path,
            database=database,
            relation_ops=relation_ops,
        )
