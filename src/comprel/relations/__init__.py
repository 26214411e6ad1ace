"""Relations module - guidance-derived component dependency resolution.

Public API is in `comprel.relations.ops`:
- RelationOps: analyze_dependencies and analyze_conflicts call surface

Building blocks:
- RelationExtractor: cue-phrase classification of guidance notes
- scan: stylesheet/script references in markup samples
- DependencyResolver: records and cycle-safe dependency chains
- synthesize: installation notes for a record
- ConflictAnalyzer: pairwise conflicts, combination warnings, recommendations
"""

from comprel.relations.conflicts import ConflictAnalyzer
from comprel.relations.extractor import CUE_TABLE, CueFamily, RelationExtractor
from comprel.relations.matching import ExactMatch, ExactThenSubstringMatch, MatchStrategy
from comprel.relations.models import (
    ChainEntry,
    ComponentInfo,
    ComponentRef,
    ComponentSource,
    DependencyRecord,
    GuidanceKind,
    GuidanceNote,
    MarkupSample,
    RelationKind,
    RelationMention,
)
from comprel.relations.notes import synthesize
from comprel.relations.resolver import DependencyResolver
from comprel.relations.scanner import scan

__all__ = [
    "CUE_TABLE",
    "ChainEntry",
    "ComponentInfo",
    "ComponentRef",
    "ComponentSource",
    "ConflictAnalyzer",
    "CueFamily",
    "DependencyRecord",
    "DependencyResolver",
    "GuidanceKind",
    "ExactMatch",
    "ExactThenSubstringMatch",
    "GuidanceNote",
    "MarkupSample",
    "MatchStrategy",
    "RelationExtractor",
    "RelationKind",
    "RelationMention",
    "scan",
    "synthesize",
]
