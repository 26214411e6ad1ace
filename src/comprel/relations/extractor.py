"""Cue-phrase relation extraction from usage guidance.

Each note is case-folded and tested against every cue family in CUE_TABLE.
Families are independent: one note can yield required, suggested and
warning mentions at once. Matching is permissive and the output is advisory;
false positives are expected.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

import structlog

from comprel.relations.models import (
    ExtractedRelations,
    GuidanceNote,
    RelationKind,
    RelationMention,
)

log = structlog.get_logger(__name__)

DEFAULT_WARNING_LIMIT = 5
DEFAULT_WARNING_MAX_CHARS = 200

# Maximum words kept in a captured phrase
PHRASE_MAX_WORDS = 2


@dataclass(frozen=True)
class CueFamily:
    """One row of the cue table."""

    kind: RelationKind
    cues: tuple[str, ...]
    # False: the mention is the note text itself, not a captured phrase
    captures_phrase: bool = True


CUE_TABLE: tuple[CueFamily, ...] = (
    CueFamily(RelationKind.REQUIRED, ("requires", "must use", "needs")),
    CueFamily(RelationKind.SUGGESTED, ("recommended", "suggested", "works well with")),
    CueFamily(
        RelationKind.ENHANCEMENT,
        ("can be enhanced", "enhanced with", "optionally", "optional"),
    ),
    CueFamily(
        RelationKind.CONFLICT,
        ("don't use with", "do not use with", "incompatible", "conflicts with"),
    ),
    CueFamily(RelationKind.WARNING, ("warning", "caution", "avoid"), captures_phrase=False),
)

# Skipped before the phrase starts
_LEADING_FILLER = frozenset(
    {"the", "a", "an", "with", "by", "for", "to", "using", "use", "of", "on", "in", "alongside"}
)

# End the phrase; generic nouns land here so "modal component" captures "modal"
_STOP_WORDS = frozenset(
    {
        "and", "or", "but", "nor", "if", "when", "where", "while", "as", "so", "then",
        "than", "that", "which", "who", "because", "unless", "until",
        "is", "are", "be", "been", "being", "was", "were", "has", "have", "do", "does",
        "must", "should", "can", "could", "may", "might", "will", "would",
        "not", "no", "also", "only", "always", "never", "it", "its", "this", "these",
        "those", "the", "a", "an", "with", "for", "to", "by", "in", "on", "of", "from",
        "at", "use", "using",
        "component", "components", "element", "elements",
    }
)  # fmt: skip

# Whitespace-separated word run; punctuation ends the capture
_WORD_RUN = re.compile(r"(?:\s+[a-z0-9][a-z0-9-]*)+")


def _cue_pattern(cue: str) -> re.Pattern[str]:
    return re.compile(rf"(?<![a-z]){re.escape(cue)}(?![a-z])")


_CUE_PATTERNS: dict[str, re.Pattern[str]] = {
    cue: _cue_pattern(cue) for family in CUE_TABLE for cue in family.cues
}


def normalize_text(text: str) -> str:
    """Case-fold and straighten typographic apostrophes."""
    return text.casefold().replace("’", "'")


def capture_phrase(text: str, start: int) -> str:
    """Capture the noun phrase following a cue that ends at ``start``.

    Returns an empty string when nothing usable follows the cue.
    """
    run = _WORD_RUN.match(text, start)
    if run is None:
        return ""
    words = run.group(0).split()

    i = 0
    while i < len(words) and words[i] in _LEADING_FILLER:
        i += 1

    picked: list[str] = []
    for word in words[i:]:
        if word in _STOP_WORDS or len(picked) == PHRASE_MAX_WORDS:
            break
        picked.append(word)
    return " ".join(picked)


def _append_unique(target: list[str], value: str) -> None:
    key = value.casefold()
    if all(existing.casefold() != key for existing in target):
        target.append(value)


class RelationExtractor:
    """Classifies guidance notes into typed relation mentions."""

    def __init__(
        self,
        *,
        warning_limit: int = DEFAULT_WARNING_LIMIT,
        warning_max_chars: int = DEFAULT_WARNING_MAX_CHARS,
        cue_table: tuple[CueFamily, ...] = CUE_TABLE,
    ) -> None:
        self._warning_limit = warning_limit
        self._warning_max_chars = warning_max_chars
        self._cue_table = cue_table

    def extract_mentions(self, note: GuidanceNote) -> list[RelationMention]:
        """All mentions found in a single note, in table order."""
        text = normalize_text(note.text)
        mentions: list[RelationMention] = []

        for family in self._cue_table:
            if not family.captures_phrase:
                if any(cue in text for cue in family.cues):
                    mentions.append(
                        RelationMention(family.kind, note.text[: self._warning_max_chars])
                    )
                continue

            seen: list[str] = []
            for cue in family.cues:
                if cue not in text:
                    continue
                pattern = _CUE_PATTERNS.get(cue) or _cue_pattern(cue)
                for match in pattern.finditer(text):
                    phrase = capture_phrase(text, match.end())
                    if phrase:
                        _append_unique(seen, phrase)
            mentions.extend(RelationMention(family.kind, phrase) for phrase in seen)

        return mentions

    def extract(self, notes: Iterable[GuidanceNote]) -> ExtractedRelations:
        """Group the mentions of all notes by kind, without duplicates."""
        result = ExtractedRelations()
        targets = {
            RelationKind.REQUIRED: result.required,
            RelationKind.SUGGESTED: result.suggested,
            RelationKind.ENHANCEMENT: result.enhancements,
            RelationKind.CONFLICT: result.conflicts,
        }

        for note in notes:
            for mention in self.extract_mentions(note):
                if mention.kind is RelationKind.WARNING:
                    result.warnings.append(mention.target_phrase)
                else:
                    _append_unique(targets[mention.kind], mention.target_phrase)

        result.warnings = result.warnings[: self._warning_limit]
        log.debug(
            "relations_extracted",
            required=len(result.required),
            suggested=len(result.suggested),
            enhancements=len(result.enhancements),
            conflicts=len(result.conflicts),
            warnings=len(result.warnings),
        )
        return result
