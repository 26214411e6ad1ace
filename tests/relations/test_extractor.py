"""Tests for cue-phrase relation extraction."""

import pytest

from comprel.relations.extractor import (
    CUE_TABLE,
    CueFamily,
    RelationExtractor,
    capture_phrase,
    normalize_text,
)
from comprel.relations.models import GuidanceNote, RelationKind, RelationMention


def _notes(*texts: str) -> list[GuidanceNote]:
    return [GuidanceNote(text=t) for t in texts]


class TestCapturePhrase:
    """Noun phrase capture after a cue."""

    @pytest.mark.parametrize(
        ("text", "cue", "expected"),
        [
            ("requires the modal component", "requires", "modal"),
            ("requires modal", "requires", "modal"),
            ("requires the date picker.", "requires", "date picker"),
            ("requires the date picker widget today", "requires", "date picker"),
            ("recommended with accordion", "recommended", "accordion"),
            ("needs to be accessible", "needs", ""),
            ("requires", "requires", ""),
            ("requires. the modal", "requires", ""),
            ("requires modal and tabs", "requires", "modal"),
            ("works well with the file-upload", "works well with", "file-upload"),
        ],
    )
    def test_capture(self, text: str, cue: str, expected: str) -> None:
        """Phrase is the 1-2 words after fillers, cut at stop words."""
        assert text.startswith(cue)
        assert capture_phrase(text, len(cue)) == expected

    def test_normalize_folds_case_and_apostrophes(self) -> None:
        """Typographic apostrophes match the straight-quote cues."""
        assert normalize_text("Don’t Use With Tabs") == "don't use with tabs"


class TestExtractMentions:
    """Per-note mention extraction."""

    def test_required_and_suggested_in_one_note(self) -> None:
        """Families are evaluated independently on the same note."""
        note = GuidanceNote(
            text="This component requires the modal component and is recommended with accordion."
        )
        mentions = RelationExtractor().extract_mentions(note)

        assert RelationMention(RelationKind.REQUIRED, "modal") in mentions
        assert RelationMention(RelationKind.SUGGESTED, "accordion") in mentions

    def test_warning_keeps_note_text(self) -> None:
        """Warning mentions carry the original text, not a phrase."""
        note = GuidanceNote(text="Avoid nesting Tabs inside a Modal.")
        mentions = RelationExtractor().extract_mentions(note)

        assert mentions == [RelationMention(RelationKind.WARNING, "Avoid nesting Tabs inside a Modal.")]

    def test_warning_truncated(self) -> None:
        """Long warning notes are truncated to warning_max_chars."""
        text = "Caution: " + "x" * 300
        mentions = RelationExtractor(warning_max_chars=50).extract_mentions(GuidanceNote(text=text))

        assert mentions[0].target_phrase == text[:50]

    def test_optional_does_not_match_inside_optionally(self) -> None:
        """Cue boundaries prevent a second capture from the shorter cue."""
        note = GuidanceNote(text="Optionally add the icon set.")
        mentions = RelationExtractor().extract_mentions(note)

        enhancements = [m.target_phrase for m in mentions if m.kind is RelationKind.ENHANCEMENT]
        assert enhancements == ["add"]

    def test_no_cues_no_mentions(self) -> None:
        """Plain advice yields nothing."""
        note = GuidanceNote(text="Use short, descriptive labels.")
        assert RelationExtractor().extract_mentions(note) == []


class TestExtract:
    """Aggregation across notes."""

    def test_empty_notes(self) -> None:
        """No notes gives empty categories."""
        result = RelationExtractor().extract([])

        assert result.required == []
        assert result.suggested == []
        assert result.enhancements == []
        assert result.conflicts == []
        assert result.warnings == []

    def test_duplicates_removed_case_insensitively(self) -> None:
        """The same target mentioned twice is listed once."""
        result = RelationExtractor().extract(
            _notes("Requires the Modal.", "This also requires the modal component.", "Needs MODAL")
        )
        assert result.required == ["modal"]

    def test_punctuation_after_cue_captures_nothing(self) -> None:
        """A sentence break right after the cue ends the capture."""
        result = RelationExtractor().extract([GuidanceNote("Requires. The modal is nice.")])

        assert result.required == []

    def test_enhancement_cues(self) -> None:
        """Enhanced-with and optional phrasings produce enhancements."""
        result = RelationExtractor().extract(
            _notes(
                "The card can be enhanced with icons.",
                "An optional badge, for counts.",
            )
        )
        assert result.enhancements == ["icons", "badge"]

    def test_conflict_cues(self) -> None:
        """Conflict cues capture the incompatible target."""
        result = RelationExtractor().extract(
            _notes(
                "Don't use with the carousel.",
                "Incompatible with sticky header.",
                "It conflicts with tabs",
            )
        )
        assert result.conflicts == ["carousel", "sticky header", "tabs"]

    def test_warnings_capped(self) -> None:
        """At most warning_limit warnings are kept, in note order."""
        notes = _notes(*(f"Warning number {i}" for i in range(8)))

        result = RelationExtractor().extract(notes)

        assert result.warnings == [f"Warning number {i}" for i in range(5)]

    def test_custom_cue_table(self) -> None:
        """A new relation cue is one table entry."""
        table = (*CUE_TABLE, CueFamily(RelationKind.REQUIRED, ("depends on",)))
        result = RelationExtractor(cue_table=table).extract(_notes("Depends on the grid."))

        assert result.required == ["grid"]
