"""Tests for dependency records and chain resolution."""

import pytest

from comprel.core.errors import ComponentNotFoundError, ErrorCode
from comprel.relations.matching import ExactMatch
from comprel.relations.models import ChainEntry
from comprel.relations.resolver import DependencyResolver
from comprel.store.catalog import ComponentCatalog
from comprel.store.db import Database


@pytest.fixture
def catalog(database: Database) -> ComponentCatalog:
    return ComponentCatalog(database)


class TestBuildRecord:
    """Single-component dependency records."""

    def test_record_merges_guidance_and_markup(self, catalog: ComponentCatalog, seed) -> None:
        seed(
            "dropdown",
            guidance=[
                "This component requires the modal component and is recommended with accordion.",
                "Don't use with the carousel.",
                "Avoid placing dropdowns in footers.",
            ],
            examples=[("html", '<link rel="stylesheet" href="x.css"><script src="y.js"></script>')],
        )
        analysis = DependencyResolver(catalog).analyze("dropdown")
        record = analysis.record

        assert record.required.components == ["modal"]
        assert record.required.stylesheets == ["x.css"]
        assert record.required.scripts == ["y.js"]
        assert record.required.needs_scripting is True
        assert record.suggested.components == ["accordion"]
        assert record.conflicts.components == ["carousel"]
        assert record.conflicts.warnings == ["Avoid placing dropdowns in footers."]
        assert analysis.chain is None

    def test_empty_component(self, catalog: ComponentCatalog, seed) -> None:
        """No guidance and no samples gives an empty record."""
        seed("blank")
        record = DependencyResolver(catalog).analyze("blank").record

        assert record.required.components == []
        assert record.required.stylesheets == []
        assert record.required.scripts == []
        assert record.required.needs_scripting is False
        assert record.total() == 0

    def test_script_sample_sets_needs_scripting(self, catalog: ComponentCatalog, seed) -> None:
        seed("tabs", examples=[("javascript", "ECL.autoInit();")])
        record = DependencyResolver(catalog).analyze("tabs").record

        assert record.required.scripts == []
        assert record.required.needs_scripting is True

    def test_metadata_flag_sets_needs_scripting(self, catalog: ComponentCatalog, seed) -> None:
        seed("menu", requires_js=True)
        assert DependencyResolver(catalog).analyze("menu").record.required.needs_scripting is True

    def test_not_found(self, catalog: ComponentCatalog) -> None:
        with pytest.raises(ComponentNotFoundError) as exc_info:
            DependencyResolver(catalog).analyze("ghost-component-xyz")

        assert exc_info.value.code == ErrorCode.COMPONENT_NOT_FOUND
        assert exc_info.value.message == "Component 'ghost-component-xyz' not found"

    def test_lookup_case_insensitive(self, catalog: ComponentCatalog, seed) -> None:
        seed("Accordion")
        assert DependencyResolver(catalog).analyze("accordion").component.name == "Accordion"


class TestResolveChain:
    """Recursive chain expansion."""

    def test_cycle_terminates(self, catalog: ComponentCatalog, seed) -> None:
        """A requires B and B requires A: B appears once, A never."""
        seed("alpha", guidance=["Requires beta."])
        seed("beta", guidance=["Requires alpha."])

        chain = DependencyResolver(catalog).analyze("alpha", recursive=True).chain

        assert chain == [ChainEntry(component="beta", requires=("alpha",))]

    def test_self_reference(self, catalog: ComponentCatalog, seed) -> None:
        seed("loop", guidance=["Requires loop."])
        assert DependencyResolver(catalog).analyze("loop", recursive=True).chain == []

    def test_diamond_visits_shared_dependency_once(self, catalog: ComponentCatalog, seed) -> None:
        """A -> B, A -> C, B -> D, C -> D: D is listed once."""
        seed("a", guidance=["Requires b.", "Needs c."])
        seed("b", guidance=["Requires d."])
        seed("c", guidance=["Requires d."])
        seed("d")

        chain = DependencyResolver(catalog).analyze("a", recursive=True).chain
        assert chain is not None

        assert [entry.component for entry in chain] == ["b", "d", "c"]

    def test_pre_order(self, catalog: ComponentCatalog, seed) -> None:
        """Each component is followed by its own requirements before siblings."""
        seed("root", guidance=["Requires left.", "Requires right."])
        seed("left", guidance=["Requires leaf."])
        seed("right")
        seed("leaf")

        chain = DependencyResolver(catalog).analyze("root", recursive=True).chain
        assert chain is not None

        assert [entry.component for entry in chain] == ["left", "leaf", "right"]
        assert chain[0].requires == ("leaf",)

    def test_unmatched_phrase_stays_in_record(self, catalog: ComponentCatalog, seed) -> None:
        seed("card", guidance=["Requires unicorn.", "Requires badge."])
        seed("badge")

        analysis = DependencyResolver(catalog).analyze("card", recursive=True)

        assert analysis.record.required.components == ["unicorn", "badge"]
        assert analysis.chain == [ChainEntry(component="badge")]

    def test_substring_match_used_in_chain(self, catalog: ComponentCatalog, seed) -> None:
        seed("form", guidance=["Requires the picker."])
        seed("date-picker")

        chain = DependencyResolver(catalog).analyze("form", recursive=True).chain
        assert chain == [ChainEntry(component="date-picker")]

    def test_exact_strategy_skips_substring(self, catalog: ComponentCatalog, seed) -> None:
        seed("form", guidance=["Requires the picker."])
        seed("date-picker")

        resolver = DependencyResolver(catalog, match_strategy=ExactMatch())
        assert resolver.analyze("form", recursive=True).chain == []

    def test_phrases_matching_same_component_collapse(self, catalog: ComponentCatalog, seed) -> None:
        """Visited is keyed by component, not by phrase."""
        seed("page", guidance=["Requires the modal.", "Needs modal-dialog."])
        seed("modal-dialog")

        chain = DependencyResolver(catalog).analyze("page", recursive=True).chain
        assert chain == [ChainEntry(component="modal-dialog")]
