import pytest

from osm_catalog.services.crawl.dedup import DEFAULT_DEDUP_RULES, DedupRules


@pytest.mark.parametrize("name", ["United States of America", "United States Of America", "GREAT BRITAIN"])
def test_exact_names_disabled_under_any_parent(name):
    assert DEFAULT_DEDUP_RULES.explain(name, "North America") == "exact_name"


@pytest.mark.parametrize("name", ["Britain and Ireland", "Germany, Austria, Switzerland"])
def test_composites_disabled_under_europe(name):
    assert DEFAULT_DEDUP_RULES.explain(name, "Europe") == "composite"
    assert DEFAULT_DEDUP_RULES.is_duplicate(name, "europe")


@pytest.mark.parametrize("name", ["Ireland and Northern Ireland", "Guernsey and Jersey"])
def test_composite_exceptions_stay_enabled(name):
    assert not DEFAULT_DEDUP_RULES.is_duplicate(name, "Europe")


def test_composites_outside_europe_stay_enabled():
    assert not DEFAULT_DEDUP_RULES.is_duplicate("Haiti and Dominican Republic", "Central America")
    assert not DEFAULT_DEDUP_RULES.is_duplicate("Malaysia, Singapore, and Brunei", "Asia")


def test_plain_names_stay_enabled():
    assert DEFAULT_DEDUP_RULES.explain("Albania", "Europe") is None
    assert DEFAULT_DEDUP_RULES.explain("Canada", "North America") is None


def test_custom_rule_table():
    rules = DedupRules(
        exact_names=frozenset({"dach"}),
        composite_parents=frozenset({"asia"}),
        composite_markers=(" & ",),
        composite_exceptions=(),
    )
    assert rules.is_duplicate("DACH", "Europe")
    assert rules.is_duplicate("India & Nepal", "Asia")
    assert not rules.is_duplicate("Britain and Ireland", "Europe")


def test_mixed_case_rule_entries():
    rules = DedupRules(
        exact_names={"DACH"},
        composite_parents={"Asia"},
        composite_markers=(" & ",),
        composite_exceptions=(),
    )
    assert rules.exact_names == frozenset({"dach"})
    assert rules.explain("Dach", "Europe") == "exact_name"
    assert rules.explain("India & Nepal", "ASIA") == "composite"
