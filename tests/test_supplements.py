"""Tests for the supplement catalog and recommender."""

from __future__ import annotations

import pytest
import yaml

from wellplan.errors import UnavailableInputError, ValidationError
from wellplan.supplements.catalog import (
    DEFAULT_CATALOG,
    PRODUCT_BASE_URL,
    SupplementCatalogEntry,
    dump_catalog,
    entry_from_dict,
    load_catalog,
)
from wellplan.supplements.recommender import (
    FALLBACK_RATIONALE,
    build_rationale,
    match_score,
    recommend_supplements,
    recommendation_to_dict,
)


def make_entry(entry_id: str, *tags: str) -> SupplementCatalogEntry:
    return SupplementCatalogEntry(
        id=entry_id,
        name=entry_id.title(),
        url=f"https://example.com/{entry_id}",
        description="",
        benefits=(),
        tags=tags,
    )


class TestDefaultCatalog:
    """Tests for the built-in catalog data."""

    def test_ids_unique(self):
        ids = [e.id for e in DEFAULT_CATALOG]
        assert len(ids) == len(set(ids))

    def test_entries_complete(self):
        for entry in DEFAULT_CATALOG:
            assert entry.name
            assert entry.url.startswith(PRODUCT_BASE_URL)
            assert entry.tags

    def test_starts_with_whey_protein(self):
        assert DEFAULT_CATALOG[0].id == "whey-protein"
        assert DEFAULT_CATALOG[0].tags[:2] == ("build-muscle", "strength-training")


class TestRanking:
    """Tests for scoring and ranking."""

    def test_match_score_counts_shared_tags(self):
        entry = make_entry("a", "build-muscle", "strength-training", "vegan")
        assert match_score(entry, {"build-muscle", "vegan", "poor-sleep"}) == 2
        assert match_score(entry, {"poor-sleep"}) == 0

    def test_more_shared_tags_rank_higher(self):
        catalog = (
            make_entry("general", "overall-health"),
            make_entry("muscle", "build-muscle", "strength-training"),
        )
        recs = recommend_supplements(
            {"build-muscle", "strength-training", "overall-health"}, catalog=catalog
        )
        assert [r.entry.id for r in recs] == ["muscle", "general"]
        assert [r.match_score for r in recs] == [2, 1]

    def test_ties_keep_catalog_order(self):
        catalog = (
            make_entry("first", "poor-sleep"),
            make_entry("second", "build-muscle"),
            make_entry("third", "poor-sleep", "high-stress"),
        )
        recs = recommend_supplements({"build-muscle", "poor-sleep"}, catalog=catalog)
        assert [r.entry.id for r in recs] == ["first", "second", "third"]

    def test_unrelated_entries_dropped(self):
        catalog = (make_entry("a", "poor-sleep"), make_entry("b", "vegan"))
        recs = recommend_supplements({"vegan"}, catalog=catalog)
        assert [r.entry.id for r in recs] == ["b"]

    def test_no_matches(self):
        assert recommend_supplements({"nonexistent-tag"}) == ()

    def test_limit(self):
        assert len(recommend_supplements({"overall-health"}, limit=2)) == 2
        assert recommend_supplements({"overall-health"}, limit=0) == ()
        assert recommend_supplements({"overall-health"}, limit=-3) == ()

    def test_default_catalog_muscle_and_sleep(self):
        recs = recommend_supplements({"build-muscle", "poor-sleep"})
        assert [r.entry.id for r in recs] == [
            "whey-protein",
            "creatine",
            "pre-workout",
            "magnesium",
            "ashwagandha",
        ]
        assert all(r.match_score == 1 for r in recs)

    def test_default_catalog_best_match_first(self):
        recs = recommend_supplements({"build-muscle", "strength-training", "slow-recovery"})
        assert recs[0].entry.id == "whey-protein"
        assert recs[0].match_score == 3
        assert recs[1].entry.id == "creatine"
        assert len(recs) == 5

    def test_fallback_tag(self):
        recs = recommend_supplements({"overall-health"})
        assert [r.entry.id for r in recs] == [
            "vitamin-d",
            "omega-3",
            "probiotics",
            "multivitamin",
            "digestive-enzymes",
        ]


class TestRationale:
    """Tests for recommendation rationale text."""

    def test_first_two_shared_tags_in_entry_order(self):
        entry = DEFAULT_CATALOG[0]
        text = build_rationale(entry, {"slow-recovery", "strength-training", "build-muscle"})
        assert text == "muscle growth and strength training"

    def test_single_tag(self):
        entry = make_entry("a", "poor-sleep", "high-stress")
        assert build_rationale(entry, {"high-stress"}) == "stress management"

    def test_unknown_tag_falls_back(self):
        entry = make_entry("a", "custom-goal")
        assert build_rationale(entry, {"custom-goal"}) == FALLBACK_RATIONALE

    def test_to_dict(self):
        rec = recommend_supplements({"poor-sleep"})[0]
        data = recommendation_to_dict(rec)
        assert data["entry"]["id"] == "magnesium"
        assert data["match_score"] == 1
        assert data["rationale"] == "better sleep"
        assert isinstance(data["entry"]["tags"], list)


class TestCatalogFiles:
    """Tests for loading and writing catalog YAML files."""

    def test_dump_then_load(self, tmp_path):
        path = tmp_path / "catalog.yaml"
        dump_catalog(DEFAULT_CATALOG, path)
        assert load_catalog(path) == DEFAULT_CATALOG

    def test_load_plain_list(self, tmp_path):
        path = tmp_path / "catalog.yaml"
        path.write_text(yaml.safe_dump([
            {
                "id": "zinc",
                "name": "Zinc",
                "url": "https://example.com/zinc",
                "tags": ["weak-immunity"],
            },
        ]))
        catalog = load_catalog(path)
        assert catalog[0].id == "zinc"
        assert catalog[0].benefits == ()
        assert recommend_supplements({"weak-immunity"}, catalog=catalog)[0].entry.id == "zinc"

    def test_missing_file(self, tmp_path):
        with pytest.raises(UnavailableInputError):
            load_catalog(tmp_path / "nope.yaml")

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        with pytest.raises(UnavailableInputError):
            load_catalog(path)

    def test_wrong_shape(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("supplements: 12\n")
        with pytest.raises(ValidationError):
            load_catalog(path)

    def test_duplicate_ids(self, tmp_path):
        entry = {"id": "x", "name": "X", "url": "https://example.com/x", "tags": ["vegan"]}
        path = tmp_path / "dup.yaml"
        path.write_text(yaml.safe_dump([entry, entry]))
        with pytest.raises(ValidationError) as exc_info:
            load_catalog(path)
        assert exc_info.value.field == "id"

    @pytest.mark.parametrize(
        "data,field",
        [
            ({"name": "X", "url": "u", "tags": ["vegan"]}, "id"),
            ({"id": "x", "name": "X", "url": "u", "tags": []}, "tags"),
            ({"id": "x", "name": "X", "url": "u", "tags": "vegan"}, "tags"),
        ],
    )
    def test_invalid_entries(self, data, field):
        with pytest.raises(ValidationError) as exc_info:
            entry_from_dict(data)
        assert exc_info.value.field == field
