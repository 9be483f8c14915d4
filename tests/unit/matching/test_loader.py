"""Tests for RecordLoader."""

from __future__ import annotations

import json

import pytest


class TestLoadMapping:
    """Test mapping loads across formats."""

    def test_loads_yaml(self, tmp_path):
        from jobmate.matching.loader import RecordLoader

        path = tmp_path / "requester.yaml"
        path.write_text("id: u1\nskills:\n  - plumbing\n", encoding="utf-8")

        assert RecordLoader().load_mapping(path) == {"id": "u1", "skills": ["plumbing"]}

    def test_loads_json(self, tmp_path):
        from jobmate.matching.loader import RecordLoader

        path = tmp_path / "listing.json"
        path.write_text(json.dumps({"id": "l1"}), encoding="utf-8")

        assert RecordLoader().load_mapping(path) == {"id": "l1"}

    def test_unknown_extension_is_sniffed(self, tmp_path):
        from jobmate.matching.loader import RecordLoader

        json_like = tmp_path / "record.txt"
        json_like.write_text('{"id": "l1"}', encoding="utf-8")
        yaml_like = tmp_path / "record.data"
        yaml_like.write_text("id: l2\n", encoding="utf-8")

        loader = RecordLoader()

        assert loader.load_mapping(json_like) == {"id": "l1"}
        assert loader.load_mapping(yaml_like) == {"id": "l2"}

    def test_empty_yaml_is_empty_mapping(self, tmp_path):
        from jobmate.matching.loader import RecordLoader

        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")

        assert RecordLoader().load_mapping(path) == {}

    def test_missing_file_raises(self, tmp_path):
        from jobmate.matching.loader import RecordLoader

        with pytest.raises(FileNotFoundError):
            RecordLoader().load_mapping(tmp_path / "missing.yaml")

    def test_malformed_files_raise_value_error(self, tmp_path):
        from jobmate.matching.loader import RecordLoader

        bad_yaml = tmp_path / "bad.yaml"
        bad_yaml.write_text("id: [unclosed\n", encoding="utf-8")
        bad_json = tmp_path / "bad.json"
        bad_json.write_text("{not json", encoding="utf-8")

        loader = RecordLoader()

        with pytest.raises(ValueError, match="Invalid YAML"):
            loader.load_mapping(bad_yaml)
        with pytest.raises(ValueError, match="Invalid JSON"):
            loader.load_mapping(bad_json)

    def test_list_where_mapping_expected_raises(self, tmp_path):
        from jobmate.matching.loader import RecordLoader

        path = tmp_path / "list.json"
        path.write_text("[1, 2]", encoding="utf-8")

        with pytest.raises(ValueError, match="mapping"):
            RecordLoader().load_mapping(path)


class TestLoadList:
    def test_loads_top_level_list(self, tmp_path):
        from jobmate.matching.loader import RecordLoader

        path = tmp_path / "listings.json"
        path.write_text(json.dumps([{"id": "a"}, {"id": "b"}]), encoding="utf-8")

        assert RecordLoader().load_list(path) == [{"id": "a"}, {"id": "b"}]

    def test_loads_wrapped_list(self, tmp_path):
        from jobmate.matching.loader import RecordLoader

        path = tmp_path / "listings.yaml"
        path.write_text("listings:\n  - id: a\n", encoding="utf-8")

        assert RecordLoader().load_list(path) == [{"id": "a"}]

    def test_scalar_raises(self, tmp_path):
        from jobmate.matching.loader import RecordLoader

        path = tmp_path / "listings.yaml"
        path.write_text("just text\n", encoding="utf-8")

        with pytest.raises(ValueError, match="list"):
            RecordLoader().load_list(path)


class TestLoadTypedRecords:
    def test_load_criteria_accepts_preferences_shape(self, tmp_path):
        from jobmate.matching.loader import RecordLoader

        path = tmp_path / "prefs.yaml"
        path.write_text(
            "userId: u9\n"
            "dailyPreferences:\n"
            "  location: Austin\n"
            "  budget: 50\n",
            encoding="utf-8",
        )

        criteria = RecordLoader().load_criteria(path)

        assert criteria.requester_id == "u9"
        assert criteria.location == "Austin"
        assert criteria.budget_ceiling == 50

    def test_load_match_round_trips_match_result(self, tmp_path):
        from jobmate.matching.loader import RecordLoader
        from jobmate.matching.models import DimensionScore, MatchResult

        result = MatchResult(
            score=81,
            primary_reason="Within your budget",
            breakdown={"price": DimensionScore(100.0, 0.2, "Within your budget")},
        )
        path = tmp_path / "match_result.json"
        path.write_text(json.dumps(result.to_dict()), encoding="utf-8")

        assert RecordLoader().load_match(path) == result

    def test_load_match_rejects_incomplete_record(self, tmp_path):
        from jobmate.matching.loader import RecordLoader

        path = tmp_path / "match_result.json"
        path.write_text(json.dumps({"primary_reason": "x"}), encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid match result"):
            RecordLoader().load_match(path)
