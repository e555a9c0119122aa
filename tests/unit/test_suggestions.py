"""
Тесты для Suggestion модели, провайдеров и SuggestionSnapshot

Coverage:
- Приведение value (число, строка, пусто, мусор → None)
- Состояния snapshot: PENDING → LOADED / FAILED
- Graceful degradation при ошибке провайдера
- Lookup: точный find_by_name и autocomplete search
"""

import json
import logging

import pytest
from pydantic import ValidationError

from tagformula.core.domain import Suggestion, TagToken
from tagformula.suggestions import (
    JsonFileSuggestionProvider,
    SnapshotState,
    StaticSuggestionProvider,
    SuggestionSnapshot,
    parse_suggestions,
)


@pytest.fixture
def payload() -> list[dict]:
    """Payload в формате mock API (value строкой, id строкой)."""
    return [
        {"id": "1", "name": "Revenue", "category": "finance", "value": "1200"},
        {"id": "2", "name": "Net revenue", "category": "finance", "value": 950.5},
        {"id": "3", "name": "Headcount", "category": "hr", "value": ""},
        {"id": "4", "name": "Revenue", "category": "duplicate", "value": 1},
    ]


class FailingProvider:
    def fetch_suggestions(self):
        raise ConnectionError("provider unreachable")


# =============================================================================
# SUGGESTION MODEL
# =============================================================================


class TestSuggestionModel:
    """Тесты для модели Suggestion"""

    @pytest.mark.parametrize("raw, expected", [
        (12, 12.0),
        (2.5, 2.5),
        ("42", 42.0),
        (" 3.5 ", 3.5),
        ("", None),
        ("n/a", None),
        (None, None),
        (True, None),
        ("inf", None),
        ("nan", None),
        (10 ** 400, None),
    ])
    def test_value_coercion(self, raw, expected):
        suggestion = Suggestion(id="1", name="X", value=raw)
        assert suggestion.value == expected

    def test_numeric_id_coerced_to_string(self):
        assert Suggestion(id=17, name="X").id == "17"

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            Suggestion(id="1", name="")

    def test_to_tag(self):
        tag = Suggestion(id="9", name="Margin", category="kpi", value="0.3").to_tag()
        assert isinstance(tag, TagToken)
        assert (tag.id, tag.name, tag.category, tag.value) == ("9", "Margin", "kpi", 0.3)
        assert tag.option is None

    def test_frozen(self):
        suggestion = Suggestion(id="1", name="X")
        with pytest.raises(ValidationError):
            suggestion.name = "Y"


# =============================================================================
# SNAPSHOT
# =============================================================================


class TestSuggestionSnapshot:
    """Тесты для SuggestionSnapshot"""

    def test_starts_pending_and_empty(self):
        snapshot = SuggestionSnapshot()
        assert snapshot.state == SnapshotState.PENDING
        assert len(snapshot) == 0
        assert snapshot.find_by_name("Revenue") is None

    def test_records_constructor_is_loaded(self, payload):
        snapshot = SuggestionSnapshot(parse_suggestions(payload))
        assert snapshot.state == SnapshotState.LOADED
        assert len(snapshot) == 4

    def test_refresh_from_static_provider(self, payload):
        snapshot = SuggestionSnapshot()
        state = snapshot.refresh(StaticSuggestionProvider(payload))
        assert state == SnapshotState.LOADED
        assert [s.name for s in snapshot] == ["Revenue", "Net revenue", "Headcount", "Revenue"]

    def test_provider_failure_degrades_gracefully(self, payload, caplog):
        snapshot = SuggestionSnapshot(parse_suggestions(payload))

        with caplog.at_level(logging.WARNING, logger="tagformula.suggestions"):
            state = snapshot.refresh(FailingProvider())

        assert state == SnapshotState.FAILED
        assert snapshot.records == ()
        assert "provider unreachable" in snapshot.last_error
        assert "Suggestion fetch failed" in caplog.text

    def test_refresh_after_failure_recovers(self, payload):
        snapshot = SuggestionSnapshot()
        snapshot.refresh(FailingProvider())
        snapshot.refresh(StaticSuggestionProvider(payload))
        assert snapshot.state == SnapshotState.LOADED
        assert snapshot.last_error is None

    def test_load_payload_valid(self, payload):
        snapshot = SuggestionSnapshot()
        assert snapshot.load_payload(payload) == SnapshotState.LOADED
        assert snapshot.find_by_name("Net revenue").value == 950.5

    @pytest.mark.parametrize("bad_payload", [
        {"id": "1", "name": "Revenue"},
        [{"id": "1"}],
        [{"id": "1", "name": ""}],
        [{"id": "1", "name": "X", "value": [1, 2]}],
        "not a list",
    ])
    def test_load_payload_contract_violation(self, bad_payload):
        snapshot = SuggestionSnapshot()
        assert snapshot.load_payload(bad_payload) == SnapshotState.FAILED
        assert len(snapshot) == 0

    def test_load_payload_out_of_range_value_is_unresolved(self):
        data = json.loads('[{"id": "1", "name": "Big", "value": 1' + "0" * 400 + "}]")
        snapshot = SuggestionSnapshot()
        assert snapshot.load_payload(data) == SnapshotState.LOADED
        assert snapshot.find_by_name("Big").value is None

    def test_static_provider_out_of_range_value(self):
        provider = StaticSuggestionProvider([{"id": "1", "name": "Big", "value": 10 ** 400}])
        snapshot = SuggestionSnapshot()
        assert snapshot.refresh(provider) == SnapshotState.LOADED
        assert snapshot.find_by_name("Big").value is None

    def test_find_by_name_first_wins_on_duplicates(self, payload):
        snapshot = SuggestionSnapshot(parse_suggestions(payload))
        assert snapshot.find_by_name("Revenue").id == "1"

    def test_find_by_name_case_sensitive(self, payload):
        snapshot = SuggestionSnapshot(parse_suggestions(payload))
        assert snapshot.find_by_name("revenue") is None

    def test_search_case_insensitive_substring(self, payload):
        snapshot = SuggestionSnapshot(parse_suggestions(payload))
        names = [s.name for s in snapshot.search("REV")]
        assert names == ["Revenue", "Net revenue", "Revenue"]

    def test_search_empty_query(self, payload):
        snapshot = SuggestionSnapshot(parse_suggestions(payload))
        assert snapshot.search("") == []
        assert snapshot.search("   ") == []


# =============================================================================
# JSON FILE PROVIDER
# =============================================================================


class TestJsonFileSuggestionProvider:
    """Тесты для JsonFileSuggestionProvider"""

    def test_reads_and_validates(self, tmp_path, payload):
        path = tmp_path / "suggestions.json"
        path.write_text(json.dumps(payload), encoding="utf-8")

        records = JsonFileSuggestionProvider(path).fetch_suggestions()

        assert len(records) == 4
        assert records[0].value == 1200.0

    def test_missing_file_degrades_snapshot(self, tmp_path):
        snapshot = SuggestionSnapshot()
        state = snapshot.refresh(JsonFileSuggestionProvider(tmp_path / "missing.json"))
        assert state == SnapshotState.FAILED

    def test_malformed_json_degrades_snapshot(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("[{", encoding="utf-8")
        snapshot = SuggestionSnapshot()
        assert snapshot.refresh(JsonFileSuggestionProvider(path)) == SnapshotState.FAILED
