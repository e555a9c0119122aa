"""
Tests for JSON Schema Contract Validators

Тестирование JSON Schema валидатора suggestion_list:
- Валидность самой схемы
- Валидация правильных данных
- Детекция нарушений required полей и типов
- Интеграция с Pydantic моделью Suggestion
"""

import json

import pytest
from jsonschema import Draft202012Validator, ValidationError

from tagformula.core.contracts import (
    ContractValidator,
    SchemaLoader,
    SuggestionListValidator,
    validate_suggestion_list,
)
from tagformula.core.domain import Suggestion


# =============================================================================
# FIXTURES - VALID DATA SAMPLES
# =============================================================================


@pytest.fixture
def valid_suggestion_list():
    """Валидный payload провайдера подсказок."""
    return [
        {"id": "1", "name": "Revenue", "category": "finance", "value": "1200"},
        {"id": 2, "name": "Cost", "category": "finance", "value": 300.25},
        {"id": "3", "name": "Headcount", "category": "hr", "value": None},
        {"id": "4", "name": "Churn", "createdAt": "2024-01-01"},
    ]


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class TestSchemaLoader:
    """Тесты загрузчика схем"""

    def test_schema_is_valid_draft_2020_12(self):
        schema = SchemaLoader().load_schema("suggestion_list")
        Draft202012Validator.check_schema(schema)
        assert schema["type"] == "array"

    def test_schema_cached(self):
        loader = SchemaLoader()
        assert loader.load_schema("suggestion_list") is loader.load_schema("suggestion_list")

    def test_missing_schema(self):
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("does_not_exist")

    def test_missing_schema_dir(self, tmp_path):
        with pytest.raises(RuntimeError):
            SchemaLoader(tmp_path / "nowhere")

    def test_invalid_schema_file(self, tmp_path):
        (tmp_path / "broken.json").write_text(json.dumps({"type": 42}), encoding="utf-8")
        with pytest.raises(ValueError):
            SchemaLoader(tmp_path).load_schema("broken")

    def test_custom_loader_for_validator(self, tmp_path):
        (tmp_path / "numbers.json").write_text(
            json.dumps({"type": "array", "items": {"type": "number"}}), encoding="utf-8"
        )
        validator = ContractValidator("numbers", loader=SchemaLoader(tmp_path))
        assert validator.is_valid([1, 2.5])
        assert not validator.is_valid(["a"])


# =============================================================================
# SUGGESTION LIST CONTRACT
# =============================================================================


class TestSuggestionListContract:
    """Тесты контракта suggestion_list"""

    def test_valid_payload(self, valid_suggestion_list):
        validate_suggestion_list(valid_suggestion_list)
        assert SuggestionListValidator().is_valid(valid_suggestion_list)

    def test_empty_list_is_valid(self):
        validate_suggestion_list([])

    @pytest.mark.parametrize("missing", ["id", "name"])
    def test_required_fields(self, valid_suggestion_list, missing):
        del valid_suggestion_list[0][missing]
        with pytest.raises(ValidationError):
            validate_suggestion_list(valid_suggestion_list)

    @pytest.mark.parametrize("field, bad_value", [
        ("id", ""),
        ("id", 1.5),
        ("id", None),
        ("name", 5),
        ("name", ""),
        ("category", 3),
        ("value", {"amount": 1}),
        ("value", True),
    ])
    def test_type_violations(self, valid_suggestion_list, field, bad_value):
        valid_suggestion_list[0][field] = bad_value
        assert not SuggestionListValidator().is_valid(valid_suggestion_list)

    def test_payload_must_be_array(self):
        with pytest.raises(ValidationError):
            validate_suggestion_list({"id": "1", "name": "Revenue"})

    def test_valid_payload_builds_models(self, valid_suggestion_list):
        validate_suggestion_list(valid_suggestion_list)
        models = [Suggestion.model_validate(r) for r in valid_suggestion_list]
        assert [m.value for m in models] == [1200.0, 300.25, None, None]
        assert models[1].id == "2"
