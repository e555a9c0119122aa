"""Тесты для FormulaConfig."""

import math

import pytest

from tagformula.config import (
    INVALID_FORMULA_MARKER,
    TAG_OPTIONS_DEFAULT,
    UNRESOLVED_TAG_VALUE_DEFAULT,
    FormulaConfig,
)


class TestFormulaConfig:
    """Тесты конфигурации"""

    def test_defaults(self):
        config = FormulaConfig()
        assert config.unresolved_tag_value == UNRESOLVED_TAG_VALUE_DEFAULT == 1.0
        assert config.invalid_formula_marker == INVALID_FORMULA_MARKER == "Invalid formula"
        assert config.tag_options == TAG_OPTIONS_DEFAULT

    def test_frozen(self):
        config = FormulaConfig()
        with pytest.raises(AttributeError):
            config.unresolved_tag_value = 0.0

    @pytest.mark.parametrize("value", [math.inf, -math.inf, math.nan])
    def test_unresolved_value_must_be_finite(self, value):
        with pytest.raises(ValueError):
            FormulaConfig(unresolved_tag_value=value)

    def test_empty_marker_rejected(self):
        with pytest.raises(ValueError):
            FormulaConfig(invalid_formula_marker="")

    def test_empty_option_rejected(self):
        with pytest.raises(ValueError):
            FormulaConfig(tag_options=("Option 1", ""))

    def test_options_can_be_disabled(self):
        assert FormulaConfig(tag_options=()).tag_options == ()
