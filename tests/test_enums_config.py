"""
Unit tests for enumerations and configuration defaults.
"""

import pytest

from brokerage_core.config import DEFAULT_CONFIG, AnalysisConfig, resolve_config, resolve_mode
from brokerage_core.enums import Mode, Role
from brokerage_core.errors import BoundsError, BrokerageError, ValidationError


class TestMode:
    @pytest.mark.parametrize("value, mode", [("both", Mode.BOTH), ("OUT", Mode.OUT), (" in ", Mode.IN)])
    def test_parse_strings(self, value, mode):
        assert Mode.parse(value) is mode

    def test_parse_member(self):
        assert Mode.parse(Mode.OUT) is Mode.OUT

    @pytest.mark.parametrize("value", ["all", "", None, 1])
    def test_parse_rejects_unknown(self, value):
        with pytest.raises(ValidationError):
            Mode.parse(value)


class TestRole:
    def test_values_match_result_fields(self):
        assert [r.value for r in Role] == [
            "coordinator", "gatekeeper", "representative", "liaison", "cosmopolitan",
        ]


class TestConfig:
    def test_defaults(self):
        cfg = AnalysisConfig()
        assert cfg.default_mode == "both"
        assert cfg.weight_key == "weight"
        assert cfg.validate_weights is True
        assert cfg.progress_every == 0
        assert cfg.matrix_directed is None

    def test_resolve_config(self):
        cfg = AnalysisConfig(default_mode="in")
        assert resolve_config(cfg) is cfg
        assert resolve_config(None) is DEFAULT_CONFIG

    def test_resolve_mode(self):
        assert resolve_mode(None) is Mode.BOTH
        assert resolve_mode(None, AnalysisConfig(default_mode="out")) is Mode.OUT
        assert resolve_mode("in", AnalysisConfig(default_mode="out")) is Mode.IN


class TestErrors:
    def test_hierarchy(self):
        assert issubclass(ValidationError, BrokerageError)
        assert issubclass(ValidationError, ValueError)
        assert issubclass(BoundsError, BrokerageError)
        assert issubclass(BoundsError, IndexError)
