"""Unit tests for ir_engine.application.services.settings_loader module."""

import copy
import json

import pytest

from ir_engine.application.services.settings_loader import (
    load_configured_tax_year_settings,
    load_tax_year_settings,
    load_tax_year_settings_file,
)
from ir_engine.core.defaults import DEFAULT_PS_SETTINGS, DEFAULT_TAX_SETTINGS
from ir_engine.core.exceptions import SettingsLoadError
from ir_engine.core.settings import get_settings


class TestLoadTaxYearSettings:
    """Tests for load_tax_year_settings function."""

    def test_default_tables(self, tax_settings):
        current, previous = tax_settings.current, tax_settings.previous

        assert current.label == "2025 (revenus 2024)"
        assert len(current.scale) == 5
        assert current.scale[1].from_ == 11498
        assert current.scale[-1].to is None
        assert previous.scale[1].from_ == 11295

        assert current.abat10.plafond == 14426
        assert previous.abat10.plafond == 14171
        assert current.decote.trigger_single == 1964
        assert current.quotient_family.plafond_part_sup == 1791
        assert current.dom_abatement.guyane.cap == 4050
        assert current.pfu_rate_ir == 12.8
        assert current.cdhr.threshold_couple == 500000
        assert current.patrimony.total_rate == 17.2

    def test_missing_sections_switch_rules_off(self):
        """Empty documents: no scale and every optional rule off."""
        settings = load_tax_year_settings({}, {})
        rules = settings.current

        assert rules.scale == ()
        assert rules.decote is None
        assert rules.quotient_family is None
        assert rules.cehr is None
        assert rules.cdhr is None
        assert rules.patrimony is None

    def test_garbage_sections_ignored(self):
        """Malformed sections degrade instead of raising."""
        document = {
            "incomeTax": {
                "scaleCurrent": [{"from": 0, "to": 10000, "rate": 0}, "oops", {"from": 10001, "rate": "11"}],
                "decote": "not a table",
                "abat10": {"current": {"plafond": "abc", "plancher": None}},
            },
            "cehr": {"current": {"single": None}},
        }
        rules = load_tax_year_settings(document, None).current

        assert len(rules.scale) == 2
        assert rules.scale[1].rate == 11
        assert rules.decote is None
        assert rules.abat10.plafond == 0
        assert rules.cehr.single == ()
        assert rules.patrimony.total_rate == 17.2  # default PS tables

    def test_cdhr_fallbacks_resolved_once(self):
        document = copy.deepcopy(DEFAULT_TAX_SETTINGS)
        document["cdhr"]["current"] = {"minEffectiveRate": 20, "thresholdSingle": 0}
        rules = load_tax_year_settings(document).current

        assert rules.cdhr.threshold_single == 250000
        assert rules.cdhr.majoration_couple == 12500

    def test_defaults_not_mutated(self):
        before = copy.deepcopy(DEFAULT_TAX_SETTINGS)
        load_tax_year_settings(DEFAULT_TAX_SETTINGS, DEFAULT_PS_SETTINGS)
        assert DEFAULT_TAX_SETTINGS == before


class TestLoadTaxYearSettingsFile:
    """Tests for load_tax_year_settings_file function."""

    def test_roundtrip_file(self, tmp_path):
        path = tmp_path / "fiscal.json"
        path.write_text(json.dumps({"tax": DEFAULT_TAX_SETTINGS, "ps": DEFAULT_PS_SETTINGS}), encoding="utf-8")

        settings = load_tax_year_settings_file(path)
        assert settings == load_tax_year_settings()

    def test_missing_file(self, tmp_path):
        with pytest.raises(SettingsLoadError):
            load_tax_year_settings_file(tmp_path / "absent.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(SettingsLoadError):
            load_tax_year_settings_file(path)

    def test_missing_tax_section(self, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text(json.dumps({"ps": {}}), encoding="utf-8")
        with pytest.raises(SettingsLoadError, match="'tax'"):
            load_tax_year_settings_file(path)

    def test_configured_file(self, tmp_path, monkeypatch):
        """IRENGINE_TAX_SETTINGS_FILE points the engine at another document."""
        document = copy.deepcopy(DEFAULT_TAX_SETTINGS)
        document["incomeTax"]["currentYearLabel"] = "custom"
        path = tmp_path / "custom.json"
        path.write_text(json.dumps({"tax": document}), encoding="utf-8")

        monkeypatch.setenv("IRENGINE_TAX_SETTINGS_FILE", str(path))
        get_settings.cache_clear()
        try:
            assert load_configured_tax_year_settings().current.label == "custom"
        finally:
            monkeypatch.delenv("IRENGINE_TAX_SETTINGS_FILE")
            get_settings.cache_clear()
