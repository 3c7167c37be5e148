"""Unit tests for ir_engine.domain.calculator.quotient_familial module."""

import pytest

from ir_engine.domain.calculator.quotient_familial import (
    compute_max_avantage,
    compute_quotient_family_capping,
)
from ir_engine.domain.models import QuotientFamilyConfig


@pytest.fixture
def qf_config(current_rules):
    return current_rules.quotient_family


class TestQuotientFamilyCapping:
    """Tests for compute_quotient_family_capping function."""

    def test_couple_capped(self, scale_2025, qf_config):
        """Couple, 2.5 parts, 80 000 €: advantage 3 417 € capped at 1 791 €.

        irBase (2 parts, 40 000 €/part) = 2 × 5 165.07 = 10 330.14 €
        ir (2.5 parts, 32 000 €/part)   = 2.5 × 2 765.07 = 6 912.675 €
        """
        qf = compute_quotient_family_capping(scale_2025, 80000, 2.5, True, False, qf_config)

        assert qf.ir_before_qf_base == pytest.approx(10330.14)
        assert qf.max_avantage == pytest.approx(1791)
        assert qf.qf_advantage == pytest.approx(1791)
        assert qf.qf_is_capped is True
        assert qf.ir_after_qf == pytest.approx(8539.14)

    def test_couple_not_capped(self, scale_2025, qf_config):
        """Couple, 3 parts, 40 000 €: advantage below the cap, tax unchanged."""
        qf = compute_quotient_family_capping(scale_2025, 40000, 3, True, False, qf_config)

        assert qf.qf_is_capped is False
        assert qf.ir_after_qf == pytest.approx(605.66, abs=0.01)
        assert qf.qf_advantage == pytest.approx(1870.44 - 605.66, abs=0.01)
        assert qf.qf_advantage <= qf.max_avantage

    def test_isolated_parent_cap(self, scale_2025, qf_config):
        """Isolated parent, 2 parts, 60 000 €: cap = (2 - 1) × 4 224 €."""
        qf = compute_quotient_family_capping(scale_2025, 60000, 2, False, True, qf_config)

        assert qf.max_avantage == pytest.approx(4224)
        assert qf.qf_is_capped is True
        assert qf.ir_after_qf == pytest.approx(11165.07 - 4224)

    def test_no_extra_parts_passthrough(self, scale_2025, qf_config):
        """Base parts only: uncapped tax passes through."""
        qf = compute_quotient_family_capping(
            scale_2025, 50000, 1, False, False, qf_config, ir_sans_plafond=8165.07
        )
        assert qf.ir_after_qf == 8165.07
        assert qf.ir_before_qf_base == 8165.07
        assert qf.qf_advantage == 0
        assert qf.qf_is_capped is False

    def test_no_config_passthrough(self, scale_2025):
        """Without cap configuration the advantage is never limited."""
        qf = compute_quotient_family_capping(scale_2025, 80000, 2.5, True, False, None)
        assert qf.qf_is_capped is False
        assert qf.ir_after_qf == pytest.approx(6912.675)

    def test_zero_income(self, scale_2025, qf_config):
        qf = compute_quotient_family_capping(scale_2025, 0, 3, True, False, qf_config)
        assert qf.ir_after_qf == 0
        assert qf.qf_is_capped is False

    def test_extra_half_parts(self, scale_2025, qf_config):
        qf = compute_quotient_family_capping(scale_2025, 80000, 3.5, True, False, qf_config)
        assert qf.extra_parts == 1.5
        assert qf.extra_half_parts == 3


class TestMaxAvantage:
    """Tests for compute_max_avantage function."""

    CONFIG = QuotientFamilyConfig(plafond_part_sup=1791, plafond_parent_isole_deux_premieres_parts=4224)

    def test_general_case(self):
        """Couple with 2 extra parts: 4 half-parts × 1 791 €."""
        assert compute_max_avantage(4, 2, True, False, self.CONFIG) == pytest.approx(7164)

    def test_isolated_beyond_two_parts(self):
        """Isolated parent, 2.5 parts: 4 224 € + 1 half-part × 1 791 €."""
        assert compute_max_avantage(2.5, 1.5, False, True, self.CONFIG) == pytest.approx(6015)

    def test_isolated_without_specific_cap(self):
        """No case T cap configured: general rule."""
        config = QuotientFamilyConfig(plafond_part_sup=1791)
        assert compute_max_avantage(2, 1, False, True, config) == pytest.approx(3582)

    def test_isolated_flag_ignored_for_couple(self):
        assert compute_max_avantage(3, 1, True, True, self.CONFIG) == pytest.approx(3582)

    def test_config_from_document_alias(self):
        """The accented document key feeds the case T cap."""
        config = QuotientFamilyConfig.model_validate(
            {"plafondPartSup": "1791", "plafondParentIsoléDeuxPremièresParts": 4224}
        )
        assert config.plafond_part_sup == 1791
        assert config.plafond_parent_isole_deux_premieres_parts == 4224
