"""Tests for label-based reading tips and warnings."""

import pytest

from story_doctor.core.feedback import TIPS, WARNINGS, tips_for, warnings_for
from story_doctor.core.schemas_assessment import SuitabilityLabel


class TestFeedbackTables:
    @pytest.mark.parametrize("table", [TIPS, WARNINGS])
    @pytest.mark.parametrize("language", ["ko", "en"])
    def test_tables_cover_every_label(self, table, language):
        assert set(table[language]) == set(SuitabilityLabel)

    @pytest.mark.parametrize("language", ["ko", "en"])
    def test_every_label_has_tips(self, language):
        for label in SuitabilityLabel:
            assert tips_for(label, language)


class TestWarnings:
    @pytest.mark.parametrize(
        "label", [SuitabilityLabel.HIGHLY_SUITABLE, SuitabilityLabel.SUITABLE]
    )
    def test_favourable_labels_have_no_warnings(self, label):
        assert warnings_for(label) == []
        assert warnings_for(label, "en") == []

    @pytest.mark.parametrize("label", [SuitabilityLabel.MODERATE, SuitabilityLabel.UNSUITABLE])
    def test_unfavourable_labels_have_warnings(self, label):
        assert len(warnings_for(label)) >= 1


class TestTips:
    def test_unsuitable_mentions_mismatch(self):
        tips = tips_for(SuitabilityLabel.UNSUITABLE, "en")
        assert any("mismatch" in tip for tip in tips)

    def test_korean_is_default(self):
        assert tips_for(SuitabilityLabel.HIGHLY_SUITABLE) == list(
            TIPS["ko"][SuitabilityLabel.HIGHLY_SUITABLE]
        )

    def test_returns_copy(self):
        tips = tips_for(SuitabilityLabel.SUITABLE)
        tips.append("extra")
        assert "extra" not in tips_for(SuitabilityLabel.SUITABLE)
