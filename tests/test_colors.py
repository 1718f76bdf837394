"""Tests for lightsup.ui.colors – color blending and palette constants."""

from __future__ import annotations

import pytest

from lightsup.ui.colors import GameColors, blend_hex


# ===========================================================================
# GameColors – constants
# ===========================================================================

class TestGameColors:
    @pytest.mark.parametrize(
        "name",
        ["BG", "LIT", "UNLIT", "TARGET_LIT", "SOLVED_BORDER", "FAILED", "FLASH", "TEXT_MUTED", "USER_SEED"],
    )
    def test_is_hex(self, name: str):
        value = getattr(GameColors, name)
        assert value.startswith("#")
        assert len(value) == 7

    def test_lit_and_unlit_differ(self):
        assert GameColors.LIT != GameColors.UNLIT


# ===========================================================================
# blend_hex – happy paths
# ===========================================================================

class TestBlendHexHappy:
    def test_t_zero_returns_a(self):
        assert blend_hex("#FF0000", "#0000FF", 0.0) == "#FF0000"

    def test_t_one_returns_b(self):
        assert blend_hex("#FF0000", "#0000FF", 1.0) == "#0000FF"

    def test_midpoint(self):
        result = blend_hex("#000000", "#FFFFFF", 0.5)
        for start in (1, 3, 5):
            assert 126 <= int(result[start:start + 2], 16) <= 128

    def test_same_color(self):
        assert blend_hex("#ABCDEF", "#ABCDEF", 0.5) == "#ABCDEF"

    def test_quarter_blend(self):
        result = blend_hex("#000000", "#FF0000", 0.25)
        # 255 * 0.25 = 63.75 -> 63
        assert result == "#3F0000"


# ===========================================================================
# blend_hex – clamping and invalid input
# ===========================================================================

class TestBlendHexEdges:
    def test_t_negative_clamped_to_zero(self):
        assert blend_hex("#FF0000", "#0000FF", -1.0) == "#FF0000"

    def test_t_greater_than_one_clamped(self):
        assert blend_hex("#FF0000", "#0000FF", 2.0) == "#0000FF"

    def test_a_missing_hash(self):
        assert blend_hex("FF0000", "#0000FF", 0.5) == "FF0000"

    def test_b_wrong_length(self):
        assert blend_hex("#FF0000", "#FFF", 0.5) == "#FF0000"

    def test_invalid_hex_chars(self):
        assert blend_hex("#GGHHII", "#000000", 0.5) == "#GGHHII"

    def test_whitespace_padding(self):
        assert blend_hex("  #FF0000  ", "  #0000FF  ", 0.0) == "#FF0000"
