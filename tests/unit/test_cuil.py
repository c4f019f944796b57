"""
测试 CUIL 工具函数：
- normalize() 去非数字 + 截断 + 幂等
- format_cuil() 按位数分段
- check_digit() / is_valid() 校验位算法，含 "11 - 余数 == 10" 的终止拒绝分支
- is_valid_formatted() 只认两种形状
纯函数，不需要 Django。
"""

import pytest

from urgencias import cuil


# ── 测试数据 ──────────────────────────────────────────────────────────────

# 手算过的合法 CUIL：Σ d·w mod 11 → 期望校验位
VALID_CUILS = [
    "20172543597",   # Σ=136, 余 4 → 7
    "27000000006",   # Σ=38,  余 5 → 6
    "20123456786",   # Σ=148, 余 5 → 6
    "20000000060",   # Σ=22,  余 0 → 11 → 0
    "30500010912",   # Σ=64,  余 9 → 2
]

# 前 10 位 Σ=12，余 1 → 11 - 1 = 10：不存在合法校验位
NO_CHECK_DIGIT_PREFIX = "2000000001"


# ── normalize ─────────────────────────────────────────────────────────────

class TestNormalize:
    @pytest.mark.parametrize("raw,expected", [
        ("", ""),
        ("20-12345678-3", "20123456783"),
        ("  20 1234 ", "201234"),
        ("abc", ""),
        ("--..//", ""),
        ("201234567891234", "20123456789"),   # 超长截断到 11 位
        ("２０1", "1"),                        # 全角数字不算
    ])
    def test_strips_and_truncates(self, raw, expected):
        assert cuil.normalize(raw) == expected

    def test_none_is_empty(self):
        assert cuil.normalize(None) == ""

    @pytest.mark.parametrize("raw", ["", "20-1", "20-12345678-9", "x9y8z7" * 5, "2" * 40])
    def test_idempotent(self, raw):
        once = cuil.normalize(raw)
        assert cuil.normalize(once) == once

    @pytest.mark.parametrize("raw", ["", "2", "20-", "20-1234", "20123456789", "20-12345678-3 extra 99"])
    def test_format_then_normalize_is_stable(self, raw):
        digits = cuil.normalize(raw)
        assert cuil.normalize(cuil.format_cuil(digits)) == digits


# ── format_cuil ───────────────────────────────────────────────────────────

class TestFormat:
    @pytest.mark.parametrize("digits,expected", [
        ("", ""),
        ("2", "2"),
        ("20", "20"),
        ("201", "20-1"),
        ("2012345678", "20-12345678"),
        ("20123456783", "20-12345678-3"),
    ])
    def test_progressive_punctuation(self, digits, expected):
        assert cuil.format_cuil(digits) == expected

    def test_every_length_has_a_format(self):
        digits = "20123456783"
        for n in range(len(digits) + 1):
            formatted = cuil.format_cuil(digits[:n])
            assert formatted.replace("-", "") == digits[:n]


# ── check_digit / is_valid ────────────────────────────────────────────────

class TestIsValid:
    @pytest.mark.parametrize("value", VALID_CUILS)
    def test_known_valid(self, value):
        assert cuil.is_valid(value) is True

    @pytest.mark.parametrize("value", VALID_CUILS)
    def test_check_digit_matches_vector(self, value):
        assert cuil.check_digit(value[:10]) == int(value[10])

    @pytest.mark.parametrize("value", VALID_CUILS)
    def test_any_other_trailing_digit_is_invalid(self, value):
        for d in "0123456789":
            if d != value[10]:
                assert cuil.is_valid(value[:10] + d) is False

    def test_sequential_body_vector(self):
        # 20123456789：Σ=148 → 期望 6，不是 9
        assert cuil.is_valid("20123456789") is False
        assert cuil.is_valid("20123456786") is True

    def test_remainder_ten_rejects_every_trailing_digit(self):
        assert cuil.check_digit(NO_CHECK_DIGIT_PREFIX) is None
        for d in "0123456789":
            assert cuil.is_valid(NO_CHECK_DIGIT_PREFIX + d) is False

    def test_remainder_eleven_maps_to_zero(self):
        assert cuil.check_digit("2000000006") == 0

    @pytest.mark.parametrize("value", [
        "",
        "2",
        "2017254359",            # 10 位
        "201725435977",          # 12 位
        "20-17254359-7",         # 带连字符：不是纯数字
        "2017254359a",
        " 20172543597",
        "20172543597\n",
    ])
    def test_wrong_shape_fails_closed(self, value):
        assert cuil.is_valid(value) is False

    def test_non_string_fails_closed(self):
        assert cuil.is_valid(20172543597) is False
        assert cuil.is_valid(None) is False

    @pytest.mark.parametrize("length", [n for n in range(0, 20) if n != 11])
    def test_every_other_length_is_invalid(self, length):
        assert cuil.is_valid(("20172543597" * 2)[:length]) is False

    def test_pure_function(self):
        for value in VALID_CUILS + ["20123456789"]:
            assert cuil.is_valid(value) == cuil.is_valid(value)


class TestIsValidFormatted:
    def test_accepts_formatted(self):
        assert cuil.is_valid_formatted("20-17254359-7") is True

    def test_accepts_bare_digits(self):
        assert cuil.is_valid_formatted("20172543597") is True

    def test_strips_surrounding_space(self):
        assert cuil.is_valid_formatted("  20-17254359-7 ") is True

    @pytest.mark.parametrize("value", ["20-1725435-97", "2017254359-7", "20 17254359 7", "", None])
    def test_other_shapes_rejected(self, value):
        assert cuil.is_valid_formatted(value) is False

    def test_bad_checksum_rejected(self):
        assert cuil.is_valid_formatted("20-12345678-3") is False


class TestMask:
    def test_keeps_last_four(self):
        assert cuil.mask("20-17254359-7") == "*******3597"

    def test_short_values_fully_masked(self):
        assert cuil.mask("123") == "***"
        assert cuil.mask("") == ""
