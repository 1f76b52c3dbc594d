"""文字自动适配单元测试."""

import logging

import pytest

from infotext.core.text_fitter import (
    FittedText,
    TextFitter,
    fit_text,
    layout_text,
    points_to_pixels,
    wrap_text,
)
from infotext.models.template_config import TextAlign, TextStyle
from infotext.utils.constants import MIN_FONT_SIZE
from infotext.utils.exceptions import FontSizeTooSmallError, InvalidConfigurationError

DPMM = 3.2


@pytest.fixture
def fitter(font_handle):
    """3.2 点/毫米分辨率的适配器."""
    return TextFitter(font_handle, DPMM)


@pytest.fixture
def style():
    return TextStyle(align=TextAlign.CENTER, font_size=40)


# ===================
# 换行与排版
# ===================


class TestWrapText:
    """wrap_text 测试."""

    def test_short_text_single_line(self, font_handle):
        """短文本不换行."""
        assert wrap_text("501,784", font_handle.face(20), 1000) == ["501,784"]

    def test_wraps_on_word_boundaries(self, font_handle):
        """超宽时按词换行."""
        face = font_handle.face(20)
        width = max(face.getlength("alpha beta"), face.getlength("gamma delta")) + 1
        assert wrap_text("alpha beta gamma delta", face, width) == ["alpha beta", "gamma delta"]

    def test_long_word_overflows_on_own_line(self, font_handle):
        """单词过长时独占一行."""
        face = font_handle.face(20)
        lines = wrap_text("a incomprehensibilities b", face, face.getlength("a") + 1)
        assert lines == ["a", "incomprehensibilities", "b"]

    def test_explicit_newlines(self, font_handle):
        """保留显式换行和空行."""
        assert wrap_text("a\n\nb", font_handle.face(20), 1000) == ["a", "", "b"]

    def test_empty_text(self, font_handle):
        """空文本得到一个空行."""
        assert wrap_text("", font_handle.face(20), 1000) == [""]


class TestLayoutText:
    """layout_text 测试."""

    def test_height_counts_lines(self, font_handle):
        """高度与行数成正比."""
        face = font_handle.face(20)
        one = layout_text("a", face, 1000)
        three = layout_text("a\nb\nc", face, 1000)
        assert three.height == one.height * 3
        assert one.line_height == sum(face.getmetrics())

    def test_width_is_widest_line(self, font_handle):
        """宽度取最宽一行."""
        face = font_handle.face(20)
        layout = layout_text("i\nwwwww", face, 1000)
        assert layout.width == max(layout.line_widths)
        assert layout.width == pytest.approx(face.getlength("wwwww"))


class TestPointsToPixels:
    """磅值换算测试."""

    def test_conversion(self):
        """72pt = 1 英寸 = 25.4mm."""
        assert points_to_pixels(72, 1.0) == 25

    def test_distinct_sizes_at_default_density(self):
        """默认分辨率下相邻字号得到不同像素大小."""
        sizes = [points_to_pixels(s, DPMM) for s in range(MIN_FONT_SIZE, 71)]
        assert sizes == sorted(sizes)
        assert len(set(sizes)) == len(sizes)


# ===================
# 自动适配
# ===================


class TestFitRange:
    """字号范围校验."""

    def test_below_minimum_raises(self, fitter, style):
        """最大字号为 9 时抛出配置错误."""
        with pytest.raises(InvalidConfigurationError):
            fitter.fit("x", 100, 20, style, max_font_size=9)

    def test_error_type(self, fitter, style):
        """错误类型携带字号信息."""
        with pytest.raises(FontSizeTooSmallError) as exc_info:
            fitter.fit("x", 100, 20, style, max_font_size=9)
        assert exc_info.value.font_size == 9
        assert exc_info.value.min_size == MIN_FONT_SIZE

    def test_minimum_is_inclusive(self, fitter, style):
        """最大字号为 10 时正常返回."""
        fitted = fitter.fit("x", 100, 1000, style, max_font_size=10)
        assert fitted.font_size == 10

    def test_defaults_to_style_font_size(self, fitter):
        """未指定时从样式字号开始."""
        fitted = fitter.fit("x", 1000, 1000, TextStyle(font_size=33))
        assert fitted.font_size == 33


class TestFitSearch:
    """字号搜索测试."""

    def test_returns_max_size_when_it_fits(self, fitter, style):
        """最大字号满足时直接返回."""
        assert fitter.fit("501,784", 200, 100, style).font_size == 40

    def test_result_height_below_limit(self, fitter, style):
        """返回结果高度严格小于最大高度."""
        fitted = fitter.fit("501,784", 100, 10, style)
        assert fitted.height < 10
        assert MIN_FONT_SIZE <= fitted.font_size <= 40

    def test_returns_largest_fitting_size(self, fitter, style):
        """返回的是满足条件的最大字号."""
        fitted = fitter.fit("501,784", 100, 10, style)
        if fitted.font_size < 40:
            larger = fitter.layout("501,784", fitted.font_size + 1, 100)
            assert larger.height >= 10

    def test_equal_height_counts_as_overflow(self, fitter, style):
        """高度恰好等于最大高度视为溢出."""
        exact = fitter.layout("501,784", 30, 100)
        fitted = fitter.fit("501,784", 100, exact.height, style, max_font_size=30)
        assert fitted.font_size < 30
        assert fitted.height < exact.height

    def test_best_effort_floor(self, fitter, style, caplog):
        """没有字号满足时返回 10pt 结果并记录警告."""
        with caplog.at_level(logging.WARNING, logger="infotext"):
            fitted = fitter.fit("501,784", 100, 0.5, style)
        assert fitted.font_size == MIN_FONT_SIZE
        assert fitted.height >= 0.5
        assert "超出高度限制" in caplog.text

    def test_deterministic(self, fitter, style):
        """相同输入得到相同结果."""
        a = fitter.fit("weekly total cases", 40, 12, style)
        b = fitter.fit("weekly total cases", 40, 12, style)
        assert a == b

    @pytest.mark.parametrize("text", ["1", "501,784", "new cases this week", "a much longer sentence that wraps several times"])
    @pytest.mark.parametrize("max_width", [20, 60, 150])
    def test_monotonic_fit(self, fitter, text, max_width):
        """某字号满足时，所有更小字号也满足."""
        heights = [fitter.layout(text, s, max_width).height for s in range(40, MIN_FONT_SIZE - 1, -1)]
        for limit in (8, 15, 30):
            fits = [h < limit for h in heights]
            if True in fits:
                first = fits.index(True)
                assert all(fits[first:])


class TestFittedText:
    """FittedText 测试."""

    def test_layout_fields(self, fitter):
        """排版结果换算为毫米."""
        fitted = fitter.layout("a\nb", 20, 100)
        assert isinstance(fitted, FittedText)
        assert fitted.line_count == 2
        assert fitted.size_px == points_to_pixels(20, DPMM)
        assert fitted.height == pytest.approx(fitted.line_pitch * 2)

    def test_fit_text_function(self, font_handle, style):
        """便捷函数与适配器结果一致."""
        expected = TextFitter(font_handle, DPMM).fit("42", 50, 10, style)
        assert fit_text("42", 50, 10, style, font_handle, DPMM) == expected

    def test_invalid_density(self, font_handle):
        """分辨率必须为正."""
        with pytest.raises(ValueError):
            TextFitter(font_handle, 0)
