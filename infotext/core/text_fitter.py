"""文字自动适配模块.

在给定的宽度内换行排版文字，并从最大字号开始逐级减小，
找到排版高度严格小于最大高度的最大字号。

Features:
    - 贪心按词换行（支持显式换行符）
    - 字号从大到小逐 1pt 搜索
    - 全部不满足时退回最小字号（可能溢出，仅记录警告）
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from PIL import ImageFont

from infotext.core.font_cache import FontHandle
from infotext.models.template_config import TextStyle
from infotext.utils.constants import LINE_SPACING, MIN_FONT_SIZE, MM_PER_POINT
from infotext.utils.exceptions import FontSizeTooSmallError
from infotext.utils.logger import setup_logger

logger = setup_logger(__name__)


@dataclass(frozen=True)
class TextLayout:
    """像素坐标下的排版结果."""

    lines: tuple[str, ...]
    line_widths: tuple[float, ...]
    line_height: int
    width: float
    height: int


@dataclass(frozen=True)
class FittedText:
    """自动适配结果（画布单位：毫米）.

    Attributes:
        font_size: 选中的字号（磅）
        width: 实测宽度（最宽一行）
        height: 实测高度
        size_px: 排版时使用的像素字号
        lines: 换行后的各行文字
        line_widths: 各行宽度
        line_pitch: 行距（相邻两行顶部的距离）
    """

    font_size: int
    width: float
    height: float
    size_px: int = 0
    lines: tuple[str, ...] = ()
    line_widths: tuple[float, ...] = ()
    line_pitch: float = 0.0

    @property
    def line_count(self) -> int:
        return len(self.lines)


def points_to_pixels(size_pt: int, dots_per_mm: float) -> int:
    """磅值转换为像素字号."""
    return max(1, round(size_pt * MM_PER_POINT * dots_per_mm))


def wrap_text(text: str, font: ImageFont.FreeTypeFont, max_width_px: float) -> list[str]:
    """按词贪心换行.

    单个词超过最大宽度时独占一行（溢出），不做断词。

    Args:
        text: 原始文字
        font: 字体
        max_width_px: 最大行宽（像素）

    Returns:
        行列表（至少包含一行）
    """
    lines: list[str] = []
    for paragraph in text.split("\n"):
        words = paragraph.split()
        if not words:
            lines.append("")
            continue

        current = words[0]
        for word in words[1:]:
            candidate = f"{current} {word}"
            if font.getlength(candidate) <= max_width_px:
                current = candidate
            else:
                lines.append(current)
                current = word
        lines.append(current)
    return lines


def layout_text(text: str, font: ImageFont.FreeTypeFont, max_width_px: float) -> TextLayout:
    """排版文字并测量外框.

    行高取字体 ascent + descent，与具体字符无关，保证同一字号下高度稳定。

    Args:
        text: 原始文字
        font: 字体
        max_width_px: 最大行宽（像素）

    Returns:
        TextLayout 排版结果
    """
    lines = wrap_text(text, font, max_width_px)
    widths = tuple(font.getlength(line) for line in lines)
    ascent, descent = font.getmetrics()
    line_height = ascent + descent
    height = line_height * len(lines) + LINE_SPACING * (len(lines) - 1)
    return TextLayout(
        lines=tuple(lines),
        line_widths=widths,
        line_height=line_height,
        width=max(widths, default=0.0),
        height=height,
    )


class TextFitter:
    """文字自动适配器.

    Attributes:
        font: 字体句柄
        dots_per_mm: 排版分辨率（与画布输出分辨率一致，测量结果与绘制结果逐像素一致）

    Example:
        >>> fitter = TextFitter(cache.load("fonts/nunito.ttf"), dots_per_mm=3.2)
        >>> fitted = fitter.fit("501,784", 100, 20, TextStyle(font_size=40))
        >>> fitted.height < 20
        True
    """

    def __init__(self, font: FontHandle, dots_per_mm: float) -> None:
        if dots_per_mm <= 0:
            raise ValueError(f"分辨率必须大于0: {dots_per_mm}")
        self.font = font
        self.dots_per_mm = dots_per_mm

    def layout(self, text: str, size_pt: int, max_width: float) -> FittedText:
        """按指定字号排版（不做适配）.

        Args:
            text: 文字
            size_pt: 字号（磅）
            max_width: 最大宽度（毫米）

        Returns:
            FittedText 排版结果
        """
        size_px = points_to_pixels(size_pt, self.dots_per_mm)
        face = self.font.face(size_px)
        result = layout_text(text, face, max_width * self.dots_per_mm)
        scale = 1.0 / self.dots_per_mm
        return FittedText(
            font_size=size_pt,
            width=result.width * scale,
            height=result.height * scale,
            size_px=size_px,
            lines=result.lines,
            line_widths=tuple(w * scale for w in result.line_widths),
            line_pitch=(result.line_height + LINE_SPACING) * scale,
        )

    def fit(
        self,
        text: str,
        max_width: float,
        max_height: float,
        style: TextStyle,
        max_font_size: Optional[int] = None,
    ) -> FittedText:
        """寻找高度严格小于 max_height 的最大字号.

        Args:
            text: 文字
            max_width: 最大宽度（毫米），用于换行
            max_height: 最大高度（毫米）
            style: 文字样式
            max_font_size: 起始（最大）字号，默认取 style.font_size

        Returns:
            FittedText 适配结果；没有字号满足时返回最小字号的排版

        Raises:
            FontSizeTooSmallError: 最大字号小于最小字号
        """
        start = style.font_size if max_font_size is None else max_font_size
        if start < MIN_FONT_SIZE:
            raise FontSizeTooSmallError(start, MIN_FONT_SIZE)

        fitted: Optional[FittedText] = None
        for size_pt in range(start, MIN_FONT_SIZE - 1, -1):
            fitted = self.layout(text, size_pt, max_width)
            if fitted.height < max_height:
                return fitted

        logger.warning(
            f"文字在最小字号 {MIN_FONT_SIZE}pt 下仍超出高度限制: "
            f"{text!r} 高度 {fitted.height:.2f} >= {max_height:.2f}"
        )
        return fitted


def fit_text(
    text: str,
    max_width: float,
    max_height: float,
    style: TextStyle,
    font: FontHandle,
    dots_per_mm: float,
    max_font_size: Optional[int] = None,
) -> FittedText:
    """自动适配文字（便捷函数）."""
    return TextFitter(font, dots_per_mm).fit(text, max_width, max_height, style, max_font_size)
