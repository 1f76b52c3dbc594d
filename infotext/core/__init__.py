"""核心排版与绘制模块."""

from infotext.core.canvas import Canvas
from infotext.core.font_cache import FontCache, FontHandle, read_font
from infotext.core.placement import reference_width, resolve_placement
from infotext.core.text_fitter import (
    FittedText,
    TextFitter,
    TextLayout,
    fit_text,
    layout_text,
    wrap_text,
)

__all__ = [
    # 画布
    "Canvas",
    # 字体缓存
    "FontCache",
    "FontHandle",
    "read_font",
    # 定位
    "reference_width",
    "resolve_placement",
    # 自动适配
    "FittedText",
    "TextFitter",
    "TextLayout",
    "fit_text",
    "layout_text",
    "wrap_text",
]
