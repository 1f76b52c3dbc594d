"""文字定位模块.

坐标约定：画布单位为毫米，原点在左下角，y 轴向上（与 Canvas 一致）。
返回的 (x, y) 是文字框的左上角，文字框从 y 向下延伸 fitted.height。
"""

from __future__ import annotations

from infotext.core.text_fitter import FittedText
from infotext.models.template_config import TextAlign

CanvasSize = tuple[float, float]


def reference_width(fitted: FittedText, max_width: float) -> float:
    """对齐参考宽度：约束宽度与实测宽度中较大者."""
    return max(max_width, fitted.width)


def resolve_placement(
    canvas_size: CanvasSize,
    fitted: FittedText,
    anchor_x: float,
    anchor_y: float,
    align: TextAlign,
    max_width: float,
) -> tuple[float, float]:
    """计算文字框左上角坐标.

    水平方向按对齐方式以锚点为左边、中心或右边；
    垂直方向与对齐无关，始终以锚点为中心。不对画布边界做裁剪。

    Args:
        canvas_size: 画布尺寸 (宽, 高)
        fitted: 自动适配结果
        anchor_x: 锚点X（画布宽度比例）
        anchor_y: 锚点Y（画布高度比例，从底边起算）
        align: 水平对齐方式
        max_width: 字段约束宽度

    Returns:
        (x, y) 坐标
    """
    canvas_width, canvas_height = canvas_size
    ref_width = reference_width(fitted, max_width)
    anchor = canvas_width * anchor_x

    if align == TextAlign.CENTER:
        x = anchor - ref_width / 2
    elif align == TextAlign.RIGHT:
        x = anchor - ref_width
    else:
        x = anchor

    y = canvas_height * anchor_y + fitted.height / 2
    return x, y
