"""画布模块.

以毫米为单位、原点在左下角的绘图表面，内部由 Pillow RGBA 图像承载，
像素尺寸 = 物理尺寸 × 输出分辨率（每毫米点数）。

一个画布只属于一次渲染调用，不在并发渲染间共享。
"""

from __future__ import annotations

from pathlib import Path

from PIL import Image, ImageDraw

from infotext.core.font_cache import FontHandle
from infotext.core.text_fitter import FittedText
from infotext.models.template_config import RGBAColor, TextAlign
from infotext.utils.image_utils import ensure_rgba, save_png
from infotext.utils.logger import setup_logger

logger = setup_logger(__name__)


class Canvas:
    """绘图画布.

    Attributes:
        width: 宽度（毫米）
        height: 高度（毫米）
        dots_per_mm: 分辨率（每毫米点数）

    Example:
        >>> canvas = Canvas(100, 50, dots_per_mm=3.2)
        >>> canvas.pixel_size
        (320, 160)
    """

    def __init__(self, width: float, height: float, dots_per_mm: float) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"画布尺寸必须大于0: {width}x{height}")
        if dots_per_mm <= 0:
            raise ValueError(f"分辨率必须大于0: {dots_per_mm}")

        self.width = width
        self.height = height
        self.dots_per_mm = dots_per_mm
        pixel_size = (max(1, round(width * dots_per_mm)), max(1, round(height * dots_per_mm)))
        self._image = Image.new("RGBA", pixel_size, (0, 0, 0, 0))

    @classmethod
    def from_background(
        cls,
        background: Image.Image,
        mm_per_pixel: float,
        dots_per_mm: float,
    ) -> "Canvas":
        """按背景图尺寸创建画布并铺满背景.

        Args:
            background: 背景图
            mm_per_pixel: 像素到毫米的换算系数
            dots_per_mm: 输出分辨率

        Returns:
            Canvas 实例
        """
        canvas = cls(
            background.width * mm_per_pixel,
            background.height * mm_per_pixel,
            dots_per_mm,
        )
        canvas.draw_image(background)
        return canvas

    @property
    def size(self) -> tuple[float, float]:
        """画布尺寸（毫米）."""
        return (self.width, self.height)

    @property
    def pixel_size(self) -> tuple[int, int]:
        """画布像素尺寸."""
        return self._image.size

    def to_pixels(self, x: float, y: float) -> tuple[float, float]:
        """左下角原点毫米坐标 -> 左上角原点像素坐标."""
        return (x * self.dots_per_mm, (self.height - y) * self.dots_per_mm)

    def draw_image(self, image: Image.Image) -> None:
        """将图片拉伸铺满整个画布."""
        layer = ensure_rgba(image)
        if layer.size != self._image.size:
            layer = layer.resize(self._image.size, Image.Resampling.LANCZOS)
        self._image = Image.alpha_composite(self._image, layer)

    def stroke_rect(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        color: RGBAColor,
        stroke_width: float,
    ) -> None:
        """绘制矩形边框.

        Args:
            x: 左上角X（毫米）
            y: 左上角Y（毫米，矩形向下延伸）
            width: 宽度
            height: 高度
            color: 边框颜色
            stroke_width: 边框宽度（毫米）
        """
        left, top = self.to_pixels(x, y)
        right, bottom = self.to_pixels(x + width, y - height)
        line_width = max(1, round(stroke_width * self.dots_per_mm))

        temp = Image.new("RGBA", self._image.size, (0, 0, 0, 0))
        draw = ImageDraw.Draw(temp)
        draw.rectangle(
            (round(left), round(top), round(right), round(bottom)),
            outline=color,
            width=line_width,
        )
        self._image = Image.alpha_composite(self._image, temp)

    def draw_text(
        self,
        x: float,
        y: float,
        fitted: FittedText,
        font: FontHandle,
        color: RGBAColor,
        align: TextAlign,
        box_width: float,
    ) -> None:
        """在文字框内逐行绘制文字.

        Args:
            x: 文字框左上角X（毫米）
            y: 文字框左上角Y（毫米）
            fitted: 自动适配结果
            font: 字体句柄
            color: 文字颜色
            align: 水平对齐方式
            box_width: 文字框宽度，各行在其中对齐
        """
        if not fitted.lines:
            return

        face = font.face(fitted.size_px)
        temp = Image.new("RGBA", self._image.size, (0, 0, 0, 0))
        draw = ImageDraw.Draw(temp)

        for i, line in enumerate(fitted.lines):
            if not line:
                continue

            line_width = fitted.line_widths[i]
            if align == TextAlign.CENTER:
                line_x = x + (box_width - line_width) / 2
            elif align == TextAlign.RIGHT:
                line_x = x + box_width - line_width
            else:
                line_x = x

            line_top = y - i * fitted.line_pitch
            draw.text(self.to_pixels(line_x, line_top), line, font=face, fill=color)

        self._image = Image.alpha_composite(self._image, temp)

    def to_image(self) -> Image.Image:
        """返回画布图像副本."""
        return self._image.copy()

    def write_png(self, path: Path | str) -> Path:
        """以画布分辨率写出 PNG（原子写入）.

        Raises:
            RenderWriteError: 写入失败
        """
        return save_png(self._image, path, self.dots_per_mm)
