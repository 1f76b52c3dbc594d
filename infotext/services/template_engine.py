"""模板渲染引擎.

将变量值替换到模板字段中，自动适配字号后绘制到背景图上。

Features:
    - 按字段声明顺序绘制（后绘制的覆盖先绘制的）
    - 未提供的变量显示占位符本身
    - 每个字段绘制调试边框
    - 任一步骤失败则整个渲染失败，不产生输出文件
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from PIL import Image

from infotext.core.canvas import Canvas
from infotext.core.config_manager import get_config
from infotext.core.font_cache import FontCache, FontHandle
from infotext.core.placement import reference_width, resolve_placement
from infotext.core.text_fitter import FittedText, TextFitter
from infotext.models.render_options import RenderOptions
from infotext.models.template_config import FieldConfig, ImageTemplate, VariableValues
from infotext.utils.constants import MIN_FONT_SIZE
from infotext.utils.exceptions import FontSizeTooSmallError, InvalidConfigurationError
from infotext.utils.image_utils import load_image
from infotext.utils.logger import setup_logger

logger = setup_logger(__name__)


class TemplateEngine:
    """模板渲染引擎.

    Attributes:
        font_cache: 字体缓存（可在多次渲染间共享）
        options: 渲染选项

    Example:
        >>> engine = TemplateEngine()
        >>> engine.render_to_file(template, "/tmp/out.png", {"{n}": "501,784"})
    """

    def __init__(
        self,
        font_cache: Optional[FontCache] = None,
        options: Optional[RenderOptions] = None,
    ) -> None:
        """初始化渲染引擎.

        Args:
            font_cache: 字体缓存，默认新建
            options: 渲染选项，默认取自应用设置（INFOTEXT_* 环境变量 / .env）
        """
        self.font_cache = font_cache if font_cache is not None else FontCache()
        self.options = options if options is not None else get_config().render_options()

    def validate(self, template: ImageTemplate) -> None:
        """绘制前校验模板.

        Raises:
            InvalidConfigurationError: 模板无效
        """
        if not template.background_path:
            raise InvalidConfigurationError(f"模板 '{template.name}' 未指定背景图")

        for index, field in enumerate(template.fields):
            if field.font_size < MIN_FONT_SIZE:
                raise FontSizeTooSmallError(field.font_size, MIN_FONT_SIZE)
            if field.max_width <= 0 or field.max_height <= 0:
                raise InvalidConfigurationError(
                    f"字段 #{index} '{field.placeholder}' 的约束框尺寸无效: "
                    f"{field.max_width}x{field.max_height}"
                )

    def font_path_for(self, template: ImageTemplate) -> str:
        """模板使用的字体路径."""
        return template.font_path or self.options.default_font_path

    def render(self, template: ImageTemplate, values: VariableValues) -> Canvas:
        """渲染模板.

        Args:
            template: 模板配置
            values: 占位符 -> 文本

        Returns:
            绘制完成的画布

        Raises:
            InvalidConfigurationError: 模板配置无效
            ResourceLoadError: 背景图或字体无法加载
        """
        self.validate(template)

        font = self.font_cache.load(self.font_path_for(template))
        background = load_image(template.background_path)

        canvas = Canvas.from_background(
            background,
            self.options.mm_per_pixel,
            self.options.dots_per_mm,
        )
        logger.debug(
            f"渲染模板: {template.name}, 背景={background.size}, "
            f"画布={canvas.width:.2f}x{canvas.height:.2f}mm, 像素={canvas.pixel_size}"
        )

        fitter = TextFitter(font, canvas.dots_per_mm)
        for field in template.fields:
            self._render_field(canvas, fitter, font, field, template.resolve_text(field, values))

        logger.info(f"模板渲染完成: {template.name} ({template.field_count} 个字段)")
        return canvas

    def _render_field(
        self,
        canvas: Canvas,
        fitter: TextFitter,
        font: FontHandle,
        field: FieldConfig,
        text: str,
    ) -> FittedText:
        """渲染单个字段：适配 -> 定位 -> 调试边框 -> 文字."""
        fitted = fitter.fit(text, field.max_width, field.max_height, field.style)
        x, y = resolve_placement(
            canvas.size,
            fitted,
            field.relative_x,
            field.relative_y,
            field.align,
            field.max_width,
        )
        box_width = reference_width(fitted, field.max_width)

        canvas.stroke_rect(
            x,
            y,
            box_width,
            fitted.height,
            self.options.outline_color,
            self.options.outline_width,
        )
        canvas.draw_text(
            x,
            y,
            fitted,
            font,
            field.style.fill_color,
            field.align,
            box_width,
        )

        logger.debug(
            f"字段 {field.placeholder}: 文本={text!r}, 字号={fitted.font_size}pt, "
            f"位置=({x:.2f}, {y:.2f}), 尺寸={fitted.width:.2f}x{fitted.height:.2f}"
        )
        return fitted

    def render_image(self, template: ImageTemplate, values: VariableValues) -> Image.Image:
        """渲染模板并返回图像."""
        return self.render(template, values).to_image()

    def render_to_file(
        self,
        template: ImageTemplate,
        output_path: Path | str,
        values: VariableValues,
    ) -> Path:
        """渲染模板并写出 PNG.

        Raises:
            InvalidConfigurationError: 模板配置无效
            ResourceLoadError: 背景图或字体无法加载
            RenderWriteError: 输出写入失败
        """
        canvas = self.render(template, values)
        path = canvas.write_png(output_path)
        logger.info(f"已输出: {path}")
        return path


# ===================
# 便捷函数
# ===================


def render_template(
    template: ImageTemplate,
    output_path: Path | str,
    values: VariableValues,
    font_cache: Optional[FontCache] = None,
    options: Optional[RenderOptions] = None,
) -> Path:
    """渲染模板到文件（便捷函数）.

    Args:
        template: 模板配置
        output_path: 输出路径
        values: 占位符 -> 文本
        font_cache: 字体缓存
        options: 渲染选项，默认取自应用设置

    Returns:
        输出文件路径
    """
    engine = TemplateEngine(font_cache=font_cache, options=options)
    return engine.render_to_file(template, output_path, values)
