"""渲染选项模型."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from infotext.models.template_config import RGBAColor, validate_rgba_color
from infotext.utils.constants import (
    DEBUG_OUTLINE_COLOR,
    DEBUG_OUTLINE_WIDTH,
    DEFAULT_DOTS_PER_MM,
    DEFAULT_FONT_PATH,
    MM_PER_PIXEL,
)


class RenderOptions(BaseModel):
    """模板引擎的渲染选项.

    由调用方显式传入，引擎本身不读取环境变量。

    Attributes:
        mm_per_pixel: 背景图像素到画布毫米的换算系数
        dots_per_mm: 输出分辨率（每毫米点数）
        default_font_path: 模板未指定字体时使用的字体
        outline_color: 调试边框颜色
        outline_width: 调试边框宽度（毫米）
    """

    model_config = ConfigDict(frozen=True)

    mm_per_pixel: float = Field(default=MM_PER_PIXEL, gt=0, description="像素换算系数")
    dots_per_mm: float = Field(default=DEFAULT_DOTS_PER_MM, gt=0, description="输出分辨率")
    default_font_path: str = Field(default=DEFAULT_FONT_PATH, min_length=1, description="默认字体")
    outline_color: RGBAColor = Field(default=DEBUG_OUTLINE_COLOR, description="调试边框颜色")
    outline_width: float = Field(default=DEBUG_OUTLINE_WIDTH, gt=0, description="调试边框宽度")

    @field_validator("outline_color")
    @classmethod
    def validate_color(cls, v: RGBAColor) -> RGBAColor:
        """验证颜色值."""
        return validate_rgba_color(v)

    @property
    def output_scale(self) -> float:
        """背景图像素到输出像素的缩放比例."""
        return self.mm_per_pixel * self.dots_per_mm
