"""数据模型模块."""

from infotext.models.app_settings import Settings
from infotext.models.render_options import RenderOptions
from infotext.models.template_config import (
    # 类型
    RGBAColor,
    VariableValues,
    # 枚举
    TextAlign,
    # 模型
    TextStyle,
    FieldConfig,
    ImageTemplate,
    # 辅助函数
    validate_rgba_color,
)

__all__ = [
    # 类型
    "RGBAColor",
    "VariableValues",
    # 枚举
    "TextAlign",
    # 模型
    "TextStyle",
    "FieldConfig",
    "ImageTemplate",
    "RenderOptions",
    "Settings",
    # 辅助函数
    "validate_rgba_color",
]
