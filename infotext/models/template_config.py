"""模板与字段数据模型.

描述一张模板背景图及其上可替换的文字字段。

Features:
    - 文字样式（颜色、对齐、最大字号）
    - 字段配置（占位符、相对锚点、约束框）
    - 模板配置（背景图、字段顺序即绘制顺序）
    - JSON序列化/反序列化
"""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from infotext.utils.constants import (
    DEFAULT_MAX_FONT_SIZE,
    DEFAULT_TEXT_COLOR,
    MIN_FONT_SIZE,
)
from infotext.utils.exceptions import InvalidConfigurationError, ResourceLoadError


# ===================
# 类型别名
# ===================

RGBAColor = tuple[int, int, int, int]

# 占位符 -> 替换文本
VariableValues = Mapping[str, str]


# ===================
# 枚举定义
# ===================


class TextAlign(str, Enum):
    """文字水平对齐方式."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


# ===================
# 辅助函数
# ===================


def validate_rgba_color(color: RGBAColor) -> RGBAColor:
    """验证RGBA颜色值.

    Args:
        color: RGBA颜色元组

    Returns:
        验证后的颜色元组

    Raises:
        ValueError: 颜色值不在有效范围内
    """
    if len(color) != 4:
        raise ValueError(f"RGBA颜色必须包含4个值，实际: {len(color)}")
    for i, v in enumerate(color):
        if not 0 <= v <= 255:
            raise ValueError(f"颜色值必须在0-255之间，索引{i}的值: {v}")
    return color


def _format_validation_error(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        loc = ".".join(str(p) for p in item.get("loc", ()))
        parts.append(f"{loc}: {item.get('msg', '')}" if loc else item.get("msg", ""))
    return "; ".join(parts)


# ===================
# 文字样式
# ===================


class TextStyle(BaseModel):
    """文字样式.

    Attributes:
        fill_color: 填充颜色 (RGBA)
        align: 水平对齐方式
        font_size: 最大字号（磅），自动适配时从该字号开始向下搜索

    Example:
        >>> style = TextStyle(align=TextAlign.CENTER, font_size=55)
        >>> style.fill_color
        (0, 0, 0, 255)
    """

    model_config = ConfigDict(frozen=True, use_enum_values=False)

    fill_color: RGBAColor = Field(default=DEFAULT_TEXT_COLOR, description="填充颜色")
    align: TextAlign = Field(default=TextAlign.LEFT, description="对齐方式")
    font_size: int = Field(default=DEFAULT_MAX_FONT_SIZE, description="最大字号")

    @field_validator("fill_color")
    @classmethod
    def validate_color(cls, v: RGBAColor) -> RGBAColor:
        """验证颜色值."""
        return validate_rgba_color(v)


# ===================
# 字段配置
# ===================


class FieldConfig(BaseModel):
    """模板上的一个可替换文字字段.

    锚点为画布宽高的比例（0-1），约束框尺寸为画布单位（毫米）。
    锚点 y 从画布底边向上计算。

    Attributes:
        placeholder: 占位符标识，如 "{weekly new cases}"
        relative_x: 锚点X（画布宽度比例）
        relative_y: 锚点Y（画布高度比例）
        max_width: 最大宽度（毫米），文字按此宽度换行
        max_height: 最大高度（毫米），文字高度必须严格小于该值
        style: 文字样式
    """

    model_config = ConfigDict(frozen=True)

    placeholder: str = Field(min_length=1, description="占位符")
    relative_x: float = Field(ge=0.0, le=1.0, description="锚点X比例")
    relative_y: float = Field(ge=0.0, le=1.0, description="锚点Y比例")
    max_width: float = Field(gt=0, description="最大宽度")
    max_height: float = Field(gt=0, description="最大高度")
    style: TextStyle = Field(default_factory=TextStyle, description="文字样式")

    def __init__(self, **data: Any) -> None:
        """构造字段.

        Raises:
            InvalidConfigurationError: 参数无效
        """
        try:
            super().__init__(**data)
        except ValidationError as e:
            raise InvalidConfigurationError(
                f"字段 '{data.get('placeholder', '')}' 配置无效: {_format_validation_error(e)}"
            ) from e

    @field_validator("style")
    @classmethod
    def validate_font_size(cls, v: TextStyle) -> TextStyle:
        """最大字号不能低于最小字号."""
        if v.font_size < MIN_FONT_SIZE:
            raise ValueError(f"字号不能小于 {MIN_FONT_SIZE}pt: {v.font_size}")
        return v

    @property
    def font_size(self) -> int:
        """最大字号."""
        return self.style.font_size

    @property
    def align(self) -> TextAlign:
        """对齐方式."""
        return self.style.align

    @classmethod
    def create(
        cls,
        placeholder: str,
        relative_x: float,
        relative_y: float,
        font_size: int = DEFAULT_MAX_FONT_SIZE,
        max_width: float = 100.0,
        max_height: float = 20.0,
        align: TextAlign = TextAlign.LEFT,
        color: RGBAColor = DEFAULT_TEXT_COLOR,
    ) -> "FieldConfig":
        """快速创建字段.

        Raises:
            InvalidConfigurationError: 参数无效
        """
        try:
            return cls(
                placeholder=placeholder,
                relative_x=relative_x,
                relative_y=relative_y,
                max_width=max_width,
                max_height=max_height,
                style=TextStyle(fill_color=color, align=align, font_size=font_size),
            )
        except ValidationError as e:
            raise InvalidConfigurationError(
                f"字段 '{placeholder}' 配置无效: {_format_validation_error(e)}"
            ) from e


# ===================
# 模板配置
# ===================


class ImageTemplate(BaseModel):
    """模板配置.

    一张背景图加上有序的字段列表，字段顺序即绘制顺序（后绘制的覆盖先绘制的）。

    Attributes:
        name: 模板名称
        background_path: 背景图路径
        fields: 字段列表
        font_path: 字体路径，为空时使用渲染选项中的默认字体

    Example:
        >>> template = ImageTemplate(
        ...     name="weekly",
        ...     background_path="resources/images/weekly.png",
        ...     fields=(FieldConfig.create("{n}", 0.5, 0.5),),
        ... )
        >>> template.field_count
        1
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="未命名模板", min_length=1, max_length=100, description="模板名称")
    background_path: str = Field(min_length=1, description="背景图路径")
    fields: tuple[FieldConfig, ...] = Field(default=(), description="字段列表")
    font_path: Optional[str] = Field(default=None, description="字体路径")

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as e:
            raise InvalidConfigurationError(f"模板配置无效: {_format_validation_error(e)}") from e

    @property
    def field_count(self) -> int:
        """字段数量."""
        return len(self.fields)

    @property
    def placeholders(self) -> list[str]:
        """按绘制顺序返回所有占位符."""
        return [f.placeholder for f in self.fields]

    def resolve_text(self, field: FieldConfig, values: VariableValues) -> str:
        """解析字段文本：有值则替换，否则显示占位符本身."""
        return values.get(field.placeholder, field.placeholder)

    def to_json(self, indent: int = 2) -> str:
        """序列化为JSON字符串.

        Args:
            indent: 缩进空格数

        Returns:
            JSON字符串
        """
        return json.dumps(self.model_dump(mode="json"), ensure_ascii=False, indent=indent)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ImageTemplate":
        """从字典创建模板.

        Raises:
            InvalidConfigurationError: 数据不符合模板结构
        """
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise InvalidConfigurationError(f"模板配置无效: {_format_validation_error(e)}") from e

    @classmethod
    def from_json(cls, json_str: str) -> "ImageTemplate":
        """从JSON字符串反序列化.

        Raises:
            InvalidConfigurationError: JSON 格式错误或数据无效
        """
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise InvalidConfigurationError(f"模板 JSON 格式错误: {e}") from e
        if not isinstance(data, dict):
            raise InvalidConfigurationError("模板 JSON 顶层必须是对象")
        return cls.from_dict(data)

    @classmethod
    def from_file(cls, file_path: Path | str) -> "ImageTemplate":
        """从文件加载模板.

        Raises:
            ResourceLoadError: 文件无法读取
            InvalidConfigurationError: 内容无效
        """
        try:
            content = Path(file_path).read_text(encoding="utf-8")
        except OSError as e:
            raise ResourceLoadError(f"无法读取模板文件: {file_path} ({e})", str(file_path)) from e
        return cls.from_json(content)

    def save_to_file(self, file_path: Path | str) -> None:
        """保存模板到文件.

        Args:
            file_path: 文件路径
        """
        Path(file_path).write_text(self.to_json(), encoding="utf-8")
