"""应用设置模型."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from infotext.models.render_options import RenderOptions
from infotext.utils.constants import (
    DEFAULT_DOTS_PER_MM,
    DEFAULT_FONT_PATH,
    LOG_DIR,
    MM_PER_PIXEL,
    TEMPLATES_DIR,
)


class Settings(BaseSettings):
    """应用设置.

    支持从环境变量（前缀 INFOTEXT_）和 .env 文件加载配置。

    Attributes:
        log_level: 日志级别
        log_to_file: 是否写入日志文件
        log_dir: 日志目录
        mm_per_pixel: 背景图像素到画布毫米的换算系数
        dots_per_mm: 输出分辨率（每毫米点数）
        default_font_path: 默认字体路径
        templates_dir: 模板存储目录
    """

    model_config = SettingsConfigDict(
        env_prefix="INFOTEXT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = Field(
        default="INFO",
        description="日志级别",
    )

    log_to_file: bool = Field(
        default=False,
        description="写入日志文件",
    )

    log_dir: Optional[Path] = Field(
        default=None,
        description="日志目录",
    )

    mm_per_pixel: float = Field(
        default=MM_PER_PIXEL,
        gt=0,
        description="像素换算系数",
    )

    dots_per_mm: float = Field(
        default=DEFAULT_DOTS_PER_MM,
        gt=0,
        le=100,
        description="输出分辨率",
    )

    default_font_path: str = Field(
        default=DEFAULT_FONT_PATH,
        description="默认字体路径",
    )

    templates_dir: Optional[Path] = Field(
        default=None,
        description="模板存储目录",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """验证日志级别."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_v = v.upper()
        if upper_v not in valid_levels:
            raise ValueError(f"无效的日志级别: {v}，有效值: {valid_levels}")
        return upper_v

    @property
    def resolved_log_dir(self) -> Path:
        """获取日志目录."""
        return self.log_dir or LOG_DIR

    @property
    def resolved_templates_dir(self) -> Path:
        """获取模板目录."""
        return self.templates_dir or TEMPLATES_DIR

    def to_render_options(self) -> RenderOptions:
        """转换为模板引擎使用的渲染选项."""
        return RenderOptions(
            mm_per_pixel=self.mm_per_pixel,
            dots_per_mm=self.dots_per_mm,
            default_font_path=self.default_font_path,
        )
