"""模板管理服务.

提供模板的持久化存储与预设模板。

Features:
    - 保存模板到本地文件（.template.json）
    - 按名称加载模板（先查用户模板，再查预设）
    - 模板列表与删除
    - 预设模板（每周确诊病例信息图）
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Optional

from infotext.core.config_manager import get_config
from infotext.models.template_config import FieldConfig, ImageTemplate, TextAlign
from infotext.utils.constants import TEMPLATE_EXTENSION
from infotext.utils.exceptions import AppException, InvalidConfigurationError
from infotext.utils.file_utils import ensure_directory, list_files
from infotext.utils.logger import setup_logger

logger = setup_logger(__name__)

_UNSAFE_CHARS = re.compile(r"[^\w\-]+")


# ===================
# 预设模板
# ===================

WEEKLY_TEMPLATE_NAME = "Confirmed (Weekly & Total)"


def create_preset_templates() -> list[ImageTemplate]:
    """创建预设模板集合."""
    weekly = ImageTemplate(
        name=WEEKLY_TEMPLATE_NAME,
        background_path="resources/images/Confirmed (Weekly & Total).png",
        fields=(
            FieldConfig.create(
                "{weekly new cases}",
                relative_x=0.5,
                relative_y=0.44,
                font_size=55,
                max_width=128,
                max_height=18,
                align=TextAlign.CENTER,
            ),
            FieldConfig.create(
                "{weekly total cases}",
                relative_x=0.5,
                relative_y=0.20,
                font_size=55,
                max_width=128,
                max_height=18,
                align=TextAlign.CENTER,
            ),
        ),
    )
    return [weekly]


def get_preset(name: str) -> Optional[ImageTemplate]:
    """按名称获取预设模板."""
    for preset in create_preset_templates():
        if preset.name == name:
            return preset
    return None


def template_filename(name: str) -> str:
    """模板名称 -> 文件名."""
    stem = _UNSAFE_CHARS.sub("_", name).strip("_") or "template"
    return f"{stem}{TEMPLATE_EXTENSION}"


# ===================
# 模板管理器
# ===================


class TemplateManager:
    """模板管理器.

    Example:
        >>> manager = TemplateManager("/tmp/templates")
        >>> manager.save_template(template)
        >>> loaded = manager.get_template(template.name)
    """

    def __init__(self, templates_dir: Optional[Path | str] = None) -> None:
        """初始化模板管理器.

        Args:
            templates_dir: 模板存储目录，默认取自应用设置的 templates_dir
        """
        if templates_dir is None:
            templates_dir = get_config().settings.resolved_templates_dir
        self._templates_dir = Path(templates_dir)
        self._presets = {p.name: p for p in create_preset_templates()}

    @property
    def templates_dir(self) -> Path:
        """模板目录."""
        return self._templates_dir

    def _get_template_path(self, name: str) -> Path:
        return self._templates_dir / template_filename(name)

    def is_preset(self, name: str) -> bool:
        """是否为预设模板名称."""
        return name in self._presets

    def save_template(self, template: ImageTemplate) -> Path:
        """保存模板.

        Returns:
            模板文件路径

        Raises:
            InvalidConfigurationError: 与预设模板重名
        """
        if self.is_preset(template.name):
            raise InvalidConfigurationError(f"预设模板不能被覆盖: {template.name}")

        ensure_directory(self._templates_dir)
        path = self._get_template_path(template.name)
        template.save_to_file(path)
        logger.info(f"模板已保存: {template.name} -> {path}")
        return path

    def load_template(self, name: str) -> Optional[ImageTemplate]:
        """加载用户模板.

        Returns:
            模板配置，不存在返回 None

        Raises:
            InvalidConfigurationError: 模板文件内容无效
        """
        path = self._get_template_path(name)
        if not path.exists():
            return None
        return ImageTemplate.from_file(path)

    def get_template(self, name: str) -> Optional[ImageTemplate]:
        """按名称获取模板（先查用户模板，再查预设）."""
        template = self.load_template(name)
        if template is not None:
            return template

        preset = self._presets.get(name)
        if preset is None:
            logger.warning(f"模板不存在: {name}")
        return preset

    def list_templates(self, include_presets: bool = True) -> list[str]:
        """列出模板名称.

        无法解析的模板文件会被跳过并记录日志。

        Args:
            include_presets: 是否包含预设模板

        Returns:
            模板名称列表（按名称排序）
        """
        names: set[str] = set()
        for path in list_files(self._templates_dir, TEMPLATE_EXTENSION):
            try:
                names.add(ImageTemplate.from_file(path).name)
            except AppException as e:
                logger.error(f"加载模板失败: {path}, 错误: {e}")

        if include_presets:
            names.update(self._presets)
        return sorted(names)

    def delete_template(self, name: str) -> bool:
        """删除用户模板.

        Returns:
            是否删除成功（预设模板不能删除）
        """
        if self.is_preset(name):
            logger.warning(f"不能删除预设模板: {name}")
            return False

        path = self._get_template_path(name)
        if not path.exists():
            return False

        path.unlink()
        logger.info(f"模板已删除: {name}")
        return True
