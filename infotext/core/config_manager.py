"""配置管理器模块."""

from __future__ import annotations

from typing import Optional

from pydantic import ValidationError

from infotext.models.app_settings import Settings
from infotext.models.render_options import RenderOptions
from infotext.utils.exceptions import InvalidConfigurationError
from infotext.utils.logger import enable_file_logging, set_log_level, setup_logger

logger = setup_logger(__name__)


class ConfigManager:
    """配置管理器.

    负责从环境变量和 .env 文件加载应用设置，并据此配置日志。
    模板引擎只接收由此生成的 RenderOptions，不直接读取环境。

    Attributes:
        settings: 应用设置
    """

    _instance: Optional["ConfigManager"] = None

    def __new__(cls) -> "ConfigManager":
        """单例模式."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self) -> None:
        """初始化配置管理器."""
        if self._initialized:
            return

        self._settings: Optional[Settings] = None
        self._initialized = True

        logger.debug("配置管理器初始化完成")

    @property
    def settings(self) -> Settings:
        """获取应用设置."""
        if self._settings is None:
            self._settings = self._load_settings()
        return self._settings

    def _load_settings(self) -> Settings:
        """加载应用设置并应用日志配置.

        Returns:
            Settings 实例

        Raises:
            InvalidConfigurationError: 设置值无效
        """
        try:
            settings = Settings()
        except ValidationError as e:
            logger.error(f"加载应用设置失败: {e}")
            raise InvalidConfigurationError(f"加载应用设置失败: {e}") from e

        set_log_level(settings.log_level)
        if settings.log_to_file:
            enable_file_logging(settings.resolved_log_dir)

        logger.debug(
            f"应用设置加载完成: log_level={settings.log_level}, "
            f"dots_per_mm={settings.dots_per_mm}"
        )
        return settings

    def render_options(self) -> RenderOptions:
        """获取渲染选项."""
        return self.settings.to_render_options()

    def reload(self) -> None:
        """重新加载配置."""
        self._settings = None
        logger.info("配置已重新加载")


def get_config() -> ConfigManager:
    """获取配置管理器实例.

    Returns:
        ConfigManager 单例实例
    """
    return ConfigManager()
