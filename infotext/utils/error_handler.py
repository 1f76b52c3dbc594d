"""错误处理工具模块.

提供统一的错误处理机制和用户友好的错误消息。
"""

from __future__ import annotations

from typing import Any

from infotext.utils.exceptions import (
    AppException,
    BackgroundImageError,
    FontLoadError,
    InvalidConfigurationError,
    RenderWriteError,
    ResourceLoadError,
)
from infotext.utils.logger import setup_logger

logger = setup_logger(__name__)


# 错误消息映射（子类在前）
ERROR_MESSAGES = {
    FontLoadError: "字体文件无法读取，请检查字体路径",
    BackgroundImageError: "背景图无法读取，请检查模板的背景图路径",
    ResourceLoadError: "资源文件无法读取",
    InvalidConfigurationError: "模板配置无效，请检查字段设置",
    RenderWriteError: "输出文件写入失败，请检查输出目录权限",
}


def get_user_friendly_message(exception: Exception) -> str:
    """获取用户友好的错误消息.

    Args:
        exception: 异常对象

    Returns:
        用户友好的错误消息
    """
    for exc_type, message in ERROR_MESSAGES.items():
        if isinstance(exception, exc_type):
            return message

    if isinstance(exception, AppException):
        return exception.message

    return "渲染失败，请稍后重试"


def get_error_details(exception: Exception) -> dict[str, Any]:
    """获取错误详细信息.

    Args:
        exception: 异常对象

    Returns:
        包含错误详情的字典
    """
    details = {
        "type": type(exception).__name__,
        "message": str(exception),
        "user_message": get_user_friendly_message(exception),
    }

    if isinstance(exception, AppException):
        details["code"] = exception.code

    path = getattr(exception, "path", None)
    if path:
        details["path"] = path

    return details


class ErrorCollector:
    """错误收集器.

    用于批量渲染时收集所有错误。

    Example:
        >>> collector = ErrorCollector()
        >>> for job in jobs:
        ...     try:
        ...         render(job)
        ...     except AppException as e:
        ...         collector.add(e, context=f"渲染 {job.output_path}")
        >>> if collector.has_errors:
        ...     print(collector.summary)
    """

    def __init__(self) -> None:
        self._errors: list[tuple[Exception, str]] = []

    def add(self, exception: Exception, context: str = "") -> None:
        """添加错误.

        Args:
            exception: 异常对象
            context: 上下文描述
        """
        self._errors.append((exception, context))
        logger.debug(f"收集错误: {context}: {exception}")

    @property
    def has_errors(self) -> bool:
        """是否有错误."""
        return bool(self._errors)

    @property
    def count(self) -> int:
        """错误数量."""
        return len(self._errors)

    @property
    def errors(self) -> list[tuple[Exception, str]]:
        """错误列表副本."""
        return list(self._errors)

    @property
    def summary(self) -> str:
        """错误摘要."""
        if not self._errors:
            return "无错误"

        lines = [f"共 {len(self._errors)} 个错误:"]
        for i, (exc, context) in enumerate(self._errors, 1):
            if context:
                lines.append(f"  {i}. {context}: {get_user_friendly_message(exc)}")
            else:
                lines.append(f"  {i}. {get_user_friendly_message(exc)}")
        return "\n".join(lines)

    def clear(self) -> None:
        """清空错误."""
        self._errors.clear()
