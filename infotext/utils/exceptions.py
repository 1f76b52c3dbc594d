"""自定义异常类."""

from __future__ import annotations


class AppException(Exception):
    """应用基础异常类.

    所有自定义异常都应继承此类。

    Attributes:
        message: 错误消息
        code: 错误代码
    """

    def __init__(self, message: str, code: str = "UNKNOWN") -> None:
        """初始化异常.

        Args:
            message: 错误消息
            code: 错误代码
        """
        self.message = message
        self.code = code
        super().__init__(self.message)

    def __str__(self) -> str:
        """返回异常字符串表示."""
        return f"[{self.code}] {self.message}"


# ===================
# 资源加载异常
# ===================
class ResourceLoadError(AppException):
    """资源（背景图、字体）无法读取或已损坏."""

    def __init__(self, message: str, path: str = "") -> None:
        self.path = path
        super().__init__(message, "RESOURCE_LOAD_ERROR")


class FontLoadError(ResourceLoadError):
    """字体加载失败异常."""

    def __init__(self, path: str, reason: str = "") -> None:
        msg = f"无法加载字体: {path}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg, path)


class BackgroundImageError(ResourceLoadError):
    """背景图加载失败异常."""

    def __init__(self, path: str, reason: str = "") -> None:
        msg = f"无法加载背景图: {path}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg, path)


# ===================
# 配置异常
# ===================
class InvalidConfigurationError(AppException):
    """模板或字段配置无效异常."""

    def __init__(self, message: str) -> None:
        super().__init__(message, "INVALID_CONFIGURATION")


class FontSizeTooSmallError(InvalidConfigurationError):
    """字号低于允许的最小值."""

    def __init__(self, font_size: int, min_size: int) -> None:
        self.font_size = font_size
        self.min_size = min_size
        super().__init__(f"字号不能小于 {min_size}pt: {font_size}")


# ===================
# 输出异常
# ===================
class RenderWriteError(AppException):
    """渲染结果编码或写入失败异常."""

    def __init__(self, path: str, reason: str = "") -> None:
        self.path = path
        msg = f"无法写入输出文件: {path}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg, "RENDER_WRITE_ERROR")
