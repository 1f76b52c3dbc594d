"""字体缓存模块.

每个字体文件只从磁盘读取一次，之后复用同一个字体句柄。

缓存由调用方持有（通常随模板引擎或一次渲染会话存在），而不是进程级全局变量。

已知竞态：多个线程同时首次加载同一路径时，可能各自读取一次文件；
``insert`` 采用先到先得，缓存最终收敛到同一个句柄。
"""

from __future__ import annotations

from functools import lru_cache
from io import BytesIO
from pathlib import Path
from typing import Optional

from PIL import ImageFont

from infotext.utils.constants import SUPPORTED_FONT_FORMATS
from infotext.utils.exceptions import FontLoadError
from infotext.utils.logger import setup_logger

logger = setup_logger(__name__)

# 加载时用于校验字体的像素大小
_PROBE_SIZE = 12


class FontHandle:
    """已加载的字体资源.

    持有字体文件的原始字节，按需生成任意像素大小的 FreeTypeFont。
    创建后不可变，可在线程间共享读取。

    Attributes:
        path: 字体文件路径
    """

    __slots__ = ("_path", "_data", "_face")

    def __init__(self, path: str, data: bytes) -> None:
        self._path = path
        self._data = data
        self._face = lru_cache(maxsize=128)(self._create_face)

    @property
    def path(self) -> str:
        return self._path

    @property
    def size_bytes(self) -> int:
        return len(self._data)

    def face(self, size_px: int) -> ImageFont.FreeTypeFont:
        """获取指定像素大小的字体对象.

        Args:
            size_px: 字体像素大小（至少为 1）

        Returns:
            FreeTypeFont 对象
        """
        return self._face(max(1, int(size_px)))

    def _create_face(self, size_px: int) -> ImageFont.FreeTypeFont:
        return ImageFont.truetype(BytesIO(self._data), size_px)

    def __repr__(self) -> str:
        return f"FontHandle(path={self._path!r})"


def read_font(path: str) -> FontHandle:
    """从磁盘读取并校验字体文件.

    Args:
        path: 字体文件路径

    Returns:
        FontHandle 实例

    Raises:
        FontLoadError: 文件不存在、格式不支持、不可读或不是有效字体
    """
    font_path = Path(path)
    if not font_path.is_file():
        raise FontLoadError(path, "文件不存在")
    if font_path.suffix.lower() not in SUPPORTED_FONT_FORMATS:
        raise FontLoadError(path, f"不支持的字体格式: {font_path.suffix}")

    try:
        data = font_path.read_bytes()
    except OSError as e:
        raise FontLoadError(path, str(e)) from e

    handle = FontHandle(path, data)
    try:
        handle.face(_PROBE_SIZE)
    except OSError as e:
        raise FontLoadError(path, f"不是有效的字体文件: {e}") from e

    logger.debug(f"字体已加载: {path} ({handle.size_bytes} 字节)")
    return handle


class FontCache:
    """字体缓存.

    以路径字符串为键（不做规范化），不淘汰，生命周期与持有者相同。

    Example:
        >>> cache = FontCache()
        >>> a = cache.load("fonts/nunito.ttf")
        >>> b = cache.load("fonts/nunito.ttf")
        >>> a is b
        True
    """

    def __init__(self) -> None:
        self._fonts: dict[str, FontHandle] = {}

    def lookup(self, path: str | Path) -> Optional[FontHandle]:
        """查找已缓存的字体，未命中返回 None."""
        return self._fonts.get(str(path))

    def insert(self, path: str | Path, handle: FontHandle) -> FontHandle:
        """写入缓存.

        路径已存在时保留原句柄并返回它。

        Returns:
            缓存中的句柄
        """
        return self._fonts.setdefault(str(path), handle)

    def load(self, path: str | Path) -> FontHandle:
        """加载字体（命中缓存时直接返回）.

        Raises:
            FontLoadError: 字体无法加载
        """
        key = str(path)
        cached = self.lookup(key)
        if cached is not None:
            return cached
        return self.insert(key, read_font(key))

    def clear(self) -> None:
        """清空缓存."""
        self._fonts.clear()

    def __contains__(self, path: object) -> bool:
        return str(path) in self._fonts

    def __len__(self) -> int:
        return len(self._fonts)
