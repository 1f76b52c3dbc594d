"""文件工具函数模块.

提供目录、临时文件和原子写入相关的工具函数。
"""

from __future__ import annotations

import os
import stat
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from infotext.utils.logger import setup_logger

logger = setup_logger(__name__)


def ensure_directory(path: Path) -> Path:
    """确保目录存在.

    Args:
        path: 目录路径

    Returns:
        目录路径
    """
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_file_extension(path: Path | str) -> str:
    """获取文件扩展名（小写）.

    Args:
        path: 文件路径

    Returns:
        小写扩展名（含点号）
    """
    return Path(path).suffix.lower()


def _output_mode(target: Path) -> int:
    """输出文件权限：沿用已有文件的权限，否则按当前 umask 计算."""
    if target.exists():
        return stat.S_IMODE(target.stat().st_mode)
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


@contextmanager
def atomic_output(path: Path | str, suffix: str = "") -> Generator[Path, None, None]:
    """原子写入上下文管理器.

    在目标目录中创建临时文件供调用方写入，正常退出时替换到目标路径；
    发生异常时删除临时文件，目标路径保持不变。

    Args:
        path: 最终输出路径
        suffix: 临时文件后缀

    Yields:
        临时文件路径
    """
    target = Path(path)
    ensure_directory(target.parent)
    fd, temp_name = tempfile.mkstemp(
        suffix=suffix or target.suffix,
        prefix=f".{target.stem}_",
        dir=target.parent,
    )
    os.close(fd)
    temp_path = Path(temp_name)
    try:
        yield temp_path
        # mkstemp 固定创建 0600 文件，替换前恢复正常权限
        os.chmod(temp_path, _output_mode(target))
        os.replace(temp_path, target)
    finally:
        if temp_path.exists():
            try:
                temp_path.unlink()
            except OSError as e:
                logger.warning(f"删除临时文件失败: {temp_path}, {e}")


def list_files(directory: Path | str, suffix: str) -> list[Path]:
    """列出目录下指定后缀的文件（按文件名排序）.

    Args:
        directory: 目录路径
        suffix: 文件后缀（如 ".template.json"）

    Returns:
        文件路径列表，目录不存在时返回空列表
    """
    directory = Path(directory)
    if not directory.is_dir():
        return []
    return sorted(p for p in directory.iterdir() if p.is_file() and p.name.endswith(suffix))
