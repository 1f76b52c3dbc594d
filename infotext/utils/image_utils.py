"""图片工具函数模块.

提供背景图读取与 PNG 保存等工具函数。
"""

from __future__ import annotations

from pathlib import Path

from PIL import Image, UnidentifiedImageError

from infotext.utils.constants import MM_PER_INCH, SUPPORTED_IMAGE_FORMATS
from infotext.utils.exceptions import BackgroundImageError, RenderWriteError
from infotext.utils.file_utils import atomic_output, get_file_extension
from infotext.utils.logger import setup_logger

logger = setup_logger(__name__)


def load_image(path: Path | str) -> Image.Image:
    """加载背景图并转换为 RGBA.

    Args:
        path: 图片文件路径

    Returns:
        PIL Image 对象（RGBA）

    Raises:
        BackgroundImageError: 文件不存在、格式不支持或已损坏
    """
    path = Path(path)

    if not path.is_file():
        raise BackgroundImageError(str(path), "文件不存在")

    ext = get_file_extension(path)
    if ext not in SUPPORTED_IMAGE_FORMATS:
        raise BackgroundImageError(str(path), f"不支持的图片格式 {ext}")

    try:
        with Image.open(path) as img:
            img.load()  # 强制加载到内存
            return ensure_rgba(img)
    except (OSError, UnidentifiedImageError) as e:
        logger.error(f"加载图片失败: {path}, {e}")
        raise BackgroundImageError(str(path), str(e)) from e


def ensure_rgba(image: Image.Image) -> Image.Image:
    """确保图片为 RGBA 模式.

    Args:
        image: PIL Image 对象

    Returns:
        RGBA 模式图片
    """
    if image.mode != "RGBA":
        return image.convert("RGBA")
    return image.copy()


def save_png(image: Image.Image, path: Path | str, dots_per_mm: float) -> Path:
    """原子地保存 PNG 图片.

    先写入同目录的临时文件，成功后再替换目标文件，失败时不会留下残缺文件。

    Args:
        image: PIL Image 对象
        path: 保存路径
        dots_per_mm: 输出分辨率（每毫米点数），写入 PNG 的 DPI 信息

    Returns:
        保存的文件路径

    Raises:
        RenderWriteError: 编码或写入失败
    """
    path = Path(path)
    dpi = dots_per_mm * MM_PER_INCH

    try:
        with atomic_output(path, suffix=".png") as temp_path:
            image.save(temp_path, format="PNG", dpi=(dpi, dpi), optimize=True)
    except (OSError, ValueError) as e:
        logger.error(f"保存图片失败: {path}, {e}")
        raise RenderWriteError(str(path), str(e)) from e

    logger.debug(f"图片已保存: {path}")
    return path
