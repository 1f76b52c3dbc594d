"""Pytest 配置和共享 fixtures."""

import os
from pathlib import Path

import pytest
from PIL import Image, ImageFont

from infotext.core.config_manager import get_config
from infotext.core.font_cache import FontCache
from infotext.models.render_options import RenderOptions

# 常见系统字体，找不到时退回 Pillow 内置字体
SYSTEM_FONT_CANDIDATES = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/TTF/DejaVuSans.ttf",
    "/Library/Fonts/Arial.ttf",
    "/System/Library/Fonts/Supplemental/Arial.ttf",
    "C:/Windows/Fonts/arial.ttf",
]


def _font_bytes() -> bytes:
    for candidate in SYSTEM_FONT_CANDIDATES:
        path = Path(candidate)
        if path.is_file():
            return path.read_bytes()

    default = ImageFont.load_default(size=12)
    data = getattr(default, "font_bytes", None)
    if not data:
        pytest.skip("没有可用的 TrueType 字体")
    return data


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """每个测试使用不受外部 INFOTEXT_* 环境变量影响的应用设置."""
    for key in list(os.environ):
        if key.startswith("INFOTEXT_"):
            monkeypatch.delenv(key)
    get_config().reload()
    yield
    get_config().reload()


@pytest.fixture(scope="session")
def font_data() -> bytes:
    """测试用字体文件内容."""
    return _font_bytes()


@pytest.fixture
def font_path(tmp_path, font_data) -> Path:
    """写入临时目录的字体文件."""
    path = tmp_path / "test-font.ttf"
    path.write_bytes(font_data)
    return path


@pytest.fixture
def font_cache() -> FontCache:
    """空字体缓存."""
    return FontCache()


@pytest.fixture
def font_handle(font_cache, font_path):
    """已加载的字体句柄."""
    return font_cache.load(font_path)


@pytest.fixture
def background_path(tmp_path) -> Path:
    """400x300 白色背景图."""
    path = tmp_path / "background.png"
    Image.new("RGB", (400, 300), (255, 255, 255)).save(path)
    return path


@pytest.fixture
def render_options(font_path) -> RenderOptions:
    """使用测试字体的渲染选项."""
    return RenderOptions(default_font_path=str(font_path))
