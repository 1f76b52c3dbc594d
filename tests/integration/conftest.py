"""集成测试配置和共享 fixtures."""

from pathlib import Path

import pytest
from PIL import Image

from infotext.services.template_engine import TemplateEngine


@pytest.fixture
def engine(font_cache, render_options) -> TemplateEngine:
    """使用测试字体的渲染引擎."""
    return TemplateEngine(font_cache=font_cache, options=render_options)


@pytest.fixture
def weekly_background(tmp_path: Path) -> Path:
    """模拟每周信息图背景（浅灰底 + 两条色带）."""
    img = Image.new("RGB", (1200, 900), color=(240, 240, 240))
    for y in range(380, 420):
        for x in range(0, 1200, 4):
            img.putpixel((x, y), (200, 60, 60))
    path = tmp_path / "weekly.png"
    img.save(path)
    return path

