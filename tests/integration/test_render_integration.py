"""端到端渲染集成测试."""

import pytest
from PIL import Image

from infotext.core.text_fitter import TextFitter
from infotext.models.template_config import FieldConfig, ImageTemplate, TextAlign
from infotext.services.batch_renderer import BatchRenderer, RenderJob
from infotext.services.template_manager import WEEKLY_TEMPLATE_NAME, TemplateManager


def ink_bbox(image: Image.Image, threshold: int = 128):
    """深色（文字）像素的外框."""
    mask = image.convert("L").point(lambda p: 255 if p < threshold else 0)
    return mask.getbbox()


@pytest.fixture
def counter_template(background_path):
    """400x300 背景，一个居中字段."""
    return ImageTemplate(
        name="counter",
        background_path=str(background_path),
        fields=(
            FieldConfig.create(
                "{n}",
                relative_x=0.5,
                relative_y=0.5,
                font_size=40,
                max_width=100,
                max_height=20,
                align=TextAlign.CENTER,
            ),
        ),
    )


class TestEndToEnd:
    """完整渲染流程测试."""

    def test_counter_template(self, engine, counter_template, tmp_path):
        """输出尺寸按分辨率换算，文字水平居中于背景 x=200 处."""
        output = engine.render_to_file(counter_template, tmp_path / "out.png", {"{n}": "501,784"})

        scale = engine.options.output_scale
        with Image.open(output) as img:
            assert img.size == (round(400 * scale), round(300 * scale))
            bbox = ink_bbox(img)

        assert bbox is not None
        center_x = (bbox[0] + bbox[2]) / 2
        assert center_x == pytest.approx(200 * scale, abs=5)

    def test_counter_font_size(self, engine, counter_template, font_handle):
        """选中的字号不超过 40 且高度小于 20."""
        field = counter_template.fields[0]
        fitter = TextFitter(font_handle, engine.options.dots_per_mm)
        fitted = fitter.fit("501,784", field.max_width, field.max_height, field.style)
        assert fitted.font_size <= 40
        assert fitted.height < 20
        assert fitted.lines == ("501,784",)

    def test_unset_variable_shows_placeholder(self, engine, background_path, tmp_path):
        """未设置的变量显示占位符文本."""
        field = FieldConfig.create("{total}", 0.5, 0.5, font_size=30, max_width=90, max_height=20, align=TextAlign.CENTER)
        template = ImageTemplate(name="fallback", background_path=str(background_path), fields=(field,))

        with_placeholder = engine.render_image(template, {})
        explicit = engine.render_image(template, {"{total}": "{total}"})
        assert with_placeholder.tobytes() == explicit.tobytes()

        blank = engine.render_image(template, {"{total}": ""})
        assert ink_bbox(blank) is None
        assert ink_bbox(with_placeholder) is not None

    def test_overflow_text_still_renders(self, engine, background_path, tmp_path):
        """最小字号仍超出时照常输出."""
        field = FieldConfig.create("{n}", 0.5, 0.5, font_size=20, max_width=10, max_height=1)
        template = ImageTemplate(name="overflow", background_path=str(background_path), fields=(field,))
        output = engine.render_to_file(template, tmp_path / "overflow.png", {"{n}": "a very long overflowing line"})
        assert output.exists()


class TestWeeklyPreset:
    """预设模板渲染测试."""

    def test_weekly_report(self, engine, weekly_background, tmp_path):
        """预设模板替换背景后批量生成."""
        preset = TemplateManager(tmp_path / "templates").get_template(WEEKLY_TEMPLATE_NAME)
        template = preset.model_copy(update={"background_path": str(weekly_background)})

        jobs = [
            RenderJob(template, tmp_path / "week1.png", {"{weekly new cases}": "501,784"}),
            RenderJob(
                template,
                tmp_path / "week2.png",
                {"{weekly new cases}": "488,120", "{weekly total cases}": "12,004,311"},
            ),
        ]
        result = BatchRenderer(engine).run(jobs)

        assert result.succeeded == 2
        scale = engine.options.output_scale
        for job in jobs:
            with Image.open(job.output_path) as img:
                assert img.size == (round(1200 * scale), round(900 * scale))
