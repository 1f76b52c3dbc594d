"""服务层模块."""

from infotext.services.batch_renderer import (
    BatchRenderer,
    BatchResult,
    JobResult,
    RenderJob,
)
from infotext.services.template_engine import (
    TemplateEngine,
    render_template,
)
from infotext.services.template_manager import (
    TemplateManager,
    create_preset_templates,
    get_preset,
)

__all__ = [
    # 模板渲染
    "TemplateEngine",
    "render_template",
    # 批量渲染
    "BatchRenderer",
    "BatchResult",
    "JobResult",
    "RenderJob",
    # 模板管理
    "TemplateManager",
    "create_preset_templates",
    "get_preset",
]
