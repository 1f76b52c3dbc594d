"""批量渲染模块.

按顺序执行多个渲染任务（例如定期用新数据重新生成的一组信息图）。

Features:
    - 任务之间相互独立，单个任务失败不影响其他任务
    - 所有任务共享同一个字体缓存
    - 进度回调
    - 汇总失败任务，便于调用方整体重试
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Mapping, Optional, Sequence

from infotext.models.template_config import ImageTemplate
from infotext.services.template_engine import TemplateEngine
from infotext.utils.error_handler import ErrorCollector, get_error_details
from infotext.utils.exceptions import AppException
from infotext.utils.logger import setup_logger

logger = setup_logger(__name__)

# 进度回调: (已完成数量, 总数, 当前任务)
ProgressCallback = Callable[[int, int, "RenderJob"], None]


@dataclass(frozen=True)
class RenderJob:
    """单个渲染任务.

    Attributes:
        template: 模板配置
        output_path: 输出路径
        values: 占位符 -> 文本
    """

    template: ImageTemplate
    output_path: Path
    values: Mapping[str, str] = field(default_factory=dict)


@dataclass
class JobResult:
    """单个任务的执行结果."""

    job: RenderJob
    output_path: Optional[Path] = None
    error: Optional[dict] = None

    @property
    def success(self) -> bool:
        return self.error is None


@dataclass
class BatchResult:
    """批量执行结果."""

    results: list[JobResult] = field(default_factory=list)
    summary: str = ""

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def failed(self) -> int:
        return self.total - self.succeeded

    @property
    def failed_jobs(self) -> list[RenderJob]:
        """失败的任务（可整体重试）."""
        return [r.job for r in self.results if not r.success]


class BatchRenderer:
    """批量渲染器.

    Example:
        >>> renderer = BatchRenderer()
        >>> result = renderer.run([RenderJob(template, Path("/tmp/a.png"), {"{n}": "1"})])
        >>> result.succeeded
        1
    """

    def __init__(self, engine: Optional[TemplateEngine] = None) -> None:
        """初始化批量渲染器.

        Args:
            engine: 模板渲染引擎，默认按应用设置新建
        """
        self.engine = engine if engine is not None else TemplateEngine()

    def run(
        self,
        jobs: Sequence[RenderJob],
        on_progress: Optional[ProgressCallback] = None,
    ) -> BatchResult:
        """依次执行所有任务.

        Args:
            jobs: 任务列表
            on_progress: 每个任务结束后调用

        Returns:
            BatchResult 执行结果
        """
        collector = ErrorCollector()
        result = BatchResult()
        total = len(jobs)

        for index, job in enumerate(jobs, 1):
            try:
                path = self.engine.render_to_file(job.template, job.output_path, job.values)
                result.results.append(JobResult(job=job, output_path=path))
            except AppException as e:
                logger.error(f"任务失败 [{index}/{total}] {job.output_path}: {e}")
                collector.add(e, context=str(job.output_path))
                result.results.append(JobResult(job=job, error=get_error_details(e)))

            if on_progress:
                on_progress(index, total, job)

        result.summary = collector.summary
        logger.info(f"批量渲染完成: 成功 {result.succeeded}, 失败 {result.failed}")
        return result
