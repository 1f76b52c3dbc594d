"""异常与错误处理单元测试."""

import pytest

from infotext.utils.error_handler import (
    ErrorCollector,
    get_error_details,
    get_user_friendly_message,
)
from infotext.utils.exceptions import (
    AppException,
    BackgroundImageError,
    FontLoadError,
    FontSizeTooSmallError,
    InvalidConfigurationError,
    RenderWriteError,
    ResourceLoadError,
)


class TestExceptions:
    """自定义异常测试."""

    def test_str_includes_code(self):
        assert str(AppException("boom", "X")) == "[X] boom"

    def test_hierarchy(self):
        assert issubclass(FontLoadError, ResourceLoadError)
        assert issubclass(BackgroundImageError, ResourceLoadError)
        assert issubclass(FontSizeTooSmallError, InvalidConfigurationError)
        for exc_type in (ResourceLoadError, InvalidConfigurationError, RenderWriteError):
            assert issubclass(exc_type, AppException)

    def test_codes(self):
        assert FontLoadError("a.ttf").code == "RESOURCE_LOAD_ERROR"
        assert InvalidConfigurationError("x").code == "INVALID_CONFIGURATION"
        assert RenderWriteError("out.png").code == "RENDER_WRITE_ERROR"

    def test_font_load_error_message(self):
        error = FontLoadError("a.ttf", "文件不存在")
        assert error.path == "a.ttf"
        assert error.message == "无法加载字体: a.ttf (文件不存在)"

    def test_font_size_too_small(self):
        error = FontSizeTooSmallError(9, 10)
        assert "10pt" in error.message
        assert "9" in error.message


class TestErrorHandler:
    """错误处理函数测试."""

    @pytest.mark.parametrize(
        "exception, expected",
        [
            (FontLoadError("a.ttf"), "字体"),
            (BackgroundImageError("bg.png"), "背景图"),
            (FontSizeTooSmallError(9, 10), "模板配置"),
            (RenderWriteError("out.png"), "输出文件"),
        ],
    )
    def test_user_friendly_message(self, exception, expected):
        assert expected in get_user_friendly_message(exception)

    def test_app_exception_falls_back_to_message(self):
        assert get_user_friendly_message(AppException("自定义")) == "自定义"

    def test_unknown_exception(self):
        assert get_user_friendly_message(RuntimeError("x")) == "渲染失败，请稍后重试"

    def test_error_details(self):
        details = get_error_details(BackgroundImageError("bg.png"))
        assert details["type"] == "BackgroundImageError"
        assert details["code"] == "RESOURCE_LOAD_ERROR"
        assert details["path"] == "bg.png"

    def test_error_details_plain_exception(self):
        details = get_error_details(ValueError("bad"))
        assert details["message"] == "bad"
        assert "code" not in details


class TestErrorCollector:
    """错误收集器测试."""

    def test_empty(self):
        collector = ErrorCollector()
        assert not collector.has_errors
        assert collector.summary == "无错误"

    def test_collect(self):
        collector = ErrorCollector()
        collector.add(FontLoadError("a.ttf"), context="job-1")
        collector.add(RenderWriteError("b.png"))
        assert collector.count == 2
        assert "job-1" in collector.summary
        assert collector.summary.startswith("共 2 个错误")
        collector.clear()
        assert collector.errors == []
