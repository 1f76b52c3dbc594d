"""infotext - 模板信息图文字自动适配渲染."""

from infotext.utils.constants import APP_VERSION

__version__ = APP_VERSION
