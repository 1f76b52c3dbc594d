"""应用常量定义."""

from pathlib import Path

# ===================
# 应用信息
# ===================
APP_NAME = "infotext"
APP_VERSION = "0.3.0"

# ===================
# 路径常量
# ===================
# 应用数据目录
APP_DATA_DIR = Path.home() / ".infotext"

# 日志目录
LOG_DIR = APP_DATA_DIR / "logs"

# 默认模板目录
TEMPLATES_DIR = APP_DATA_DIR / "templates"

# 默认字体
DEFAULT_FONT_PATH = "resources/fonts/nunito-v23-latin-regular.ttf"

# ===================
# 单位换算
# ===================
# 背景图像素 -> 画布毫米（96 DPI）
MM_PER_PIXEL = 0.2645833333

# 1 磅 = 1/72 英寸
MM_PER_POINT = 25.4 / 72

# 输出分辨率（每毫米点数）
DEFAULT_DOTS_PER_MM = 3.2

MM_PER_INCH = 25.4

# ===================
# 文字排版
# ===================
MIN_FONT_SIZE = 10
DEFAULT_MAX_FONT_SIZE = 70

# 行间距（像素）
LINE_SPACING = 0

DEFAULT_TEXT_COLOR = (0, 0, 0, 255)  # 黑色

# ===================
# 调试边框
# ===================
DEBUG_OUTLINE_COLOR = (173, 216, 230, 255)  # 浅蓝
DEBUG_OUTLINE_WIDTH = 0.6  # 毫米

# ===================
# 文件
# ===================
TEMPLATE_EXTENSION = ".template.json"
SUPPORTED_IMAGE_FORMATS = {".png", ".jpg", ".jpeg", ".bmp", ".gif", ".webp"}
SUPPORTED_FONT_FORMATS = {".ttf", ".otf", ".ttc"}
