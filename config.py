# config.py
# 从环境变量读取映射器相关配置，所有变量均有合理默认值
import os
from dotenv import load_dotenv

# 尝试从运行目录下的 key.env 文件中加载环境变量
load_dotenv(dotenv_path="key.env")

# Content Blocks 属性编辑器别名（映射器只对该编辑器生效）
CONTENT_BLOCKS_EDITOR_ALIAS: str = os.getenv("CONTENT_BLOCKS_EDITOR_ALIAS", "Perplex.ContentBlocks")

# 嵌套内容（Nested Content）编辑器别名，block 的 content 交给该编辑器的映射器处理
NESTED_CONTENT_EDITOR_ALIAS: str = os.getenv("NESTED_CONTENT_EDITOR_ALIAS", "Umbraco.NestedContent")

# block 定义 / 数据类型登记文件（YAML）
REGISTRY_PATH: str = os.getenv("REGISTRY_PATH", "specs/registry.yaml")

# 导出 JSON 的缩进空格数（强制非负整数）
EXPORT_INDENT: int = max(0, int(os.getenv("EXPORT_INDENT", "2")))

# 日志级别：DEBUG | INFO | WARNING | ERROR
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "WARNING").strip().upper()

# API 服务端鉴权 Key（为空则不启用认证，适合本地 Demo；生产环境请务必设置）
SERVER_API_KEY: str = os.getenv("SERVER_API_KEY", "")

# 生产环境硬性鉴权开关：REQUIRE_AUTH=true 时，若 SERVER_API_KEY 为空则启动时抛出异常
REQUIRE_AUTH: bool = os.getenv("REQUIRE_AUTH", "false").strip().lower() == "true"
