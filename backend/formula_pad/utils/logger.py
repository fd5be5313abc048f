"""
日志配置
---------------------------------
- 通过环境变量 `LOG_LEVEL` 控制级别（默认 INFO）；
- 各模块使用 `get_logger("gateway")` 获取 `formula_pad.gateway` 这类子 logger，便于按模块过滤。
"""

import logging
import os

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format=LOG_FORMAT,
)
log = logging.getLogger("formula_pad")


def get_logger(name: str) -> logging.Logger:
    return log.getChild(name)
