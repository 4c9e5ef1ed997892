"""日志配置"""

import logging
from typing import Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: Union[str, int] = "INFO") -> None:
    """
    配置根日志

    Args:
        level: 日志级别 (DEBUG, INFO, WARNING, ERROR)
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    # basicConfig 只生效一次, 重复调用时仍要更新级别
    logging.getLogger().setLevel(level)
    # 签名 URL 会出现在 curl_cffi 的调试日志里
    logging.getLogger("curl_cffi").setLevel(max(level, logging.INFO))
