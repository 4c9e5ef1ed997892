"""
服务配置

从环境变量 (以及当前目录的 .env 文件) 读取配置, 供 HTTP 服务使用。

环境变量:
    MUSICALLY_DEVICE_ID        设备 ID (必填)
    MUSICALLY_IID              安装 ID (必填)
    MUSICALLY_OPENUDID         openudid (必填)
    MUSICALLY_SIGN_SERVER_URL  签名服务地址 (必填)
    MUSICALLY_FP               设备指纹
    MUSICALLY_BASE_URL         API 基础 URL
    MUSICALLY_TIMEOUT          请求超时时间 (秒)
    MUSICALLY_PROXY            代理地址
    MUSICALLY_LOG_LEVEL        日志级别
"""

import os
from typing import Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

from .config import DEFAULT_BASE_URL
from .errors import ConfigurationError
from .transport import DEFAULT_TIMEOUT

ENV_PREFIX = "MUSICALLY_"


class Settings(BaseModel):
    """HTTP 服务配置"""

    model_config = ConfigDict(frozen=True)

    device_id: str
    iid: str
    openudid: str
    sign_server_url: str
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    fp: Optional[str] = None
    proxy: Optional[str] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        从环境变量创建配置

        Args:
            environ: 环境变量 (默认读取 os.environ, 并先加载 .env)

        Raises:
            ConfigurationError: 缺少必填项或格式错误
        """
        if environ is None:
            load_dotenv()
            environ = os.environ

        def get(name: str, default: Optional[str] = None) -> Optional[str]:
            return environ.get(f"{ENV_PREFIX}{name}", default) or default

        missing = [
            f"{ENV_PREFIX}{name}"
            for name in ("DEVICE_ID", "IID", "OPENUDID", "SIGN_SERVER_URL")
            if not get(name)
        ]
        if missing:
            raise ConfigurationError(f"Missing environment variables: {', '.join(missing)}")

        try:
            timeout = float(get("TIMEOUT", str(DEFAULT_TIMEOUT)))
        except ValueError as e:
            raise ConfigurationError(f"Invalid {ENV_PREFIX}TIMEOUT: {e}") from e

        return cls(
            device_id=get("DEVICE_ID"),
            iid=get("IID"),
            openudid=get("OPENUDID"),
            sign_server_url=get("SIGN_SERVER_URL"),
            base_url=get("BASE_URL", DEFAULT_BASE_URL),
            timeout=timeout,
            fp=get("FP"),
            proxy=get("PROXY"),
            log_level=get("LOG_LEVEL", "INFO"),
        )
