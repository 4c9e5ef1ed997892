"""
远程签名服务

签名算法随 App 版本变化, 通常由单独部署的签名服务计算。
RemoteSigner 是一个现成的 sign_url 实现: 把待签名 URL 发给签名服务, 返回签名后的 URL。

签名服务协议:
    POST {server_url}
    {"url": "...", "ts": 1530000000, "device_id": "..."}
    -> {"url": "https://api2.musical.ly/...&as=...&cp=...&mas=..."}
"""

import logging
from typing import Any, Dict, Optional

import httpx

from .errors import SigningError

logger = logging.getLogger(__name__)


class RemoteSigner:
    """
    通过 HTTP 调用签名服务

    Example:
        >>> signer = RemoteSigner("http://localhost:8080/sign")
        >>> config = MusicallyAPIConfig(sign_url=signer)
    """

    def __init__(
        self,
        server_url: str,
        timeout: float = 30.0,
        headers: Optional[Dict[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Args:
            server_url: 签名服务地址
            timeout: 请求超时时间 (秒)
            headers: 额外请求头 (如鉴权)
            transport: 自定义 httpx 传输层 (测试用)
        """
        self.server_url = server_url
        self.timeout = timeout
        self.headers = headers or {}
        self.transport = transport

    def _build_payload(self, url: str, ts: int, device_id: str) -> Dict[str, Any]:
        return {"url": url, "ts": ts, "device_id": device_id}

    async def __call__(self, url: str, ts: int, device_id: str) -> str:
        """
        获取签名后的 URL

        Raises:
            SigningError: 签名服务不可用或返回格式错误
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    self.server_url,
                    json=self._build_payload(url, ts, device_id),
                    headers=self.headers
                )
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Sign server request failed: {e}")
            raise SigningError(f"Sign server request failed: {e}") from e

        signed_url = data.get("url") if isinstance(data, dict) else None
        if not signed_url:
            raise SigningError(f"Sign server returned no url: {data!r}")
        return signed_url
