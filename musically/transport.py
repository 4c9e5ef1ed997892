"""
HTTP 传输层

签名后的请求通过 Transport 发送。默认实现使用 curl_cffi 的 AsyncSession,
连接池、TLS、超时都交给 curl_cffi 处理; 这里不做重试。

测试或自定义网络栈时可以传入任意实现了 send/close 的对象。
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from curl_cffi.requests import AsyncSession, Cookies

logger = logging.getLogger(__name__)

# 请求超时时间 (秒)
DEFAULT_TIMEOUT = 30.0


@dataclass
class TransportResponse:
    """统一响应包装"""

    status_code: int
    text: str
    headers: Dict[str, str] = field(default_factory=dict)
    cookies: Any = None
    url: Optional[str] = None


class BaseTransport:
    """传输层接口"""

    async def send(
        self,
        method: str,
        url: str,
        *,
        headers: Optional[Dict[str, str]] = None,
        cookies: Optional[Cookies] = None,
    ) -> TransportResponse:
        raise NotImplementedError

    async def close(self) -> None:
        pass


class CurlTransport(BaseTransport):
    """
    curl_cffi 传输实现

    HTTP 错误状态码通过 raise_for_status 抛出, 异常原样向上传递。
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        proxy: Optional[str] = None,
        impersonate: Optional[str] = None,
        **session_options: Any
    ):
        """
        Args:
            timeout: 请求超时时间 (秒)
            proxy: 代理地址
            impersonate: curl_cffi 指纹伪装目标, 默认不伪装
            **session_options: 透传给 AsyncSession 的其它参数
        """
        self.timeout = timeout
        self.proxy = proxy
        self.impersonate = impersonate
        self._session_options = session_options
        self._session: Optional[AsyncSession] = None

    def _get_session(self) -> AsyncSession:
        """获取 HTTP 会话 (懒加载)"""
        if self._session is None:
            options = dict(self._session_options)
            if self.proxy:
                options["proxy"] = self.proxy
            if self.impersonate:
                options["impersonate"] = self.impersonate
            self._session = AsyncSession(timeout=self.timeout, **options)
        return self._session

    async def send(
        self,
        method: str,
        url: str,
        *,
        headers: Optional[Dict[str, str]] = None,
        cookies: Optional[Cookies] = None,
    ) -> TransportResponse:
        session = self._get_session()
        response = await session.request(method, url, headers=headers, cookies=cookies)
        response.raise_for_status()

        return TransportResponse(
            status_code=response.status_code,
            text=response.text,
            headers=dict(response.headers),
            cookies=response.cookies,
            url=str(response.url),
        )

    async def close(self) -> None:
        if self._session is not None:
            await self._session.close()
            self._session = None
