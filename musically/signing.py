"""
请求签名模块

每个发出的请求都会经过 SigningInterceptor:

1. 检查请求是否带有参数序列化函数
2. 写入时间戳: ts (秒) 和 _rticket (毫秒, 防缓存/重放)
3. 拼接待签名 URL: base_url + path + '?' + serializer(params)
4. 调用外部签名函数 sign_url(url, ts, device_id), 用签名后的 URL 替换请求地址并清空参数

签名已经包含在 URL 中, 之后不能再序列化参数, 否则实际发送的查询串会与签名原文不一致。
签名函数抛出异常时请求不会被发送。
"""

import inspect
import logging
import time
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, Mapping, Optional

from .config import SignURL
from .errors import MissingSerializerError, SigningError

logger = logging.getLogger(__name__)

Serializer = Callable[[Mapping[str, Any]], str]


@dataclass(frozen=True)
class RequestContext:
    """
    单次请求的上下文

    Attributes:
        method: HTTP 方法
        path: 相对 base_url 的路径
        params: 查询参数
        serializer: 参数序列化函数
        url: 签名后的完整 URL (签名前为 None)
    """

    method: str
    path: str
    params: Dict[str, Any] = field(default_factory=dict)
    serializer: Optional[Serializer] = None
    url: Optional[str] = None


def get_timestamps(clock: Callable[[], float] = time.time) -> Dict[str, int]:
    """
    生成请求时间戳

    Returns:
        {"ts": 秒级时间戳, "_rticket": 毫秒级时间戳}
    """
    now = clock()
    return {
        "ts": int(now),
        "_rticket": int(now * 1000),
    }


class SigningInterceptor:
    """
    请求签名拦截器

    不保存任何跨请求的可变状态, 可以被并发调用。

    Example:
        >>> interceptor = SigningInterceptor("https://api2.musical.ly/", sign_url, "123")
        >>> signed = await interceptor.sign_request(context)
        >>> signed.url
        'https://api2.musical.ly/aweme/v1/user/?user_id=1&...&as=...&cp=...'
    """

    def __init__(
        self,
        base_url: str,
        sign_url: SignURL,
        device_id: str,
        clock: Callable[[], float] = time.time
    ):
        """
        Args:
            base_url: API 基础 URL
            sign_url: 外部签名函数
            device_id: 设备 ID, 原样传给签名函数
            clock: 时间来源 (返回秒级浮点数)
        """
        self.base_url = base_url
        self.sign_url = sign_url
        self.device_id = device_id
        self.clock = clock

    def build_url(self, context: RequestContext, params: Mapping[str, Any]) -> str:
        """拼接待签名的规范 URL"""
        return f"{self.base_url}{context.path}?{context.serializer(params)}"

    async def sign_request(self, context: RequestContext) -> RequestContext:
        """
        为请求签名

        Args:
            context: 原始请求上下文

        Returns:
            新的请求上下文: url 为签名后的 URL, params 为空

        Raises:
            MissingSerializerError: 请求缺少序列化函数
            SigningError: 签名函数返回了无效的 URL
        """
        if not callable(context.serializer):
            raise MissingSerializerError()

        stamps = get_timestamps(self.clock)
        # 时间戳总是覆盖调用方传入的同名参数
        params = {**context.params, **stamps}

        url = self.build_url(context, params)
        logger.debug(f"Signing {context.method} {context.path} (ts={stamps['ts']})")

        signed_url = self.sign_url(url, stamps["ts"], self.device_id)
        if inspect.isawaitable(signed_url):
            signed_url = await signed_url

        if not isinstance(signed_url, str) or not signed_url:
            raise SigningError(f"sign_url returned an invalid URL: {signed_url!r}")

        return replace(context, url=signed_url, params={})
