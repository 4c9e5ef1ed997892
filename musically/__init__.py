"""
musically - musical.ly 移动端 API 客户端

按 App 的方式构造请求: 固定顺序的查询参数、时间戳、外部签名、会话 Cookie,
响应中的大整数 ID 保留为字符串。

核心模块:
- params: 参数规范化与默认参数合并
- signing: 请求签名拦截器
- crypto_utils: 登录凭据 XOR 混淆
- json_decoder: 大整数安全的 JSON 解码
- api: MusicallyAPI 接口客户端
- signers: 远程签名服务客户端
- main: FastAPI 调试/代理服务
"""

__version__ = "1.0.0"

from .api import MusicallyAPI
from .config import MusicallyAPIConfig, StaticRequestParams, build_user_agent, get_request_params
from .crypto_utils import decrypt_with_xor, encrypt_with_xor
from .errors import ConfigurationError, MissingSerializerError, MusicallyError, SigningError
from .json_decoder import loads_bigint, transform_response
from .models import APIResponse
from .params import PARAMS_ORDER, params_serializer, serialize_params, with_default_list_params
from .signers import RemoteSigner
from .signing import RequestContext, SigningInterceptor

__all__ = [
    "APIResponse",
    "ConfigurationError",
    "MissingSerializerError",
    "MusicallyAPI",
    "MusicallyAPIConfig",
    "MusicallyError",
    "PARAMS_ORDER",
    "RemoteSigner",
    "RequestContext",
    "SigningError",
    "SigningInterceptor",
    "StaticRequestParams",
    "build_user_agent",
    "decrypt_with_xor",
    "encrypt_with_xor",
    "get_request_params",
    "loads_bigint",
    "params_serializer",
    "serialize_params",
    "transform_response",
    "with_default_list_params",
]
