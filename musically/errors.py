"""
异常定义

- ConfigurationError: 配置错误 (缺少 sign_url、缺少序列化函数等), 不可重试
- SigningError: 外部签名函数返回了无效结果
"""


class MusicallyError(Exception):
    """所有 musically 异常的基类"""


class ConfigurationError(MusicallyError):
    """客户端配置无效"""


class MissingSerializerError(ConfigurationError):
    """请求缺少参数序列化函数, 无法生成待签名字符串"""

    def __init__(self, message: str = "Missing required params serializer function"):
        super().__init__(message)


class SigningError(MusicallyError):
    """签名失败 (签名函数结果无效或签名服务不可用)"""
