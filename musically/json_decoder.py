"""
大整数安全的 JSON 解码

用户 ID、帖子 ID 等经常超过 2^53, 在 JS 客户端中会丢失精度。
为了和 App 侧看到的值保持一致, 超过 15 个字符的数字字面量 (整数或小数) 保留为原始字符串。
"""

import json
from typing import Any, Union

# 超过该长度 (含负号、小数点和指数) 的数字字面量保留为字符串
MAX_SAFE_INT_LENGTH = 15


def _parse_int(literal: str) -> Union[int, str]:
    if len(literal) > MAX_SAFE_INT_LENGTH:
        return literal
    return int(literal)


def _parse_float(literal: str) -> Union[float, str]:
    if len(literal) > MAX_SAFE_INT_LENGTH:
        return literal
    return float(literal)


def loads_bigint(text: Union[str, bytes]) -> Any:
    """
    解析 JSON, 长数字保留为字符串

    Args:
        text: JSON 文本

    Returns:
        解析结果

    Raises:
        json.JSONDecodeError: 不是合法 JSON

    Example:
        >>> loads_bigint('{"id": 6800000000000000001, "count": 3}')
        {'id': '6800000000000000001', 'count': 3}
    """
    if isinstance(text, bytes):
        text = text.decode("utf-8")
    return json.loads(text, parse_int=_parse_int, parse_float=_parse_float)


def transform_response(data: Any) -> Any:
    """
    解码响应体

    空响应体 (None, '' 或 b'') 原样返回, 其余按 loads_bigint 解析。
    """
    if not data:
        return data
    return loads_bigint(data)
