"""
请求参数模块

- PARAMS_ORDER: App 发送查询参数时的固定键顺序
- serialize_params: 按固定顺序序列化查询参数 (签名原文必须与实际发送的完全一致)
- with_default_list_params: 列表类接口的默认分页参数
"""

from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Sequence, Union
from urllib.parse import quote

from pydantic import BaseModel


# App 实际请求中观察到的参数顺序, 未列出的键追加在末尾
PARAMS_ORDER = (
    "user_id",
    "aweme_id",
    "type",
    "count",
    "max_cursor",
    "min_cursor",
    "max_time",
    "min_time",
    "retry_type",
    "mix_mode",
    "username",
    "email",
    "mobile",
    "account",
    "password",
    "captcha",
    "app_type",
    "iid",
    "device_id",
    "ac",
    "channel",
    "aid",
    "app_name",
    "version_code",
    "version_name",
    "device_platform",
    "ssmix",
    "device_type",
    "device_brand",
    "language",
    "os_api",
    "os_version",
    "openudid",
    "fp",
    "manifest_version_code",
    "resolution",
    "dpi",
    "update_version_code",
    "_rticket",
    "ts",
    "app_language",
    "timezone_name",
    "timezone_offset",
    "is_my_cn",
    "build_number",
    "region",
    "sys_region",
    "carrier_region",
    "mcc_mnc",
)

# 列表类接口 (帖子、粉丝、关注) 的默认分页参数
LIST_DEFAULTS: Dict[str, Any] = {
    "count": 20,
    "max_cursor": 0,
    "retry_type": "no_retry",
}

# 设备/App 身份参数默认值 (Android 版 musical.ly 7.2.0)
STATIC_PARAM_DEFAULTS: Dict[str, Any] = {
    "os_api": "23",
    "device_type": "Pixel",
    "ssmix": "a",
    "manifest_version_code": "2018052132",
    "dpi": 420,
    "app_name": "musical_ly",
    "version_name": "7.2.0",
    "timezone_offset": 37800,
    "is_my_cn": 0,
    "ac": "wifi",
    "update_version_code": "2018052132",
    "channel": "googleplay",
    "device_platform": "android",
    "build_number": "7.2.0",
    "version_code": 720,
    "timezone_name": "Australia/Lord_Howe",
    "resolution": "1080*1920",
    "os_version": "7.1.2",
    "device_brand": "Google",
    "mcc_mnc": "",
    "app_language": "en",
    "language": "en",
    "region": "US",
    "sys_region": "US",
    "carrier_region": "AU",
    "aid": "1233",
}

ParamsInput = Union[Mapping[str, Any], BaseModel]


def _encode_value(value: Any) -> str:
    """将参数值转换为查询字符串中的编码形式"""
    if isinstance(value, bool):
        value = "true" if value else "false"
    elif isinstance(value, float) and value.is_integer():
        # App 端 1.0 会序列化为 "1"
        value = int(value)
    return quote(str(value), safe="")


def order_keys(keys: Iterable[str], order: Sequence[str] = PARAMS_ORDER) -> list:
    """
    按固定顺序排列参数键

    在 order 中的键按 order 的顺序排在前面,
    其余键保持原始出现顺序追加在后面。

    Args:
        keys: 参数键 (按出现顺序)
        order: 固定顺序列表

    Returns:
        排序后的键列表
    """
    keys = list(keys)
    present = set(keys)
    known = set(order)
    ordered = [key for key in order if key in present]
    ordered.extend(key for key in keys if key not in known)
    return ordered


def serialize_params(params: Mapping[str, Any], order: Sequence[str] = PARAMS_ORDER) -> str:
    """
    序列化查询参数

    规则:
    - order 中的键按 order 顺序输出, 其余键按字典迭代顺序追加
    - 键和值都使用 URL 百分号编码 (空格编码为 %20)
    - 值为 None 的键被忽略, 0 和 '' 等值会保留

    同样的输入总是得到完全相同的字符串, 签名函数签的就是这个字符串。

    Args:
        params: 参数字典
        order: 固定顺序列表

    Returns:
        查询字符串 (不含 '?')

    Example:
        >>> serialize_params({"foo": "a b", "count": 0, "user_id": "1"})
        'user_id=1&count=0&foo=a%20b'
    """
    parts = []
    for key in order_keys(params.keys(), order):
        value = params[key]
        if value is None:
            continue
        parts.append(f"{quote(str(key), safe='')}={_encode_value(value)}")
    return "&".join(parts)


def params_serializer(order: Sequence[str] = PARAMS_ORDER) -> Callable[[Mapping[str, Any]], str]:
    """返回绑定了固定顺序的序列化函数"""
    order = tuple(order)

    def serializer(params: Mapping[str, Any]) -> str:
        return serialize_params(params, order)

    return serializer


def to_params(params: Optional[ParamsInput]) -> Dict[str, Any]:
    """将字典或 pydantic 请求模型转换为新的参数字典"""
    if params is None:
        return {}
    if isinstance(params, BaseModel):
        return params.model_dump(exclude_none=True)
    return dict(params)


def with_default_list_params(params: ParamsInput) -> Dict[str, Any]:
    """
    为列表类请求合并默认分页参数

    调用方已提供的键不会被覆盖, 输入也不会被修改。

    Args:
        params: 请求参数 (字典或请求模型)

    Returns:
        合并后的新字典
    """
    return {**LIST_DEFAULTS, **to_params(params)}

