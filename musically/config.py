"""
客户端配置

- StaticRequestParams: 每个请求都会携带的设备/App 身份参数
- MusicallyAPIConfig: 基础 URL、Host、User-Agent 以及外部签名函数

两者在构造后都不可修改 (frozen), 对外暴露的参数字典是只读视图。
"""

from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import ConfigurationError
from .params import STATIC_PARAM_DEFAULTS

DEFAULT_BASE_URL = "https://api2.musical.ly/"
DEFAULT_HOST = "api2.musical.ly"

# sign_url(url, ts, device_id) -> 签名后的 URL (可以是协程)
SignURL = Callable[[str, int, str], Any]


class StaticRequestParams(BaseModel):
    """设备/App 身份参数, 作为每个请求的基础查询参数"""

    model_config = ConfigDict(frozen=True, extra="allow")

    device_id: str = Field(..., description="设备 ID")
    iid: str = Field(..., description="安装 ID")
    openudid: str = Field(..., description="设备 openudid")
    fp: Optional[str] = Field(None, description="设备指纹")

    os_api: str = "23"
    device_type: str = "Pixel"
    ssmix: str = "a"
    manifest_version_code: str = "2018052132"
    dpi: int = 420
    app_name: str = "musical_ly"
    version_name: str = "7.2.0"
    timezone_offset: int = 37800
    is_my_cn: int = 0
    ac: str = "wifi"
    update_version_code: str = "2018052132"
    channel: str = "googleplay"
    device_platform: str = "android"
    build_number: str = "7.2.0"
    version_code: int = 720
    timezone_name: str = "Australia/Lord_Howe"
    resolution: str = "1080*1920"
    os_version: str = "7.1.2"
    device_brand: str = "Google"
    mcc_mnc: str = ""
    app_language: str = "en"
    language: str = "en"
    region: str = "US"
    sys_region: str = "US"
    carrier_region: str = "AU"
    aid: str = "1233"

    def as_params(self) -> Mapping[str, Any]:
        """返回只读的参数字典"""
        return MappingProxyType(self.model_dump(exclude_none=True))


def get_request_params(**required: Any) -> StaticRequestParams:
    """
    合并用户提供的设备参数与默认参数

    Args:
        **required: 至少包含 device_id, iid, openudid, 其余键覆盖默认值

    Returns:
        不可变的 StaticRequestParams

    Example:
        >>> params = get_request_params(device_id="1", iid="2", openudid="3")
        >>> params.app_name
        'musical_ly'
    """
    return StaticRequestParams(**{**STATIC_PARAM_DEFAULTS, **required})


def build_user_agent(params: StaticRequestParams) -> str:
    """根据 App/系统版本生成 User-Agent"""
    return (
        f"com.zhiliaoapp.musically/{params.manifest_version_code}"
        f" (Linux; U; Android {params.os_version}; {params.language}_{params.region};"
        f" {params.device_type}; Build/NHG47Q; Cronet/58.0.2991.0)"
    )


class MusicallyAPIConfig(BaseModel):
    """
    客户端级配置

    Attributes:
        base_url: API 基础 URL (以 '/' 结尾)
        host: Host 请求头
        user_agent: User-Agent, 为空时由设备参数生成
        sign_url: 外部签名函数 sign_url(url, ts, device_id)
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    base_url: str = DEFAULT_BASE_URL
    host: str = DEFAULT_HOST
    user_agent: Optional[str] = None
    sign_url: Optional[Any] = Field(default=None, validate_default=True)

    @field_validator("sign_url", mode="before")
    @classmethod
    def _require_callable(cls, value: Any) -> SignURL:
        if not callable(value):
            raise ConfigurationError("You must supply a sign_url function to the MusicallyAPI config")
        return value

    def with_defaults(self, params: StaticRequestParams) -> "MusicallyAPIConfig":
        """补全未设置的 User-Agent, 返回新的配置对象"""
        if self.user_agent:
            return self
        return self.model_copy(update={"user_agent": build_user_agent(params)})
