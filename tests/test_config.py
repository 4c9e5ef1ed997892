"""测试客户端配置"""

import pytest
from pydantic import ValidationError

from musically.config import (
    DEFAULT_BASE_URL,
    MusicallyAPIConfig,
    StaticRequestParams,
    build_user_agent,
    get_request_params,
)
from musically.errors import ConfigurationError


def sign_url(url, ts, device_id):
    return url


class TestMusicallyAPIConfig:
    """测试 MusicallyAPIConfig"""

    def test_missing_sign_url(self):
        """测试：缺少 sign_url 时构造失败"""
        with pytest.raises(ConfigurationError):
            MusicallyAPIConfig()

    def test_non_callable_sign_url(self):
        """测试：sign_url 不可调用时构造失败"""
        with pytest.raises(ConfigurationError):
            MusicallyAPIConfig(sign_url="not a function")

    def test_defaults(self):
        """测试：默认基础 URL 与 Host"""
        config = MusicallyAPIConfig(sign_url=sign_url)
        assert config.base_url == DEFAULT_BASE_URL
        assert config.host == "api2.musical.ly"
        assert config.sign_url is sign_url

    def test_frozen(self):
        """测试：构造后不可修改"""
        config = MusicallyAPIConfig(sign_url=sign_url)
        with pytest.raises(ValidationError):
            config.base_url = "https://example.com/"

    def test_user_agent_derived(self):
        """测试：User-Agent 由设备参数生成"""
        params = get_request_params(device_id="1", iid="2", openudid="3")
        config = MusicallyAPIConfig(sign_url=sign_url).with_defaults(params)
        assert config.user_agent == (
            "com.zhiliaoapp.musically/2018052132 (Linux; U; Android 7.1.2; en_US;"
            " Pixel; Build/NHG47Q; Cronet/58.0.2991.0)"
        )

    def test_explicit_user_agent_kept(self):
        """测试：显式设置的 User-Agent 不会被覆盖"""
        params = get_request_params(device_id="1", iid="2", openudid="3")
        config = MusicallyAPIConfig(sign_url=sign_url, user_agent="custom").with_defaults(params)
        assert config.user_agent == "custom"


class TestStaticRequestParams:
    """测试 StaticRequestParams"""

    def test_required_fields(self):
        """测试：缺少设备 ID 时报错"""
        with pytest.raises(ValidationError):
            StaticRequestParams(iid="2", openudid="3")

    def test_defaults_and_overrides(self):
        """测试：默认值可以被覆盖, 额外字段被保留"""
        params = get_request_params(device_id="1", iid="2", openudid="3", region="AU", uuid="x")
        values = params.as_params()
        assert values["app_name"] == "musical_ly"
        assert values["region"] == "AU"
        assert values["uuid"] == "x"

    def test_read_only(self):
        """测试：参数对象和参数视图都不可修改"""
        params = get_request_params(device_id="1", iid="2", openudid="3")
        with pytest.raises(ValidationError):
            params.device_id = "other"
        with pytest.raises(TypeError):
            params.as_params()["device_id"] = "other"

    def test_user_agent_fields(self):
        """测试：User-Agent 使用系统版本、语言、地区和机型"""
        params = get_request_params(
            device_id="1", iid="2", openudid="3",
            os_version="8.0.0", language="de", region="DE", device_type="SM-G950F",
        )
        assert "Android 8.0.0; de_DE; SM-G950F;" in build_user_agent(params)

    def test_fingerprint_optional(self):
        """测试：设备指纹是声明字段, 未设置时不出现在参数中"""
        assert "fp" not in get_request_params(device_id="1", iid="2", openudid="3").as_params()
        params = get_request_params(device_id="1", iid="2", openudid="3", fp="FP1")
        assert params.fp == "FP1"
        assert "fp" not in params.model_extra
