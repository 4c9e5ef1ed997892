"""测试服务配置"""

import pytest

from musically.config import DEFAULT_BASE_URL
from musically.errors import ConfigurationError
from musically.settings import Settings

REQUIRED_ENV = {
    "MUSICALLY_DEVICE_ID": "1",
    "MUSICALLY_IID": "2",
    "MUSICALLY_OPENUDID": "3",
    "MUSICALLY_SIGN_SERVER_URL": "http://signer.local/sign",
}


class TestSettings:
    """测试 Settings.from_env"""

    def test_required_values(self):
        """测试：读取必填项和默认值"""
        settings = Settings.from_env(REQUIRED_ENV)
        assert settings.device_id == "1"
        assert settings.sign_server_url == "http://signer.local/sign"
        assert settings.base_url == DEFAULT_BASE_URL
        assert settings.timeout == 30.0
        assert settings.proxy is None

    def test_optional_values(self):
        """测试：可选项覆盖默认值"""
        env = dict(REQUIRED_ENV, MUSICALLY_TIMEOUT="5", MUSICALLY_PROXY="http://127.0.0.1:8080")
        settings = Settings.from_env(env)
        assert settings.timeout == 5.0
        assert settings.proxy == "http://127.0.0.1:8080"

    def test_missing_values(self):
        """测试：缺少必填项时报配置错误"""
        with pytest.raises(ConfigurationError, match="MUSICALLY_IID"):
            Settings.from_env({k: v for k, v in REQUIRED_ENV.items() if k != "MUSICALLY_IID"})

    def test_invalid_timeout(self):
        """测试：超时时间格式错误"""
        with pytest.raises(ConfigurationError):
            Settings.from_env(dict(REQUIRED_ENV, MUSICALLY_TIMEOUT="soon"))
