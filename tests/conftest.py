"""测试公共 fixture"""

import json

import pytest

from musically.api import MusicallyAPI
from musically.config import MusicallyAPIConfig, get_request_params
from musically.transport import BaseTransport, TransportResponse


class FakeTransport(BaseTransport):
    """记录发送的请求, 按顺序返回预设响应"""

    def __init__(self, responses=None):
        self.calls = []
        self.responses = list(responses or [])
        self.closed = False

    async def send(self, method, url, *, headers=None, cookies=None):
        self.calls.append({
            "method": method,
            "url": url,
            "headers": headers,
            "cookies": dict(cookies) if cookies is not None else {},
        })
        if self.responses:
            return self.responses.pop(0)
        return make_response({"status_code": 0})

    async def close(self):
        self.closed = True


def make_response(body, status_code=200, cookies=None):
    """构造 TransportResponse, body 为字典时序列化为 JSON"""
    text = body if isinstance(body, str) else json.dumps(body)
    return TransportResponse(status_code=status_code, text=text, cookies=cookies or {})


class RecordingSigner:
    """记录调用参数的签名函数"""

    def __init__(self, suffix="&as=a1&cp=c1&mas=m1"):
        self.suffix = suffix
        self.calls = []

    async def __call__(self, url, ts, device_id):
        self.calls.append((url, ts, device_id))
        return url + self.suffix


@pytest.fixture
def request_params():
    return get_request_params(device_id="6500000000000000000", iid="6600000000000000000", openudid="abcdef0123456789")


@pytest.fixture
def signer():
    return RecordingSigner()


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def api(request_params, signer, transport):
    return MusicallyAPI(request_params, MusicallyAPIConfig(sign_url=signer), transport=transport)
