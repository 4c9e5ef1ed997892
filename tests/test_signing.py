"""测试请求签名拦截器"""

import asyncio

import pytest

from musically.errors import ConfigurationError, MissingSerializerError, SigningError
from musically.params import params_serializer
from musically.signing import RequestContext, SigningInterceptor, get_timestamps

BASE_URL = "https://api2.musical.ly/"
NOW = 1530000000.5


def fixed_clock():
    return NOW


def make_context(**params):
    return RequestContext(
        method="GET",
        path="aweme/v1/user/",
        params=params,
        serializer=params_serializer(),
    )


class TestTimestamps:
    """测试 get_timestamps"""

    def test_seconds_and_milliseconds(self):
        """测试：ts 为秒, _rticket 为毫秒"""
        assert get_timestamps(fixed_clock) == {"ts": 1530000000, "_rticket": 1530000000500}


class TestSigningInterceptor:
    """测试 SigningInterceptor.sign_request"""

    def test_signed_url_replaces_request(self):
        """测试：签名后的 URL 替换请求地址, 参数被清空"""
        calls = []

        async def sign_url(url, ts, device_id):
            calls.append((url, ts, device_id))
            return url + "&as=a1&cp=c1"

        interceptor = SigningInterceptor(BASE_URL, sign_url, "dev1", clock=fixed_clock)
        signed = asyncio.run(interceptor.sign_request(make_context(user_id="42", device_id="dev1")))

        expected = f"{BASE_URL}aweme/v1/user/?user_id=42&device_id=dev1&_rticket=1530000000500&ts=1530000000"
        assert calls == [(expected, 1530000000, "dev1")]
        assert signed.url == expected + "&as=a1&cp=c1"
        assert signed.params == {}
        assert signed.method == "GET"
        assert signed.path == "aweme/v1/user/"

    def test_original_context_untouched(self):
        """测试：原始上下文不被修改"""
        interceptor = SigningInterceptor(BASE_URL, lambda url, ts, d: url, "dev1", clock=fixed_clock)
        context = make_context(user_id="42")
        asyncio.run(interceptor.sign_request(context))
        assert context.params == {"user_id": "42"}
        assert context.url is None

    def test_stamps_override_caller_values(self):
        """测试：调用方传入的 ts/_rticket 被覆盖"""
        seen = []

        def sign_url(url, ts, device_id):
            seen.append(url)
            return url

        interceptor = SigningInterceptor(BASE_URL, sign_url, "dev1", clock=fixed_clock)
        asyncio.run(interceptor.sign_request(make_context(ts=1, _rticket=2)))
        assert seen[0].endswith("?_rticket=1530000000500&ts=1530000000")

    def test_sync_sign_url_supported(self):
        """测试：同步签名函数也可以使用"""
        interceptor = SigningInterceptor(BASE_URL, lambda url, ts, d: url + "&x=1", "dev1", clock=fixed_clock)
        signed = asyncio.run(interceptor.sign_request(make_context()))
        assert signed.url.endswith("&x=1")

    def test_missing_serializer(self):
        """测试：缺少序列化函数时报配置错误, 不调用签名函数"""
        calls = []
        interceptor = SigningInterceptor(BASE_URL, lambda *args: calls.append(args), "dev1")
        context = RequestContext(method="GET", path="aweme/v1/user/", params={})

        with pytest.raises(MissingSerializerError) as exc_info:
            asyncio.run(interceptor.sign_request(context))
        assert isinstance(exc_info.value, ConfigurationError)
        assert calls == []

    def test_signer_exception_propagates(self):
        """测试：签名函数的异常原样抛出"""

        async def sign_url(url, ts, device_id):
            raise RuntimeError("signer down")

        interceptor = SigningInterceptor(BASE_URL, sign_url, "dev1")
        with pytest.raises(RuntimeError, match="signer down"):
            asyncio.run(interceptor.sign_request(make_context()))

    @pytest.mark.parametrize("result", [None, "", 123])
    def test_invalid_signer_result(self, result):
        """测试：签名函数返回无效结果时报 SigningError"""
        interceptor = SigningInterceptor(BASE_URL, lambda url, ts, d: result, "dev1")
        with pytest.raises(SigningError):
            asyncio.run(interceptor.sign_request(make_context()))

    def test_concurrent_requests_independent(self):
        """测试：并发签名互不影响"""

        async def sign_url(url, ts, device_id):
            await asyncio.sleep(0)
            return url

        interceptor = SigningInterceptor(BASE_URL, sign_url, "dev1", clock=fixed_clock)

        async def run():
            return await asyncio.gather(*[
                interceptor.sign_request(make_context(user_id=str(i))) for i in range(10)
            ])

        results = asyncio.run(run())
        for i, signed in enumerate(results):
            assert f"?user_id={i}&" in signed.url
