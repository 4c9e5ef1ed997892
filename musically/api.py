"""
musical.ly 移动端 API 客户端模块

每个接口方法只负责组装参数, 然后走统一的请求流程:

    参数合并 -> RequestContext -> SigningInterceptor 签名 -> Transport 发送
    -> 保存 Cookie -> 大整数安全解码 -> APIResponse

签名算法由调用方通过 sign_url 提供, 本模块不关心其实现。
"""

import logging
from typing import Any, Dict, Mapping, Optional, Type, Union

from .config import MusicallyAPIConfig, StaticRequestParams
from .cookies import SessionCookieJar
from .crypto_utils import encrypt_with_xor
from .json_decoder import transform_response
from .models import (
    APIResponse,
    BaseResponseData,
    FollowRequest,
    FollowResponse,
    LikePostRequest,
    LikePostResponse,
    ListFollowersResponse,
    ListFollowingResponse,
    ListPostsResponse,
    LoginRequest,
    LoginResponse,
    UserProfileResponse,
)
from .params import PARAMS_ORDER, ParamsInput, params_serializer, to_params, with_default_list_params
from .signing import RequestContext, SigningInterceptor
from .transport import BaseTransport, CurlTransport

logger = logging.getLogger(__name__)

# ============================================================
# 接口路由
# ============================================================

LOGIN_PATH = "passport/user/login/"
USER_PATH = "aweme/v1/user/"
POSTS_PATH = "aweme/v1/aweme/post/"
FOLLOWERS_PATH = "aweme/v1/user/follower/list/"
FOLLOWING_PATH = "aweme/v1/user/following/list/"
FOLLOW_PATH = "aweme/v1/commit/follow/user/"
DIGG_PATH = "aweme/v1/commit/item/digg/"


def _require(value: Any, name: str) -> Any:
    """检查必填字段"""
    if value is None or value == "":
        raise ValueError(f"{name} is required")
    return value


class MusicallyAPI:
    """
    musical.ly API 客户端

    使用示例:
        params = get_request_params(device_id="...", iid="...", openudid="...")
        config = MusicallyAPIConfig(sign_url=my_signer)

        async with MusicallyAPI(params, config) as api:
            resp = await api.get_user("6800000000000000001")
            print(resp.data.user)

    Attributes:
        request_params: 设备/App 身份参数 (只读)
        config: 客户端配置 (只读)
        cookie_jar: 会话 Cookie, 客户端内所有请求共享
    """

    def __init__(
        self,
        request_params: StaticRequestParams,
        api_config: MusicallyAPIConfig,
        transport: Optional[BaseTransport] = None,
        **transport_options: Any
    ):
        """
        初始化客户端

        Args:
            request_params: 设备/App 身份参数
            api_config: 客户端配置 (必须包含 sign_url)
            transport: 自定义传输层, 默认使用 CurlTransport
            **transport_options: 透传给 CurlTransport 的参数 (timeout, proxy 等)
        """
        self.request_params = request_params
        self.config = api_config.with_defaults(request_params)
        self.cookie_jar = SessionCookieJar()
        self.serializer = params_serializer(PARAMS_ORDER)
        self.transport = transport or CurlTransport(**transport_options)
        self.interceptor = SigningInterceptor(
            base_url=self.config.base_url,
            sign_url=self.config.sign_url,
            device_id=request_params.device_id,
        )
        self._headers = {
            "host": self.config.host,
            "connection": "keep-alive",
            "accept-encoding": "gzip",
            "user-agent": self.config.user_agent,
        }

    @property
    def headers(self) -> Dict[str, str]:
        """每个请求都会携带的请求头 (副本)"""
        return dict(self._headers)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self) -> None:
        """关闭底层传输层"""
        await self.transport.close()

    # ============================================================
    # 请求流程
    # ============================================================

    def build_context(self, method: str, path: str, params: Optional[ParamsInput] = None) -> RequestContext:
        """创建请求上下文: 静态参数在前, 请求参数覆盖同名字段"""
        return RequestContext(
            method=method,
            path=path,
            params={**self.request_params.as_params(), **to_params(params)},
            serializer=self.serializer,
        )

    async def request(
        self,
        method: str,
        path: str,
        params: Optional[ParamsInput] = None,
        response_model: Type[BaseResponseData] = BaseResponseData
    ) -> APIResponse:
        """
        发送签名请求

        Args:
            method: HTTP 方法
            path: 接口路径 (相对 base_url)
            params: 请求参数
            response_model: 响应模型

        Returns:
            APIResponse

        Raises:
            ConfigurationError: 缺少序列化函数
            SigningError: 签名结果无效
            其它: 签名函数和传输层的异常原样抛出
        """
        context = self.build_context(method, path, params)
        signed = await self.interceptor.sign_request(context)

        logger.debug(f"Dispatching {signed.method} {path}")
        try:
            response = await self.transport.send(
                signed.method,
                signed.url,
                headers=self.headers,
                cookies=self.cookie_jar.snapshot(),
            )
        except Exception as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise

        self.cookie_jar.update(response.cookies)

        body = self.transform_response(response.text)
        data = response_model.model_validate(body) if isinstance(body, dict) else None
        return APIResponse[response_model](
            status_code=response.status_code,
            headers=response.headers,
            data=data,
            raw=body,
        )

    @staticmethod
    def transform_response(data: Any) -> Any:
        """使用大整数安全的方式解码响应体 (用户 ID 等保留为字符串)"""
        return transform_response(data)

    # ============================================================
    # 登录
    # ============================================================

    async def login_with_email(self, email: str, password: str) -> APIResponse:
        """
        使用邮箱和密码登录

        邮箱和密码在发送前经过 XOR 混淆。

        Args:
            email: 邮箱
            password: 密码

        Returns:
            APIResponse[LoginResponse]
        """
        _require(email, "email")
        _require(password, "password")
        return await self.login(LoginRequest(
            mix_mode=1,
            username="",
            email=encrypt_with_xor(email),
            mobile="",
            account="",
            password=encrypt_with_xor(password),
            captcha="",
            app_type="musical_ly",
        ))

    async def login(self, params: Union[LoginRequest, Mapping[str, Any]]) -> APIResponse:
        """
        登录

        Args:
            params: 登录参数 (凭据需已混淆)

        Returns:
            APIResponse[LoginResponse]
        """
        if not isinstance(params, LoginRequest):
            params = {**LoginRequest.model_validate(params).model_dump(), **params}
        return await self.request("POST", LOGIN_PATH, params, LoginResponse)

    # ============================================================
    # 用户与列表
    # ============================================================

    async def get_user(self, user_id: str) -> APIResponse:
        """
        获取用户资料

        Args:
            user_id: 用户 ID

        Returns:
            APIResponse[UserProfileResponse]
        """
        _require(user_id, "user_id")
        return await self.request("GET", USER_PATH, {"user_id": user_id}, UserProfileResponse)

    async def list_posts(self, params: ParamsInput) -> APIResponse:
        """
        获取用户帖子列表

        Args:
            params: ListPostsRequest 或字典, 至少包含 user_id

        Returns:
            APIResponse[ListPostsResponse]
        """
        return await self._list(POSTS_PATH, params, ListPostsResponse)

    async def list_followers(self, params: ParamsInput) -> APIResponse:
        """获取用户粉丝列表"""
        return await self._list(FOLLOWERS_PATH, params, ListFollowersResponse)

    async def list_following(self, params: ParamsInput) -> APIResponse:
        """获取用户关注列表"""
        return await self._list(FOLLOWING_PATH, params, ListFollowingResponse)

    async def _list(self, path: str, params: ParamsInput, response_model: Type[BaseResponseData]) -> APIResponse:
        merged = with_default_list_params(params)
        _require(merged.get("user_id"), "user_id")
        return await self.request("GET", path, merged, response_model)

    # ============================================================
    # 关注与点赞
    # ============================================================

    async def follow(self, user_id: str) -> APIResponse:
        """关注用户"""
        _require(user_id, "user_id")
        return await self.request("GET", FOLLOW_PATH, FollowRequest(user_id=user_id, type=1), FollowResponse)

    async def unfollow(self, user_id: str) -> APIResponse:
        """取消关注用户"""
        _require(user_id, "user_id")
        return await self.request("GET", FOLLOW_PATH, FollowRequest(user_id=user_id, type=0), FollowResponse)

    async def like_post(self, post_id: str) -> APIResponse:
        """点赞帖子"""
        _require(post_id, "post_id")
        return await self.request("GET", DIGG_PATH, LikePostRequest(aweme_id=post_id, type=1), LikePostResponse)

    async def unlike_post(self, post_id: str) -> APIResponse:
        """取消点赞帖子"""
        _require(post_id, "post_id")
        return await self.request("GET", DIGG_PATH, LikePostRequest(aweme_id=post_id, type=0), LikePostResponse)
