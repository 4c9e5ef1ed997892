"""
Pydantic 模型定义

请求模型只校验必填字段; 响应模型字段都是可选的, 并保留未声明的字段,
业务错误 (status_code 非 0) 由调用方自行判断。
ID 类字段在解码时可能是字符串 (见 json_decoder), 统一声明为 str。
"""

from typing import Any, Dict, Generic, List, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field


# ============================================================
# 请求模型
# ============================================================

class LoginRequest(BaseModel):
    """登录请求参数 (email/password 需先经过 XOR 混淆)"""
    mix_mode: int = 1
    username: str = ""
    email: str = ""
    mobile: str = ""
    account: str = ""
    password: str = Field(..., description="混淆后的密码")
    captcha: str = ""
    app_type: str = "musical_ly"


class ListRequest(BaseModel):
    """列表类请求的公共参数"""
    user_id: str = Field(..., description="用户 ID")
    count: Optional[int] = Field(None, description="每页数量")
    retry_type: Optional[str] = None


class ListPostsRequest(ListRequest):
    """帖子列表请求参数"""
    max_cursor: Optional[Union[int, str]] = Field(None, description="分页游标")


class ListFollowersRequest(ListRequest):
    """粉丝列表请求参数"""
    max_time: Optional[int] = Field(None, description="分页时间游标")


class ListFollowingRequest(ListRequest):
    """关注列表请求参数"""
    max_time: Optional[int] = Field(None, description="分页时间游标")


class FollowRequest(BaseModel):
    """关注/取关请求参数"""
    user_id: str
    type: int = Field(..., description="1 关注, 0 取关")


class LikePostRequest(BaseModel):
    """点赞/取消点赞请求参数"""
    aweme_id: str
    type: int = Field(..., description="1 点赞, 0 取消")


# ============================================================
# 响应模型
# ============================================================

class BaseResponseData(BaseModel):
    """所有响应的公共字段"""
    model_config = ConfigDict(extra="allow")

    status_code: Optional[int] = None
    status_msg: Optional[str] = None
    extra: Optional[Dict[str, Any]] = None

    @property
    def succeeded(self) -> bool:
        """业务状态码是否为 0"""
        return self.status_code == 0


class LoginResponse(BaseResponseData):
    """登录响应"""
    message: Optional[str] = None
    data: Optional[Dict[str, Any]] = None

    @property
    def succeeded(self) -> bool:
        """登录接口不返回 status_code, 以 message 和 data.error_code 判断"""
        if self.message != "success":
            return False
        return not (self.data or {}).get("error_code")


class UserProfileResponse(BaseResponseData):
    """用户资料响应"""
    user: Optional[Dict[str, Any]] = None


class ListPostsResponse(BaseResponseData):
    """帖子列表响应"""
    aweme_list: Optional[List[Dict[str, Any]]] = None
    max_cursor: Optional[Union[int, str]] = None
    min_cursor: Optional[Union[int, str]] = None
    has_more: Optional[int] = None


class ListFollowersResponse(BaseResponseData):
    """粉丝列表响应"""
    followers: Optional[List[Dict[str, Any]]] = None
    has_more: Optional[bool] = None
    max_time: Optional[int] = None
    min_time: Optional[int] = None
    total: Optional[int] = None


class ListFollowingResponse(BaseResponseData):
    """关注列表响应"""
    followings: Optional[List[Dict[str, Any]]] = None
    has_more: Optional[bool] = None
    max_time: Optional[int] = None
    min_time: Optional[int] = None
    total: Optional[int] = None


class FollowResponse(BaseResponseData):
    """关注/取关响应"""
    follow_status: Optional[int] = None
    watch_status: Optional[int] = None


class LikePostResponse(BaseResponseData):
    """点赞/取消点赞响应"""
    is_digg: Optional[int] = None


T = TypeVar("T", bound=BaseResponseData)


class APIResponse(BaseModel, Generic[T]):
    """
    接口调用结果

    Attributes:
        status_code: HTTP 状态码
        headers: 响应头
        data: 解析后的响应模型 (响应体不是 JSON 对象时为 None)
        raw: 解码后的原始响应体
    """
    status_code: int
    headers: Dict[str, str] = {}
    data: Optional[T] = None
    raw: Any = None

    @property
    def ok(self) -> bool:
        """业务是否成功 (缺少状态码视为失败)"""
        return self.data is not None and self.data.succeeded
