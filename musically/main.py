"""
musically HTTP 服务 - FastAPI 应用主入口

提供 RESTful API 接口用于:
1. 调试参数规范化 (查看签名原文的查询串)
2. 凭据 XOR 混淆/还原
3. 大整数安全的 JSON 解码
4. 通过签名服务代理 musical.ly 接口 (用户资料、帖子、粉丝、关注)

使用方法:
    uvicorn musically.main:app --host 0.0.0.0 --port 8000

代理接口需要配置环境变量 (见 musically.settings)。
"""

import json
import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Request
from pydantic import BaseModel, Field

from . import __version__
from .api import MusicallyAPI
from .config import MusicallyAPIConfig, get_request_params
from .crypto_utils import decrypt_with_xor, encrypt_with_xor
from .errors import ConfigurationError, SigningError
from .json_decoder import loads_bigint
from .logging_config import setup_logging
from .params import PARAMS_ORDER, serialize_params
from .settings import Settings
from .signers import RemoteSigner

logger = logging.getLogger(__name__)


# ================== Pydantic 模型定义 ==================

class CanonicalizeRequest(BaseModel):
    """参数规范化请求模型"""
    params: Dict[str, Any] = Field(..., description="查询参数", examples=[{"user_id": "1", "count": 20}])
    order: Optional[List[str]] = Field(None, description="自定义键顺序, 默认使用 App 的顺序")


class CanonicalizeResponse(BaseModel):
    """参数规范化响应模型"""
    query: str = Field(..., description="规范化后的查询串")


class ObfuscateRequest(BaseModel):
    """混淆请求模型"""
    text: str = Field(..., description="明文", examples=["a@b.com"])


class DeobfuscateRequest(BaseModel):
    """还原请求模型"""
    encoded: str = Field(..., description="十六进制混淆串", examples=["6445672b666a68"])


class DecodeRequest(BaseModel):
    """JSON 解码请求模型"""
    body: str = Field(..., description="原始响应体")


class ProxyResponse(BaseModel):
    """代理接口响应模型"""
    status_code: int = Field(..., description="上游 HTTP 状态码")
    ok: bool = Field(..., description="业务是否成功")
    data: Any = Field(None, description="解码后的响应体")


# ================== 生命周期管理 ==================

def create_api(settings: Settings) -> MusicallyAPI:
    """根据服务配置创建 API 客户端"""
    request_params = get_request_params(
        device_id=settings.device_id,
        iid=settings.iid,
        openudid=settings.openudid,
        fp=settings.fp,
    )
    config = MusicallyAPIConfig(
        base_url=settings.base_url,
        sign_url=RemoteSigner(settings.sign_server_url, timeout=settings.timeout),
    )
    return MusicallyAPI(request_params, config, timeout=settings.timeout, proxy=settings.proxy)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    app.state.api = None
    setup_logging()
    try:
        settings = Settings.from_env()
    except ConfigurationError as e:
        logger.warning(f"Proxy endpoints disabled: {e}")
        yield
        return

    setup_logging(settings.log_level)
    logger.info("Starting musically service...")
    async with create_api(settings) as api:
        app.state.api = api
        yield
    logger.info("Shutting down...")


# ================== FastAPI 应用创建 ==================

app = FastAPI(
    title="musically 服务",
    description="musical.ly 移动端 API 的签名请求工具与代理",
    version=__version__,
    lifespan=lifespan
)


def get_api(request: Request) -> MusicallyAPI:
    api = getattr(request.app.state, "api", None)
    if api is None:
        raise HTTPException(status_code=503, detail="代理未配置: 请设置 MUSICALLY_* 环境变量")
    return api


async def proxy_call(coro) -> ProxyResponse:
    """执行代理调用并把异常转换为 HTTP 错误"""
    try:
        resp = await coro
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SigningError as e:
        logger.error(f"Signing failed: {e}")
        raise HTTPException(status_code=502, detail=f"签名失败: {str(e)}")
    except Exception as e:
        logger.error(f"Upstream request failed: {e}")
        raise HTTPException(status_code=502, detail=f"上游请求失败: {str(e)}")
    return ProxyResponse(status_code=resp.status_code, ok=resp.ok, data=resp.raw)


# ================== 工具路由 ==================

@app.get("/", tags=["基础"])
async def root():
    """
    根路径 - 服务状态检查
    """
    return {
        "service": "musically",
        "version": __version__,
        "status": "running",
        "proxy_enabled": getattr(app.state, "api", None) is not None,
        "docs": "/docs"
    }


@app.post("/api/canonicalize", response_model=CanonicalizeResponse, tags=["工具"])
async def api_canonicalize(request: CanonicalizeRequest):
    """
    规范化查询参数

    按 App 的固定键顺序序列化参数, 结果即签名函数收到的查询串。
    """
    order = request.order if request.order is not None else PARAMS_ORDER
    return {"query": serialize_params(request.params, order)}


@app.post("/api/obfuscate", tags=["工具"])
async def api_obfuscate(request: ObfuscateRequest):
    """XOR 混淆登录凭据"""
    return {"encoded": encrypt_with_xor(request.text)}


@app.post("/api/deobfuscate", tags=["工具"])
async def api_deobfuscate(request: DeobfuscateRequest):
    """还原 XOR 混淆的凭据"""
    try:
        return {"text": decrypt_with_xor(request.encoded)}
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"还原失败: {str(e)}")


@app.post("/api/decode", tags=["工具"])
async def api_decode(request: DecodeRequest):
    """大整数安全地解码 JSON 响应体"""
    try:
        return {"data": loads_bigint(request.body)}
    except json.JSONDecodeError as e:
        raise HTTPException(status_code=400, detail=f"解码失败: {str(e)}")


# ================== 代理路由 ==================

@app.get("/api/users/{user_id}", response_model=ProxyResponse, tags=["musical.ly API"])
async def api_get_user(user_id: str, request: Request):
    """获取用户资料"""
    return await proxy_call(get_api(request).get_user(user_id))


@app.get("/api/users/{user_id}/posts", response_model=ProxyResponse, tags=["musical.ly API"])
async def api_list_posts(user_id: str, request: Request, count: int = 20, max_cursor: str = "0"):
    """获取用户帖子列表"""
    params = {"user_id": user_id, "count": count, "max_cursor": max_cursor}
    return await proxy_call(get_api(request).list_posts(params))


@app.get("/api/users/{user_id}/followers", response_model=ProxyResponse, tags=["musical.ly API"])
async def api_list_followers(user_id: str, request: Request, count: int = 20, max_time: Optional[int] = None):
    """获取用户粉丝列表"""
    params = {"user_id": user_id, "count": count, "max_time": max_time}
    return await proxy_call(get_api(request).list_followers(params))


@app.get("/api/users/{user_id}/following", response_model=ProxyResponse, tags=["musical.ly API"])
async def api_list_following(user_id: str, request: Request, count: int = 20, max_time: Optional[int] = None):
    """获取用户关注列表"""
    params = {"user_id": user_id, "count": count, "max_time": max_time}
    return await proxy_call(get_api(request).list_following(params))


# ================== 启动入口 ==================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "musically.main:app",
        host="0.0.0.0",
        port=8000
    )
