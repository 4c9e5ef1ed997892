"""
会话 Cookie 存储

同一个客户端的所有请求共享一个 SessionCookieJar。
并发请求会同时读取 (发送前取快照) 和写入 (保存 Set-Cookie), 所有访问都在锁内完成。
"""

import logging
import threading
from typing import Dict, Optional

from curl_cffi.requests import Cookies

logger = logging.getLogger(__name__)


class SessionCookieJar:
    """线程安全的 Cookie 存储, 底层使用 curl_cffi 的 Cookies"""

    def __init__(self, cookies: Optional[Cookies] = None):
        self._lock = threading.Lock()
        self._cookies = Cookies(cookies)

    def snapshot(self) -> Cookies:
        """返回当前 Cookie 的副本, 用于发送请求"""
        with self._lock:
            return Cookies(self._cookies)

    def update(self, cookies) -> None:
        """
        保存响应中的 Cookie

        Args:
            cookies: curl_cffi Cookies、CookieJar 或 dict
        """
        if not cookies:
            return
        with self._lock:
            self._cookies.update(cookies)
        logger.debug(f"Stored {len(cookies)} cookies")

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        with self._lock:
            return self._cookies.get(name, default)

    def as_dict(self) -> Dict[str, str]:
        with self._lock:
            return {cookie.name: cookie.value for cookie in self._cookies.jar}

    def clear(self) -> None:
        with self._lock:
            self._cookies.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._cookies.jar)
