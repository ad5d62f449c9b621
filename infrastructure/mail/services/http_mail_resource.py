"""HTTP 邮件资源实现"""

import asyncio
import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

import httpx

from domain.mail.exceptions import TransportFailure


class HttpMailResource:
    """HTTP 邮件资源实现

    使用 httpx.AsyncClient 访问邮件模块的 REST 接口：
    - fetch: GET {base_url}/{id}/{view}
    - post:  POST {base_url}/{id}/{action}（JSON 载荷）
    - save:  等价于 post(id, "save", data)

    非 2xx 响应和网络错误统一转换为 TransportFailure。
    只有 GET 请求在网络错误时按 RETRY_INTERVALS 重试，
    保存和发送不会自动重试。

    Attributes:
        RETRY_INTERVALS: 默认重试间隔列表（秒）
        TIMEOUT: 默认请求超时时间（秒）
    """

    RETRY_INTERVALS: List[float] = [1.0, 5.0]  # 重试间隔：1秒, 5秒
    TIMEOUT: float = 30.0

    def __init__(
        self,
        base_url: str,
        timeout: float = TIMEOUT,
        retry_intervals: Optional[Sequence[float]] = None,
        client: Optional[httpx.AsyncClient] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """初始化资源

        Args:
            base_url: 当前用户邮件模块的根 URL
            timeout: 请求超时（秒）
            retry_intervals: GET 重试间隔，None 使用默认值
            client: 可选的 httpx 客户端（测试时注入）
            logger: 日志记录器（可选）
        """
        self._base_url = base_url.rstrip("/")
        self._retry_intervals = list(self.RETRY_INTERVALS if retry_intervals is None else retry_intervals)
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=timeout,
            headers={"Accept": "application/json"},
        )
        self._logger = logger or logging.getLogger(__name__)

    @property
    def base_url(self) -> str:
        return self._base_url

    def url_for(self, id: str, action: Optional[str] = None) -> str:
        """拼接资源 URL"""
        url = f"{self._base_url}/{id}" if id else self._base_url
        if action:
            url = f"{url}/{action}"
        return url

    async def fetch(self, id: str, view: str) -> Dict[str, Any]:
        """获取邮件的某种表示，网络错误时重试"""
        url = self.url_for(id, view)
        last_error = ""

        for attempt in range(len(self._retry_intervals) + 1):
            try:
                response = await self._client.get(url)
                return self._decode(url, response)

            except httpx.TimeoutException:
                last_error = "Request timeout"
                self._logger.warning(f"Mail fetch timeout: {url} (attempt {attempt + 1})")

            except httpx.RequestError as e:
                last_error = f"Request error: {str(e)}"
                self._logger.warning(f"Mail fetch error: {url} - {last_error} (attempt {attempt + 1})")

            if attempt < len(self._retry_intervals):
                wait_time = self._retry_intervals[attempt]
                self._logger.debug(f"Waiting {wait_time}s before retry...")
                await asyncio.sleep(wait_time)

        total_attempts = len(self._retry_intervals) + 1
        self._logger.error(f"Mail fetch failed after {total_attempts} attempts: {url} - {last_error}")
        raise TransportFailure({"error": last_error})

    async def save(self, id: str, data: Mapping[str, Any]) -> Dict[str, Any]:
        """保存数据"""
        return await self.post(id, "save", data)

    async def post(self, id: str, action: str, data: Mapping[str, Any]) -> Dict[str, Any]:
        """对邮件执行动作"""
        url = self.url_for(id, action)
        try:
            response = await self._client.post(url, json=dict(data))
        except httpx.TimeoutException:
            self._logger.error(f"Mail {action} timeout: {url}")
            raise TransportFailure({"error": "Request timeout"})
        except httpx.RequestError as e:
            self._logger.error(f"Mail {action} error: {url} - {e}")
            raise TransportFailure({"error": f"Request error: {str(e)}"})

        return self._decode(url, response)

    def _decode(self, url: str, response: httpx.Response) -> Dict[str, Any]:
        """解析响应，非 2xx 时抛出 TransportFailure"""
        try:
            payload = response.json() if response.content else {}
        except ValueError:
            payload = {"error": response.text}

        if not isinstance(payload, dict):
            payload = {"data": payload}

        if 200 <= response.status_code < 300:
            self._logger.debug(f"Mail request ok: {url} (status {response.status_code})")
            return payload

        payload.setdefault("error", f"HTTP {response.status_code}")
        self._logger.warning(f"Mail request failed: {url} - HTTP {response.status_code}")
        raise TransportFailure(payload, status_code=response.status_code)

    async def aclose(self) -> None:
        """关闭自己创建的 httpx 客户端"""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "HttpMailResource":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
