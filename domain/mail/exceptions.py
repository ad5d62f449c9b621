"""邮件领域异常"""

from typing import Any, Dict, Mapping, Optional

from domain.common.exceptions import DomainException


class TransportFailure(DomainException):
    """
    远端存储请求失败

    fetch/save/post 被拒绝时抛出。payload 为服务器返回的错误数据
    （通常包含 error 字段），会被合并到邮件实体上。
    """

    def __init__(self, payload: Optional[Mapping[str, Any]] = None, status_code: Optional[int] = None):
        self.payload: Dict[str, Any] = dict(payload or {})
        self.status_code = status_code
        detail = self.payload.get("error") or self.payload.get("message") or "request failed"
        if status_code is not None:
            super().__init__(f"HTTP {status_code}: {detail}")
        else:
            super().__init__(str(detail))


class SendRejected(DomainException):
    """
    发送被服务器拒绝

    传输成功但响应 status 不是 "success"。邮件本身仍然有效、可继续编辑。
    """

    def __init__(self, payload: Mapping[str, Any]):
        self.payload: Dict[str, Any] = dict(payload)
        self.status = self.payload.get("status")
        reason = self.payload.get("reason") or self.payload.get("message") or ""
        super().__init__(f"Send rejected with status {self.status!r}" + (f": {reason}" if reason else ""))
