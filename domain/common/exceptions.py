"""领域异常"""


class DomainException(Exception):
    """领域异常基类"""


class InvalidOperationException(DomainException):
    """非法操作异常"""

    def __init__(self, operation: str, reason: str):
        self.operation = operation
        self.reason = reason
        super().__init__(f"Invalid operation '{operation}': {reason}")



class InvalidStateTransitionException(DomainException):
    """非法状态转换异常"""

    def __init__(self, entity: str, from_state: str, to_state: str, reason: str):
        self.entity = entity
        self.from_state = from_state
        self.to_state = to_state
        self.reason = reason
        super().__init__(f"{entity} cannot transition from '{from_state}' to '{to_state}': {reason}")
