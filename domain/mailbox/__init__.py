"""
邮箱界限上下文

邮件实体只依赖邮箱的路径和 UID 索引。
"""

from domain.mailbox.entities.mailbox import Mailbox

__all__ = ["Mailbox"]
