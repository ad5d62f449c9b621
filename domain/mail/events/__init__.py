"""邮件领域事件模块"""

from domain.mail.events.mail_events import (
    MessageHydrated,
    MessageHydrationFailed,
    MessageRenumbered,
    MessageSent,
)

__all__ = [
    "MessageHydrated",
    "MessageHydrationFailed",
    "MessageRenumbered",
    "MessageSent",
]
