"""邮件应用服务"""

from application.mail.services.message_loader import MessageLoader

__all__ = ["MessageLoader"]
