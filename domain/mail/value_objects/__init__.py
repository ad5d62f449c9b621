"""邮件值对象模块"""

from domain.mail.value_objects.email_address import EmailAddress
from domain.mail.value_objects.message_fields import (
    UNASSIGNED_UID,
    PersistedFields,
    merge_remote,
)

__all__ = ["EmailAddress", "PersistedFields", "UNASSIGNED_UID", "merge_remote"]
