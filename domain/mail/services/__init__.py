"""邮件领域服务模块"""

from domain.mail.services.address_formatter import (
    ADDRESS_FIELDS,
    RECIPIENT_FIELDS,
    flatten_recipients,
    flattened_copy,
    format_full_address,
    format_full_addresses,
    join_address_list,
    short_address,
    split_address_list,
)
from domain.mail.services.mail_resource import MailResource
from domain.mail.services.message_path import (
    build_absolute_path,
    from_path_segment,
    to_path_segment,
)

__all__ = [
    "ADDRESS_FIELDS",
    "RECIPIENT_FIELDS",
    "MailResource",
    "build_absolute_path",
    "flatten_recipients",
    "flattened_copy",
    "format_full_address",
    "format_full_addresses",
    "from_path_segment",
    "join_address_list",
    "short_address",
    "split_address_list",
    "to_path_segment",
]
