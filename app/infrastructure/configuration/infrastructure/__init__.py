"""Infrastructure settings __init__ - exports all infrastructure settings."""

from infrastructure.configuration.infrastructure.mailbox import MailboxSettings

__all__ = [
    "MailboxSettings",
]
