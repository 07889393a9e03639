"""
Type aliases for FastAPI dependency injection.

Provides annotated type hints for common infrastructure dependencies.
"""

from typing import Annotated
from fastapi import Depends
from infrastructure.configuration import Settings
from infrastructure.services.providers import get_settings, get_mailbox_service
from modules.deadletter.service import MailboxService

# Settings dependency
SettingsDep = Annotated[Settings, Depends(get_settings)]

# Mailbox service dependency - queue, scheduler and metrics of the running app
MailboxServiceDep = Annotated[MailboxService, Depends(get_mailbox_service)]

__all__ = [
    "SettingsDep",
    "MailboxServiceDep",
]
