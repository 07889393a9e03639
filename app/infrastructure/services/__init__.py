"""
Dependency injection services.

Provides type aliases and provider functions for FastAPI dependency injection.
"""

from infrastructure.services.dependencies import (
    SettingsDep,
    MailboxServiceDep,
)
from infrastructure.services.providers import (
    get_settings,
    get_mailbox_service,
)

__all__ = [
    "SettingsDep",
    "MailboxServiceDep",
    "get_settings",
    "get_mailbox_service",
]
