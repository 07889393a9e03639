"""Infrastructure configuration module - public API.

This module provides centralized configuration management for the mailbox
relay using Pydantic BaseSettings.

Exports:
    Settings: Main settings class (for testing/overrides)
    MailboxSettings: Mailbox relay settings class (for testing)

Example:
    ```python
    from infrastructure.services import get_settings

    settings = get_settings()

    gateway_url = settings.mailbox.gateway_url

    if settings.is_production:
        # Production-specific logic...
    ```
"""

from infrastructure.configuration.settings import Settings, get_settings
from infrastructure.configuration.infrastructure.mailbox import MailboxSettings

__all__ = ["Settings", "MailboxSettings", "get_settings"]
