"""
Factory functions for dependency injection.

Provides application-scoped providers for core infrastructure services.

Settings are a process-wide singleton (see ``infrastructure.configuration``).
The mailbox service is built once per application in the lifespan and read
back from ``app.state`` here, so route handlers never touch module-level
mutable state.

Usage:
    from infrastructure.services import SettingsDep, MailboxServiceDep

    @router.post("/deadletter/{function}")
    def admit(function: str, mailbox: MailboxServiceDep):
        mailbox.queue.add(...)
"""

from typing import TYPE_CHECKING

from fastapi import Request

from infrastructure.configuration import get_settings

if TYPE_CHECKING:
    from modules.deadletter.service import MailboxService


def get_mailbox_service(request: Request) -> "MailboxService":
    """
    Get the mailbox service built for the running application.

    Returns:
        MailboxService: The instance stored on ``app.state.mailbox``.

    Raises:
        RuntimeError: If the application was started without a mailbox service.
    """
    service = getattr(request.app.state, "mailbox", None)
    if service is None:
        raise RuntimeError("Mailbox service is not initialized")
    return service


__all__ = ["get_settings", "get_mailbox_service"]
