"""Mailbox relay infrastructure settings."""

from pydantic import Field, field_validator

from infrastructure.configuration.base import InfrastructureSettings


class MailboxSettings(InfrastructureSettings):
    """Dead-letter mailbox configuration.

    Controls where deferred requests are relayed, how often the pending queue
    is scanned, and how much work the mailbox is willing to hold.

    Environment Variables:
        gateway_url: Downstream gateway base URL (default: http://gateway:8080)
        MAILBOX_TICK_INTERVAL_SECONDS: Seconds between queue scans (default: 1)
        MAILBOX_RELAY_TIMEOUT_SECONDS: Timeout for one relay attempt (default: 10)
        MAILBOX_DEFAULT_DELAY_SECONDS: Restart delay when X-Delay-Duration is
            absent (default: 4)
        MAILBOX_MAX_QUEUE_DEPTH: Maximum pending requests, 0 for unbounded
            (default: 10000)
        MAILBOX_SCHEDULER_ENABLED: Start the background scan loop (default: True)
        MAILBOX_ADMISSION_RATE_LIMIT: Per-client admission rate limit
            (default: 600/second)

    Scan cadence:
        The tick interval is a sampling rate, not a retry policy. Each request
        is retried according to its own restart delay, so the interval should
        stay at or below the smallest delay callers are expected to send.

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        gateway = settings.mailbox.gateway_url
        interval = settings.mailbox.tick_interval_seconds
        ```
    """

    gateway_url: str = Field(
        default="http://gateway:8080",
        alias="gateway_url",
        description="Base URL of the gateway that executes relayed calls",
    )
    tick_interval_seconds: int = Field(
        default=1,
        alias="MAILBOX_TICK_INTERVAL_SECONDS",
        description="Seconds between two scans of the pending queue",
    )
    relay_timeout_seconds: float = Field(
        default=10.0,
        alias="MAILBOX_RELAY_TIMEOUT_SECONDS",
        description="Timeout applied to each relay attempt (seconds)",
    )
    default_delay_seconds: int = Field(
        default=4,
        alias="MAILBOX_DEFAULT_DELAY_SECONDS",
        description="Restart delay used when the caller does not send one",
    )
    max_queue_depth: int = Field(
        default=10000,
        alias="MAILBOX_MAX_QUEUE_DEPTH",
        description="Maximum number of pending requests (0 disables the bound)",
    )
    admission_rate_limit: str = Field(
        default="600/second",
        alias="MAILBOX_ADMISSION_RATE_LIMIT",
        description="Per-client admission limit in slowapi notation",
    )
    scheduler_enabled: bool = Field(
        default=True,
        alias="MAILBOX_SCHEDULER_ENABLED",
        description="Run the background retry scan loop",
    )

    @field_validator("tick_interval_seconds")
    @classmethod
    def validate_tick_interval(cls, v: int) -> int:
        """Ensure the scan loop runs at least once per second or slower."""
        if v < 1:
            raise ValueError("tick_interval_seconds must be at least 1")
        return v

    @field_validator("relay_timeout_seconds")
    @classmethod
    def validate_relay_timeout(cls, v: float) -> float:
        """Ensure relay attempts are always bounded."""
        if v <= 0:
            raise ValueError("relay_timeout_seconds must be positive")
        return v

    @field_validator("default_delay_seconds", "max_queue_depth")
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("value must not be negative")
        return v
