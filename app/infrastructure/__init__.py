"""Infrastructure modules for the mailbox relay.

Centralized infrastructure components:
- configuration: Settings management (Settings, MailboxSettings, get_settings)
- logging: Structured logging (configure_logging, get_module_logger)
- operations: Operation results and gateway response classification
- services: Dependency injection services (SettingsDep, MailboxServiceDep)
"""
