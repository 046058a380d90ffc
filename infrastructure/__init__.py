"""Infrastructure modules for the i18n API.

Centralized infrastructure components:
- configuration: Settings management (Settings, settings)
- logging: Structured logging (configure_logging, get_module_logger)
- operations: Operation results and error classification
- services: Dependency injection services (SettingsDep, TranslationServiceDep)
"""
