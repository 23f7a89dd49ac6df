from .custom_exceptions import ServerlessLampException, ConfigurationError, ValidationError

__all__ = ["ServerlessLampException", "ConfigurationError", "ValidationError"]
