# -*- coding: utf-8 -*-

class ServerlessLampException(Exception):
    """Base exception for serverless LAMP constructs"""
    pass

class ConfigurationError(ServerlessLampException):
    """Project configuration related errors"""
    pass

class ValidationError(ServerlessLampException):
    """Construct option validation errors"""
    pass
