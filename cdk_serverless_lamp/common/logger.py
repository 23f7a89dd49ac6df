# Built-in imports
import logging
from typing import Optional

# External imports
from aws_lambda_powertools import Logger

# Global configuration shared by every construct logger
GLOBAL_LOG_LEVEL = logging.INFO
GLOBAL_SERVICE = "cdk-serverless-lamp"
GLOBAL_OWNER = None


def set_logger_config(
    log_level: Optional[int] = None,
    service: Optional[str] = None,
    owner: Optional[str] = None,
) -> None:
    """
    Sets the global logger configuration used by every custom_logger call
    that does not override it.

    :param log_level: Logging level (logging.INFO, logging.DEBUG, ...)
    :param service: Service name for all loggers
    :param owner: Owner of the deployment
    """
    global GLOBAL_LOG_LEVEL, GLOBAL_SERVICE, GLOBAL_OWNER

    if log_level is not None:
        GLOBAL_LOG_LEVEL = log_level

    if service is not None:
        GLOBAL_SERVICE = service

    if owner is not None:
        GLOBAL_OWNER = owner


def custom_logger(
    name: Optional[str] = None,
    service: Optional[str] = None,
    owner: Optional[str] = None,
    log_level: Optional[int] = None,
) -> Logger:
    """
    Returns a Powertools Logger for a construct or module.

    :param name: Component name, added to every record
    :param service: Service name (global setting when None)
    :param owner: Owner name (global setting when None)
    :param log_level: Logging level (global setting when None)
    :return: aws_lambda_powertools.Logger object
    """
    effective_log_level = log_level if log_level is not None else GLOBAL_LOG_LEVEL
    effective_service = service if service is not None else GLOBAL_SERVICE
    effective_owner = owner if owner is not None else GLOBAL_OWNER

    logger = Logger(service=effective_service, level=logging.getLevelName(effective_log_level))
    # loggers of one service share a formatter, keys are set per caller
    logger.append_keys(component=name, owner=effective_owner)
    return logger
