from enum import Enum


class Environments(Enum):
    DEV = "dev"
    QA = "qa"
    PROD = "prod"
