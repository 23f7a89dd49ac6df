from cdk_serverless_lamp.database import DatabaseCluster
from cdk_serverless_lamp.models.configs import DatabaseConfig, ProxyTuning
from cdk_serverless_lamp.serverless_api import ServerlessApi, build_serverless_laravel

__all__ = ["DatabaseCluster", "DatabaseConfig", "ProxyTuning", "ServerlessApi", "build_serverless_laravel"]
