import aws_cdk.aws_ec2 as ec2

from cdk_serverless_lamp import DatabaseCluster, ServerlessApi
from cdk_serverless_lamp.common import logger as logger_module
from cdk_serverless_lamp.common.logger import custom_logger, set_logger_config

from .conftest import BREF_LAYER


def test_constructs_use_configured_service(stack, vpc, monkeypatch):
    monkeypatch.setattr(logger_module, "GLOBAL_SERVICE", logger_module.GLOBAL_SERVICE)
    monkeypatch.setattr(logger_module, "GLOBAL_OWNER", logger_module.GLOBAL_OWNER)
    set_logger_config(service="my-project", owner="acme")

    database = DatabaseCluster(stack, "Database", vpc=vpc, rds_proxy=False)
    api = ServerlessApi(stack, "Api", bref_layer_version=BREF_LAYER, vpc=vpc)

    assert database.logger.service == "my-project"
    assert api.logger.service == "my-project"


def test_custom_logger_overrides_global_service():
    assert custom_logger("component", service="other-service").service == "other-service"
