import pytest
from aws_cdk import Duration

from cdk_serverless_lamp.builders.name_builder import NameBuilder
from cdk_serverless_lamp.constants.environments import Environments
from cdk_serverless_lamp.constants.paths import Paths
from cdk_serverless_lamp.constants.project_config import ProjectConfig
from cdk_serverless_lamp.exceptions import ConfigurationError
from cdk_serverless_lamp.models.configs import DatabaseConfig, ProxyTuning, resolve_rds_proxy


@pytest.mark.parametrize("value, expected", [(None, True), (True, True), (False, False)])
def test_resolve_rds_proxy(value, expected):
    assert resolve_rds_proxy(value) is expected


def test_database_config_defaults():
    config = DatabaseConfig(writer_endpoint="writer")
    assert config.effective_reader_endpoint() == "writer"
    assert config.effective_master_user_name() == "admin"
    assert config.master_user_password_secret is None


def test_proxy_tuning_only_forwards_set_fields():
    tuning = ProxyTuning(require_tls=True, borrow_timeout=Duration.seconds(30))
    kwargs = tuning.to_kwargs()
    assert set(kwargs) == {"require_tls", "borrow_timeout"}
    assert ProxyTuning().to_kwargs() == {}


def test_project_config_from_dict():
    config = ProjectConfig.from_dict({
        "project_name": "Serverless-Lamp",
        "environment": "PROD",
        "account_id": "123456789012",
        "region_name": "us-west-1",
        "app_config": {"instance_type": "t3.small"},
    })
    assert config.environment is Environments.PROD
    assert config.app_config["instance_type"] == "t3.small"
    assert config.separator == "-"
    assert NameBuilder(config).build("secret", "db-master-arn") == "serverless-lamp-prod-secret-db-master-arn"


def test_project_config_defaults_to_dev():
    config = ProjectConfig.from_dict({"project_name": "lamp"})
    assert config.environment is Environments.DEV
    assert config.app_config == {}


@pytest.mark.parametrize("raw", [None, {}, {"app_config": {}}, {"project_name": "lamp", "environment": "staging"}])
def test_project_config_rejects_invalid(raw):
    with pytest.raises(ConfigurationError):
        ProjectConfig.from_dict(raw)


def test_paths_default_to_bundled_skeleton(tmp_path):
    assert Paths({}).LOCAL_LARAVEL == Paths.DEFAULT_LAMBDA_ASSET_PATH
    assert Paths({"laravel_path": str(tmp_path)}).LOCAL_LARAVEL == str(tmp_path)
