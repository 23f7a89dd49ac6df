from dataclasses import dataclass, field
from typing import Optional

from cdk_serverless_lamp.constants.environments import Environments
from cdk_serverless_lamp.exceptions import ConfigurationError


@dataclass
class ProjectConfig:
    """Deployment-wide settings read from the cdk.json context and the environment"""
    project_name: str
    environment: Environments
    account_id: Optional[str] = None
    region_name: Optional[str] = None
    enterprise: Optional[str] = None
    separator: str = "-"
    app_config: dict = field(default_factory=dict)

    @classmethod
    def from_dict(cls, config: dict) -> "ProjectConfig":
        if not config:
            raise ConfigurationError("project_config context is missing, check cdk.json")
        if not config.get("project_name"):
            raise ConfigurationError("project_name is required in project_config")

        environment = (config.get("environment") or Environments.DEV.value).lower()
        try:
            env = Environments(environment)
        except ValueError:
            raise ConfigurationError(f"Unknown environment '{environment}', expected one of {[e.value for e in Environments]}")

        return cls(
            project_name=config["project_name"],
            environment=env,
            account_id=config.get("account_id"),
            region_name=config.get("region_name"),
            enterprise=config.get("enterprise"),
            separator=config.get("separator") or "-",
            app_config=dict(config.get("app_config") or {}),
        )
