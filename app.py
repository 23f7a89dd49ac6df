#!/usr/bin/env python3
import os
import aws_cdk as cdk
from dotenv import load_dotenv

from cdk_serverless_lamp.common.logger import set_logger_config
from cdk_serverless_lamp.constants.project_config import ProjectConfig
from stacks.serverless_lamp_stack import ServerlessLampStack

load_dotenv()

# Load environment-specific configuration
environment = os.getenv("ENVIRONMENT", "dev").lower()
env_file = f"{environment}.env"
if os.path.exists(env_file):
    load_dotenv(env_file, override=True)
    print(f"Loaded environment configuration from {env_file}")
else:
    print(f"Warning: Environment file {env_file} not found")

app = cdk.App()

CONFIG = dict(app.node.try_get_context("project_config") or {})
CONFIG["account_id"] = os.getenv("ACCOUNT_ID", os.getenv("CDK_DEFAULT_ACCOUNT"))
CONFIG["region_name"] = os.getenv("REGION_NAME", os.getenv("CDK_DEFAULT_REGION"))
CONFIG["environment"] = environment
CONFIG["separator"] = os.getenv("SEPARATOR", "-")

# Optional overrides for the Bref layer and the Laravel source directory
app_config = dict(CONFIG.get("app_config") or {})
if os.getenv("BREF_LAYER_VERSION"):
    app_config["bref_layer_version"] = os.getenv("BREF_LAYER_VERSION")
if os.getenv("LARAVEL_PATH"):
    app_config["laravel_path"] = os.getenv("LARAVEL_PATH")
CONFIG["app_config"] = app_config

project_config = ProjectConfig.from_dict(CONFIG)
set_logger_config(service=project_config.project_name, owner=project_config.enterprise)

# Print some deployment information
print(f"Deploying Serverless LAMP to:")
print(f"  Account: {project_config.account_id}")
print(f"  Region: {project_config.region_name}")
print(f"  Environment: {project_config.environment.value}")

ServerlessLampStack(
    app,
    f"ServerlessLampStack-{project_config.environment.value}",
    project_config,
    env=cdk.Environment(
        account=project_config.account_id,
        region=project_config.region_name
    )
)

app.synth()
