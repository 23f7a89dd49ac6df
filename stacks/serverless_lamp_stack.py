from aws_cdk import (
    Stack,
    CfnOutput,
    Tags,
    aws_ec2 as ec2,
)
from constructs import Construct

from cdk_serverless_lamp import DatabaseCluster, DatabaseConfig, build_serverless_laravel
from cdk_serverless_lamp.builders.name_builder import NameBuilder
from cdk_serverless_lamp.constants.paths import Paths
from cdk_serverless_lamp.constants.services import Services
from cdk_serverless_lamp.exceptions import ConfigurationError


class ServerlessLampStack(Stack):
    def __init__(self, scope: Construct, construct_id: str, project_config, **kwargs):
        super().__init__(scope, construct_id, **kwargs)
        self.PROJECT_CONFIG = project_config
        self.name_builder = NameBuilder(self.PROJECT_CONFIG)
        self.Paths = Paths(self.PROJECT_CONFIG.app_config)

        self._create_vpc()
        self._create_database()
        self._create_api()
        self._create_outputs()
        self._create_tags()

    def _create_vpc(self):
        self.vpc = ec2.Vpc(self, "Vpc", max_azs=3, nat_gateways=1)

    def _create_database(self):
        app_config = self.PROJECT_CONFIG.app_config
        instance_type = app_config.get("instance_type")

        self.database = DatabaseCluster(
            self,
            "Database",
            vpc=self.vpc,
            master_user_name=app_config.get("master_user_name"),
            instance_type=ec2.InstanceType(instance_type) if instance_type else None,
            rds_proxy=app_config.get("rds_proxy"),
            single_instance_only=app_config.get("single_instance_only"),
            instances=app_config.get("instances"),
        )

    def _create_api(self):
        bref_layer_version = self.PROJECT_CONFIG.app_config.get("bref_layer_version")
        if not bref_layer_version:
            raise ConfigurationError("app_config.bref_layer_version is required, check cdk.json")

        self.api = build_serverless_laravel(
            self,
            "ServerlessLaravel",
            laravel_path=self.Paths.LOCAL_LARAVEL,
            bref_layer_version=bref_layer_version,
            vpc=self.vpc,
            database_config=DatabaseConfig(
                writer_endpoint=self.database.writer_endpoint(),
                reader_endpoint=self.database.reader_endpoint(),
                master_user_name=self.database.master_user,
            ),
            rds_proxy=self.database.rds_proxy,
        )
        self.database.security_group.connections.allow_from(
            self.api.handler, ec2.Port.tcp(self.database.port), "Laravel function to MySQL"
        )

    def _create_outputs(self):
        CfnOutput(
            self, "DbMasterSecretArn",
            value=self.database.master_password.secret_arn,
            export_name=self.name_builder.build(Services.SECRET, "db-master-arn"),
            description="ARN of the generated database master user secret"
        )
        if self.database.rds_proxy is not None:
            CfnOutput(
                self, "RdsProxyEndpoint",
                value=self.database.rds_proxy.endpoint,
                export_name=self.name_builder.build(Services.RDS_PROXY, "endpoint"),
                description="Endpoint the Laravel function connects through"
            )

    def _create_tags(self):
        tags = {
            "Project": self.PROJECT_CONFIG.project_name,
            "Environment": self.PROJECT_CONFIG.environment.value,
            "Enterprise": self.PROJECT_CONFIG.enterprise,
        }
        for key, value in tags.items():
            if value:
                Tags.of(self).add(key, value)
