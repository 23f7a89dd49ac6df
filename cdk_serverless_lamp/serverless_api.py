from typing import Optional

from aws_cdk import (
    CfnOutput,
    Duration,
    aws_apigatewayv2 as apigwv2,
    aws_ec2 as ec2,
    aws_iam as iam,
    aws_lambda as _lambda,
    aws_rds as rds,
)
from aws_cdk.aws_apigatewayv2_integrations import HttpLambdaIntegration
from constructs import Construct

from cdk_serverless_lamp.common.logger import custom_logger
from cdk_serverless_lamp.constants.paths import Paths
from cdk_serverless_lamp.exceptions import ValidationError
from cdk_serverless_lamp.models.configs import DEFAULT_DB_MASTER_USER, DatabaseConfig


class ServerlessApi(Construct):
    """
    HTTP API backed by a PHP Lambda function running on the Bref runtime.

    :param bref_layer_version: Bref runtime layer ARN,
        e.g. arn:aws:lambda:us-west-1:209497400698:layer:php-74-fpm:12
    :param handler: custom function for the API; takes precedence over lambda_code_path
    :param lambda_code_path: code asset path, defaults to the bundled laravel58-bref skeleton
    :param vpc: VPC for the function, a new one is created when omitted
    :param database_config: endpoints and user exposed to the function environment
    :param rds_proxy: proxy the function role is allowed to connect through
    """

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        bref_layer_version: Optional[str] = None,
        handler: Optional[_lambda.IFunction] = None,
        lambda_code_path: Optional[str] = None,
        vpc: Optional[ec2.IVpc] = None,
        database_config: Optional[DatabaseConfig] = None,
        rds_proxy: Optional[rds.IDatabaseProxy] = None,
    ) -> None:
        super().__init__(scope, construct_id)
        self.logger = custom_logger(__name__)

        if handler is None and not bref_layer_version:
            raise ValidationError(f"{construct_id}: bref_layer_version is required unless a custom handler is given")
        if handler is not None and lambda_code_path:
            self.logger.warning(f"{construct_id}: custom handler supplied, ignoring lambda_code_path {lambda_code_path}")

        self.vpc = vpc or ec2.Vpc(self, "Vpc", max_azs=3, nat_gateways=1)
        self.handler = handler or self._create_handler(bref_layer_version, lambda_code_path, database_config)

        # allow the execution role to connect to the RDS proxy
        if rds_proxy is not None:
            self.handler.add_to_role_policy(iam.PolicyStatement(
                actions=["rds-db:connect"],
                resources=[rds_proxy.db_proxy_arn],
            ))

        self.http_api = apigwv2.HttpApi(
            self,
            "apiservice",
            default_integration=HttpLambdaIntegration("LambdaProxyIntegration", self.handler),
        )
        self.url = self.http_api.url
        CfnOutput(self, "EndpointURL", value=self.url)

    def _create_handler(self, bref_layer_version, lambda_code_path, database_config):
        code_path = lambda_code_path or Paths.DEFAULT_LAMBDA_ASSET_PATH
        self.logger.info(f"Creating Bref PHP function from {code_path}")

        environment = {
            "APP_STORAGE": "/tmp",
            "DB_WRITER": database_config.writer_endpoint if database_config else "",
            "DB_READER": database_config.effective_reader_endpoint() if database_config else "",
            "DB_USER": database_config.effective_master_user_name() if database_config else DEFAULT_DB_MASTER_USER,
        }
        secret = database_config.master_user_password_secret if database_config else None
        if secret is not None:
            environment["DB_SECRET_ARN"] = secret.secret_arn

        function = _lambda.Function(
            self,
            "handler",
            runtime=_lambda.Runtime.PROVIDED_AL2023,
            handler="public/index.php",
            layers=[_lambda.LayerVersion.from_layer_version_arn(self, "BrefPHPLayer", bref_layer_version)],
            code=_lambda.Code.from_asset(code_path),
            environment=environment,
            timeout=Duration.seconds(120),
            vpc=self.vpc,
        )

        # the password stays in Secrets Manager, the function reads it at runtime
        if secret is not None:
            secret.grant_read(function)

        return function


def build_serverless_laravel(scope: Construct, construct_id: str, *, laravel_path: str, **kwargs) -> ServerlessApi:
    """Serverless API for a local Laravel directory prepared with Bref."""
    return ServerlessApi(scope, construct_id, lambda_code_path=laravel_path, **kwargs)
