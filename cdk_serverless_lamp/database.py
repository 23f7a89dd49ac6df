import json
from typing import List, Optional

from aws_cdk import (
    RemovalPolicy,
    Stack,
    aws_ec2 as ec2,
    aws_iam as iam,
    aws_rds as rds,
    aws_secretsmanager as secretsmanager,
)
from constructs import Construct, IDependable

from cdk_serverless_lamp.common.logger import custom_logger
from cdk_serverless_lamp.exceptions import ValidationError
from cdk_serverless_lamp.models.configs import DEFAULT_DB_MASTER_USER, ProxyTuning, resolve_rds_proxy

MYSQL_PORT = 3306
DEFAULT_INSTANCE_TYPE = "t3.medium"
PASSWORD_LENGTH = 12

# see: https://aws.amazon.com/blogs/compute/using-amazon-rds-proxy-with-aws-lambda/
PROXY_SECRET_ACTIONS = [
    "secretsmanager:GetResourcePolicy",
    "secretsmanager:GetSecretValue",
    "secretsmanager:DescribeSecret",
    "secretsmanager:ListSecretVersionIds",
]


class DatabaseCluster(Construct):
    """
    MySQL database for the serverless API: an Aurora MySQL cluster, or a single
    MySQL instance, with a generated master secret and an optional RDS Proxy.

    :param vpc: VPC for the database and the proxy
    :param engine: cluster engine, defaults to Aurora MySQL 3.04.0; the security
        group opens the engine default port. Ignored for a single instance.
    :param master_user_name: master username, defaults to admin
    :param instance_type: instance type of the database, defaults to t3.medium
    :param rds_proxy: create an RDS Proxy; only an explicit False disables it
    :param rds_proxy_options: extra proxy settings
    :param single_instance_only: create one DB instance instead of a cluster
    :param instances: number of cluster instances, defaults to 1
    """

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        vpc: ec2.IVpc,
        engine: Optional[rds.IClusterEngine] = None,
        master_user_name: Optional[str] = None,
        instance_type: Optional[ec2.InstanceType] = None,
        rds_proxy: Optional[bool] = None,
        rds_proxy_options: Optional[ProxyTuning] = None,
        single_instance_only: Optional[bool] = None,
        instances: Optional[int] = None,
    ) -> None:
        super().__init__(scope, construct_id)
        self.logger = custom_logger(__name__)

        enable_proxy = resolve_rds_proxy(rds_proxy)
        instance_count = 1 if instances is None else instances
        if instance_count < 1:
            raise ValidationError(f"{construct_id}: instances must be at least 1, got {instance_count}")
        if single_instance_only and instance_count > 1:
            raise ValidationError(f"{construct_id}: single_instance_only cannot be combined with {instance_count} instances")

        self.master_user = master_user_name or DEFAULT_DB_MASTER_USER
        self.db_cluster: Optional[rds.IDatabaseCluster] = None
        self.db_instance: Optional[rds.IDatabaseInstance] = None
        self.rds_proxy: Optional[rds.DatabaseProxy] = None
        self._run_before: List[IDependable] = []

        instance_type = instance_type or ec2.InstanceType(DEFAULT_INSTANCE_TYPE)

        self.master_password = self._create_master_secret()
        self.security_group = ec2.SecurityGroup(self, "DbSecurityGroup", vpc=vpc)
        self.port = (engine.default_port if engine is not None and not single_instance_only else None) or MYSQL_PORT
        self.security_group.connections.allow_internally(ec2.Port.tcp(self.port))

        if single_instance_only:
            self._create_instance(vpc, instance_type)
        else:
            self._create_cluster(vpc, engine, instance_type, instance_count)

        if enable_proxy:
            self._create_proxy(vpc, rds_proxy_options or ProxyTuning())

    def _create_master_secret(self) -> secretsmanager.Secret:
        """Generate and store the master user password in Secrets Manager"""
        return secretsmanager.Secret(
            self,
            "DbMasterSecret",
            secret_name=f"{Stack.of(self).stack_name}-DbMasterSecret",
            generate_secret_string=secretsmanager.SecretStringGenerator(
                secret_string_template=json.dumps({"username": self.master_user}),
                generate_string_key="password",
                password_length=PASSWORD_LENGTH,
                exclude_punctuation=True,
                include_space=False,
            ),
        )

    def _create_instance(self, vpc, instance_type):
        self.logger.info(f"Creating single MySQL instance ({instance_type.to_string()})")
        self.db_instance = rds.DatabaseInstance(
            self,
            "DBInstance",
            engine=rds.DatabaseInstanceEngine.mysql(version=rds.MysqlEngineVersion.VER_8_0),
            credentials=rds.Credentials.from_secret(self.master_password),
            vpc=vpc,
            security_groups=[self.security_group],
            instance_type=instance_type,
            deletion_protection=False,
            removal_policy=RemovalPolicy.DESTROY,
        )
        self._run_before.append(self.db_instance)

    def _create_cluster(self, vpc, engine, instance_type, instance_count):
        self.logger.info(f"Creating Aurora cluster with {instance_count} instance(s) ({instance_type.to_string()})")
        self.db_cluster = rds.DatabaseCluster(
            self,
            "DBCluster",
            engine=engine or rds.DatabaseClusterEngine.aurora_mysql(version=rds.AuroraMysqlEngineVersion.VER_3_04_0),
            credentials=rds.Credentials.from_secret(self.master_password),
            writer=rds.ClusterInstance.provisioned("Instance1", instance_type=instance_type),
            readers=[
                rds.ClusterInstance.provisioned(f"Instance{index}", instance_type=instance_type)
                for index in range(2, instance_count + 1)
            ],
            vpc=vpc,
            security_groups=[self.security_group],
            removal_policy=RemovalPolicy.DESTROY,
        )

        # Workaround for the proxy target group being created before the instance exists
        cfn_db_instance = next(
            child for child in self.db_cluster.node.find_all() if isinstance(child, rds.CfnDBInstance)
        )
        self._run_before.append(cfn_db_instance)

    def _create_proxy(self, vpc, tuning: ProxyTuning):
        proxy_role = iam.Role(
            self,
            "RdsProxyRole",
            assumed_by=iam.ServicePrincipal("rds.amazonaws.com"),
        )
        proxy_role.add_to_policy(iam.PolicyStatement(
            actions=PROXY_SECRET_ACTIONS,
            resources=[self.master_password.secret_arn],
        ))

        proxy_name = f"{Stack.of(self).stack_name}-RDSProxy"
        self.logger.info(f"Creating RDS proxy {proxy_name}")
        target = self.db_cluster if self.db_cluster is not None else self.db_instance
        self.rds_proxy = target.add_proxy(
            "RDSProxy",
            vpc=vpc,
            secrets=[self.master_password],
            iam_auth=True,
            db_proxy_name=proxy_name,
            security_groups=[self.security_group],
            role=proxy_role,
            **tuning.to_kwargs(),
        )

        # ensure the DB instance is ready before creating the proxy
        self.rds_proxy.node.add_dependency(*self._run_before)

    def writer_endpoint(self) -> str:
        """Hostname the API should write to: the proxy when present"""
        if self.rds_proxy is not None:
            return self.rds_proxy.endpoint
        if self.db_cluster is not None:
            return self.db_cluster.cluster_endpoint.hostname
        return self.db_instance.db_instance_endpoint_address

    def reader_endpoint(self) -> str:
        if self.rds_proxy is not None:
            return self.rds_proxy.endpoint
        if self.db_cluster is not None:
            return self.db_cluster.cluster_read_endpoint.hostname
        return self.db_instance.db_instance_endpoint_address
