"""
Data layer construct: RDS PostgreSQL for customer records + DynamoDB activity table.
"""

from aws_cdk import (
    RemovalPolicy,
    Duration,
    aws_ec2 as ec2,
    aws_rds as rds,
    aws_secretsmanager as secretsmanager,
    aws_dynamodb as dynamodb,
)
from constructs import Construct


class DataLayerConstruct(Construct):
    """Provision storage for customers, tasks and contact logs."""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        environment: str,
        db_instance_class: str,
        db_allocated_storage: int,
        provision_database: bool = True,
    ) -> None:
        super().__init__(scope, construct_id)

        self.vpc = None
        self.db_secret = None
        self.db_instance = None

        if provision_database:
            # Isolated subnets only: the Lambda reaches RDS and DynamoDB through endpoints.
            self.vpc = ec2.Vpc(
                self,
                "Vpc",
                max_azs=2,
                nat_gateways=0,
                subnet_configuration=[
                    ec2.SubnetConfiguration(
                        name="isolated",
                        subnet_type=ec2.SubnetType.PRIVATE_ISOLATED,
                        cidr_mask=24,
                    )
                ],
            )
            self.vpc.add_gateway_endpoint(
                "DynamoDbEndpoint",
                service=ec2.GatewayVpcEndpointAwsService.DYNAMODB,
            )
            self.vpc.add_interface_endpoint(
                "SecretsManagerEndpoint",
                service=ec2.InterfaceVpcEndpointAwsService.SECRETS_MANAGER,
            )

            # Secret for DB credentials (username auto-generated).
            self.db_secret = secretsmanager.Secret(
                self,
                "DbCredentials",
                generate_secret_string=secretsmanager.SecretStringGenerator(
                    secret_string_template='{"username": "app_user"}',
                    generate_string_key="password",
                    exclude_punctuation=True,
                ),
            )

            self.db_instance = rds.DatabaseInstance(
                self,
                "Postgres",
                engine=rds.DatabaseInstanceEngine.postgres(
                    version=rds.PostgresEngineVersion.VER_16_3
                ),
                vpc=self.vpc,
                vpc_subnets=ec2.SubnetSelection(subnet_type=ec2.SubnetType.PRIVATE_ISOLATED),
                instance_type=ec2.InstanceType(db_instance_class),
                credentials=rds.Credentials.from_secret(self.db_secret),
                database_name="customers",
                allocated_storage=db_allocated_storage,
                storage_encrypted=True,
                backup_retention=Duration.days(3 if environment == "prod" else 0),
                multi_az=environment == "prod",
                publicly_accessible=False,
                deletion_protection=environment == "prod",
                removal_policy=RemovalPolicy.RETAIN if environment == "prod" else RemovalPolicy.DESTROY,
            )

        # Tasks and contact logs share one table, told apart by the sort key prefix.
        self.activity_table = dynamodb.Table(
            self,
            "CustomerActivity",
            partition_key=dynamodb.Attribute(
                name="customer_id", type=dynamodb.AttributeType.STRING
            ),
            sort_key=dynamodb.Attribute(name="sk", type=dynamodb.AttributeType.STRING),
            billing_mode=dynamodb.BillingMode.PAY_PER_REQUEST,
            point_in_time_recovery=environment == "prod",
            removal_policy=RemovalPolicy.RETAIN if environment == "prod" else RemovalPolicy.DESTROY,
        )
