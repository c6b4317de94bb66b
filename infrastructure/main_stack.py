"""
Main CDK Stack for the Customer Success Dashboard API.
"""

from aws_cdk import (
    Stack,
    Tags,
    CfnOutput,
)
from constructs import Construct

from infrastructure.constructs.data_layer import DataLayerConstruct
from infrastructure.constructs.api_layer import ApiLayerConstruct
from infrastructure.config.settings import Settings


class CustomerSuccessStack(Stack):
    """Main stack wiring storage and the API together."""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        settings: Settings,
        **kwargs,
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        # Global tags for cost/accounting.
        Tags.of(self).add("Project", "customer-success-dashboard")
        Tags.of(self).add("Environment", settings.environment)
        Tags.of(self).add("CostCenter", "customer-success")
        Tags.of(self).add("ManagedBy", "cdk")

        use_postgres = settings.customer_store == "postgres"

        # 1) Data layer.
        data_construct = DataLayerConstruct(
            self,
            "DataLayer",
            environment=settings.environment,
            db_instance_class=settings.db_instance_class,
            db_allocated_storage=settings.db_allocated_storage,
            provision_database=use_postgres,
        )

        lambda_environment = {
            "CUSTOMER_STORE": settings.customer_store,
            "ACTIVITY_TABLE": data_construct.activity_table.table_name,
            "PRODUCT_NAME": settings.product_name,
            "LOG_LEVEL": settings.log_level,
        }
        if use_postgres:
            lambda_environment["DB_SECRET_ARN"] = data_construct.db_secret.secret_arn

        # 2) API layer (single Lambda).
        api_construct = ApiLayerConstruct(
            self,
            "ApiLayer",
            environment=settings.environment,
            lambda_environment=lambda_environment,
            vpc=data_construct.vpc,
            lambda_memory_mb=settings.lambda_memory_mb,
            lambda_timeout_seconds=settings.lambda_timeout_seconds,
        )

        # Permissions for the API Lambda.
        data_construct.activity_table.grant_read_write_data(api_construct.main_lambda)
        if use_postgres:
            data_construct.db_secret.grant_read(api_construct.main_lambda)
            data_construct.db_instance.connections.allow_default_port_from(
                api_construct.main_lambda
            )

        # Outputs to quickly find resources.
        CfnOutput(self, "ApiEndpoint", value=api_construct.api.api_endpoint)
        CfnOutput(self, "ActivityTable", value=data_construct.activity_table.table_name)
        if use_postgres:
            CfnOutput(
                self,
                "DatabaseEndpoint",
                value=data_construct.db_instance.db_instance_endpoint_address,
            )
