"""
API layer construct: shared Lambda + HTTP API routes.

A single Lambda keeps the pooled DB connection warm across routes.
Uses Docker bundling for dependencies (runs in CI/CD pipeline).
"""

from typing import Dict, Optional

from aws_cdk import (
    BundlingOptions,
    Duration,
    aws_ec2 as ec2,
    aws_lambda as _lambda,
    aws_apigatewayv2 as apigw,
    aws_apigatewayv2_integrations as integrations,
    aws_logs as logs,
)
from constructs import Construct

ROUTES = (
    (apigw.HttpMethod.GET, "/health"),
    (apigw.HttpMethod.GET, "/customers"),
    (apigw.HttpMethod.GET, "/customers/{id}"),
    (apigw.HttpMethod.PATCH, "/customers/{id}"),
    (apigw.HttpMethod.POST, "/customers/{id}/mark-contacted"),
    (apigw.HttpMethod.GET, "/customers/{id}/tasks"),
    (apigw.HttpMethod.POST, "/customers/{id}/tasks"),
    (apigw.HttpMethod.GET, "/analytics"),
    (apigw.HttpMethod.GET, "/priority"),
    (apigw.HttpMethod.GET, "/email-templates"),
)


class ApiLayerConstruct(Construct):
    """Expose dashboard endpoints via HTTP API."""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        environment: str,
        lambda_environment: Dict[str, str],
        vpc: Optional[ec2.IVpc] = None,
        lambda_memory_mb: int = 256,
        lambda_timeout_seconds: int = 15,
    ) -> None:
        super().__init__(scope, construct_id)

        # Bundle Lambda code with dependencies using Docker (works in CI/CD)
        # Installs pydantic, sqlalchemy, psycopg2-binary, python-json-logger
        bundled_code = _lambda.Code.from_asset(
            "src",
            bundling=BundlingOptions(
                image=_lambda.Runtime.PYTHON_3_12.bundling_image,
                command=[
                    "bash", "-c",
                    "pip install -r requirements-lambda.txt -t /asset-output && "
                    "cp -r . /asset-output"
                ],
            ),
        )

        self.main_lambda = _lambda.Function(
            self,
            "ApiHandler",
            runtime=_lambda.Runtime.PYTHON_3_12,
            handler="handlers.main.lambda_handler",
            code=bundled_code,
            memory_size=lambda_memory_mb,
            timeout=Duration.seconds(lambda_timeout_seconds),
            architecture=_lambda.Architecture.X86_64,
            vpc=vpc,
            vpc_subnets=(
                ec2.SubnetSelection(subnet_type=ec2.SubnetType.PRIVATE_ISOLATED)
                if vpc
                else None
            ),
            environment={"ENVIRONMENT": environment, **lambda_environment},
            log_retention=logs.RetentionDays.ONE_WEEK,
        )

        self.api = apigw.HttpApi(
            self,
            "HttpApi",
            api_name=f"customer-success-api-{environment}",
            cors_preflight=apigw.CorsPreflightOptions(
                allow_origins=["*"],
                allow_methods=[apigw.CorsHttpMethod.ANY],
            ),
        )

        integration = integrations.HttpLambdaIntegration(
            "LambdaIntegration", self.main_lambda
        )

        for method, path in ROUTES:
            self.api.add_routes(
                path=path,
                methods=[method],
                integration=integration,
            )
