from datetime import datetime, timezone
from typing import Optional

from aws_cdk import CustomResource, Stack
from aws_cdk import aws_logs as logs
from aws_cdk import custom_resources as cr
from constructs import Construct

from .appsync import setup_appsync
from .auth import create_cognito_auth
from .cloudfront_site import create_cloudfront_distribution
from .dynamodb_tables import create_dynamodb_tables, create_visitor_links_table
from .edge import create_edge_function
from .helpers import get_bedrock_model_id, get_site_domain, make_resource_namer
from .iam_roles import create_edge_function_role, create_lambda_execution_role
from .lambdas import create_lambda_functions
from .s3_buckets import create_data_bucket, create_site_bucket
from .ssm_parameters import StackOutput, create_ssm_parameters


class PortfolioStack(Stack):
    """
    Portfolio - Main Region Stack (eu-central-1)

    Creates:
    - DynamoDB tables for developers, projects, recruiter profiles and job matching
    - Data bucket seeded with data/{env}/*.json and the data loader custom resource
    - Cognito User Pool for visitor authentication
    - Resolver and support Lambdas
    - AppSync GraphQL API
    - SSM parameters under /portfolio/{env}/
    """

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        env_name: str = "dev",
        bedrock_model_id: Optional[str] = None,
        site_domain: Optional[str] = None,
        **kwargs,
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        self.env_name = env_name
        is_prod = env_name == "prod"
        rn = make_resource_namer(env_name)
        self.resource_name = rn

        model_id = get_bedrock_model_id(bedrock_model_id)
        site_domain = site_domain or get_site_domain(env_name)

        # ====================================================================
        # Storage
        # ====================================================================
        self.tables = create_dynamodb_tables(self, rn, is_prod=is_prod)
        data = create_data_bucket(self, rn, env_name, is_prod=is_prod)
        self.data_bucket = data["data_bucket"]

        # ====================================================================
        # Auth
        # ====================================================================
        auth = create_cognito_auth(self, rn, is_prod=is_prod)
        self.user_pool = auth["user_pool"]
        self.user_pool_client = auth["user_pool_client"]

        # ====================================================================
        # Lambdas
        # ====================================================================
        lambda_role = create_lambda_execution_role(self, rn, dict(self.tables), self.data_bucket, self.user_pool)
        self.lambda_functions = create_lambda_functions(
            self,
            rn,
            env_name=env_name,
            lambda_execution_role=lambda_role,
            tables=self.tables,
            data_bucket=self.data_bucket,
            user_pool=self.user_pool,
            bedrock_model_id=model_id,
            site_domain=site_domain,
        )

        # ====================================================================
        # API
        # ====================================================================
        self.appsync = setup_appsync(
            self,
            env_name=env_name,
            resource_name=rn,
            user_pool=self.user_pool,
            tables=dict(self.tables),
            lambda_functions=dict(self.lambda_functions),
        )

        # ====================================================================
        # Data loader: reload developer/project data on every deploy
        # ====================================================================
        provider = cr.Provider(
            self,
            "DataLoaderProvider",
            on_event_handler=self.lambda_functions["data_loader_fn"],
            log_retention=logs.RetentionDays.ONE_WEEK,
        )
        data_loader = CustomResource(
            self,
            "DataLoaderResource",
            service_token=provider.service_token,
            properties={
                "environment": env_name,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
        )
        data_loader.node.add_dependency(data["data_deployment"])

        # ====================================================================
        # Published configuration
        # ====================================================================
        api = self.appsync.api
        create_ssm_parameters(
            self,
            env_name,
            [
                StackOutput(
                    "AppSyncUrl",
                    api.graphql_url,
                    "AppSync GraphQL endpoint",
                    "appsync-url",
                    "NEXT_PUBLIC_APPSYNC_URL",
                ),
                StackOutput(
                    "AppSyncApiKey",
                    api.api_key or "",
                    "AppSync API key",
                    "appsync-api-key",
                    "NEXT_PUBLIC_APPSYNC_API_KEY",
                ),
                StackOutput(
                    "AppSyncRegion",
                    self.region,
                    "AWS region for AppSync",
                    "appsync-region",
                    "NEXT_PUBLIC_AWS_REGION",
                ),
                StackOutput(
                    "CognitoUserPoolId",
                    self.user_pool.user_pool_id,
                    "Cognito user pool",
                    "cognito-user-pool-id",
                    "COGNITO_USER_POOL_ID",
                ),
                StackOutput(
                    "CognitoClientId",
                    self.user_pool_client.user_pool_client_id,
                    "Cognito client used by the edge function",
                    "cognito-client-id",
                    "COGNITO_CLIENT_ID",
                ),
                StackOutput(
                    "DeveloperTableName",
                    self.tables["developers_table"].table_name,
                    "Developer table",
                    "developer-table-name",
                    "DEVELOPER_TABLE_NAME",
                ),
                StackOutput(
                    "ProjectsTableName",
                    self.tables["projects_table"].table_name,
                    "Projects table",
                    "projects-table-name",
                    "PROJECTS_TABLE_NAME",
                ),
                StackOutput(
                    "RecruiterProfilesTableName",
                    self.tables["recruiter_profiles_table"].table_name,
                    "Recruiter profiles table",
                    "recruiter-profiles-table-name",
                    "RECRUITER_PROFILES_TABLE_NAME",
                ),
                StackOutput(
                    "MatchingTableName",
                    self.tables["job_matching_table"].table_name,
                    "Job matching table",
                    "matching-table-name",
                    "MATCHING_TABLE_NAME",
                ),
                StackOutput(
                    "DataBucketName",
                    self.data_bucket.bucket_name,
                    "Portfolio data bucket",
                    "data-bucket-name",
                    "DATA_BUCKET_NAME",
                ),
                StackOutput(
                    "LinkGeneratorArn",
                    self.lambda_functions["link_generator_fn"].function_arn,
                    "Visitor link generator Lambda",
                    "link-generator-arn",
                    "LINK_GENERATOR_LAMBDA_ARN",
                ),
            ],
        )


class PortfolioEdgeStack(Stack):
    """
    Portfolio - Edge Stack (us-east-1)

    Creates:
    - Visitor links table (read by the edge function, TTL expiry)
    - Site bucket and CloudFront distribution with Origin Access Control
    - Visitor-context Lambda@Edge function on viewer-request/viewer-response
    - VISITOR_TABLE_NAME and CloudFront parameters in the edge region
    """

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        env_name: str = "dev",
        domain_name: Optional[str] = None,
        certificate_arn: Optional[str] = None,
        **kwargs,
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        self.env_name = env_name
        is_prod = env_name == "prod"
        rn = make_resource_namer(env_name)
        self.resource_name = rn

        self.visitor_links_table = create_visitor_links_table(self, rn, is_prod=is_prod)
        self.site_bucket = create_site_bucket(self, rn, is_prod=is_prod)

        edge_role = create_edge_function_role(self, rn, env_name)
        self.visitor_context_fn = create_edge_function(self, rn, env_name, edge_role)["visitor_context_fn"]

        site = create_cloudfront_distribution(
            self,
            self.site_bucket,
            self.visitor_context_fn,
            domain_name=domain_name if is_prod else None,
            certificate_arn=certificate_arn if is_prod else None,
        )
        self.distribution = site["distribution"]

        create_ssm_parameters(
            self,
            env_name,
            [
                StackOutput(
                    "VisitorTableName",
                    self.visitor_links_table.table_name,
                    "Visitor links table",
                    "visitor-table-name",
                    "VISITOR_TABLE_NAME",
                ),
                StackOutput(
                    "CloudfrontDomain",
                    self.distribution.distribution_domain_name,
                    "CloudFront distribution domain",
                    "cloudfront-domain",
                    "CLOUDFRONT_DOMAIN",
                ),
                StackOutput(
                    "CloudfrontDistributionId",
                    self.distribution.distribution_id,
                    "CloudFront distribution ID",
                    "cloudfront-distribution-id",
                    "CLOUDFRONT_DISTRIBUTION_ID",
                ),
                StackOutput(
                    "WebBucketName",
                    self.site_bucket.bucket_name,
                    "Site bucket",
                    "web-bucket-name",
                    "WEB_BUCKET_NAME",
                ),
            ],
        )
