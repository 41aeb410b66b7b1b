from typing import Any, Callable, Dict

from aws_cdk import RemovalPolicy
from aws_cdk import aws_dynamodb as ddb
from constructs import Construct


def _table_protection(is_prod: bool) -> Dict[str, Any]:
    if is_prod:
        return {"removal_policy": RemovalPolicy.RETAIN, "deletion_protection": True}
    return {"removal_policy": RemovalPolicy.DESTROY, "deletion_protection": False}


def create_dynamodb_tables(stack: Construct, rn: Callable[[str], str], is_prod: bool = False) -> Dict[str, ddb.Table]:
    """Create the main-region DynamoDB tables and return them in a dict.

    Args:
        stack: CDK Construct (usually the Stack instance)
        rn: helper function to create resource names (rn(name: str) -> str)
        is_prod: Retain tables and enable deletion protection

    Returns:
        Mapping of table names to Table constructs
    """
    protection = _table_protection(is_prod)

    developers_table = ddb.Table(
        stack,
        "DevelopersTable",
        table_name=rn("PortfolioDevelopers"),
        partition_key=ddb.Attribute(name="id", type=ddb.AttributeType.STRING),
        billing_mode=ddb.BillingMode.PAY_PER_REQUEST,
        **protection,
    )

    projects_table = ddb.Table(
        stack,
        "ProjectsTable",
        table_name=rn("PortfolioProjects"),
        partition_key=ddb.Attribute(name="id", type=ddb.AttributeType.STRING),
        billing_mode=ddb.BillingMode.PAY_PER_REQUEST,
        **protection,
    )
    # Developer.projects resolves through this index
    projects_table.add_global_secondary_index(
        index_name="byDeveloperId",
        partition_key=ddb.Attribute(name="developerId", type=ddb.AttributeType.STRING),
        projection_type=ddb.ProjectionType.ALL,
    )

    recruiter_profiles_table = ddb.Table(
        stack,
        "RecruiterProfilesTable",
        table_name=rn("PortfolioRecruiterProfiles"),
        partition_key=ddb.Attribute(name="linkId", type=ddb.AttributeType.STRING),
        billing_mode=ddb.BillingMode.PAY_PER_REQUEST,
        **protection,
    )

    job_matching_table = ddb.Table(
        stack,
        "JobMatchingTable",
        table_name=rn("JobMatching"),
        partition_key=ddb.Attribute(name="linkId", type=ddb.AttributeType.STRING),
        billing_mode=ddb.BillingMode.PAY_PER_REQUEST,
        **protection,
    )

    return {
        "developers_table": developers_table,
        "projects_table": projects_table,
        "recruiter_profiles_table": recruiter_profiles_table,
        "job_matching_table": job_matching_table,
    }


def create_visitor_links_table(stack: Construct, rn: Callable[[str], str], is_prod: bool = False) -> ddb.Table:
    """Create the visitor links table read by the edge function.

    Must be created in the edge stack (us-east-1). Links expire through the
    `ttl` attribute.
    """
    visitor_links_table = ddb.Table(
        stack,
        "VisitorLinksTable",
        table_name=rn("PortfolioVisitorLinks"),
        partition_key=ddb.Attribute(name="linkId", type=ddb.AttributeType.STRING),
        billing_mode=ddb.BillingMode.PAY_PER_REQUEST,
        encryption=ddb.TableEncryption.AWS_MANAGED,
        **_table_protection(is_prod),
    )

    cfn_table = visitor_links_table.node.default_child
    cfn_table.time_to_live_specification = ddb.CfnTable.TimeToLiveSpecificationProperty(  # type: ignore[union-attr]
        attribute_name="ttl",
        enabled=True,
    )

    return visitor_links_table
