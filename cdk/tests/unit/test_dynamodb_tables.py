"""Tests for the dynamodb_tables module."""

from aws_cdk import assertions
from aws_cdk import aws_dynamodb as dynamodb

from cdk.dynamodb_tables import create_dynamodb_tables, create_visitor_links_table


class TestCreateDynamoDBTables:
    """Tests for create_dynamodb_tables function."""

    def test_returns_dict_with_all_tables(self, stack, rn):
        """Should return a dict with all expected tables."""
        result = create_dynamodb_tables(stack, rn)

        expected_keys = [
            "developers_table",
            "projects_table",
            "recruiter_profiles_table",
            "job_matching_table",
        ]

        for key in expected_keys:
            assert key in result, f"Missing key: {key}"
            assert isinstance(result[key], dynamodb.Table), f"{key} is not a Table"

    def test_table_names(self, stack, rn):
        """Physical names follow the scripts' naming."""
        create_dynamodb_tables(stack, rn)
        template = assertions.Template.from_stack(stack)

        for name in [
            "PortfolioDevelopers-test",
            "PortfolioProjects-test",
            "PortfolioRecruiterProfiles-test",
            "JobMatching-test",
        ]:
            template.has_resource_properties("AWS::DynamoDB::Table", {"TableName": name})

    def test_all_tables_pay_per_request(self, stack, rn):
        create_dynamodb_tables(stack, rn)
        template = assertions.Template.from_stack(stack)

        tables = template.find_resources("AWS::DynamoDB::Table")
        assert len(tables) == 4
        for resource in tables.values():
            assert resource["Properties"]["BillingMode"] == "PAY_PER_REQUEST"

    def test_projects_table_has_developer_index(self, stack, rn):
        """Developer.projects queries the byDeveloperId index."""
        create_dynamodb_tables(stack, rn)
        template = assertions.Template.from_stack(stack)

        template.has_resource_properties(
            "AWS::DynamoDB::Table",
            {
                "TableName": "PortfolioProjects-test",
                "GlobalSecondaryIndexes": [
                    assertions.Match.object_like(
                        {
                            "IndexName": "byDeveloperId",
                            "KeySchema": [{"AttributeName": "developerId", "KeyType": "HASH"}],
                        }
                    )
                ],
            },
        )

    def test_recruiter_tables_keyed_by_link_id(self, stack, rn):
        create_dynamodb_tables(stack, rn)
        template = assertions.Template.from_stack(stack)

        template.has_resource_properties(
            "AWS::DynamoDB::Table",
            {"TableName": "JobMatching-test", "KeySchema": [{"AttributeName": "linkId", "KeyType": "HASH"}]},
        )

    def test_dev_tables_are_destroyed(self, stack, rn):
        create_dynamodb_tables(stack, rn)
        template = assertions.Template.from_stack(stack)

        for resource in template.find_resources("AWS::DynamoDB::Table").values():
            assert resource["DeletionPolicy"] == "Delete"

    def test_prod_tables_are_retained_and_protected(self, stack, rn):
        create_dynamodb_tables(stack, rn, is_prod=True)
        template = assertions.Template.from_stack(stack)

        for resource in template.find_resources("AWS::DynamoDB::Table").values():
            assert resource["DeletionPolicy"] == "Retain"
            assert resource["Properties"]["DeletionProtectionEnabled"] is True


class TestCreateVisitorLinksTable:
    """Tests for create_visitor_links_table function."""

    def test_ttl_enabled(self, edge_stack, rn):
        """Visitor links expire through the ttl attribute."""
        create_visitor_links_table(edge_stack, rn)
        template = assertions.Template.from_stack(edge_stack)

        template.has_resource_properties(
            "AWS::DynamoDB::Table",
            {
                "TableName": "PortfolioVisitorLinks-test",
                "KeySchema": [{"AttributeName": "linkId", "KeyType": "HASH"}],
                "TimeToLiveSpecification": {"AttributeName": "ttl", "Enabled": True},
                "BillingMode": "PAY_PER_REQUEST",
            },
        )
