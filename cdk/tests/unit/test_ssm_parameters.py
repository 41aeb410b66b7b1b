"""Tests for SSM parameters and stack outputs."""

from aws_cdk import assertions

from cdk.ssm_parameters import StackOutput, create_ssm_parameters, parameter_path


class TestParameterPath:
    def test_path(self):
        assert parameter_path("dev", "VISITOR_TABLE_NAME") == "/portfolio/dev/VISITOR_TABLE_NAME"


class TestCreateSsmParameters:
    """Tests for create_ssm_parameters function."""

    OUTPUTS = [
        StackOutput("DataBucketName", "bucket-1", "Data bucket", "data-bucket-name", "DATA_BUCKET_NAME"),
        StackOutput("AppSyncRegion", "eu-central-1", "Region", "appsync-region", "NEXT_PUBLIC_AWS_REGION"),
    ]

    def test_returns_parameters_by_name(self, stack):
        result = create_ssm_parameters(stack, "test", self.OUTPUTS)

        assert sorted(result) == ["DATA_BUCKET_NAME", "NEXT_PUBLIC_AWS_REGION"]

    def test_creates_string_parameters(self, stack):
        create_ssm_parameters(stack, "test", self.OUTPUTS)
        template = assertions.Template.from_stack(stack)

        template.resource_count_is("AWS::SSM::Parameter", 2)
        template.has_resource_properties(
            "AWS::SSM::Parameter",
            {"Name": "/portfolio/test/DATA_BUCKET_NAME", "Type": "String", "Value": "bucket-1"},
        )

    def test_exports_outputs_per_environment(self, stack):
        create_ssm_parameters(stack, "test", self.OUTPUTS)
        template = assertions.Template.from_stack(stack)

        template.has_output("DataBucketName", {"Value": "bucket-1", "Export": {"Name": "data-bucket-name-test"}})
