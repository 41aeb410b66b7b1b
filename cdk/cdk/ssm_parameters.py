"""
SSM parameters and stack outputs for values created during deployment.

Every value is published twice: as a CloudFormation output (export
`{export_name}-{env}`) and as the SSM parameter /portfolio/{env}/{PARAM} read
by the edge function, the admin console and the scripts.
"""

from dataclasses import dataclass
from typing import Iterable

from aws_cdk import CfnOutput
from aws_cdk import aws_ssm as ssm
from constructs import Construct

SSM_PREFIX = "/portfolio"


@dataclass(frozen=True)
class StackOutput:
    """One deploy-time value to publish."""

    id: str
    value: str
    description: str
    export_name: str
    param_name: str


def parameter_path(env_name: str, param_name: str) -> str:
    return f"{SSM_PREFIX}/{env_name}/{param_name}"


def create_ssm_parameters(
    stack: Construct,
    env_name: str,
    outputs: Iterable[StackOutput],
) -> dict[str, ssm.StringParameter]:
    """Create a CfnOutput and a StringParameter for each output.

    Args:
        stack: CDK Construct (usually the Stack instance)
        env_name: Environment name, used in the export name and parameter path
        outputs: Values to publish

    Returns:
        Mapping of parameter name to StringParameter construct
    """
    parameters: dict[str, ssm.StringParameter] = {}
    for output in outputs:
        CfnOutput(
            stack,
            output.id,
            value=output.value,
            description=output.description,
            export_name=f"{output.export_name}-{env_name}",
        )
        parameters[output.param_name] = ssm.StringParameter(
            stack,
            f"{output.id}Param",
            parameter_name=parameter_path(env_name, output.param_name),
            string_value=output.value,
            description=output.description,
        )
    return parameters
