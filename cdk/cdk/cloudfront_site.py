"""CloudFront distribution and static site configuration for the portfolio edge stack.

This module creates and configures:
- S3 origin with Origin Access Control (OAC)
- Security response headers policy
- CloudFront distribution with the visitor-context edge function on
  viewer-request and viewer-response
"""

from typing import TYPE_CHECKING, Any, Optional

from aws_cdk import Duration
from aws_cdk import aws_certificatemanager as acm
from aws_cdk import aws_cloudfront as cloudfront
from aws_cdk import aws_cloudfront_origins as origins
from constructs import Construct

if TYPE_CHECKING:
    from aws_cdk import aws_s3 as s3

CONTENT_SECURITY_POLICY = (
    "default-src 'self'; script-src 'self' 'unsafe-inline' 'unsafe-eval'; style-src 'self' 'unsafe-inline'; "
    "img-src 'self' data: blob:; font-src 'self'; connect-src 'self' *.amazonaws.com; "
    "frame-ancestors 'none'; form-action 'self'; base-uri 'self'; object-src 'none';"
)


def _create_security_headers_policy(scope: Construct) -> cloudfront.ResponseHeadersPolicy:
    """Create the security headers policy applied to every response."""
    return cloudfront.ResponseHeadersPolicy(
        scope,
        "SecurityHeaders",
        security_headers_behavior=cloudfront.ResponseSecurityHeadersBehavior(
            content_type_options=cloudfront.ResponseHeadersContentTypeOptions(override=True),
            frame_options=cloudfront.ResponseHeadersFrameOptions(
                frame_option=cloudfront.HeadersFrameOption.DENY, override=True
            ),
            referrer_policy=cloudfront.ResponseHeadersReferrerPolicy(
                referrer_policy=cloudfront.HeadersReferrerPolicy.STRICT_ORIGIN_WHEN_CROSS_ORIGIN, override=True
            ),
            strict_transport_security=cloudfront.ResponseHeadersStrictTransportSecurity(
                access_control_max_age=Duration.seconds(31536000), include_subdomains=True, override=True
            ),
            content_security_policy=cloudfront.ResponseHeadersContentSecurityPolicy(
                content_security_policy=CONTENT_SECURITY_POLICY, override=True
            ),
        ),
    )


def create_cloudfront_distribution(
    scope: Construct,
    site_bucket: "s3.Bucket",
    edge_function: Any,  # cloudfront.experimental.EdgeFunction
    domain_name: Optional[str] = None,
    certificate_arn: Optional[str] = None,
) -> dict[str, Any]:
    """Create CloudFront distribution and related resources.

    Args:
        scope: CDK construct scope
        site_bucket: Private bucket holding the exported site
        edge_function: Visitor-context edge function
        domain_name: Custom domain (prod); requires certificate_arn
        certificate_arn: ACM certificate in us-east-1 for domain_name

    Returns:
        Dictionary containing distribution and response headers policy
    """
    response_headers_policy = _create_security_headers_policy(scope)

    custom_domain: dict[str, Any] = {}
    if domain_name and certificate_arn:
        custom_domain = {
            "domain_names": [domain_name],
            "certificate": acm.Certificate.from_certificate_arn(scope, "SiteCertificate", certificate_arn),
        }

    distribution = cloudfront.Distribution(
        scope,
        "Distribution",
        default_behavior=cloudfront.BehaviorOptions(
            origin=origins.S3BucketOrigin.with_origin_access_control(
                site_bucket,
                origin_access_levels=[cloudfront.AccessLevel.READ, cloudfront.AccessLevel.LIST],
            ),
            response_headers_policy=response_headers_policy,
            viewer_protocol_policy=cloudfront.ViewerProtocolPolicy.REDIRECT_TO_HTTPS,
            allowed_methods=cloudfront.AllowedMethods.ALLOW_GET_HEAD,
            cached_methods=cloudfront.CachedMethods.CACHE_GET_HEAD,
            compress=True,
            edge_lambdas=[
                cloudfront.EdgeLambda(
                    function_version=edge_function.current_version,
                    event_type=cloudfront.LambdaEdgeEventType.VIEWER_REQUEST,
                    include_body=False,
                ),
                cloudfront.EdgeLambda(
                    function_version=edge_function.current_version,
                    event_type=cloudfront.LambdaEdgeEventType.VIEWER_RESPONSE,
                    include_body=False,
                ),
            ],
        ),
        default_root_object="index.html",
        error_responses=[
            cloudfront.ErrorResponse(
                http_status=404,
                response_http_status=200,
                response_page_path="/index.html",
                ttl=Duration.seconds(0),
            ),
        ],
        price_class=cloudfront.PriceClass.PRICE_CLASS_100,  # US, Canada, Europe only
        **custom_domain,
    )

    return {
        "distribution": distribution,
        "response_headers_policy": response_headers_policy,
    }
