"""Tests for the visitor link generator."""

import json
import time
from typing import Any, Generator
from unittest.mock import MagicMock, patch

import boto3
import pytest
from botocore.exceptions import ClientError

from src.handlers import link_generator
from src.handlers.link_generator import LINK_TTL_DAYS, SECONDS_PER_DAY, calculate_ttl, handler
from src.utils.appsync_types import get_link_id_from_claims


@pytest.fixture
def user_pool(dynamodb_tables: Any, monkeypatch: pytest.MonkeyPatch) -> Generator[str, None, None]:
    """Cognito pool in the same moto context as the tables."""
    cognito = boto3.client("cognito-idp", region_name="us-east-1")
    pool_id = cognito.create_user_pool(
        PoolName="portfolio-user-pool-dev",
        Schema=[{"Name": "linkId", "AttributeDataType": "String", "Mutable": True}],
    )["UserPool"]["Id"]
    monkeypatch.setenv("USER_POOL_ID", pool_id)
    monkeypatch.setenv("SITE_DOMAIN", "portfolio.example.com")
    yield pool_id


def _body(response: dict) -> dict:
    return json.loads(response["body"])


class TestCalculateTtl:
    def test_fifteen_days(self) -> None:
        now = int(time.time())

        ttl = calculate_ttl()

        assert now + LINK_TTL_DAYS * SECONDS_PER_DAY <= ttl <= now + LINK_TTL_DAYS * SECONDS_PER_DAY + 5

    @pytest.mark.parametrize("days", [0, 1, 7, 30])
    def test_integer_timestamp(self, days: int) -> None:
        assert isinstance(calculate_ttl(days), int)

    def test_grows_with_days(self) -> None:
        with patch.object(link_generator.time, "time", return_value=1_700_000_000.75):
            ttls = [calculate_ttl(days) for days in (0, 1, 7, 30)]

        assert ttls == sorted(ttls)
        assert ttls[0] == 1_700_000_000
        assert ttls[1] - ttls[0] == SECONDS_PER_DAY


class TestCreateLink:
    """Tests for link creation."""

    def test_creates_user_and_link(self, user_pool: str, visitor_links_table: Any) -> None:
        response = handler({"companyName": "Acme", "recruiterName": "Sam"}, None)

        assert response["statusCode"] == 200
        body = _body(response)
        link_id = body["linkId"]
        assert body["link"] == f"https://portfolio.example.com/?visitor={link_id}"

        item = visitor_links_table.get_item(Key={"linkId": link_id})["Item"]
        assert item["password"]
        assert item["companyName"] == "Acme"
        assert item["recruiterName"] == "Sam"
        assert int(item["ttl"]) > int(time.time())

        cognito = boto3.client("cognito-idp", region_name="us-east-1")
        user = cognito.admin_get_user(UserPoolId=user_pool, Username=f"{link_id}@visitor.temporary.com")
        assert user["UserStatus"] == "CONFIRMED"

    def test_explicit_link_id(self, user_pool: str, visitor_links_table: Any) -> None:
        response = handler({"linkId": "acme-platform"}, None)

        assert _body(response)["linkId"] == "acme-platform"

    def test_invalid_link_id(self, user_pool: str) -> None:
        response = handler({"linkId": "bad id;"}, None)

        assert response["statusCode"] == 400
        assert "Invalid linkId" in _body(response)["error"]
        assert _body(response)["errorCode"] == "INVALID_INPUT"

    def test_creates_recruiter_profile(self, user_pool: str, recruiter_profiles_table: Any) -> None:
        event = {
            "linkId": "acme",
            "createRecruiterProfile": True,
            "companyName": "Acme",
            "recruiterName": "Sam",
            "requiredSkills": ["Python"],
            "unrelated": "ignored",
        }

        handler(event, None)

        profile = recruiter_profiles_table.get_item(Key={"linkId": "acme"})["Item"]
        assert profile["requiredSkills"] == ["Python"]
        assert "unrelated" not in profile
        assert "createdAt" in profile

    def test_no_recruiter_profile_by_default(self, user_pool: str, recruiter_profiles_table: Any) -> None:
        handler({"linkId": "acme"}, None)

        assert "Item" not in recruiter_profiles_table.get_item(Key={"linkId": "acme"})

    def test_missing_configuration(self, dynamodb_tables: Any, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("USER_POOL_ID", raising=False)

        response = handler({}, None)

        assert response["statusCode"] == 500
        assert "USER_POOL_ID" in _body(response)["error"]

    def test_user_carries_link_id_claim(self, user_pool: str, visitor_links_table: Any) -> None:
        handler({"linkId": "acme"}, None)

        cognito = boto3.client("cognito-idp", region_name="us-east-1")
        user = cognito.admin_get_user(UserPoolId=user_pool, Username="acme@visitor.temporary.com")
        attributes = {a["Name"]: a["Value"] for a in user["UserAttributes"]}

        assert attributes["custom:linkId"] == "acme"
        assert get_link_id_from_claims(attributes) == "acme"

    def test_existing_user_gets_new_password(self, user_pool: str, visitor_links_table: Any) -> None:
        cognito = boto3.client("cognito-idp", region_name="us-east-1")
        cognito.admin_create_user(
            UserPoolId=user_pool,
            Username="acme@visitor.temporary.com",
            MessageAction="SUPPRESS",
            UserAttributes=[{"Name": "email", "Value": "acme@visitor.temporary.com"}],
        )
        client_id = cognito.create_user_pool_client(
            UserPoolId=user_pool,
            ClientName="portfolio-client-dev",
            ExplicitAuthFlows=["ALLOW_ADMIN_USER_PASSWORD_AUTH"],
        )["UserPoolClient"]["ClientId"]

        response = handler({"linkId": "acme"}, None)

        assert response["statusCode"] == 200
        password = visitor_links_table.get_item(Key={"linkId": "acme"})["Item"]["password"]
        auth = cognito.admin_initiate_auth(
            UserPoolId=user_pool,
            ClientId=client_id,
            AuthFlow="ADMIN_USER_PASSWORD_AUTH",
            AuthParameters={"USERNAME": "acme@visitor.temporary.com", "PASSWORD": password},
        )
        assert auth["AuthenticationResult"]["AccessToken"]
        user = cognito.admin_get_user(UserPoolId=user_pool, Username="acme@visitor.temporary.com")
        attributes = {a["Name"]: a["Value"] for a in user["UserAttributes"]}
        assert attributes["custom:linkId"] == "acme"

    def test_repeat_generation_succeeds(self, user_pool: str, visitor_links_table: Any) -> None:
        handler({"linkId": "acme"}, None)
        first = visitor_links_table.get_item(Key={"linkId": "acme"})["Item"]["password"]

        response = handler({"linkId": "acme"}, None)

        assert response["statusCode"] == 200
        assert visitor_links_table.get_item(Key={"linkId": "acme"})["Item"]["password"] != first

    def test_other_create_errors_fail(self, user_pool: str, visitor_links_table: Any) -> None:
        cognito = MagicMock()
        cognito.admin_create_user.side_effect = ClientError(
            {"Error": {"Code": "InvalidParameterException", "Message": "bad attribute"}}, "AdminCreateUser"
        )

        with patch.object(link_generator, "_get_cognito", return_value=cognito):
            response = handler({"linkId": "acme"}, None)

        assert response["statusCode"] == 500
        cognito.admin_set_user_password.assert_not_called()
        assert "Item" not in visitor_links_table.get_item(Key={"linkId": "acme"})


class TestRemoveLink:
    """Tests for link removal."""

    def test_removes_link_and_user(self, user_pool: str, visitor_links_table: Any) -> None:
        handler({"linkId": "acme"}, None)

        response = handler({"action": "remove", "linkId": "acme"}, None)

        assert response["statusCode"] == 200
        assert "Item" not in visitor_links_table.get_item(Key={"linkId": "acme"})
        cognito = boto3.client("cognito-idp", region_name="us-east-1")
        with pytest.raises(ClientError):
            cognito.admin_get_user(UserPoolId=user_pool, Username="acme@visitor.temporary.com")

    def test_missing_user_tolerated(self, user_pool: str, visitor_links_table: Any) -> None:
        response = handler({"action": "remove", "linkId": "ghost"}, None)

        assert response["statusCode"] == 200

    def test_link_id_required(self, user_pool: str) -> None:
        response = handler({"action": "remove"}, None)

        assert response["statusCode"] == 400

    def test_other_cognito_errors_fail(self, user_pool: str, visitor_links_table: Any) -> None:
        cognito = MagicMock()
        cognito.admin_delete_user.side_effect = ClientError(
            {"Error": {"Code": "TooManyRequestsException", "Message": "slow down"}}, "AdminDeleteUser"
        )

        with patch.object(link_generator, "_get_cognito", return_value=cognito):
            response = handler({"action": "remove", "linkId": "acme"}, None)

        assert response["statusCode"] == 500
