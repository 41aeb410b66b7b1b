"""
AI advocate Lambda resolver.

Serves the AppSync fields getAdvocateGreeting, askAIQuestion and
resetConversation. Text is generated with Amazon Bedrock through the model
adapters; recruiter conversations are persisted on the recruiter profile.
"""

import json
import os
import time
from typing import Any, Dict, List, Optional, Union

import boto3

# Handle both Lambda (absolute) and unit test (relative) imports
try:  # pragma: no cover
    from utils.appsync_types import get_argument, get_field_name, get_link_id  # type: ignore[import-not-found]
    from utils.dynamodb import tables  # type: ignore[import-not-found]
    from utils.errors import AppError, ErrorCode  # type: ignore[import-not-found]
    from utils.logging import get_correlation_id, get_logger  # type: ignore[import-not-found]
    from utils.model_adapters import Prompt, get_adapter  # type: ignore[import-not-found]
    from utils.prompts import generate_dynamic_prompt, generate_greeting_prompt  # type: ignore[import-not-found]
    from utils.responses import (  # type: ignore[import-not-found]
        AdvocateGreetingResponse,
        AIAnswerResponse,
        build_answer_response,
        build_default_response,
        build_greeting_response,
    )
except ModuleNotFoundError:  # pragma: no cover
    from ..utils.appsync_types import get_argument, get_field_name, get_link_id
    from ..utils.dynamodb import tables
    from ..utils.errors import AppError, ErrorCode
    from ..utils.logging import get_correlation_id, get_logger
    from ..utils.model_adapters import Prompt, get_adapter
    from ..utils.prompts import generate_dynamic_prompt, generate_greeting_prompt
    from ..utils.responses import (
        AdvocateGreetingResponse,
        AIAnswerResponse,
        build_answer_response,
        build_default_response,
        build_greeting_response,
    )

logger = get_logger(__name__)

# 20 exchanges
MAX_CONVERSATION_MESSAGES = 40

GREETING_OPTIONS = {"maxTokens": 150, "temperature": 0.4, "topP": 0.9}
ANSWER_OPTIONS = {"maxTokens": 150, "temperature": 0.3, "topP": 0.7}

NO_QUESTION_ANSWER = "No question was provided."
NO_QUESTION_CONTEXT = "Please provide a question to get a response."
GENERIC_APOLOGY = (
    "I apologize, but I encountered an error while processing your question. "
    "Please try again later or contact support if this issue persists."
)
FAILURE_ANSWER = "Sorry, I encountered an error while processing your question."

_bedrock_client: Any = None


def _get_bedrock_client() -> Any:
    """Return the cached Bedrock runtime client."""
    global _bedrock_client
    if _bedrock_client is None:
        _bedrock_client = boto3.client("bedrock-runtime")
    return _bedrock_client


def _now_ms() -> int:
    return int(time.time() * 1000)


def invoke_model(prompt: Prompt, options: Dict[str, Any]) -> str:
    """
    Run a prompt against the configured Bedrock model.

    Raises:
        AppError: If BEDROCK_MODEL_ID is unset or unsupported, or the
            response cannot be parsed
    """
    model_id = os.getenv("BEDROCK_MODEL_ID")
    if not model_id:
        raise AppError(ErrorCode.CONFIGURATION_ERROR, "BEDROCK_MODEL_ID environment variable is not set")

    adapter = get_adapter(model_id)
    payload = adapter.format_prompt(prompt, options)
    logger.debug("Invoking Bedrock model", model_id=model_id)

    response = _get_bedrock_client().invoke_model(
        modelId=model_id,
        body=json.dumps(payload),
        contentType="application/json",
        accept="application/json",
    )
    return adapter.parse_response(json.loads(response["body"].read()))


def get_recruiter_profile(link_id: str) -> Optional[Dict[str, Any]]:
    """Fetch a recruiter profile; lookup failures are logged and treated as missing."""
    try:
        item: Optional[Dict[str, Any]] = tables.recruiter_profiles.get_item(Key={"linkId": link_id}).get("Item")
        return item
    except Exception as e:
        logger.error("Failed to fetch recruiter profile", link_id=link_id, error=str(e), exc_info=True)
        return None


def create_default_recruiter_profile(link_id: str) -> Optional[Dict[str, Any]]:
    """Create a placeholder profile so the conversation can be persisted."""
    now = _now_ms()
    profile: Dict[str, Any] = {
        "linkId": link_id,
        "recruiterName": "Recruiter",
        "companyName": "Company",
        "createdAt": now,
        "updatedAt": now,
        "conversationHistory": [],
    }
    try:
        tables.recruiter_profiles.put_item(Item=profile)
    except Exception as e:
        logger.error("Failed to create default recruiter profile", link_id=link_id, error=str(e), exc_info=True)
        return None
    logger.info("Created default recruiter profile", link_id=link_id)
    return profile


def generate_greeting(recruiter: Dict[str, Any]) -> str:
    return invoke_model(generate_greeting_prompt(recruiter), GREETING_OPTIONS)


def generate_answer(question: str, recruiter: Optional[Dict[str, Any]]) -> str:
    """
    Answer a recruiter question. Never raises; failures become an apology.
    """
    try:
        return invoke_model(generate_dynamic_prompt(question, recruiter), ANSWER_OPTIONS)
    except Exception as e:
        message = e.message if isinstance(e, AppError) else str(e)
        logger.error("AI generation failed", error=message, exc_info=True)
        if "developer profile" in message or "DEVELOPER_TABLE_NAME" in message:
            return (
                f"I apologize, but I cannot access my profile data right now. {message} "
                "Please contact support if this issue persists."
            )
        return GENERIC_APOLOGY


def save_conversation(link_id: str, question: str, answer: str, recruiter: Dict[str, Any]) -> bool:
    """
    Append an exchange to the recruiter's conversation history.

    Keeps the most recent MAX_CONVERSATION_MESSAGES messages. The start time
    is only written for the first exchange.
    """
    now = _now_ms()
    history: List[Dict[str, Any]] = list(recruiter.get("conversationHistory") or [])
    history += [
        {"role": "user", "content": question, "timestamp": now},
        {"role": "assistant", "content": answer, "timestamp": now},
    ]
    history = history[-MAX_CONVERSATION_MESSAGES:]

    try:
        tables.recruiter_profiles.update_item(
            Key={"linkId": link_id},
            UpdateExpression=(
                "SET conversationHistory = :history, lastInteractionAt = :lastInteraction, "
                "conversationStartedAt = if_not_exists(conversationStartedAt, :started)"
            ),
            ExpressionAttributeValues={":history": history, ":lastInteraction": now, ":started": now},
        )
    except Exception as e:
        logger.error("Failed to save conversation", link_id=link_id, error=str(e), exc_info=True)
        return False
    return True


def get_advocate_greeting(event: Dict[str, Any]) -> AdvocateGreetingResponse:
    """Resolve getAdvocateGreeting for the visitor's recruiter profile."""
    link_id = get_link_id(event)
    if not link_id:
        logger.warning("No link id in arguments or claims")
        return build_default_response()

    profile = get_recruiter_profile(link_id)
    if not profile:
        logger.info("No recruiter profile", link_id=link_id)
        return build_default_response(link_id)

    message: Optional[str] = None
    try:
        message = generate_greeting(profile)
    except Exception as e:
        logger.warning("Greeting generation failed, using stored message", link_id=link_id, error=str(e))

    return build_greeting_response(profile, message)


def ask_ai_question(event: Dict[str, Any]) -> AIAnswerResponse:
    """Resolve askAIQuestion, persisting the exchange when a link id is known."""
    question = str(get_argument(event, "question") or "").strip()
    if not question:
        return build_answer_response(NO_QUESTION_ANSWER, NO_QUESTION_CONTEXT)

    try:
        link_id = get_link_id(event)
        recruiter: Optional[Dict[str, Any]] = None
        if link_id:
            recruiter = get_recruiter_profile(link_id) or create_default_recruiter_profile(link_id)

        answer = generate_answer(question, recruiter)

        if link_id and recruiter:
            save_conversation(link_id, question, answer, recruiter)

        context = (
            f"Response for {recruiter.get('recruiterName')} from {recruiter.get('companyName')}"
            if recruiter
            else None
        )
        return build_answer_response(answer, context)
    except Exception as e:
        logger.error("Failed to answer question", error=str(e), exc_info=True)
        return build_answer_response(FAILURE_ANSWER, str(e))


def reset_conversation(event: Dict[str, Any]) -> bool:
    """Clear the stored conversation. Returns False instead of raising."""
    link_id = get_link_id(event)
    if not link_id:
        return False
    try:
        tables.recruiter_profiles.update_item(
            Key={"linkId": link_id},
            UpdateExpression="REMOVE conversationHistory, lastInteractionAt, conversationStartedAt",
        )
    except Exception as e:
        logger.error("Failed to reset conversation", link_id=link_id, error=str(e), exc_info=True)
        return False
    logger.info("Conversation reset", link_id=link_id)
    return True


def handler(event: Dict[str, Any], context: Any) -> Union[AdvocateGreetingResponse, AIAnswerResponse, bool]:
    """
    AppSync entry point, dispatched on info.fieldName.

    Raises:
        AppError: If PROJECTS_TABLE_NAME is not configured
    """
    if not os.getenv("PROJECTS_TABLE_NAME"):
        raise AppError(ErrorCode.CONFIGURATION_ERROR, "PROJECTS_TABLE_NAME environment variable is not set")

    logger.set_correlation_id(get_correlation_id(event))
    field_name = get_field_name(event)
    logger.info("Resolving field", field_name=field_name)

    if field_name == "getAdvocateGreeting":
        try:
            return get_advocate_greeting(event)
        except Exception as e:
            logger.error("Failed to build greeting", error=str(e), exc_info=True)
            return build_default_response("error")
    if field_name == "askAIQuestion":
        return ask_ai_question(event)
    if field_name == "resetConversation":
        return reset_conversation(event)

    logger.warning("Unsupported field", field_name=field_name)
    return build_default_response("error")
