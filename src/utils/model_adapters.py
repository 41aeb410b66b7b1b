"""
Bedrock model adapters.

Each adapter turns a prompt into the request body a model family expects and
extracts the generated text from its response. The registry maps supported
model ids to adapters.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple, Union

from .errors import AppError, ErrorCode

# A prompt is either plain text or {"systemPrompt": ..., "userPrompt": ...}
Prompt = Union[str, Dict[str, str]]

DEFAULT_MAX_TOKENS = 300
DEFAULT_TEMPERATURE = 0.7
DEFAULT_TOP_P = 0.9


def _split_prompt(prompt: Prompt) -> Tuple[Optional[str], str]:
    if isinstance(prompt, dict):
        return prompt.get("systemPrompt"), prompt.get("userPrompt", "")
    return None, prompt


def _flatten_prompt(prompt: Prompt) -> str:
    system, user = _split_prompt(prompt)
    return f"{system}\n\n{user}" if system else user


class ModelAdapter(ABC):
    """Base adapter; subclasses implement format_prompt and parse_response."""

    @abstractmethod
    def format_prompt(
        self,
        prompt: Prompt,
        options: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Build the InvokeModel request body."""

    @abstractmethod
    def parse_response(self, response: Dict[str, Any]) -> str:
        """Extract the generated text from the model response."""


class ClaudeAdapter(ModelAdapter):
    """Anthropic Claude models via the Bedrock messages API."""

    def format_prompt(
        self,
        prompt: Prompt,
        options: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        options = options or {}
        system, user = _split_prompt(prompt)
        payload: Dict[str, Any] = {
            "anthropic_version": "bedrock-2023-05-31",
            "max_tokens": options.get("maxTokens") or DEFAULT_MAX_TOKENS,
            "temperature": options.get("temperature") or DEFAULT_TEMPERATURE,
            "top_p": options.get("topP") or DEFAULT_TOP_P,
            "messages": [{"role": "user", "content": user}],
        }
        if system:
            payload["system"] = system
        return payload

    def parse_response(self, response: Dict[str, Any]) -> str:
        content = response.get("content")
        if isinstance(content, list) and content:
            return str(content[0].get("text", ""))
        if response.get("completion"):
            return str(response["completion"])
        raise AppError(ErrorCode.MODEL_ERROR, "Unable to parse Claude response")


class TitanExpressAdapter(ModelAdapter):
    """Amazon Titan Text Express."""

    name = "Titan Express"

    def format_prompt(
        self,
        prompt: Prompt,
        options: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        options = options or {}
        return {
            "inputText": _flatten_prompt(prompt),
            "textGenerationConfig": {
                "maxTokenCount": options.get("maxTokens") or DEFAULT_MAX_TOKENS,
                "temperature": options.get("temperature") or DEFAULT_TEMPERATURE,
                "topP": options.get("topP") or DEFAULT_TOP_P,
            },
        }

    def parse_response(self, response: Dict[str, Any]) -> str:
        results = response.get("results") or []
        if not results or not results[0].get("outputText"):
            raise AppError(ErrorCode.MODEL_ERROR, f"Invalid response format from {self.name} model")
        return str(results[0]["outputText"])


class TitanLiteAdapter(TitanExpressAdapter):
    """Amazon Titan Text Lite (same wire format as Express)."""

    name = "Titan Lite"


class OllamaAdapter(ModelAdapter):
    """Self-hosted Ollama models."""

    def format_prompt(
        self,
        prompt: Prompt,
        options: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        options = options or {}
        return {
            "prompt": _flatten_prompt(prompt),
            "model": options.get("model") or "llama2",
            "options": {
                "temperature": options.get("temperature") or DEFAULT_TEMPERATURE,
                "top_p": options.get("topP") or DEFAULT_TOP_P,
                "max_tokens": options.get("maxTokens") or DEFAULT_MAX_TOKENS,
            },
        }

    def parse_response(self, response: Dict[str, Any]) -> str:
        text = response.get("response")
        if not isinstance(text, str):
            raise AppError(ErrorCode.MODEL_ERROR, "Invalid response format from Ollama model")
        return text


_ADAPTERS: Dict[str, ModelAdapter] = {
    "amazon.titan-text-express-v1": TitanExpressAdapter(),
    "amazon.titan-text-lite-v1": TitanLiteAdapter(),
    "anthropic.claude-3-haiku-20240307-v1:0": ClaudeAdapter(),
    "anthropic.claude-3-sonnet-20240229-v1:0": ClaudeAdapter(),
    "anthropic.claude-3-5-sonnet-20240620-v1:0": ClaudeAdapter(),
    "anthropic.claude-3-5-sonnet-20241022-v2:0": ClaudeAdapter(),
    "ollama": OllamaAdapter(),
}


def get_adapter(model_id: str) -> ModelAdapter:
    """
    Get the adapter for a model id.

    Raises:
        AppError: If the model is not supported
    """
    adapter = _ADAPTERS.get(model_id)
    if adapter is None:
        raise AppError(
            ErrorCode.UNSUPPORTED_MODEL,
            f"Unsupported model: {model_id}. Please use one of: {', '.join(_ADAPTERS)}",
        )
    return adapter


def is_model_supported(model_id: str) -> bool:
    """Check whether a model id has an adapter."""
    return model_id in _ADAPTERS


def get_supported_models() -> List[str]:
    """List supported model ids."""
    return list(_ADAPTERS)
