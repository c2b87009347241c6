import json
import logging
from enum import Enum
from typing import Any, Dict, List, Optional

from langchain_core.messages import HumanMessage, SystemMessage
from langchain_google_genai import ChatGoogleGenerativeAI
from langchain_openai import ChatOpenAI

from config.settings import settings
from utils.exceptions import ExternalServiceError, MalformedResponseError
from utils.langfuse_config import get_langfuse_callbacks

logger = logging.getLogger(__name__)


def extract_json_text(text: str) -> str:
    """
    Pull the JSON payload out of a model reply.

    Models sometimes wrap JSON in markdown fences or add a sentence around it.
    """
    if "```json" in text:
        return text.split("```json", 1)[1].split("```", 1)[0].strip()
    if "```" in text:
        return text.split("```", 1)[1].split("```", 1)[0].strip()

    start = text.find("{")
    end = text.rfind("}") + 1
    if start >= 0 and end > start:
        return text[start:end]
    return text.strip()


class LLMProvider(Enum):
    GEMINI = "gemini"
    OPENAI = "openai"
    OLLAMA = "ollama"
    OPENROUTER = "openrouter"


class LLMService:
    """
    Provider-agnostic LLM wrapper that supports:
    - OpenAI
    - OpenRouter (OpenAI-compatible)
    - Gemini
    - Ollama (local, OpenAI-compatible)

    Failures surface as ExternalServiceError (call failed or timed out) and
    MalformedResponseError (reply is not JSON); callers own the fallback.
    """

    def __init__(
        self,
        provider: Optional[str] = None,
        model_name: Optional[str] = None,
        temperature: Optional[float] = None,
        timeout: Optional[float] = None,
    ):
        self.provider = (provider or settings.LLM_PROVIDER).lower()
        self.model_name = model_name or settings.LLM_MODEL
        self.temperature = settings.LLM_TEMPERATURE if temperature is None else temperature
        self.timeout = timeout or settings.LLM_TIMEOUT_SECONDS

        if self.provider not in {p.value for p in LLMProvider}:
            raise ValueError(f"Unsupported LLM provider: {self.provider}")

        # Built on first call so missing credentials surface as ExternalServiceError
        self.model = None

    # ---------------------------------------------------------------------
    # Provider Loader
    # ---------------------------------------------------------------------
    def _load_provider_model(self):
        provider = self.provider
        common = {
            "model": self.model_name,
            "temperature": self.temperature,
            "timeout": self.timeout,
            "max_retries": settings.LLM_MAX_RETRIES,
        }

        # ★ OPENAI (native)
        if provider == LLMProvider.OPENAI.value:
            return ChatOpenAI(api_key=settings.OPENAI_API_KEY, **common)

        # ★ OPENROUTER (OpenAI-compatible API)
        if provider == LLMProvider.OPENROUTER.value:
            return ChatOpenAI(
                api_key=settings.OPENROUTER_API_KEY,
                base_url="https://openrouter.ai/api/v1",
                **common,
            )

        # ★ OLLAMA (OpenAI-compatible)
        if provider == LLMProvider.OLLAMA.value:
            return ChatOpenAI(
                api_key="ollama",  # not used
                base_url="http://localhost:11434/v1",
                **common,
            )

        # ★ GOOGLE GEMINI
        if provider == LLMProvider.GEMINI.value:
            return ChatGoogleGenerativeAI(google_api_key=settings.GEMINI_API_KEY, **common)

        raise ValueError(f"Unsupported LLM provider: {provider}")

    def _invoke(self, messages: List[Any], **kwargs) -> str:
        try:
            if self.model is None:
                self.model = self._load_provider_model()
            response = self.model.invoke(
                messages,
                config={"callbacks": get_langfuse_callbacks()},
                **kwargs,
            )
        except Exception as e:
            raise ExternalServiceError(f"{self.provider}/{self.model_name} call failed: {e}") from e

        return self._reply_text(getattr(response, "content", None))

    def _reply_text(self, content: Any) -> str:
        # LangChain models return either a string or a list of content blocks
        if isinstance(content, str):
            return content

        parts = []
        if isinstance(content, list):
            for block in content:
                if isinstance(block, str):
                    parts.append(block)
                elif isinstance(block, dict) and isinstance(block.get("text"), str):
                    parts.append(block["text"])

        if not parts:
            raise MalformedResponseError(f"{self.provider}/{self.model_name} reply has no text content")
        return "".join(parts)

    # ---------------------------------------------------------------------
    # Main JSON Generator
    # ---------------------------------------------------------------------
    def generate_json(
        self,
        system_prompt: str,
        human_prompt: str,
        schema: Dict[str, Any]
    ) -> Any:
        """
        Generate a reply and parse it as JSON.

        The parsed value is untrusted: callers must validate its shape.

        Raises:
            ExternalServiceError: provider call failed
            MalformedResponseError: reply could not be parsed as JSON
        """
        messages = [
            SystemMessage(content=self._inject_json_rules(system_prompt, schema)),
            HumanMessage(content=human_prompt)
        ]

        # JSON mode only exists on OpenAI-compatible providers;
        # Gemini and Ollama rely on system prompt enforcement
        if self.provider in (LLMProvider.OPENAI.value, LLMProvider.OPENROUTER.value):
            content = self._invoke(messages, response_format={"type": "json_object"})
        else:
            content = self._invoke(messages)

        try:
            return json.loads(extract_json_text(content))
        except json.JSONDecodeError as e:
            logger.debug(f"Unparseable LLM reply: {content[:500]}")
            raise MalformedResponseError(f"Reply is not valid JSON: {e}") from e

    # ---------------------------------------------------------------------
    # JSON Enforcement Layer
    # ---------------------------------------------------------------------
    def _inject_json_rules(self, system_prompt: str, schema: Dict[str, Any]) -> str:
        """
        Ensures all providers return the correct JSON, especially Ollama and OpenRouter.
        """

        return f"""
{system_prompt}

You MUST return ONLY valid JSON matching this schema:

{json.dumps(schema, indent=2)}

Rules:
- Output **only** a JSON object.
- No commentary, no markdown, no code fences.
- Do not explain the JSON, only output it.
- Keys and structure must match the schema exactly.
"""
