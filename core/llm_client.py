"""
Completion client - the single owned gateway to the remote LLM.

The client is constructed once by the composition root and handed to every
component that needs completions. It never raises for provider errors:
``generate`` resolves to either text or a classified failure, and callers
only branch on "got text" vs "no text".
"""

from enum import Enum
from typing import Optional

from llama_index.core.llms import LLM
from pydantic import BaseModel, Field

from config.settings import LLMConfig


class FailureCause(str, Enum):
    MISSING_CREDENTIAL = "missing_credential"
    INVALID_CREDENTIAL = "invalid_credential"
    UNSUPPORTED_REGION = "unsupported_region"
    QUOTA_EXCEEDED = "quota_exceeded"
    GENERIC = "generic"


class CompletionFailure(BaseModel):
    """Why a completion produced no text."""
    cause: FailureCause
    message: str = Field(default="", description="Raw provider message, for diagnostics")


class CompletionResult(BaseModel):
    """Outcome of one completion call: exactly one of text / failure is set."""
    text: Optional[str] = None
    failure: Optional[CompletionFailure] = None

    @property
    def ok(self) -> bool:
        return self.text is not None


_USER_MESSAGES = {
    FailureCause.MISSING_CREDENTIAL: "No API key configured. Set CEREBRAS_API_KEY in your environment or .env file.",
    FailureCause.INVALID_CREDENTIAL: "The API key is not valid. Check CEREBRAS_API_KEY and try again.",
    FailureCause.UNSUPPORTED_REGION: "The AI provider is not available in your current location.",
    FailureCause.QUOTA_EXCEEDED: "The AI provider quota or rate limit was exceeded. Try again later.",
}


def classify_error(error: Exception) -> FailureCause:
    """Classify a provider exception by its message text."""
    text = f"{type(error).__name__}: {error}".lower()
    if (
        "api key not valid" in text
        or "invalid api key" in text
        or "authentication" in text
        or "401" in text
    ):
        return FailureCause.INVALID_CREDENTIAL
    if "location is not supported" in text or "unsupported_country" in text:
        return FailureCause.UNSUPPORTED_REGION
    if (
        "429" in text
        or "quota" in text
        or "rate limit" in text
        or "resource_exhausted" in text
        or "too many requests" in text
    ):
        return FailureCause.QUOTA_EXCEEDED
    return FailureCause.GENERIC


def describe_failure(failure: CompletionFailure) -> str:
    """User-facing message for a classified failure."""
    if failure.cause in _USER_MESSAGES:
        return _USER_MESSAGES[failure.cause]
    return f"Error while calling the AI provider: {failure.message or 'unknown error'}"


class CompletionClient:
    """Prompt in, text-or-failure out."""

    def __init__(self, llm: Optional[LLM], verbose: bool = True):
        self.llm = llm
        self.verbose = verbose
        self.calls = 0

    @classmethod
    def from_config(cls, config: LLMConfig, verbose: bool = True) -> "CompletionClient":
        """Build the provider LLM once. Without an API key the client stays unconfigured."""
        if not config.api_key:
            return cls(None, verbose=verbose)

        from llama_index.llms.cerebras import Cerebras

        llm = Cerebras(
            model=config.model,
            api_key=config.api_key,
            temperature=config.temperature,
            max_tokens=config.max_tokens,
            additional_kwargs={"top_p": config.top_p},
        )
        return cls(llm, verbose=verbose)

    @property
    def configured(self) -> bool:
        return self.llm is not None

    async def generate(self, prompt: str) -> CompletionResult:
        """Send *prompt* to the model and return its text, or a classified failure."""
        if self.llm is None:
            return self._fail(FailureCause.MISSING_CREDENTIAL, "LLM client is not configured.")

        self.calls += 1
        try:
            response = await self.llm.acomplete(prompt)
        except Exception as exc:
            return self._fail(classify_error(exc), str(exc))

        text = response.text or ""
        if not text.strip():
            return self._fail(FailureCause.GENERIC, "empty response")
        return CompletionResult(text=text)

    def _fail(self, cause: FailureCause, message: str) -> CompletionResult:
        failure = CompletionFailure(cause=cause, message=message)
        if self.verbose:
            print(f"❌ {describe_failure(failure)}")
        return CompletionResult(failure=failure)
