import asyncio

import pytest
from llama_index.core.llms import MockLLM

from config.settings import LLMConfig
from core.llm_client import (
    CompletionClient,
    CompletionFailure,
    FailureCause,
    classify_error,
    describe_failure,
)


class _RaisingLLM:
    def __init__(self, error: Exception):
        self.error = error

    async def acomplete(self, prompt: str, **kwargs):
        raise self.error


def test_generate_returns_text_from_llm():
    client = CompletionClient(MockLLM(), verbose=False)

    result = asyncio.run(client.generate("echo this"))

    assert result.ok
    assert result.text == "echo this"
    assert client.calls == 1


def test_blank_completion_is_a_failure():
    client = CompletionClient(MockLLM(), verbose=False)

    result = asyncio.run(client.generate("   "))

    assert not result.ok
    assert result.failure.cause == FailureCause.GENERIC


def test_unconfigured_client_reports_missing_credential_without_calling():
    client = CompletionClient(None, verbose=False)

    result = asyncio.run(client.generate("hello"))

    assert result.failure.cause == FailureCause.MISSING_CREDENTIAL
    assert client.calls == 0
    assert not client.configured


def test_from_config_without_key_stays_unconfigured():
    client = CompletionClient.from_config(LLMConfig(api_key=""), verbose=False)
    assert not client.configured


def test_provider_exception_is_classified_not_raised(capsys):
    client = CompletionClient(_RaisingLLM(RuntimeError("Error code: 429 - Too Many Requests")))

    result = asyncio.run(client.generate("hello"))

    assert result.failure.cause == FailureCause.QUOTA_EXCEEDED
    assert "quota" in capsys.readouterr().out.lower()


@pytest.mark.parametrize(
    "message, cause",
    [
        ("Error code: 401 - Wrong API Key", FailureCause.INVALID_CREDENTIAL),
        ("API key not valid. Please pass a valid API key.", FailureCause.INVALID_CREDENTIAL),
        ("User location is not supported for the API use.", FailureCause.UNSUPPORTED_REGION),
        ("You exceeded your current quota", FailureCause.QUOTA_EXCEEDED),
        ("Connection reset by peer", FailureCause.GENERIC),
    ],
)
def test_classify_error(message, cause):
    assert classify_error(RuntimeError(message)) == cause


def test_describe_generic_failure_includes_message():
    text = describe_failure(CompletionFailure(cause=FailureCause.GENERIC, message="socket closed"))
    assert "socket closed" in text
