import asyncio

import pytest
from llama_index.core.llms import MockLLM

from core.llm_client import CompletionClient
from core.translator import NoteTranslator


def test_translate_sends_markdown_prompt():
    # MockLLM echoes the prompt back
    translator = NoteTranslator(CompletionClient(MockLLM(), verbose=False), verbose=False)

    translated = asyncio.run(translator.translate("### 1. Overview\nText", "Korean"))

    assert "into Korean" in translated
    assert "```markdown\n### 1. Overview\nText\n```" in translated


def test_translate_returns_none_when_model_fails():
    translator = NoteTranslator(CompletionClient(None, verbose=False), verbose=False)
    assert asyncio.run(translator.translate("note", "English")) is None


def test_translate_rejects_empty_note():
    translator = NoteTranslator(CompletionClient(MockLLM(), verbose=False), verbose=False)
    with pytest.raises(ValueError):
        asyncio.run(translator.translate("  \n", "English"))
