"""
Note translator - translates a finished analysis note into another language
while keeping its Markdown structure intact.
"""

from typing import Optional

from core.llm_client import CompletionClient
from core.prompt import PromptComposer


class NoteTranslator:
    """Translates Markdown notes through the completion client."""

    def __init__(self, client: CompletionClient, verbose: bool = True):
        self.client = client
        self.verbose = verbose

    async def translate(self, content: str, target_language: str) -> Optional[str]:
        """Return the translated note, or None when the model produced nothing."""
        if not content.strip():
            raise ValueError("Nothing to translate: the note is empty.")
        if not target_language.strip():
            raise ValueError("A target language is required.")

        if self.verbose:
            print(f"🌐 Translating note into {target_language}...")
        prompt = PromptComposer.compose_translation(content, target_language)
        result = await self.client.generate(prompt)
        if not result.ok:
            return None
        return result.text
