"""
Configuration settings for the analysis note generator.
Loads values from .env file automatically.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env from project root
_project_root = Path(__file__).resolve().parent.parent
load_dotenv(_project_root / ".env")

DEFAULT_TEMPLATE_PATH = (
    _project_root / "core" / "templates" / "analyze_code_prompt.md"
)

# Fixed headings of the analysis note, in document order.
DEFAULT_SECTION_HEADINGS: tuple = (
    "### 1. Overall Analysis & Approach",
    "### 2. Code Structure & Readability",
    "### 3. Time Complexity Analysis",
    "### 4. Space Complexity Analysis",
    "### 5. Potential Issues & Bugs",
    "### 6. Suggestions for Improvement",
    "### 7. Alternative Approaches (Optional)",
)


@dataclass
class LLMConfig:
    """LLM provider configuration."""
    provider: str = "cerebras"
    model: str = os.environ.get("CEREBRAS_MODEL", "llama-3.3-70b")
    api_key: Optional[str] = None
    temperature: float = 0.7
    top_p: float = 0.9
    max_tokens: int = 2048

    def __post_init__(self):
        if self.api_key is None:
            self.api_key = os.environ.get("CEREBRAS_API_KEY", "")


@dataclass
class NoteConfig:
    """Section layout and repair behaviour of a generated note."""
    # Headings are never taken from the AI output; section N is headings[N-1].
    section_headings: tuple = DEFAULT_SECTION_HEADINGS
    start_marker_prefix: str = "---SECTION_START_"
    end_marker_prefix: str = "---SECTION_END_"
    marker_suffix: str = "---"
    placeholder_template: str = (
        "**[AI analysis error: could not generate section {index}]**\n\n"
        "_The AI did not produce this section. Add the content manually "
        "or run the analysis again._"
    )
    max_retry_attempts: int = 2
    retry_base_delay: float = 1.0  # seconds, multiplied by the attempt number
    template_path: Path = DEFAULT_TEMPLATE_PATH

    @property
    def section_count(self) -> int:
        return len(self.section_headings)

    @property
    def section_indices(self) -> range:
        return range(1, self.section_count + 1)

    def heading_for(self, index: int) -> str:
        return self.section_headings[index - 1]

    def placeholder_for(self, index: int) -> str:
        return self.placeholder_template.format(index=index)


@dataclass
class AppConfig:
    """Top-level application configuration."""
    llm: LLMConfig = field(default_factory=LLMConfig)
    notes: NoteConfig = field(default_factory=NoteConfig)
    output_suffix: str = "_analysis.md"
    verbose: bool = True
