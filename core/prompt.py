"""
Prompt composer - builds the requests sent to the completion client.

The main analysis prompt comes from a Markdown template with ``{{key}}``
placeholders. Every key in the fixed substitution set is always replaced;
metadata values have already been resolved to their sentinels, so no
placeholder is ever replaced by an empty string. When the template cannot
be read, a minimal prompt carrying the language and code is used instead.
"""

import re
from pathlib import Path
from typing import Optional

from config.settings import DEFAULT_TEMPLATE_PATH
from core.extractor import DEFAULT_MARKERS, SectionMarkers
from core.metadata import DocumentMetadata


SUBSTITUTION_KEYS = (
    "platform",
    "problemId",
    "title",
    "language",
    "analyzedAt",
    "code",
    "mainHeading",
    "initialSentence",
)

_HEADING_PREFIX_RE = re.compile(r"^#+\s*\d+\.\s*")
_PLACEHOLDER_RE = re.compile(r"\{\{(\w+)\}\}")


# ──────────────────────────────────────────────
# Prompt texts
# ──────────────────────────────────────────────

FALLBACK_PROMPT = """\
Analyze the following {language} code:
```{language}
{code}
```

Problem Platform: {platform}
Problem ID: {problem_id}
Problem Title: {title}
Analyzed Date: {analyzed_at}"""

REPAIR_PROMPT = """\
You are an expert software engineer and a coding test specialist.
The previous analysis for the following {language} code was incomplete, \
specifically missing content for section {index}.
Please generate only the content for section {index} ( "{section_title}" ) based on the provided code.
Your response MUST start with "{start_marker}" and end with "{end_marker}".
DO NOT include any other sections, YAML front matter, or additional text outside these markers.

Problem Platform: {platform}
Problem ID: {problem_id}
Problem Title: {title}

Code to analyze:
```{language}
{code}
```
"""

TRANSLATION_PROMPT = """\
You are a professional translator. Translate the following Markdown content into \
{target_language}. Maintain the original Markdown formatting precisely, including \
headings, lists, code blocks, and bold/italic text. Ensure the translation is natural \
and accurate, especially for technical terms.

Here is the Markdown content to translate:

```markdown
{content}
```
"""


class TemplateUnavailableError(Exception):
    """The prompt template resource could not be read."""


def load_template(path: Path) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise TemplateUnavailableError(f"Cannot read prompt template {path}: {e}") from e


def render_template(template: str, values: dict) -> str:
    """Replace every ``{{key}}`` of the substitution set; other braces are left alone."""
    missing = [key for key in SUBSTITUTION_KEYS if key not in values]
    if missing:
        raise KeyError(f"Missing substitution values: {', '.join(missing)}")

    # single pass: substituted values are never scanned for placeholders again
    return _PLACEHOLDER_RE.sub(
        lambda m: str(values[m.group(1)]) if m.group(1) in SUBSTITUTION_KEYS else m.group(0),
        template,
    )


class PromptComposer:
    """Builds the initial, repair and translation prompts."""

    def __init__(
        self,
        template_path: Optional[Path] = None,
        markers: SectionMarkers = DEFAULT_MARKERS,
        verbose: bool = True,
    ):
        self.template_path = Path(template_path) if template_path else DEFAULT_TEMPLATE_PATH
        self.markers = markers
        self.verbose = verbose

    @staticmethod
    def substitution_values(metadata: DocumentMetadata, code: str) -> dict:
        return {
            "platform": metadata.platform,
            "problemId": metadata.problem_id,
            "title": metadata.title,
            "language": metadata.language,
            "analyzedAt": metadata.analyzed_at,
            "code": code,
            "mainHeading": metadata.main_heading,
            "initialSentence": metadata.initial_sentence,
        }

    def compose(self, metadata: DocumentMetadata, code: str) -> str:
        """Build the full analysis prompt. The template is read on every call."""
        try:
            template = load_template(self.template_path)
        except TemplateUnavailableError as e:
            if self.verbose:
                print(f"⚠️  {e}; using the fallback prompt.")
            return self.fallback_prompt(metadata, code)

        if self.verbose:
            print(f"📄 Prompt template loaded from: {self.template_path}")
        return render_template(template, self.substitution_values(metadata, code))

    @staticmethod
    def fallback_prompt(metadata: DocumentMetadata, code: str) -> str:
        return FALLBACK_PROMPT.format(
            language=metadata.language,
            code=code,
            platform=metadata.platform,
            problem_id=metadata.problem_id,
            title=metadata.title,
            analyzed_at=metadata.analyzed_at,
        )

    def compose_repair(
        self,
        index: int,
        heading: str,
        metadata: DocumentMetadata,
        code: str,
    ) -> str:
        """Build a prompt asking for exactly one delimited section."""
        return REPAIR_PROMPT.format(
            language=metadata.language,
            index=index,
            section_title=_HEADING_PREFIX_RE.sub("", heading).strip(),
            start_marker=self.markers.start(index),
            end_marker=self.markers.end(index),
            platform=metadata.platform,
            problem_id=metadata.problem_id,
            title=metadata.title,
            code=code,
        )

    @staticmethod
    def compose_translation(content: str, target_language: str) -> str:
        return TRANSLATION_PROMPT.format(content=content, target_language=target_language)
