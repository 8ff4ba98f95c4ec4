"""
Section extractor - pulls the numbered sections out of a raw completion.

The model is asked to wrap every section in literal markers:

    ---SECTION_START_3---
    ...content...
    ---SECTION_END_3---

Extraction is a pure string scan; a section whose markers are missing is
simply "not found" (empty string), which the repair loop treats as a gap.
"""

import re
from dataclasses import dataclass
from typing import Iterable, Optional


@dataclass(frozen=True)
class SectionMarkers:
    """Start/end marker pair, parameterised only by the section index."""
    start_prefix: str = "---SECTION_START_"
    end_prefix: str = "---SECTION_END_"
    suffix: str = "---"

    def start(self, index: int) -> str:
        return f"{self.start_prefix}{index}{self.suffix}"

    def end(self, index: int) -> str:
        return f"{self.end_prefix}{index}{self.suffix}"


DEFAULT_MARKERS = SectionMarkers()


def _strip_duplicate_heading(content: str, index: int) -> str:
    # e.g. "### 3. Time Complexity Analysis" repeated by the model
    heading_re = re.compile(rf"\A\s*#+\s*{index}\.[^\n]*(?:\n|\Z)")
    return heading_re.sub("", content, count=1)


def extract_section(
    raw_text: str,
    index: int,
    markers: SectionMarkers = DEFAULT_MARKERS,
) -> str:
    """
    Return the trimmed content between the first start marker for *index*
    and the next matching end marker, or "" if either marker is missing.
    """
    start_marker = markers.start(index)
    end_marker = markers.end(index)

    start = raw_text.find(start_marker)
    if start == -1:
        return ""

    content_start = start + len(start_marker)
    end = raw_text.find(end_marker, content_start)
    if end == -1:
        return ""

    content = raw_text[content_start:end]
    return _strip_duplicate_heading(content, index).strip()


def parse_sections(
    raw_text: str,
    indices: Iterable[int],
    markers: SectionMarkers = DEFAULT_MARKERS,
) -> dict[int, Optional[str]]:
    """Map every requested index to its extracted content, or None when missing/blank."""
    parsed: dict[int, Optional[str]] = {}
    for index in indices:
        content = extract_section(raw_text, index, markers)
        parsed[index] = content or None
    return parsed
