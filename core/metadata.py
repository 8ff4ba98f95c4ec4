"""
Document metadata - the frozen record that heads every analysis note,
plus the file-name convention used to pre-fill it.

Solution files are conventionally named ``[Platform]1000_Problem_Title.py``;
``parse_file_name`` recovers the platform, problem id and title from that
shape and falls back to "Unknown" values otherwise.
"""

import re
from datetime import date
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


UNKNOWN = "Unknown"
UNKNOWN_PLATFORM = "Unknown Platform"
UNKNOWN_ID = "Unknown ID"
UNTITLED = "Untitled Problem"
UNKNOWN_LANGUAGE = "plaintext"

_FILE_NAME_RE = re.compile(r"^(?:\[(.*?)\])?(\d+)[_.-]?(.*?)(?:\..+)?$")
# "BOJ_1000.py", as written by the setup command
_SCAFFOLD_NAME_RE = re.compile(r"^([A-Za-z]+)_(\d+)\.[^.]+$")


def _effective(value: Optional[str], sentinel: str) -> str:
    """Map a missing, blank or "Unknown" value to its sentinel."""
    if value is None:
        return sentinel
    value = value.strip()
    if not value or value == UNKNOWN:
        return sentinel
    return value


class DocumentMetadata(BaseModel):
    """Metadata of one generated note. Built once per run, never mutated."""
    model_config = ConfigDict(frozen=True)

    platform: str = Field(default=UNKNOWN_PLATFORM, description="Problem platform, e.g. 'Baekjoon'")
    problem_id: str = Field(default=UNKNOWN_ID, description="Problem number on the platform")
    title: str = Field(default=UNTITLED, description="Human-readable problem title")
    language: str = Field(default=UNKNOWN_LANGUAGE, description="Language of the analyzed code")
    analyzed_at: str = Field(description="Generation date, YYYY-MM-DD")

    @classmethod
    def build(
        cls,
        platform: Optional[str] = None,
        problem_id: Optional[str] = None,
        title: Optional[str] = None,
        language: Optional[str] = None,
        analyzed_at: Optional[str] = None,
    ) -> "DocumentMetadata":
        """Build metadata from caller input, resolving every absent field to its sentinel."""
        return cls(
            platform=_effective(platform, UNKNOWN_PLATFORM),
            problem_id=_effective(problem_id, UNKNOWN_ID),
            title=_effective(title, UNTITLED),
            language=_effective(language, UNKNOWN_LANGUAGE),
            analyzed_at=analyzed_at or date.today().isoformat(),
        )

    @property
    def main_heading(self) -> str:
        return f"## {self.platform} {self.problem_id} {self.language} Code Analysis"

    @property
    def initial_sentence(self) -> str:
        sentence = self.platform
        if self.problem_id != UNKNOWN_ID:
            sentence += f" {self.problem_id}"
        if self.title != UNTITLED:
            sentence += f" ({self.title})"
        return f"{sentence} {self.language} code is analyzed below."

    def as_front_matter(self) -> list[tuple[str, str]]:
        """Key/value pairs of the metadata block, in their fixed order."""
        return [
            ("platform", self.platform),
            ("problemId", self.problem_id),
            ("title", self.title),
            ("language", self.language),
            ("analyzedAt", self.analyzed_at),
        ]


def parse_file_name(file_name: str) -> dict:
    """
    Parse platform, problem id and title out of a solution file name.

    Examples:
        "[Baekjoon]1000_A+B.py"        → {"platform": "Baekjoon", "problem_id": "1000", "title": "A+B"}
        "[Programmers]42576_Marathon_Runner.js"
                                       → {"platform": "Programmers", "problem_id": "42576", "title": "Marathon Runner"}
        "BOJ_1000.py"                  → {"platform": "BOJ", "problem_id": "1000", "title": "Unknown"}
        "test_file.py"                 → {"platform": "Unknown", "problem_id": "Unknown", "title": "test_file"}
    """
    name = Path(file_name).name
    stem = Path(name).stem
    result = {"platform": UNKNOWN, "problem_id": UNKNOWN, "title": stem}

    scaffold = _SCAFFOLD_NAME_RE.match(name)
    if scaffold:
        result.update(platform=scaffold.group(1), problem_id=scaffold.group(2), title=UNKNOWN)
        return result

    match = _FILE_NAME_RE.match(name)
    if not match:
        return result

    platform, problem_id, title = match.groups()
    result["platform"] = platform.strip() if platform and platform.strip() else UNKNOWN
    result["problem_id"] = problem_id.strip()

    if title and title.strip():
        result["title"] = title.replace("_", " ").strip()
    else:
        result["title"] = stem.replace("_", " ").strip()
    return result
