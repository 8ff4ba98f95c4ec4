import pytest
from pydantic import ValidationError

from core.metadata import DocumentMetadata, parse_file_name


def test_build_resolves_missing_values_to_sentinels():
    meta = DocumentMetadata.build(language="python", analyzed_at="2026-01-02")

    assert meta.platform == "Unknown Platform"
    assert meta.problem_id == "Unknown ID"
    assert meta.title == "Untitled Problem"
    assert meta.analyzed_at == "2026-01-02"


def test_build_treats_unknown_and_blank_as_missing():
    meta = DocumentMetadata.build(platform="Unknown", problem_id="  ", title="Unknown", language="")

    assert meta.platform == "Unknown Platform"
    assert meta.problem_id == "Unknown ID"
    assert meta.title == "Untitled Problem"
    assert meta.language == "plaintext"


def test_build_defaults_date_to_iso_today():
    meta = DocumentMetadata.build()
    assert len(meta.analyzed_at) == 10
    assert meta.analyzed_at[4] == "-" and meta.analyzed_at[7] == "-"


def test_metadata_is_frozen():
    meta = DocumentMetadata.build(platform="Baekjoon", analyzed_at="2026-01-02")
    with pytest.raises(ValidationError):
        meta.platform = "Other"


def test_heading_and_sentence_with_full_metadata():
    meta = DocumentMetadata.build(
        platform="Baekjoon", problem_id="1000", title="A+B",
        language="python", analyzed_at="2026-01-02",
    )

    assert meta.main_heading == "## Baekjoon 1000 python Code Analysis"
    assert meta.initial_sentence == "Baekjoon 1000 (A+B) python code is analyzed below."


def test_sentence_omits_sentinel_id_and_title():
    meta = DocumentMetadata.build(language="java", analyzed_at="2026-01-02")

    assert meta.main_heading == "## Unknown Platform Unknown ID java Code Analysis"
    assert meta.initial_sentence == "Unknown Platform java code is analyzed below."


def test_front_matter_key_order():
    meta = DocumentMetadata.build(language="c", analyzed_at="2026-01-02")
    keys = [key for key, _ in meta.as_front_matter()]
    assert keys == ["platform", "problemId", "title", "language", "analyzedAt"]


@pytest.mark.parametrize(
    "file_name, expected",
    [
        ("[Baekjoon]1000_A+B.py", ("Baekjoon", "1000", "A+B")),
        ("[Programmers]42576_Marathon_Runner.js", ("Programmers", "42576", "Marathon Runner")),
        ("2557-Hello_World.cpp", ("Unknown", "2557", "Hello World")),
        ("BOJ_1000.py", ("BOJ", "1000", "Unknown")),
        ("test_file.py", ("Unknown", "Unknown", "test_file")),
    ],
)
def test_parse_file_name(file_name, expected):
    parsed = parse_file_name(file_name)
    assert (parsed["platform"], parsed["problem_id"], parsed["title"]) == expected


def test_parse_file_name_ignores_directories():
    parsed = parse_file_name("solutions/[SWEA]1234_Tree.java")
    assert parsed["platform"] == "SWEA"
    assert parsed["problem_id"] == "1234"
