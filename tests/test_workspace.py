from pathlib import Path

import pytest

from core.workspace import LANGUAGES, create_problem, normalize_identifier, problem_file_path


def test_normalize_identifier_keeps_letters_digits_and_hangul():
    assert normalize_identifier(" 1000 ") == "1000"
    assert normalize_identifier("A+B") == "A_B"
    assert normalize_identifier("두 수의 합") == "두_수의_합"


def test_problem_file_path_layout():
    path = problem_file_path(Path("work"), "Baekjoon", "1000", "C")
    assert path == Path("work") / "BOJ" / "1000" / "BOJ_1000.c"


@pytest.mark.parametrize(
    "platform, problem, language, message",
    [
        ("Codeforces", "1000", "Python", "Unknown platform"),
        ("Baekjoon", "1000", "Rust", "Unsupported language"),
        ("Baekjoon", "  ", "Python", "required"),
        ("Baekjoon", "+++", "Python", "required"),
    ],
)
def test_problem_file_path_rejects_bad_input(platform, problem, language, message):
    with pytest.raises(ValueError, match=message):
        problem_file_path(Path("."), platform, problem, language)


@pytest.mark.parametrize("language", list(LANGUAGES))
def test_every_starter_renders(tmp_path, language):
    path = create_problem(tmp_path, "Programmers", "42576", language)

    content = path.read_text(encoding="utf-8")
    assert content.splitlines()[0].endswith(f"Programmers 42576 - {language} Solution")
    assert "Write your solution here." in content
    assert "{platform}" not in content and "{{" not in content


def test_java_starter_keeps_braces(tmp_path):
    path = create_problem(tmp_path, "SWEA", "1234", "Java")

    content = path.read_text(encoding="utf-8")
    assert path.name == "SWEA_1234.java"
    assert "public class Main {" in content
    assert content.rstrip().endswith("}")


def test_create_problem_does_not_overwrite(tmp_path):
    path = create_problem(tmp_path, "Baekjoon", "1000", "Python")
    path.write_text("solved", encoding="utf-8")

    with pytest.raises(FileExistsError):
        create_problem(tmp_path, "Baekjoon", "1000", "Python")
    assert path.read_text(encoding="utf-8") == "solved"

    create_problem(tmp_path, "Baekjoon", "1000", "Python", overwrite=True)
    assert "def solve():" in path.read_text(encoding="utf-8")
