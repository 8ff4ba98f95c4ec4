"""
Problem workspace - scaffolds a solution file for a new problem.

Layout under the workspace root:

    <PLATFORM>/<problem id>/<PLATFORM>_<problem id>.<ext>

e.g. ``BOJ/1000/BOJ_1000.py``, pre-filled with a starter solution for the
chosen language.
"""

import re
from pathlib import Path


# Display name → directory / file-name code
PLATFORMS = {
    "Baekjoon": "BOJ",
    "Programmers": "Programmers",
    "SWEA": "SWEA",
}

# ──────────────────────────────────────────────
# Starter solutions
# ──────────────────────────────────────────────

PYTHON_STARTER = """\
# {platform} {problem} - Python Solution

# import sys
# input = sys.stdin.readline

def solve():
    # Write your solution here.
    pass

if __name__ == "__main__":
    solve()
"""

JAVA_STARTER = """\
// {platform} {problem} - Java Solution

import java.io.*;
import java.util.*;

public class Main {{
    public static void main(String[] args) throws IOException {{
        BufferedReader br = new BufferedReader(new InputStreamReader(System.in));
        // Write your solution here.
    }}
}}
"""

C_STARTER = """\
// {platform} {problem} - C Solution

#include <stdio.h>

int main() {{
    // Write your solution here.
    return 0;
}}
"""

CPP_STARTER = """\
// {platform} {problem} - C++ Solution

#include <iostream>
#include <vector>
#include <string>

int main() {{
    std::ios_base::sync_with_stdio(false);
    std::cin.tie(NULL);
    // Write your solution here.
    return 0;
}}
"""

# Language → (extension, starter template)
LANGUAGES = {
    "Python": ("py", PYTHON_STARTER),
    "Java": ("java", JAVA_STARTER),
    "C": ("c", C_STARTER),
    "C++": ("cpp", CPP_STARTER),
}

_UNSAFE_CHARS_RE = re.compile(r"[^0-9A-Za-z가-힣ㄱ-ㅎㅏ-ㅣ]")


def normalize_identifier(problem: str) -> str:
    """Make a problem number/title safe for directory and file names."""
    return _UNSAFE_CHARS_RE.sub("_", problem.strip())


def problem_file_path(root: Path, platform: str, problem: str, language: str) -> Path:
    """Where the solution for *problem* lives, without touching the disk."""
    if platform not in PLATFORMS:
        raise ValueError(f"Unknown platform: {platform}. Choose one of {', '.join(PLATFORMS)}.")
    if language not in LANGUAGES:
        raise ValueError(f"Unsupported language: {language}. Choose one of {', '.join(LANGUAGES)}.")
    identifier = normalize_identifier(problem)
    if not identifier.strip("_"):
        raise ValueError("A problem number or title is required.")

    code = PLATFORMS[platform]
    extension, _ = LANGUAGES[language]
    return Path(root) / code / identifier / f"{code}_{identifier}.{extension}"


def create_problem(
    root: Path,
    platform: str,
    problem: str,
    language: str,
    overwrite: bool = False,
) -> Path:
    """
    Create the problem directory and its starter solution file.

    Raises ValueError for an unknown platform/language or a blank problem,
    FileExistsError when the file is already there and *overwrite* is False,
    and OSError when the directory or file cannot be written.
    """
    path = problem_file_path(root, platform, problem, language)
    if path.exists() and not overwrite:
        raise FileExistsError(f"{path} already exists.")

    _, template = LANGUAGES[language]
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(template.format(platform=platform, problem=problem.strip()), encoding="utf-8")
    return path
