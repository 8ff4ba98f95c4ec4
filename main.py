"""
AI Note - AI-powered analysis notes for coding-test solutions.

Entry point for problem setup, note generation and translation.

Usage:
    python main.py setup Baekjoon 1000 --language Python        # BOJ/1000/BOJ_1000.py
    python main.py analyze <source_file>                        # note beside the source
    python main.py analyze <source_file> -o notes/OUT.md        # custom output
    python main.py analyze <source_file> --platform Baekjoon    # override parsed metadata
    python main.py analyze <source_file> --deadline 60          # stop repairs after 60s
    python main.py translate <note_file> --to Korean            # translate a note
"""

import argparse
import asyncio
import os
import sys
import time
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from core.workspace import LANGUAGES, PLATFORMS

# Load .env before anything else
load_dotenv()


# Map file extensions to languages for the note metadata
LANG_MAP = {
    ".py": "python",
    ".js": "javascript",
    ".ts": "typescript",
    ".java": "java",
    ".c": "c",
    ".cpp": "cpp",
    ".cc": "cpp",
    ".cs": "csharp",
    ".go": "go",
    ".rs": "rust",
    ".kt": "kotlin",
    ".swift": "swift",
    ".rb": "ruby",
}


def parse_args(argv: Optional[list] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="ai-note",
        description="📝 AI Note — analysis notes for coding-test solutions.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
Examples:
  python main.py setup Baekjoon 1000 --language Python
  python main.py analyze "[Baekjoon]1000_A+B.py"
  python main.py analyze solution.py -o notes/solution.md --platform LeetCode
  python main.py translate "[Baekjoon]1000_A+B_analysis.md" --to Korean
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # ── setup ──────────────────────────────────
    setup_parser = subparsers.add_parser(
        "setup",
        help="Create a problem directory with a starter solution file.",
    )
    setup_parser.add_argument("platform", choices=list(PLATFORMS), help="Problem platform.")
    setup_parser.add_argument("problem", help="Problem number (or title).")
    setup_parser.add_argument(
        "-l", "--language",
        choices=list(LANGUAGES),
        default="Python",
        help="Solution language (default: Python).",
    )
    setup_parser.add_argument(
        "--root",
        default=".",
        help="Workspace root the problem directory is created under (default: current directory).",
    )
    setup_parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite the solution file if it already exists.",
    )

    # ── analyze ────────────────────────────────
    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Analyze a solution file and write a Markdown note.",
    )
    analyze_parser.add_argument(
        "source_file",
        help="Path to the solution source file.",
    )
    analyze_parser.add_argument(
        "-o", "--output",
        default=None,
        help="Output file path for the note. "
             "Defaults to '<source stem>_analysis.md' beside the source file.",
    )
    analyze_parser.add_argument(
        "--model",
        default=None,
        help="Cerebras LLM model to use (default from .env or llama-3.3-70b).",
    )
    analyze_parser.add_argument("--platform", default=None, help="Problem platform (overrides the file name).")
    analyze_parser.add_argument("--problem-id", default=None, help="Problem ID (overrides the file name).")
    analyze_parser.add_argument("--title", default=None, help="Problem title (overrides the file name).")
    analyze_parser.add_argument("--language", default=None, help="Code language (default: from the extension).")
    analyze_parser.add_argument(
        "--deadline",
        type=float,
        default=None,
        help="Seconds after which no further section repairs are started.",
    )
    analyze_parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress progress output.",
    )

    # ── translate ──────────────────────────────
    translate_parser = subparsers.add_parser(
        "translate",
        help="Translate an analysis note into another language.",
    )
    translate_parser.add_argument("note_file", help="Path to the Markdown note.")
    translate_parser.add_argument(
        "--to",
        dest="target_language",
        default="English",
        help="Target language, e.g. English or Korean (default: English).",
    )
    translate_parser.add_argument(
        "-o", "--output",
        default=None,
        help="Output file path. Defaults to printing the translation.",
    )
    translate_parser.add_argument("--model", default=None, help="Cerebras LLM model to use.")
    translate_parser.add_argument("-q", "--quiet", action="store_true", help="Suppress progress output.")

    return parser.parse_args(argv)


def detect_language(source_path: Path) -> str:
    return LANG_MAP.get(source_path.suffix.lower(), source_path.suffix.lstrip(".") or "plaintext")


def default_output_path(source_path: Path, suffix: str = "_analysis.md") -> Path:
    """'[Baekjoon]1000_A+B.py' → '[Baekjoon]1000_A+B_analysis.md' in the same directory."""
    return source_path.with_name(f"{source_path.stem}{suffix}")


def save_note(path: Path, markdown: str) -> Path:
    """Write the note, creating parent directories. Raises OSError on failure."""
    os.makedirs(path.parent or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(markdown)
    return path


def _build_client(model: Optional[str], quiet: bool):
    from config.settings import AppConfig, LLMConfig
    from core.llm_client import CompletionClient

    llm_config = LLMConfig(model=model) if model else LLMConfig()
    config = AppConfig(llm=llm_config, verbose=not quiet)
    return config, CompletionClient.from_config(config.llm, verbose=not quiet)


async def _generate_with_deadline(generator, request, deadline: Optional[float]):
    cancel_event = asyncio.Event()
    handle = None
    if deadline is not None:
        handle = asyncio.get_running_loop().call_later(deadline, cancel_event.set)
    try:
        return await generator.generate(request, cancel_event)
    finally:
        if handle is not None:
            handle.cancel()


def run_analyze(
    source_file: str,
    output_path: Optional[str] = None,
    model: Optional[str] = None,
    quiet: bool = False,
    platform: Optional[str] = None,
    problem_id: Optional[str] = None,
    title: Optional[str] = None,
    language: Optional[str] = None,
    deadline: Optional[float] = None,
) -> int:
    """
    Main pipeline: Read → Compose → Complete → Repair → Assemble → Save.
    Returns the process exit code.
    """
    # Lazy imports so `--help` stays fast
    from core.engine import GenerationRequest, GenerationStatus, NoteGenerator
    from core.llm_client import describe_failure
    from core.metadata import parse_file_name

    start_time = time.time()
    source_path = Path(source_file)

    try:
        code = source_path.read_text(encoding="utf-8")
    except OSError as e:
        print(f"❌ Cannot read source file: {e}")
        return 1
    if not code.strip():
        print("❌ Nothing to analyze: the file is empty.")
        return 1

    config, client = _build_client(model, quiet)
    if not client.configured:
        print("❌ No API key configured. Set CEREBRAS_API_KEY in your environment or .env file.")
        return 1

    parsed = parse_file_name(source_path.name)
    if not quiet:
        print(
            f"🔎 Parsed file info: Platform={parsed['platform']}, "
            f"ProblemId={parsed['problem_id']}, Title={parsed['title']}"
        )

    request = GenerationRequest(
        code=code,
        language=language or detect_language(source_path),
        platform=platform or parsed["platform"],
        problem_id=problem_id or parsed["problem_id"],
        title=title or parsed["title"],
    )

    def on_section_start(index: int, total: int, heading: str):
        if not quiet:
            print(f"  ✍️  [{index}/{total}] {heading}")

    generator = NoteGenerator(
        client,
        config.notes,
        verbose=config.verbose,
        on_section_start=on_section_start,
    )
    result = asyncio.run(_generate_with_deadline(generator, request, deadline))

    if result.status == GenerationStatus.FAILED:
        if quiet:
            # in verbose mode the client has already printed the classified cause
            message = describe_failure(result.failure) if result.failure else "unknown error"
            print(f"❌ Analysis failed: {message}")
        else:
            print("❌ Analysis failed.")
        return 1
    if result.status == GenerationStatus.CANCELLED:
        print(f"🛑 Analysis cancelled after {len(result.sections)} resolved section(s); no note written.")
        return 1

    final_path = Path(output_path) if output_path else default_output_path(source_path, config.output_suffix)
    try:
        save_note(final_path, result.document)
    except OSError as e:
        print(f"❌ Failed to save the analysis note: {e}")
        print("   The generated note is printed below so it is not lost.\n")
        print(result.document)
        return 1

    elapsed = time.time() - start_time
    if not quiet:
        print(f"\n{'=' * 60}")
        print("✅ Analysis note generated successfully!")
        print(f"   📄 Output: {final_path.resolve()}")
        print(f"   ⏱️  Time: {elapsed:.1f}s")
        print(f"   🩹 Repaired: {len(result.recovered)} | Placeholders: {len(result.placeholders)}")
        print(f"{'=' * 60}\n")
    return 0


def run_setup(
    platform: str,
    problem: str,
    language: str = "Python",
    root: str = ".",
    force: bool = False,
) -> int:
    """Scaffold <root>/<PLATFORM>/<problem>/<PLATFORM>_<problem>.<ext>."""
    from core.workspace import create_problem

    try:
        path = create_problem(Path(root), platform, problem, language, overwrite=force)
    except ValueError as e:
        print(f"❌ {e}")
        return 1
    except FileExistsError as e:
        print(f"⚠️  {e} Use --force to overwrite it.")
        return 1
    except OSError as e:
        print(f"❌ Failed to create the problem file: {e}")
        return 1

    print(f"✅ Problem workspace ready: {path.resolve()}")
    return 0


def run_translate(
    note_file: str,
    target_language: str,
    output_path: Optional[str] = None,
    model: Optional[str] = None,
    quiet: bool = False,
) -> int:
    from core.translator import NoteTranslator

    try:
        content = Path(note_file).read_text(encoding="utf-8")
    except OSError as e:
        print(f"❌ Cannot read note: {e}")
        return 1
    if not content.strip():
        print("❌ Nothing to translate: the note is empty.")
        return 1
    if not note_file.lower().endswith(".md") and not quiet:
        print(f"⚠️  {note_file} is not a Markdown file; translating anyway.")

    config, client = _build_client(model, quiet)
    if not client.configured:
        print("❌ No API key configured. Set CEREBRAS_API_KEY in your environment or .env file.")
        return 1

    translator = NoteTranslator(client, verbose=config.verbose)
    translated = asyncio.run(translator.translate(content, target_language))
    if translated is None:
        print("❌ The model did not return a translation.")
        return 1

    if output_path:
        try:
            save_note(Path(output_path), translated)
        except OSError as e:
            print(f"❌ Failed to save the translation: {e}")
            print(translated)
            return 1
        if not quiet:
            print(f"✅ Note translated into {target_language}: {Path(output_path).resolve()}")
    else:
        print(translated)
    return 0


def main(argv: Optional[list] = None):
    args = parse_args(argv)

    if args.command == "setup":
        code = run_setup(
            platform=args.platform,
            problem=args.problem,
            language=args.language,
            root=args.root,
            force=args.force,
        )
        sys.exit(code)
    elif args.command == "analyze":
        code = run_analyze(
            source_file=args.source_file,
            output_path=args.output,
            model=args.model,
            quiet=args.quiet,
            platform=args.platform,
            problem_id=args.problem_id,
            title=args.title,
            language=args.language,
            deadline=args.deadline,
        )
        sys.exit(code)
    elif args.command == "translate":
        code = run_translate(
            note_file=args.note_file,
            target_language=args.target_language,
            output_path=args.output,
            model=args.model,
            quiet=args.quiet,
        )
        sys.exit(code)
    else:
        # No command given: show help
        print("📝 AI Note — analysis notes for coding-test solutions\n")
        print("Commands:")
        print("  python main.py setup <platform> <problem> Create a starter solution file")
        print("  python main.py analyze <source_file>     Generate an analysis note")
        print("  python main.py translate <note_file>     Translate a note")
        print("\nRun 'python main.py --help' for full usage details.")


if __name__ == "__main__":
    main()
