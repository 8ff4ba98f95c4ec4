"""
Document assembler - renders the final Markdown note.

Pure function of (metadata, resolved sections, headings): the same inputs
always give the same bytes. Layout:

    ---
    platform: ...
    problemId: ...
    title: ...
    language: ...
    analyzedAt: ...
    ---

    ## <main heading>

    <initial sentence>

    ### 1. <heading>
    <content>

    ...
"""

from typing import Mapping, Optional, Sequence

from core.metadata import DocumentMetadata


MISSING_SECTION_TEXT = "_This section could not be generated._"


def build_front_matter(metadata: DocumentMetadata) -> str:
    lines = ["---"]
    lines.extend(f"{key}: {value}" for key, value in metadata.as_front_matter())
    lines.append("---")
    return "\n".join(lines)


def assemble_document(
    metadata: DocumentMetadata,
    sections: Mapping[int, Optional[str]],
    headings: Sequence[str],
) -> str:
    """
    Concatenate front matter, title, intro and every section in index order.

    Any index missing from *sections*, or mapped to an empty string, is
    rendered as MISSING_SECTION_TEXT. NoteGenerator always passes a full map
    with its own per-section placeholder, so this generic text only shows up
    when a caller assembles a partial map directly.
    """
    markdown = (
        f"{build_front_matter(metadata)}\n\n"
        f"{metadata.main_heading}\n\n"
        f"{metadata.initial_sentence}\n\n"
    )

    for index, heading in enumerate(headings, 1):
        content = sections.get(index) or MISSING_SECTION_TEXT
        markdown += f"{heading}\n{content}\n\n"

    return markdown.strip()
