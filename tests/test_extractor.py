import textwrap

from core.extractor import SectionMarkers, extract_section, parse_sections


def test_extract_returns_text_between_markers():
    raw = textwrap.dedent(
        """
        preamble the model should not have written
        ---SECTION_START_1---
        The solution reads two integers and prints their sum.
        ---SECTION_END_1---
        """
    )

    assert extract_section(raw, 1) == "The solution reads two integers and prints their sum."


def test_extract_strips_repeated_heading_and_whitespace():
    raw = (
        "---SECTION_START_3---\n"
        "\n"
        "### 3. Time Complexity Analysis\n"
        "O(n log n) because of the sort.\n"
        "\n"
        "---SECTION_END_3---"
    )

    assert extract_section(raw, 3) == "O(n log n) because of the sort."


def test_extract_keeps_headings_of_other_sections_and_later_subheadings():
    raw = (
        "---SECTION_START_2---\n"
        "Readable overall.\n"
        "#### 2. Naming\n"
        "Short names.\n"
        "---SECTION_END_2---"
    )

    assert extract_section(raw, 2) == "Readable overall.\n#### 2. Naming\nShort names."


def test_missing_start_marker_returns_empty():
    raw = "---SECTION_END_4---\nsome text"
    assert extract_section(raw, 4) == ""


def test_end_marker_before_start_is_not_found():
    raw = "---SECTION_END_4---\n---SECTION_START_4---\nno end after start"
    assert extract_section(raw, 4) == ""


def test_section_index_does_not_match_longer_index():
    raw = "---SECTION_START_12---\nwrong\n---SECTION_END_12---"
    assert extract_section(raw, 1) == ""


def test_first_duplicate_section_wins():
    raw = (
        "---SECTION_START_5---\nfirst\n---SECTION_END_5---\n"
        "---SECTION_START_5---\nsecond, longer version\n---SECTION_END_5---"
    )
    assert extract_section(raw, 5) == "first"


def test_custom_markers():
    markers = SectionMarkers(start_prefix="<<S", end_prefix="<<E", suffix=">>")
    raw = "<<S2>> body <<E2>>"

    assert markers.start(2) == "<<S2>>"
    assert extract_section(raw, 2, markers) == "body"


def test_parse_sections_maps_blank_and_missing_to_none():
    raw = (
        "---SECTION_START_1---\none\n---SECTION_END_1---\n"
        "---SECTION_START_2---\n   \n---SECTION_END_2---\n"
    )

    parsed = parse_sections(raw, range(1, 4))

    assert parsed == {1: "one", 2: None, 3: None}


def test_extraction_never_raises_on_garbage():
    for raw in ["", "---SECTION_START_", "---SECTION_START_1", "\x00\n###"]:
        assert extract_section(raw, 1) == ""
