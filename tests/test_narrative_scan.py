"""Regression tests for the narrative line scan."""

from itinerary_planner.tools.narrative_scan import scan_day_overrides


def _text(lines):
    return "\n".join(lines)


def test_short_text_yields_nothing():
    assert scan_day_overrides("Day 1: too short", 1) == {}


def test_bad_input_never_raises():
    assert scan_day_overrides(None, 3) == {}  # type: ignore[arg-type]


def test_titles_match_their_own_day_number():
    lines = [f"Filler line number {i} with enough words to count" for i in range(30)]
    lines[2] = "**Day 1: Harbour Walk**"
    lines[12] = "Day 10 is not a real day here"
    lines[14] = "Day 2 - Into the Mountains"
    overrides = scan_day_overrides(_text(lines), 2)

    assert overrides[1]["title"] == "Day 1: Harbour Walk"
    assert overrides[2]["title"] == "Day 2 - Into the Mountains"


def test_description_fragment_is_capped():
    lines = ["A fairly long line of narrative prose about the city " * 2 for _ in range(20)]
    overrides = scan_day_overrides(_text(lines), 1)

    assert len(overrides[1]["description"]) <= 200
    assert "title" not in overrides[1]
