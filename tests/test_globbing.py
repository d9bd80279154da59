"""Test glob pattern resolution."""

import pytest

from oapi_template.errors import InvalidPattern, NoMatch
from oapi_template.globbing import resolve_pattern


def test_matches_are_sorted(temp_dir):
    """Matches come back in ascending order regardless of creation order."""
    for name in ["c.yaml", "a.yaml", "b.yaml"]:
        (temp_dir / name).write_text("x: 1\n")

    matches = resolve_pattern(str(temp_dir / "*.yaml"))

    assert matches == sorted(matches)
    assert [m.rsplit("/", 1)[-1] for m in matches] == ["a.yaml", "b.yaml", "c.yaml"]


def test_no_match_is_an_error(temp_dir):
    """A pattern matching nothing raises NoMatch with the pattern attached."""
    pattern = str(temp_dir / "*.json")

    with pytest.raises(NoMatch) as exc_info:
        resolve_pattern(pattern)

    assert exc_info.value.pattern == pattern
    assert pattern in str(exc_info.value)


def test_literal_path(temp_dir):
    """A pattern without wildcards matches the file itself."""
    target = temp_dir / "spec.yaml"
    target.write_text("openapi: 3.0.0\n")

    assert resolve_pattern(str(target)) == [str(target)]


def test_literal_missing_path(temp_dir):
    with pytest.raises(NoMatch):
        resolve_pattern(str(temp_dir / "missing.yaml"))


def test_wildcards_match_dot_files(temp_dir):
    (temp_dir / ".hidden.yaml").write_text("a: 1\n")
    (temp_dir / "visible.yaml").write_text("a: 2\n")

    matches = resolve_pattern(str(temp_dir / "*.yaml"))

    assert len(matches) == 2
    assert matches[0].endswith(".hidden.yaml")


def test_double_star_is_not_recursive(temp_dir):
    (temp_dir / "nested" / "deep").mkdir(parents=True)
    (temp_dir / "nested" / "deep" / "x.yaml").write_text("a: 1\n")

    with pytest.raises(NoMatch):
        resolve_pattern(str(temp_dir / "**" / "x.yaml"))


def test_character_class(temp_dir):
    for name in ["v1.yaml", "v2.yaml", "v3.yaml"]:
        (temp_dir / name).write_text("a: 1\n")

    matches = resolve_pattern(str(temp_dir / "v[12].yaml"))

    assert [m.rsplit("/", 1)[-1] for m in matches] == ["v1.yaml", "v2.yaml"]


@pytest.mark.parametrize("pattern", ["schemas/[abc.yaml", "[", "a/[!.yaml", "[]"])
def test_unterminated_character_class(pattern):
    """Malformed character classes are rejected before globbing."""
    with pytest.raises(InvalidPattern) as exc_info:
        resolve_pattern(pattern)

    assert exc_info.value.pattern == pattern


def test_leading_bracket_is_class_member(temp_dir):
    """']' right after '[' belongs to the class, so the pattern is valid."""
    (temp_dir / "a.yaml").write_text("a: 1\n")

    matches = resolve_pattern(str(temp_dir / "[]a].yaml"))

    assert len(matches) == 1


def test_escaped_brackets_match_literally(temp_dir, monkeypatch):
    """A backslash turns the next wildcard character into a literal."""
    (temp_dir / "[v1].yaml").write_text("a: 1\n")
    (temp_dir / "v.yaml").write_text("a: 2\n")
    monkeypatch.chdir(temp_dir)

    assert resolve_pattern(r"\[v1\].yaml") == ["[v1].yaml"]


def test_escaped_star(temp_dir, monkeypatch):
    (temp_dir / "a.yaml").write_text("a: 1\n")
    monkeypatch.chdir(temp_dir)

    with pytest.raises(NoMatch):
        resolve_pattern(r"\*.yaml")


def test_trailing_escape_is_invalid():
    with pytest.raises(InvalidPattern) as exc_info:
        resolve_pattern("schemas\\")

    assert "trailing escape" in str(exc_info.value)
