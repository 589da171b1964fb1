"""Tests for reporters/messages.py."""

from problemreport.application.reporters.messages import (
    flatten_failure_message,
    strip_diff_colors,
)

RED = "\x1b[31m"
GREEN = "\x1b[32m"
BLUE = "\x1b[34m"
BOLD = "\x1b[1m"
RESET = "\x1b[0m"


class TestStripDiffColors:
    """Tests for strip_diff_colors()."""

    def test_message_without_diff_unchanged(self) -> None:
        text = f"expected {BOLD}1{RESET}\n got 2"
        assert strip_diff_colors(text) == text

    def test_strips_codes_inside_diff_block(self) -> None:
        text = (
            "expected: 1\n     got: 2\n\n"
            f"Diff:{RESET}\n{BLUE}@@ -1 +1 @@\n{RESET}{RED}-1\n{RESET}{GREEN}+2\n{RESET}"
        )
        assert strip_diff_colors(text) == "expected: 1\n     got: 2\n\nDiff:\n@@ -1 +1 @@\n-1\n+2\n"

    def test_indented_diff_block(self) -> None:
        text = f"failure\n  Diff:{RESET}\n  {RED}-a\n  {GREEN}+b"
        assert strip_diff_colors(text) == "failure\n  Diff:\n  -a\n  +b"

    def test_codes_before_diff_block_preserved(self) -> None:
        text = f"{BOLD}bold{RESET}\nDiff:\n{RED}-a"
        assert strip_diff_colors(text) == f"{BOLD}bold{RESET}\nDiff:\n-a"

    def test_block_ends_at_first_uncolored_line(self) -> None:
        text = f"Diff:\n{RED}-a\nplain {RED}x"
        assert strip_diff_colors(text) == f"Diff:\n-a\nplain {RED}x"

    def test_block_ends_at_line_with_other_indent(self) -> None:
        text = f"  Diff:\n  {RED}-a\n{GREEN}+b"
        assert strip_diff_colors(text) == f"  Diff:\n  -a\n{GREEN}+b"

    def test_only_first_diff_block_stripped(self) -> None:
        text = f"Diff:\n{RED}-a\nnext\nDiff:\n{GREEN}+b"
        assert strip_diff_colors(text) == f"Diff:\n-a\nnext\nDiff:\n{GREEN}+b"

    def test_diff_must_start_line(self) -> None:
        text = f"see Diff:\n{RED}-a"
        assert strip_diff_colors(text) == text


class TestFlattenFailureMessage:
    """Tests for flatten_failure_message()."""

    def test_newlines_become_pipes(self) -> None:
        assert flatten_failure_message("expected 1\n got 2") == "expected 1| got 2"

    def test_crlf_becomes_single_pipe(self) -> None:
        assert flatten_failure_message("a\r\nb") == "a|b"

    def test_lone_carriage_return_becomes_pipe(self) -> None:
        assert flatten_failure_message("a\rb\r\nc\r") == "a|b|c"

    def test_trailing_newlines_dropped(self) -> None:
        assert flatten_failure_message("a\nb\n\n") == "a|b"

    def test_inner_blank_lines_kept(self) -> None:
        assert flatten_failure_message("a\n\nb") == "a||b"

    def test_empty_message(self) -> None:
        assert flatten_failure_message("") == ""

    def test_diff_colors_stripped_by_default(self) -> None:
        assert flatten_failure_message(f"x\nDiff:\n{RED}-a") == "x|Diff:|-a"

    def test_diff_colors_kept_when_disabled(self) -> None:
        text = f"x\nDiff:\n{RED}-a"
        assert flatten_failure_message(text, strip_colors=False) == f"x|Diff:|{RED}-a"
