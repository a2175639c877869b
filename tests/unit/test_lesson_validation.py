"""Unit tests for chapter validators and code normalization."""

from __future__ import annotations

import pytest

from garage.lessons.chapters import CHAPTERS, CHASSIS, DELIVERY, get_chapter
from garage.lessons.validation import (
    SYNTAX_ERROR_MESSAGE,
    Diagnostic,
    normalize_code,
)


class TestNormalizeCode:
    def test_strips_comments_and_whitespace(self) -> None:
        code = "// header\nmodule a::b {\n    use x;   // trailing\n\n}\n"
        assert normalize_code(code) == "module a::b { use x; }"

    def test_tabs_and_newlines_collapse(self) -> None:
        assert normalize_code("a\t\tb\r\n c") == "a b c"


class TestChapterCatalogue:
    def test_ids_are_sequential(self) -> None:
        assert [c.id for c in CHAPTERS] == [1, 2, 3, 4]

    def test_get_chapter(self) -> None:
        assert get_chapter(1) is CHASSIS
        assert get_chapter(99) is None


@pytest.mark.parametrize("chapter", CHAPTERS, ids=lambda c: c.title)
class TestEveryChapter:
    """Properties every chapter must satisfy."""

    def test_expected_code_passes(self, chapter) -> None:
        result = chapter.check(chapter.expected_code)
        assert result.is_valid is True
        assert result.errors == ()

    def test_expected_code_passes_with_other_formatting(self, chapter) -> None:
        reformatted = "// my solution\n" + chapter.expected_code.replace("    ", "\t") + "\n\n"
        assert chapter.check(reformatted).is_valid is True

    def test_initial_code_fails(self, chapter) -> None:
        result = chapter.check(chapter.initial_code)
        assert result.is_valid is False
        assert len(result.errors) >= 1
        assert all(e.message != SYNTAX_ERROR_MESSAGE for e in result.errors)

    def test_initial_code_errors_point_inside_buffer(self, chapter) -> None:
        line_count = len(chapter.initial_code.split("\n"))
        for error in chapter.check(chapter.initial_code).errors:
            assert 1 <= error.line <= line_count


class TestChassisValidator:
    """Chapter 1 line heuristics."""

    def test_missing_import_anchored_at_placeholder(self) -> None:
        result = CHASSIS.check(CHASSIS.initial_code)
        assert result.errors == (
            Diagnostic(4, 'missing import statement "use std::string::{String};"'),
        )

    def test_wrong_module_name_anchored_at_module_line(self) -> None:
        code = "// hi\nmodule garage::factory {\n    use std::string::{String};\n}"
        result = CHASSIS.check(code)
        assert result.errors == (Diagnostic(2, 'module name should be "sui_garage::car_factory"'),)

    def test_anchor_fallback_lines(self) -> None:
        """With no module line and no placeholder, fixed lines are used."""
        result = CHASSIS.check("")
        assert [e.line for e in result.errors] == [2, 4]

    def test_extra_code_is_syntax_error(self) -> None:
        code = CHASSIS.expected_code[:-1] + "    const MAX: u64 = 1;\n}"
        result = CHASSIS.check(code)
        assert result.is_valid is False
        assert result.errors == (Diagnostic(1, SYNTAX_ERROR_MESSAGE),)

    def test_semantically_equal_but_different_text_is_rejected(self) -> None:
        """Pattern matching, not parsing: String imported differently fails."""
        code = "module sui_garage::car_factory {\n    use std::string::String;\n}"
        assert CHASSIS.check(code).is_valid is False


class TestDeliveryValidator:
    def test_missing_transfer_points_at_todo(self) -> None:
        code = DELIVERY.initial_code.replace(
            "    // TODO: write mint_car, which builds a car and sends it to the caller",
            "    public fun mint_car(name: String, speed: u64, ctx: &mut TxContext) {\n"
            "        let car = new_car(name, speed, ctx);\n"
            "    }",
        )
        result = DELIVERY.check(code)
        assert result.is_valid is False
        assert len(result.errors) == 1
        assert "transfer::public_transfer" in result.errors[0].message
        # No "transfer::" line and no TODO left: fixed fallback line
        assert result.errors[0].line == 20
