"""Per-learner lesson session state machine.

States per chapter: editing -> checked (valid | invalid) -> editing (on edit
or retry) -> advanced once the chapter is valid. Nothing is persisted;
moving between chapters always starts the target chapter from scratch.
"""

from __future__ import annotations

from dataclasses import dataclass

from garage.lessons.chapters import CHAPTERS, MODULE_NAME, Chapter
from garage.lessons.validation import Diagnostic

FEEDBACK_SUCCESS = "Build Successful"
FEEDBACK_FAILURE = "Build Failed"

MARKER_OWNER = "moveErrors"
MARKER_END_COLUMN = 1000


class LessonError(ValueError):
    """Raised when a navigation step is not allowed."""


@dataclass(frozen=True)
class EditorMarker:
    """Error marker spanning a whole editor line."""

    start_line: int
    end_line: int
    message: str
    start_column: int = 1
    end_column: int = MARKER_END_COLUMN
    severity: str = "error"
    owner: str = MARKER_OWNER


def format_errors(errors: tuple[Diagnostic, ...] | list[Diagnostic]) -> str:
    """Render diagnostics as terminal lines."""
    return "\n".join(f"Line {error.line}: {error.message}" for error in errors)


def success_output() -> str:
    return (
        "✓ Build completed successfully!\n\n"
        "\U0001f389 Congratulations! Your code is correct!\n\n"
        f"module {MODULE_NAME} compiled."
    )


class LessonSession:
    """Learner progress through an ordered set of chapters."""

    def __init__(self, chapters: tuple[Chapter, ...] = CHAPTERS, start_index: int = 0) -> None:
        if not chapters:
            msg = "A lesson session needs at least one chapter"
            raise LessonError(msg)
        if not 0 <= start_index < len(chapters):
            msg = f"Chapter index {start_index} out of range"
            raise LessonError(msg)
        self.chapters = chapters
        self.current_index = start_index
        self._reset()

    def _reset(self) -> None:
        self.code = self.chapter.initial_code
        self.errors: tuple[Diagnostic, ...] = ()
        self.is_valid = False
        self.has_checked = False
        self.feedback = ""
        self.terminal_output = ""

    @property
    def chapter(self) -> Chapter:
        return self.chapters[self.current_index]

    @property
    def state(self) -> str:
        """One of ``editing``, ``valid`` or ``invalid``."""
        if self.is_valid:
            return "valid"
        if self.has_checked:
            return "invalid"
        return "editing"

    @property
    def can_advance(self) -> bool:
        return self.is_valid and self.current_index < len(self.chapters) - 1

    @property
    def markers(self) -> list[EditorMarker]:
        """Editor markers for the current diagnostics, keyed by line."""
        return [EditorMarker(start_line=e.line, end_line=e.line, message=e.message) for e in self.errors]

    def edit(self, code: str) -> None:
        """Replace the buffer; the previous verdict no longer applies."""
        self.code = code
        self.is_valid = False
        self.has_checked = False

    def check_answer(self) -> bool:
        """Validate the buffer against the current chapter."""
        result = self.chapter.check(self.code)
        self.has_checked = True
        self.is_valid = result.is_valid
        self.errors = result.errors
        if result.is_valid:
            self.feedback = FEEDBACK_SUCCESS
            self.terminal_output = success_output()
        else:
            self.feedback = FEEDBACK_FAILURE
            self.terminal_output = format_errors(result.errors)
        return result.is_valid

    def show_answer(self) -> None:
        """Load the solution and mark the chapter as passed."""
        self.code = self.chapter.expected_code
        self.errors = ()
        self.is_valid = True
        self.feedback = FEEDBACK_SUCCESS
        self.terminal_output = f"✓ Answer loaded!\n\nmodule {MODULE_NAME} compiled."

    def try_again(self) -> None:
        """Restore the starter code and clear all feedback."""
        self._reset()

    def advance(self) -> bool:
        """
        Move to the next chapter.

        Returns False when already on the last chapter.

        Raises:
            LessonError: If the current chapter has not been passed.
        """
        if not self.is_valid:
            msg = f"Chapter {self.chapter.id} is not complete yet"
            raise LessonError(msg)
        if self.current_index >= len(self.chapters) - 1:
            return False
        self.current_index += 1
        self._reset()
        return True

    def retreat(self) -> bool:
        """Move to the previous chapter. Returns False on the first chapter."""
        if self.current_index == 0:
            return False
        self.current_index -= 1
        self._reset()
        return True
