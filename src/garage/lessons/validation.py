"""Pattern-based code checks for lesson chapters.

Validators do not parse Move. Each one looks for required snippets in the
learner's buffer and, when all are present, compares the buffer to the
expected solution after stripping ``//`` comments and collapsing whitespace.
Diagnostic line numbers come from scanning for anchor lines (a ``module``
line, a ``// TODO`` placeholder) and fall back to a fixed line when the
anchor is gone.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

SYNTAX_ERROR_MESSAGE = "syntax error: check your code structure"

_LINE_COMMENT = re.compile(r"//.*$", re.MULTILINE)
_WHITESPACE = re.compile(r"\s+")

LinePredicate = Callable[[str], bool]


@dataclass(frozen=True)
class Diagnostic:
    """A single validation error anchored to a 1-based line."""

    line: int
    message: str

    def to_dict(self) -> dict[str, int | str]:
        return {"line": self.line, "message": self.message}


@dataclass(frozen=True)
class VerdictResult:
    """Outcome of running a chapter validator on a code buffer."""

    is_valid: bool
    errors: tuple[Diagnostic, ...] = ()


Validator = Callable[[str], VerdictResult]


def normalize_code(code: str) -> str:
    """Strip line comments, collapse runs of whitespace, and trim."""
    return _WHITESPACE.sub(" ", _LINE_COMMENT.sub("", code)).strip()


def find_line(lines: Sequence[str], predicate: LinePredicate, default: int) -> int:
    """Return the 1-based number of the first matching line, else ``default``."""
    for index, line in enumerate(lines):
        if predicate(line):
            return index + 1
    return default


def starts_with(prefix: str) -> LinePredicate:
    return lambda line: line.strip().startswith(prefix)


def contains(*needles: str) -> LinePredicate:
    return lambda line: any(needle in line for needle in needles)


@dataclass(frozen=True)
class Requirement:
    """A snippet the buffer must contain, and where to report it when missing."""

    snippet: str
    message: str
    anchor: LinePredicate
    default_line: int

    def check(self, code: str, lines: Sequence[str]) -> Diagnostic | None:
        if self.snippet in code:
            return None
        return Diagnostic(find_line(lines, self.anchor, self.default_line), self.message)


@dataclass(frozen=True)
class ChapterValidator:
    """Requirement checks followed by a normalized comparison with the solution."""

    expected_code: str
    requirements: tuple[Requirement, ...] = field(default_factory=tuple)

    def __call__(self, code: str) -> VerdictResult:
        lines = code.split("\n")
        errors = [d for d in (req.check(code, lines) for req in self.requirements) if d is not None]
        if errors:
            return VerdictResult(is_valid=False, errors=tuple(errors))
        if normalize_code(code) == normalize_code(self.expected_code):
            return VerdictResult(is_valid=True)
        return VerdictResult(is_valid=False, errors=(Diagnostic(1, SYNTAX_ERROR_MESSAGE),))
