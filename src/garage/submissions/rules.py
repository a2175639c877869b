"""Submission validation rulesets.

``review`` queues every submission for manual review; ``auto_accept``
accepts anything with well-formed proof URLs. The active ruleset is selected
by ``Settings.submission_mode``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from garage.config import get_settings

VERCEL_URL_PATTERN = re.compile(r"^https://[a-zA-Z0-9-]+\.vercel\.app(/.*)?$")
STRICT_SUI_ADDRESS_PATTERN = re.compile(r"^0x[a-fA-F0-9]{64}$")

MIN_ADDRESS_LENGTH = 10
# Matches the String(66) wallet_address columns
MAX_ADDRESS_LENGTH = 66

AUTO_APPROVED_NOTES = "Auto-approved: Valid URLs provided"


def _explorer_pattern(kinds: tuple[str, ...]) -> re.Pattern[str]:
    return re.compile(
        r"^https://(suiscan\.xyz|suivision\.xyz|suiexplorer\.com)/(testnet|mainnet)/"
        rf"({'|'.join(kinds)})/0x[a-fA-F0-9]+$"
    )


class SubmissionValidationError(ValueError):
    """Submission payload failed validation (HTTP 400)."""


@dataclass(frozen=True)
class SubmissionRules:
    """Validation and review policy for one deployment variant."""

    name: str
    max_chapter: int
    strict_address: bool
    require_urls: bool
    auto_accept: bool
    explorer_kinds: tuple[str, ...]
    vercel_optional_chapters: frozenset[int] = field(default_factory=frozenset)

    @property
    def explorer_pattern(self) -> re.Pattern[str]:
        return _explorer_pattern(self.explorer_kinds)

    def is_valid_address(self, address: str) -> bool:
        """Check the wallet address against this ruleset's strictness."""
        if self.strict_address:
            return STRICT_SUI_ADDRESS_PATTERN.fullmatch(address) is not None
        return address.startswith("0x") and MIN_ADDRESS_LENGTH <= len(address) <= MAX_ADDRESS_LENGTH

    def is_valid_vercel_url(self, url: str) -> bool:
        return VERCEL_URL_PATTERN.fullmatch(url) is not None

    def is_valid_explorer_url(self, url: str) -> bool:
        return self.explorer_pattern.fullmatch(url) is not None

    def chapter_range_message(self) -> str:
        return f"Invalid chapter_id. Must be an integer between 1 and {self.max_chapter}"

    def validate_address(self, address: str | None) -> str:
        """Return the address or raise SubmissionValidationError."""
        if not address:
            raise SubmissionValidationError("Missing required parameter: wallet_address")
        if not self.is_valid_address(address):
            raise SubmissionValidationError("Invalid Sui wallet address format")
        return address

    def validate_chapter(self, chapter_id: Any) -> int:  # noqa: ANN401
        """Return the chapter id or raise SubmissionValidationError."""
        # bool is an int subclass; JSON true/false is not a chapter number
        if isinstance(chapter_id, bool) or not isinstance(chapter_id, int):
            raise SubmissionValidationError(self.chapter_range_message())
        if not 1 <= chapter_id <= self.max_chapter:
            raise SubmissionValidationError(self.chapter_range_message())
        return chapter_id

    def validate_submission(
        self,
        wallet_address: str | None,
        chapter_id: Any,  # noqa: ANN401
        vercel_url: str | None,
        suiscan_url: str | None,
    ) -> None:
        """
        Validate a full submission payload.

        Raises:
            SubmissionValidationError: With a field-specific message.
        """
        vercel_exempt = isinstance(chapter_id, int) and chapter_id in self.vercel_optional_chapters
        vercel_required = self.require_urls and not vercel_exempt
        missing = not wallet_address or chapter_id is None
        if self.require_urls:
            missing = missing or not suiscan_url or (vercel_required and not vercel_url)
        if missing:
            required = ["wallet_address", "chapter_id"]
            if self.require_urls:
                required += ["vercel_url", "suiscan_url"]
            msg = f"Missing required fields: {', '.join(required)}"
            raise SubmissionValidationError(msg)

        self.validate_address(wallet_address)
        self.validate_chapter(chapter_id)

        if vercel_url and not self.is_valid_vercel_url(vercel_url):
            msg = "Invalid Vercel URL format. Must be https://your-app.vercel.app"
            raise SubmissionValidationError(msg)
        if suiscan_url and not self.is_valid_explorer_url(suiscan_url):
            msg = "Invalid blockchain explorer URL. Must be from suiscan.xyz, suivision.xyz, or suiexplorer.com"
            raise SubmissionValidationError(msg)


REVIEW = SubmissionRules(
    name="review",
    max_chapter=6,
    strict_address=False,
    require_urls=False,
    auto_accept=False,
    explorer_kinds=("tx", "object", "account"),
)

AUTO_ACCEPT = SubmissionRules(
    name="auto_accept",
    max_chapter=15,
    strict_address=True,
    require_urls=True,
    auto_accept=True,
    explorer_kinds=("tx", "object"),
    vercel_optional_chapters=frozenset({2}),
)

RULESETS: dict[str, SubmissionRules] = {
    REVIEW.name: REVIEW,
    AUTO_ACCEPT.name: AUTO_ACCEPT,
}


def get_submission_rules() -> SubmissionRules:
    """Resolve the configured ruleset (FastAPI dependency)."""
    return RULESETS[get_settings().submission_mode]
