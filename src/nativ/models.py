# SPDX-License-Identifier: Apache-2.0
"""Result types returned by the Nativ client.

All results are frozen dataclasses created fresh per call. Field names
follow the API's snake_case wire names; optional fields the API may omit
default to None.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any


class _Result:
    """Mixin providing JSON-friendly conversion."""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary (tuples become lists)."""
        return _listify(asdict(self))  # type: ignore[call-overload]


def _listify(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _listify(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_listify(v) for v in value]
    return value


# ---------------------------------------------------------------------------
# Translation
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TranslationMetadata(_Result):
    """Word count and credit cost of a translation."""

    word_count: int = 0
    cost: float = 0


@dataclass(frozen=True)
class TMMatchDetail(_Result):
    """One translation-memory candidate listed under a TM match."""

    tm_id: str
    score: float
    match_type: str
    source_text: str
    target_text: str
    information_source: str
    source_name: str | None = None


@dataclass(frozen=True)
class TMMatch(_Result):
    """Best translation-memory match used for a translation.

    Attributes:
        score: Similarity 0-100. Always positive; a zero score means no match
            and is never represented by this type.
        match_type: Service-defined tag ("exact", "fuzzy", ...).
        top_matches: Best candidates, each a full match record.
    """

    score: float
    match_type: str
    source_text: str | None = None
    target_text: str | None = None
    tm_source: str | None = None
    tm_source_name: str | None = None
    tm_id: str | None = None
    top_matches: tuple[TMMatchDetail, ...] = ()


@dataclass(frozen=True)
class Translation(_Result):
    """Result of a translate call."""

    translated_text: str
    metadata: TranslationMetadata = field(default_factory=TranslationMetadata)
    tm_match: TMMatch | None = None
    rationale: str | None = None
    backtranslation: str | None = None


# ---------------------------------------------------------------------------
# OCR and images
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class OCRResult(_Result):
    """Text extracted from an image."""

    extracted_text: str


@dataclass(frozen=True)
class GeneratedImage(_Result):
    """A generated image as a base64-encoded payload."""

    image_base64: str


@dataclass(frozen=True)
class ImageMetadata(_Result):
    cost: float = 0
    num_images: int = 0


@dataclass(frozen=True)
class ImageResult(_Result):
    """Images produced by culturalize_image, in service order."""

    images: tuple[GeneratedImage, ...] = ()
    metadata: ImageMetadata = field(default_factory=ImageMetadata)


@dataclass(frozen=True)
class AffectedCountry(_Result):
    country: str
    issue: str
    suggestion: str


@dataclass(frozen=True)
class CulturalInspection(_Result):
    """Cultural sensitivity verdict for an image.

    Attributes:
        verdict: Service-defined tag such as "SAFE" or "NOT SAFE". Not
            validated against a fixed set.
        affected_countries: Per-country findings.
    """

    verdict: str
    affected_countries: tuple[AffectedCountry, ...] = ()


# ---------------------------------------------------------------------------
# Languages
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Language(_Result):
    """A language configured in the workspace."""

    id: int
    language: str
    language_code: str
    formality: str | None = None
    custom_style: str | None = None


# ---------------------------------------------------------------------------
# Translation memory
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TMEntry(_Result):
    """A stored translation-memory entry.

    Attributes:
        information_source: Provenance tag, e.g. "manual".
        enabled: Defaults to True when the API omits it.
        priority: Defaults to 50 when the API omits it.
        match_score: Only set when the entry comes from a search.
    """

    id: str
    source_language_code: str
    source_text: str
    target_language_code: str
    target_text: str
    information_source: str
    enabled: bool = True
    priority: int = 50
    user_id: int | None = None
    end_user_id: str | None = None
    source_name: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    match_score: float | None = None


@dataclass(frozen=True)
class TMEntryList(_Result):
    """One page of translation-memory entries."""

    entries: tuple[TMEntry, ...]
    total: int
    offset: int
    limit: int


@dataclass(frozen=True)
class TMSearchMatch(_Result):
    """A fuzzy-search hit. Query result only, never stored."""

    tm_id: str
    score: float
    match_type: str
    source_text: str
    target_text: str
    information_source: str
    source_name: str | None = None


@dataclass(frozen=True)
class TMStats(_Result):
    """Translation-memory counters.

    Attributes:
        by_source: Counters keyed by information source.
    """

    total: int = 0
    enabled: int = 0
    disabled: int = 0
    by_source: dict[str, dict[str, int]] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Style guides and brand voice
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class StyleGuide(_Result):
    """A stored style rule. The id is always a string."""

    id: str
    title: str
    content: str
    is_enabled: bool = True
    display_order: int | None = None
    user_id: int | None = None


@dataclass(frozen=True)
class BrandVoice(_Result):
    """Workspace-level brand voice prompt."""

    prompt: str | None = None
    exists: bool = False
    cached: bool | None = None
