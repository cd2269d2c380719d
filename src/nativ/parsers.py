# SPDX-License-Identifier: Apache-2.0
"""Conversion of raw API responses into result types.

Every parser is total: a missing (or null) key maps to a default value
and never raises. Parsers take the decoded JSON object exactly as the
transport returned it.
"""

from __future__ import annotations

from typing import Any

from nativ.models import (
    AffectedCountry,
    BrandVoice,
    CulturalInspection,
    GeneratedImage,
    ImageMetadata,
    ImageResult,
    Language,
    OCRResult,
    StyleGuide,
    TMEntry,
    TMEntryList,
    TMMatch,
    TMMatchDetail,
    TMSearchMatch,
    TMStats,
    Translation,
    TranslationMetadata,
)


def _get(data: dict[str, Any], key: str, default: Any) -> Any:
    """Like dict.get, but a null value also yields the default."""
    value = data.get(key)
    return default if value is None else value


def _objects(data: dict[str, Any], key: str) -> list[dict[str, Any]]:
    """Return the list under key, keeping only JSON objects."""
    items = _get(data, key, [])
    if not isinstance(items, list):
        return []
    return [item for item in items if isinstance(item, dict)]


def _object(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key)
    return value if isinstance(value, dict) else {}


# ---------------------------------------------------------------------------
# Translation
# ---------------------------------------------------------------------------


def parse_tm_match_detail(data: dict[str, Any]) -> TMMatchDetail:
    return TMMatchDetail(
        tm_id=_get(data, "tm_id", ""),
        score=_get(data, "score", 0),
        match_type=_get(data, "match_type", ""),
        source_text=_get(data, "source_text", ""),
        target_text=_get(data, "target_text", ""),
        information_source=_get(data, "information_source", ""),
        source_name=data.get("source_name"),
    )


def parse_tm_match(data: dict[str, Any] | None) -> TMMatch | None:
    """Parse the tm_match block of a translation.

    Returns:
        None when the block is missing or its score is zero (no match).
    """
    if not isinstance(data, dict):
        return None
    score = _get(data, "score", 0)
    if score <= 0:
        return None
    return TMMatch(
        score=score,
        match_type=_get(data, "match_type", ""),
        source_text=data.get("source_text"),
        target_text=data.get("target_text"),
        tm_source=data.get("tm_source"),
        tm_source_name=data.get("tm_source_name"),
        tm_id=data.get("tm_id"),
        top_matches=tuple(
            parse_tm_match_detail(m) for m in _objects(data, "top_matches")
        ),
    )


def parse_translation(data: dict[str, Any]) -> Translation:
    meta = _object(data, "metadata")
    return Translation(
        translated_text=_get(data, "translated_text", ""),
        metadata=TranslationMetadata(
            word_count=_get(meta, "word_count", 0),
            cost=_get(meta, "cost", 0),
        ),
        tm_match=parse_tm_match(data.get("tm_match")),
        rationale=data.get("rationale"),
        backtranslation=data.get("backtranslation"),
    )


# ---------------------------------------------------------------------------
# OCR and images
# ---------------------------------------------------------------------------


def parse_ocr_result(data: dict[str, Any]) -> OCRResult:
    return OCRResult(extracted_text=_get(data, "extracted_text", ""))


def parse_image_result(data: dict[str, Any]) -> ImageResult:
    meta = _object(data, "metadata")
    return ImageResult(
        images=tuple(
            GeneratedImage(image_base64=_get(img, "image_base64", ""))
            for img in _objects(data, "images")
        ),
        metadata=ImageMetadata(
            cost=_get(meta, "cost", 0),
            num_images=_get(meta, "num_images", 0),
        ),
    )


def parse_inspection(data: dict[str, Any]) -> CulturalInspection:
    """Parse an image inspection.

    The verdict is passed through untouched; only a missing verdict
    falls back to "SAFE".
    """
    return CulturalInspection(
        verdict=_get(data, "verdict", "SAFE"),
        affected_countries=tuple(
            AffectedCountry(
                country=_get(c, "country", ""),
                issue=_get(c, "issue", ""),
                suggestion=_get(c, "suggestion", ""),
            )
            for c in _objects(data, "affected_countries")
        ),
    )


# ---------------------------------------------------------------------------
# Languages
# ---------------------------------------------------------------------------


def parse_languages(data: dict[str, Any]) -> list[Language]:
    return [
        Language(
            id=_get(lang, "id", 0),
            language=_get(lang, "language", ""),
            language_code=_get(lang, "language_code", ""),
            formality=lang.get("formality"),
            custom_style=lang.get("custom_style"),
        )
        for lang in _objects(data, "languages")
    ]


# ---------------------------------------------------------------------------
# Translation memory
# ---------------------------------------------------------------------------


def parse_tm_entry(data: dict[str, Any]) -> TMEntry:
    """Parse a stored TM entry (enabled defaults to True, priority to 50)."""
    return TMEntry(
        id=_get(data, "id", ""),
        source_language_code=_get(data, "source_language_code", ""),
        source_text=_get(data, "source_text", ""),
        target_language_code=_get(data, "target_language_code", ""),
        target_text=_get(data, "target_text", ""),
        information_source=_get(data, "information_source", ""),
        enabled=_get(data, "enabled", True),
        priority=_get(data, "priority", 50),
        user_id=data.get("user_id"),
        end_user_id=data.get("end_user_id"),
        source_name=data.get("source_name"),
        created_at=data.get("created_at"),
        updated_at=data.get("updated_at"),
        match_score=data.get("match_score"),
    )


def parse_tm_list(data: dict[str, Any], offset: int, limit: int) -> TMEntryList:
    """Parse a page of TM entries.

    Args:
        data: Raw response.
        offset: Offset sent with the request, used if the response omits it.
        limit: Limit sent with the request, used if the response omits it.
    """
    entries = tuple(parse_tm_entry(e) for e in _objects(data, "entries"))
    return TMEntryList(
        entries=entries,
        total=_get(data, "total", len(entries)),
        offset=_get(data, "offset", offset),
        limit=_get(data, "limit", limit),
    )


def parse_tm_search(data: dict[str, Any]) -> list[TMSearchMatch]:
    return [
        TMSearchMatch(
            tm_id=_get(m, "tm_id", ""),
            score=_get(m, "score", 0),
            match_type=_get(m, "match_type", ""),
            source_text=_get(m, "source_text", ""),
            target_text=_get(m, "target_text", ""),
            information_source=_get(m, "information_source", ""),
            source_name=m.get("source_name"),
        )
        for m in _objects(data, "matches")
    ]


def parse_tm_stats(data: dict[str, Any]) -> TMStats:
    by_source = data.get("by_source")
    return TMStats(
        total=_get(data, "total", 0),
        enabled=_get(data, "enabled", 0),
        disabled=_get(data, "disabled", 0),
        by_source=by_source if isinstance(by_source, dict) else {},
    )


# ---------------------------------------------------------------------------
# Style guides and brand voice
# ---------------------------------------------------------------------------


def parse_style_guide(data: dict[str, Any]) -> StyleGuide:
    # The API may send numeric ids
    raw_id = data.get("id")
    return StyleGuide(
        id="" if raw_id is None else str(raw_id),
        title=_get(data, "title", ""),
        content=_get(data, "content", ""),
        is_enabled=_get(data, "is_enabled", True),
        display_order=data.get("display_order"),
        user_id=data.get("user_id"),
    )


def parse_style_guides(data: dict[str, Any]) -> list[StyleGuide]:
    return [parse_style_guide(g) for g in _objects(data, "guides")]


def parse_brand_voice(data: dict[str, Any]) -> BrandVoice:
    return BrandVoice(
        prompt=data.get("prompt"),
        exists=_get(data, "exists", False),
        cached=data.get("cached"),
    )


def parse_success(data: dict[str, Any]) -> bool:
    """Read the success flag of a mutation response."""
    return bool(_get(data, "success", False))
