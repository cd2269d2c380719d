# SPDX-License-Identifier: Apache-2.0
"""Async client for the Nativ localization API.

Usage:
    from nativ import Nativ

    async with Nativ() as client:  # reads NATIV_API_KEY
        result = await client.translate("Hello world", "French")
        print(result.translated_text)
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from typing import Any

import aiohttp

from nativ.config import ClientConfig
from nativ.errors import ValidationError
from nativ.files import FileInput, resolve_file
from nativ.models import (
    BrandVoice,
    CulturalInspection,
    ImageResult,
    Language,
    OCRResult,
    StyleGuide,
    TMEntry,
    TMEntryList,
    TMSearchMatch,
    TMStats,
    Translation,
)
from nativ.parsers import (
    parse_brand_voice,
    parse_image_result,
    parse_inspection,
    parse_languages,
    parse_ocr_result,
    parse_style_guide,
    parse_style_guides,
    parse_success,
    parse_tm_entry,
    parse_tm_list,
    parse_tm_search,
    parse_tm_stats,
    parse_translation,
)
from nativ.transport import QueryValue, Transport, build_form

logger = logging.getLogger(__name__)


class Nativ:
    """Nativ API client.

    One method per API operation. Configuration is resolved once at
    construction and never re-read; concurrent calls on one client are
    independent of each other.

    Attributes:
        config: Resolved connection settings.
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: API key. Falls back to NATIV_API_KEY.
            base_url: API root. Falls back to NATIV_API_URL, then production.
            timeout: Request timeout in seconds (default: 120).
            session: Existing aiohttp session to send requests with.

        Raises:
            AuthenticationError: If no API key can be resolved.
        """
        self.config = ClientConfig.resolve(api_key, base_url, timeout)
        self._transport = Transport(self.config, session=session)

    async def __aenter__(self) -> Nativ:
        """Enter async context manager."""
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Exit async context manager."""
        await self.close()

    async def close(self) -> None:
        """Close the HTTP session."""
        await self._transport.close()

    async def _upload(
        self,
        path: str,
        file_input: FileInput,
        fields: dict[str, QueryValue] | None = None,
    ) -> dict[str, Any]:
        # Disk reads happen off the event loop
        file = await asyncio.to_thread(resolve_file, file_input)
        return await self._transport.send("POST", path, form=build_form(file, fields))

    # -------------------------------------------------------------------
    # Translation
    # -------------------------------------------------------------------

    async def translate(
        self,
        text: str,
        target_language: str,
        *,
        target_language_code: str | None = None,
        source_language: str = "English",
        source_language_code: str = "en",
        context: str | None = None,
        glossary: str | None = None,
        formality: str | None = None,
        max_characters: int | None = None,
        include_tm_info: bool = True,
        backtranslate: bool = False,
        include_rationale: bool = True,
    ) -> Translation:
        """Translate text with cultural adaptation.

        The workspace's translation memory, brand voice and style guides
        are applied by the service.

        Args:
            text: Text to translate.
            target_language: Target language name ("French").
            target_language_code: Target language code ("fr").
            source_language: Source language name.
            source_language_code: Source language code.
            context: Free-form context for the translator.
            glossary: Glossary terms to enforce.
            formality: Formality level ("formal", "informal", ...).
            max_characters: Upper bound on the translated length.
            include_tm_info: Return translation-memory match details.
            backtranslate: Also return a back-translation.
            include_rationale: Return the translator's rationale.

        Returns:
            Translation result.

        Raises:
            NativError: On API failure.
        """
        body: dict[str, Any] = {
            "text": text,
            "language": target_language,
            "source_language": source_language,
            "source_language_code": source_language_code,
            "tool": "api",
            "include_tm_info": include_tm_info,
            "backtranslate": backtranslate,
            "include_rationale": include_rationale,
        }
        if target_language_code:
            body["language_code"] = target_language_code
        if context:
            body["context"] = context
        if glossary:
            body["glossary"] = glossary
        if formality:
            body["formality"] = formality
        if max_characters is not None:
            body["max_characters"] = max_characters

        data = await self._transport.send("POST", "/text/culturalize", json=body)
        return parse_translation(data)

    async def translate_batch(
        self,
        texts: Sequence[str],
        target_language: str,
        *,
        target_language_code: str | None = None,
        source_language: str = "English",
        source_language_code: str = "en",
        context: str | None = None,
        formality: str | None = None,
    ) -> list[Translation]:
        """Translate several texts into the same language concurrently.

        Issues one translate call per text. Results keep the input order.
        If any call fails the exception propagates and no results are
        returned.

        Args:
            texts: Texts to translate.
            target_language: Target language name.
            target_language_code: Target language code.
            source_language: Source language name.
            source_language_code: Source language code.
            context: Context shared by all texts.
            formality: Formality level.

        Returns:
            Translations in the same order and length as texts.
        """
        if not texts:
            return []

        logger.debug("Translating batch of %d texts to %s", len(texts), target_language)
        tasks = [
            self.translate(
                text,
                target_language,
                target_language_code=target_language_code,
                source_language=source_language,
                source_language_code=source_language_code,
                context=context,
                formality=formality,
                include_tm_info=True,
                backtranslate=False,
                include_rationale=False,
            )
            for text in texts
        ]
        return list(await asyncio.gather(*tasks))

    # -------------------------------------------------------------------
    # OCR and images
    # -------------------------------------------------------------------

    async def extract_text(self, image: FileInput) -> OCRResult:
        """Extract text from an image via OCR."""
        data = await self._upload("/text/extract", image)
        return parse_ocr_result(data)

    async def culturalize_image(
        self,
        image: FileInput,
        text: str,
        language_code: str,
        *,
        output_format: str = "png",
        model: str = "gpt",
        num_images: int = 1,
    ) -> ImageResult:
        """Generate culturalized versions of an image with styled text.

        Args:
            image: Source image.
            text: Text to render into the image.
            language_code: Target language code.
            output_format: Image format of the results.
            model: Generation model name.
            num_images: Number of variants to generate.

        Returns:
            Generated images and cost metadata.
        """
        data = await self._upload(
            "/image/culturalize",
            image,
            {
                "text": text,
                "language_code": language_code,
                "output_format": output_format,
                "model": model,
                "num_images": num_images,
                "tool": "api",
            },
        )
        return parse_image_result(data)

    async def inspect_image(
        self,
        image: FileInput,
        *,
        countries: Sequence[str] | None = None,
    ) -> CulturalInspection:
        """Check an image for cultural sensitivity issues.

        Args:
            image: Image to inspect.
            countries: Restrict the check to these countries.

        Returns:
            Verdict and per-country findings.
        """
        fields: dict[str, QueryValue] = {}
        if countries:
            fields["countries"] = ",".join(countries)
        data = await self._upload("/image/inspect", image, fields)
        return parse_inspection(data)

    # -------------------------------------------------------------------
    # Languages
    # -------------------------------------------------------------------

    async def get_languages(self) -> list[Language]:
        """Get all languages configured in the workspace."""
        data = await self._transport.send("GET", "/user/languages")
        return parse_languages(data)

    async def update_language_formality(self, mapping_id: int, formality: str) -> bool:
        """Update the formality setting of a workspace language."""
        data = await self._transport.send(
            "PATCH",
            f"/user/languages/{mapping_id}/formality",
            json={"formality": formality},
        )
        return parse_success(data)

    async def update_language_custom_style(
        self,
        mapping_id: int,
        custom_style: str | None,
    ) -> bool:
        """Update the custom style directive of a language (None clears it)."""
        data = await self._transport.send(
            "PATCH",
            f"/user/languages/{mapping_id}/custom-style",
            json={"custom_style": custom_style},
        )
        return parse_success(data)

    # -------------------------------------------------------------------
    # Translation memory
    # -------------------------------------------------------------------

    async def search_tm(
        self,
        query: str,
        *,
        source_language_code: str = "en",
        target_language_code: str | None = None,
        min_score: float = 0,
        limit: int = 10,
    ) -> list[TMSearchMatch]:
        """Fuzzy-search the translation memory.

        Args:
            query: Source text to look up.
            source_language_code: Source language code.
            target_language_code: Restrict to one target language.
            min_score: Minimum match score (0-100).
            limit: Maximum number of matches.

        Returns:
            Matches ordered as returned by the service.
        """
        params: dict[str, QueryValue] = {
            "query": query,
            "source_lang": source_language_code,
            "score_cutoff": min_score,
            "limit": limit,
        }
        if target_language_code:
            params["target_lang"] = target_language_code
        data = await self._transport.send("GET", "/master-tm/fuzzy-search", params=params)
        return parse_tm_search(data)

    async def list_tm_entries(
        self,
        *,
        source_language_code: str | None = None,
        target_language_code: str | None = None,
        information_source: str | None = None,
        search: str | None = None,
        enabled_only: bool = False,
        limit: int = 100,
        offset: int = 0,
    ) -> TMEntryList:
        """List one page of translation-memory entries.

        Args:
            source_language_code: Filter by source language.
            target_language_code: Filter by target language.
            information_source: Filter by provenance tag.
            search: Substring filter.
            enabled_only: Only return enabled entries.
            limit: Page size.
            offset: Index of the first entry.

        Returns:
            Entries with pagination info.
        """
        params: dict[str, QueryValue] = {"limit": limit, "offset": offset}
        if source_language_code:
            params["source_lang"] = source_language_code
        if target_language_code:
            params["target_lang"] = target_language_code
        if information_source:
            params["information_source"] = information_source
        if search:
            params["search"] = search
        if enabled_only:
            params["enabled_only"] = True
        data = await self._transport.send("GET", "/master-tm/entries", params=params)
        return parse_tm_list(data, offset, limit)

    async def add_tm_entry(
        self,
        source_text: str,
        target_text: str,
        source_language_code: str,
        target_language_code: str,
        *,
        name: str | None = None,
    ) -> TMEntry:
        """Add a manual entry to the translation memory.

        Args:
            source_text: Source segment.
            target_text: Approved translation.
            source_language_code: Source language code.
            target_language_code: Target language code.
            name: Optional provenance name.

        Returns:
            The stored entry.
        """
        body: dict[str, Any] = {
            "source_text": source_text,
            "target_text": target_text,
            "source_language_code": source_language_code,
            "target_language_code": target_language_code,
            "information_source": "manual",
        }
        if name:
            body["source_name"] = name
        data = await self._transport.send("POST", "/master-tm/entries", json=body)
        return parse_tm_entry(data)

    async def update_tm_entry(
        self,
        entry_id: str,
        *,
        target_text: str | None = None,
        enabled: bool | None = None,
    ) -> bool:
        """Update a translation-memory entry.

        Raises:
            ValidationError: If neither target_text nor enabled is given.
                No request is sent in that case.
        """
        body: dict[str, Any] = {}
        if target_text is not None:
            body["target_text"] = target_text
        if enabled is not None:
            body["enabled"] = enabled
        if not body:
            raise ValidationError("Provide at least one of target_text or enabled")

        data = await self._transport.send(
            "PATCH", f"/master-tm/entries/{entry_id}", json=body
        )
        return parse_success(data)

    async def delete_tm_entry(self, entry_id: str) -> bool:
        """Delete a translation-memory entry."""
        data = await self._transport.send("DELETE", f"/master-tm/entries/{entry_id}")
        return parse_success(data)

    async def get_tm_stats(self) -> TMStats:
        """Get translation-memory statistics."""
        data = await self._transport.send("GET", "/master-tm/stats")
        return parse_tm_stats(data)

    # -------------------------------------------------------------------
    # Style guides and brand voice
    # -------------------------------------------------------------------

    async def get_style_guides(self) -> list[StyleGuide]:
        data = await self._transport.send("GET", "/style-guide")
        return parse_style_guides(data)

    async def create_style_guide(
        self,
        title: str,
        content: str,
        *,
        is_enabled: bool = True,
    ) -> StyleGuide:
        data = await self._transport.send(
            "POST",
            "/style-guide",
            json={"title": title, "content": content, "is_enabled": is_enabled},
        )
        return parse_style_guide(data)

    async def update_style_guide(
        self,
        guide_id: str,
        *,
        title: str | None = None,
        content: str | None = None,
        is_enabled: bool | None = None,
    ) -> StyleGuide:
        """Update an existing style guide. Only given fields are sent."""
        body: dict[str, Any] = {}
        if title is not None:
            body["title"] = title
        if content is not None:
            body["content"] = content
        if is_enabled is not None:
            body["is_enabled"] = is_enabled
        data = await self._transport.send("PUT", f"/style-guide/{guide_id}", json=body)
        return parse_style_guide(data)

    async def delete_style_guide(self, guide_id: str) -> bool:
        data = await self._transport.send("DELETE", f"/style-guide/{guide_id}")
        return parse_success(data)

    async def get_brand_voice(self) -> BrandVoice:
        """Get the brand voice prompt."""
        data = await self._transport.send("GET", "/style-guide/prompt")
        return parse_brand_voice(data)

    async def get_combined_prompt(self) -> dict[str, Any]:
        """Get the combined prompt (brand voice and style guides), unparsed."""
        return await self._transport.send("GET", "/style-guide/combined")

    # -------------------------------------------------------------------
    # Feedback
    # -------------------------------------------------------------------

    async def submit_feedback(
        self,
        *,
        source: str | None = None,
        result: str | None = None,
        language: str | None = None,
        feedback: str | None = None,
        approved: bool | None = None,
    ) -> dict[str, Any]:
        """Submit feedback on a translation. Returns the raw response."""
        fields = {
            "source": source,
            "result": result,
            "language": language,
            "feedback": feedback,
            "approved": approved,
        }
        body = {key: value for key, value in fields.items() if value is not None}
        return await self._transport.send("POST", "/text/feedback", json=body)
