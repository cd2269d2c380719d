# SPDX-License-Identifier: Apache-2.0
"""Tests for the Nativ client operations."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest
from conftest import FakeResponse, RecordedCall

from nativ import Nativ
from nativ.errors import AuthenticationError, NotFoundError, ServerError, ValidationError
from nativ.files import FileUpload
from nativ.transport import build_form

TRANSLATION_RESPONSE = {
    "translated_text": "Bonjour le monde",
    "metadata": {"word_count": 2, "cost": 10},
    "tm_match": {
        "score": 85,
        "match_type": "fuzzy",
        "top_matches": [
            {
                "tm_id": "tm1",
                "score": 85,
                "match_type": "fuzzy",
                "source_text": "Hello world",
                "target_text": "Bonjour le monde",
                "information_source": "manual",
            }
        ],
    },
    "rationale": "Direct translation",
}


class TestClientInit:
    """Tests for client construction."""

    def test_requires_api_key(self) -> None:
        """No key anywhere fails before any request."""
        with pytest.raises(AuthenticationError):
            Nativ()

    def test_key_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NATIV_API_KEY", "env-key")
        client = Nativ()
        assert client.config.api_key == "env-key"

    def test_custom_base_url(self) -> None:
        client = Nativ(api_key="k", base_url="https://api.test/", timeout=10)
        assert client.config.base_url == "https://api.test"
        assert client.config.timeout == 10

    @pytest.mark.asyncio
    async def test_context_manager_keeps_external_session(self, make_client) -> None:
        client, session = make_client()
        async with client:
            pass
        assert session.closed is False


class TestTranslate:
    """Tests for translate and translate_batch."""

    @pytest.mark.asyncio
    async def test_translate(self, make_client) -> None:
        client, session = make_client(FakeResponse(200, TRANSLATION_RESPONSE))

        result = await client.translate(
            "Hello world", "French", context="greeting", formality="formal"
        )

        assert result.translated_text == "Bonjour le monde"
        assert result.metadata.word_count == 2
        assert result.metadata.cost == 10
        assert result.tm_match is not None
        assert result.tm_match.score == 85
        assert len(result.tm_match.top_matches) == 1

        call = session.calls[0]
        assert call.method == "POST"
        assert call.path == "/text/culturalize"
        assert call.json == {
            "text": "Hello world",
            "language": "French",
            "source_language": "English",
            "source_language_code": "en",
            "tool": "api",
            "include_tm_info": True,
            "backtranslate": False,
            "include_rationale": True,
            "context": "greeting",
            "formality": "formal",
        }

    @pytest.mark.asyncio
    async def test_translate_optional_fields(self, make_client) -> None:
        client, session = make_client(FakeResponse(200, {"translated_text": "x"}))

        await client.translate(
            "Hi",
            "German",
            target_language_code="de",
            glossary="Hi=Hallo",
            max_characters=0,
            backtranslate=True,
        )

        body = session.calls[0].json
        assert body["language_code"] == "de"
        assert body["glossary"] == "Hi=Hallo"
        assert body["max_characters"] == 0
        assert body["backtranslate"] is True
        assert "context" not in body
        assert "formality" not in body

    @pytest.mark.asyncio
    async def test_translate_zero_score_has_no_match(self, make_client) -> None:
        response = {"translated_text": "Hola", "tm_match": {"score": 0}}
        client, _ = make_client(FakeResponse(200, response))

        result = await client.translate("Hello", "Spanish")
        assert result.tm_match is None

    @pytest.mark.asyncio
    async def test_translate_batch_order(self, make_client) -> None:
        """Results follow input order even when responses arrive out of order."""

        def respond(call: RecordedCall) -> FakeResponse:
            text = call.json["text"]
            # "a" answers last
            delay = 0.05 if text == "a" else 0.0
            return FakeResponse(200, {"translated_text": f"fr-{text}"}, delay=delay)

        client, session = make_client(respond)

        results = await client.translate_batch(["a", "b"], "French")

        assert [r.translated_text for r in results] == ["fr-a", "fr-b"]
        assert len(session.calls) == 2
        assert all(c.path == "/text/culturalize" for c in session.calls)
        assert session.max_in_flight == 2

    @pytest.mark.asyncio
    async def test_translate_batch_flags(self, make_client) -> None:
        client, session = make_client(FakeResponse(200, {"translated_text": "x"}))

        await client.translate_batch(["a"], "French", formality="informal")

        body = session.calls[0].json
        assert body["include_tm_info"] is True
        assert body["backtranslate"] is False
        assert body["include_rationale"] is False
        assert body["formality"] == "informal"

    @pytest.mark.asyncio
    async def test_translate_batch_empty(self, make_client) -> None:
        client, session = make_client()
        assert await client.translate_batch([], "French") == []
        assert session.calls == []

    @pytest.mark.asyncio
    async def test_translate_batch_failure_propagates(self, make_client) -> None:
        def respond(call: RecordedCall) -> FakeResponse:
            if call.json["text"] == "bad":
                return FakeResponse(500, {"detail": "boom"})
            return FakeResponse(200, {"translated_text": "ok"})

        client, _ = make_client(respond)

        with pytest.raises(ServerError):
            await client.translate_batch(["good", "bad"], "French")


class TestImages:
    """Tests for OCR and image operations."""

    @pytest.mark.asyncio
    async def test_extract_text_from_path(self, make_client, tmp_path: Path) -> None:
        image = tmp_path / "banner.jpg"
        image.write_bytes(b"jpeg-bytes")
        client, session = make_client(FakeResponse(200, {"extracted_text": "SALE"}))

        with patch("nativ.client.build_form", wraps=build_form) as spy:
            result = await client.extract_text(str(image))

        assert result.extracted_text == "SALE"
        assert session.calls[0].path == "/text/extract"
        assert "Content-Type" not in session.calls[0].headers
        file, fields = spy.call_args.args
        assert file.filename == "banner.jpg"
        assert file.content_type == "image/jpeg"
        assert file.data == b"jpeg-bytes"
        assert not fields

    @pytest.mark.asyncio
    async def test_extract_text_missing_file(self, make_client, tmp_path: Path) -> None:
        client, session = make_client()

        with pytest.raises(FileNotFoundError):
            await client.extract_text(str(tmp_path / "nope.png"))
        assert session.calls == []

    @pytest.mark.asyncio
    async def test_culturalize_image(self, make_client) -> None:
        response = {
            "images": [{"image_base64": "aW1n"}],
            "metadata": {"cost": 25, "num_images": 1},
        }
        client, session = make_client(FakeResponse(200, response))

        with patch("nativ.client.build_form", wraps=build_form) as spy:
            result = await client.culturalize_image(
                b"raw-png", "Soldes", "fr", num_images=1
            )

        assert result.images[0].image_base64 == "aW1n"
        assert result.metadata.cost == 25
        assert session.calls[0].path == "/image/culturalize"
        file, fields = spy.call_args.args
        assert file.filename == "image.png"
        assert fields == {
            "text": "Soldes",
            "language_code": "fr",
            "output_format": "png",
            "model": "gpt",
            "num_images": 1,
            "tool": "api",
        }

    @pytest.mark.asyncio
    async def test_inspect_image_countries(self, make_client) -> None:
        response = {
            "verdict": "NOT SAFE",
            "affected_countries": [
                {"country": "Japan", "issue": "Gesture", "suggestion": "Remove"}
            ],
        }
        client, session = make_client(FakeResponse(200, response))

        with patch("nativ.client.build_form", wraps=build_form) as spy:
            result = await client.inspect_image(
                FileUpload(b"x", "ad.webp"), countries=["Japan", "Brazil"]
            )

        assert result.verdict == "NOT SAFE"
        assert result.affected_countries[0].issue == "Gesture"
        file, fields = spy.call_args.args
        assert file.content_type == "image/webp"
        assert fields == {"countries": "Japan,Brazil"}

    @pytest.mark.asyncio
    async def test_inspect_image_without_countries(self, make_client) -> None:
        client, _ = make_client(FakeResponse(200, {"verdict": "SAFE"}))

        with patch("nativ.client.build_form", wraps=build_form) as spy:
            await client.inspect_image(b"x", countries=[])

        _, fields = spy.call_args.args
        assert fields == {}


class TestLanguages:
    """Tests for language operations."""

    @pytest.mark.asyncio
    async def test_get_languages(self, make_client) -> None:
        response = {"languages": [{"id": 3, "language": "French", "language_code": "fr"}]}
        client, session = make_client(FakeResponse(200, response))

        languages = await client.get_languages()

        assert languages[0].language_code == "fr"
        assert session.calls[0].method == "GET"
        assert session.calls[0].path == "/user/languages"

    @pytest.mark.asyncio
    async def test_update_formality(self, make_client) -> None:
        client, session = make_client(FakeResponse(200, {"success": True}))

        assert await client.update_language_formality(3, "informal") is True

        call = session.calls[0]
        assert call.method == "PATCH"
        assert call.path == "/user/languages/3/formality"
        assert call.json == {"formality": "informal"}

    @pytest.mark.asyncio
    async def test_clear_custom_style(self, make_client) -> None:
        client, session = make_client(FakeResponse(200, {"success": True}))

        await client.update_language_custom_style(3, None)

        call = session.calls[0]
        assert call.path == "/user/languages/3/custom-style"
        assert call.json == {"custom_style": None}


class TestTranslationMemory:
    """Tests for translation memory operations."""

    @pytest.mark.asyncio
    async def test_search_tm(self, make_client) -> None:
        response = {
            "matches": [
                {
                    "tm_id": "tm1",
                    "score": 88,
                    "match_type": "fuzzy",
                    "source_text": "Sign up",
                    "target_text": "S'inscrire",
                    "information_source": "manual",
                }
            ]
        }
        client, session = make_client(FakeResponse(200, response))

        matches = await client.search_tm("Sign up", target_language_code="fr", min_score=70)

        assert len(matches) == 1
        assert matches[0].tm_id == "tm1"
        assert matches[0].target_text == "S'inscrire"
        call = session.calls[0]
        assert call.path == "/master-tm/fuzzy-search"
        assert call.params == {
            "query": "Sign up",
            "source_lang": "en",
            "score_cutoff": "70",
            "limit": "10",
            "target_lang": "fr",
        }

    @pytest.mark.asyncio
    async def test_list_tm_entries(self, make_client) -> None:
        response = {"entries": [{"id": "e1"}], "total": 1}
        client, session = make_client(FakeResponse(200, response))

        result = await client.list_tm_entries(
            target_language_code="fr", enabled_only=True, limit=20, offset=40
        )

        assert result.entries[0].enabled is True
        assert result.entries[0].priority == 50
        assert (result.offset, result.limit) == (40, 20)
        assert session.calls[0].params == {
            "limit": "20",
            "offset": "40",
            "target_lang": "fr",
            "enabled_only": "true",
        }

    @pytest.mark.asyncio
    async def test_list_tm_entries_defaults(self, make_client) -> None:
        client, session = make_client(FakeResponse(200, {}))

        result = await client.list_tm_entries()

        assert result.entries == ()
        assert session.calls[0].params == {"limit": "100", "offset": "0"}

    @pytest.mark.asyncio
    async def test_add_tm_entry(self, make_client) -> None:
        response = {
            "id": "e9",
            "source_text": "Cart",
            "target_text": "Panier",
            "information_source": "manual",
        }
        client, session = make_client(FakeResponse(200, response))

        entry = await client.add_tm_entry("Cart", "Panier", "en", "fr", name="Shop")

        assert entry.id == "e9"
        assert session.calls[0].json == {
            "source_text": "Cart",
            "target_text": "Panier",
            "source_language_code": "en",
            "target_language_code": "fr",
            "information_source": "manual",
            "source_name": "Shop",
        }

    @pytest.mark.asyncio
    async def test_update_tm_entry(self, make_client) -> None:
        client, session = make_client(FakeResponse(200, {"success": True}))

        assert await client.update_tm_entry("e1", enabled=False) is True

        call = session.calls[0]
        assert call.method == "PATCH"
        assert call.path == "/master-tm/entries/e1"
        assert call.json == {"enabled": False}

    @pytest.mark.asyncio
    async def test_update_tm_entry_requires_fields(self, make_client) -> None:
        """An empty update fails locally without a request."""
        client, session = make_client()

        with pytest.raises(ValidationError) as exc_info:
            await client.update_tm_entry("e1")

        assert exc_info.value.status_code is None
        assert session.calls == []

    @pytest.mark.asyncio
    async def test_delete_tm_entry_not_found(self, make_client) -> None:
        client, session = make_client(FakeResponse(404, {"detail": "Entry not found"}))

        with pytest.raises(NotFoundError) as exc_info:
            await client.delete_tm_entry("missing")

        assert exc_info.value.status_code == 404
        assert session.calls[0].method == "DELETE"

    @pytest.mark.asyncio
    async def test_get_tm_stats(self, make_client) -> None:
        client, _ = make_client(FakeResponse(200, {"total": 3, "enabled": 2, "disabled": 1}))

        stats = await client.get_tm_stats()
        assert (stats.total, stats.enabled, stats.disabled) == (3, 2, 1)


class TestStyleGuides:
    """Tests for style guide and brand voice operations."""

    @pytest.mark.asyncio
    async def test_get_style_guides(self, make_client) -> None:
        client, _ = make_client(FakeResponse(200, {"guides": [{"id": 1, "title": "Tone"}]}))

        guides = await client.get_style_guides()
        assert guides[0].id == "1"

    @pytest.mark.asyncio
    async def test_create_style_guide(self, make_client) -> None:
        client, session = make_client(FakeResponse(200, {"id": 5, "title": "T", "content": "C"}))

        guide = await client.create_style_guide("T", "C")

        assert guide.id == "5"
        assert session.calls[0].json == {"title": "T", "content": "C", "is_enabled": True}

    @pytest.mark.asyncio
    async def test_update_style_guide_partial(self, make_client) -> None:
        client, session = make_client(FakeResponse(200, {"id": "5", "is_enabled": False}))

        guide = await client.update_style_guide("5", is_enabled=False)

        assert guide.is_enabled is False
        call = session.calls[0]
        assert call.method == "PUT"
        assert call.path == "/style-guide/5"
        assert call.json == {"is_enabled": False}

    @pytest.mark.asyncio
    async def test_delete_style_guide(self, make_client) -> None:
        client, session = make_client(FakeResponse(200, {"success": True}))

        assert await client.delete_style_guide("5") is True
        assert session.calls[0].path == "/style-guide/5"

    @pytest.mark.asyncio
    async def test_get_brand_voice(self, make_client) -> None:
        client, session = make_client(FakeResponse(200, {"prompt": "Warm", "exists": True}))

        voice = await client.get_brand_voice()

        assert voice.prompt == "Warm"
        assert voice.exists is True
        assert session.calls[0].path == "/style-guide/prompt"

    @pytest.mark.asyncio
    async def test_get_combined_prompt_passthrough(self, make_client) -> None:
        response = {"prompt": "Warm\n- Be brief", "guides_count": 1}
        client, _ = make_client(FakeResponse(200, response))

        assert await client.get_combined_prompt() == response


class TestFeedback:
    """Tests for submit_feedback."""

    @pytest.mark.asyncio
    async def test_only_given_fields_sent(self, make_client) -> None:
        client, session = make_client(FakeResponse(200, {"status": "received"}))

        result = await client.submit_feedback(
            source="Hello", result="Bonjour", approved=False
        )

        assert result == {"status": "received"}
        call = session.calls[0]
        assert call.path == "/text/feedback"
        assert call.json == {"source": "Hello", "result": "Bonjour", "approved": False}
