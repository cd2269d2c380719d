#!/usr/bin/env python3
# SPDX-License-Identifier: Apache-2.0
"""Nativ sample script

Shows basic use of the nativ client: a single translation, a batch
translation and a translation-memory search. Change the settings below
to try other options.

Usage:
    cd examples
    python translate_text.py

Environment variables (loaded automatically from .env):
    NATIV_API_KEY: Required
    NATIV_API_URL: Optional API root
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv

# Add project sources to the path (development use)
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

# Load .env file from project root
load_dotenv(PROJECT_ROOT / ".env")

from nativ import Nativ, NativError  # noqa: E402

# =============================================================================
# Settings
# =============================================================================

TEXT = "Sign up today and get 20% off your first order."
TARGET_LANGUAGE = "French"
TARGET_LANGUAGE_CODE = "fr"
FORMALITY = "formal"

BATCH_TEXTS = ["Add to cart", "Checkout", "Free shipping on all orders"]


async def main() -> int:
    try:
        client = Nativ()
    except NativError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    async with client:
        result = await client.translate(
            TEXT,
            TARGET_LANGUAGE,
            target_language_code=TARGET_LANGUAGE_CODE,
            formality=FORMALITY,
        )
        print(f"{TEXT}\n  -> {result.translated_text}")
        print(f"  words: {result.metadata.word_count}, cost: {result.metadata.cost}")
        if result.tm_match:
            print(f"  TM match: {result.tm_match.score} ({result.tm_match.match_type})")
        if result.rationale:
            print(f"  rationale: {result.rationale}")

        print()
        translations = await client.translate_batch(
            BATCH_TEXTS, TARGET_LANGUAGE, target_language_code=TARGET_LANGUAGE_CODE
        )
        for text, translation in zip(BATCH_TEXTS, translations):
            print(f"{text} -> {translation.translated_text}")

        print()
        matches = await client.search_tm(
            BATCH_TEXTS[0], target_language_code=TARGET_LANGUAGE_CODE, min_score=70
        )
        print(f"TM matches for {BATCH_TEXTS[0]!r}: {len(matches)}")
        for match in matches:
            print(f"  {match.score:5.1f}  {match.source_text} -> {match.target_text}")

    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
