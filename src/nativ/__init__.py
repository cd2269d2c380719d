# SPDX-License-Identifier: Apache-2.0
"""Nativ Python SDK: async client for the Nativ localization API.

Usage:
    import asyncio
    from nativ import Nativ

    async def main() -> None:
        async with Nativ() as client:  # reads NATIV_API_KEY
            result = await client.translate("Hello world", "French")
            print(result.translated_text)

    asyncio.run(main())
"""

from nativ.client import Nativ
from nativ.config import ClientConfig
from nativ.errors import (
    AuthenticationError,
    InsufficientCreditsError,
    NativError,
    NotFoundError,
    RateLimitError,
    ServerError,
    ValidationError,
)
from nativ.files import FileInput, FileUpload, ResolvedFile, resolve_file
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
from nativ.version import __version__

__all__ = [
    "__version__",
    # Client
    "Nativ",
    "ClientConfig",
    # Exceptions
    "NativError",
    "AuthenticationError",
    "InsufficientCreditsError",
    "ValidationError",
    "NotFoundError",
    "RateLimitError",
    "ServerError",
    # File inputs
    "FileInput",
    "FileUpload",
    "ResolvedFile",
    "resolve_file",
    # Results
    "AffectedCountry",
    "BrandVoice",
    "CulturalInspection",
    "GeneratedImage",
    "ImageMetadata",
    "ImageResult",
    "Language",
    "OCRResult",
    "StyleGuide",
    "TMEntry",
    "TMEntryList",
    "TMMatch",
    "TMMatchDetail",
    "TMSearchMatch",
    "TMStats",
    "Translation",
    "TranslationMetadata",
]
