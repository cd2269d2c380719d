# SPDX-License-Identifier: Apache-2.0
"""HTTP transport for the Nativ API."""

from __future__ import annotations

import json as jsonlib
import logging
from collections.abc import Mapping
from typing import Any

import aiohttp

from nativ.config import ClientConfig
from nativ.errors import raise_for_status
from nativ.files import ResolvedFile

logger = logging.getLogger(__name__)

QueryValue = str | int | float | bool | None


def encode_params(params: Mapping[str, QueryValue]) -> dict[str, str]:
    """Coerce query parameters to strings.

    Booleans become "true"/"false"; None values are dropped.
    """
    encoded: dict[str, str] = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            encoded[key] = "true" if value else "false"
        else:
            encoded[key] = str(value)
    return encoded


def build_form(
    file: ResolvedFile,
    fields: Mapping[str, QueryValue] | None = None,
) -> aiohttp.FormData:
    """Build a multipart form with a ``file`` part and text fields.

    Args:
        file: Resolved file for the ``file`` part.
        fields: Additional text fields, coerced like query parameters.

    Returns:
        Form ready to be sent as the request body.
    """
    form = aiohttp.FormData()
    form.add_field(
        "file",
        file.data,
        filename=file.filename,
        content_type=file.content_type,
    )
    for name, value in encode_params(fields or {}).items():
        form.add_field(name, value)
    return form


def decode_body(raw: str) -> dict[str, Any]:
    """Decode a response body, falling back to ``{"detail": raw}``."""
    try:
        data = jsonlib.loads(raw)
    except ValueError:
        return {"detail": raw}
    if not isinstance(data, dict):
        return {"detail": raw}
    return data


class Transport:
    """Sends single requests to the Nativ API.

    Holds one aiohttp session, created on first use. A session passed in
    by the caller is used as-is and left open on close().
    """

    def __init__(
        self,
        config: ClientConfig,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._config = config
        self._session = session
        self._owns_session = session is None

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def __aenter__(self) -> Transport:
        await self._ensure_session()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure aiohttp session exists.

        Returns:
            Active aiohttp session.
        """
        if self._session is None:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    def _headers(self, with_json: bool) -> dict[str, str]:
        headers = {
            "X-API-Key": self._config.api_key,
            "User-Agent": self._config.user_agent,
        }
        if with_json:
            headers["Content-Type"] = "application/json"
        return headers

    async def send(
        self,
        method: str,
        path: str,
        *,
        json: Mapping[str, Any] | None = None,
        params: Mapping[str, QueryValue] | None = None,
        form: aiohttp.FormData | None = None,
    ) -> dict[str, Any]:
        """Issue one request and return the decoded JSON body.

        Args:
            method: HTTP method.
            path: API path starting with "/".
            json: JSON body.
            params: Query parameters.
            form: Multipart body. Mutually exclusive with json.

        Returns:
            Decoded response body of a 2xx response.

        Raises:
            NativError: Subclass matching a non-2xx status.
            ValueError: If both json and form are given.
            asyncio.TimeoutError: If no response arrives within the timeout.
            aiohttp.ClientError: On connection failures.
        """
        if json is not None and form is not None:
            raise ValueError("json and form are mutually exclusive")

        session = await self._ensure_session()
        url = f"{self._config.base_url}{path}"
        data: str | aiohttp.FormData | None = form
        if json is not None:
            data = jsonlib.dumps(json)

        logger.debug("%s %s", method, path)
        async with session.request(
            method,
            url,
            params=encode_params(params) if params else None,
            data=data,
            headers=self._headers(json is not None),
            timeout=aiohttp.ClientTimeout(total=self._config.timeout),
        ) as response:
            raw = await response.text(errors="replace")
            status = response.status

        logger.debug("%s %s -> %d", method, path, status)
        body = decode_body(raw)
        raise_for_status(status, body)
        return body

    async def close(self) -> None:
        """Close the HTTP session if this transport created it."""
        if self._session is not None and self._owns_session:
            await self._session.close()
        self._session = None
