"""Image host client used to turn inline base64 images into hosted URLs.

Uploads go to an imgbb-compatible endpoint. Each attempt is bounded by a
timeout; transport errors and 5xx responses are retried a bounded number of
times, anything else fails immediately with :class:`UploadFailedError`.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

import httpx

from mini_social.core.settings import settings

logger = logging.getLogger(__name__)

HTTP_INTERNAL_SERVER_ERROR = 500


class UploadFailedError(RuntimeError):
    """Raised when the image host does not return a usable URL."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


@dataclass(frozen=True)
class ImageHostConfig:
    """Immutable configuration for image uploads."""

    api_key: str | None
    upload_url: str
    timeout_seconds: float
    max_retries: int
    retry_backoff_seconds: float


def load_image_host_config() -> ImageHostConfig:
    return ImageHostConfig(
        api_key=settings.imgbb_api_key,
        upload_url=settings.imgbb_upload_url,
        timeout_seconds=float(settings.image_upload_timeout_seconds),
        max_retries=max(0, settings.image_upload_max_retries),
        retry_backoff_seconds=float(settings.image_upload_retry_backoff_seconds),
    )


def strip_data_url(image_base64: str) -> str:
    """Drop a ``data:<mime>;base64,`` prefix if the client sent a data URL."""
    if image_base64.startswith("data:") and "," in image_base64:
        return image_base64.split(",", 1)[1]
    return image_base64


def _upstream_detail(response: httpx.Response) -> str:
    try:
        body: Any = response.json()
    except ValueError:
        return response.text or f"Image host responded with {response.status_code}"
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str):
            return error
    return f"Image host responded with {response.status_code}"


class ImageHostClient:
    """HTTP client wrapper for the image host."""

    def __init__(
        self,
        config: ImageHostConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config or load_image_host_config()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._client_lock = asyncio.Lock()

    @property
    def enabled(self) -> bool:
        return bool(self.config.api_key)

    async def _ensure_client(self) -> httpx.AsyncClient:
        async with self._client_lock:
            if self._client is None:
                self._client = httpx.AsyncClient(
                    timeout=httpx.Timeout(self.config.timeout_seconds),
                    transport=self._transport,
                )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def upload(self, image_base64: str) -> str:
        """Upload ``image_base64`` and return the hosted image URL.

        Raises:
            UploadFailedError: If uploads are not configured, the host rejects
                the image, or every attempt fails.
        """
        if not self.enabled:
            raise UploadFailedError("Image hosting is not configured")

        client = await self._ensure_client()
        payload = {"image": strip_data_url(image_base64)}
        attempts = self.config.max_retries + 1
        detail = "Image upload failed"

        for attempt in range(1, attempts + 1):
            logger.info("Uploading image (attempt %d/%d)", attempt, attempts)
            try:
                response = await client.post(
                    self.config.upload_url,
                    params={"key": self.config.api_key},
                    data=payload,
                )
            except httpx.TransportError as exc:
                detail = f"Image host unreachable: {exc}"
                logger.warning("Image upload attempt %d failed: %s", attempt, detail)
            else:
                if response.status_code >= HTTP_INTERNAL_SERVER_ERROR:
                    detail = _upstream_detail(response)
                    logger.warning("Image upload attempt %d failed: %s", attempt, detail)
                elif response.is_success:
                    return self._extract_url(response)
                else:
                    detail = _upstream_detail(response)
                    logger.warning("Image host rejected upload: %s", detail)
                    raise UploadFailedError(detail)

            if attempt < attempts and self.config.retry_backoff_seconds:
                await asyncio.sleep(self.config.retry_backoff_seconds * 2 ** (attempt - 1))

        raise UploadFailedError(detail)

    @staticmethod
    def _extract_url(response: httpx.Response) -> str:
        try:
            url = response.json()["data"]["url"]
        except (ValueError, KeyError, TypeError) as err:
            raise UploadFailedError("Image host returned an unexpected response") from err
        if not isinstance(url, str) or not url:
            raise UploadFailedError("Image host returned an unexpected response")
        return url


_media_client: ImageHostClient | None = None


def get_media_uploader() -> ImageHostClient:
    """Return the process-wide image host client."""
    global _media_client
    if _media_client is None:
        _media_client = ImageHostClient()
    return _media_client


async def close_media_uploader() -> None:
    global _media_client
    if _media_client is not None:
        await _media_client.close()
        _media_client = None
