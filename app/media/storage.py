"""Media storage providers.

A provider stores binaries and hands back a public URL plus a provider
identifier used later for deletion. Two implementations:

- LocalStorage: files under UPLOAD_DIR, served by the app at /uploads
- CloudinaryStorage: signed calls to the Cloudinary upload REST API
"""

import hashlib
import logging
import secrets
import time
from collections.abc import Iterable
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path, PurePosixPath
from typing import Annotated, Protocol

import anyio
import httpx
from fastapi import Depends

from app.core.constants import UPLOADS_MOUNT_PATH
from app.core.http import get_cloudinary_client
from app.core.retry import with_retry
from app.core.settings import get_settings
from app.media.exceptions import StorageError

logger = logging.getLogger(__name__)

CLOUDINARY_RESOURCE_TYPES = ("image", "video", "raw")

# Media-kit formats accepted for upload, matched on the lower-cased suffix.
ALLOWED_MEDIA_EXTENSIONS = frozenset(
    {
        ".jpg", ".jpeg", ".png", ".gif", ".webp", ".pdf",
        ".mp4", ".mov", ".avi", ".wmv", ".flv", ".webm", ".mkv", ".m4v", ".mpeg", ".mpg",
    }
)


@dataclass(frozen=True)
class StoredFile:
    url: str
    provider_id: str
    backend: str


class StorageProvider(Protocol):
    """Interface every media storage backend implements."""

    name: str

    async def put(
        self, content: bytes, *, filename: str, content_type: str, folder: str
    ) -> StoredFile: ...

    async def delete(self, provider_id: str) -> bool:
        """Remove a stored file. Returns False when it was already gone."""
        ...


def is_allowed_media(filename: str) -> bool:
    return PurePosixPath(filename).suffix.lower() in ALLOWED_MEDIA_EXTENSIONS


def generate_stored_name(original_name: str) -> str:
    """Build a collision-resistant name: talent-<millis>-<random><ext>."""
    suffix = PurePosixPath(original_name).suffix.lower()
    return f"talent-{int(time.time() * 1000)}-{secrets.randbelow(10**9)}{suffix}"


class LocalStorage:
    name = "local"

    def __init__(self, root: Path, public_base_url: str):
        self.root = root.resolve()
        self.public_base_url = public_base_url.rstrip("/")

    def _resolve(self, provider_id: str) -> Path:
        target = (self.root / provider_id).resolve()
        if not target.is_relative_to(self.root):
            raise StorageError("Invalid storage identifier")
        return target

    async def put(
        self, content: bytes, *, filename: str, content_type: str, folder: str
    ) -> StoredFile:
        provider_id = f"{folder}/{filename}"
        target = anyio.Path(self._resolve(provider_id))
        try:
            await target.parent.mkdir(parents=True, exist_ok=True)
            await target.write_bytes(content)
        except OSError as e:
            raise StorageError(f"Could not store {filename}") from e
        return StoredFile(
            url=f"{self.public_base_url}{UPLOADS_MOUNT_PATH}/{provider_id}",
            provider_id=provider_id,
            backend=self.name,
        )

    async def delete(self, provider_id: str) -> bool:
        target = anyio.Path(self._resolve(provider_id))
        try:
            await target.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StorageError(f"Could not delete {provider_id}") from e
        return True


class CloudinaryStorage:
    name = "cloudinary"

    def __init__(
        self,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        client: httpx.AsyncClient | None = None,
    ):
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client or get_cloudinary_client()

    def sign(self, params: dict[str, str]) -> str:
        """SHA-1 signature over the sorted, non-empty parameters."""
        to_sign = "&".join(
            f"{key}={value}" for key, value in sorted(params.items()) if value != ""
        )
        return hashlib.sha1(f"{to_sign}{self.api_secret}".encode()).hexdigest()

    def _signed(self, params: dict[str, str]) -> dict[str, str]:
        params = {**params, "timestamp": str(int(time.time()))}
        return {**params, "api_key": self.api_key, "signature": self.sign(params)}

    async def put(
        self, content: bytes, *, filename: str, content_type: str, folder: str
    ) -> StoredFile:
        data = self._signed({"folder": folder, "public_id": PurePosixPath(filename).stem})
        url = f"/v1_1/{self.cloud_name}/auto/upload"
        try:
            response = await with_retry(
                lambda: self.client.post(
                    url, data=data, files={"file": (filename, content, content_type)}
                ),
                operation="cloudinary upload",
            )
        except httpx.HTTPError as e:
            raise StorageError(f"Upload of {filename} failed") from e

        if response.status_code != 200:
            logger.error(
                "Cloudinary upload failed: %s %s", response.status_code, response.text
            )
            raise StorageError(f"Upload of {filename} failed")

        body = response.json()
        return StoredFile(
            url=body["secure_url"], provider_id=body["public_id"], backend=self.name
        )

    async def delete(self, provider_id: str) -> bool:
        # The resource type is not recorded, so try each until one matches.
        for resource_type in CLOUDINARY_RESOURCE_TYPES:
            data = self._signed({"public_id": provider_id})
            url = f"/v1_1/{self.cloud_name}/{resource_type}/destroy"
            try:
                response = await with_retry(
                    lambda: self.client.post(url, data=data),
                    operation="cloudinary destroy",
                )
            except httpx.HTTPError as e:
                raise StorageError(f"Delete of {provider_id} failed") from e

            if response.status_code != 200:
                raise StorageError(f"Delete of {provider_id} failed")
            result = response.json().get("result")
            if result == "ok":
                return True
            if result != "not found":
                raise StorageError(f"Delete of {provider_id} failed: {result}")
        return False


@lru_cache
def get_storage() -> StorageProvider:
    """Build the configured storage provider once per process."""
    settings = get_settings()
    if settings.storage_backend == "cloudinary":
        if not (
            settings.cloudinary_cloud_name
            and settings.cloudinary_api_key
            and settings.cloudinary_api_secret
        ):
            raise StorageError("Cloudinary storage selected but not configured")
        return CloudinaryStorage(
            cloud_name=settings.cloudinary_cloud_name,
            api_key=settings.cloudinary_api_key,
            api_secret=settings.cloudinary_api_secret,
        )
    return LocalStorage(Path(settings.upload_dir), settings.public_base_url)


StorageDep = Annotated[StorageProvider, Depends(get_storage)]


async def remove_stored_files(
    storage: StorageProvider, provider_ids: Iterable[str]
) -> int:
    """Best-effort removal of stored binaries.

    A file that is already gone or a provider failure is logged as a
    warning; metadata deletion has already happened by the time this runs.

    Returns:
        Number of files actually removed
    """
    removed = 0
    for provider_id in provider_ids:
        try:
            if await storage.delete(provider_id):
                removed += 1
            else:
                logger.warning("Stored file %s was already missing", provider_id)
        except StorageError as e:
            logger.warning("Could not remove stored file %s: %s", provider_id, e.message)
    return removed
