from __future__ import annotations
import io
import os
from pathlib import Path
from typing import Protocol
import structlog
from minio import Minio
from minio.error import S3Error
from commissiestrijd.config import Settings
from commissiestrijd.services.media import mime_for_name

log = structlog.get_logger()


class ImageStore(Protocol):
    def put(self, key: str, data: bytes, content_type: str) -> None: ...
    def get(self, key: str) -> tuple[bytes, str]: ...
    def delete(self, key: str) -> None: ...


def _check_key(key: str) -> str:
    # Keys are generated flat filenames; anything path-like is refused
    if not key or key != os.path.basename(key) or key in (".", ".."):
        raise FileNotFoundError(f"Invalid image key: {key!r}")
    return key


class LocalImageStore:
    """Images as files in one directory."""

    def __init__(self, root: str | Path):
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.root / _check_key(key)

    def put(self, key: str, data: bytes, content_type: str) -> None:
        self._path(key).write_bytes(data)

    def get(self, key: str) -> tuple[bytes, str]:
        path = self._path(key)
        if not path.is_file():
            raise FileNotFoundError(f"Object not found: {key}")
        return path.read_bytes(), mime_for_name(key)

    def delete(self, key: str) -> None:
        # Missing files are fine: the sweep may retry a row whose file is already gone
        self._path(key).unlink(missing_ok=True)


def _parse_endpoint(ep: str) -> tuple[str, bool]:
    # Return (host:port, secure)
    secure = ep.startswith("https://")
    host = ep.replace("http://", "").replace("https://", "")
    return host, secure


class MinioImageStore:
    """Images in an S3 bucket (MinIO speaks the S3 API)."""

    def __init__(self, endpoint: str, access_key: str, secret_key: str, bucket: str, client: Minio | None = None):
        host, secure = _parse_endpoint(endpoint)
        self.bucket = bucket
        self.client = client or Minio(host, access_key=access_key, secret_key=secret_key, secure=secure)

    def ensure_bucket(self) -> None:
        try:
            if not self.client.bucket_exists(self.bucket):
                self.client.make_bucket(self.bucket)
        except S3Error as e:
            # Concurrent startups may race on creation
            if e.code not in ("BucketAlreadyOwnedByYou", "BucketAlreadyExists"):
                raise

    def put(self, key: str, data: bytes, content_type: str) -> None:
        self.client.put_object(self.bucket, _check_key(key), io.BytesIO(data), length=len(data), content_type=content_type)

    def get(self, key: str) -> tuple[bytes, str]:
        try:
            response = self.client.get_object(self.bucket, _check_key(key))
            try:
                data = response.read()
                content_type = response.headers.get("Content-Type", mime_for_name(key))
            finally:
                response.close()
                response.release_conn()
            return data, content_type
        except S3Error as e:
            if e.code == "NoSuchKey":
                raise FileNotFoundError(f"Object not found: {key}")
            raise

    def delete(self, key: str) -> None:
        self.client.remove_object(self.bucket, _check_key(key))


def build_image_store(settings: Settings) -> ImageStore:
    if settings.image_store == "s3":
        store = MinioImageStore(
            settings.s3_endpoint, settings.s3_access_key, settings.s3_secret_key, settings.s3_bucket_uploads
        )
        store.ensure_bucket()
        log.info("image_store_ready", backend="s3", bucket=settings.s3_bucket_uploads)
        return store
    if settings.image_store != "local":
        raise ValueError(f"Unknown IMAGE_STORE: {settings.image_store}")
    log.info("image_store_ready", backend="local", root=settings.image_dir)
    return LocalImageStore(settings.image_dir)
