"""Delivery target for generated workbooks: local folder (dev) or S3/R2 (prod)."""

import re
from pathlib import Path

from src.core.config import settings
from src.modules.exports.schemas import ExportArtifact

EXPORTS_PREFIX = "exports"
# Only names produced by export_filename() may be read back.
EXPORT_FILENAME_RE = re.compile(r"^[A-Za-z0-9_-]+-data-export-\d{4}-\d{2}-\d{2}\.xlsx$")


def is_export_filename(filename: str) -> bool:
    return bool(EXPORT_FILENAME_RE.match(filename))


def _s3_client():
    import aioboto3

    session = aioboto3.Session()
    return session.client(
        "s3",
        endpoint_url=settings.s3_endpoint_url,
        aws_access_key_id=settings.s3_access_key,
        aws_secret_access_key=settings.s3_secret_key,
        region_name=settings.s3_region,
    )


class ExportStorage:
    """Write and read export artifacts. Same-day exports overwrite each other."""

    def __init__(self, base_path: str | Path | None = None, use_s3: bool | None = None):
        self.base_path = Path(base_path or settings.storage_path)
        self.use_s3 = settings.use_s3 if use_s3 is None else use_s3

    def _key(self, filename: str) -> str:
        return f"{EXPORTS_PREFIX}/{filename}"

    async def save(self, artifact: ExportArtifact) -> str:
        """Store the artifact; returns its storage key."""
        if not is_export_filename(artifact.filename):
            raise ValueError(f"Refusing to store unexpected file name: {artifact.filename}")
        key = self._key(artifact.filename)
        if self.use_s3:
            async with _s3_client() as s3:
                await s3.put_object(
                    Bucket=settings.s3_bucket,
                    Key=key,
                    Body=artifact.content,
                    ContentType=artifact.content_type,
                )
        else:
            full_path = self.base_path / key
            full_path.parent.mkdir(parents=True, exist_ok=True)
            full_path.write_bytes(artifact.content)
        return key

    async def load(self, filename: str) -> bytes:
        """Read a stored export. Raises FileNotFoundError for unknown or invalid names."""
        if not is_export_filename(filename):
            raise FileNotFoundError(filename)
        key = self._key(filename)
        if self.use_s3:
            async with _s3_client() as s3:
                try:
                    response = await s3.get_object(Bucket=settings.s3_bucket, Key=key)
                except s3.exceptions.NoSuchKey as e:
                    raise FileNotFoundError(filename) from e
                async with response["Body"] as stream:
                    return await stream.read()
        return (self.base_path / key).read_bytes()
