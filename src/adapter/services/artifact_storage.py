"""Local filesystem artifact storage

Writes rendered invoices under a directory and publishes them below a
base URL (served by the API or a static file server).
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional
from src.app.services.artifact_storage import ArtifactStorage

logger = logging.getLogger(__name__)


class LocalArtifactStorage(ArtifactStorage):

    def __init__(self, base_dir: str, base_url: str):
        self.base_dir = Path(base_dir)
        self.base_url = base_url.rstrip("/")

    def _path_for(self, key: str) -> Path:
        path = (self.base_dir / key).resolve()
        if self.base_dir.resolve() not in path.parents:
            raise ValueError(f"Artifact key escapes storage directory: {key}")
        return path

    def _write(self, path: Path, content: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_suffix(path.suffix + ".tmp")
        tmp_path.write_bytes(content)
        tmp_path.replace(path)

    async def save(self, key: str, content: bytes, content_type: str = "application/pdf") -> str:
        path = self._path_for(key)
        await asyncio.to_thread(self._write, path, content)
        logger.debug(f"Stored artifact {key} ({len(content)} bytes, {content_type})")
        return f"{self.base_url}/{key}"

    async def load(self, key: str) -> Optional[bytes]:
        path = self._path_for(key)
        if not path.exists():
            return None
        return await asyncio.to_thread(path.read_bytes)
