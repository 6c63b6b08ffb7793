"""Artifact Storage Interface"""

from abc import ABC, abstractmethod
from typing import Optional


class ArtifactStorage(ABC):
    """Stores rendered artifacts and hands back a public URL"""

    @abstractmethod
    async def save(self, key: str, content: bytes, content_type: str = "application/pdf") -> str:
        """
        Store content under key, replacing any previous content

        Returns:
            Public URL of the stored artifact
        """
        pass

    @abstractmethod
    async def load(self, key: str) -> Optional[bytes]:
        pass
