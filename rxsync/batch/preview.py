import uuid
from abc import ABC, abstractmethod

from rxsync.batch.models import PreviewHandle, SourceFile
from rxsync.logging.logger import Log


class BasePreviewProvider(ABC):
    """Contract for preview resources tied to a record's lifetime."""

    @abstractmethod
    def acquire(self, source_file: SourceFile) -> PreviewHandle:
        """Create a preview resource for the file."""

    @abstractmethod
    def release(self, handle: PreviewHandle) -> None:
        """Free the resource behind the handle."""


class InMemoryPreviewProvider(BasePreviewProvider):
    """Keeps preview bytes in memory, addressed by a blob-style URL."""

    URL_PREFIX = "blob:rxsync/"

    def __init__(self) -> None:
        self._blobs: dict[str, bytes] = {}

    def acquire(self, source_file: SourceFile) -> PreviewHandle:
        token = uuid.uuid4().hex
        self._blobs[token] = source_file.content
        return PreviewHandle(token=token, url=f"{self.URL_PREFIX}{token}")

    def release(self, handle: PreviewHandle) -> None:
        if self._blobs.pop(handle.token, None) is None:
            Log.warning(f"Preview {handle.url} was already released")

    def read(self, handle: PreviewHandle) -> bytes | None:
        return self._blobs.get(handle.token)

    @property
    def live_count(self) -> int:
        return len(self._blobs)
