from abc import ABC, abstractmethod
from pathlib import Path, PurePosixPath
from urllib.parse import unquote, urlsplit

from talentmatch.logging.logger import Log
from talentmatch.storage.exceptions import DocumentNotFoundError, StorageError

PUBLIC_OBJECT_MARKER = "/storage/v1/object/public/"


class BaseDocumentStore(ABC):
    """Contract for turning a stored-object reference into PDF bytes."""

    @abstractmethod
    def object_path(self, reference: str) -> str:
        """Normalize a reference to a bucket-relative object path."""

    @abstractmethod
    def load(self, reference: str) -> bytes:
        """Read the referenced object.

        Raises:
            DocumentNotFoundError: if the reference does not resolve to a file.
        """


class LocalDocumentStore(BaseDocumentStore):
    """Reads uploaded resumes from a directory mirroring the storage bucket.

    Accepts public object URLs, bucket-prefixed paths and plain object paths.
    """

    FILES_ROOT = Path("/app/files")

    def __init__(self, files_root: Path | None = None, bucket: str = "talentmatch") -> None:
        self._files_root = files_root if files_root is not None else self.FILES_ROOT
        self._bucket = bucket

    def object_path(self, reference: str) -> str:
        ref = reference.strip()
        if urlsplit(ref).scheme in ("http", "https"):
            path = urlsplit(ref).path
            marker = path.find(PUBLIC_OBJECT_MARKER)
            ref = path[marker + len(PUBLIC_OBJECT_MARKER) :] if marker != -1 else path
        else:
            ref = ref.split("?", 1)[0]
        ref = unquote(ref).lstrip("/")
        prefix = f"{self._bucket}/"
        return ref[len(prefix) :] if ref.startswith(prefix) else ref

    def load(self, reference: str) -> bytes:
        object_path = self.object_path(reference)
        path = self._resolve_path(object_path)
        if not path.is_file():
            raise DocumentNotFoundError(f"File not found: {object_path}")
        data = path.read_bytes()
        Log.info(f"Loaded {len(data)} bytes from {object_path}")
        return data

    def _resolve_path(self, object_path: str) -> Path:
        if not object_path:
            raise DocumentNotFoundError("Empty object path")
        parts = PurePosixPath(object_path).parts
        if ".." in parts:
            raise StorageError(f"Object path escapes storage root: {object_path}")
        return self._files_root.joinpath(*parts)
