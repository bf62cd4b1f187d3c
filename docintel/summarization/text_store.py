import secrets
import time
from dataclasses import dataclass


@dataclass(frozen=True)
class StoredText:
    content: bytes
    mime_type: str = "text/plain"


class TemporaryTextStore:
    """In-memory text files served back to URL-based summarizers.

    Built once at startup and handed to every component that needs it;
    the HTTP layer serves `get()` under `{base_url}{path_prefix}/{file_id}`.
    Summary backends release their entry once the provider has answered.
    """

    def __init__(self, base_url: str, path_prefix: str = "/api/temp-files") -> None:
        self._base_url = base_url.rstrip("/")
        self._path_prefix = "/" + path_prefix.strip("/")
        self._files: dict[str, StoredText] = {}

    def put(self, text: str, prefix: str = "summary") -> str:
        """Store text and return the public URL it is served under."""
        file_id = f"{prefix}_{int(time.time() * 1000)}_{secrets.token_hex(4)}"
        self._files[file_id] = StoredText(content=text.encode("utf-8"))
        return self.url_for(file_id)

    def url_for(self, file_id: str) -> str:
        return f"{self._base_url}{self._path_prefix}/{file_id}"

    def get(self, file_id: str) -> StoredText | None:
        return self._files.get(file_id)

    def delete(self, file_id: str) -> None:
        self._files.pop(file_id, None)

    def release(self, url: str) -> None:
        """Delete the entry a put() URL points at; unknown URLs are ignored."""
        prefix = f"{self._base_url}{self._path_prefix}/"
        if url.startswith(prefix):
            self.delete(url[len(prefix):])

    def __len__(self) -> int:
        return len(self._files)
