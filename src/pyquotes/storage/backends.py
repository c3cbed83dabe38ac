"""String-keyed blob store backends."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

_logger = logging.getLogger(__name__)


class BlobStore(Protocol):
    """Structural key-value interface used by the persistence adapter.

    Mirrors browser web storage: string keys, string values, ``None`` for
    missing keys.
    """

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryBlobStore:
    """Process-local store.  Used for session-scoped data and in tests."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileBlobStore:
    """Durable store backed by a single JSON object file.

    The file is read once, on first access.  Every :meth:`set` rewrites the
    whole file through a temporary file and an atomic rename.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path = Path(path).expanduser()
        self._data: dict[str, str] | None = None

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, str]:
        if self._data is not None:
            return self._data

        data: dict[str, str] = {}
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            text = ""
        except OSError:
            _logger.warning("Could not read blob store %s; starting empty", self._path, exc_info=True)
            text = ""

        if text.strip():
            try:
                parsed = json.loads(text)
            except json.JSONDecodeError:
                _logger.warning("Blob store %s is not valid JSON; starting empty", self._path)
                parsed = {}
            if isinstance(parsed, dict):
                data = {str(k): v for k, v in parsed.items() if isinstance(v, str)}
            else:
                _logger.warning("Blob store %s is not a JSON object; starting empty", self._path)

        self._data = data
        return data

    def get(self, key: str) -> str | None:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{self._path.name}.", dir=self._path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(data, handle, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
