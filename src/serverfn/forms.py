# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Form and blob values that can travel in a multipart server function call."""

from __future__ import annotations

import io
import os
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any, Union

DEFAULT_BLOB_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class Blob:
    """Immutable binary payload with a media type."""

    content: bytes = b""
    content_type: str = DEFAULT_BLOB_TYPE

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class File(Blob):
    """Blob with a file name, sent as a multipart file part."""

    filename: str = "blob"


FormValue = Union[str, Blob]


class FormData:
    """
    Ordered multi-value form container.

    Entries keep insertion order and a name may appear several times. Values
    are either text or a `Blob`/`File`; bytes and open binary files become a
    `File`, anything else is stored as its `str()`.
    """

    def __init__(self, entries: Mapping[str, Any] | Iterable[tuple[str, Any]] | None = None):
        self._entries: list[tuple[str, FormValue]] = []
        if entries is None:
            return
        pairs = entries.items() if isinstance(entries, Mapping) else entries
        for name, value in pairs:
            self.append(name, value)

    @staticmethod
    def _coerce(value: Any) -> FormValue:
        if isinstance(value, Blob):
            return value
        if isinstance(value, (bytes, bytearray, memoryview)):
            return File(content=bytes(value))
        if isinstance(value, (io.BufferedIOBase, io.RawIOBase)):
            name = getattr(value, "name", None)
            filename = os.path.basename(name) if isinstance(name, str) and name else "blob"
            return File(content=value.read() or b"", filename=filename)
        return "" if value is None else str(value)

    def append(self, name: str, value: Any) -> None:
        self._entries.append((str(name), self._coerce(value)))

    def set(self, name: str, value: Any) -> None:
        """Replace every value for `name`, keeping the position of the first one."""
        name = str(name)
        coerced = self._coerce(value)
        replaced = False
        entries: list[tuple[str, FormValue]] = []
        for key, current in self._entries:
            if key != name:
                entries.append((key, current))
            elif not replaced:
                entries.append((key, coerced))
                replaced = True
        if not replaced:
            entries.append((name, coerced))
        self._entries = entries

    def get(self, name: str, default: FormValue | None = None) -> FormValue | None:
        for key, value in self._entries:
            if key == name:
                return value
        return default

    def get_all(self, name: str) -> list[FormValue]:
        return [value for key, value in self._entries if key == name]

    def delete(self, name: str) -> None:
        self._entries = [(key, value) for key, value in self._entries if key != name]

    def keys(self) -> list[str]:
        return [key for key, _ in self._entries]

    def values(self) -> list[FormValue]:
        return [value for _, value in self._entries]

    def items(self) -> list[tuple[str, FormValue]]:
        return list(self._entries)

    def copy(self) -> FormData:
        clone = FormData()
        clone._entries = list(self._entries)
        return clone

    def to_httpx(self) -> tuple[dict[str, list[str]], list[tuple[str, tuple[str, bytes, str]]]]:
        """
        Split entries into httpx `data` and `files` arguments.

        httpx renders text fields before file parts, so relative order is only
        kept within each group. Without any file part httpx falls back to an
        urlencoded body.
        """
        data: dict[str, list[str]] = {}
        files: list[tuple[str, tuple[str, bytes, str]]] = []
        for name, value in self._entries:
            if isinstance(value, Blob):
                filename = value.filename if isinstance(value, File) else "blob"
                files.append((name, (filename, value.content, value.content_type)))
            else:
                data.setdefault(name, []).append(value)
        return data, files

    def __contains__(self, name: object) -> bool:
        return any(key == name for key, _ in self._entries)

    def __iter__(self) -> Iterator[tuple[str, FormValue]]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FormData):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"FormData({self._entries!r})"


__all__ = ["Blob", "DEFAULT_BLOB_TYPE", "File", "FormData", "FormValue"]
