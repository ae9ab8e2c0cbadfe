import hashlib
import json
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from src.domain.entities import PartCatalogEntry


def catalog_version(entries: Iterable[PartCatalogEntry]) -> str:
    """Content hash of a catalog; equal contents give equal versions."""
    sha256 = hashlib.sha256()
    for entry in entries:
        payload = entry.model_dump(mode="json")
        payload["targeted_defenses"] = sorted(payload["targeted_defenses"])
        sha256.update(json.dumps(payload, sort_keys=True).encode())
    return sha256.hexdigest()


class InMemoryCatalogSnapshot:
    """
    Catalog snapshot held in memory.

    The version is a content hash unless one is supplied, so callers that
    reload an unchanged catalog keep their cached index.
    """

    def __init__(
        self,
        entries: Iterable[PartCatalogEntry | Mapping[str, Any]] = (),
        version: str | None = None,
    ) -> None:
        self._entries: tuple[PartCatalogEntry, ...] = ()
        self._version = ""
        self.replace(entries, version)

    def replace(
        self,
        entries: Iterable[PartCatalogEntry | Mapping[str, Any]],
        version: str | None = None,
    ) -> None:
        """Swap in a new snapshot."""
        self._entries = tuple(
            e if isinstance(e, PartCatalogEntry) else PartCatalogEntry.model_validate(e)
            for e in entries
        )
        self._version = version or catalog_version(self._entries)

    def get_version(self) -> str:
        return self._version

    def get_entries(self) -> Sequence[PartCatalogEntry]:
        return self._entries
