"""
JSON-file cache stores.

Three documents back the dashboard:

- scripcode mapping: ``{"HDFCBANK": "500180", ...}``, never expires
- price cache: ``{"500180": {"timestamp": <epoch ms>, "data": {...}}}``, short TTL
- fundamentals cache: same shape, long TTL

Every save rewrites the whole document; expired entries are filtered on
load but stay on disk until the next save replaces the file. There is no
locking, so concurrent writers race and the last one wins.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Callable, Generic, Optional, TypeVar

from bse_portfolio.core.timezone import epoch_millis
from bse_portfolio.domain.views import PriceSnapshot, FundamentalsSnapshot

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _read_document(path: Path) -> dict[str, Any]:
    """Read a JSON object from disk; anything unusable reads as empty."""
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Cannot read cache file %s: %s", path, exc)
        return {}

    if not content.strip():
        return {}

    try:
        document = json.loads(content)
    except json.JSONDecodeError as exc:
        logger.warning("Ignoring unparsable cache file %s: %s", path, exc)
        return {}

    if not isinstance(document, dict):
        logger.warning("Ignoring cache file %s: expected a JSON object", path)
        return {}
    return document


def _write_document(path: Path, document: dict[str, Any]) -> None:
    """Replace the file with ``document``. Failures are logged, never raised."""
    tmp_name: Optional[str] = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            json.dump(document, fh, indent=2)
        os.replace(tmp_name, path)
        tmp_name = None
    except (OSError, TypeError, ValueError) as exc:
        logger.error("Error saving cache file %s: %s", path, exc)
    finally:
        if tmp_name is not None:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass


class ScripcodeCacheStore:
    """Permanent symbol -> scrip code mapping."""

    def __init__(self, path: Path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> dict[str, str]:
        """Load all mappings. Non-string codes are dropped."""
        document = _read_document(self._path)
        result: dict[str, str] = {}
        for symbol, scripcode in document.items():
            if isinstance(scripcode, bool):
                continue
            if isinstance(scripcode, int):
                scripcode = str(scripcode)
            if isinstance(scripcode, str) and scripcode:
                result[symbol] = scripcode
        return result

    def save(self, mapping: dict[str, str]) -> None:
        """Persist the full mapping."""
        _write_document(self._path, dict(mapping))


class TtlCacheStore(Generic[T]):
    """
    Time-limited cache of vendor snapshots keyed by scrip code.

    Each entry is stamped with the write time on save and treated as absent
    once ``now - timestamp >= ttl``.
    """

    def __init__(
        self,
        path: Path,
        ttl_seconds: float,
        decode: Callable[[dict[str, Any]], T],
        encode: Callable[[T], dict[str, Any]],
        clock: Callable[[], float] = epoch_millis,
    ):
        self._path = Path(path)
        self._ttl_ms = ttl_seconds * 1000
        self._decode = decode
        self._encode = encode
        self._clock = clock

    @property
    def path(self) -> Path:
        return self._path

    @property
    def ttl_seconds(self) -> float:
        return self._ttl_ms / 1000

    def is_fresh(self, timestamp: float, now: Optional[float] = None) -> bool:
        """Check an entry timestamp (epoch ms) against the TTL."""
        if now is None:
            now = self._clock()
        return (now - timestamp) < self._ttl_ms

    def load(self) -> dict[str, T]:
        """Return live entries; expired or malformed entries are skipped."""
        document = _read_document(self._path)
        now = self._clock()
        result: dict[str, T] = {}

        for key, entry in document.items():
            if not isinstance(entry, dict):
                continue
            timestamp = entry.get("timestamp")
            data = entry.get("data")
            if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
                continue
            if not isinstance(data, dict):
                continue
            if not self.is_fresh(timestamp, now):
                continue
            try:
                result[key] = self._decode(data)
            except (TypeError, ValueError) as exc:
                logger.debug("Skipping malformed cache entry %s in %s: %s", key, self._path, exc)

        return result

    def save(self, mapping: dict[str, T]) -> None:
        """Persist the full mapping, stamping every entry with the current time."""
        now = self._clock()
        try:
            document = {
                key: {"timestamp": now, "data": self._encode(value)}
                for key, value in mapping.items()
            }
        except (TypeError, ValueError, AttributeError) as exc:
            logger.error("Cannot serialize cache for %s: %s", self._path, exc)
            return
        _write_document(self._path, document)

    def clear(self) -> None:
        """Drop every entry."""
        _write_document(self._path, {})


def price_cache_store(
    path: Path,
    ttl_seconds: float = 120,
    clock: Callable[[], float] = epoch_millis,
) -> TtlCacheStore[PriceSnapshot]:
    """Build the short-lived price store."""
    return TtlCacheStore(
        path,
        ttl_seconds,
        decode=PriceSnapshot.from_dict,
        encode=PriceSnapshot.to_dict,
        clock=clock,
    )


def fundamentals_cache_store(
    path: Path,
    ttl_seconds: float = 24 * 60 * 60,
    clock: Callable[[], float] = epoch_millis,
) -> TtlCacheStore[FundamentalsSnapshot]:
    """Build the long-lived fundamentals store."""
    return TtlCacheStore(
        path,
        ttl_seconds,
        decode=FundamentalsSnapshot.from_dict,
        encode=FundamentalsSnapshot.to_dict,
        clock=clock,
    )
