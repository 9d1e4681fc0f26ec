"""
JSON File Storage Implementation

DESIGN DECISION: A single JSON object on disk acts as a key-value blob,
the same shape a browser's local storage would give us:

    {"fundtracker:contributions": [5.0, 50.0]}

TRADEOFFS:
- No transactions (we replace the whole file atomically instead)
- Other keys in the file are preserved but never interpreted
- Corrupt files are treated as an empty ledger, not as an error

The implementation follows the abstract interface, so the session
does not care where the numbers end up.
"""

import json
import os
from decimal import Decimal
from pathlib import Path
from typing import Iterable, Optional

import structlog
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from fundtracker.config import get_settings
from fundtracker.ledger import InvalidAmountError, to_cents
from fundtracker.services.storage.interface import (
    ContributionStoreInterface,
    CorruptPersistedStateError,
    StorageError,
)


class JsonFileContributionStore(ContributionStoreInterface):
    """
    Contribution store backed by a local JSON file.

    After every load, `last_recovery` holds a short reason when
    anything had to be discarded, otherwise None.
    """

    def __init__(
        self,
        path: Optional[str] = None,
        key: Optional[str] = None,
    ):
        settings = get_settings().storage
        self._path = Path(path or settings.path)
        self._key = key or settings.key
        self._logger = structlog.get_logger(__name__)
        self.last_recovery: Optional[str] = None

    @property
    def path(self) -> Path:
        return self._path

    @property
    def key(self) -> str:
        return self._key

    def load(self) -> list[Decimal]:
        self.last_recovery = None
        try:
            blob = self._read_blob()
            return self._decode(blob.get(self._key))
        except CorruptPersistedStateError as e:
            self.last_recovery = str(e)
            self._logger.warning(
                "persisted_state_corrupt",
                path=str(self._path),
                key=self._key,
                reason=str(e),
            )
            return []

    def save(self, amounts: Iterable[Decimal]) -> None:
        try:
            blob = self._read_blob()
        except CorruptPersistedStateError:
            # Overwrite whatever was unreadable
            blob = {}

        blob[self._key] = [float(a) for a in amounts]

        try:
            self._write_blob(blob)
        except OSError as e:
            self._logger.error(
                "contributions_save_failed",
                path=str(self._path),
                error=str(e),
            )
            raise StorageError(f"Failed to save contributions to {self._path}: {e}")

    def _read_blob(self) -> dict:
        """Read the whole key-value file. Missing or empty file is an empty blob."""
        if not self._path.exists():
            return {}

        try:
            raw = self._path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise CorruptPersistedStateError(f"unreadable file: {e}")

        if not raw.strip():
            return {}

        try:
            blob = json.loads(raw)
        except json.JSONDecodeError as e:
            raise CorruptPersistedStateError(f"invalid JSON: {e.msg}")

        if not isinstance(blob, dict):
            raise CorruptPersistedStateError("top level is not an object")
        return blob

    def _decode(self, value) -> list[Decimal]:
        if value is None:
            return []
        if not isinstance(value, list):
            raise CorruptPersistedStateError(
                f"expected a list under {self._key!r}, got {type(value).__name__}"
            )

        amounts = []
        dropped = 0
        for item in value:
            try:
                amounts.append(to_cents(item, allow_zero=True))
            except InvalidAmountError:
                dropped += 1

        if dropped:
            self.last_recovery = f"dropped {dropped} invalid entries"
            self._logger.warning(
                "persisted_entries_dropped",
                path=str(self._path),
                dropped=dropped,
                kept=len(amounts),
            )
        return amounts

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
        retry=retry_if_exception_type(OSError),
        reraise=True,
    )
    def _write_blob(self, blob: dict) -> None:
        """Write atomically: temp file next to the target, then replace."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        tmp_path.write_text(json.dumps(blob, indent=2), encoding="utf-8")
        os.replace(tmp_path, self._path)
