from __future__ import annotations

import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence

import yaml

from .models import ShortcutRecord

logger = logging.getLogger(__name__)


class ShortcutStore:
    """Flat YAML file holding the ordered list of saved shortcuts.

    Only the HTTP layer uses this; the dispatcher never reads or writes it.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def load(self) -> List[ShortcutRecord]:
        """
        Read the shortcut file and convert it into ShortcutRecord objects.

        Returns:
            List[ShortcutRecord]: records in file order (empty list when the
            file is missing or empty)

        Flow:
            1. missing file -> []
            2. YAML parse
            3. each item -> ShortcutRecord
            4. items that fail validation are skipped and logged
        """
        if not self.path.exists():
            return []
        data = yaml.safe_load(self.path.read_text(encoding="utf-8"))
        if not data:
            return []
        if not isinstance(data, list):
            logger.warning(f"Ignoring {self.path}: expected a list of shortcuts")
            return []
        records = []
        for item in data:
            try:
                records.append(ShortcutRecord.model_validate(item))
            except Exception as e:
                logger.warning(f"Skipping malformed shortcut {item!r}: {e}")
                continue
        return records

    def save(self, records: Sequence[ShortcutRecord]) -> bool:
        """Replace the whole list on disk. Returns False if the write failed."""
        payload = [r.model_dump(mode="json") for r in records]
        text = yaml.safe_dump(payload, allow_unicode=True, sort_keys=False)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(text)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            logger.error(f"❌ Could not save shortcuts to {self.path}: {e}")
            return False
        logger.info(f"💾 Saved {len(records)} shortcuts to {self.path}")
        return True


def find(records: Sequence[ShortcutRecord], shortcut_id: str) -> Optional[ShortcutRecord]:
    for record in records:
        if record.id == shortcut_id:
            return record
    return None


def touch(record: ShortcutRecord) -> ShortcutRecord:
    """Copy of ``record`` with lastUsed set to now."""
    return record.model_copy(update={"lastUsed": datetime.now().astimezone()})
