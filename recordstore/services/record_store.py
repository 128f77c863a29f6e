"""
RecordStore — Persistence Store
================================

What:  Reads and writes the whole record collection to one JSON file.
How:   Every load reads and parses the entire file; every save serializes the
       entire collection (2-space indent) and overwrites the file in place.
       File I/O is asynchronous so a slow disk does not block the event loop.
Who:   Owned by RecordService; the file path is injected at construction.
When:  ensure_initialized() once at startup, load()/save() on every request.

Failure Model:
    load():  any I/O, JSON or shape error → logged, empty collection returned.
             Callers cannot tell "empty on disk" from "read failed".
    save():  OS error → logged, returns False. Callers report it upstream.

    No locking, no temp-file-and-rename: a crash mid-write can truncate the
    file, and the next load() will then see an empty collection.
"""

import json
import logging
from pathlib import Path
from typing import List, Sequence, Union

import aiofiles
import aiofiles.os

from recordstore.models.record import Record

logger = logging.getLogger(__name__)


class RecordStore:
    """
    File-backed store for the record collection.

    On-disk layout:
        [
          {
            "name": "Alice",
            "id": "record_1705320000123",
            "createdAt": "2024-01-15T12:00:00.123Z"
          }
        ]
    """

    def __init__(self, data_file: Union[str, Path]):
        self.data_file = Path(data_file).resolve()

    async def exists(self) -> bool:
        return await aiofiles.os.path.exists(self.data_file)

    async def ensure_initialized(self) -> None:
        """
        Create the data file with an empty JSON array if it is missing.

        Idempotent. OS errors propagate: a store that cannot even be created
        should stop the process at startup.
        """
        if await self.exists():
            logger.info("Data file present: %s", self.data_file)
            return

        await aiofiles.os.makedirs(self.data_file.parent, exist_ok=True)
        async with aiofiles.open(self.data_file, "w", encoding="utf-8") as f:
            await f.write(json.dumps([], indent=2))
        logger.info("Data file created: %s", self.data_file)

    async def load(self) -> List[Record]:
        """
        Read the full collection from disk.

        Returns:
            Records in file order, or an empty list on any read/parse failure.
        """
        try:
            async with aiofiles.open(self.data_file, "r", encoding="utf-8") as f:
                raw = await f.read()
            data = json.loads(raw)
            if not isinstance(data, list):
                raise ValueError(
                    f"expected a JSON array, found {type(data).__name__}"
                )
            return [Record.from_document(item) for item in data]
        except (OSError, ValueError) as e:
            logger.error(
                "Failed to read records from %s: %s", self.data_file, str(e)
            )
            return []

    async def save(self, records: Sequence[Record]) -> bool:
        """
        Overwrite the data file with the given collection.

        Returns:
            True when the file was written, False on an OS error.
        """
        payload = json.dumps(
            [record.to_document() for record in records],
            indent=2,
            ensure_ascii=False,
        )
        try:
            async with aiofiles.open(self.data_file, "w", encoding="utf-8") as f:
                await f.write(payload)
        except OSError as e:
            logger.error(
                "Failed to write records to %s: %s", self.data_file, str(e)
            )
            return False

        logger.info("Saved %d records to %s", len(records), self.data_file.name)
        return True
