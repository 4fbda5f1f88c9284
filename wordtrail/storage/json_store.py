"""JSON file persistence for statistics snapshots."""

import json
from pathlib import Path
from typing import Any

import aiofiles
import aiofiles.os

from wordtrail.exceptions import PersistenceError
from wordtrail.utils.mixins import LoggerMixin


class JsonFileStatsRepository(LoggerMixin):
    """Keeps the snapshot in a single UTF-8 JSON file.

    Writes go to a sibling temporary file that then replaces the target, so
    a failed save never leaves a half-written snapshot behind.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    async def load(self) -> Any:
        if not await aiofiles.os.path.exists(self.path):
            self.logger.debug("No stored statistics yet", path=str(self.path))
            return None

        try:
            async with aiofiles.open(self.path, encoding="utf-8") as f:
                content = await f.read()
        except OSError as e:
            self.logger.error(
                "Failed to read statistics file", path=str(self.path), error=str(e)
            )
            raise PersistenceError(f"Failed to read {self.path}: {e}") from e

        try:
            return json.loads(content)
        except json.JSONDecodeError as e:
            # Undecodable content is treated like malformed data: start empty.
            self.logger.warning(
                "Statistics file is not valid JSON, ignoring it",
                path=str(self.path),
                error=str(e),
            )
            return None

    async def save(self, snapshot: dict[str, Any]) -> None:
        temp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            await aiofiles.os.makedirs(self.path.parent, exist_ok=True)
            payload = json.dumps(snapshot, ensure_ascii=False, indent=2)
            async with aiofiles.open(temp_path, "w", encoding="utf-8") as f:
                await f.write(payload)
            await aiofiles.os.replace(temp_path, self.path)
        except (OSError, TypeError, ValueError) as e:
            self.logger.error(
                "Failed to save statistics file", path=str(self.path), error=str(e)
            )
            raise PersistenceError(f"Failed to write {self.path}: {e}") from e

        self.logger.debug(
            "Statistics saved",
            path=str(self.path),
            days=len(snapshot.get("daily_stats", [])),
        )
