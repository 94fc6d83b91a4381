"""
Writes persisted documents as JSON files for the downstream static site
generator, which watches the content directory and rebuilds on change.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import aiofiles

from cv_endpoint.config import settings

logger = logging.getLogger(__name__)


class ContentExporter:
    """
    Materialises the profile and page-config documents under
    ``<content_dir>/<subdir>/``.

    Export is a side effect: failures are logged and never raised, so a
    read-only or missing content directory cannot fail a save.
    """

    def __init__(
        self,
        content_dir: Optional[str] = None,
        subdir: Optional[str] = None,
        profile_filename: Optional[str] = None,
        page_config_filename: Optional[str] = None,
    ) -> None:
        self.export_dir = Path(content_dir or settings.CONTENT_DIR) / (
            subdir if subdir is not None else settings.EXPORT_SUBDIR
        )
        self.profile_path = self.export_dir / (profile_filename or settings.PROFILE_EXPORT_FILENAME)
        self.page_config_path = self.export_dir / (
            page_config_filename or settings.PAGE_CONFIG_EXPORT_FILENAME
        )

    async def write_profile(self, document: Dict[str, Any]) -> None:
        await self._write(self.profile_path, document, "[CV]")

    async def write_page_config(self, document: Dict[str, Any]) -> None:
        await self._write(self.page_config_path, document, "[CV Page]")

    async def _write(self, path: Path, document: Dict[str, Any], tag: str) -> None:
        try:
            payload = json.dumps(document, indent=2, ensure_ascii=False)
            self.export_dir.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(path, "w", encoding="utf-8") as out:
                await out.write(payload)
        except (OSError, TypeError, ValueError) as exc:
            logger.error("%s Could not write %s: %s", tag, path, exc)
            return

        logger.info("%s Wrote data to %s", tag, path)
