"""Static asset store backed by a local directory."""

import logging
from pathlib import Path

from starlette.concurrency import run_in_threadpool
from starlette.staticfiles import StaticFiles

from bpost_tracker.utils.exceptions import AssetNotFoundError

logger = logging.getLogger(__name__)


class StaticAssetStore:
    """Serves the frontend tree and hands out the base HTML document."""

    def __init__(self, directory: Path, index_document: str = "index.html"):
        self.directory = Path(directory)
        self.index_document = index_document

    @property
    def index_path(self) -> Path:
        return self.directory / self.index_document

    async def read_index(self) -> str:
        """
        Read the base HTML document that metadata is spliced into.

        Raises:
            AssetNotFoundError: If the document does not exist
        """
        path = self.index_path
        try:
            return await run_in_threadpool(path.read_text, encoding="utf-8")
        except FileNotFoundError as e:
            logger.error("Base document missing: %s", path)
            raise AssetNotFoundError(f"Static document not found: {self.index_document}") from e

    def as_app(self) -> StaticFiles:
        """ASGI app for every path the router does not handle itself."""
        return StaticFiles(directory=self.directory, check_dir=False)
