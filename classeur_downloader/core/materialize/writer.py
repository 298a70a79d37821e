"""
Destination file writer.

Uses aiofiles for non-blocking I/O. Every write checks the destination
first and refuses to replace an existing file unless overwriting is
enabled.
"""
import json
from pathlib import Path
from typing import Any, Union

import aiofiles
import aiofiles.os

from ..exceptions import AccessDeniedError, AlreadyExistsError
from ..logging import get_logger

MARKDOWN_EXTENSION = '.md'
JSON_EXTENSION = '.json'
FOLDER_METADATA_SUFFIX = '.folder_metadata' + JSON_EXTENSION

Payload = Union[str, dict, list]


class FileWriter:
    """
    Writes text or JSON payloads to the local filesystem.

    Text payloads get ``.md``, anything else is serialized as JSON and
    gets ``.json``, unless extensions are turned off.
    """

    def __init__(self, overwrite: bool = False, add_extension: bool = True):
        self.overwrite = overwrite
        self.add_extension = add_extension
        self._logger = get_logger('writer')

    @staticmethod
    def extension_for(payload: Payload) -> str:
        return MARKDOWN_EXTENSION if isinstance(payload, str) else JSON_EXTENSION

    def destination(self, path: Union[str, Path], payload: Payload, add_extension: bool = None) -> Path:
        """Final path for ``payload``, with its extension when enabled."""
        path = Path(path)
        if add_extension is None:
            add_extension = self.add_extension
        if add_extension:
            # Names may contain dots, so append rather than use with_suffix().
            path = path.with_name(path.name + self.extension_for(payload))
        return path

    async def write(self, path: Union[str, Path], payload: Payload, add_extension: bool = None) -> Path:
        """
        Write ``payload`` to ``path``.

        Args:
            path: Destination, without extension
            payload: Markdown text, or an object to serialize as JSON
            add_extension: Override the writer's extension setting

        Returns:
            Path actually written

        Raises:
            AlreadyExistsError: If the destination exists and overwrite is off
            AccessDeniedError: If the destination cannot be written
        """
        dest = self.destination(path, payload, add_extension)

        if not self.overwrite:
            await self.ensure_absent(dest)

        if isinstance(payload, str):
            data = payload
        else:
            data = json.dumps(payload, indent=2, ensure_ascii=False)

        await self.make_directory(dest.parent)
        try:
            async with aiofiles.open(dest, 'w', encoding='utf-8') as f:
                await f.write(data)
        except PermissionError as e:
            raise AccessDeniedError(dest, str(e)) from e

        self._logger.debug(f"Wrote {len(data)} characters to {dest}")
        return dest

    async def ensure_absent(self, dest: Path) -> None:
        """Raise AlreadyExistsError if ``dest`` exists."""
        try:
            await aiofiles.os.stat(dest)
        except FileNotFoundError:
            return
        except PermissionError as e:
            raise AccessDeniedError(dest, str(e)) from e
        raise AlreadyExistsError(dest)

    async def make_directory(self, path: Union[str, Path]) -> Path:
        """Create ``path`` and its parents; an existing directory is fine."""
        path = Path(path)
        try:
            await aiofiles.os.makedirs(path, exist_ok=True)
        except FileExistsError as e:
            # A file already occupies the directory's name.
            raise AlreadyExistsError(path) from e
        except PermissionError as e:
            raise AccessDeniedError(path, str(e)) from e
        return path
