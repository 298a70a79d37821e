"""
Recursive materialization of a node tree onto the local filesystem.

Folders become directories (plus an optional JSON sidecar), files are
fetched from the API and written. All children of a folder are processed
concurrently and a folder only completes once every child subtree has
settled.
"""
from pathlib import Path
from typing import Any, Dict, Optional, Protocol, Tuple

from .writer import FileWriter, FOLDER_METADATA_SUFFIX
from ..concurrency import ConcurrencyLimiter, gather_settled
from ..logging import get_logger
from ..options import DownloadOptions
from ..tree import FolderNode, FoundPath, Node, Tree


class FileSource(Protocol):
    """Anything that can fetch a full file object by ID."""

    async def get_file(self, file_id: str) -> Dict[str, Any]:
        ...


class Materializer:
    """
    Writes a tree to disk below a base directory.

    Example:
        >>> tree = TreeBuilder(mode).build(items, root_label='out/')
        >>> await Materializer(client, tree, options, 'out/').materialize('out/')
    """

    def __init__(
        self,
        client: FileSource,
        tree: Tree,
        options: DownloadOptions,
        base_path: Optional[str] = None,
        writer: Optional[FileWriter] = None,
        limiter: Optional[ConcurrencyLimiter] = None
    ):
        self.client = client
        self.tree = tree
        self.options = options
        self.base_path = Path(base_path if base_path is not None else options.path or '.')
        self.writer = writer or FileWriter(
            overwrite=options.overwrite,
            add_extension=options.add_extension
        )
        self.limiter = limiter or ConcurrencyLimiter(options.max_concurrency)
        self._logger = get_logger('materializer')

    async def materialize(self, identifier: Optional[str]) -> None:
        """
        Materialize the node ``identifier`` and everything below it.

        Raises:
            NodeNotFoundError: If ``identifier`` is not in the tree
            LocalWriteError: If a destination cannot be written
            ClasseurAPIError: If fetching a file fails
        """
        found = self.tree.find_node(identifier)
        await self._materialize_node(found.node, found.segments)

    async def _materialize_node(self, node: Node, segments: Tuple[str, ...]) -> None:
        path = self.tree.path_for(FoundPath(node, segments), self.base_path)
        if isinstance(node, FolderNode):
            await self._materialize_folder(node, segments, path)
        else:
            await self._materialize_file(node, path)

    async def _materialize_folder(
        self, folder: FolderNode, segments: Tuple[str, ...], path: Path
    ) -> None:
        await self.writer.make_directory(path)

        pending = []
        if self.options.folder_metadata and segments:
            pending.append(self._write_folder_metadata(folder, path))

        for child in folder.get_children():
            pending.append(self._materialize_node(child, segments + (self.tree.key(child),)))

        self._logger.debug(f"Materializing {len(folder)} children of {path}")
        await gather_settled(pending)

    async def _write_folder_metadata(self, folder: FolderNode, path: Path) -> None:
        sidecar = path.with_name(path.name + FOLDER_METADATA_SUFFIX)
        async with self.limiter.slot():
            await self.writer.write(sidecar, folder.raw, add_extension=False)

    async def _materialize_file(self, node: Node, path: Path) -> None:
        async with self.limiter.slot():
            result = await self.client.get_file(node.node_id)
            payload = self.payload_for(result)
            written = await self.writer.write(path, payload)
        self._logger.info(f"Saved {node.node_id} to {written}")

    def payload_for(self, result: Dict[str, Any]):
        return extract_payload(result, self.options.markdown)


def extract_payload(result: Dict[str, Any], markdown: bool):
    """Markdown text in markdown mode, the whole file object otherwise."""
    if markdown:
        return result['content']['text']
    return result
