"""
High level list and save operations.

Usage:
    >>> options = DownloadOptions(user_id='u', api_key='k', folders=('f1',), path='out/')
    >>> async with ClasseurDownloader(options) as downloader:
    ...     await downloader.save_tree()
"""
from dataclasses import replace
from typing import Any, Callable, Dict, List, Optional

from .core.api import APIConfig, AsyncAPIClient, ProxyConfig
from .core.concurrency import gather_settled
from .core.logging import get_logger
from .core.materialize import FileWriter, Materializer, extract_payload
from .core.exceptions import InvalidOptionsError
from .core.options import DownloadOptions
from .core.tree import Tree, TreeBuilder, TreePrinter


class ClasseurDownloader:
    """
    Lists or saves Classeur files and folders.

    Owns an ``AsyncAPIClient`` unless one is passed in.
    """

    def __init__(
        self,
        options: DownloadOptions,
        client: Optional[AsyncAPIClient] = None,
        *,
        config: Optional[APIConfig] = None
    ):
        """
        Initialize downloader.

        Args:
            options: Validated run options
            client: API client to use instead of creating one
            config: API configuration for a created client
        """
        self.options = options
        self._owns_client = client is None
        self._client = client or AsyncAPIClient(
            options.user_id,
            options.api_key,
            config or self.create_config(options)
        )
        self._logger = get_logger('downloader')

    @staticmethod
    def create_config(options: DownloadOptions) -> APIConfig:
        """API configuration for the host and proxy in ``options``."""
        proxy = ProxyConfig(url=options.proxy) if options.proxy else None
        return APIConfig.for_host(options.host, proxy=proxy)

    @property
    def client(self) -> AsyncAPIClient:
        return self._client

    async def __aenter__(self) -> 'ClasseurDownloader':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        """Close the API client if this downloader created it."""
        if self._owns_client:
            await self._client.close()

    async def fetch_items(self) -> List[Dict[str, Any]]:
        """
        Fetch the requested folders and files concurrently.

        Returns:
            Folders followed by files, as one flat list
        """
        folders, files = await gather_settled([
            self._client.get_folders(self.options.folders),
            self._client.get_files(self.options.files),
        ])
        self._logger.debug(f"Fetched {len(folders)} folders and {len(files)} files")
        return list(folders) + list(files)

    @staticmethod
    def _require_path(options: DownloadOptions) -> None:
        if not options.path:
            raise InvalidOptionsError("A destination path is required to save")

    def build_tree(self, items: List[Dict[str, Any]], root_label: Optional[str] = None) -> Tree:
        return TreeBuilder(self.options.identity_mode).build(items, root_label=root_label)

    async def show_tree(self, echo: Optional[Callable[[str], None]] = None) -> List[str]:
        """
        Print the hierarchy of the requested items.

        Each requested folder or file is printed as its own tree, as
        ``name (id)`` or, with ``by_id``, ``id (name)``.

        Returns:
            The printed lines
        """
        self.options.check_items()
        tree = self.build_tree(await self.fetch_items())
        return TreePrinter(self.options.identity_mode).print(tree, echo)

    async def save_tree(self) -> None:
        """
        Save the requested items below ``options.path``.

        Folders become directories named by name (or ID with ``by_id``),
        requested files are written directly into ``options.path``.
        Partial results may remain on disk if a write or fetch fails.
        """
        options = self.options.check_items()
        self._require_path(options)
        tree = self.build_tree(await self.fetch_items(), root_label=options.path)
        await Materializer(self._client, tree, options).materialize(options.path)

    async def save_single_file(self) -> None:
        """
        Save exactly one file to ``options.path``, taken verbatim.

        No folders or extensions are added and ``by_id`` is ignored.
        """
        options = replace(self.options, add_extension=False).check_items(max_files=1, max_folders=0)
        self._require_path(options)
        result = await self._client.get_file(options.files[0])
        payload = extract_payload(result, options.markdown)
        writer = FileWriter(overwrite=options.overwrite, add_extension=False)
        written = await writer.write(options.path, payload)
        self._logger.info(f"Saved {options.files[0]} to {written}")


async def show_tree(options: DownloadOptions, echo: Optional[Callable[[str], None]] = None) -> List[str]:
    """Print the hierarchy of ``options.folders`` and ``options.files``."""
    async with ClasseurDownloader(options) as downloader:
        return await downloader.show_tree(echo)


async def save_tree(options: DownloadOptions) -> None:
    """Save ``options.folders`` and ``options.files`` below ``options.path``."""
    async with ClasseurDownloader(options) as downloader:
        await downloader.save_tree()


async def save_single_file(options: DownloadOptions) -> None:
    """Save the single file in ``options.files`` to ``options.path``."""
    async with ClasseurDownloader(options) as downloader:
        await downloader.save_single_file()
