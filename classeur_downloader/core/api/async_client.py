"""
Async Classeur API client.

Thin wrapper over the Classeur REST API: folders, file stubs and full
files, authenticated with the user ID and API key.
"""
import json
import asyncio
from typing import Dict, Optional, Any, List, Sequence
from urllib.parse import quote

import aiohttp

from .config import APIConfig
from .errors import ClasseurAPIError, ClasseurAuthError, APIErrorCodes
from ..concurrency import gather_settled
from ..logging import get_logger


class AsyncAPIClient:
    """
    Asynchronous Classeur API client.

    Features:
    - Full async/await support
    - HTTP basic authentication with user ID and API key
    - Automatic retry with exponential backoff on throttling and 5xx
    - Connection pooling

    Example:
        >>> async with AsyncAPIClient('user', 'key') as client:
        ...     folders = await client.get_folders(['folder-id'])
    """

    def __init__(
        self,
        user_id: str,
        api_key: str,
        config: Optional[APIConfig] = None
    ):
        """
        Initialize async API client.

        Args:
            user_id: Classeur user ID
            api_key: Classeur API key
            config: API configuration (uses defaults if not provided)
        """
        self._config = config or APIConfig.default()
        self._auth = aiohttp.BasicAuth(user_id, api_key)
        self._session: Optional[aiohttp.ClientSession] = None
        self._connector: Optional[aiohttp.TCPConnector] = None
        self._closed = False
        self._logger = get_logger('api')

    @property
    def config(self) -> APIConfig:
        """Get current configuration."""
        return self._config

    async def __aenter__(self) -> 'AsyncAPIClient':
        """Async context manager entry."""
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure session is created and open."""
        if self._session is None or self._session.closed:
            self._connector = aiohttp.TCPConnector(
                **self._config.get_connector_kwargs()
            )
            self._session = aiohttp.ClientSession(
                connector=self._connector,
                auth=self._auth,
                **self._config.get_session_kwargs()
            )
        return self._session

    async def close(self):
        """Close client and release resources."""
        self._closed = True

        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None

        if self._connector and not self._connector.closed:
            await self._connector.close()
            self._connector = None

    def _build_url(self, *segments: str) -> str:
        """Build request URL from path segments."""
        return self._config.base_url + '/'.join(quote(s, safe='') for s in segments)

    async def request(
        self,
        *segments: str,
        params: Optional[Dict[str, str]] = None,
        retry_count: int = 0
    ) -> Any:
        """
        Make a GET request to the Classeur API.

        Args:
            segments: Path segments below the API base path
            params: Optional query string parameters
            retry_count: Current retry attempt (internal use)

        Returns:
            Decoded JSON response

        Raises:
            ClasseurAuthError: If the credentials are refused
            ClasseurAPIError: On any other failed request
        """
        if self._closed:
            raise ClasseurAPIError(-1, "Client is closed")

        session = await self._ensure_session()
        url = self._build_url(*segments)
        retry = self._config.retry

        self._logger.debug(f"GET {url} params={params}")

        try:
            async with session.get(
                url,
                params=params,
                proxy=self._config.proxy.to_aiohttp_proxy() if self._config.proxy else None
            ) as response:
                status = response.status
                response_text = await response.text()
        except aiohttp.ClientError as e:
            self._logger.error(f"Network error: {e}")

            if retry_count < retry.max_retries:
                await asyncio.sleep(retry.calculate_delay(retry_count))
                return await self.request(*segments, params=params, retry_count=retry_count + 1)

            raise ClasseurAPIError(-1, f"Network error: {e}") from e

        self._logger.debug(
            f"Response {status}: {response_text[:300] if len(response_text) > 300 else response_text}"
        )

        if status >= 400:
            if self._should_retry(status, retry_count):
                self._logger.warning(f"Retrying after status {status}, attempt {retry_count + 1}")
                await asyncio.sleep(retry.calculate_delay(retry_count))
                return await self.request(*segments, params=params, retry_count=retry_count + 1)

            if status in APIErrorCodes.AUTH_CODES:
                raise ClasseurAuthError(status)
            raise ClasseurAPIError(status)

        return self._parse_response(response_text, status)

    def _parse_response(self, response_text: str, status: int) -> Any:
        """Parse API response."""
        try:
            return json.loads(response_text)
        except json.JSONDecodeError as e:
            raise ClasseurAPIError(status, f"Malformed JSON response: {e}") from e

    def _should_retry(self, status: int, retry_count: int) -> bool:
        """Check if should retry for given status."""
        return (
            status in self._config.retry.retry_on_status and
            retry_count < self._config.retry.max_retries
        )

    # Document store operations

    async def get_folder(self, folder_id: str) -> Dict[str, Any]:
        """Get one folder, including the stubs of the files it contains."""
        return await self.request('folders', folder_id)

    async def get_folders(self, folder_ids: Sequence[str]) -> List[Dict[str, Any]]:
        """
        Get several folders concurrently.

        Args:
            folder_ids: Folder IDs

        Returns:
            Folder objects, in the order of ``folder_ids``
        """
        if not folder_ids:
            return []
        return await gather_settled(self.get_folder(folder_id) for folder_id in folder_ids)

    async def get_files(self, file_ids: Sequence[str]) -> List[Dict[str, Any]]:
        """
        Get metadata stubs for several files in one request.

        Args:
            file_ids: File IDs

        Returns:
            File stubs (id, name and other metadata, no content)
        """
        if not file_ids:
            return []
        result = await self.request('metadata', 'files', params={'id': ','.join(file_ids)})
        return result if isinstance(result, list) else [result]

    async def get_file(self, file_id: str) -> Dict[str, Any]:
        """
        Get a file with its content.

        Args:
            file_id: File ID

        Returns:
            Full file object; ``content.text`` holds the markdown
        """
        return await self.request('files', file_id)
