"""
Run options.

A ``DownloadOptions`` value is built once, after validation, and handed
down unchanged to every layer. Variants are derived with
``dataclasses.replace``.
"""
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from .exceptions import InvalidOptionsError
from .tree.models import IdentityMode


def normalize_ids(values: Optional[Iterable[str]]) -> Tuple[str, ...]:
    """
    Flatten repeated and comma-separated ID options.

    Empty entries are dropped and duplicates removed, keeping first
    occurrence order.

    >>> normalize_ids(['a,b', 'b', ' c ', ''])
    ('a', 'b', 'c')
    """
    seen = []
    for value in values or ():
        for part in value.split(','):
            part = part.strip()
            if part and part not in seen:
                seen.append(part)
    return tuple(seen)


@dataclass(frozen=True)
class DownloadOptions:
    """
    Options for listing or saving Classeur files and folders.

    Attributes:
        user_id: User ID for the Classeur API
        api_key: API key for the Classeur API
        folders: Folder IDs to operate on
        files: File IDs to operate on
        by_id: Identify (save and print) items by ID instead of name
        path: Destination directory, or destination file in single file mode
        markdown: Write markdown content instead of full JSON objects
        overwrite: Replace existing destination files
        folder_metadata: Write a JSON sidecar next to every saved folder
        add_extension: Append ``.md``/``.json`` to written files
        max_concurrency: Bound on in-flight file operations (None: unbounded)
        host: Classeur host, for self-hosted instances
        proxy: HTTP(S) proxy URL for API requests
    """
    user_id: str
    api_key: str
    folders: Tuple[str, ...] = ()
    files: Tuple[str, ...] = ()
    by_id: bool = False
    path: Optional[str] = None
    markdown: bool = False
    overwrite: bool = False
    folder_metadata: bool = False
    add_extension: bool = True
    max_concurrency: Optional[int] = None
    host: Optional[str] = None
    proxy: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'folders', tuple(self.folders))
        object.__setattr__(self, 'files', tuple(self.files))

        if self.max_concurrency is not None and self.max_concurrency < 1:
            raise InvalidOptionsError(
                f"max_concurrency must be at least 1, got {self.max_concurrency}"
            )

    @property
    def identity_mode(self) -> IdentityMode:
        return IdentityMode.from_flag(self.by_id)

    def check_items(
        self,
        max_files: Optional[int] = None,
        max_folders: Optional[int] = None
    ) -> 'DownloadOptions':
        """
        Check the requested items against optional limits.

        Raises:
            InvalidOptionsError: If nothing is requested or a limit is exceeded
        """
        if not self.folders and not self.files:
            raise InvalidOptionsError("At least one file or folder must be specified")

        if max_files is not None and len(self.files) > max_files:
            raise InvalidOptionsError(
                f"Got {len(self.files)} files, but expected no more than {max_files}:\n"
                f"{', '.join(self.files)}"
            )

        if max_folders is not None and len(self.folders) > max_folders:
            raise InvalidOptionsError(
                f"Got {len(self.folders)} folders, but expected no more than {max_folders}:\n"
                f"{', '.join(self.folders)}"
            )

        return self
