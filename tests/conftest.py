"""Pytest fixtures for classeur_downloader tests."""
import asyncio

import pytest

from classeur_downloader.core.options import DownloadOptions


class FakeFileSource:
    """In-memory stand-in for the API client's document operations."""

    def __init__(self, folders=None, files=None, failures=None, delay=0.0):
        self.folders = {f['id']: f for f in folders or []}
        self.files = {f['id']: f for f in files or []}
        self.failures = failures or {}
        self.delay = delay
        self.fetched = []
        self.closed = False

    async def get_folders(self, ids):
        return [self.folders[i] for i in ids]

    async def get_files(self, ids):
        return [self.files[i] for i in ids]

    async def get_file(self, file_id):
        self.fetched.append(file_id)
        if self.delay:
            await asyncio.sleep(self.delay)
        if file_id in self.failures:
            raise self.failures[file_id]
        return {
            'id': file_id,
            'name': f'name-{file_id}',
            'content': {'text': f'# content of {file_id}\n'},
        }

    async def close(self):
        self.closed = True


@pytest.fixture
def sample_folder_data():
    """Returns a folder as the API returns it, with one file and one empty folder."""
    return {
        'id': 'F1',
        'name': 'Notes',
        'files': [
            {'id': 'A', 'name': 'doc1'},
            {'id': 'B', 'name': 'doc2', 'files': []},
        ],
    }


@pytest.fixture
def sample_file_stub():
    """Returns a top-level file stub."""
    return {'id': 'X', 'name': 'solo'}


@pytest.fixture
def sample_items(sample_folder_data, sample_file_stub):
    """Returns top-level folders followed by files."""
    return [sample_folder_data, sample_file_stub]


@pytest.fixture
def fake_source(sample_folder_data, sample_file_stub):
    """Returns a fake API client serving the sample items."""
    return FakeFileSource(folders=[sample_folder_data], files=[sample_file_stub])


@pytest.fixture
def make_options(tmp_path):
    """Returns a factory for DownloadOptions saving below tmp_path."""
    def factory(**kwargs):
        kwargs.setdefault('user_id', 'user')
        kwargs.setdefault('api_key', 'key')
        kwargs.setdefault('path', str(tmp_path))
        return DownloadOptions(**kwargs)
    return factory


@pytest.fixture
def source_factory():
    """Returns the FakeFileSource class for tests needing custom behaviour."""
    return FakeFileSource
