"""Tests for the cldownload command line interface."""
import pytest
from unittest.mock import AsyncMock, patch
from typer.testing import CliRunner

from classeur_downloader import __version__
from classeur_downloader.cli.main import app
from classeur_downloader.core.exceptions import AlreadyExistsError

CREDENTIALS = ['--user-id', 'user', '--api-key', 'key']


@pytest.fixture
def runner():
    return CliRunner()


def invoke(runner, *args):
    return runner.invoke(app, CREDENTIALS + list(args))


class TestListCommand:
    """Test suite for 'cldownload list'."""

    def test_prints_tree(self, runner, fake_source):
        """Test list mode prints the sorted hierarchy."""
        with patch('classeur_downloader.downloader.AsyncAPIClient', return_value=fake_source):
            result = invoke(runner, 'list', '--folders', 'F1', '--files', 'X')

        assert result.exit_code == 0, result.output
        assert result.output.splitlines() == [
            'Notes (F1)',
            '\\_ doc1 (A)',
            '\\_ doc2 (B)',
            'solo (X)',
        ]

    def test_by_id(self, runner, fake_source):
        with patch('classeur_downloader.downloader.AsyncAPIClient', return_value=fake_source):
            result = invoke(runner, 'list', '-d', 'F1', '--by-id')

        assert result.exit_code == 0, result.output
        assert result.output.splitlines()[0] == 'F1 (Notes)'

    def test_ids_are_split_and_deduplicated(self, runner):
        with patch('classeur_downloader.downloader.show_tree', new=AsyncMock()) as show:
            result = invoke(runner, 'list', '--folders', 'a,b', '--folders', 'b', '-f', 'x')

        assert result.exit_code == 0, result.output
        options = show.await_args.args[0]
        assert options.folders == ('a', 'b')
        assert options.files == ('x',)
        assert options.user_id == 'user'
        assert options.api_key == 'key'

    def test_requires_items(self, runner):
        """Test missing folders and files is a usage error."""
        with patch('classeur_downloader.downloader.show_tree', new=AsyncMock()) as show:
            result = invoke(runner, 'list')

        assert result.exit_code == 2
        show.assert_not_awaited()

    def test_requires_credentials(self, runner):
        with patch('classeur_downloader.downloader.show_tree', new=AsyncMock()) as show:
            result = runner.invoke(
                app, ['list', '-d', 'F1'],
                env={'CLASSEUR_USER_ID': None, 'CLASSEUR_API_KEY': None}
            )

        assert result.exit_code == 2
        show.assert_not_awaited()

    def test_credentials_from_environment(self, runner):
        with patch('classeur_downloader.downloader.show_tree', new=AsyncMock()) as show:
            result = runner.invoke(
                app, ['list', '-d', 'F1'],
                env={'CLASSEUR_USER_ID': 'env-user', 'CLASSEUR_API_KEY': 'env-key'}
            )

        assert result.exit_code == 0, result.output
        assert show.await_args.args[0].user_id == 'env-user'


class TestSaveCommand:
    """Test suite for 'cldownload save'."""

    def test_save_tree(self, runner, tmp_path):
        """Test directory destinations run a tree save."""
        with patch('classeur_downloader.downloader.save_tree', new=AsyncMock()) as save:
            result = invoke(
                runner, 'save', '-d', 'F1', '-f', 'X', '--save-path', str(tmp_path),
                '--markdown', '--overwrite', '--metadata', '--max-concurrency', '4'
            )

        assert result.exit_code == 0, result.output
        options = save.await_args.args[0]
        assert options.path == str(tmp_path)
        assert options.folders == ('F1',)
        assert options.files == ('X',)
        assert options.markdown is True
        assert options.overwrite is True
        assert options.folder_metadata is True
        assert options.max_concurrency == 4

    def test_single_file(self, runner, tmp_path):
        """Test one file and a non-directory path saves verbatim."""
        target = tmp_path / 'note.md'
        with patch('classeur_downloader.downloader.save_single_file', new=AsyncMock()) as single, \
                patch('classeur_downloader.downloader.save_tree', new=AsyncMock()) as tree:
            result = invoke(runner, 'save', '-f', 'X', '--destination', str(target))

        assert result.exit_code == 0, result.output
        single.assert_awaited_once()
        tree.assert_not_awaited()
        assert single.await_args.args[0].path == str(target)

    def test_single_file_into_directory(self, runner, tmp_path):
        """Test one file with a directory path is a tree save."""
        with patch('classeur_downloader.downloader.save_tree', new=AsyncMock()) as tree:
            result = invoke(runner, 'save', '-f', 'X', '-p', str(tmp_path))

        assert result.exit_code == 0, result.output
        tree.assert_awaited_once()

    def test_missing_directory(self, runner, tmp_path):
        with patch('classeur_downloader.downloader.save_tree', new=AsyncMock()) as save:
            result = invoke(runner, 'save', '-d', 'F1', '-p', str(tmp_path / 'nope'))

        assert result.exit_code == 2
        save.assert_not_awaited()

    def test_single_file_exists(self, runner, tmp_path):
        """Test an existing single-file target needs --overwrite."""
        target = tmp_path / 'note.md'
        target.write_text('mine')
        with patch('classeur_downloader.downloader.save_single_file', new=AsyncMock()) as single:
            result = invoke(runner, 'save', '-f', 'X', '-p', str(target))

        assert result.exit_code == 2
        single.assert_not_awaited()

    def test_single_file_exists_with_overwrite(self, runner, tmp_path):
        target = tmp_path / 'note.md'
        target.write_text('mine')
        with patch('classeur_downloader.downloader.save_single_file', new=AsyncMock()) as single:
            result = invoke(runner, 'save', '-f', 'X', '-p', str(target), '--overwrite')

        assert result.exit_code == 0, result.output
        single.assert_awaited_once()

    def test_metadata_requires_folders(self, runner, tmp_path):
        with patch('classeur_downloader.downloader.save_tree', new=AsyncMock()) as save:
            result = invoke(runner, 'save', '-f', 'X', '-f', 'Y', '-p', str(tmp_path), '--metadata')

        assert result.exit_code == 2
        save.assert_not_awaited()

    def test_runtime_error_exits_one(self, runner, tmp_path):
        """Test failures during the save exit non-zero with a message."""
        error = AlreadyExistsError(tmp_path / 'solo.md')
        with patch('classeur_downloader.downloader.save_tree', new=AsyncMock(side_effect=error)):
            result = invoke(runner, 'save', '-d', 'F1', '-p', str(tmp_path))

        assert result.exit_code == 1
        assert 'exists' in result.output

    def test_end_to_end_save(self, runner, tmp_path, fake_source):
        """Test the full save pipeline with a fake API."""
        with patch('classeur_downloader.downloader.AsyncAPIClient', return_value=fake_source):
            result = invoke(runner, 'save', '-d', 'F1', '-f', 'X', '-p', str(tmp_path) + '/', '-m')

        assert result.exit_code == 0, result.output
        assert (tmp_path / 'Notes' / 'doc1.md').exists()
        assert (tmp_path / 'Notes' / 'doc2').is_dir()
        assert (tmp_path / 'solo.md').exists()


class TestGlobalOptions:
    """Test suite for options shared by every command."""

    def test_host_and_proxy(self, runner):
        with patch('classeur_downloader.downloader.show_tree', new=AsyncMock()) as show:
            result = invoke(
                runner, '--host', 'localhost:8080', '--proxy', 'http://proxy:3128',
                'list', '-d', 'F1'
            )

        assert result.exit_code == 0, result.output
        options = show.await_args.args[0]
        assert options.host == 'localhost:8080'
        assert options.proxy == 'http://proxy:3128'

    def test_version(self, runner):
        result = runner.invoke(app, ['--version'])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_verbose_reports_success(self, runner):
        with patch('classeur_downloader.downloader.show_tree', new=AsyncMock()):
            result = runner.invoke(app, CREDENTIALS + ['--verbose', 'list', '-d', 'F1'])

        assert result.exit_code == 0, result.output
        assert 'Successfully completed!' in result.output
