import logging

import pytest

from minihttpd.file_manager import FileManager


@pytest.fixture
def logger():
    return logging.getLogger("minihttpd.tests")


@pytest.fixture
def files_dir(tmp_path):
    directory = tmp_path / "served"
    directory.mkdir()
    return directory


@pytest.fixture
def file_manager(files_dir, logger):
    return FileManager(str(files_dir), logger)
