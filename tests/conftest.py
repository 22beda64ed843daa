"""Shared fixtures for the test suite."""

import pytest

from apollo_tools.observability import clear_log_context


@pytest.fixture(autouse=True)
def _no_dotenv(tmp_path, monkeypatch):
    """Isolate tests from the project .env file.

    CredentialStoreAdapter falls back to reading Path.cwd()/.env when a key
    is missing from os.environ. Changing cwd to a temp dir ensures
    monkeypatch.delenv() truly simulates a missing credential.
    """
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def _clean_log_context():
    clear_log_context()
    yield
    clear_log_context()
