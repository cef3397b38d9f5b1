"""
Shared pytest fixtures for the PassKeeper test suite.

Qt runs on the offscreen platform so the UI tests need no display.
"""

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from passkeeper.storage import CredentialStore, Credential


@pytest.fixture(scope="session")
def qapp():
    """One QApplication for the whole test session."""
    from PyQt5.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def store():
    return CredentialStore()


@pytest.fixture
def sample_store(store):
    store.insert(Credential("Example.com", "alice", "x"))
    store.insert(Credential("test.org", "Bob", "y"))
    return store
