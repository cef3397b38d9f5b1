"""
Tests for the application entry point.

Covers:
- Session store is discarded by cleanup
- main() runs the app and always cleans up, without entering the event loop
"""

import pytest

from passkeeper import main as main_module
from passkeeper.main import PasswordManagerApp
from passkeeper.storage import Credential


class FakeApp:
    instances = []

    def __init__(self):
        self.ran = False
        self.cleaned_up = False
        FakeApp.instances.append(self)

    def run(self):
        self.ran = True
        return 0

    def cleanup(self):
        self.cleaned_up = True


@pytest.fixture
def fake_app(monkeypatch):
    FakeApp.instances = []
    monkeypatch.setattr(main_module, "PasswordManagerApp", FakeApp)
    return FakeApp


class FailingApp(FakeApp):
    def run(self):
        raise RuntimeError("event loop failed")


class TestPasswordManagerApp:
    @pytest.fixture(autouse=True)
    def _keep_sigint_handler(self, monkeypatch):
        monkeypatch.setattr(main_module.signal, "signal", lambda *args: None)

    def test_starts_with_empty_store(self, qapp):
        app = PasswordManagerApp()
        assert len(app.store) == 0
        assert app.main_window is None

    def test_cleanup_clears_store(self, qapp):
        app = PasswordManagerApp()
        app.store.insert(Credential("site.com", "bob", "pw1"))
        app.store.insert(Credential("other.com", "ann", "pw2"))

        app.cleanup()

        assert len(app.store) == 0


class TestMain:
    def test_main_runs_and_cleans_up(self, qapp, fake_app):
        assert main_module.main() == 0

        app = fake_app.instances[0]
        assert app.ran is True
        assert app.cleaned_up is True

    def test_main_cleans_up_when_run_fails(self, qapp, fake_app, monkeypatch):
        monkeypatch.setattr(main_module, "PasswordManagerApp", FailingApp)

        with pytest.raises(RuntimeError):
            main_module.main()

        assert fake_app.instances[0].cleaned_up is True
