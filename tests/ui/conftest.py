import pytest

pytest.importorskip("PyQt5")

from PyQt5 import QtCore


@pytest.fixture(scope="session")
def qapp():
    app = QtCore.QCoreApplication.instance()
    if app is None:
        app = QtCore.QCoreApplication([])
    yield app


def drain_events(timeout_ms: int = 30) -> None:
    elapsed = QtCore.QElapsedTimer()
    elapsed.start()
    while elapsed.elapsed() < timeout_ms:
        QtCore.QCoreApplication.processEvents(QtCore.QEventLoop.AllEvents, 5)


@pytest.fixture
def drain(qapp):
    return drain_events
