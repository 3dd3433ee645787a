from collections.abc import Iterator

import pytest

from imbue.please_wait.defaults import reset_global_defaults
from imbue.please_wait.testing import RecordingWaitLogger


@pytest.fixture(autouse=True)
def isolated_global_defaults() -> Iterator[None]:
    """Every test starts and ends with the hard-coded global defaults."""
    reset_global_defaults()
    yield
    reset_global_defaults()


@pytest.fixture
def recording_logger() -> RecordingWaitLogger:
    return RecordingWaitLogger()
