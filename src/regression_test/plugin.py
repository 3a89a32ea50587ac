"""
Pytest plugin providing the ``regtest`` fixture.

Registered through the ``pytest11`` entry point, so any test can request
it once the package is installed::

    def test_add(regtest):
        regtest.record_display(add(2, 2))
"""
from __future__ import annotations

from pathlib import Path
from typing import Generator, Optional

import pytest

from .config import DEFAULT_CONFIG_NAME, ConfigManager
from .decorator import baseline_path_for
from .recorder import Recorder

call_excinfo_key = pytest.StashKey[Optional[pytest.ExceptionInfo]]()


# Only set once the test body has run
@pytest.hookimpl(tryfirst=True)
def pytest_runtest_makereport(item: pytest.Item, call: pytest.CallInfo) -> None:
    if call.when == "call":
        item.stash[call_excinfo_key] = call.excinfo


def node_test_name(request: pytest.FixtureRequest) -> str:
    """Name of the requesting test, prefixed with its class when it has one."""
    name = request.node.name
    if request.cls is not None:
        name = f"{request.cls.__name__}.{name}"
    return name


@pytest.fixture
def regtest(request: pytest.FixtureRequest) -> Generator[Recorder, None, None]:
    """Provide a Recorder bound to the requesting test's baseline file.

    The baseline is finalized on teardown, so verification failures that can
    only be known at the end of the test are reported there.
    """
    config = ConfigManager(Path(request.config.rootpath) / DEFAULT_CONFIG_NAME).get_config()
    path = baseline_path_for(request.path, node_test_name(request), config.data_dir)

    recorder = Recorder(path, config=config)
    yield recorder

    if call_excinfo_key not in request.node.stash:
        recorder.abandon()
        return

    excinfo = request.node.stash[call_excinfo_key]
    if excinfo is not None:
        recorder.finalize_after_error(excinfo.value)
    else:
        recorder.finalize()
