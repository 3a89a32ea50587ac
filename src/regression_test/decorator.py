"""
Test wrapper that wires a Recorder into a test function.

The ``regtest`` decorator derives a baseline path from the test's source
file and test name, passes a Recorder to the test and finalizes it after
the body returns or raises.
"""
from __future__ import annotations

import functools
import inspect
import logging
import os
import re
from pathlib import Path
from typing import Any, Callable, Optional, Union

from .config import ConfigManager, RegTestConfig
from .recorder import Recorder

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^\w.\-\[\]]")

# Directory names that anchor the baseline tree
_ANCHORS = ("tests", "src")


def sanitize_test_name(test_name: str) -> str:
    """Make a test name usable as a file name."""
    return _UNSAFE_CHARS.sub("_", test_name)


def baseline_path_for(
    source_file: Union[str, Path], test_name: str, data_dir: str = "regtest_data"
) -> Path:
    """Derive the baseline file of a test.

    Tests under a ``tests`` (or ``src``) directory map to
    ``<project>/<data_dir>/tests/<subdirs>/<module>/<test_name>.json`` where
    ``<project>`` is the parent of the nearest such directory. Other files
    keep their baselines next to them in ``<data_dir>/<module>/``.
    """
    path = Path(source_file).resolve()
    file_name = f"{sanitize_test_name(test_name)}.json"

    for anchor_name in _ANCHORS:
        anchor = next((p for p in path.parents if p.name == anchor_name), None)
        if anchor is None:
            continue
        relative = path.parent.relative_to(anchor)
        return anchor.parent / data_dir / anchor_name / relative / path.stem / file_name

    return path.parent / data_dir / path.stem / file_name


def current_test_name(func: Callable[..., Any]) -> str:
    """Name used for the baseline file of ``func``.

    Inside pytest the running node id gives the class prefix and the
    parametrize id, e.g. ``TestMath.test_square[2]``. Otherwise the
    function's qualified name is used.
    """
    node_id = os.environ.get("PYTEST_CURRENT_TEST")
    if node_id:
        # "<file>::<Class>::<name>[<id>] (<phase>)"
        parts = node_id.rsplit(" (", 1)[0].split("::")[1:]
        if parts and parts[-1].split("[", 1)[0] == func.__name__:
            return ".".join(parts)
    return func.__qualname__.replace(".<locals>", "")


def regtest(
    func: Optional[Callable[..., Any]] = None,
    *,
    path: Optional[Union[str, Path]] = None,
    config: Optional[RegTestConfig] = None,
):
    """Decorate a test that receives a Recorder.

    The Recorder goes to the first parameter, or to the one after ``self``
    on test methods. Usable bare (``@regtest``) or with arguments
    (``@regtest(path="baseline.json")``). The Recorder parameter is removed
    from the wrapper's signature so pytest does not look for a fixture of
    that name.
    """
    if func is None:
        return functools.partial(regtest, path=path, config=config)

    signature = inspect.signature(func)
    parameters = list(signature.parameters.values())
    position = 1 if parameters and parameters[0].name in ("self", "cls") else 0
    if len(parameters) <= position:
        raise TypeError(
            f"{func.__qualname__} must accept at least one argument to receive the Recorder"
        )

    def open_recorder() -> Recorder:
        cfg = config or ConfigManager().get_config()
        target = path or baseline_path_for(
            func.__code__.co_filename, current_test_name(func), cfg.data_dir
        )
        logger.debug(f"Baseline for {func.__qualname__}: {target}")
        return Recorder(target, config=cfg)

    if inspect.iscoroutinefunction(func):

        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs):
            with open_recorder() as recorder:
                return await func(*args[:position], recorder, *args[position:], **kwargs)

        wrapper = async_wrapper
    else:

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            with open_recorder() as recorder:
                return func(*args[:position], recorder, *args[position:], **kwargs)

    wrapper.__signature__ = signature.replace(
        parameters=parameters[:position] + parameters[position + 1:]
    )
    return wrapper
