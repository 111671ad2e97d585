#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/flare2markup/utils/decorators.py
"""Utility decorators for flare2markup parsers and renderers.

Centralizes optional-dependency checks and DEBUG-level timing so that the
parser front end and the renderers do not repeat try/except ImportError blocks
or perf_counter bookkeeping.

"""

from __future__ import annotations

import importlib
import logging
import time
from contextlib import contextmanager
from functools import wraps
from typing import Any, Callable, Generator, List, Tuple

from flare2markup.exceptions import DependencyError
from flare2markup.utils.packages import check_version_requirement


def requires_dependencies(component_name: str, packages: List[Tuple[str, str, str]]) -> Callable:
    """Check required dependencies and versions before method execution.

    Parameters
    ----------
    component_name : str
        Name of the component (e.g. "html"), shown in error messages.
    packages : list of tuple
        Required packages as (install_name, import_name, version_spec) tuples.
        ``version_spec`` may be empty to accept any installed version.

    Returns
    -------
    Callable
        Decorated callable that checks dependencies before execution

    Raises
    ------
    DependencyError
        If any required package is missing or has an incompatible version.

    Examples
    --------
        >>> @requires_dependencies("html", [("beautifulsoup4", "bs4", ">=4.12.0")])
        ... def parse_html(markup):
        ...     from bs4 import BeautifulSoup
        ...     ...

    """

    def decorator(method: Callable) -> Callable:
        @wraps(method)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            missing = []
            version_mismatches = []
            original_error = None

            for install_name, import_name, version_spec in packages:
                try:
                    # nosemgrep: python.lang.security.audit.non-literal-import.non-literal-import
                    importlib.import_module(import_name)
                except ImportError as e:
                    missing.append((install_name, version_spec))
                    if original_error is None:
                        original_error = e
                    continue

                if version_spec:
                    meets_requirement, installed_version = check_version_requirement(install_name, version_spec)
                    if not meets_requirement:
                        version_mismatches.append((install_name, version_spec, installed_version or "unknown"))

            if missing or version_mismatches:
                raise DependencyError(
                    converter_name=component_name,
                    missing_packages=missing,
                    version_mismatches=version_mismatches,
                    original_import_error=original_error,
                ) from original_error

            return method(*args, **kwargs)

        return wrapper

    return decorator


@contextmanager
def debug_timer(logger: logging.Logger, operation: str) -> Generator[None, None, None]:
    """Time a block and log the elapsed time at DEBUG level.

    Parameters
    ----------
    logger : logging.Logger
        Logger instance to use for DEBUG messages
    operation : str
        Description of the operation being timed (e.g., "Rendering (asciidoc)")

    Notes
    -----
    No timing is performed when the logger is not enabled for DEBUG.

    """
    if logger.isEnabledFor(logging.DEBUG):
        start_time = time.perf_counter()
        yield
        elapsed = time.perf_counter() - start_time
        logger.debug(f"{operation} completed in {elapsed:.2f}s")
    else:
        yield
