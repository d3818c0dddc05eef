#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdlayout/utils/decorators.py
"""Dependency guards and timing helpers for the conversion pipeline.

The Markdown parser and the PDF backend are decorated with
``requires_dependencies`` so that a missing or outdated mistune/reportlab
surfaces as a DependencyError with an install hint.
"""

from __future__ import annotations

import importlib
import logging
import time
from contextlib import contextmanager
from functools import wraps
from typing import Any, Callable, Generator, List, Optional, Tuple

from mdlayout.exceptions import DependencyError
from mdlayout.utils.packages import check_version_requirement

PackageSpec = Tuple[str, str, str]


def check_dependencies(
    packages: List[PackageSpec],
) -> Tuple[List[Tuple[str, str]], List[Tuple[str, str, str]], Optional[ImportError]]:
    """Import each package and compare installed versions with their specifiers.

    Parameters
    ----------
    packages : list of tuple
        ``(install_name, import_name, version_spec)`` triples, e.g.
        ``("Pillow", "PIL", ">=9.0.0")``; an empty ``version_spec`` accepts any version

    Returns
    -------
    tuple
        ``(missing, version_mismatches, first_import_error)``

    """
    missing: List[Tuple[str, str]] = []
    mismatches: List[Tuple[str, str, str]] = []
    first_error: Optional[ImportError] = None

    for install_name, import_name, version_spec in packages:
        try:
            importlib.import_module(import_name)
        except ImportError as e:
            missing.append((install_name, version_spec))
            first_error = first_error or e
            continue

        if version_spec:
            satisfied, installed = check_version_requirement(install_name, version_spec)
            if not satisfied:
                mismatches.append((install_name, version_spec, installed or "unknown"))

    return missing, mismatches, first_error


def requires_dependencies(component_name: str, packages: List[PackageSpec]) -> Callable:
    """Refuse to run the decorated method unless ``packages`` are importable and recent enough.

    Parameters
    ----------
    component_name : str
        Pipeline stage needing the packages ("markdown", "pdf"); used in the
        error message
    packages : list of tuple
        ``(install_name, import_name, version_spec)`` triples

    Raises
    ------
    DependencyError
        If any package is missing or too old

    Examples
    --------
        >>> @requires_dependencies("markdown", [("mistune", "mistune", ">=3.0.0")])
        ... def parse(self, text):
        ...     import mistune

    """

    def decorator(method: Callable) -> Callable:
        @wraps(method)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            missing, mismatches, first_error = check_dependencies(packages)
            if missing or mismatches:
                raise DependencyError(
                    converter_name=component_name,
                    missing_packages=missing,
                    version_mismatches=mismatches,
                    original_import_error=first_error,
                ) from first_error
            return method(*args, **kwargs)

        return wrapper

    return decorator


@contextmanager
def debug_timer(logger: logging.Logger, operation: str) -> Generator[None, None, None]:
    """Log how long the wrapped block took, at DEBUG level.

    Nothing is measured unless ``logger`` has DEBUG enabled. The time is
    logged even when the block raises.
    """
    if not logger.isEnabledFor(logging.DEBUG):
        yield
        return

    start = time.perf_counter()
    try:
        yield
    finally:
        logger.debug(f"{operation} completed in {time.perf_counter() - start:.2f}s")
