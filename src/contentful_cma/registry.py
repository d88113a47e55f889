from __future__ import annotations

import importlib
import inspect
import logging
import pkgutil
from types import ModuleType
from typing import Callable, Dict, Iterable, List

log = logging.getLogger("contentful_cma.registry")

ENDPOINTS_PACKAGE = "contentful_cma.endpoints"


# --- Discovery helpers ----------------------------------------------------- #


def discover_endpoint_modules(
    package_name: str = ENDPOINTS_PACKAGE,
) -> List[ModuleType]:
    """Import all modules under the given endpoints package."""
    base_pkg = importlib.import_module(package_name)
    return [
        importlib.import_module(info.name)
        for info in pkgutil.iter_modules(base_pkg.__path__, base_pkg.__name__ + ".")
    ]


def iter_endpoint_functions(module: ModuleType) -> Iterable[Callable]:
    """Yield coroutines that follow the endpoint convention (``client`` first)."""
    for _, func in inspect.getmembers(module, inspect.iscoroutinefunction):
        if func.__name__.startswith("_"):
            continue
        if func.__module__ != module.__name__:
            # Skip imported functions
            continue

        params = list(inspect.signature(func).parameters.values())
        if not params or params[0].name != "client":
            log.debug(
                "Skipping %s.%s: first parameter must be 'client'",
                module.__name__,
                func.__name__,
            )
            continue

        yield func


def endpoint_table(
    modules: List[ModuleType] | None = None,
) -> Dict[str, Dict[str, Callable]]:
    """Map resource name (module basename) to its operations by name."""
    modules = modules or discover_endpoint_modules()
    table: Dict[str, Dict[str, Callable]] = {}
    for module in modules:
        resource = module.__name__.rsplit(".", 1)[-1]
        table[resource] = {f.__name__: f for f in iter_endpoint_functions(module)}
        log.debug("Registered resource %s: %s", resource, sorted(table[resource]))
    return table


__all__ = ["discover_endpoint_modules", "iter_endpoint_functions", "endpoint_table"]
