"""Find DTO classes in a package by naming convention."""
import importlib
import inspect
import logging
import pkgutil
from typing import Iterable, List

logger = logging.getLogger(__name__)

DEFAULT_SUFFIXES = ("Request", "Response")


def find_dtos(package_name: str, suffixes: Iterable[str] = DEFAULT_SUFFIXES) -> List[str]:
    """
    Find DTO classes in a package and its subpackages

    A class counts as a DTO when it is defined in the scanned module (not
    imported into it) and its name ends with one of the suffixes.

    Args:
        package_name: Dotted package (or module) name
        suffixes: Accepted class name suffixes

    Returns:
        List of DTO identities (module.ClassName), in discovery order
    """
    suffixes = tuple(suffixes)

    try:
        package = importlib.import_module(package_name)
    except ImportError as e:
        logger.warning(f"Could not import DTO package {package_name}: {e}")
        return []

    modules = [package]
    search_path = getattr(package, "__path__", None)

    if search_path is not None:
        for module_info in pkgutil.walk_packages(search_path, prefix=f"{package_name}."):
            try:
                modules.append(importlib.import_module(module_info.name))
            except Exception as e:
                logger.warning(f"Skipping module {module_info.name}: {e}")

    dtos = []
    for module in modules:
        for name, obj in inspect.getmembers(module, inspect.isclass):
            if obj.__module__ != module.__name__:
                continue
            if name.endswith(suffixes):
                dtos.append(f"{module.__name__}.{obj.__qualname__}")

    logger.info(f"Found {len(dtos)} DTOs in {package_name}")
    return dtos
