"""Plugin system for jni-cli.

Uses Pluggy for plugin discovery and hook management. Bundled plugins
provide the Gradle and Kotlin files; external plugins registered under
the ``jni_cli`` entry-point group can contribute more.

    from jni_cli.plugins import initialize_plugins, reset_plugins, get_plugins
"""

import contextlib
import importlib

import pluggy

from jni_cli.logging_config import get_logger
from jni_cli.plugins.hookspecs import ScaffoldSpec

logger = get_logger(__name__)


# Default plugins bundled with jni-cli
# These are loaded automatically on initialization
DEFAULT_PLUGINS = (
    "jni_cli.plugins.bundled.gradle",
    "jni_cli.plugins.bundled.kotlin",
)


# Create plugin manager with jni_cli namespace
pm = pluggy.PluginManager("jni_cli")
pm.add_hookspecs(ScaffoldSpec)

# Track initialization state
_initialized: bool = False


def _load_default_plugins() -> None:
    """Load plugins bundled with jni-cli."""
    for plugin_path in DEFAULT_PLUGINS:
        module = importlib.import_module(plugin_path)
        pm.register(module, name=plugin_path)
        logger.debug(f"Loaded plugin: {plugin_path}")


def _load_external_plugins() -> None:
    """Discover and load external plugins via entry points."""
    try:
        num_loaded = pm.load_setuptools_entrypoints("jni_cli")
        if num_loaded > 0:
            logger.debug(f"Loaded {num_loaded} external plugin(s)")
    except Exception as e:
        logger.warning(f"Error loading external plugins: {e}")


def initialize_plugins() -> None:
    """Initialize the plugin system.

    Loads bundled plugins first, then discovers external plugins
    via entry points.

    This function is idempotent - calling it multiple times has no effect
    after the first call.
    """
    global _initialized

    if _initialized:
        return

    _load_default_plugins()
    _load_external_plugins()

    _initialized = True
    logger.debug(f"Plugin system initialized with {len(pm.get_plugins())} plugin(s)")


def reset_plugins() -> None:
    """Reset the plugin system (mainly for testing).

    Unregisters all plugins and marks the system as uninitialized. The next
    call to initialize_plugins() will re-initialize the system.
    """
    global _initialized

    for plugin in list(pm.get_plugins()):
        with contextlib.suppress(Exception):
            pm.unregister(plugin)

    _initialized = False


def get_plugins() -> list[dict]:
    """Get information about loaded plugins.

    Returns:
        List of plugin info dictionaries with name and module.
    """
    if not _initialized:
        initialize_plugins()

    plugins = []
    for plugin in pm.get_plugins():
        plugin_info = {
            "name": pm.get_name(plugin),
            "module": getattr(plugin, "__name__", str(plugin)),
        }
        plugins.append(plugin_info)

    return plugins


__all__ = [
    "pm",
    "DEFAULT_PLUGINS",
    "initialize_plugins",
    "reset_plugins",
    "get_plugins",
]
