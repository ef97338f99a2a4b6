#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/syntaxflow/transforms/catalog.py
"""Plugin catalog for attaching plugins by name.

This module implements a registry pattern for plugins, enabling:
- Attaching plugins by name (``processor.use("word-count")``)
- Plugin discovery via entry points
- Plugin lookup and listing by tag

Third-party packages publish plugins by exposing a :class:`PluginMetadata`
object under the ``syntaxflow.plugins`` entry point group:

.. code-block:: toml

    [project.entry-points."syntaxflow.plugins"]
    smartypants = "my_package.plugins:SMARTYPANTS_METADATA"

Examples
--------
Register a plugin using the global catalog instance:

    >>> from syntaxflow.transforms import plugin_catalog, PluginMetadata
    >>> plugin_catalog.register(my_plugin_metadata)

List all plugins:

    >>> for name in plugin_catalog.list_plugins():
    ...     print(f"{name}: {plugin_catalog.get_metadata(name).description}")

"""

from __future__ import annotations

import importlib.metadata
import logging
from typing import Optional

from syntaxflow.constants import PLUGIN_ENTRY_POINT_GROUP
from syntaxflow.transforms.metadata import PluginMetadata
from syntaxflow.transforms.registry import Attacher

logger = logging.getLogger(__name__)


class PluginCatalog:
    """Catalog of named plugins.

    This singleton class provides a central registry for all named plugins.
    The built-in plugins and those published through the
    ``syntaxflow.plugins`` entry point group are registered on first access.

    Notes
    -----
    The preferred way to access the catalog is by importing the global
    ``plugin_catalog`` instance rather than instantiating this class directly.

    """

    _instance: Optional[PluginCatalog] = None
    _plugins: dict[str, PluginMetadata]
    _initialized: bool

    def __new__(cls) -> PluginCatalog:
        """Create or return singleton instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._plugins = {}
            cls._instance._initialized = False
        return cls._instance

    def _ensure_initialized(self) -> None:
        """Register built-in plugins and run entry point discovery once."""
        if not self._initialized:
            self._initialized = True
            from syntaxflow.plugins import BUILTIN_PLUGINS

            for metadata in BUILTIN_PLUGINS:
                if metadata.name not in self._plugins:
                    self._plugins[metadata.name] = metadata
            self.discover_plugins()

    def register(self, metadata: PluginMetadata) -> None:
        """Register a plugin with its metadata.

        Parameters
        ----------
        metadata : PluginMetadata
            Plugin metadata to register

        Notes
        -----
        If a plugin with the same name is already registered, it will
        be overwritten and a warning will be logged.

        """
        if metadata.name in self._plugins:
            logger.warning(f"Plugin '{metadata.name}' already registered, overwriting")

        self._plugins[metadata.name] = metadata
        logger.debug(f"Registered plugin: {metadata.name}")

    def unregister(self, name: str) -> bool:
        """Unregister a plugin.

        Returns
        -------
        bool
            True if plugin was unregistered, False if not found

        """
        self._ensure_initialized()
        if name in self._plugins:
            del self._plugins[name]
            logger.debug(f"Unregistered plugin: {name}")
            return True
        return False

    def get_metadata(self, name: str) -> PluginMetadata:
        """Get metadata for a plugin.

        Raises
        ------
        KeyError
            If plugin is not registered

        """
        self._ensure_initialized()

        if name not in self._plugins:
            available = ", ".join(sorted(self._plugins)) or "none"
            raise KeyError(f"Plugin '{name}' not registered (available: {available})")

        return self._plugins[name]

    def get_attacher(self, name: str) -> Attacher:
        """Get the attacher of a plugin by name."""
        return self.get_metadata(name).attacher

    def has_plugin(self, name: str) -> bool:
        """Check if a plugin is registered."""
        self._ensure_initialized()
        return name in self._plugins

    def list_plugins(self, tags: Optional[list[str]] = None) -> list[str]:
        """List all registered plugin names.

        Parameters
        ----------
        tags : list[str], optional
            Filter by tags. If provided, only plugins with at least
            one matching tag are returned

        Returns
        -------
        list[str]
            List of plugin names, sorted alphabetically

        """
        self._ensure_initialized()

        if tags is None:
            return sorted(self._plugins)

        return sorted(name for name, metadata in self._plugins.items() if any(tag in metadata.tags for tag in tags))

    def discover_plugins(self) -> int:
        """Discover and register plugins from entry points.

        Returns
        -------
        int
            Number of plugins discovered and registered

        """
        discovered_count = 0

        try:
            plugin_eps = importlib.metadata.entry_points().select(group=PLUGIN_ENTRY_POINT_GROUP)

            for ep in plugin_eps:
                try:
                    metadata = ep.load()

                    if not isinstance(metadata, PluginMetadata):
                        logger.warning(f"Entry point '{ep.name}' did not return PluginMetadata, skipping")
                        continue

                    self.register(metadata)
                    discovered_count += 1
                    logger.debug(f"Discovered plugin from entry point: {ep.name}")

                except Exception as e:
                    logger.warning(f"Failed to load plugin entry point '{ep.name}': {e}")
                    continue

        except Exception as e:
            logger.warning(f"Failed to discover plugins: {e}")

        logger.debug(f"Discovered {discovered_count} plugin(s) from entry points")
        return discovered_count

    def clear(self) -> None:
        """Clear all registered plugins.

        Built-in plugins are registered again on next access. This is
        primarily useful for testing.

        """
        self._plugins.clear()
        self._initialized = False
        logger.debug("Cleared plugin catalog")


# Global catalog instance (preferred access pattern)
plugin_catalog = PluginCatalog()

__all__ = ["PluginCatalog", "plugin_catalog"]
