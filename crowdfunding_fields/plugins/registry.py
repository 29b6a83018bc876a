"""
Hook Registry

HookRegistry: stores registered plugins and the callbacks attached to named
hooks, and dispatches filters and actions to them.

Filters thread a value through every callback and return the result; actions
call every callback for its side effect. Callbacks run in ascending priority,
ties in the order they were added. Exceptions raised by a callback propagate
to whoever fired the hook.
"""

from __future__ import annotations

import itertools
import logging
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from crowdfunding_fields.exceptions import HookRegistrationError, PluginNotFoundError
from crowdfunding_fields.plugins.hooks import DEFAULT_PRIORITY
from crowdfunding_fields.utils.structured_logging import current_hook_var

if TYPE_CHECKING:
    from crowdfunding_fields.plugins.base import PluginBase

logger = logging.getLogger(__name__)


@dataclass(order=True)
class _HookCallback:
    priority: int
    sequence: int
    callback: Callable[..., Any] = field(compare=False)
    accepted_args: int = field(compare=False, default=1)
    owner: str | None = field(compare=False, default=None)

    def __call__(self, *args: Any) -> Any:
        return self.callback(*args[: self.accepted_args])


class HookRegistry:
    """
    In-process registry of plugins and hook callbacks.

    One registry is built at startup and handed to every plugin through
    PluginBase.register_hooks().
    """

    def __init__(self) -> None:
        self._plugins: dict[str, PluginBase] = {}
        self._callbacks: dict[str, list[_HookCallback]] = defaultdict(list)
        self._sequence = itertools.count()
        self._registering: str | None = None

    # ── Plugin registration ───────────────────────────────────────────────────

    def register(self, plugin: PluginBase) -> None:
        """Register a plugin and let it attach its hook callbacks."""
        name = plugin.meta.name
        if name in self._plugins:
            logger.warning("Plugin %s already registered, replacing it", name)
            self.unregister(name)
        self._plugins[name] = plugin
        self._registering = name
        try:
            plugin.register_hooks(self)
        finally:
            self._registering = None
        logger.info("Plugin registered: %s v%s", name, plugin.meta.version, extra={"plugin": name})

    def unregister(self, name: str) -> PluginBase:
        """Remove a plugin together with every callback it attached."""
        plugin = self._plugins.pop(name, None)
        if plugin is None:
            raise PluginNotFoundError(name)
        for hook_name in list(self._callbacks):
            remaining = [cb for cb in self._callbacks[hook_name] if cb.owner != name]
            if remaining:
                self._callbacks[hook_name] = remaining
            else:
                del self._callbacks[hook_name]
        plugin.on_unload()
        logger.info("Plugin unregistered: %s", name, extra={"plugin": name})
        return plugin

    # ── Lookup ────────────────────────────────────────────────────────────────

    def get(self, name: str) -> PluginBase | None:
        """Return the plugin with the given name, or None if not registered."""
        return self._plugins.get(name)

    def all_plugins(self) -> list[PluginBase]:
        """Return all registered plugins in registration order."""
        return list(self._plugins.values())

    def is_registered(self, name: str) -> bool:
        """Return True if a plugin with the given name has been registered."""
        return name in self._plugins

    # ── Callback registration ─────────────────────────────────────────────────

    def add_filter(
        self,
        hook_name: str,
        callback: Callable[..., Any],
        priority: int = DEFAULT_PRIORITY,
        accepted_args: int = 1,
    ) -> None:
        """
        Attach a callback to a hook.

        Args:
            hook_name:     Hook to attach to.
            callback:      Callable invoked when the hook fires.
            priority:      Lower values run first.
            accepted_args: How many of the hook's positional arguments the
                           callback receives.
        """
        if not isinstance(hook_name, str) or not hook_name:
            raise HookRegistrationError("Hook name must be a non-empty string")
        if not callable(callback):
            raise HookRegistrationError("Hook callback must be callable", hook_name=hook_name)
        if accepted_args < 0:
            raise HookRegistrationError("accepted_args must not be negative", hook_name=hook_name)

        entry = _HookCallback(
            priority=priority,
            sequence=next(self._sequence),
            callback=callback,
            accepted_args=accepted_args,
            owner=self._registering,
        )
        callbacks = self._callbacks[hook_name]
        callbacks.append(entry)
        callbacks.sort()
        logger.debug("Callback attached to %s (priority=%d)", hook_name, priority)

    # Actions and filters share storage; the difference is in how they fire.
    add_action = add_filter

    def remove_hook(self, hook_name: str, callback: Callable[..., Any]) -> bool:
        """Detach a callback. Returns True if it was attached."""
        callbacks = self._callbacks.get(hook_name, [])
        for entry in callbacks:
            if entry.callback == callback:
                callbacks.remove(entry)
                if not callbacks:
                    del self._callbacks[hook_name]
                return True
        return False

    def has_hook(self, hook_name: str) -> bool:
        """Return True if at least one callback is attached to the hook."""
        return bool(self._callbacks.get(hook_name))

    # ── Dispatch ──────────────────────────────────────────────────────────────

    def apply_filters(self, hook_name: str, value: Any, *args: Any) -> Any:
        """
        Pass a value through every callback attached to a filter hook.

        Each callback receives the current value followed by ``args`` and
        returns the value handed to the next callback.

        Returns:
            The value returned by the last callback, or ``value`` unchanged
            when nothing is attached.
        """
        token = current_hook_var.set(hook_name)
        try:
            for entry in list(self._callbacks.get(hook_name, [])):
                value = entry(value, *args)
        finally:
            current_hook_var.reset(token)
        return value

    def do_action(self, hook_name: str, *args: Any) -> None:
        """Call every callback attached to an action hook with ``args``."""
        callbacks = list(self._callbacks.get(hook_name, []))
        logger.debug("Firing %s (%d callbacks)", hook_name, len(callbacks))
        token = current_hook_var.set(hook_name)
        try:
            for entry in callbacks:
                entry(*args)
        finally:
            current_hook_var.reset(token)
