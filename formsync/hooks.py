# ==============================================
# HookRegistry
# ==============================================
#
# PURPOSE:
#   Explicit event subscriptions between the host form system
#   and formsync. The host owns one registry, components
#   subscribe to it, and the host dispatches through it.
#
#   - Actions: fire-and-forget callbacks, return values ignored
#   - Filters: each callback receives the previous callback's
#     return value as its first argument
#
#   Callbacks run by ascending priority, then in the order they
#   were added.
#
# USAGE:
# ------
#   hooks = HookRegistry()
#   mediator.register(hooks)
#   hooks.do_action("after_submission", entry, form)
#   value = hooks.apply_filters("field_value", "", field, "company")
#
# ==============================================

import logging
from collections import defaultdict
from typing import Any, Callable, Dict, List, Tuple

logger = logging.getLogger(__name__)

Callback = Callable[..., Any]


class HookRegistry:
    """Named actions and filters, each an ordered list of callbacks."""

    def __init__(self):
        self._actions: Dict[str, List[Tuple[int, int, Callback]]] = defaultdict(list)
        self._filters: Dict[str, List[Tuple[int, int, Callback]]] = defaultdict(list)
        self._counter = 0

    def _add(self, table, name: str, callback: Callback, priority: int) -> None:
        # Counter breaks priority ties in registration order
        self._counter += 1
        table[name].append((priority, self._counter, callback))
        table[name].sort(key=lambda item: (item[0], item[1]))
        logger.debug("Registered %s on %r (priority %d)", callback, name, priority)

    def add_action(self, name: str, callback: Callback, priority: int = 10) -> None:
        self._add(self._actions, name, callback, priority)

    def add_filter(self, name: str, callback: Callback, priority: int = 10) -> None:
        self._add(self._filters, name, callback, priority)

    def has_action(self, name: str) -> bool:
        return bool(self._actions.get(name))

    def has_filter(self, name: str) -> bool:
        return bool(self._filters.get(name))

    def do_action(self, name: str, *args: Any) -> None:
        for _, _, callback in list(self._actions.get(name, ())):
            callback(*args)

    def apply_filters(self, name: str, value: Any, *args: Any) -> Any:
        for _, _, callback in list(self._filters.get(name, ())):
            value = callback(value, *args)
        return value
