#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/sitemark/hooks.py
"""Extension hooks applied before every render.

Hosts and plugins customize rendering by registering callbacks that receive
the freshly built objects of a render call and may mutate or replace them:

- ``renderer``: the ``NodeRenderer`` (swap or wrap node handlers)
- ``block_tokenizer``: the mistune ``BlockParser``
- ``inline_tokenizer``: the mistune ``InlineParser``
- ``extensions``: the list of mistune plugins applied to the parser

Because every render builds new objects, hooks run on every call.

Examples
--------
Override the handler for horizontal rules:

    >>> from sitemark.hooks import HookManager
    >>> manager = HookManager()
    >>>
    >>> def fancy_rules(renderer, context):
    ...     renderer.set_handler("thematic_break", lambda r: '<hr class="fancy">\\n')
    >>>
    >>> manager.register_hook("renderer", fancy_rules)

Add a mistune plugin:

    >>> manager.register_hook("extensions", lambda plugins, context: plugins.append("footnotes"))

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Literal, Optional

from sitemark.exceptions import HookError, ValidationError

if TYPE_CHECKING:
    from sitemark.options import RenderOptions
    from sitemark.site import SiteContext

logger = logging.getLogger(__name__)

HookTarget = Literal[
    "renderer",
    "block_tokenizer",
    "inline_tokenizer",
    "extensions",
]

HOOK_TARGETS: tuple[str, ...] = ("renderer", "block_tokenizer", "inline_tokenizer", "extensions")

# (target, context) -> replacement or None to keep the (possibly mutated) target
HookCallable = Callable[[Any, "HookContext"], Any]


@dataclass
class HookContext:
    """Context passed to hook functions.

    Parameters
    ----------
    options : RenderOptions
        The merged options of the current render
    site : SiteContext
        The site configuration
    document_path : str, optional
        Path of the document being rendered
    shared : dict, default = empty dict
        Scratch space shared by the hooks of one render

    """

    options: RenderOptions
    site: SiteContext
    document_path: Optional[str] = None
    shared: dict[str, Any] = field(default_factory=dict)

    def get_shared(self, key: str, default: Any = None) -> Any:
        """Get a value from shared state, or ``default`` if missing."""
        return self.shared.get(key, default)

    def set_shared(self, key: str, value: Any) -> None:
        """Set a value in shared state."""
        self.shared[key] = value


class HookManager:
    """Registry and dispatcher for render hooks.

    Parameters
    ----------
    strict : bool, default = False
        If True, a failing hook aborts the render with ``HookError``.
        If False (default), the failure is logged and the remaining hooks run.

    Notes
    -----
    Hooks for one target run in priority order (lower first); hooks with
    equal priority run in registration order, so a later hook that replaces
    the same node handler wins.

    Registration is not thread-safe. Register hooks before renders start;
    dispatching only reads the registry.

    """

    def __init__(self, strict: bool = False) -> None:
        """Initialize the hook manager."""
        self._hooks: dict[str, list[tuple[int, HookCallable]]] = {}
        self.strict = strict

    def register_hook(self, target: HookTarget, hook: HookCallable, priority: int = 100) -> None:
        """Register a hook for a target.

        Parameters
        ----------
        target : HookTarget
            One of ``renderer``, ``block_tokenizer``, ``inline_tokenizer``, ``extensions``
        hook : callable
            Hook function with signature ``(target_object, context)``
        priority : int, default = 100
            Execution priority (lower runs first)

        Raises
        ------
        ValidationError
            If ``target`` is not a known hook target

        """
        if target not in HOOK_TARGETS:
            raise ValidationError(
                f"Unknown hook target '{target}'. Expected one of: {', '.join(HOOK_TARGETS)}",
                parameter_name="target",
                parameter_value=target,
            )

        self._hooks.setdefault(target, []).append((priority, hook))
        logger.debug("Registered hook for '%s' with priority %d", target, priority)

    def unregister_hook(self, target: HookTarget, hook: HookCallable) -> bool:
        """Unregister a hook; returns True if it was registered."""
        if target not in self._hooks:
            return False

        initial_len = len(self._hooks[target])
        self._hooks[target] = [(p, h) for p, h in self._hooks[target] if h != hook]

        removed = len(self._hooks[target]) < initial_len
        if removed:
            logger.debug("Unregistered hook from '%s'", target)
        return removed

    def dispatch(self, target: HookTarget, obj: Any, context: HookContext) -> Any:
        """Run every hook registered for ``target``.

        Each hook receives the current object. A hook that returns a value
        other than None replaces the object for the hooks after it.

        Parameters
        ----------
        target : HookTarget
            Hook target being dispatched
        obj : Any
            The object handed to the hooks
        context : HookContext
            Context of the current render

        Returns
        -------
        Any
            The object after all hooks ran

        Raises
        ------
        HookError
            If a hook fails and the manager is strict

        """
        result = obj
        # sorted() is stable, so equal priorities keep registration order
        for priority, hook in sorted(self._hooks.get(target, []), key=lambda item: item[0]):
            try:
                replacement = hook(result, context)
            except Exception as e:
                logger.error(f"Hook failed at '{target}' with priority {priority}: {e}", exc_info=True)
                if self.strict:
                    raise HookError(f"Hook failed at '{target}': {e}", target=target, original_error=e) from e
                continue

            if replacement is not None:
                result = replacement

        return result

    def has_hooks(self, target: HookTarget) -> bool:
        """Check if any hooks are registered for a target."""
        return bool(self._hooks.get(target))

    def list_hooks(self) -> dict[str, list[tuple[int, HookCallable]]]:
        """Return a shallow copy of the registered hooks by target."""
        return {target: list(hooks) for target, hooks in self._hooks.items()}

    def clear(self) -> None:
        """Clear all registered hooks."""
        self._hooks.clear()
        logger.debug("Cleared all hooks")


__all__ = [
    "HOOK_TARGETS",
    "HookCallable",
    "HookContext",
    "HookManager",
    "HookTarget",
]
