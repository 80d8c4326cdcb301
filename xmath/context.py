"""
Context system for xmath.

A Context is a named set of flags controlling how value objects compare
(tolerance, tolerance mode, zero level). Contexts live in a process-wide
registry; one of them is current at any time.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, PrivateAttr

logger = logging.getLogger(__name__)


class ContextFlags(BaseModel):
    """
    Manages context flags/options.

    Flags control comparison behavior of every MathValue.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)
    _flags: Dict[str, Any] = PrivateAttr(default_factory=dict)

    def __init__(self, **kwargs):
        super().__init__()
        self._flags = {
            # Comparison tolerances
            'tolerance': 0.001,
            'tolType': 'relative',
            'zeroLevel': 1e-14,
            'zeroLevelTol': 1e-12,
        }
        self._flags.update(kwargs)

    def set(self, **kwargs):
        """Set flag values."""
        self._flags.update(kwargs)

    def get(self, name: str, default: Any = None) -> Any:
        """Get flag value with optional default."""
        return self._flags.get(name, default)

    def copy(self):
        """Create a copy of this flags object."""
        new_flags = ContextFlags()
        new_flags._flags = self._flags.copy()
        return new_flags

    def __getitem__(self, name: str) -> Any:
        return self._flags[name]

    def __contains__(self, name: str) -> bool:
        return name in self._flags


class Context(BaseModel):
    """
    Named set of comparison flags.

    Built-in contexts:
    - Numeric: relative tolerance of 0.001
    - Strict: absolute tolerance of 1e-12
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)

    name: str = "Numeric"
    flags: ContextFlags | None = None

    def __init__(self, name: str = 'Numeric', **kwargs):
        """
        Create a new Context.

        Args:
            name: Context name (Numeric, Strict, or any custom name)
        """
        if 'flags' not in kwargs:
            kwargs['flags'] = ContextFlags()
        kwargs['name'] = name
        super().__init__(**kwargs)

        if name == 'Strict':
            self._init_strict()

    def _init_strict(self):
        """Initialize a context that only accepts near-exact equality."""
        self.flags.set(tolerance=1e-12, tolType='absolute')

    def copy(self, name: Optional[str] = None) -> Context:
        """Create an independent copy of this context, optionally renamed."""
        return Context(name or self.name, flags=self.flags.copy())

    def __repr__(self):
        return f"Context('{self.name}')"


# Global context registry (singleton pattern for named contexts)
_contexts: Dict[str, Context] = {}
_current_context: Optional[Context] = None


def get_context(name: Optional[str] = None) -> Context:
    """
    Get or set the current context.

    Args:
        name: Context name to switch to (None = get current)

    Returns:
        Current context

    Examples:
        >>> ctx = get_context('Strict')   # Switch to Strict context
        >>> ctx = get_context()           # Get current context
        >>> ctx.flags.set(tolerance=0.01)
    """
    global _current_context

    if name is None:
        if _current_context is None:
            _current_context = _create_context('Numeric')
        return _current_context

    if name not in _contexts:
        _contexts[name] = _create_context(name)

    if _current_context is not _contexts[name]:
        logger.debug("Switching current context to %s", name)
    _current_context = _contexts[name]
    return _current_context


def _create_context(name: str) -> Context:
    """Create a new context by name and add it to the registry."""
    ctx = Context(name)
    _contexts[name] = ctx
    return ctx


def set_context(ctx: Context) -> Context:
    """
    Register a Context instance under its name and make it current.

    Replaces any registered context of the same name.
    """
    global _current_context
    logger.debug("Registering context %s as current", ctx.name)
    _contexts[ctx.name] = ctx
    _current_context = ctx
    return ctx


def get_current_context() -> Context:
    """
    Get the current context.

    Returns:
        Current context (creates Numeric if none exists)
    """
    return get_context()


def reset_contexts() -> None:
    """Drop every registered context; the next lookup recreates Numeric."""
    global _current_context
    _contexts.clear()
    _current_context = None
