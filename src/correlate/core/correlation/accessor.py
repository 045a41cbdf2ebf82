"""
Ambient access to the current correlation context.

The current context lives in a module-level ContextVar, so it follows the
logical flow of execution: it survives ``await`` and is copied into every
asyncio task (and every ``contextvars.copy_context().run`` call) at the moment
the branch is forked. Sibling branches therefore never see each other's
changes.

The ContextVar does not hold the context directly but a ``_ContextHolder``
linked to the holder it shadows:

- setting a context pushes a new holder whose parent is the previous one,
  visible only to the current branch and branches forked from it later;
- setting None pops back to the parent holder and clears the popped holder in
  place, so branches that captured that exact holder also stop seeing the
  context once its owning scope ended.
"""

from contextvars import ContextVar
from typing import Optional

from .context import CorrelationContext


class _ContextHolder:
    __slots__ = ("context", "parent")

    def __init__(self, context: Optional[CorrelationContext], parent: Optional["_ContextHolder"]):
        self.context = context
        self.parent = parent


_current_holder: ContextVar[Optional[_ContextHolder]] = ContextVar(
    "correlate_context_holder", default=None
)


class CorrelationContextAccessor:
    """
    Provides get/set access to the ambient CorrelationContext.

    All instances share the same process-wide slot; instances exist so the
    accessor can be passed around (and substituted in tests) like any other
    collaborator.
    """

    @property
    def correlation_context(self) -> Optional[CorrelationContext]:
        holder = _current_holder.get()
        return holder.context if holder is not None else None

    @correlation_context.setter
    def correlation_context(self, value: Optional[CorrelationContext]) -> None:
        holder = _current_holder.get()

        if value is None:
            if holder is None:
                return

            # Restore the shadowed holder (if any) and clear the popped one.
            if holder.parent is not None:
                _current_holder.set(holder.parent)
            holder.context = None
            holder.parent = None
            return

        _current_holder.set(_ContextHolder(value, holder))

    @property
    def correlation_id(self) -> Optional[str]:
        """Shortcut for the id of the current context."""
        context = self.correlation_context
        return context.correlation_id if context is not None else None
