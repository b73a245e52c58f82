"""Action/rollback primitives for the undoable domain layer.

- ReversibleAction: forward/backward pair with an UNARMED/ARMED/COMMITTED
  state machine
- UnwindStack: explicit LIFO stack of actions awaiting rollback
- execute_chain / ActionChain: sequential execution with unwind on failure
- AsyncReversibleAction / execute_chain_async: the same for async callers
"""

from undoable.domain.primitives.action_chain import ActionChain, execute_chain
from undoable.domain.primitives.async_action import (
    AsyncReversibleAction,
    execute_chain_async,
)
from undoable.domain.primitives.reversible_action import (
    ActionState,
    ReversibleAction,
    commit_all,
)
from undoable.domain.primitives.unwind_stack import UnwindStack

__all__: list[str] = [
    "ActionChain",
    "ActionState",
    "AsyncReversibleAction",
    "ReversibleAction",
    "UnwindStack",
    "commit_all",
    "execute_chain",
    "execute_chain_async",
]
