"""
undoable - reversible actions and compensating chains.

A ReversibleAction pairs a forward operation with a compensating backward
operation. execute_chain() runs several actions in order; if one fails,
every action that already succeeded is undone in reverse order and the
failure is re-raised. If all succeed, all are committed.
"""

from undoable.application.services.chain_runner_service import ChainRunnerService
from undoable.config.chain_config import ChainConfig
from undoable.domain.errors.compensation import (
    ChainUnwindError,
    CompensationFailedError,
)
from undoable.domain.exceptions import UndoableError
from undoable.domain.primitives import (
    ActionChain,
    ActionState,
    AsyncReversibleAction,
    ReversibleAction,
    UnwindStack,
    commit_all,
    execute_chain,
    execute_chain_async,
)

__version__ = "0.1.0"
__all__ = [
    "__version__",
    "ActionChain",
    "ActionState",
    "AsyncReversibleAction",
    "ChainConfig",
    "ChainRunnerService",
    "ChainUnwindError",
    "CompensationFailedError",
    "ReversibleAction",
    "UndoableError",
    "UnwindStack",
    "commit_all",
    "execute_chain",
    "execute_chain_async",
]
