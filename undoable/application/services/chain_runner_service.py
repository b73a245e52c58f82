"""Chain runner service.

Runs sync and async action chains with the compensation-failure policy
taken from ChainConfig, so callers configure the policy once instead of
passing it to every execute_chain() call.

Usage:
    from undoable.application.services.chain_runner_service import (
        ChainRunnerService,
    )

    runner = ChainRunnerService()  # Config from environment
    runner.run(create_bucket, create_user, grant_access)
    await runner.run_async(provision, attach, mount)
"""

from __future__ import annotations

import structlog

from undoable.config.chain_config import ChainConfig
from undoable.domain.primitives.action_chain import ActionChain, execute_chain
from undoable.domain.primitives.async_action import (
    AsyncReversibleAction,
    execute_chain_async,
)
from undoable.domain.primitives.reversible_action import ReversibleAction

log = structlog.get_logger()


class ChainRunnerService:
    """Service for running action chains under a shared configuration.

    Attributes:
        _config: Chain configuration.
    """

    def __init__(self, config: ChainConfig | None = None) -> None:
        """Initialize the chain runner.

        Args:
            config: Chain configuration. Read from the environment if not
                provided.
        """
        self._config = config or ChainConfig.from_environment()
        self._log = log.bind(
            service="ChainRunnerService",
            strict_compensation=self._config.strict_compensation,
        )

    @property
    def config(self) -> ChainConfig:
        return self._config

    def build(self, *actions: ReversibleAction) -> ActionChain:
        """Build a re-runnable chain carrying this runner's policy."""
        return ActionChain(
            actions=actions,
            strict_compensation=self._config.strict_compensation,
        )

    def run(self, *actions: ReversibleAction) -> None:
        """Execute a sync chain. See execute_chain()."""
        self._log.debug("chain_run_requested", action_count=len(actions))
        execute_chain(
            *actions,
            strict_compensation=self._config.strict_compensation,
        )

    async def run_async(self, *actions: AsyncReversibleAction) -> None:
        """Execute an async chain. See execute_chain_async()."""
        self._log.debug("chain_run_requested", action_count=len(actions))
        await execute_chain_async(
            *actions,
            strict_compensation=self._config.strict_compensation,
        )
