"""Application services for undoable."""

from undoable.application.services.chain_runner_service import ChainRunnerService

__all__: list[str] = ["ChainRunnerService"]
