"""Unit tests for AsyncReversibleAction and execute_chain_async."""

import asyncio

import pytest

from undoable.domain.errors import ChainUnwindError
from undoable.domain.primitives import (
    ActionState,
    AsyncReversibleAction,
    execute_chain_async,
)


def make_action(
    name: str, calls: list[str], error: str | None = None
) -> AsyncReversibleAction:
    async def forward() -> str:
        if error is not None:
            calls.append(f"oops, {name} failed")
            raise RuntimeError(error)
        calls.append(f"execute {name}")
        return name

    async def backward() -> None:
        calls.append(f"rollback {name}")

    return AsyncReversibleAction(forward, backward, name=name)


@pytest.mark.asyncio
class TestAsyncReversibleAction:
    """Tests for the async action state machine."""

    async def test_execute_awaits_forward_and_returns_result(self) -> None:
        calls: list[str] = []
        action = make_action("a", calls)

        result = await action.execute()

        assert result == "a"
        assert action.state is ActionState.ARMED

    async def test_sync_callables_supported(self) -> None:
        """Plain (non-async) forward/backward callables also work."""
        calls: list[str] = []
        action = AsyncReversibleAction(
            lambda: calls.append("forward"),
            lambda: calls.append("backward"),
        )

        await action.execute()
        await action.undo()

        assert calls == ["forward", "backward"]

    async def test_undo_is_idempotent(self) -> None:
        calls: list[str] = []
        action = make_action("a", calls)
        await action.execute()

        await action.undo()
        await action.undo()

        assert calls == ["execute a", "rollback a"]

    async def test_undo_before_execute_is_noop(self) -> None:
        calls: list[str] = []
        action = make_action("a", calls)

        await action.undo()

        assert calls == []
        assert action.state is ActionState.UNARMED

    async def test_commit_defuses(self) -> None:
        calls: list[str] = []
        action = make_action("a", calls)
        await action.execute()

        action.commit()
        await action.undo()

        assert calls == ["execute a"]
        assert action.committed is True

    async def test_failed_execute_still_arms(self) -> None:
        calls: list[str] = []
        action = make_action("a", calls, error="bad")

        with pytest.raises(RuntimeError, match="bad"):
            await action.execute()

        assert action.is_armed is True


@pytest.mark.asyncio
class TestExecuteChainAsync:
    """Tests for execute_chain_async."""

    async def test_success_commits_all(self) -> None:
        calls: list[str] = []
        actions = [make_action(f"action{i}", calls) for i in range(1, 5)]

        await execute_chain_async(*actions)

        assert calls == [f"execute action{i}" for i in range(1, 5)]
        assert all(a.state is ActionState.COMMITTED for a in actions)

    async def test_failure_unwinds_in_reverse(self) -> None:
        calls: list[str] = []
        actions = [
            make_action("action1", calls),
            make_action("action2", calls),
            make_action("action3", calls, error="oops, action3 failed"),
            make_action("action4", calls),
        ]

        with pytest.raises(RuntimeError) as exc_info:
            await execute_chain_async(*actions)

        assert str(exc_info.value) == "oops, action3 failed"
        assert calls == [
            "execute action1",
            "execute action2",
            "oops, action3 failed",
            "rollback action2",
            "rollback action1",
        ]

    async def test_empty_chain(self) -> None:
        await execute_chain_async()

    async def test_compensation_failure_logged_and_original_raised(self) -> None:
        calls: list[str] = []

        async def broken() -> None:
            raise OSError("disk gone")

        first = make_action("action1", calls)
        second = AsyncReversibleAction(lambda: None, broken, name="action2")
        third = make_action("action3", calls, error="action3 failed")

        with pytest.raises(RuntimeError, match="action3 failed"):
            await execute_chain_async(first, second, third)

        assert calls[-1] == "rollback action1"

    async def test_strict_compensation(self) -> None:
        calls: list[str] = []

        async def broken() -> None:
            raise OSError("disk gone")

        first = AsyncReversibleAction(lambda: None, broken, name="first")
        second = make_action("second", calls, error="forward failed")

        with pytest.raises(ChainUnwindError) as exc_info:
            await execute_chain_async(first, second, strict_compensation=True)

        assert isinstance(exc_info.value.original_error, RuntimeError)
        assert exc_info.value.compensation_failures[0].action_name == "first"

    async def test_cancellation_unwinds_prior_actions(self) -> None:
        """Cancelling a running step undoes earlier steps, then propagates."""
        calls: list[str] = []
        started = asyncio.Event()

        async def hang() -> None:
            started.set()
            await asyncio.Event().wait()

        first = make_action("first", calls)
        second = AsyncReversibleAction(hang, lambda: calls.append("rollback second"))
        third = make_action("third", calls)

        task = asyncio.create_task(execute_chain_async(first, second, third))
        await started.wait()
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task

        assert calls == ["execute first", "rollback first"]
        assert first.state is ActionState.COMMITTED
        assert second.is_armed is True

    async def test_strict_mode_never_wraps_cancellation(self) -> None:
        """A broken compensation must not turn cancellation into an Exception."""
        started = asyncio.Event()

        async def hang() -> None:
            started.set()
            await asyncio.Event().wait()

        async def broken() -> None:
            raise OSError("disk gone")

        first = AsyncReversibleAction(lambda: None, broken, name="first")
        second = AsyncReversibleAction(hang, lambda: None, name="second")

        task = asyncio.create_task(
            execute_chain_async(first, second, strict_compensation=True)
        )
        await started.wait()
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
