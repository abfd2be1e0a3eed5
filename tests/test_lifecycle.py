"""Tests for exit hook registration and the system-backed hook registry."""

from __future__ import annotations

import asyncio
import signal
import sys

import pytest

from pi.prompts.lifecycle import (
    CODE_CANCEL,
    CODE_ERROR,
    EXIT_EVENTS,
    SystemProcessHooks,
    register_exit_hooks,
)
from pi.prompts.timer import PeriodicTask

from .fake_hooks import FakeProcessHooks


# ---------------------------------------------------------------------------
# register_exit_hooks
# ---------------------------------------------------------------------------


class TestRegisterExitHooks:
    def test_registers_one_handler_per_event(self) -> None:
        hooks = FakeProcessHooks()
        register_exit_hooks(lambda code: None, hooks)
        assert all(len(hooks.handlers[event]) == 1 for event in EXIT_EVENTS)

    @pytest.mark.parametrize(
        "event, code",
        [
            ("uncaught_exception", CODE_ERROR),
            ("unhandled_exception", CODE_ERROR),
            ("sigint", CODE_CANCEL),
            ("sigterm", CODE_CANCEL),
            ("exit", CODE_CANCEL),
        ],
    )
    def test_event_reports_code(self, event: str, code: int) -> None:
        hooks = FakeProcessHooks()
        codes: list[int] = []
        register_exit_hooks(codes.append, hooks)
        hooks.fire(event)  # type: ignore[arg-type]
        assert codes == [code]

    def test_deregister_removes_everything(self) -> None:
        hooks = FakeProcessHooks()
        deregister = register_exit_hooks(lambda code: None, hooks)
        deregister()
        assert hooks.registered == 0

    def test_deregister_is_idempotent(self) -> None:
        hooks = FakeProcessHooks()
        deregister = register_exit_hooks(lambda code: None, hooks)
        deregister()
        deregister()
        assert hooks.registered == 0

    def test_independent_registrations(self) -> None:
        hooks = FakeProcessHooks()
        first: list[int] = []
        second: list[int] = []
        deregister_first = register_exit_hooks(first.append, hooks)
        register_exit_hooks(second.append, hooks)
        deregister_first()
        hooks.fire("sigint")
        assert first == []
        assert second == [CODE_CANCEL]


# ---------------------------------------------------------------------------
# SystemProcessHooks
# ---------------------------------------------------------------------------


class TestSystemProcessHooks:
    """Real hook points chain to whatever was installed before."""

    def test_excepthook_chains_and_restores(self) -> None:
        original = sys.excepthook
        seen: list[type[BaseException]] = []
        fired: list[str] = []

        def previous(exc_type, exc, tb) -> None:
            seen.append(exc_type)

        sys.excepthook = previous
        try:
            hooks = SystemProcessHooks()
            handler = lambda: fired.append("uncaught")  # noqa: E731
            hooks.add("uncaught_exception", handler)
            assert sys.excepthook is not previous

            sys.excepthook(ValueError, ValueError("boom"), None)
            assert fired == ["uncaught"]
            assert seen == [ValueError]

            hooks.remove("uncaught_exception", handler)
            assert sys.excepthook is previous
        finally:
            sys.excepthook = original

    def test_dispatcher_installed_once(self) -> None:
        original = sys.excepthook
        try:
            hooks = SystemProcessHooks()
            first = lambda: None  # noqa: E731
            second = lambda: None  # noqa: E731
            hooks.add("uncaught_exception", first)
            installed = sys.excepthook
            hooks.add("uncaught_exception", second)
            assert sys.excepthook == installed

            hooks.remove("uncaught_exception", first)
            assert sys.excepthook == installed
            hooks.remove("uncaught_exception", second)
            assert sys.excepthook is original
        finally:
            sys.excepthook = original

    def test_remove_unknown_handler_is_noop(self) -> None:
        hooks = SystemProcessHooks()
        hooks.remove("exit", lambda: None)

    def test_exit_dispatch(self) -> None:
        hooks = SystemProcessHooks()
        fired: list[str] = []
        handler = lambda: fired.append("exit")  # noqa: E731
        hooks.add("exit", handler)
        try:
            hooks._on_exit()
            assert fired == ["exit"]
        finally:
            hooks.remove("exit", handler)

    def test_signal_chains_to_previous_handler(self) -> None:
        received: list[int] = []
        fired: list[str] = []

        def previous(signum, frame) -> None:
            received.append(signum)

        original = signal.signal(signal.SIGTERM, previous)
        try:
            hooks = SystemProcessHooks()
            handler = lambda: fired.append("sigterm")  # noqa: E731
            hooks.add("sigterm", handler)
            assert signal.getsignal(signal.SIGTERM) != previous

            hooks._on_signal(signal.SIGTERM, None)
            assert fired == ["sigterm"]
            assert received == [signal.SIGTERM]

            hooks.remove("sigterm", handler)
            assert signal.getsignal(signal.SIGTERM) is previous
        finally:
            signal.signal(signal.SIGTERM, original)

    @pytest.mark.asyncio
    async def test_loop_exception_handler_chains_and_restores(self) -> None:
        loop = asyncio.get_running_loop()
        contexts: list[dict] = []
        fired: list[str] = []

        def previous(loop, context) -> None:
            contexts.append(context)

        loop.set_exception_handler(previous)
        try:
            hooks = SystemProcessHooks()
            handler = lambda: fired.append("unhandled")  # noqa: E731
            hooks.add("unhandled_exception", handler)
            assert loop.get_exception_handler() is not previous

            loop.call_exception_handler({"message": "boom"})
            assert fired == ["unhandled"]
            assert contexts == [{"message": "boom"}]

            hooks.remove("unhandled_exception", handler)
            assert loop.get_exception_handler() is previous
        finally:
            loop.set_exception_handler(None)

    def test_unhandled_exception_without_loop_is_skipped(self) -> None:
        hooks = SystemProcessHooks()
        handler = lambda: None  # noqa: E731
        hooks.add("unhandled_exception", handler)
        hooks.remove("unhandled_exception", handler)


def _broken_handler() -> None:
    raise BrokenPipeError("stdout closed")


class TestFailingExitHandlers:
    """A handler that raises never stops the previous disposition."""

    def test_excepthook_still_chains(self) -> None:
        original = sys.excepthook
        seen: list[type[BaseException]] = []
        fired: list[str] = []

        def previous(exc_type, exc, tb) -> None:
            seen.append(exc_type)

        sys.excepthook = previous
        try:
            hooks = SystemProcessHooks()
            later = lambda: fired.append("later")  # noqa: E731
            hooks.add("uncaught_exception", _broken_handler)
            hooks.add("uncaught_exception", later)

            sys.excepthook(ValueError, ValueError("boom"), None)
            assert seen == [ValueError]
            assert fired == ["later"]

            hooks.remove("uncaught_exception", _broken_handler)
            hooks.remove("uncaught_exception", later)
        finally:
            sys.excepthook = original

    def test_signal_still_chains(self) -> None:
        received: list[int] = []

        def previous(signum, frame) -> None:
            received.append(signum)

        original = signal.signal(signal.SIGTERM, previous)
        try:
            hooks = SystemProcessHooks()
            hooks.add("sigterm", _broken_handler)
            hooks._on_signal(signal.SIGTERM, None)
            assert received == [signal.SIGTERM]
            hooks.remove("sigterm", _broken_handler)
        finally:
            signal.signal(signal.SIGTERM, original)

    @pytest.mark.asyncio
    async def test_loop_handler_still_chains(self) -> None:
        loop = asyncio.get_running_loop()
        contexts: list[dict] = []
        loop.set_exception_handler(lambda loop, context: contexts.append(context))
        try:
            hooks = SystemProcessHooks()
            hooks.add("unhandled_exception", _broken_handler)
            loop.call_exception_handler({"message": "boom"})
            assert contexts == [{"message": "boom"}]
            hooks.remove("unhandled_exception", _broken_handler)
        finally:
            loop.set_exception_handler(None)

    def test_spinner_cleanup_failure_does_not_stop_exit_dispatch(self) -> None:
        hooks = SystemProcessHooks()
        fired: list[str] = []
        later = lambda: fired.append("exit")  # noqa: E731
        hooks.add("exit", _broken_handler)
        hooks.add("exit", later)
        try:
            hooks._on_exit()
            assert fired == ["exit"]
        finally:
            hooks.remove("exit", _broken_handler)
            hooks.remove("exit", later)


class TestForeignSignalHandler:
    def test_handler_not_installed_from_python_restores_default(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        calls: list[tuple[int, object]] = []

        def fake_signal(signum, handler):
            calls.append((signum, handler))
            # a handler installed outside Python is reported as None
            return None

        monkeypatch.setattr(signal, "signal", fake_signal)
        hooks = SystemProcessHooks()
        handler = lambda: None  # noqa: E731
        hooks.add("sigint", handler)
        hooks.remove("sigint", handler)
        assert calls[-1] == (signal.SIGINT, signal.SIG_DFL)


# ---------------------------------------------------------------------------
# PeriodicTask
# ---------------------------------------------------------------------------


class TestPeriodicTask:
    @pytest.mark.asyncio
    async def test_fires_until_cancelled(self) -> None:
        ticks: list[int] = []
        task = PeriodicTask(0.005, lambda: ticks.append(1))
        task.start()
        await asyncio.sleep(0.05)
        task.cancel()
        count = len(ticks)
        assert count > 0
        await asyncio.sleep(0.03)
        assert len(ticks) == count

    def test_cancel_is_idempotent(self) -> None:
        task = PeriodicTask(0.01, lambda: None)
        task.cancel()
        task.cancel()
        assert task.cancelled

    def test_without_loop_never_fires(self) -> None:
        ticks: list[int] = []
        task = PeriodicTask(0.001, lambda: ticks.append(1))
        task.start()
        task.cancel()
        assert ticks == []
