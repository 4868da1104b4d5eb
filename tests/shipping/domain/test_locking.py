"""Tests for per-cargo serialization of mutations."""

import gc
import threading
import time
from types import SimpleNamespace

from shipping.cargo.locking import _cargo_locks, cargo_lock, holding_cargo_lock, lock_for


def _free_elsewhere(tracking_id):
    """True if another thread could take the cargo's lock right now."""
    result = []

    def attempt():
        lock = lock_for(tracking_id)
        acquired = lock.acquire(blocking=False)
        if acquired:
            lock.release()
        result.append(acquired)

    thread = threading.Thread(target=attempt)
    thread.start()
    thread.join()
    return result[0]


class TestCargoLock:
    def test_same_cargo_same_lock(self):
        assert lock_for("ABC123") is lock_for("ABC123")

    def test_different_cargos_different_locks(self):
        assert lock_for("ABC123") is not lock_for("XYZ789")

    def test_lock_is_reentrant(self):
        with cargo_lock("ABC123"):
            with cargo_lock("ABC123"):
                pass

    def test_mutations_of_one_cargo_do_not_interleave(self):
        trace = []

        def mutate(name):
            with cargo_lock("SERIAL1"):
                trace.append(f"{name}-start")
                time.sleep(0.01)
                trace.append(f"{name}-end")

        threads = [threading.Thread(target=mutate, args=(f"t{i}",)) for i in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        for start, end in zip(trace[::2], trace[1::2]):
            assert start.split("-")[0] == end.split("-")[0]

    def test_different_cargos_do_not_block_each_other(self):
        acquired = threading.Event()

        def other():
            with cargo_lock("OTHER01"):
                acquired.set()

        with cargo_lock("BUSY001"):
            thread = threading.Thread(target=other)
            thread.start()
            assert acquired.wait(timeout=1)
            thread.join()

    def test_unused_locks_are_dropped(self):
        lock = lock_for("GONE001")
        assert "GONE001" in _cargo_locks
        del lock
        gc.collect()
        assert "GONE001" not in _cargo_locks

    def test_held_lock_is_shared_until_released(self):
        with cargo_lock("HELD001"):
            gc.collect()
            assert not _free_elsewhere("HELD001")
        assert _free_elsewhere("HELD001")


class TestHoldingCargoLock:
    def test_handler_body_runs_under_the_lock(self):
        seen = []

        class Handler:
            @holding_cargo_lock
            def on_command(self, command):
                seen.append(_free_elsewhere(command.tracking_id))
                return "done"

        assert Handler().on_command(SimpleNamespace(tracking_id="ABC123")) == "done"
        assert seen == [False]
        assert _free_elsewhere("ABC123")

    def test_handler_markers_are_kept(self):
        def on_command(self, command):
            pass

        on_command._target_cls = SimpleNamespace
        assert holding_cargo_lock(on_command)._target_cls is SimpleNamespace
