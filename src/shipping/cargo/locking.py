"""Per-cargo serialization of mutations.

Every mutation of a cargo reads its full history and route state and writes
back a freshly derived delivery. Two such mutations of the *same* cargo must
not interleave; mutations of different cargos run in parallel.
"""

import functools
import threading
import weakref
from contextlib import contextmanager

_registry_lock = threading.Lock()

# Entries vanish once no caller holds the lock any more
_cargo_locks: weakref.WeakValueDictionary = weakref.WeakValueDictionary()


def lock_for(tracking_id: str):
    """Return the lock guarding one cargo, creating it on first use.

    Callers that hold the returned lock share it; a lock nobody holds is
    dropped from the registry and recreated on the next request.
    """
    key = str(tracking_id)
    with _registry_lock:
        lock = _cargo_locks.get(key)
        if lock is None:
            lock = threading.RLock()
            _cargo_locks[key] = lock
        return lock


@contextmanager
def cargo_lock(tracking_id: str):
    """Hold the exclusive section for ``tracking_id``.

    Re-entrant, so a command holding the lock may trigger handlers (running
    synchronously on the same thread) that take it again.
    """
    lock = lock_for(tracking_id)
    with lock:
        yield


def holding_cargo_lock(handler):
    """Run a command handler method under the lock of ``command.tracking_id``.

    Stack it above ``@handle`` so the lock spans the handler's unit of work,
    commit included.
    """

    @functools.wraps(handler)
    def wrapper(self, command):
        with cargo_lock(command.tracking_id):
            return handler(self, command)

    return wrapper
