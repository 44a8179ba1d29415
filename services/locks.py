"""
Per-user locks

Serializes meal plan persistence for one user inside this process. The
database row lock taken in services.meal_plans covers multiple processes
on backends that support SELECT ... FOR UPDATE.
"""

import threading
import weakref
from contextlib import contextmanager

_registry_lock = threading.Lock()
# Entries disappear once no thread holds or waits on the lock
_user_locks = weakref.WeakValueDictionary()


def _lock_for(user_id):
    with _registry_lock:
        lock = _user_locks.get(user_id)
        if lock is None:
            lock = _user_locks[user_id] = threading.Lock()
        return lock


@contextmanager
def user_lock(user_id):
    """Hold the lock for user_id for the duration of the block."""
    lock = _lock_for(user_id)
    with lock:
        yield
