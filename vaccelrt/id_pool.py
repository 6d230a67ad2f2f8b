"""A bounded pool of reusable integer identifiers."""

from __future__ import annotations

import threading

from .errors import ErrorCode, VaccelError


class IdPool:
    """Hands out identifiers 1..nr_ids and takes released ones back.

    ``get`` returns 0 when the pool is exhausted; 0 is never a valid id.
    """

    def __init__(self, nr_ids):
        if nr_ids < 1:
            raise VaccelError(ErrorCode.EINVAL, "id pool needs at least one id")
        self.max = nr_ids
        self._ids = [0] * nr_ids
        self._next = 0
        self._lock = threading.Lock()

    def get(self):
        """Return a free id, or 0 if none is left."""
        with self._lock:
            ptr = self._next
            if ptr >= self.max:
                return 0
            self._next += 1
            if not self._ids[ptr]:
                self._ids[ptr] = ptr + 1
            return self._ids[ptr]

    def release(self, ident):
        """Give an id back to the pool; invalid ids are ignored."""
        if not ident or ident > self.max:
            return
        with self._lock:
            if self._next == 0:
                return
            self._next -= 1
            self._ids[self._next] = ident

    def __len__(self):
        """Number of ids still available."""
        with self._lock:
            return self.max - self._next