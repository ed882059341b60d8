import struct
import hashlib
from typing import Callable


def content_digest(seq, /) -> str:
    # sha256 over the sequence packed as little-endian doubles
    xs = [float(x) for x in seq]
    return hashlib.sha256(struct.pack(f'<{len(xs)}d', *xs)).hexdigest()


class StatsCache:
    '''
    A caller-owned memo for repeated statistics over the same data.

    Results are keyed by (operation name, content digest, extra args), so two
    sequences holding the same values share an entry whatever their container type.
    Nothing is shared between instances; create one where the repeated work happens
    and drop it when done.
    '''

    def __init__(self) -> None:
        self._store = {}
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._store)

    def get_or_compute(self, fn: Callable, seq, /, *args):
        '''
        Returns fn(seq, *args), computing it only on the first request.

        Parameters:
        -----------
        fn : Callable
            a pure statistic such as similarstats.stats.percentile
        seq : Iterable[float]
            the data; it is materialized once for hashing and for fn
        args : tuple
            extra positional arguments, which must be hashable

        Returns:
        --------
        Any
            the cached or freshly computed result
        '''
        xs = [float(x) for x in seq]
        key = (f'{fn.__module__}.{fn.__qualname__}', content_digest(xs), args)

        if key in self._store:
            self.hits += 1
            return self._store[key]

        self.misses += 1
        result = fn(xs, *args)
        self._store[key] = result
        return result

    def clear(self) -> None:
        self._store.clear()
        self.hits = 0
        self.misses = 0


__all__ = ['content_digest', 'StatsCache']
