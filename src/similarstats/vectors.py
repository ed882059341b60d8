import math
import logging
from similarstats.errors import LengthMismatchError
from similarstats.stats import total

logger = logging.getLogger(__name__)


def _same_length(name: str, xs: list[float], ys: list[float], strict: bool) -> bool:
    if len(xs) == len(ys):
        return True
    if strict:
        raise LengthMismatchError(name, len(xs), len(ys))
    logger.debug('%s: length mismatch (%d != %d), using fallback', name, len(xs), len(ys))
    return False


def dot_product(seq, other, /, *, strict: bool = False) -> float:
    '''
    Sum of element-wise products.

    Parameters:
    -----------
    seq : Iterable[float]
        left vector
    other : Iterable[float]
        right vector
    strict : bool
        raise LengthMismatchError on differing lengths instead of returning 0 (default: False)

    Returns:
    --------
    float
        the dot product, 0.0 on a length mismatch
    '''
    xs = [float(x) for x in seq]
    ys = [float(y) for y in other]
    if not _same_length('dot_product', xs, ys, strict):
        return 0.0
    return total(x * y for x, y in zip(xs, ys))


def magnitude(seq, /) -> float:
    xs = [float(x) for x in seq]
    return math.sqrt(dot_product(xs, xs))


def normalize(seq, /) -> list[float]:
    '''
    Unit vector pointing the same way as seq.

    A zero vector has no direction and is returned unchanged (as a new list).
    '''
    xs = [float(x) for x in seq]
    mag = magnitude(xs)
    if mag == 0:
        return xs
    return [x / mag for x in xs]


def adding(seq, other, /, *, strict: bool = False) -> list[float]:
    # element-wise sum; the left operand comes back unchanged on a length mismatch
    xs = [float(x) for x in seq]
    ys = [float(y) for y in other]
    if not _same_length('adding', xs, ys, strict):
        return xs
    return [x + y for x, y in zip(xs, ys)]


def subtracting(seq, other, /, *, strict: bool = False) -> list[float]:
    xs = [float(x) for x in seq]
    ys = [float(y) for y in other]
    if not _same_length('subtracting', xs, ys, strict):
        return xs
    return [x - y for x, y in zip(xs, ys)]


def scaled(seq, scalar: float, /) -> list[float]:
    return [float(x) * scalar for x in seq]


__all__ = ['dot_product', 'magnitude', 'normalize', 'adding', 'subtracting', 'scaled']
