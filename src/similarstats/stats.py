'''
Descriptive statistics over finite numeric sequences.

Every input is copied into a list of floats at the boundary, so ints and floats
mix freely and the caller's sequence is never reordered. Degenerate inputs do not
raise: each function documents one numeric fallback (almost always 0) instead.
Pairwise functions take strict = True to raise LengthMismatchError rather than
fall back when the lengths differ.
'''
import math
import logging
from collections import Counter
from similarstats.errors import LengthMismatchError

logger = logging.getLogger(__name__)


def _floats(seq) -> list[float]:
    return [float(x) for x in seq]


def _paired(name: str, seq, other, strict: bool) -> tuple[list[float], list[float]] | None:
    # shared length gate for the pairwise statistics
    xs, ys = _floats(seq), _floats(other)
    if len(xs) != len(ys):
        if strict:
            raise LengthMismatchError(name, len(xs), len(ys))
        logger.debug('%s: length mismatch (%d != %d), returning 0', name, len(xs), len(ys))
        return None
    return xs, ys


# --- central tendency ---
def total(seq, /) -> float:
    '''
    Arithmetic sum as a float; 0.0 for an empty sequence.

    Sums past the float range come back as inf (or nan for inf - inf) instead of raising.
    '''
    xs = _floats(seq)
    try:
        return math.fsum(xs)
    except (OverflowError, ValueError):
        # fsum refuses intermediate overflow and inf - inf; plain addition saturates
        return sum(xs, 0.0)


def product(seq, /) -> float:
    xs = _floats(seq)
    if not xs:
        return 0.0
    return math.prod(xs)


def mean(seq, /) -> float:
    '''Arithmetic mean; 0.0 for an empty sequence.'''
    xs = _floats(seq)
    if not xs:
        return 0.0
    return total(xs) / len(xs)


def median(seq, /) -> float:
    '''
    Middle value of a sorted copy; the average of the two middle values when n is even.

    Returns 0.0 for an empty sequence.
    '''
    xs = sorted(_floats(seq))
    n = len(xs)
    if n == 0:
        return 0.0

    middle = n // 2
    if n % 2 == 0:
        return (xs[middle - 1] + xs[middle]) / 2.0
    return xs[middle]


def mode(seq, /) -> float | None:
    # most frequent value, first seen wins a tie; None when empty
    xs = _floats(seq)
    if not xs:
        return None
    return Counter(xs).most_common(1)[0][0]


def value_range(seq, /) -> float | None:
    xs = _floats(seq)
    if not xs:
        return None
    return max(xs) - min(xs)


# --- dispersion ---
def variance(seq, /) -> float:
    '''
    Population variance, sum((x - mean)^2) / n.

    Defined as 0.0 when n <= 1: a single sample carries no spread information.
    '''
    xs = _floats(seq)
    if len(xs) <= 1:
        return 0.0
    avg = mean(xs)
    return total((x - avg) * (x - avg) for x in xs) / len(xs)


def standard_deviation(seq, /) -> float:
    return math.sqrt(variance(seq))


# --- percentiles ---
def percentile(seq, p: float, /) -> float:
    '''
    Linear-interpolation percentile.

    Parameters:
    -----------
    seq : Iterable[float]
        observations, in any order
    p : float
        percentile in [0, 100]

    Returns:
    --------
    float
        sorted[lower] * (1 - frac) + sorted[upper] * frac with idx = p / 100 * (n - 1),
        or 0.0 when seq is empty or p is outside [0, 100]
    '''
    xs = sorted(_floats(seq))
    if not xs:
        return 0.0
    if not 0 <= p <= 100:
        logger.debug('percentile: p=%r outside [0, 100], returning 0', p)
        return 0.0

    n = len(xs)
    index = (p / 100.0) * (n - 1)
    lower = int(math.floor(index))
    upper = min(lower + 1, n - 1)
    fraction = index - lower

    return xs[lower] * (1 - fraction) + xs[upper] * fraction


def quartiles(seq, /) -> tuple[float, float, float]:
    xs = _floats(seq)
    return percentile(xs, 25), percentile(xs, 50), percentile(xs, 75)


def interquartile_range(seq, /) -> float:
    q1, _, q3 = quartiles(seq)
    return q3 - q1


def outlier_indices(seq, /, factor: float = 1.5) -> list[int]:
    '''
    Tukey-fence outliers.

    Parameters:
    -----------
    seq : Iterable[float]
        observations
    factor : float
        IQR multiplier for the fences (default: 1.5)

    Returns:
    --------
    list[int]
        ascending indices into the caller's original ordering of values lying below
        q1 - factor * IQR or above q3 + factor * IQR
    '''
    xs = _floats(seq)
    q1, _, q3 = quartiles(xs)
    iqr = q3 - q1
    lower_bound = q1 - factor * iqr
    upper_bound = q3 + factor * iqr

    return [i for i, x in enumerate(xs) if x < lower_bound or x > upper_bound]


def without_outliers(seq, /, factor: float = 1.5) -> list[float]:
    xs = _floats(seq)
    outliers = set(outlier_indices(xs, factor))
    return [x for i, x in enumerate(xs) if i not in outliers]


# --- relationships ---
def covariance(seq, other, /, *, strict: bool = False) -> float:
    '''
    Population covariance, sum((x - mean_x) * (y - mean_y)) / n.

    Returns 0.0 when n <= 1, or when the lengths differ (LengthMismatchError if strict).
    '''
    paired = _paired('covariance', seq, other, strict)
    if paired is None:
        return 0.0
    xs, ys = paired
    if len(xs) <= 1:
        return 0.0

    mean_x, mean_y = mean(xs), mean(ys)
    return total((x - mean_x) * (y - mean_y) for x, y in zip(xs, ys)) / len(xs)


def correlation(seq, other, /, *, strict: bool = False) -> float:
    '''
    Pearson correlation coefficient in [-1, 1].

    Parameters:
    -----------
    seq : Iterable[float]
        first sample
    other : Iterable[float]
        second sample, paired index by index with seq
    strict : bool
        raise LengthMismatchError on differing lengths instead of returning 0 (default: False)

    Returns:
    --------
    float
        the coefficient, or 0.0 when n <= 1, the lengths differ, or either sample is constant
    '''
    paired = _paired('correlation', seq, other, strict)
    if paired is None:
        return 0.0
    xs, ys = paired
    if len(xs) <= 1:
        return 0.0

    mean_x, mean_y = mean(xs), mean(ys)
    numerator = 0.0
    denominator_x = 0.0
    denominator_y = 0.0

    for x, y in zip(xs, ys):
        dx = x - mean_x
        dy = y - mean_y
        numerator += dx * dy
        denominator_x += dx * dx
        denominator_y += dy * dy

    denominator = math.sqrt(denominator_x * denominator_y)
    if denominator == 0:
        return 0.0

    # rounding can nudge a perfect correlation a hair past 1
    return max(-1.0, min(1.0, numerator / denominator))


# --- transforms ---
def cumulative_sum(seq, /) -> list[float]:
    result = []
    running = 0.0
    for x in _floats(seq):
        running += x
        result.append(running)
    return result


def moving_average(seq, window_size: int, /) -> list[float]:
    '''
    Means of every window_size-long run of consecutive values, sliding by one.

    Returns n - window_size + 1 values, or an empty list when window_size <= 0 or
    window_size > n.
    '''
    xs = _floats(seq)
    if window_size <= 0 or window_size > len(xs):
        return []
    return [total(xs[i - window_size:i]) / window_size for i in range(window_size, len(xs) + 1)]


def rescaled(seq, /) -> list[float]:
    # min-max scaling to [0, 1]; a flat sequence maps to 0.5 everywhere
    xs = _floats(seq)
    if not xs:
        return []
    lo, hi = min(xs), max(xs)
    if lo == hi:
        return [0.5] * len(xs)
    return [(x - lo) / (hi - lo) for x in xs]


def standardized(seq, /) -> list[float]:
    # z-scores; a flat sequence maps to 0.0 everywhere
    xs = _floats(seq)
    avg = mean(xs)
    std = standard_deviation(xs)
    if std == 0:
        return [0.0] * len(xs)
    return [(x - avg) / std for x in xs]


def describe(seq, /) -> dict[str, float | int]:
    '''
    One-shot summary used by the report and miner tooling.

    Returns:
    --------
    dict[str, float | int]
        count, sum, mean, median, std, min, q1, q3, max; min and max are 0.0 when empty
    '''
    xs = _floats(seq)
    q1, q2, q3 = quartiles(xs)
    return {
        'count': len(xs),
        'sum': total(xs),
        'mean': mean(xs),
        'median': q2,
        'std': standard_deviation(xs),
        'min': min(xs) if xs else 0.0,
        'q1': q1,
        'q3': q3,
        'max': max(xs) if xs else 0.0
    }


__all__ = [
    'total', 'product', 'mean', 'median', 'mode', 'value_range', 'variance', 'standard_deviation',
    'percentile', 'quartiles', 'interquartile_range', 'outlier_indices', 'without_outliers',
    'covariance', 'correlation', 'cumulative_sum', 'moving_average', 'rescaled', 'standardized',
    'describe'
]
