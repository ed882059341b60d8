import math
import pytest
from similarstats.errors import LengthMismatchError
from similarstats.stats import (
    total, product, mean, median, mode, value_range, variance, standard_deviation,
    percentile, quartiles, interquartile_range, outlier_indices, without_outliers,
    covariance, correlation, cumulative_sum, moving_average, rescaled, standardized, describe
)

TENS = [10, 20, 30, 40, 50, 60, 70, 80, 90, 100]


# --- central tendency ---
def test_sum_and_mean():
    assert total([1, 2, 3, 4, 5]) == 15
    assert mean([1, 2, 3, 4, 5]) == 3.0
    assert isinstance(mean([1, 2, 3]), float)


def test_empty_sequences_fall_back_to_zero():
    assert total([]) == 0.0
    assert mean([]) == 0.0
    assert median([]) == 0.0
    assert variance([]) == 0.0
    assert standard_deviation([]) == 0.0
    assert product([]) == 0.0


def test_median_parity():
    assert median([1, 3, 5, 7, 9]) == 5.0
    assert median([1, 2, 3, 4]) == 2.5
    assert median([9, 1, 5]) == 5.0


def test_median_does_not_mutate_input():
    data = [3, 1, 2]
    median(data)
    percentile(data, 50)
    outlier_indices(data)

    assert data == [3, 1, 2]


def test_accepts_any_iterable():
    assert mean(x for x in [1, 2, 3]) == 2.0
    assert median((4.0, 1, 2.5)) == 2.5


def test_product_mode_range():
    assert product([1, 2, 3, 4]) == 24.0
    assert mode([1, 2, 2, 3, 3]) == 2.0
    assert mode([]) is None
    assert value_range([3, 9, 1]) == 8.0
    assert value_range([]) is None


# --- dispersion ---
def test_population_variance():
    data = [2, 4, 4, 4, 5, 5, 7, 9]

    assert variance(data) == pytest.approx(4.0)
    assert standard_deviation(data) == pytest.approx(2.0)


def test_single_sample_variance_is_zero():
    assert variance([42]) == 0.0
    assert standard_deviation([-3.5]) == 0.0


# --- percentiles ---
def test_percentile_interpolates():
    assert percentile(TENS, 50) == pytest.approx(55.0)
    assert percentile(TENS, 25) == pytest.approx(32.5)
    assert percentile(TENS, 75) == pytest.approx(77.5)


def test_percentile_bounds():
    assert percentile([7, 3, 9], 0) == 3.0
    assert percentile([7, 3, 9], 100) == 9.0
    assert percentile([5], 37) == 5.0


@pytest.mark.parametrize('p', [-0.1, 100.5, float('nan')])
def test_percentile_out_of_range_is_zero(p):
    assert percentile(TENS, p) == 0.0


def test_percentile_of_empty_is_zero():
    assert percentile([], 50) == 0.0


def test_quartiles_and_iqr():
    assert quartiles(TENS) == pytest.approx((32.5, 55.0, 77.5))
    assert interquartile_range(TENS) == pytest.approx(45.0)


def test_outliers_refer_to_original_order():
    assert outlier_indices([10, 12, 11, 13, 12, 100, 11]) == [5]
    assert outlier_indices([1, 10, 12, 11, 13, 12, 100, 11]) == [0, 6]


def test_outlier_factor():
    data = [10, 12, 11, 13, 12, 100, 11]

    assert outlier_indices(data, 100) == []
    assert outlier_indices([]) == []


def test_without_outliers():
    assert without_outliers([10, 12, 11, 13, 12, 100, 11]) == [10, 12, 11, 13, 12, 11]


# --- relationships ---
def test_correlation():
    assert correlation([1, 2, 3], [2, 4, 6]) == pytest.approx(1.0)
    assert correlation([1, 2, 3], [3, 2, 1]) == pytest.approx(-1.0)
    assert correlation([1, 2, 3, 4], [1, 3, 2, 4]) == pytest.approx(0.8)


def test_correlation_fallbacks():
    assert correlation([1, 2, 3], [1, 2]) == 0.0
    assert correlation([1], [1]) == 0.0
    assert correlation([1, 1, 1], [1, 2, 3]) == 0.0


def test_covariance():
    assert covariance([1, 2, 3], [1, 2, 3]) == pytest.approx(2 / 3)
    assert covariance([1, 2, 3], [3, 2, 1]) == pytest.approx(-2 / 3)
    assert covariance([1, 2], [1]) == 0.0
    assert covariance([5], [5]) == 0.0


@pytest.mark.parametrize('fn', [correlation, covariance])
def test_strict_mode_raises_on_mismatch(fn):
    with pytest.raises(LengthMismatchError) as info:
        fn([1, 2, 3], [1, 2], strict = True)

    assert info.value.left == 3
    assert info.value.right == 2
    assert isinstance(info.value, ValueError)


def test_strict_mode_keeps_degenerate_fallbacks():
    assert correlation([1], [1], strict = True) == 0.0


# --- transforms ---
def test_cumulative_sum():
    assert cumulative_sum([1, 2, 3, 4]) == [1, 3, 6, 10]
    assert cumulative_sum([]) == []


def test_moving_average():
    assert moving_average([1, 2, 3, 4, 5], 3) == [2.0, 3.0, 4.0]
    assert moving_average([1, 2, 3], 3) == [2.0]
    assert moving_average([1, 2, 3], 1) == [1.0, 2.0, 3.0]


@pytest.mark.parametrize('window', [0, -1, 4])
def test_moving_average_invalid_window(window):
    assert moving_average([1, 2, 3], window) == []


def test_rescaled():
    assert rescaled([0, 5, 10]) == [0.0, 0.5, 1.0]
    assert rescaled([3, 3]) == [0.5, 0.5]
    assert rescaled([]) == []


def test_standardized():
    assert standardized([1, 3]) == [-1.0, 1.0]
    assert standardized([4, 4]) == [0.0, 0.0]


def test_describe():
    summary = describe(TENS)

    assert summary['count'] == 10
    assert summary['sum'] == 550.0
    assert summary['mean'] == 55.0
    assert summary['median'] == pytest.approx(55.0)
    assert summary['min'] == 10.0
    assert summary['max'] == 100.0
    assert summary['q1'] == pytest.approx(32.5)
    assert summary['q3'] == pytest.approx(77.5)


def test_describe_empty():
    summary = describe([])

    assert summary['count'] == 0
    assert all(v == 0 for v in summary.values())


# --- float range ---
def test_sums_past_float_max_saturate():
    assert total([1e308, 1e308]) == math.inf
    assert total([-1e308, -1e308]) == -math.inf
    assert mean([1e308, 1e308]) == math.inf
    assert moving_average([1e308, 1e308], 2) == [math.inf]


def test_huge_spread_saturates_variance():
    assert variance([1e200, -1e200]) == math.inf
    assert standard_deviation([1e200, -1e200]) == math.inf


def test_describe_survives_overflow():
    summary = describe([1e308, 1e308])

    assert summary['count'] == 2
    assert summary['sum'] == math.inf
    assert summary['max'] == 1e308
