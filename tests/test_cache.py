import pytest
from similarstats.cache import StatsCache, content_digest
from similarstats.stats import median, percentile


def test_digest_depends_on_values_and_order():
    assert content_digest([1, 2, 3]) == content_digest((1.0, 2.0, 3.0))
    assert content_digest([1, 2, 3]) != content_digest([3, 2, 1])
    assert len(content_digest([])) == 64


def test_repeated_requests_hit_the_cache():
    cache = StatsCache()
    data = [5, 1, 4, 2, 3]

    assert cache.get_or_compute(percentile, data, 50) == 3.0
    assert cache.get_or_compute(percentile, list(data), 50) == 3.0

    assert cache.misses == 1
    assert cache.hits == 1
    assert len(cache) == 1


def test_arguments_and_functions_are_part_of_the_key():
    cache = StatsCache()
    data = [1, 2, 3, 4]

    cache.get_or_compute(percentile, data, 25)
    cache.get_or_compute(percentile, data, 75)
    cache.get_or_compute(median, data)

    assert cache.misses == 3
    assert cache.hits == 0


def test_caches_are_independent_and_clearable():
    first, second = StatsCache(), StatsCache()
    first.get_or_compute(median, [1, 2, 3])

    assert len(second) == 0

    first.clear()
    assert len(first) == 0
    assert first.hits == first.misses == 0


def test_generators_are_materialized_once():
    cache = StatsCache()

    assert cache.get_or_compute(median, (x for x in [3, 1, 2])) == pytest.approx(2.0)
