import pytest

from recel.colorcounter import ColorCounter


def fill(counter, values):
    for value in values:
        counter.incr(value)


def test_distinct_count():
    counter = ColorCounter()
    fill(counter, [5, 5, 7, 9, 7, 5])
    assert counter.distinct_count() == 3
    assert len(counter) == 3


def test_rank_before_ranking_is_first_seen_order():
    counter = ColorCounter()
    fill(counter, [30, 10, 20, 10, 10])
    assert [counter.get_rank(v) for v in (30, 10, 20)] == [0, 1, 2]


def test_rank_orders_by_decreasing_frequency():
    counter = ColorCounter()
    fill(counter, [1, 2, 2, 3, 3, 3])
    counter.rank()
    assert counter.get_rank(3) == 0
    assert counter.get_rank(2) == 1
    assert counter.get_rank(1) == 2


def test_rank_ties_keep_first_seen_order():
    counter = ColorCounter()
    fill(counter, [4, 8, 8, 4, 6])
    counter.rank()
    assert [counter.get_rank(v) for v in (4, 8, 6)] == [0, 1, 2]


def test_unknown_value_has_rank_minus_one():
    counter = ColorCounter()
    fill(counter, [1, 2])
    assert counter.get_rank(99) == -1
    counter.rank()
    assert counter.get_rank(99) == -1
    assert counter.distinct_count() == 2


def test_start_resets():
    counter = ColorCounter()
    fill(counter, [1, 2, 3])
    counter.start()
    assert counter.distinct_count() == 0
    assert counter.get_rank(1) == -1
    counter.incr(3)
    assert counter.get_rank(3) == 0


def test_counts_continue_after_rank():
    counter = ColorCounter()
    fill(counter, [1, 2, 2])
    counter.rank()
    fill(counter, [1, 1])
    assert counter.count(1) == 3
    assert counter.count(2) == 2
    counter.rank()
    assert counter.get_rank(1) == 0


@pytest.mark.parametrize("values", [[0], [0xFFFFFFFF, 0, 0xFFFFFFFF], list(range(100))])
def test_ranks_are_a_permutation(values):
    counter = ColorCounter()
    fill(counter, values)
    counter.rank()
    ranks = sorted(counter.get_rank(v) for v in set(values))
    assert ranks == list(range(len(set(values))))