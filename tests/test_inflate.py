import random

import pytest

from recel.inflate import (
    fliph,
    inflate,
    inflate_segment,
    interleave,
    segment_bound,
    transpose,
)


def test_segment_bound_runs_to_end():
    assert segment_bound([0, 0, 0], [5, 5, 5], 0, 3) == 3


def test_segment_bound_stops_at_crossing():
    assert segment_bound([0, 9], [5, 5], 0, 2) == 1


def test_segment_bound_always_advances():
    assert segment_bound([3, 3], [3, 3], 1, 2) == 2


def test_inflate_segment_free_on_both_sides():
    i1 = [10, 11, 12, 13]
    i2 = [20, 21, 22, 23]
    o1 = [0] * 4
    o2 = [0] * 4
    inflate_segment([1, 1, 1, 1], [2, 2, 2, 2], i1, i2, o1, o2, 0, 4, 4)
    assert o1 == [i1[0], i2[1], i2[2], i1[3]]
    assert o2 == i2


def test_inflate_segment_sticks_left():
    i1 = [10, 11, 12, 13, 14]
    i2 = [20, 21, 22, 23, 24]
    o1 = [None] * 5
    o2 = [None] * 5
    inflate_segment([5, 1, 1, 1, 1], [0, 2, 2, 2, 2], i1, i2, o1, o2, 1, 5, 5)
    assert o1 == [None, i2[1], i2[2], i1[3], i1[4]]
    assert o2 == [None] + i2[1:]


def test_inflate_segment_sticks_right():
    i1 = [10, 11, 12, 13, 14]
    i2 = [20, 21, 22, 23, 24]
    o1 = [None] * 5
    o2 = [None] * 5
    inflate_segment([1, 1, 1, 9, 9], [2, 2, 2, 0, 0], i1, i2, o1, o2, 0, 3, 5)
    assert o1[:3] == [i1[0], i1[1], i2[2]]
    assert o2[:3] == i2[:3]
    assert o1[3:] == [None, None]


def test_inflate_equal_distances_copies_neighbours():
    width, height = 3, 3
    image = list(range(100, 109))
    out = inflate([7] * 9, image, width, height)
    assert len(out) == width * 2 * (height - 1)
    for y in range(height - 1):
        assert out[2 * y * width:(2 * y + 1) * width] == image[y * width:(y + 1) * width]
        assert out[(2 * y + 1) * width:(2 * y + 2) * width] == image[(y + 1) * width:(y + 2) * width]


def test_inflate_single_row_gives_nothing():
    assert inflate([1, 2, 3], [4, 5, 6], 3, 1) == []


def test_inflate_zero_width():
    assert inflate([], [], 0, 4) == []


def test_inflate_only_uses_input_values():
    rng = random.Random(5)
    width, height = 6, 5
    dist = [rng.randint(1, 4) for _ in range(width * height)]
    image = [rng.randint(1000, 2000) for _ in range(width * height)]
    out = inflate(dist, image, width, height)
    assert len(out) == width * 2 * (height - 1)
    assert set(out) <= set(image)


def test_inflate_is_symmetric_in_row_order():
    rng = random.Random(11)
    width = 9
    for _ in range(20):
        dist = [rng.randint(1, 3) for _ in range(2 * width)]
        image = [rng.randint(0, 50) for _ in range(2 * width)]
        out = inflate(dist, image, width, 2)
        swapped = inflate(dist[width:] + dist[:width], image[width:] + image[:width], width, 2)
        assert swapped == out[width:] + out[:width]


def test_inflate_rejects_wrong_size():
    with pytest.raises(ValueError):
        inflate([1, 2, 3], [1, 2, 3, 4], 2, 2)


def test_fliph_mirrors_all_but_last_row():
    assert fliph([1, 2, 3, 4, 5, 6], 3, 2) == [3, 2, 1, 4, 5, 6]


def test_interleave_orders_rows():
    outer = ["a0", "a1", "b0", "b1", "c0", "c1"]
    inner = ["p", "p", "q", "q", "r", "r", "s", "s"]
    out = interleave(outer, inner, 2, 3)
    assert out == ["a0", "a1", "p", "p", "q", "q", "b0", "b1",
                   "r", "r", "s", "s", "c0", "c1"]


def test_interleave_rejects_wrong_inner_size():
    with pytest.raises(ValueError):
        interleave([1, 2, 3, 4], [1, 2], 2, 2)


def test_transpose_example():
    assert transpose([1, 2, 3, 4, 5, 6], 3, 2) == [1, 4, 2, 5, 3, 6]


def test_transpose_round_trip():
    image = list(range(20))
    assert transpose(transpose(image, 5, 4), 4, 5) == image