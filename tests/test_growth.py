from ustr.Growth import MIN_CAPACITY, nextCapacity


def test_first_allocation_uses_minimum():
    assert nextCapacity(0, 1) == MIN_CAPACITY == 8
    assert nextCapacity(0, 8) == 8


def test_doubles_until_required_fits():
    assert nextCapacity(8, 9) == 16
    assert nextCapacity(8, 33) == 64
    assert nextCapacity(0, 20) == 32


def test_never_shrinks():
    assert nextCapacity(64, 3) == 64
    assert nextCapacity(16, 16) == 16


def test_result_always_covers_required():
    for current in (0, 1, 3, 8, 100):
        for required in range(0, 300, 7):
            cap = nextCapacity(current, required)
            assert cap >= required
            assert cap >= current
