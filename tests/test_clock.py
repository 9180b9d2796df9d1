from app.core.clock import MonotonicMillisClock, wall_millis


def test_readings_strictly_increase_when_source_stalls():
    clock = MonotonicMillisClock(source=lambda: 1_000)
    assert [clock() for _ in range(3)] == [1_000, 1_001, 1_002]


def test_source_stepping_backwards_is_ignored():
    readings = iter([5_000, 4_000, 6_000])
    clock = MonotonicMillisClock(source=lambda: next(readings))
    assert [clock.now() for _ in range(3)] == [5_000, 5_001, 6_000]


def test_default_source_is_epoch_millis():
    before = wall_millis()
    value = MonotonicMillisClock()()
    assert before <= value <= wall_millis() + 1
