import pytest

from corunner.generator import EMPTY_GENERATOR_MESSAGE, EmptyGeneratorError, Generator


def counting(limit, log=None):
    for index in range(limit):
        if log is not None:
            log.append(index)
        yield index


def failing_at_start(log):
    log.append("started")
    raise KeyError("boom")
    yield 1


def failing_late():
    yield "a"
    yield "b"
    raise ValueError("late")


def with_cleanup(cleaned):
    try:
        yield from range(100)
    finally:
        cleaned.append(True)


def test_yields_all_values_in_order():
    gen = Generator(counting(10))
    assert list(gen) == list(range(10))


def test_body_does_not_run_before_iteration():
    log = []
    gen = Generator(counting(5, log))
    assert log == []
    iterator = iter(gen)
    assert log == [0]
    assert next(iterator) == 0
    assert log == [0]
    next(iterator)
    assert log == [0, 1]


def test_empty_generator_raises():
    gen = Generator()
    assert not gen
    with pytest.raises(EmptyGeneratorError) as info:
        iter(gen)
    assert str(info.value) == EMPTY_GENERATOR_MESSAGE


def test_exception_before_first_value_raises_from_iter():
    log = []
    gen = Generator(failing_at_start(log))
    assert bool(gen) is True
    assert log == []
    with pytest.raises(KeyError, match="boom") as info:
        iter(gen)
    assert info.value.args == ("boom",)
    assert log == ["started"]


def test_exception_after_values_raises_during_iteration():
    seen = []
    with pytest.raises(ValueError) as info:
        for item in Generator(failing_late()):
            seen.append(item)
    assert info.value.args == ("late",)
    assert seen == ["a", "b"]


def test_no_values_gives_empty_iteration():
    gen = Generator(counting(0))
    assert bool(gen) is True
    assert list(gen) == []


def test_close_runs_cleanup_and_empties():
    cleaned = []
    gen = Generator(with_cleanup(cleaned))
    iterator = iter(gen)
    assert next(iterator) == 0
    gen.close()
    assert cleaned == [True]
    assert not gen
    with pytest.raises(EmptyGeneratorError):
        iter(gen)


def test_context_manager_closes():
    with Generator(counting(3)) as gen:
        assert list(gen) == [0, 1, 2]
    assert not gen


def test_plain_iterable_is_accepted():
    words = ["x", "y", "z"]
    assert list(Generator(words)) == words