import pytest

from kitutil.mockfail import MockFail


def test_unarmed_never_fails():
    mf = MockFail()
    assert [mf.should_fail("alloc") for _ in range(5)] == [False] * 5


def test_start_fails_every_time():
    mf = MockFail()
    mf.start("alloc")
    assert mf.should_fail("alloc") is True
    assert mf.should_fail("alloc") is True


def test_other_tag_is_not_affected_and_does_not_consume():
    mf = MockFail()
    mf.start("alloc")
    mf.set_freq(2)
    assert mf.should_fail("other") is False
    assert mf.should_fail("other") is False
    assert mf.should_fail("alloc") is False
    assert mf.should_fail("alloc") is True


def test_set_freq_fails_every_nth():
    mf = MockFail()
    mf.start("alloc")
    mf.set_freq(3)
    results = [mf.should_fail("alloc") for _ in range(6)]
    assert results == [False, False, True, False, False, True]


def test_set_skip_lets_checks_pass_first():
    mf = MockFail()
    mf.start("alloc")
    mf.set_skip(2)
    assert [mf.should_fail("alloc") for _ in range(4)] == [False, False, True, True]


def test_end_disarms():
    mf = MockFail()
    mf.start("alloc")
    mf.end()
    assert mf.should_fail("alloc") is False


def test_fail_returns_failure_without_computing():
    mf = MockFail()
    calls = []

    def compute():
        calls.append(1)
        return "real"

    mf.start("op")
    assert mf.fail("op", "failed", compute) == "failed"
    assert calls == []
    mf.end()
    assert mf.fail("op", "failed", compute) == "real"
    assert calls == [1]


def test_function_objects_work_as_tags():
    def op():
        return None

    mf = MockFail()
    mf.start(op)
    assert mf.should_fail(op) is True
    assert mf.should_fail(test_function_objects_work_as_tags) is False


@pytest.mark.parametrize("n", [0, -1])
def test_bad_frequency(n):
    mf = MockFail()
    with pytest.raises(ValueError):
        mf.set_freq(n)


def test_bad_skip():
    mf = MockFail()
    with pytest.raises(ValueError):
        mf.set_skip(-1)