import logging

import pytest
from hypothesis import given
from hypothesis.strategies import builds, booleans, text, integers

from fallible.errors import NoneValueError, UnwrapError
from fallible.result import Failure, Result, Success, catching, unit


results = builds(lambda b, t, i: Success(i) if b else Failure(t),
                 booleans(), text(min_size=1), integers())


@given(results)
def test_result(r):
    assert isinstance(r, Result)
    assert (r and r.is_success()) or (not r and r.is_error())


@given(integers())
def test_fold_success(i):
    assert Success(i).fold(lambda s: ("s", s), lambda f: ("f", f)) == ("s", i)


@given(text())
def test_fold_failure(t):
    assert Failure(t).fold(lambda s: ("s", s), lambda f: ("f", f)) == ("f", t)


@given(results)
def test_swap_involution(r):
    assert r.swap().swap() == r
    assert r.swap().is_success() == r.is_error()


@given(results)
def test_callbacks_pass_through(r):
    seen = []
    assert r.on_success(seen.append) is r
    assert r.on_failure(seen.append) is r
    assert seen == [r.value]


def test_variants_differ():
    assert Success(1) != Failure(1)
    assert Success(1) == Success(1)
    assert hash(Failure("x")) == hash(Failure("x"))


def test_map():
    assert Success(2).map(lambda x: x + 1) == Success(3)
    assert Failure("bad").map(lambda x: x + 1) == Failure("bad")
    assert Failure("bad").map_error(len) == Failure(3)
    assert Success(2).map_error(len) == Success(2)


def test_flat_map():
    half = lambda x: Success(x // 2) if x % 2 == 0 else Failure(f"{x} is odd")
    assert Success(4).flat_map(half) == Success(2)
    assert Success(3).flat_map(half) == Failure("3 is odd")
    assert Failure("e").flat_map(half) == Failure("e")
    assert Failure("e").flat_map_error(lambda e: Success(len(e))) == Success(1)
    assert Success(1).flat_map_error(lambda e: Success(len(e))) == Success(1)


def test_recover():
    def explode(_):
        raise AssertionError("should not be called")

    assert Success(1).recover(explode) == Success(1)
    assert Failure("x").recover(lambda e: Success(len(e))) == Success(1)
    assert Failure("x").recover(lambda e: Failure([e])) == Failure(["x"])


def test_pure():
    assert Success(1).pure("a") == Success("a")
    assert Failure(1).pure("a") == Failure(1)
    assert Failure(1).pure_error("a") == Failure("a")
    assert Success(1).pure_error("a") == Success(1)


def test_getters():
    assert Success(5).get_or_none() == 5
    assert Failure("e").get_or_none() is None
    assert Success(5).exception_or_none() is None
    assert Failure("e").exception_or_none() == "e"
    assert Success(5).get_or_else(lambda _: 0) == 5
    assert Failure("e").get_or_else(lambda _: 0) == 0
    assert Success(5).get_or_default(0) == 5
    assert Failure("e").get_or_default(0) == 0


def test_pattern_matching():
    match Failure("e"):
        case Success(_):
            assert False
        case Failure(e):
            assert e == "e"


def test_no_none():
    with pytest.raises(NoneValueError):
        Success(None)
    with pytest.raises(NoneValueError):
        Failure(None)
    with pytest.raises(ValueError):
        Success(1).map(lambda _: None)
    assert Success(unit) == Success(unit)
    assert repr(unit) == "unit"


def test_get_or_raise(caplog):
    assert Success(5).get_or_raise() == 5

    with pytest.raises(KeyError):
        Failure(KeyError("k")).get_or_raise()

    with caplog.at_level(logging.DEBUG, logger="fallible"):
        with pytest.raises(UnwrapError) as info:
            Failure("nope").get_or_raise()
    assert info.value.error == "nope"
    assert "'nope'" in str(info.value)
    assert "`'nope'`" in caplog.text


def test_catching():
    @catching(ZeroDivisionError)
    def divide(a, b):
        return a / b

    assert divide(6, 3) == Success(2)
    r = divide(1, 0)
    assert not r and isinstance(r.value, ZeroDivisionError)

    @catching(KeyError)
    def lookup(d, k):
        return d[k]

    with pytest.raises(TypeError):
        lookup(None, "k")

    @catching()
    def nothing():
        pass

    assert nothing() == Success(unit)
    assert nothing.__name__ == "nothing"
