import pytest

from jollycore.option import Error, Option, Result, clamp


def test_clamp_bounds():
    assert clamp(5, 0, 10) == 5
    assert clamp(-3, 0, 10) == 0
    assert clamp(15, 0, 10) == 10


def test_clamp_result_in_range():
    for x in range(-20, 20):
        assert 0 <= clamp(x, 0, 7) <= 7


def test_option_with_value():
    opt = Option(4)
    assert bool(opt)
    assert opt.get() == 4
    assert opt.get_or(9) == 4


def test_option_holding_falsy_value_is_some():
    opt = Option(0)
    assert opt.some
    assert opt.get() == 0


def test_empty_option():
    opt = Option()
    assert not opt
    assert opt.get_or(9) == 9
    with pytest.raises(ValueError):
        opt.get()


def test_option_chaining():
    assert Option(2).some_then(lambda o: Option(o.get() * 3)) == Option(6)
    assert Option().some_then(lambda o: Option(1)) == Option()
    assert Option().none_then(lambda o: Option(7)) == Option(7)
    assert Option(2).none_then(lambda o: Option(7)) == Option(2)


def test_error_message():
    assert Error("bad input").message() == "bad input"
    assert Error().message() == "error"


def test_result_ok():
    res = Result("hello")
    assert bool(res)
    assert res.get() == "hello"
    assert res.get_or("other") == "hello"


def test_result_error_raises_its_error():
    err = Error("broken")
    res = Result(error=err)
    assert not res
    assert res.get_or("other") == "other"
    with pytest.raises(Error, match="broken"):
        res.get()


def test_result_non_exception_error():
    res = Result(error=3)
    with pytest.raises(ValueError):
        res.get()


def test_result_chaining():
    ok = Result(2).some_then(lambda r: Result(r.get() + 1))
    assert ok.get() == 3
    failed = Result(error=Error("x"))
    recovered = failed.none_then(lambda r: Result(0))
    assert recovered.get() == 0
    assert failed.some_then(lambda r: Result(5)) is failed