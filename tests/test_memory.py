import pytest

from jollycore.memory import BLOCK_32, BLOCK_64, Buffer, align_size256


def test_align_size256_rounds_up_to_block():
    assert align_size256(1) == BLOCK_32
    assert align_size256(BLOCK_32) == BLOCK_32
    assert align_size256(BLOCK_32 + 1) == BLOCK_64
    assert align_size256(0) == 0


def test_align_size256_is_multiple_and_not_smaller():
    for n in range(1, 300):
        aligned = align_size256(n)
        assert aligned % BLOCK_32 == 0
        assert n <= aligned < n + BLOCK_32


def test_align_size256_negative_raises():
    with pytest.raises(ValueError):
        align_size256(-1)


def test_write_then_contents():
    buf = Buffer(16)
    assert buf.write(b"hello") == b""
    assert buf.contents() == b"hello"
    assert len(buf) == 5
    assert buf.remaining() == 11


def test_write_returns_leftover_when_full():
    buf = Buffer(4)
    leftover = buf.write(b"abcdef")
    assert leftover == b"ef"
    assert buf.contents() == b"abcd"
    assert buf.remaining() == 0


def test_write_single_byte():
    buf = Buffer(1)
    assert buf.write(ord("x")) == b""
    assert buf.write(ord("y")) == b"y"
    assert buf.contents() == b"x"


def test_write_repeat_limited_by_space():
    buf = Buffer(5)
    assert buf.write_repeat(ord("0"), 3) == 3
    assert buf.write_repeat(ord("1"), 10) == 2
    assert buf.contents() == b"00011"


def test_read_removes_from_front():
    buf = Buffer(8)
    buf.write(b"abcdef")
    assert buf.read(2) == b"ab"
    assert buf.contents() == b"cdef"
    assert buf.read(100) == b"cdef"
    assert len(buf) == 0
    assert buf[0] == 0


def test_write_read_round_trip():
    buf = Buffer(64)
    payload = bytes(range(40))
    buf.write(payload)
    assert buf.read(len(payload)) == payload


def test_flush_clears():
    buf = Buffer(8)
    buf.write(b"data")
    buf.flush()
    assert len(buf) == 0
    assert buf.contents() == b""
    assert all(buf[i] == 0 for i in range(8))


def test_item_access_and_bounds():
    buf = Buffer(4)
    buf[2] = 7
    assert buf[2] == 7
    with pytest.raises(IndexError):
        buf[4]
    with pytest.raises(IndexError):
        buf[-1] = 1