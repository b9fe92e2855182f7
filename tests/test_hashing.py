import pytest

from jollycore.hashing import FNV_OFFSET_BASIS, fnv1a, hash_value


def test_empty_input_is_offset_basis():
    assert fnv1a(b"") == 0x811C9DC5
    assert fnv1a(b"") == FNV_OFFSET_BASIS


def test_known_vectors():
    assert fnv1a(b"a") == 0xE40C292C
    assert fnv1a(b"foobar") == 0xBF9CF968


def test_bytes_like_inputs_agree():
    data = b"hello world!"
    assert fnv1a(bytearray(data)) == fnv1a(data)
    assert fnv1a(memoryview(data)) == fnv1a(data)


def test_result_fits_in_32_bits():
    for n in range(200):
        assert 0 <= fnv1a(bytes([n % 256]) * n) <= 0xFFFFFFFF


def test_string_hashes_its_characters():
    assert hash_value("quick") == fnv1a(b"quick")
    assert hash_value("") == FNV_OFFSET_BASIS


def test_small_int_hashes_four_bytes():
    assert hash_value(5) == fnv1a(b"\x05\x00\x00\x00")
    assert hash_value(-1) == fnv1a(b"\xff\xff\xff\xff")


def test_equal_keys_hash_equal():
    assert hash_value("".join(["a", "b"])) == fnv1a(b"ab")
    first = hash_value(("a", 1))
    assert 0 <= first <= 0xFFFFFFFF
    assert hash_value(("a", 1)) == first
    half = hash_value(2.5)
    assert 0 <= half <= 0xFFFFFFFF
    assert hash_value(2.5) == half


def test_distinct_keys_mostly_distinct():
    hashes = {hash_value(i) for i in range(1000)}
    assert len(hashes) == 1000


def test_unsupported_type_raises():
    with pytest.raises(TypeError):
        hash_value([1, 2, 3])