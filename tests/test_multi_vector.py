import pytest

from jollycore.multi_vector import MULTI_VECTOR_DEFAULT_SIZE, MultiVector


def test_add_and_get():
    mv = MultiVector(2)
    mv.add(1, "one")
    mv.add(2, "two")
    assert len(mv) == 2
    assert mv.get(0, 1) == 2
    assert mv.get(1, 0) == "one"


def test_default_reserve_is_minimum():
    assert MultiVector(3, 4).reserve == MULTI_VECTOR_DEFAULT_SIZE
    assert MultiVector(3, 100).reserve == 100


def test_grows_when_full():
    mv = MultiVector(1)
    for i in range(MULTI_VECTOR_DEFAULT_SIZE + 1):
        mv.add(i)
    assert mv.reserve == 2 * MULTI_VECTOR_DEFAULT_SIZE
    assert [mv.get(0, i) for i in range(len(mv))] == list(range(MULTI_VECTOR_DEFAULT_SIZE + 1))


def test_remove_moves_last_row_into_place():
    mv = MultiVector(2)
    mv.add("a", 1)
    mv.add("b", 2)
    mv.add("c", 3)
    mv.remove(0)
    assert len(mv) == 2
    assert (mv.get(0, 0), mv.get(1, 0)) == ("c", 3)
    assert (mv.get(0, 1), mv.get(1, 1)) == ("b", 2)


def test_remove_last_row():
    mv = MultiVector(1)
    mv.add("x")
    mv.remove(0)
    assert len(mv) == 0
    with pytest.raises(IndexError):
        mv.get(0, 0)


def test_wrong_number_of_values():
    mv = MultiVector(2)
    with pytest.raises(TypeError):
        mv.add(1)


def test_out_of_range():
    mv = MultiVector(2)
    mv.add(1, 2)
    with pytest.raises(IndexError):
        mv.get(2, 0)
    with pytest.raises(IndexError):
        mv.get(0, 1)
    with pytest.raises(IndexError):
        mv.remove(5)


def test_resize_keeps_rows_and_refuses_to_drop_them():
    mv = MultiVector(1, 40)
    for i in range(5):
        mv.add(i)
    mv.resize(10)
    assert mv.reserve == 10
    assert [mv.get(0, i) for i in range(5)] == list(range(5))
    with pytest.raises(ValueError):
        mv.resize(3)


def test_needs_a_column():
    with pytest.raises(ValueError):
        MultiVector(0)