import pytest

from miniscript.reflist import RefList


def contents(lst):
    return list(lst)


def test_list_operations_sequence():
    lst = RefList()
    assert contents(lst) == []
    lst.add(0)
    assert contents(lst) == [0]
    lst.add(1)
    assert contents(lst) == [0, 1]

    list2 = lst
    assert contents(list2) == [0, 1]

    list2.insert(42, 0)
    assert contents(list2) == [42, 0, 1]
    list2.remove_at(0)
    list2.add(42)
    assert contents(list2) == [0, 1, 42]

    list2.reposition(2, 1)
    assert contents(list2) == [0, 42, 1]
    list2.reposition(0, 2)
    assert contents(list2) == [42, 1, 0]
    list2.reposition(2, 0)
    assert contents(list2) == [0, 42, 1]

    list2.remove_at(1)
    list2.insert(42, 0)
    list2.add(4)
    list2.reposition(1, 2)
    assert contents(list2) == [42, 1, 0, 4]
    assert list2.last() == 4
    assert list2.pop() == 4
    assert contents(list2) == [42, 1, 0]

    list2.resize_buffer(13)
    assert len(list2) == 3
    list2.resize(13)
    assert len(list2) == 13
    list2.resize_buffer(4)
    assert len(list2) == 4
    list2.pop()

    assert contents(list2) == [42, 1, 0]
    assert list2.item(0) == 42
    assert list2.item(6) == 42
    assert list2.item(1) == 1
    assert list2.item(-1) == 0
    assert list2.item(-2) == 1
    assert list2.item(-3) == 42
    assert list2.item(-4) == 0

    assert list2.index_of(42) == 0
    assert 42 in list2
    assert list2.index_of(0) == 2
    assert 0 in list2
    assert list2.index_of(17) == -1
    assert 17 not in list2


def test_reverse_and_remove_range():
    list3 = RefList([0, 1, 2, 3])
    list3.reverse()
    assert contents(list3) == [3, 2, 1, 0]
    list3.add(4)
    list3.reverse()
    assert contents(list3) == [4, 0, 1, 2, 3]
    list3.remove_range(1, 3)
    assert contents(list3) == [4, 3]


def test_shared_reference():
    a = RefList([1, 2])
    b = a
    b.add(3)
    assert contents(a) == [1, 2, 3]


def test_set_item_wraps():
    lst = RefList(["a", "b", "c"])
    lst.set_item(-1, "z")
    assert contents(lst) == ["a", "b", "z"]
    lst[0] = "y"
    assert lst[0] == "y"


def test_empty_errors():
    lst = RefList()
    with pytest.raises(IndexError):
        lst.pop()
    with pytest.raises(IndexError):
        lst.last()
    with pytest.raises(IndexError):
        lst.item(0)
    with pytest.raises(IndexError):
        lst.remove_at(0)
    with pytest.raises(IndexError):
        lst.insert(1, 5)


def test_resize_pads_and_clears():
    lst = RefList([1])
    lst.resize(3)
    assert contents(lst) == [1, None, None]
    lst.resize(0)
    assert len(lst) == 0
    lst.add(5)
    lst.resize_buffer(0)
    assert len(lst) == 0