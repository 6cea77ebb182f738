import pytest
from pydantic import ValidationError

from collectkit.core.collection import Collection
from collectkit.core.variants import StringCollection


def ascending(a, b):
    return (a > b) - (a < b)


@pytest.fixture
def tens():
    return Collection([10, 20, 30, 40])


class TestUsort:
    def test_sorts_in_place_and_renumbers(self):
        c = Collection([3, 1, 2])
        c.set("x", 0)
        assert c.usort(ascending) is c
        assert c.get_items() == {0: 0, 1: 1, 2: 2, 3: 3}

    def test_descending(self):
        c = Collection([3, 1, 2])
        c.usort(lambda a, b: b - a)
        assert c.values() == [3, 2, 1]

    def test_resorting_is_a_no_op(self):
        c = Collection([5, 2, 9, 1])
        c.usort(ascending)
        first_pass = c.values()
        c.usort(ascending)
        assert c.values() == first_pass

    def test_sort_is_stable(self):
        c = Collection([(1, "b"), (0, "a"), (1, "a"), (0, "b")])
        c.usort(lambda a, b: a[0] - b[0])
        assert c.values() == [(0, "a"), (0, "b"), (1, "b"), (1, "a")]

    def test_add_after_usort(self):
        c = Collection([2, 1])
        c.remove(0)
        c.add(3)
        c.usort(ascending)
        c.add(4)
        assert c.get_items() == {0: 1, 1: 3, 2: 4}


class TestKsort:
    def test_sorts_by_key(self):
        c = Collection()
        c.set(5, "e")
        c.set("b", "x")
        c.set(1, "a")
        c.set("a", "y")

        assert c.ksort() is c
        assert c.keys() == [1, 5, "a", "b"]
        assert c.values() == ["a", "e", "y", "x"]

    def test_keeps_key_item_pairs(self):
        c = Collection([1, 2, 3])
        c.unshift(0)
        c.set(-1, "neg")
        c.ksort()
        assert c.get_items() == {-1: "neg", 0: 0, 1: 1, 2: 2, 3: 3}


class TestLimit:
    def test_window(self, tens):
        assert tens.limit(2, 1).values() == [20, 30]

    def test_default_offset(self, tens):
        assert tens.limit(3).values() == [10, 20, 30]

    @pytest.mark.parametrize(
        "count, offset", [(0, 0), (1, 0), (2, 2), (10, 1), (2, 10), (4, 3)]
    )
    def test_matches_list_slice(self, tens, count, offset):
        expected = tens.values()[offset : offset + count]
        assert tens.limit(count, offset).values() == expected

    def test_window_is_by_position_not_key(self):
        c = Collection()
        c.set(9, "a")
        c.set(3, "b")
        c.set("k", "c")
        assert c.limit(2, 1).values() == ["b", "c"]

    def test_returns_clean_clone_without_mutating(self):
        c = StringCollection(["a", "b", "c"])
        window = c.limit(1, 1)
        assert type(window) is StringCollection
        assert window.validator is c.validator
        assert window.get_items() == {0: "b"}
        assert c.values() == ["a", "b", "c"]

    @pytest.mark.parametrize("count, offset", [(-1, 0), (1, -1), ("2", 0), (True, 0), (1.0, 0)])
    def test_rejects_invalid_arguments(self, tens, count, offset):
        with pytest.raises(ValidationError):
            tens.limit(count, offset)


def test_string_sort():
    c = StringCollection(["b", "a", "c"])
    assert c.sort() is c
    assert list(c) == ["a", "b", "c"]
    assert c.keys() == [0, 1, 2]
