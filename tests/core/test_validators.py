from typing import Annotated, List

import annotated_types as at
import pytest

from collectkit.core.collection import Collection
from collectkit.core.exceptions import InvalidItem
from collectkit.core.validators import (
    AnyItemValidator,
    ContainerValidator,
    ObjectValidator,
    PredicateValidator,
    StringValidator,
    TypeAdapterValidator,
)


class Widget:
    pass


def test_any_item_validator_accepts_everything():
    validator = AnyItemValidator()
    for item in [None, 1, "a", [1], Widget()]:
        assert validator.accepts(item)


def test_accepts_wraps_validate():
    validator = StringValidator()
    assert validator.accepts("a")
    assert not validator.accepts(None)


def test_invalid_item_carries_item_and_reason():
    with pytest.raises(InvalidItem) as exc_info:
        ContainerValidator().validate("abc")
    assert exc_info.value.item == "abc"
    assert "container" in exc_info.value.reason


def test_validators_are_immutable():
    validator = ObjectValidator(Widget)
    with pytest.raises(AttributeError):
        validator.item_type = str
    with pytest.raises(AttributeError):
        StringValidator().anything = 1
    assert validator.item_type is Widget


class MaxLength(StringValidator):
    __slots__ = ("limit",)

    def __init__(self, limit):
        self.limit = limit

    def validate(self, item):
        super().validate(item)
        if len(item) > self.limit:
            self._reject(item, f"longer than {self.limit}")


def test_custom_validator_assigns_attributes_once():
    validator = MaxLength(3)
    assert validator.limit == 3

    c = Collection(["ab"], validator=validator)
    with pytest.raises(InvalidItem, match="longer than 3"):
        c.add("abcd")

    with pytest.raises(AttributeError, match="already set"):
        validator.limit = 10
    assert validator.limit == 3


def test_custom_validator_without_slots():
    class Positive(AnyItemValidator):
        def __init__(self):
            self.description = "positive"

        def validate(self, item):
            if item <= 0:
                self._reject(item, self.description)

    validator = Positive()
    assert Collection([1, 2], validator=validator).count() == 2
    with pytest.raises(AttributeError):
        validator.description = "negative"


def test_object_validator_requires_a_class():
    with pytest.raises(TypeError, match="item_type must be a class"):
        ObjectValidator("Widget")


def test_object_validator_equality():
    assert ObjectValidator(Widget) == ObjectValidator(Widget)
    assert ObjectValidator(Widget) != ObjectValidator()
    assert hash(ObjectValidator(Widget)) == hash(ObjectValidator(Widget))


class TestTypeAdapterValidator:
    def test_constrained_int(self):
        positive = TypeAdapterValidator(Annotated[int, at.Gt(0)])
        assert positive.accepts(3)
        assert not positive.accepts(0)
        assert not positive.accepts("3")
        assert not positive.accepts(True)

    def test_plain_class(self):
        validator = TypeAdapterValidator(Widget)
        assert validator.accepts(Widget())
        assert not validator.accepts(object())

    def test_stores_original_item(self):
        row = [1, 2]
        c = Collection([row], validator=TypeAdapterValidator(List[int]))
        assert c.get(0) is row
        with pytest.raises(InvalidItem):
            c.add(["1"])

    def test_rejection_message(self):
        with pytest.raises(InvalidItem, match="Invalid item provided to collection"):
            TypeAdapterValidator(int).validate("x")


class TestPredicateValidator:
    def test_predicate(self):
        validator = PredicateValidator(lambda x: x % 2 == 0, "even number")
        c = Collection([2, 4], validator=validator)
        with pytest.raises(InvalidItem, match="failed even number"):
            c.add(3)
        assert c.values() == [2, 4]

    def test_predicate_errors_become_invalid_item(self):
        validator = PredicateValidator(lambda x: x > 0, "positive")
        with pytest.raises(InvalidItem, match="positive raised TypeError") as exc_info:
            validator.validate("a")
        assert isinstance(exc_info.value.__cause__, TypeError)
        assert not validator.accepts(None)
        assert validator.accepts(1)

    def test_repr(self):
        assert repr(PredicateValidator(bool, "truthy")) == "PredicateValidator('truthy')"


def test_validator_is_not_rechecked_after_insertion():
    validator = PredicateValidator(lambda item: len(item) < 2, "short")
    item = [1]
    c = Collection([item], validator=validator)
    item.extend([2, 3])
    assert c.get(0) == [1, 2, 3]
