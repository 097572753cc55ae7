"""Sample classes and function factories shared by the comparator tests."""

from dataclasses import dataclass

from pydantic import BaseModel


class SimpleObject:
    """Plain object compared through its instance __dict__."""

    def __init__(self, **attributes):
        for name, value in attributes.items():
            setattr(self, name, value)

    def describe(self) -> str:
        return ', '.join(f'{name}={value!r}' for name, value in vars(self).items())


class OtherObject(SimpleObject):
    """Same fields as SimpleObject but a different class."""


class Label:
    """Object with its own string form; compared as text."""

    def __init__(self, text: str, revision: int = 0):
        self.text = text
        self.revision = revision

    def __str__(self) -> str:
        return self.text


class Slotted:
    __slots__ = ('x', 'y')

    def __init__(self, x, y=None):
        self.x = x
        if y is not None:
            self.y = y


@dataclass
class Point:
    x: float
    y: float


class Item(BaseModel):
    name: str
    price: float


def create_closure():
    return lambda: 1


def make_adder(n):
    return lambda x: x + n


def make_getter(obj):
    return lambda: obj
