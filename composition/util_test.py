import io
from typing import List, Optional, Union

import pytest

from composition.util import (
    PostconditionFailed,
    PropertyTypeError,
    debug,
    describe_type,
    in_debug,
    is_instance_of,
    make_check_postcondition,
    set_debug,
)


def test_is_instance_of_plain_types() -> None:
    assert is_instance_of("x", str)
    assert not is_instance_of(b"x", str)
    assert is_instance_of(object(), object)


def test_is_instance_of_unions() -> None:
    assert is_instance_of(None, Optional[str])
    assert is_instance_of("x", Optional[str])
    assert not is_instance_of(3, Optional[str])
    assert is_instance_of(b"x", Union[str, bytes])


def test_is_instance_of_parameterized_containers() -> None:
    assert is_instance_of([1, 2], List[int])
    assert not is_instance_of((1, 2), List[int])


def test_describe_type() -> None:
    assert describe_type(str) == "str"
    assert describe_type(Optional[str]) == "str | None"
    assert describe_type(List[int]) == "list"


def test_PropertyTypeError_is_a_TypeError() -> None:
    with pytest.raises(TypeError):
        raise PropertyTypeError("nope")


def test_debug_output() -> None:
    buf = io.StringIO()
    was_debugging = in_debug()
    set_debug(True, buf)
    try:
        debug("hello", 42)
    finally:
        set_debug(was_debugging)
    line = buf.getvalue()
    assert "test_debug_output()" in line
    assert line.rstrip().endswith("hello 42")


def test_debug_is_silent_by_default() -> None:
    buf = io.StringIO()
    set_debug(False, buf)
    debug("hello")
    assert buf.getvalue() == ""


class _Box:
    def __init__(self) -> None:
        self.items: List[int] = []


def _make_box_class(enabled: bool):
    check = make_check_postcondition(enabled)

    class Box(_Box):
        @check(lambda self, x: x in self.items)
        def keep(self, x: int) -> int:
            self.items.append(x)
            return len(self.items)

        @check(lambda self, x: x in self.items)
        def forget(self, x: int) -> None:
            pass

    return Box


def test_make_check_postcondition_enabled() -> None:
    box = _make_box_class(True)()
    assert box.keep(1) == 1
    with pytest.raises(PostconditionFailed, match="Box.forget"):
        box.forget(2)


def test_make_check_postcondition_disabled() -> None:
    box_class = _make_box_class(False)
    assert not hasattr(box_class.forget, "__wrapped__")
    box_class().forget(2)
