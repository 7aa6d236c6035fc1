import functools
import os
import sys
import time
import traceback
import types
from typing import Any, Optional, TextIO, Tuple, Type, Union, cast

import typing_inspect  # type: ignore

_DEBUG_STREAM: Optional[TextIO] = None


def name_of_type(typ: Type) -> str:
    return typ.__name__ if hasattr(typ, "__name__") else str(typ).split(".")[-1]


def set_debug(new_debug: bool, output: TextIO = sys.stderr):
    global _DEBUG_STREAM
    if new_debug:
        _DEBUG_STREAM = output
    else:
        _DEBUG_STREAM = None


def in_debug() -> bool:
    return bool(_DEBUG_STREAM)


def debug(*a):
    """
    Print debugging information in nested log output.

    Arguments are serialized with ``str()`` and printed only when verbose mode is on
    (see ``set_debug``). Each line is prefixed with a timestamp, an indent matching
    the stack depth, and the name of the calling function.
    """
    if not _DEBUG_STREAM:
        return
    stack = traceback.extract_stack()
    frame = stack[-2]
    indent = len(stack) - 3
    print(
        "{:06.3f}|{}|{}() {}".format(
            time.monotonic(), " " * indent, frame.name, " ".join(map(str, a))
        ),
        file=_DEBUG_STREAM,
    )


COMPOSITION_EXTRA_ASSERTS = os.environ.get("COMPOSITION_EXTRA_ASSERTS", "0") == "1"


def make_check_postcondition(enabled: bool):
    """
    Build a decorator factory that checks ``check(self, *args)`` after a method.

    When ``enabled`` is false, methods are returned undecorated.
    """
    if not enabled:

        def check_postcondition(check):
            def decorator(fn):
                return fn

            return decorator

        return check_postcondition

    def check_postcondition(check):
        def decorator(fn):
            fn_name = fn.__qualname__

            @functools.wraps(fn)
            def check_after(self, *a, **kw):
                ret = fn(self, *a, **kw)
                if not check(self, *a, **kw):
                    raise PostconditionFailed(f"postcondition failed after {fn_name}")
                return ret

            return check_after

        return decorator

    return check_postcondition


check_postcondition = make_check_postcondition(COMPOSITION_EXTRA_ASSERTS)


class PostconditionFailed(AssertionError):
    pass


class PropertyTypeError(TypeError):
    """
    Raised when a text-only accessor meets a key or value that is not text.

    This is the Python rendition of a failed cast: the store promised ``str`` keys
    and values, but something else got in.
    """

    def __init__(self, *a):
        TypeError.__init__(self, *a)
        debug("PropertyTypeError:", str(self))


ExtraUnionType = getattr(types, "UnionType") if sys.version_info >= (3, 10) else None


def origin_of(typ: Type) -> Type:
    if hasattr(typ, "__origin__"):
        return typ.__origin__
    elif ExtraUnionType and isinstance(typ, ExtraUnionType):
        return cast(Type, Union)
    else:
        return typ


def type_args_of(typ: Type) -> Tuple[Type, ...]:
    if getattr(typ, "__args__", None):
        if ExtraUnionType and isinstance(typ, ExtraUnionType):
            return typ.__args__
        return typing_inspect.get_args(typ, evaluate=True)
    else:
        return ()


def is_instance_of(obj: object, typ: Any) -> bool:
    """
    Check ``obj`` against a (possibly parameterized) type annotation.

    Only the outermost type is checked; type arguments of containers are ignored,
    except for unions, whose members are each tried in turn.

    >>> is_instance_of("x", str)
    True
    >>> is_instance_of(None, Optional[str])
    True
    >>> is_instance_of(3, Union[str, bytes])
    False
    >>> is_instance_of([1], list)
    True
    """
    if typ is Any or typ is object:
        return True
    if typ is None or typ is type(None):
        return obj is None
    if typing_inspect.is_union_type(typ) or origin_of(typ) is Union:
        return any(is_instance_of(obj, arg) for arg in type_args_of(typ))
    return isinstance(obj, origin_of(typ))


def describe_type(typ: Any) -> str:
    if typing_inspect.is_union_type(typ) or origin_of(typ) is Union:
        return " | ".join(describe_type(arg) for arg in type_args_of(typ))
    if typ is None or typ is type(None):
        return "None"
    return name_of_type(origin_of(typ))
