"""
Type annotation helpers used to match requested types against registered ones.
"""

from __future__ import annotations

import types
from typing import Annotated, Any, Union, get_args, get_origin

__all__ = ["is_assignable", "is_union", "type_name"]


_UNION_ORIGINS = (Union, types.UnionType)


def is_union(type_: Any) -> bool:
    """
    :param type_: The annotation to check
    :return: True for ``Union[...]``, ``Optional[...]`` and ``X | Y`` annotations
    """
    return get_origin(type_) in _UNION_ORIGINS


def type_name(type_: Any) -> str:
    """
    Human readable name of a type annotation for logs and error messages.

    :param type_: The annotation to describe
    :return: ``module.QualName`` for classes outside builtins, repr otherwise
    """
    if isinstance(type_, type) and get_origin(type_) is None:
        if type_.__module__ == "builtins":
            return type_.__qualname__
        return f"{type_.__module__}.{type_.__qualname__}"

    return repr(type_)


def is_assignable(target: Any, source: Any) -> bool:
    """
    Check whether a value of the source type can stand in for the target type.

    Mirrors assignment compatibility: the source must be the target itself or a
    subtype of it. Unions accept a source when any member accepts it, and a union
    source is accepted only when every member is. Parameterized generics need a
    compatible origin and matching arguments, where ``Any`` matches everything.
    Annotated metadata is ignored. Anything that cannot be compared as a class
    is reported as not assignable rather than raising.

    Example:
    ::
        is_assignable(Sequence, str)  # True
        is_assignable(Sequence[int], list[int])  # True
        is_assignable(int | None, int)  # True
        is_assignable(str, object)  # False

    :param target: The requested type
    :param source: The candidate type whose values would be used
    :return: True if values of source are compatible with target
    """
    target = _strip_annotated(target)
    source = _strip_annotated(source)

    if target is None or source is None:
        return False

    if target == source or target is Any or target is object:
        return True

    if is_union(source):
        return all(is_assignable(target, arg) for arg in get_args(source))

    if is_union(target):
        return any(is_assignable(arg, source) for arg in get_args(target))

    target_origin = get_origin(target)
    source_origin = get_origin(source)

    if target_origin is None:
        return _is_subclass(source if source_origin is None else source_origin, target)

    if not _is_subclass(
        source if source_origin is None else source_origin, target_origin
    ):
        return False

    target_args = get_args(target)

    if source_origin is None:
        # a bare class only satisfies a parameterization that constrains nothing
        return all(arg is Any for arg in target_args)

    source_args = get_args(source)

    if len(target_args) != len(source_args):
        return False

    return all(
        target_arg is Any or source_arg is Any or target_arg == source_arg
        for target_arg, source_arg in zip(target_args, source_args)
    )


def _strip_annotated(type_: Any) -> Any:
    while get_origin(type_) is Annotated:
        type_ = get_args(type_)[0]

    return type_


def _is_subclass(source: Any, target: Any) -> bool:
    try:
        return issubclass(source, target)
    except TypeError:
        return False
