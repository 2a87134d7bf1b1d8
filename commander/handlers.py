"""
Commander command handlers.

A command's handler is one of three shapes, fixed at registration time:

- FunctionHandler(callback)
    callback(args, options)
- TypeHandler(type, method=Unset)
    type(args, options)                      when no method is given
    getattr(type(), method)(args, options)   otherwise (fresh, argument-less instance)
- InstanceHandler(instance, method)
    getattr(instance, method)(args, options)

All of them are invoked through the same invoke(args, options) operation; handler() picks the
right shape from what the user registered. Exceptions raised by the target are not caught here.
"""
import builtins
from typing import final

from .utils import *


class Handler:
    """Base of the handler variants."""

    __slots__ = ()

    def invoke(self, args, options, /):
        raise NotImplementedError


@final
class FunctionHandler(Handler):
    __slots__ = ("callback",)

    def __init__(self, callback, /):
        if not callable(callback):
            raise TypeError("function handler target must be callable")
        self.callback = callback

    def invoke(self, args, options, /):
        return self.callback(args, options)

    def __repr__(self):
        return f"<FunctionHandler {getattr(self.callback, '__qualname__', self.callback)!r}>"


@final
class TypeHandler(Handler):
    __slots__ = ("type", "method")

    def __init__(self, type, method=Unset, /):
        if not isinstance(type, builtins.type):
            raise TypeError("type handler target must be a class")
        if method is not Unset:
            _check_method(type, method)
        self.type = type
        self.method = method

    def invoke(self, args, options, /):
        if self.method is Unset:
            return self.type(args, options)
        return getattr(self.type(), self.method)(args, options)

    def __repr__(self):
        suffix = "" if self.method is Unset else f".{self.method}"
        return f"<TypeHandler {self.type.__qualname__}{suffix}>"


@final
class InstanceHandler(Handler):
    __slots__ = ("instance", "method")

    def __init__(self, instance, method, /):
        _check_method(instance, method)
        self.instance = instance
        self.method = method

    def invoke(self, args, options, /):
        return getattr(self.instance, self.method)(args, options)

    def __repr__(self):
        return f"<InstanceHandler {type(self.instance).__qualname__}.{self.method}>"


def _check_method(target, method):
    if not isinstance(method, str):
        raise TypeError("handler method name must be a string")
    if not callable(getattr(target, method, None)):
        raise TypeError(f"handler target has no method {method!r}")


def handler(target, method=Unset, /):
    """
    Build the handler variant matching target (and method).

    - class                      -> TypeHandler
    - callable without a method  -> FunctionHandler
    - any object with a method   -> InstanceHandler
    """
    if isinstance(target, type):
        return TypeHandler(target, method)
    if method is Unset:
        if not callable(target):
            raise TypeError("handler target must be callable when no method is given")
        return FunctionHandler(target)
    return InstanceHandler(target, method)


__all__ = (
    "Handler",
    "FunctionHandler",
    "TypeHandler",
    "InstanceHandler",
    "handler",
)
