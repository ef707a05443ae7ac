"""
Class introspection used by the structural contracts.

Python has no access modifiers, so the structural notions the contracts
check are mapped onto the data model:

* **final**: the class carries ``__final__ = True`` (set by
  ``typing.final`` or ``typing_extensions.final``) or its type does not
  accept subclasses at all (``bool``, ``types.FunctionType``). No
  subclass is ever created to find out, so ``__init_subclass__`` hooks
  never run;
* **constructors**: ``__new__`` and ``__init__`` declared in the class body;
  a class declaring neither has one implicit constructor inherited from its
  bases;
* **constructor visibility**: ``PRIVATE`` when the normal call path
  ``cls()`` is refused, ``PUBLIC`` otherwise;
* **static members**: class attributes, ``ClassVar``/``Final`` annotations,
  ``staticmethod`` and ``classmethod``. Plain functions, properties, slots
  and instance annotations are per-instance.

Constructors and the bookkeeping attributes the interpreter adds to every
class body are never reported as fields or methods. Any other member,
including user-written dunder methods such as ``__call__``, is.
"""

from __future__ import annotations

import dataclasses
import enum
import functools
import inspect
import re
import types
import typing
from typing import Any, Callable, Dict, List, Optional, Tuple

from typing_extensions import Final

from .logging import get_logger
from .utils.exceptions import ConstructorInvocationError

__all__ = [
    "CONSTRUCTOR_NAMES",
    "ClassDescriptor",
    "ConstructorInfo",
    "FieldInfo",
    "MethodInfo",
    "MethodKind",
    "Visibility",
    "invoke_constructor",
    "is_final",
]

CONSTRUCTOR_NAMES: Tuple[str, ...] = ("__new__", "__init__")

_CLASSVAR_STRING = re.compile(r"^(?:typing(?:_extensions)?\.|t\.)?(?:ClassVar|Final)\b")

# Attributes created by the interpreter or by decorators for every class
CLASS_BOOKKEEPING: frozenset = frozenset(
    {
        "__module__",
        "__qualname__",
        "__doc__",
        "__dict__",
        "__weakref__",
        "__annotations__",
        "__annotate__",
        "__annotate_func__",
        "__annotations_cache__",
        "__slots__",
        "__firstlineno__",
        "__static_attributes__",
        "__orig_bases__",
        "__parameters__",
        "__type_params__",
        "__final__",
    }
)

# CPython type flag: cleared on types that refuse subclasses
_TPFLAGS_BASETYPE = 1 << 10

logger = get_logger("introspection")


def _is_reported_member(name: str) -> bool:
    return name not in CLASS_BOOKKEEPING and name not in CONSTRUCTOR_NAMES


class Visibility(enum.Enum):
    """Constructor visibility: whether ``cls()`` is allowed."""

    PUBLIC = "public"
    PRIVATE = "private"


class MethodKind(enum.Enum):
    STATIC = "staticmethod"
    CLASS = "classmethod"
    INSTANCE = "instance"
    PROPERTY = "property"


@dataclasses.dataclass(frozen=True)
class ConstructorInfo:
    """A constructor of a class: a declared ``__new__``/``__init__`` or the implicit inherited one."""

    owner: type
    name: str
    function: Callable[..., Any]
    implicit: bool = False

    @property
    def parameters(self) -> List[inspect.Parameter]:
        """Parameters excluding the leading ``self``/``cls``."""
        if self.function is object.__init__ or self.function is object.__new__:
            return []
        try:
            signature = inspect.signature(self.function)
        except (TypeError, ValueError):
            # builtin slot wrappers such as object.__init__ take no user arguments
            return []
        params = list(signature.parameters.values())
        if params and params[0].kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            params = params[1:]
        return params

    @property
    def takes_no_arguments(self) -> bool:
        return not self.parameters

    def __str__(self) -> str:
        kind = "implicit " if self.implicit else ""
        return f"{kind}{self.owner.__qualname__}.{self.name}"


@dataclasses.dataclass(frozen=True)
class FieldInfo:
    owner: type
    name: str
    is_static: bool
    kind: str

    def __str__(self) -> str:
        return f"{self.owner.__qualname__}.{self.name}"


@dataclasses.dataclass(frozen=True)
class MethodInfo:
    owner: type
    name: str
    kind: MethodKind

    @property
    def is_static(self) -> bool:
        return self.kind in (MethodKind.STATIC, MethodKind.CLASS)

    def __str__(self) -> str:
        return f"{self.owner.__qualname__}.{self.name}"


def is_final(cls: type) -> bool:
    """Return True if ``cls`` cannot be subclassed.

    A ``__final__`` marker is trusted as is. Otherwise only types that the
    interpreter refuses as a base count; a refusal raised by user code in
    ``__init_subclass__`` or a metaclass is not detected.
    """
    if getattr(cls, "__final__", False) is True:
        return True
    if not cls.__flags__ & _TPFLAGS_BASETYPE:
        logger.debug("%s is not an acceptable base type", cls.__qualname__)
        return True
    return False


def _is_class_level_annotation(annotation: Any) -> bool:
    if isinstance(annotation, str):
        return bool(_CLASSVAR_STRING.match(annotation.strip()))
    if annotation is typing.ClassVar or annotation is Final or annotation is typing.Final:
        return True
    origin = typing.get_origin(annotation)
    return origin is typing.ClassVar or origin is Final or origin is typing.Final


def _own_annotations(klass: type) -> Dict[str, Any]:
    try:
        return dict(inspect.get_annotations(klass))
    except (NameError, TypeError):
        return {}


def _classify_method(value: Any) -> Optional[MethodKind]:
    if isinstance(value, staticmethod):
        return MethodKind.STATIC
    if isinstance(value, classmethod):
        return MethodKind.CLASS
    if isinstance(value, (property, functools.cached_property)):
        return MethodKind.PROPERTY
    if inspect.isfunction(value) or isinstance(value, functools.partialmethod):
        return MethodKind.INSTANCE
    return None


def invoke_constructor(cls: type, constructor: Optional[ConstructorInfo] = None) -> Any:
    """Invoke a constructor of ``cls`` bypassing the normal call path.

    Metaclass ``__call__`` and the class's own ``__new__`` guards are skipped:
    ``__new__`` is called as a plain function, and ``__init__`` is called on
    an instance allocated by the nearest base ``__new__``.

    Args:
        cls: The class to instantiate
        constructor: Constructor to invoke; defaults to the first one of ``cls``

    Returns:
        The created object

    Raises:
        ConstructorInvocationError: If allocation or the constructor raised;
            the original error is the ``__cause__``
    """
    if constructor is None:
        constructor = ClassDescriptor.of(cls).constructors[0]

    try:
        if constructor.name == "__new__":
            return constructor.function(cls)
        instance = _allocate(cls)
        constructor.function(instance)
        return instance
    except Exception as exc:
        raise ConstructorInvocationError(
            f"Invoking {constructor} raised {exc.__class__.__name__}: {exc}",
            cause=exc,
            owner=cls,
        ) from exc


def _allocate(cls: type) -> Any:
    for base in cls.__mro__[1:]:
        if "__new__" in vars(base):
            return base.__new__(cls)
    return object.__new__(cls)


@dataclasses.dataclass(frozen=True)
class ClassDescriptor:
    """Introspection view of a class: finality, constructors, fields and methods."""

    cls: type

    @classmethod
    def of(cls, target: type) -> "ClassDescriptor":
        if not isinstance(target, type):
            raise TypeError(f"Expected a class, got {type(target).__name__}")
        return cls(target)

    @property
    def name(self) -> str:
        return self.cls.__qualname__

    @property
    def is_final(self) -> bool:
        return is_final(self.cls)

    def hierarchy(self) -> List[type]:
        """The MRO of the class excluding ``object``."""
        return [klass for klass in self.cls.__mro__ if klass is not object]

    @property
    def constructors(self) -> List[ConstructorInfo]:
        declared = vars(self.cls)
        constructors = []
        for name in CONSTRUCTOR_NAMES:
            if name in declared:
                value = declared[name]
                function = value.__func__ if isinstance(value, (staticmethod, classmethod)) else value
                constructors.append(ConstructorInfo(self.cls, name, function))
        if constructors:
            return constructors
        # Nothing declared: the inherited initializer acts as a default constructor
        return [ConstructorInfo(self.cls, "__init__", self.cls.__init__, implicit=True)]

    @property
    def constructor_visibility(self) -> Visibility:
        """``PRIVATE`` if calling the class normally is refused, else ``PUBLIC``.

        Classes whose signature requires arguments cannot be tried with an
        empty call and are reported as ``PUBLIC``.
        """
        try:
            inspect.signature(self.cls).bind()
        except TypeError:
            return Visibility.PUBLIC
        except ValueError:
            # no introspectable signature, try calling
            pass
        try:
            self.cls()
        except Exception as exc:
            logger.debug("Calling %s() refused: %r", self.name, exc)
            return Visibility.PRIVATE
        return Visibility.PUBLIC

    @property
    def fields(self) -> List[FieldInfo]:
        fields: List[FieldInfo] = []
        for klass in self.hierarchy():
            annotations = _own_annotations(klass)
            namespace = vars(klass)
            for name, value in namespace.items():
                if not _is_reported_member(name) or isinstance(value, type):
                    continue
                if _classify_method(value) is not None:
                    continue
                if isinstance(value, types.MemberDescriptorType):
                    fields.append(FieldInfo(klass, name, False, "slot"))
                elif name in annotations:
                    static = _is_class_level_annotation(annotations[name])
                    fields.append(FieldInfo(klass, name, static, "annotated attribute"))
                else:
                    fields.append(FieldInfo(klass, name, True, "class attribute"))
            for name, annotation in annotations.items():
                if name in namespace or not _is_reported_member(name):
                    continue
                fields.append(
                    FieldInfo(klass, name, _is_class_level_annotation(annotation), "annotation")
                )
        return fields

    @property
    def methods(self) -> List[MethodInfo]:
        methods: List[MethodInfo] = []
        for klass in self.hierarchy():
            for name, value in vars(klass).items():
                if not _is_reported_member(name):
                    continue
                kind = _classify_method(value)
                if kind is not None:
                    methods.append(MethodInfo(klass, name, kind))
        return methods
