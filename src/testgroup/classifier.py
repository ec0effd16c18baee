# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Group Method Classifier

This module partitions the public methods of a group into lifecycle hooks,
test cases and diagnostics. It runs once per group, before anything is
executed, and never raises for a malformed group: every problem becomes a
Diagnostic so that all of them can be reported together.

Classification rules:
1. **Mixed receivers** - A group passed as a class object can only call its
   classmethods and staticmethods. If an instance would expose more public
   methods than the class, the author almost certainly meant to pass an
   instance; this is reported on its own, before any method is inspected.
2. **Reserved hooks** - ``pre_group``, ``post_group``, ``pre_test`` and
   ``post_test`` must take one context argument and return None. They are
   never tests.
3. **Tests** - Every other public method with that signature.
4. **Wrong context type** - A method taking the host ``Scope`` instead of
   ``T`` gets its own diagnostic, since it is the most common mistake.
5. **Anything else public** - Reported as an unexpected signature.
6. **Empty groups** - A group with no tests and no other problems is itself
   reported as an error.

Private members (leading underscore) are never inspected.

Example:
    ```python
    classification = classify(MyGroup())
    if not classification.ok:
        for diagnostic in classification.diagnostics:
            print(diagnostic.message)
    ```
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, List, Optional

from .context import T
from .core import DiagnosticKind, HookName
from .host import Scope

logger = logging.getLogger(__name__)

RESERVED_NAMES = frozenset(hook.value for hook in HookName)

EXPECTED_SIGNATURE = "(t: testgroup.T) -> None"

_NONE_ANNOTATIONS = (inspect.Signature.empty, None, type(None), "None")


class _SignatureKind(Enum):
    CONTEXT = "context"  # (t: T) -> None, the only runnable shape
    HOST_SCOPE = "host_scope"  # (t: Scope) -> None
    OTHER = "other"


@dataclass(frozen=True)
class TestMethod:
    """A test case bound to its group, ready to be called with a T."""

    __test__ = False  # Not a pytest test class

    name: str
    method: Callable[[T], None]

    def __call__(self, t: T) -> None:
        self.method(t)


@dataclass(frozen=True)
class Diagnostic:
    """One problem found while classifying a group."""

    kind: DiagnosticKind
    message: str
    method: Optional[str] = None  # None for group-wide problems


@dataclass
class Classification:
    """Result of classify(): the runnable tests, or why there are none."""

    group_name: str
    tests: List[TestMethod] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.diagnostics

    @property
    def test_names(self) -> List[str]:
        return [test.name for test in self.tests]


def _group_name(group: Any) -> str:
    cls = group if inspect.isclass(group) else type(group)
    return cls.__qualname__


def _is_method(member: Any) -> bool:
    return inspect.isfunction(member) or isinstance(member, (classmethod, staticmethod))


def _public_methods(cls: type, class_callable_only: bool = False) -> List[str]:
    """
    Names of the public methods defined on ``cls`` (including inherited ones).

    With ``class_callable_only`` only methods that can be called on the class
    object itself (classmethods and staticmethods) are returned.
    """
    names = []
    for name in dir(cls):
        if name.startswith("_"):
            continue
        member = inspect.getattr_static(cls, name)
        if not _is_method(member):
            continue
        if class_callable_only and inspect.isfunction(member):
            continue
        names.append(name)
    return names


def _annotation_is(annotation: Any, cls: type) -> bool:
    if annotation is cls:
        return True
    # Unresolved string annotation, e.g. "T" or "testgroup.T"
    return isinstance(annotation, str) and annotation.rsplit(".", 1)[-1] == cls.__name__


def _signature_of(func: Callable[..., Any]) -> inspect.Signature:
    try:
        return inspect.signature(func, eval_str=True)
    except (NameError, AttributeError, SyntaxError, TypeError):
        # Annotation is unresolvable or malformed here; compare the raw strings
        return inspect.signature(func)


def _body_is_deferred(func: Callable[..., Any]) -> bool:
    """Calling func only creates a coroutine or generator without running the body."""
    return (
        inspect.iscoroutinefunction(func)
        or inspect.isgeneratorfunction(func)
        or inspect.isasyncgenfunction(func)
    )


def _signature_kind(func: Callable[..., Any]) -> _SignatureKind:
    if _body_is_deferred(func):
        return _SignatureKind.OTHER

    signature = _signature_of(func)
    params = list(signature.parameters.values())
    if len(params) != 1:
        return _SignatureKind.OTHER

    param = params[0]
    if param.kind not in (param.POSITIONAL_ONLY, param.POSITIONAL_OR_KEYWORD):
        return _SignatureKind.OTHER
    if signature.return_annotation not in _NONE_ANNOTATIONS:
        return _SignatureKind.OTHER

    annotation = param.annotation
    if annotation is inspect.Parameter.empty or _annotation_is(annotation, T):
        return _SignatureKind.CONTEXT
    if _annotation_is(annotation, Scope):
        return _SignatureKind.HOST_SCOPE
    return _SignatureKind.OTHER


def _describe(func: Callable[..., Any]) -> str:
    if inspect.isasyncgenfunction(func):
        prefix = "async generator "
    elif inspect.iscoroutinefunction(func):
        prefix = "async "
    elif inspect.isgeneratorfunction(func):
        prefix = "generator "
    else:
        prefix = ""
    return f"{prefix}{_signature_of(func)}"


def _check_receivers(group: Any, group_name: str) -> Optional[Diagnostic]:
    if not inspect.isclass(group):
        return None

    on_class = _public_methods(group, class_callable_only=True)
    on_instance = _public_methods(group)
    if len(on_class) == len(on_instance):
        return None

    return Diagnostic(
        kind=DiagnosticKind.MIXED_RECEIVERS,
        message=(
            f"mixed method receivers: class {group_name} has {len(on_class)} methods, "
            f"but {group_name} instances have {len(on_instance)} methods. "
            "You should either pass an instance or make the extra methods private."
        ),
    )


def classify(group: Any) -> Classification:
    """
    Find the tests of ``group`` and check every public method's signature.

    Args:
        group: Any object, usually an instance of the author's group class

    Returns:
        Classification whose ``tests`` are sorted by name. If ``ok`` is False,
        ``tests`` must not be run.
    """
    group_name = _group_name(group)
    result = Classification(group_name=group_name)

    mixed = _check_receivers(group, group_name)
    if mixed is not None:
        result.diagnostics.append(mixed)
        return result

    cls = group if inspect.isclass(group) else type(group)

    for name in sorted(dir(cls)):
        if name.startswith("_"):
            continue
        full_name = f"{group_name}.{name}"
        member = inspect.getattr_static(cls, name)

        if name in RESERVED_NAMES:
            if not _is_method(member) or _signature_kind(getattr(group, name)) is not _SignatureKind.CONTEXT:
                result.diagnostics.append(
                    Diagnostic(
                        kind=DiagnosticKind.BAD_HOOK_SIGNATURE,
                        message=f"{full_name} is a reserved method but does not have signature {EXPECTED_SIGNATURE}",
                        method=name,
                    )
                )
            continue

        if not _is_method(member):
            continue

        bound = getattr(group, name)
        kind = _signature_kind(bound)
        if kind is _SignatureKind.CONTEXT:
            result.tests.append(TestMethod(name=name, method=bound))
        elif kind is _SignatureKind.HOST_SCOPE:
            result.diagnostics.append(
                Diagnostic(
                    kind=DiagnosticKind.WRONG_CONTEXT_TYPE,
                    message=f"{full_name} accepts testgroup.host.Scope, not testgroup.T",
                    method=name,
                )
            )
        else:
            result.diagnostics.append(
                Diagnostic(
                    kind=DiagnosticKind.UNEXPECTED_SIGNATURE,
                    message=(
                        f"{full_name} is public but has signature {_describe(bound)}, "
                        f"not {EXPECTED_SIGNATURE}. Prefix it with an underscore if it is not a test."
                    ),
                    method=name,
                )
            )

    if result.ok and not result.tests:
        result.diagnostics.append(
            Diagnostic(
                kind=DiagnosticKind.NO_TESTS,
                message=(
                    f"no tests found for {group_name}. Make sure your test methods are public "
                    "and that you passed an instance of the group."
                ),
            )
        )

    logger.debug(
        "Classified %s: %d test(s), %d diagnostic(s)",
        group_name,
        len(result.tests),
        len(result.diagnostics),
    )
    return result
