#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/flare2markup/converters/rules.py
"""Conversion rules and the priority-ordered rule table.

A :class:`ConversionRule` pairs a predicate over an element with a handler that
renders it. Rules are collected into a :class:`RuleTable`, which sorts them by
descending priority (ties keep registration order, so the first-registered rule
wins) and is frozen before use. A frozen table is an immutable tuple and can be
shared by concurrent conversions.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Iterator, cast

from flare2markup.ast.nodes import Element

if TYPE_CHECKING:
    from flare2markup.converters.context import ConversionContext

logger = logging.getLogger(__name__)

Predicate = Callable[[Element], bool]
Handler = Callable[[Element, "ConversionContext"], str]

# Priority bands
PRIORITY_SKIP = 100
PRIORITY_VENDOR = 90
PRIORITY_STRUCTURE = 50
PRIORITY_BLOCK = 30
PRIORITY_INLINE = 10
PRIORITY_CONTAINER = 5


@dataclass(frozen=True)
class ConversionRule:
    """A named predicate/handler pair.

    Parameters
    ----------
    name : str
        Identifier used in logs and introspection
    priority : int
        Higher priorities are tried first
    predicate : Callable[[Element], bool]
        Returns True when this rule handles the element
    handler : Callable[[Element, ConversionContext], str]
        Renders the element. The handler alone decides whether to recurse into
        children.

    """

    name: str
    priority: int
    predicate: Predicate
    handler: Handler

    def matches(self, element: Element) -> bool:
        """Return True if this rule's predicate accepts ``element``."""
        return self.predicate(element)


class RuleTable:
    """Registry of conversion rules sorted by descending priority.

    Examples
    --------
        >>> table = RuleTable()
        >>> table.register(ConversionRule("bold", PRIORITY_INLINE, tag_is("b", "strong"), handler))
        >>> table.freeze()
        >>> table.match(Element("strong")).name
        'bold'

    """

    def __init__(self) -> None:
        self._pending: list[ConversionRule] = []
        self._rules: tuple[ConversionRule, ...] | None = None

    def register(self, rule: ConversionRule) -> None:
        """Add a rule.

        Raises
        ------
        RuntimeError
            If the table has already been frozen

        """
        if self._rules is not None:
            raise RuntimeError(f"Cannot register rule {rule.name!r}: rule table is frozen")
        self._pending.append(rule)

    def add(self, name: str, priority: int, predicate: Predicate, handler: Handler) -> None:
        """Build and register a rule in one call."""
        self.register(ConversionRule(name, priority, predicate, handler))

    def freeze(self) -> RuleTable:
        """Sort the registered rules and make the table immutable."""
        if self._rules is None:
            # list.sort is stable, so equal priorities keep registration order
            ordered = sorted(self._pending, key=lambda rule: rule.priority, reverse=True)
            self._rules = tuple(ordered)
            self._pending = []
            logger.debug("Rule table frozen with %d rules", len(self._rules))
        return self

    @property
    def frozen(self) -> bool:
        return self._rules is not None

    @property
    def rules(self) -> tuple[ConversionRule, ...]:
        """The sorted rules. Freezes the table on first access."""
        self.freeze()
        return cast("tuple[ConversionRule, ...]", self._rules)

    def match(self, element: Element) -> ConversionRule | None:
        """Return the highest-priority rule whose predicate accepts ``element``."""
        for rule in self.rules:
            if rule.predicate(element):
                return rule
        return None

    def __iter__(self) -> Iterator[ConversionRule]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self._rules) if self._rules is not None else len(self._pending)


# Predicate helpers


def tag_is(*tags: str) -> Predicate:
    """Match elements whose tag is one of ``tags``."""
    wanted = frozenset(tag.lower() for tag in tags)
    return lambda element: element.tag in wanted


def has_class(*classes: str) -> Predicate:
    """Match elements carrying any of ``classes`` (case-insensitive)."""
    return lambda element: element.has_class(*classes)


def has_attribute(name: str) -> Predicate:
    """Match elements that define attribute ``name``."""
    return lambda element: name in element.attributes


def all_of(*predicates: Predicate) -> Predicate:
    """Match when every predicate matches."""
    return lambda element: all(predicate(element) for predicate in predicates)


def any_of(*predicates: Predicate) -> Predicate:
    """Match when at least one predicate matches."""
    return lambda element: any(predicate(element) for predicate in predicates)
