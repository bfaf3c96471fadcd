#!/usr/bin/env python3
"""
registry.py
-----------
Named predicate registry used by every rule evaluation.

A registry is built once at start-up, optionally extended, then frozen:

    registry = build_registry()

    @registry.rule("isSlug")
    def is_slug(value):
        return bool(SLUG_RE.match(value))

    registry.freeze()

After ``freeze()`` further registration raises RegistryFrozenError, so the
set of rules cannot change while validation calls are running. Callers that
pass no registry to a validator get ``builtin_registry()``, a shared frozen
registry holding only the builtins.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from functools import lru_cache
from typing import Callable, Dict, Iterable, Iterator, List, Mapping, Optional

# --- Local imports ---
from recordcheck.core.exceptions import (
    ConfigurationError,
    RegistryFrozenError,
    RuleNotFoundError,
)
from recordcheck.validators.predicates import BUILTIN_PREDICATES, Predicate


class PredicateRegistry:
    """Mapping of rule name to predicate with a one-way freeze."""

    def __init__(self, predicates: Optional[Mapping[str, Predicate]] = None) -> None:
        self._predicates: Dict[str, Predicate] = {}
        self._frozen = False
        for name, predicate in (predicates or {}).items():
            self.register(name, predicate)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(self, name: str, predicate: Predicate) -> Predicate:
        """
        Add or overwrite a named predicate.

        Args:
            name: Rule name as used in rule sets
            predicate: Callable ``(value, *options) -> bool``

        Returns:
            The predicate, so this can back a decorator

        Raises:
            RegistryFrozenError: If the registry was frozen
            ConfigurationError: If the name is blank or the predicate not callable
        """
        if self._frozen:
            raise RegistryFrozenError(
                f"Cannot register '{name}': predicate registry is frozen"
            )
        if not isinstance(name, str) or not name.strip():
            raise ConfigurationError(f"Rule name must be a non-empty string, got {name!r}")
        if not callable(predicate):
            raise ConfigurationError(f"Predicate for rule '{name}' is not callable")
        self._predicates[name] = predicate
        return predicate

    def rule(self, name: str) -> Callable[[Predicate], Predicate]:
        """Decorator form of register()."""
        def decorator(predicate: Predicate) -> Predicate:
            return self.register(name, predicate)
        return decorator

    def lookup(self, name: str) -> Predicate:
        """
        Get the predicate registered under a name.

        Raises:
            RuleNotFoundError: If nothing is registered under the name
        """
        try:
            return self._predicates[name]
        except KeyError:
            raise RuleNotFoundError([name]) from None

    def verify(self, names: Iterable[str]) -> None:
        """
        Check that every name is registered.

        Raises:
            RuleNotFoundError: Listing every unknown name, in input order
        """
        missing: List[str] = []
        for name in names:
            if name not in self._predicates and name not in missing:
                missing.append(name)
        if missing:
            raise RuleNotFoundError(missing)

    def names(self) -> List[str]:
        return sorted(self._predicates)

    def freeze(self) -> "PredicateRegistry":
        """End the registration phase. Returns self for chaining."""
        self._frozen = True
        return self

    def copy(self) -> "PredicateRegistry":
        """Unfrozen copy holding the same predicates."""
        return PredicateRegistry(self._predicates)

    def __contains__(self, name: object) -> bool:
        return name in self._predicates

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(self._predicates)

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "open"
        return f"PredicateRegistry({len(self)} rules, {state})"


def build_registry(
    extensions: Optional[Mapping[str, Predicate]] = None,
) -> PredicateRegistry:
    """
    Create an unfrozen registry with the builtins plus optional extensions.

    Extensions registered under a builtin name replace the builtin.
    """
    registry = PredicateRegistry(BUILTIN_PREDICATES)
    for name, predicate in (extensions or {}).items():
        registry.register(name, predicate)
    return registry


@lru_cache(maxsize=None)
def builtin_registry() -> PredicateRegistry:
    """Shared frozen registry holding only the builtin predicates."""
    return build_registry().freeze()
