"""MessageTarget tagged variant.

A message in the merged view belongs either to one property of the
entity or to the entity as a whole. The two cases are distinct types so
that no property name can ever collide with the entity-wide key.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class PropertyScoped:
    """Messages attached to a single property.

    Example:
        >>> PropertyScoped("NewBid") == PropertyScoped("NewBid")
        True
    """

    name: str

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise ValueError(f"Property name must be a non-empty string, got {self.name!r}")

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class EntityScoped:
    """Messages attached to the whole entity."""

    def __str__(self) -> str:
        return "<entity>"


ENTITY = EntityScoped()

MessageTarget = Union[PropertyScoped, EntityScoped]
