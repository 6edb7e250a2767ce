"""
Domain: Catalog entities (Game and Product).

Products are the sellable units that sales are scheduled for; each belongs to
exactly one Game. These are explicit nested value types for joined records
fetched alongside a sale (Sale -> Product -> Game), so a product always carries
its game and required fields are checked at construction.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from uuid import UUID


class ProductType(str, Enum):
    BASE = "base"
    EDITION = "edition"
    DLC = "dlc"
    SOUNDTRACK = "soundtrack"
    BUNDLE = "bundle"


def _require_name(entity: str, name: str) -> None:
    if not name or not name.strip():
        raise ValueError(f"{entity} name must be a non-empty string")


@dataclass(frozen=True, slots=True)
class Game:
    game_id: UUID
    client_id: UUID
    name: str

    def __post_init__(self) -> None:
        _require_name("Game", self.name)


@dataclass(frozen=True, slots=True)
class Product:
    """
    A sellable product (base game, edition, DLC, ...) of a Game.

    Invariant: product.game_id == product.game.game_id.
    """

    product_id: UUID
    game_id: UUID
    name: str
    product_type: ProductType
    game: Game

    def __post_init__(self) -> None:
        _require_name("Product", self.name)
        if self.game.game_id != self.game_id:
            raise ValueError("Product.game does not match Product.game_id")

    @property
    def display_name(self) -> str:
        """'<game> - <product>' unless the product is named after its game."""

        if self.name == self.game.name:
            return self.name
        return f"{self.game.name} - {self.name}"


__all__ = ["ProductType", "Game", "Product"]
