"""
==============================================================================
Product Models Module
==============================================================================

Pydantic models for catalog items and the fixed category enumeration.

==============================================================================
"""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Category(str, Enum):
    """
    Product category.

    Each member owns one product collection and one id counter. The
    public API addresses categories by their plural token
    (``pizzas``, ``bebidas``).
    """

    PIZZA = "pizza"
    BEBIDA = "bebida"

    @classmethod
    def from_token(cls, token: str) -> Optional["Category"]:
        """Resolve a public plural token, or None if unknown."""
        return _TOKENS.get(token)

    @property
    def token(self) -> str:
        """Public plural token for this category."""
        return _PLURALS[self]


_TOKENS: Dict[str, Category] = {
    "pizzas": Category.PIZZA,
    "bebidas": Category.BEBIDA,
}

_PLURALS: Dict[Category, str] = {
    category: token for token, category in _TOKENS.items()
}


class Product(BaseModel):
    """
    Product model for catalog items.

    Attributes:
        id: Identifier, unique within its category and never reused
        nome: Product display name
        descricao: Free-text description (may be empty)
        preco: Price
        imagem: Image reference (upload path or external URL)
    """

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., description="Identifier within the category")
    nome: str = Field(..., min_length=1, description="Product name")
    descricao: str = Field(default="", description="Product description")
    preco: float = Field(..., ge=0, description="Product price")
    imagem: str = Field(..., description="Image reference")


class ProductFields(BaseModel):
    """
    Incoming product fields from a create or update request.

    Every field is optional. Only keys that were actually sent end up in
    ``model_fields_set``, so ``descricao=""`` is distinguishable from a
    request that did not mention ``descricao`` at all.
    """

    model_config = ConfigDict(extra="ignore")

    nome: Optional[str] = None
    descricao: Optional[str] = None
    preco: Optional[str] = None
    imagem: Optional[str] = None

    @field_validator("preco", mode="before")
    @classmethod
    def price_as_text(cls, value: Any) -> Any:
        """Accept JSON numbers for the price."""
        if isinstance(value, bool):
            return value
        if isinstance(value, (int, float)):
            return str(value)
        return value

    def provided(self, name: str) -> bool:
        """True if the field was sent with a non-null value."""
        return name in self.model_fields_set and getattr(self, name) is not None
