"""
Database models package.
"""

from ledgerline.models.category import Category
from ledgerline.models.item import Item, ItemKind
from ledgerline.models.item_filter import ItemFilter

__all__ = [
    "Category",
    "Item",
    "ItemKind",
    "ItemFilter",
]
