from .item import SENTINEL_MARK, CheckboxLine, Item, ItemOpenMatch, Label
from .document import CachedDocument

__all__ = [
    "SENTINEL_MARK",
    "CheckboxLine",
    "Item",
    "ItemOpenMatch",
    "Label",
    "CachedDocument",
]
