# read-only views over the product catalog
from typing import Iterable, List

from store.models import Product


def filter_by_category(products: Iterable[Product], category: str) -> List[Product]:
    """Exact, case-sensitive category match, catalog order kept."""
    return [p for p in products if p.category == category]


def search_by_name(products: Iterable[Product], fragment: str) -> List[Product]:
    """Case-sensitive substring match on the name, catalog order kept."""
    return [p for p in products if fragment in p.name]


def rank_by_rating(products: Iterable[Product]) -> List[Product]:
    """
    All products, highest average rating first.

    Unrated products average 0.0 and sink to the bottom. Products with the
    same average keep their catalog order (sorted() is stable, also with
    reverse=True).
    """
    return sorted(products, key=lambda p: p.average_rating(), reverse=True)
