#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from storefront.data.models.cart_store import CartStoreModel

__all__ = ["CartStoreModel"]
