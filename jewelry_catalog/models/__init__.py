from .admin_users import AdminUser
from .categories import Category
from .products import Product
from .customers import Customer
from .catalogs import Catalog, catalog_products
from .inquiries import Inquiry

__all__ = [
    "AdminUser", "Category", "Product", "Customer",
    "Catalog", "catalog_products", "Inquiry"
]
