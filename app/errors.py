class CatalogError(Exception):
    """Base class for errors surfaced by the catalog API."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class StoreUnavailable(CatalogError):
    """Connection, query or timeout failure against the product store."""


class ProductNotFound(CatalogError):
    status_code = 404

    def __init__(self, product_id: str, message: str = "Product not found"):
        super().__init__(message)
        self.product_id = product_id
