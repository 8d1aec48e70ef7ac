import csv
import io
from typing import Iterable
from app.services.products import stock_status

EXPORT_COLUMNS = [
    "id",
    "name",
    "sku",
    "category",
    "price",
    "stock",
    "min_stock",
    "max_stock",
    "unit",
    "location",
    "supplier_id",
]


def export_products_csv(products: Iterable) -> str:
    """Exporta los productos a CSV, con una columna final `status`."""
    buffer = io.StringIO()
    writer = csv.writer(buffer)

    # Cabecera
    writer.writerow(EXPORT_COLUMNS + ["status"])

    for product in products:
        writer.writerow(
            [getattr(product, column) for column in EXPORT_COLUMNS] + [stock_status(product)]
        )

    return buffer.getvalue()
