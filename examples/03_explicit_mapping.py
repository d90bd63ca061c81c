"""
Example 03: Explicit Mapping

This example registers mapping metadata for a class that carries no markers,
such as a model owned by another package.
"""

from dataclasses import dataclass, field

from row_mapper import RowMapper, mapping, register


@dataclass
class Product:
    """Third-party model: attribute names do not match the columns"""
    sku: str = ""
    title: str = ""
    price_cents: int = 0
    variants: list = field(default_factory=list)


def main():
    register(
        mapping(Product)
        .column("sku", "ProductSKU")
        .column("title", "ProductName")
        .column("price_cents", "PriceCents")
        .exclude("variants")
        .build()
    )

    rows = [
        {"ProductSKU": "A-1", "ProductName": "Anvil", "PriceCents": "1999"},
        {"ProductSKU": "B-2", "ProductName": "Bucket", "PriceCents": 499},
    ]

    print("=== Explicit Mapping ===\n")
    mapper = RowMapper(Product)
    for row in rows:
        product = mapper.map_one(row)
        print(f"   - {product.sku}: {product.title} ({product.price_cents / 100:.2f})")


if __name__ == "__main__":
    main()
