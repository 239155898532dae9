from __future__ import annotations

import random
from decimal import Decimal

from django.conf import settings
from django.core.management.base import BaseCommand

from modules.orders.constants import OrderStatus
from modules.orders.models import Order
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.products.models import Product


class Command(BaseCommand):
    help = "Seed database with realistic development data."

    def add_arguments(self, parser):
        parser.add_argument(
            "--orders",
            type=int,
            default=20,
            help="Number of sample orders to create (ignored by the products service).",
        )

    def handle(self, *args, **options):
        random.seed(42)
        self.stdout.write("Seeding development data...")

        products: list[Product] = []
        orders_created = 0
        if settings.SERVICE_NAME in ("products", "all"):
            products = self._seed_products()
        if settings.SERVICE_NAME in ("orders", "all"):
            orders_created = self._seed_orders(products, options["orders"])

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"products={len(products)}, "
                f"orders={orders_created}"
            )
        )

    def _seed_products(self) -> list[Product]:
        self.stdout.write("Creating products...")
        products: list[Product] = []
        catalog = [
            ("Monitor 27\"", "Electronics", Decimal("1299.90")),
            ("Mechanical Keyboard", "Electronics", Decimal("399.90")),
            ("Gaming Mouse", "Electronics", Decimal("249.90")),
            ("Notebook 14\"", "Electronics", Decimal("3999.00")),
            ("Headset", "Electronics", Decimal("299.90")),
            ("Office Desk", "Furniture", Decimal("899.00")),
            ("Ergonomic Chair", "Furniture", Decimal("1499.00")),
            ("Bookshelf", "Furniture", Decimal("699.00")),
            ("A4 Paper", "Office", Decimal("29.90")),
            ("Blue Pen", "Office", Decimal("4.90")),
            ("Notebook Stand", "Office", Decimal("149.90")),
            ("Calculator", "Office", Decimal("89.90")),
        ]
        for name, category, price in catalog:
            product, _ = Product.objects.get_or_create(
                name=name,
                defaults={
                    "description": category,
                    "price": price,
                    "stock": random.randint(0, 200),
                },
            )
            products.append(product)
        self.stdout.write(self.style.SUCCESS("Creating products... Done!"))
        return products

    def _seed_orders(self, products: list[Product], count: int) -> int:
        """Create orders directly through the repository.

        Item snapshots come from the local catalogue, so this only works
        when both services share a database (``SERVICE_NAME=all``).
        """
        self.stdout.write("Creating orders...")
        if not products:
            self.stdout.write(self.style.WARNING("Skipping orders (no products)."))
            return 0

        customers = [
            ("Ana Souza", "ana@example.com"),
            ("Bruno Lima", "bruno@example.com"),
            ("Carla Mendes", "carla@example.com"),
            ("Daniel Costa", "daniel@example.com"),
        ]
        statuses = list(OrderStatus)
        repository = OrderDjangoRepository()

        orders_created = 0
        for _ in range(count):
            name, email = random.choice(customers)
            sample = random.sample(products, k=random.randint(1, min(3, len(products))))
            order = repository.create(
                {
                    "customer_email": email,
                    "customer_name": name,
                    "items": [
                        {
                            "product_id": product.id,
                            "product_name": product.name,
                            "quantity": random.randint(1, 3),
                            "unit_price": product.price,
                        }
                        for product in sample
                    ],
                }
            )
            Order.objects.filter(id=order.id).update(status=random.choice(statuses))
            orders_created += 1

        self.stdout.write(self.style.SUCCESS("Creating orders... Done!"))
        return orders_created
