from __future__ import annotations

import random
from datetime import timedelta
from decimal import Decimal

from django.conf import settings
from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from modules.customers.models import Customer, PhoneType, TelephoneNumber
from modules.orders.constants import OrderStatus
from modules.orders.models import Order, OrderItem
from modules.products.models import Product
from modules.suppliers.models import Supplier

FIRST_NAMES = [
    "Alice", "Bruno", "Chloe", "Daniel", "Emma", "Felix", "Grace", "Henry",
    "Isla", "Jack", "Kate", "Liam", "Mia", "Noah", "Olivia", "Peter",
]
LAST_NAMES = [
    "Adams", "Baker", "Clarke", "Davies", "Evans", "Foster", "Green",
    "Hughes", "Irving", "Jones", "King", "Lewis", "Morris", "Norton",
]
PRODUCT_NOUNS = [
    "Widget", "Bracket", "Cable", "Adapter", "Hinge", "Bolt", "Panel",
    "Sensor", "Valve", "Gasket", "Spring", "Switch", "Clamp", "Filter",
]
PRODUCT_ADJECTIVES = [
    "Small", "Large", "Heavy-duty", "Compact", "Steel", "Copper", "Premium",
]
CITIES = [
    ("London", "Greater London", "GB"),
    ("Manchester", "Greater Manchester", "GB"),
    ("Leeds", "West Yorkshire", "GB"),
    ("Bristol", "Bristol", "GB"),
    ("Dublin", "Leinster", "IE"),
]
SUPPLIERS = [
    (1, "Speedy", "Posts numeric customer and product ids with ISO-8601 timestamps."),
    (2, "Vault", "Posts customer emails and GUID product codes with Unix timestamps."),
]


class Command(BaseCommand):
    help = "Seed database with development suppliers, customers, products and orders."

    def add_arguments(self, parser):
        parser.add_argument(
            "--customers", type=int, default=settings.SEED_CUSTOMER_COUNT
        )
        parser.add_argument(
            "--products", type=int, default=settings.SEED_PRODUCT_COUNT
        )
        parser.add_argument(
            "--orders", type=int, default=settings.SEED_ORDER_COUNT
        )

    def handle(self, *args, **options):
        random.seed(42)
        self.stdout.write("Seeding development data...")

        with transaction.atomic():
            suppliers = self._seed_suppliers()
            customers = self._seed_customers(options["customers"])
            products = self._seed_products(options["products"])
            orders_created = self._seed_orders(
                options["orders"], suppliers, customers, products
            )

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"suppliers={len(suppliers)}, "
                f"customers={len(customers)}, "
                f"products={len(products)}, "
                f"orders={orders_created}"
            )
        )

    def _seed_suppliers(self) -> list[Supplier]:
        suppliers: list[Supplier] = []
        for supplier_id, name, description in SUPPLIERS:
            supplier, _ = Supplier.objects.update_or_create(
                id=supplier_id,
                defaults={"name": name, "description": description},
            )
            suppliers.append(supplier)
        return suppliers

    def _seed_customers(self, count: int) -> list[Customer]:
        self.stdout.write("Creating customers...")
        customers: list[Customer] = []
        for i in range(count):
            first = random.choice(FIRST_NAMES)
            last = random.choice(LAST_NAMES)
            customer, created = Customer.objects.get_or_create(
                email=f"{first}.{last}.{i + 1}@example.com".lower(),
                defaults={"name": f"{first} {last}"},
            )
            if created:
                phone_count = random.randint(
                    settings.SEED_MIN_PHONE_NUMBERS, settings.SEED_MAX_PHONE_NUMBERS
                )
                TelephoneNumber.objects.bulk_create(
                    TelephoneNumber(
                        customer=customer,
                        type=random.choice(PhoneType.values),
                        number=f"07{random.randint(100000000, 999999999)}",
                    )
                    for _ in range(phone_count)
                )
            customers.append(customer)
        self.stdout.write(self.style.SUCCESS("Creating customers... Done!"))
        return customers

    def _seed_products(self, count: int) -> list[Product]:
        self.stdout.write("Creating products...")
        products: list[Product] = []
        for i in range(count):
            name = (
                f"{random.choice(PRODUCT_ADJECTIVES)} "
                f"{random.choice(PRODUCT_NOUNS)} {i + 1:03d}"
            )
            product, _ = Product.objects.get_or_create(
                name=name,
                defaults={
                    "description": f"Catalogue item {i + 1}",
                    "price": Decimal(random.randint(199, 49999)) / 100,
                },
            )
            products.append(product)
        self.stdout.write(self.style.SUCCESS("Creating products... Done!"))
        return products

    def _seed_orders(
        self,
        count: int,
        suppliers: list[Supplier],
        customers: list[Customer],
        products: list[Product],
    ) -> int:
        self.stdout.write("Creating orders...")
        if not customers or not products:
            self.stdout.write(
                self.style.WARNING("Skipping orders (no customers/products).")
            )
            return 0

        for _ in range(count):
            supplier = random.choice(suppliers)
            customer = random.choice(customers)
            address = self._random_address()
            order = Order.objects.create(
                customer=customer if supplier.id == 1 else None,
                customer_email=customer.email if supplier.id == 2 else None,
                supplier=supplier,
                order_date=timezone.now() - timedelta(days=random.randint(0, 30)),
                status=random.choice(OrderStatus.values),
                billing_address=address,
                delivery_address=address,
            )

            item_count = random.randint(
                settings.SEED_MIN_ORDER_ITEMS, settings.SEED_MAX_ORDER_ITEMS
            )
            OrderItem.objects.bulk_create(
                OrderItem(
                    order=order,
                    product=product,
                    quantity=random.randint(1, 10),
                    price=product.price,
                )
                for product in random.sample(products, k=min(item_count, len(products)))
            )

        self.stdout.write(self.style.SUCCESS("Creating orders... Done!"))
        return count

    @staticmethod
    def _random_address() -> dict:
        city, county, country = random.choice(CITIES)
        return {
            "street": f"{random.randint(1, 250)} High Street",
            "city": city,
            "county": county,
            "postal_code": f"{random.choice('ABDEFGHJ')}{random.randint(1, 20)} "
            f"{random.randint(1, 9)}XY",
            "country": country,
        }
