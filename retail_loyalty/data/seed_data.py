#!/usr/bin/env python3
"""
seed_data.py

Generates fake privilege cards and work orders under the configured data
directory (default: sample_data) so the app has something to bill against
and report on.

Run:
  python -m retail_loyalty.data.seed_data --customers 50 --days 14
"""

from __future__ import annotations

import argparse
import random
import sys
from datetime import datetime, time, timedelta
from decimal import Decimal
from typing import Dict, List, Optional

from ..billing.work_orders import build_work_order
from ..config import get_config
from .backends.csv_backend import CsvDataAccess
from .models import LineItem, PrivilegeCard

# -----------------------------
# Config & helper structures
# -----------------------------

FIRST_NAMES = ["Anil", "Divya", "Meera", "Rahul", "Lakshmi", "Arjun", "Sneha", "Vishnu", "Nisha", "Hari"]
LAST_NAMES = ["Nair", "Menon", "Pillai", "Kumar", "Varma", "Thomas", "Joseph", "Iyer"]

CATALOG: Dict[str, List[tuple[str, Decimal]]] = {
    "frames": [("Metal Frame", Decimal("1450")), ("Acetate Frame", Decimal("2200")), ("Rimless Frame", Decimal("3100"))],
    "lenses": [("Single Vision Lens", Decimal("900")), ("Progressive Lens", Decimal("4800")), ("Blue Cut Lens", Decimal("1600"))],
    "sunglasses": [("Aviator Sunglasses", Decimal("2650")), ("Wayfarer Sunglasses", Decimal("1990"))],
    "accessories": [("Lens Cleaner", Decimal("150")), ("Hard Case", Decimal("350"))],
}

PAYMENT_METHODS = ["cash", "card", "upi"]
EMPLOYEES = ["Asha", "Biju", "Chitra", "Deepak"]


# -----------------------------
# Generators
# -----------------------------

def gen_privilege_cards(n: int) -> List[PrivilegeCard]:
    cards = []
    for i in range(1, n + 1):
        cards.append(PrivilegeCard(
            pc_number=f"PC{i:06d}",
            customer_id=f"C{i:05d}",
            name=f"{random.choice(FIRST_NAMES)} {random.choice(LAST_NAMES)}",
            phone=f"9{random.randint(100000000, 999999999)}",
            loyalty_points=Decimal(random.choice([0, 0, 50, 120, 300, 750])),
        ))
    return cards


def gen_line_items() -> List[LineItem]:
    items = []
    for _ in range(random.randint(1, 3)):
        category = random.choice(list(CATALOG))
        name, price = random.choice(CATALOG[category])
        items.append(LineItem(name=name, category=category, price=price, quantity=random.randint(1, 2)))
    return items


# -----------------------------
# Main
# -----------------------------

def main(argv: Optional[List[str]] = None) -> int:
    config = get_config()

    parser = argparse.ArgumentParser(description="Generate fake privilege cards and work orders.")
    parser.add_argument("--customers", type=int, default=config.default_seed_customers)
    parser.add_argument("--days", type=int, default=14, help="Number of days of work order history.")
    parser.add_argument("--orders-per-day", type=int, default=8)
    parser.add_argument("--output-dir", type=str, default=config.data_dir)
    parser.add_argument("--seed", type=int, default=config.default_seed_value)
    args = parser.parse_args(argv)

    random.seed(args.seed)
    da = CsvDataAccess(data_dir=args.output_dir)

    if da.count_work_orders() or da.get_privilege_card("PC000001") is not None:
        print(f"Refusing to seed non-empty data directory: {da.data_dir}", file=sys.stderr)
        return 2

    cards = gen_privilege_cards(args.customers)
    for card in cards:
        da.create_privilege_card(card)

    start_d = datetime.now().date() - timedelta(days=args.days - 1)
    next_id = 1001
    for offset in range(args.days):
        day = start_d + timedelta(days=offset)
        for _ in range(random.randint(0, args.orders_per_day)):
            card = random.choice(cards)
            stamp = datetime.combine(day, time(random.randint(10, 19), random.randint(0, 59)))
            order = build_work_order(
                str(next_id),
                gen_line_items(),
                random.choice(EMPLOYEES),
                advance_details=random.choice([0, 500, 1000]),
                due_date=day + timedelta(days=random.randint(2, 7)),
                patient_details={"customer_id": card.customer_id, "name": card.name},
                payment_method=random.choice(PAYMENT_METHODS),
                now=stamp,
            )
            da.create_work_order(order)
            next_id += 1

    # simple summary
    print(f"Generated data in {da.data_dir}")
    print(f" privilege_cards: {len(cards)} | work_orders: {next_id - 1001}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
