import argparse, json, os
from typing import List

from storefront.errors import ValidationError
from storefront.logging_config import setup_logging
from storefront.services.products import create_product


def load_products(path: str) -> List[dict]:
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get('products', [])
    if not isinstance(data, list):
        raise SystemExit(f"{path}: expected a list of products")
    return data


def seed(products: List[dict], created_by: str, dry_run: bool = False) -> int:
    added = 0
    for p in products:
        if dry_run:
            print(f"would add {p.get('name')!r} @ {p.get('price')}")
            continue
        try:
            out = create_product(p, created_by=created_by)
        except ValidationError as e:
            print(f"skipped {p.get('name')!r}: {e}")
            continue
        print(f"added {out['name']} -> {out['id']}")
        added += 1
    return added


if __name__ == "__main__":
    ap = argparse.ArgumentParser(description="Load products from a JSON file into Firestore")
    ap.add_argument('--file', required=True, help='JSON file: a list of products or {"products": [...]}')
    ap.add_argument('--created-by', default=os.environ.get('SEED_USER', 'seed-script'))
    ap.add_argument('--dry-run', action='store_true')
    args = ap.parse_args()
    setup_logging()
    n = seed(load_products(args.file), args.created_by, args.dry_run)
    print(f"Seeded {n} product(s)")
