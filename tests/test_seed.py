import json

from scripts.seed_products import load_products, seed


def test_load_products_accepts_wrapped_list(tmp_path):
    path = tmp_path / "products.json"
    path.write_text(json.dumps({"products": [{"name": "Gazelle", "price": 1899}]}), encoding="utf-8")
    assert load_products(str(path)) == [{"name": "Gazelle", "price": 1899}]


def test_seed_skips_invalid_rows(db, capsys):
    rows = [
        {"name": "Gazelle", "price": 1899.0, "stockQuantity": 4, "brand": "Adidas"},
        {"name": "", "price": 10.0},
    ]
    assert seed(rows, created_by="seed-test") == 1
    stored = list(db.rows("products").values())
    assert [p["name"] for p in stored] == ["Gazelle"]
    assert stored[0]["createdBy"] == "seed-test"
    assert "skipped" in capsys.readouterr().out


def test_seed_dry_run_writes_nothing(db):
    assert seed([{"name": "Gazelle", "price": 1899.0}], created_by="x", dry_run=True) == 0
    assert db.rows("products") == {}
