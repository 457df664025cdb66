# tests/test_products.py
def test_root_greeting_needs_no_key(client):
    r = client.get("/")
    assert r.status_code == 200
    assert r.text == "Welcome to the Product API! Try /api/products or /api/products/stats"


def test_list_defaults_to_first_page_of_three(client, auth):
    r = client.get("/api/products", headers=auth)
    assert r.status_code == 200
    body = r.json()
    assert body["total"] == 5
    assert body["page"] == 1
    assert body["limit"] == 3
    assert [p["id"] for p in body["results"]] == ["1", "2", "3"]


def test_filter_by_category(client, auth):
    body = client.get("/api/products?category=electronics&limit=10", headers=auth).json()
    assert body["total"] == 3
    assert len(body["results"]) == 3
    assert all(p["category"] == "electronics" for p in body["results"])


def test_category_filter_ignores_case(client, auth):
    body = client.get("/api/products", params={"category": "KITCHEN"}, headers=auth).json()
    assert body["total"] == 2
    assert {p["name"] for p in body["results"]} == {"Coffee Maker", "Blender"}


def test_search_is_case_insensitive_substring_on_name(client, auth):
    body = client.get("/api/products", params={"search": "PHONE"}, headers=auth).json()
    assert [p["name"] for p in body["results"]] == ["Smartphone", "Headphones"]
    assert body["total"] == 2


def test_search_and_category_combine(client, auth):
    body = client.get("/api/products", params={"search": "e", "category": "kitchen", "limit": 10}, headers=auth).json()
    assert {p["name"] for p in body["results"]} == {"Coffee Maker", "Blender"}


def test_pagination_total_is_independent_of_page(client, auth):
    seen = []
    for page in (1, 2, 3):
        body = client.get("/api/products", params={"page": page, "limit": 2}, headers=auth).json()
        assert body["total"] == 5
        assert len(body["results"]) <= 2
        seen.extend(p["id"] for p in body["results"])
    assert seen == ["1", "2", "3", "4", "5"]


def test_page_past_the_end_is_empty(client, auth):
    body = client.get("/api/products", params={"page": 10}, headers=auth).json()
    assert body["results"] == []
    assert body["total"] == 5
    assert body["page"] == 10


def test_non_numeric_page_yields_no_results(client, auth):
    r = client.get("/api/products", params={"page": "abc"}, headers=auth)
    assert r.status_code == 200
    body = r.json()
    assert body["page"] is None
    assert body["results"] == []
    assert body["total"] == 5


def test_zero_limit_yields_no_results(client, auth):
    body = client.get("/api/products", params={"limit": 0}, headers=auth).json()
    assert body["limit"] == 0
    assert body["results"] == []


def test_get_one(client, auth):
    r = client.get("/api/products/3", headers=auth)
    assert r.status_code == 200
    assert r.json() == {
        "id": "3",
        "name": "Coffee Maker",
        "description": "Programmable coffee maker with timer",
        "price": 50,
        "category": "kitchen",
        "inStock": False,
    }


def test_get_missing_is_404(client, auth):
    r = client.get("/api/products/99", headers=auth)
    assert r.status_code == 404
    assert r.json() == {"error": "Product not found"}


def test_create_appends_with_generated_id(client, auth, new_product):
    r = client.post("/api/products", json=new_product, headers=auth)
    assert r.status_code == 201
    created = r.json()
    assert created["id"] not in {"1", "2", "3", "4", "5"}
    assert {k: v for k, v in created.items() if k != "id"} == new_product

    body = client.get("/api/products", params={"limit": 10}, headers=auth).json()
    assert body["total"] == 6
    assert body["results"][-1]["id"] == created["id"]


def test_create_accepts_zero_price_and_false_stock(client, auth, new_product):
    new_product.update(price=0, inStock=False)
    r = client.post("/api/products", json=new_product, headers=auth)
    assert r.status_code == 201
    assert r.json()["price"] == 0
    assert r.json()["inStock"] is False


def test_create_ids_are_unique(client, auth, new_product):
    ids = {client.post("/api/products", json=new_product, headers=auth).json()["id"] for _ in range(25)}
    assert len(ids) == 25


def test_create_with_missing_field_is_400(client, auth, new_product):
    for field in ("name", "description", "price", "category", "inStock"):
        body = dict(new_product)
        del body[field]
        r = client.post("/api/products", json=body, headers=auth)
        assert r.status_code == 400, field
        assert r.json() == {"error": "All product fields are required"}


def test_create_with_null_or_empty_fields_is_400(client, auth, new_product):
    for field, value in (("price", None), ("inStock", None), ("name", ""), ("category", "")):
        body = dict(new_product, **{field: value})
        r = client.post("/api/products", json=body, headers=auth)
        assert r.status_code == 400, field


def test_create_with_empty_body_is_400(client, auth):
    r = client.post("/api/products", headers=auth)
    assert r.status_code == 400
    assert r.json() == {"error": "All product fields are required"}


def test_create_with_wrong_types_is_400(client, auth, new_product):
    r = client.post("/api/products", json=dict(new_product, price="cheap"), headers=auth)
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid value for 'price': Input should be a valid number"}


def test_create_does_not_coerce_strings(client, auth, store, new_product):
    for field, value in (("price", "5"), ("price", True), ("inStock", "yes"), ("inStock", 1)):
        r = client.post("/api/products", json=dict(new_product, **{field: value}), headers=auth)
        assert r.status_code == 400, (field, value)
        assert r.json()["error"].startswith(f"Invalid value for '{field}'")
    assert len(store) == 5


def _raw_json(auth):
    return dict(auth, **{"content-type": "application/json"})


def test_create_rejects_non_finite_price(client, auth, store):
    for literal in (b"1e999", b"-1e999", b"NaN", b"Infinity"):
        body = b'{"name":"Big","description":"Huge","price":' + literal + b',"category":"c","inStock":true}'
        r = client.post("/api/products", content=body, headers=_raw_json(auth))
        assert r.status_code == 400, literal
        assert r.json() == {"error": "Invalid value for 'price': Input should be a finite number"}
    assert len(store) == 5
    listed = client.get("/api/products", params={"limit": 10}, headers=auth)
    assert listed.status_code == 200
    assert listed.json()["total"] == 5


def test_update_rejects_non_finite_price(client, auth):
    before = client.get("/api/products/1", headers=auth).json()
    r = client.put("/api/products/1", content=b'{"price":1e999}', headers=_raw_json(auth))
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid value for 'price': Input should be a finite number"}
    after = client.get("/api/products/1", headers=auth)
    assert after.status_code == 200
    assert after.json() == before


def test_float_prices_are_accepted(client, auth, new_product):
    r = client.post("/api/products", json=dict(new_product, price=19.99), headers=auth)
    assert r.status_code == 201
    assert r.json()["price"] == 19.99


def test_create_with_non_object_body_is_400(client, auth):
    r = client.post("/api/products", json=["Kettle"], headers=auth)
    assert r.status_code == 400
    assert "error" in r.json()


def test_create_with_malformed_json_is_400(client, auth):
    r = client.post("/api/products", content=b"{not json", headers=dict(auth, **{"content-type": "application/json"}))
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid JSON body"}


def test_update_only_price(client, auth):
    before = client.get("/api/products/1", headers=auth).json()
    r = client.put("/api/products/1", json={"price": 999}, headers=auth)
    assert r.status_code == 200
    assert r.json() == dict(before, price=999)
    assert client.get("/api/products/1", headers=auth).json() == dict(before, price=999)


def test_update_ignores_nulls_and_id(client, auth):
    before = client.get("/api/products/2", headers=auth).json()
    r = client.put("/api/products/2", json={"id": "hijack", "name": None, "inStock": False}, headers=auth)
    assert r.status_code == 200
    assert r.json() == dict(before, inStock=False)
    assert client.get("/api/products/hijack", headers=auth).status_code == 404


def test_update_with_empty_body_changes_nothing(client, auth):
    before = client.get("/api/products/4", headers=auth).json()
    r = client.put("/api/products/4", headers=auth)
    assert r.status_code == 200
    assert r.json() == before


def test_update_missing_is_404(client, auth):
    r = client.put("/api/products/99", json={"price": 1}, headers=auth)
    assert r.status_code == 404
    assert r.json() == {"error": "Product not found"}


def test_delete_removes_exactly_one_and_keeps_order(client, auth):
    r = client.delete("/api/products/2", headers=auth)
    assert r.status_code == 200
    body = r.json()
    assert body["message"] == "Product deleted successfully"
    assert [p["id"] for p in body["deleted"]] == ["2"]

    remaining = client.get("/api/products", params={"limit": 10}, headers=auth).json()
    assert [p["id"] for p in remaining["results"]] == ["1", "3", "4", "5"]


def test_second_delete_is_404(client, auth):
    assert client.delete("/api/products/5", headers=auth).status_code == 200
    r = client.delete("/api/products/5", headers=auth)
    assert r.status_code == 404
    assert r.json() == {"error": "Product not found"}


def test_stats_counts_by_category(client, auth):
    r = client.get("/api/products/stats", headers=auth)
    assert r.status_code == 200
    assert r.json() == {"totalProducts": 5, "countByCategory": {"electronics": 3, "kitchen": 2}}


def test_stats_keeps_raw_category_casing(client, auth, new_product):
    client.post("/api/products", json=dict(new_product, category="Kitchen"), headers=auth)
    stats = client.get("/api/products/stats", headers=auth).json()
    assert stats["countByCategory"] == {"electronics": 3, "kitchen": 2, "Kitchen": 1}
    assert sum(stats["countByCategory"].values()) == stats["totalProducts"] == 6

    # the filter folds case, so both spellings match
    listed = client.get("/api/products", params={"category": "kitchen"}, headers=auth).json()
    assert listed["total"] == 3
