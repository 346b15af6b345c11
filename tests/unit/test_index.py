from digital_register.index import Index, index_values
from digital_register.item import Item


def product(n, legislation, description="Lifts"):
    return Item({"product": n, "legislation": legislation, "description": description})


def test_index_values():
    assert index_values(None) == []
    assert index_values("a") == ["a"]
    assert index_values(["a", "b", "a", None]) == ["a", "b"]


def test_find_in_insertion_order():
    index = Index()
    index.add_index("legislation")
    items = [
        product(1, "legislation:a"),
        product(2, "legislation:b"),
        product(3, "legislation:a"),
    ]
    for item in items:
        index.add(item)

    assert index.find("legislation", "legislation:a") == [items[0], items[2]]
    assert index.find("legislation", "legislation:b") == [items[1]]
    assert index.find("legislation", "legislation:c") == []
    assert index.find("description", "Lifts") == []


def test_missing_attribute_is_not_indexed():
    index = Index()
    index.add_index("legislation")
    index.add(Item({"product": 1}))
    assert index.keys("legislation") == []


def test_find_unhashable_value():
    index = Index()
    index.add_index("legislation")
    assert index.find("legislation", ["legislation:a"]) == []


def test_many_values_are_indexed_by_element():
    index = Index()
    index.add_index("products")
    body = Item({"body": "1", "products": ["product:1", "product:2", "product:1"]})
    index.add(body)

    assert index.find("products", "product:1") == [body]
    assert index.find("products", "product:2") == [body]


def test_add_index_back_fills():
    index = Index()
    items = [product(1, "legislation:a"), product(2, "legislation:b")]
    index.add_index("legislation", items)
    assert index.find("legislation", "legislation:b") == [items[1]]
    assert "legislation" in index
    assert "description" not in index


def test_items_and_keys():
    index = Index()
    index.add_index("product")
    items = [product(1, "a"), product(2, "b"), product(1, "c")]
    for item in items:
        index.add(item)

    assert index.keys("product") == [1, 2]
    assert index.items("product") == [items[0], items[2], items[1]]


def test_collisions():
    index = Index()
    index.add_index("product")
    for item in [
        product(1, "legislation:a"),
        product(1, "legislation:b"),
        product(2, "legislation:a"),
        product(3, "legislation:a"),
        product(3, "legislation:a"),
    ]:
        index.add(item)

    # the same item seen twice is not a collision
    assert index.collisions("product") == [1]


def test_normalised_values_share_a_bucket():
    index = Index()
    index.add_index("product", normalise=str)
    items = [Item({"product": 1}), Item({"product": "1"})]
    for item in items:
        index.add(item)

    assert index.keys("product") == ["1"]
    assert index.find("product", 1) == items
    assert index.find("product", "1") == items
    assert index.collisions("product") == ["1"]
