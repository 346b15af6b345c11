import pytest

from digital_register.item import Item, curie, parse_curie
from digital_register.schema import Field
from digital_register.utils.hash import hash_item

fields = [
    Field("body"),
    Field("name"),
    Field("products", "curie", "", "n"),
]


def test_item_accepts_declared_fields():
    item = Item({"body": "10001", "name": "Lift Co"}, fields=fields)
    item["products"] = ["product:1", "product:2"]
    assert item == {
        "body": "10001",
        "name": "Lift Co",
        "products": ["product:1", "product:2"],
    }


def test_item_rejects_undeclared_field():
    with pytest.raises(KeyError):
        Item({"body": "10001", "nmae": "Lift Co"}, fields=fields)


def test_item_checks_cardinality():
    with pytest.raises(ValueError):
        Item({"body": "10001", "products": "product:1"}, fields=fields)

    with pytest.raises(ValueError):
        Item({"body": ["10001"]}, fields=fields)


@pytest.mark.parametrize(
    "data",
    [
        {"body": "10001", "name": {"en": "Lift Co"}},
        {"body": "10001", "products": [["product:1"]]},
        {"body": "10001", "products": [{"product": "1"}]},
    ],
)
def test_item_rejects_nested_values(data):
    with pytest.raises(ValueError):
        Item(data, fields=fields)

    with pytest.raises(ValueError):
        Item(data)


def test_item_without_fields_accepts_any_field():
    item = Item({"custodian": "Simon Worthington"})
    assert item["custodian"] == "Simon Worthington"


def test_item_pack_and_hash():
    item = Item({"name": "Lift Co", "body": "10001"}, fields=fields)
    assert item.pack() == b'{"body":"10001","name":"Lift Co"}'
    assert item.hash() == hash_item({"body": "10001", "name": "Lift Co"})


def test_item_unpack():
    item = Item().unpack('{"body":"10001","name":"Lift Co"}')
    assert item["name"] == "Lift Co"


def test_curie():
    assert curie("legislation", "2014/33/EU") == "legislation:2014/33/EU"
    assert parse_curie("legislation:2014/33/EU") == ("legislation", "2014/33/EU")
    assert parse_curie("body-type:NB") == ("body-type", "NB")


def test_parse_curie_invalid():
    with pytest.raises(ValueError):
        parse_curie("2014/33/EU")
