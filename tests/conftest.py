import logging

import pytest

from digital_register.schema import Field
from digital_register.store.memory import MemoryStore


def pytest_configure(config):
    # Set up a logger for the tests
    logging.basicConfig(
        level=logging.DEBUG, format="%(asctime)s [%(levelname)s] %(message)s"
    )


@pytest.fixture
def legislation_fields():
    return [
        Field(
            "legislation", "string", "Unique code or text that identifies the legislation."
        ),
        Field("name", "string", "Summary of types of products the legislation covers."),
    ]


@pytest.fixture
def product_fields():
    return [
        Field("product", "integer", "The NANDO unique identifier for these products."),
        Field("legislation", "curie", "The legislation covering the products."),
        Field("description", "string", "Description of product types covered."),
    ]


@pytest.fixture
def store():
    return MemoryStore()
