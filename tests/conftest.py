import copy

import pytest


SAMPLE_CATALOG = {
    "categories": [
        {
            "id": 1,
            "name": "Sorvetes",
            "items": [
                {
                    "id": 101,
                    "name": "Sacolé",
                    "description": "Sacolé de fruta",
                    "external_code": "SAC-01",
                    "price": 3.00,
                    "stock": 40,
                    "status": "ACTIVE",
                    "image": {"image_url": "https://img/sacole.png", "thumbnail_url": "https://img/sacole_t.png"},
                    "option_groups": [],
                },
                {
                    "id": 102,
                    "name": "Picolé",
                    "price": "6,50",
                    "status": "ACTIVE",
                    "image": {"image_url": "https://img/picole.png", "thumbnail_url": None},
                    "option_groups": [
                        {
                            "id": 900,
                            "name": "Sabor",
                            "options": [
                                {"id": 1, "name": "Uva", "price": 0, "stock": 5},
                                {"id": 2, "name": "Coco", "price": "7.5", "stock": "0", "status": "MISSING"},
                            ],
                        }
                    ],
                },
                {
                    "id": 103,
                    "name": "Brinde",
                    "price": 0,
                    "option_groups": [],
                },
            ],
        },
        {
            "id": 2,
            "name": "Bebidas",
            "items": [
                {
                    "id": 201,
                    "name": "Água",
                    "price": 2,
                    "stock": None,
                    "status": "INACTIVE",
                },
            ],
        },
    ]
}


@pytest.fixture
def sample_catalog():
    return copy.deepcopy(SAMPLE_CATALOG)


class FakeClient:
    def __init__(self, payload):
        self.payload = payload
        self.calls = 0

    def fetch_catalog(self):
        self.calls += 1
        return self.payload


@pytest.fixture
def fake_client(sample_catalog):
    return FakeClient(sample_catalog)
