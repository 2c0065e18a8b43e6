"""
Shared test fixtures: materials, fee schedule, configuration builders, test client.
"""

import pytest
from fastapi.testclient import TestClient

from worktop.main import app
from worktop.models import (
    Configuration,
    CutGeometry,
    FeeAmount,
    FeeSchedule,
    LeftJoinGeometry,
    Material,
    RightJoinGeometry,
)


def make_material(**overrides) -> Material:
    """600 × 3000 mm on-stock worktop, 10 000 / m, 27% VAT."""
    values = {
        "id": "m1",
        "name": "Egger F274 Concrete",
        "width": 600,
        "length": 3000,
        "thickness": 38,
        "price_per_meter": 10000,
        "on_stock": True,
        "vat_percent": 27,
        "currency": "HUF",
    }
    values.update(overrides)
    return Material(**values)


def make_fee_schedule(**overrides) -> FeeSchedule:
    """Gross-authoritative fees, VAT taken from the material."""
    values = {
        "cross_cut": FeeAmount(gross=3000),
        "length_cut_per_meter": FeeAmount(gross=1500),
        "radius_cut": FeeAmount(gross=5000),
        "angle_cut": FeeAmount(gross=4000),
        "cutout": FeeAmount(gross=8000),
        "edge_banding_per_meter": FeeAmount(gross=2500),
        "join": FeeAmount(gross=26000),
    }
    values.update(overrides)
    return FeeSchedule(**values)


def cut_config(a=1200, b=600, **overrides) -> Configuration:
    return Configuration(geometry=CutGeometry(a=a, b=b), material_id="m1", **overrides)


def left_join_config(a=800, b=600, c=1000, d=300, **overrides) -> Configuration:
    return Configuration(geometry=LeftJoinGeometry(a=a, b=b, c=c, d=d), material_id="m1", **overrides)


def right_join_config(a=2000, b=600, c=900, d=600, **overrides) -> Configuration:
    return Configuration(geometry=RightJoinGeometry(a=a, b=b, c=c, d=d), material_id="m1", **overrides)


@pytest.fixture
def material():
    return make_material()


@pytest.fixture
def materials(material):
    return {material.id: material}


@pytest.fixture
def fee_schedule():
    return make_fee_schedule()


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app)
