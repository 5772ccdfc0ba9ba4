"""Shared fixtures for record store tests."""

from dataclasses import dataclass

import pytest
import yaml

from geomodel.abstractions.types import Point
from geomodel.config.config import Config
from geomodel.database import GeoModel, GeoStore


@dataclass
class Place(GeoModel):
    """Sample geocell-indexed record."""
    name: str = ''
    category: str = 'city'


@pytest.fixture
def make_config(tmp_path):
    """Build a Config from a geocells override section."""
    def _make(**geocells):
        config_path = tmp_path / f"config_{len(list(tmp_path.iterdir()))}.yml"
        with open(config_path, 'w') as f:
            yaml.dump({'geocells': geocells}, f)
        return Config(config_path)
    return _make


@pytest.fixture
def places():
    return [
        Place(location=Point(38.7223, -9.1393), name='Lisbon'),
        Place(location=Point(41.1579, -8.6291), name='Porto'),
        Place(location="40.4168,-3.7038", name='Madrid'),
        Place(location=Point(48.8566, 2.3522), name='Paris'),
        Place(location=Point(-33.8688, 151.2093), name='Sydney'),
        Place(location=Point(37.0194, -7.9304), name='Faro', category='town'),
    ]


@pytest.fixture
def store(make_config, places):
    """Store in the default (key) format holding the sample places."""
    geo_store = GeoStore('places', config=make_config(storage_format='key'))
    for place in places:
        geo_store.save(place)
    return geo_store


@pytest.fixture
def place_cls():
    """The sample record class."""
    return Place
