"""Tests for the in-memory geocell store."""

import logging

import pytest

from geomodel.abstractions.types import BoundingBox, ParseError, Point, UnsupportedQueryError
from geomodel.config import config as global_config
from geomodel.database import GeocellFormat, GeoStore
from geomodel.grid_systems import cell_bounds, encode, encode_all, select_resolution

IBERIA = BoundingBox(Point(36.0, -10.0), Point(42.5, -3.0))


def names(records):
    return [record.name for record in records]


class TestGeoStoreBasics:
    """Test record storage and equality queries."""

    def test_save_assigns_ids(self, store, places):
        assert len(store) == len(places)
        assert [place.record_id for place in places] == ['1', '2', '3', '4', '5', '6']
        assert store.get('1') is places[0]
        assert '6' in store

    def test_save_keeps_given_id(self, store, place_cls):
        record_id = store.save(place_cls(location=Point(1, 1), name='Custom', record_id='custom'))
        assert record_id == 'custom'
        assert store.get('custom').name == 'Custom'

    def test_save_computes_geocells(self, store, places):
        assert places[0].geocells == encode_all(Point(38.7223, -9.1393))
        # String locations are converted on save
        assert places[2].location == Point(40.4168, -3.7038)

    def test_all_with_filters(self, store):
        assert names(store.all(category='town')) == ['Faro']
        assert len(store.all()) == 6
        assert store.all(missing_attribute='x') == []

    def test_filter_geocells(self, store):
        lisbon_cell = encode(Point(38.7223, -9.1393), 7)
        assert names(store.filter_geocells([lisbon_cell])) == ['Lisbon']
        # Top-level cell '9' holds the Iberian peninsula
        assert names(store.filter_geocells(['9'])) == ['Lisbon', 'Porto', 'Madrid', 'Faro']
        assert names(store.filter_geocells(['9'], category='town')) == ['Faro']

    def test_resave_reindexes(self, store, places):
        lisbon = places[0]
        old_cell = lisbon.geocells[-1]

        lisbon.location = Point(-22.9068, -43.1729)
        store.save(lisbon)

        assert store.filter_geocells([old_cell]) == []
        assert names(store.filter_geocells([lisbon.geocells[-1]])) == ['Lisbon']
        assert len(store) == 6

    def test_delete(self, store, places):
        cell = places[0].geocells[-1]

        assert store.delete('1') is True
        assert store.delete('1') is False
        assert store.get('1') is None
        assert store.filter_geocells([cell]) == []
        assert len(store) == 5


class TestBoundingBoxQuery:
    """Test the two-step bounding box query."""

    def test_query(self, store):
        assert names(store.bounding_box_query(IBERIA)) == ['Lisbon', 'Porto', 'Madrid', 'Faro']

    def test_query_with_filters(self, store):
        assert names(store.bounding_box_query(IBERIA, category='town')) == ['Faro']

    def test_query_from_text(self, store):
        assert names(store.bounding_box_query(("36,-10", "42.5,-3"))) == \
            ['Lisbon', 'Porto', 'Madrid', 'Faro']

    def test_world_query(self, store, places):
        world = BoundingBox(Point(-90, -180), Point(90, 180))
        assert names(store.bounding_box_query(world)) == names(places)

    def test_unlocated_records_never_match(self, store, place_cls):
        store.save(place_cls(name='Nowhere'))
        world = BoundingBox(Point(-90, -180), Point(90, 180))
        assert 'Nowhere' not in names(store.bounding_box_query(world))

    def test_inverted_box_returns_nothing(self, store):
        assert store.bounding_box_query(BoundingBox(Point(42.5, -3.0), Point(36.0, -10.0))) == []

    def test_strict_inverted_box_raises(self, make_config, places):
        strict_store = GeoStore('strict', config=make_config(strict_queries=True))
        strict_store.save_many(places)

        with pytest.raises(UnsupportedQueryError):
            strict_store.bounding_box_query(BoundingBox(Point(0, 170), Point(10, -170)))

    def test_culling(self, make_config, place_cls):
        """Without culling the candidate cells leak nearby records."""
        query = BoundingBox(Point(38.7, -9.2), Point(38.8, -9.1))
        resolution = select_resolution(query)
        corner_cell = cell_bounds(encode(query.southwest, resolution))
        outside = place_cls(location=Point(corner_cell.south + 1e-6, corner_cell.west + 1e-6),
                            name='Outside')
        inside = place_cls(location=Point(38.75, -9.15), name='Inside')

        culled_store = GeoStore('culled', config=make_config(cull_results=True))
        raw_store = GeoStore('raw', config=make_config(cull_results=False))
        for geo_store in (culled_store, raw_store):
            geo_store.save_many([outside, inside])

        assert names(culled_store.bounding_box_query(query)) == ['Inside']
        assert names(raw_store.bounding_box_query(query)) == ['Outside', 'Inside']

    def test_hex_format_gives_same_results(self, make_config, places):
        hex_store = GeoStore('legacy', config=make_config(storage_format='hex'))
        hex_store.save_many(places)

        assert hex_store.storage_format is GeocellFormat.HEX
        assert all(isinstance(cell, int) for cell in places[0].geocells)
        assert names(hex_store.bounding_box_query(IBERIA)) == ['Lisbon', 'Porto', 'Madrid', 'Faro']

    def test_query_logs_performance(self, store, caplog):
        caplog.set_level(logging.DEBUG, logger='geomodel.operations')

        store.bounding_box_query(IBERIA)

        records = [r for r in caplog.records if getattr(r, 'performance', None)]
        assert records
        perf = records[-1].performance
        assert perf['operation'] == 'bounding_box_query'
        assert perf['status'] == 'success'
        assert perf['candidate_cells'] > 0
        assert records[-1].context['store'] == 'places'


class TestSaveMany:
    """Test batch indexing."""

    def test_matches_single_save(self, make_config, places):
        batch_store = GeoStore('batch', config=make_config())
        record_ids = batch_store.save_many(places)

        assert record_ids == ['1', '2', '3', '4', '5', '6']
        for place in places:
            assert place.geocells == encode_all(place.location)

    def test_mixed_located_and_unlocated(self, make_config, place_cls):
        batch_store = GeoStore('batch', config=make_config())
        records = [place_cls(name='Nowhere'), place_cls(location="1.5,2.5", name='Somewhere')]

        batch_store.save_many(records)

        assert records[0].geocells == []
        assert records[1].location == Point(1.5, 2.5)
        assert records[1].geocells == encode_all(Point(1.5, 2.5))

    def test_bad_location_leaves_batch_untouched(self, make_config, place_cls):
        batch_store = GeoStore('batch', config=make_config())
        records = [place_cls(location="1.5,2.5", name='Good'),
                   place_cls(location="north,east", name='Bad')]

        with pytest.raises(ParseError):
            batch_store.save_many(records)

        assert records[0].location == "1.5,2.5"
        assert records[0].geocells == []
        assert len(batch_store) == 0

    def test_point_rounded_below_cell_edge_is_found(self, make_config, place_cls):
        batch_store = GeoStore('batch', config=make_config())
        equator = place_cls(location=Point(-1e-17, 0.0), name='Equator')

        batch_store.save_many([equator])

        query = BoundingBox(Point(-0.5, -0.5), Point(0.5, 0.5))
        assert names(batch_store.bounding_box_query(query)) == ['Equator']


class TestStoreConfig:
    """Test store settings come from the given config."""

    def test_missing_storage_format_defaults_to_key(self, make_config, monkeypatch):
        store_config = make_config()
        del store_config.settings['geocells']['storage_format']
        monkeypatch.setitem(global_config.settings['geocells'], 'storage_format', 'hex')

        geo_store = GeoStore('isolated', config=store_config)

        assert geo_store.storage_format is GeocellFormat.KEY
