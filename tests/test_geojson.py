"""Tests for core/geojson.py"""

from core.geojson import features_to_collection, row_to_feature


class TestRowToFeature:
    """row -> Feature"""

    def test_geometry_and_properties_split(self):
        point = {"type": "Point", "coordinates": [-73.99, 40.73]}
        row = {"id": 7, "species_common": "Zebra Mussel", "geom_geojson": point, "severity": 3}

        feature = row_to_feature(row)

        assert feature == {
            "type": "Feature",
            "geometry": point,
            "properties": {"id": 7, "species_common": "Zebra Mussel", "severity": 3},
        }

    def test_properties_keep_column_order(self):
        row = {"b": 1, "geom_geojson": None, "a": 2, "c": 3}
        assert list(row_to_feature(row)["properties"]) == ["b", "a", "c"]

    def test_missing_geometry_is_none(self):
        feature = row_to_feature({"id": 1})
        assert feature["geometry"] is None
        assert feature["properties"] == {"id": 1}

    def test_row_is_not_mutated(self):
        row = {"id": 1, "geom_geojson": {"type": "Point", "coordinates": [0, 0]}}
        row_to_feature(row)
        assert "geom_geojson" in row


class TestFeaturesToCollection:
    """Features -> FeatureCollection"""

    def test_empty(self):
        assert features_to_collection([]) == {"type": "FeatureCollection", "features": []}

    def test_order_preserved(self):
        features = [row_to_feature({"id": i, "geom_geojson": None}) for i in (3, 1, 2)]
        collection = features_to_collection(features)
        assert collection["type"] == "FeatureCollection"
        assert [f["properties"]["id"] for f in collection["features"]] == [3, 1, 2]

    def test_accepts_generator(self):
        collection = features_to_collection(row_to_feature({"id": i}) for i in range(2))
        assert len(collection["features"]) == 2
