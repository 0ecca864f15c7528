"""Tests of the linear geometry classes and their construction."""

import numpy as np
import pytest

import relatepy as rp

LinestringKind = rp.LinestringKind


class TestLinestring:
    def test_points_as_pairs(self):
        ls = rp.Linestring([(0, 0), (1, 0), (1, 2)])
        assert ls.pts.shape == (2, 3)
        assert np.allclose(ls.pts, np.array([[0, 1, 1], [0, 0, 2]]))
        assert ls.num_points == 3
        assert ls.num_segments == 2
        assert len(ls) == 3

    def test_points_as_columns(self):
        # Numpy arrays follow the column convention
        ls = rp.Linestring(np.array([[0, 1, 1], [0, 0, 2]]))
        assert np.allclose(ls.front(), [0, 0])
        assert np.allclose(ls.back(), [1, 2])

    def test_segment(self):
        ls = rp.Linestring([(0, 0), (1, 0), (1, 2)])
        start, end = ls.segment(1)
        assert np.allclose(start, [1, 0])
        assert np.allclose(end, [1, 2])

    def test_consecutive_duplicates_removed(self):
        ls = rp.Linestring([(0, 0), (0, 0), (1, 0), (1, 1e-12), (2, 0)])
        assert ls.num_points == 3
        assert np.allclose(ls.pts, np.array([[0, 1, 2], [0, 0, 0]]))

    def test_non_consecutive_duplicates_kept(self):
        ls = rp.Linestring([(0, 0), (1, 0), (0, 0)])
        assert ls.num_points == 3

    def test_coordinates_are_read_only(self):
        ls = rp.Linestring([(0, 0), (1, 0)])
        with pytest.raises(ValueError):
            ls.pts[0, 0] = 3

    def test_empty(self):
        ls = rp.Linestring([])
        assert ls.num_points == 0
        assert ls.num_segments == 0

    @pytest.mark.parametrize(
        "points",
        [
            # Three-dimensional coordinates
            [(0, 0, 0), (1, 0, 0)],
            # Not finite
            [(0, np.nan), (1, 0)],
            [(0, 0), (np.inf, 0)],
        ],
    )
    def test_invalid_coordinates(self, points):
        with pytest.raises(ValueError):
            rp.Linestring(points)

    def test_components(self):
        ls = rp.Linestring([(0, 0), (1, 0)])
        assert ls.components() == [ls]
        assert ls.sub_geometry(rp.SegmentId(0, rp.NO_RING, 0)) is ls


class TestMultiLinestring:
    def test_construction_from_coordinates(self):
        multi = rp.MultiLinestring([[(0, 0), (1, 0)], [(2, 2)]])
        assert len(multi) == 2
        assert multi[0].num_points == 2
        assert multi[1].num_points == 1
        assert all(isinstance(ls, rp.Linestring) for ls in multi)

    def test_sub_geometry(self):
        ls_0 = rp.Linestring([(0, 0), (1, 0)])
        ls_1 = rp.Linestring([(0, 1), (1, 1), (1, 2)])
        multi = rp.MultiLinestring([ls_0, ls_1])

        assert multi.sub_geometry(rp.SegmentId(1, rp.NO_RING, 1)) is ls_1
        assert multi.components() == [ls_0, ls_1]


class TestSegmentId:
    def test_ordering(self):
        ids = [
            rp.SegmentId(1, rp.NO_RING, 0),
            rp.SegmentId(0, rp.NO_RING, 2),
            rp.SegmentId(0, rp.NO_RING, 1),
        ]
        assert sorted(ids) == [ids[2], ids[1], ids[0]]

    def test_same_range(self):
        a = rp.SegmentId(0, rp.NO_RING, 0)
        assert a.same_range(rp.SegmentId(0, rp.NO_RING, 3))
        assert not a.same_range(rp.SegmentId(1, rp.NO_RING, 0))


class TestAsLinearGeometry:
    def test_linestring_unchanged(self):
        ls = rp.Linestring([(0, 0), (1, 0)])
        assert rp.as_linear_geometry(ls) is ls

    def test_array_is_linestring(self):
        geom = rp.as_linear_geometry(np.array([[0, 1], [0, 0]]))
        assert isinstance(geom, rp.Linestring)
        assert geom.num_points == 2

    def test_list_of_points_is_linestring(self):
        geom = rp.as_linear_geometry([(0, 0), (1, 0)])
        assert isinstance(geom, rp.Linestring)

    def test_single_point(self):
        geom = rp.as_linear_geometry([1, 2])
        assert isinstance(geom, rp.Linestring)
        assert geom.num_points == 1
        assert np.allclose(geom.front(), [1, 2])

    def test_nested_list_is_multi_linestring(self):
        geom = rp.as_linear_geometry([[(0, 0), (1, 0)], [(0, 1), (1, 1)]])
        assert isinstance(geom, rp.MultiLinestring)
        assert len(geom) == 2

    def test_list_of_linestrings(self):
        geom = rp.as_linear_geometry([rp.Linestring([(0, 0), (1, 0)])])
        assert isinstance(geom, rp.MultiLinestring)

    def test_empty(self):
        geom = rp.as_linear_geometry([])
        assert isinstance(geom, rp.Linestring)
        assert geom.num_points == 0

    @pytest.mark.parametrize(
        "geometry, num_points",
        [
            ([[], [(0, 0), (1, 0)]], [0, 2]),
            ([[], [], [(0, 0), (1, 0), (1, 1)]], [0, 0, 3]),
            ([[(0, 0), (1, 0)], []], [2, 0]),
            ([[], []], [0, 0]),
        ],
    )
    def test_multi_linestring_with_empty_components(self, geometry, num_points):
        geom = rp.as_linear_geometry(geometry)
        assert isinstance(geom, rp.MultiLinestring)
        assert [ls.num_points for ls in geom] == num_points


@pytest.mark.parametrize(
    "points, kind",
    [
        ([], LinestringKind.EMPTY),
        ([(0, 0)], LinestringKind.POINT),
        # All points coincide
        ([(0, 0), (0, 0), (0, 0)], LinestringKind.POINT),
        ([(0, 0), (1, 0), (0, 0)], LinestringKind.CLOSED),
        ([(0, 0), (1, 0), (1, 1), (0, 0)], LinestringKind.CLOSED),
        ([(0, 0), (1, 0)], LinestringKind.OPEN),
        ([(0, 0), (1, 0), (1, 1)], LinestringKind.OPEN),
    ],
)
def test_check_linestring_kind(points, kind):
    ls = rp.Linestring(points)
    assert rp.check_linestring_kind(ls) == kind
    assert ls.kind() == kind
