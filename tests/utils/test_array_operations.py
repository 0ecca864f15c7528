""" """

from __future__ import annotations

import numpy as np

from relatepy import array_operations


class TestUniquifyPoints:
    def test_no_duplicates(self):
        p = np.array([[0, 1, 2], [0, 0, 1]])
        p_unique, new_2_old, old_2_new = array_operations.uniquify_point_set(p)

        assert np.allclose(p_unique, p)
        assert np.all(new_2_old == [0, 1, 2])
        assert np.all(old_2_new == [0, 1, 2])

    def test_duplicates_within_tolerance(self):
        p = np.array([[0, 1, 0, 2, 1], [0, 0, 1e-12, 0, 0]])
        p_unique, new_2_old, old_2_new = array_operations.uniquify_point_set(p)

        # The first occurrence is kept
        assert np.allclose(p_unique, np.array([[0, 1, 2], [0, 0, 0]]))
        assert np.all(new_2_old == [0, 1, 3])
        assert np.all(old_2_new == [0, 1, 0, 2, 1])

    def test_tolerance(self):
        p = np.array([[0, 0.01], [0, 0]])
        p_unique, _, _ = array_operations.uniquify_point_set(p, tol=0.1)
        assert p_unique.shape == (2, 1)

        p_unique, _, _ = array_operations.uniquify_point_set(p, tol=1e-3)
        assert p_unique.shape == (2, 2)

    def test_empty(self):
        p = np.zeros((2, 0))
        p_unique, new_2_old, old_2_new = array_operations.uniquify_point_set(p)
        assert p_unique.shape == (2, 0)
        assert new_2_old.size == 0
        assert old_2_new.size == 0


def test_count_coinciding_points():
    pset = np.array([[0, 1, 0, 1], [0, 0, 0, 1]])
    assert array_operations.count_coinciding_points(np.array([0, 0]), pset) == 2
    assert array_operations.count_coinciding_points(np.array([1, 1]), pset) == 1
    assert array_operations.count_coinciding_points(np.array([2, 2]), pset) == 0
    assert array_operations.count_coinciding_points([0, 0], np.zeros((2, 0))) == 0
