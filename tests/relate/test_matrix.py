"""Tests of the DE-9IM relation matrix."""

import pytest

import relatepy as rp

I = rp.Location.INTERIOR
B = rp.Location.BOUNDARY
E = rp.Location.EXTERIOR


class TestRelationMatrix:
    def test_initial_state(self):
        m = rp.RelationMatrix()
        assert str(m) == "FFFFFFFF2"
        assert not m.interrupt

    @pytest.mark.parametrize(
        "dimension, code", [(2, "2"), (3, "3"), (9, "9"), (12, "T")]
    )
    def test_dimension(self, dimension, code):
        m = rp.RelationMatrix(dimension)
        assert str(m) == "FFFFFFFF" + code
        assert m.get(E, E) == code
        assert not m.interrupt

    def test_interrupt_in_three_dimensions(self):
        m = rp.RelationMatrix(3)
        for row, col, code in [
            (I, I, "1"),
            (I, B, "0"),
            (I, E, "1"),
            (B, I, "0"),
            (B, B, "0"),
            (B, E, "0"),
            (E, I, "1"),
            (E, B, "0"),
        ]:
            m.update(row, col, code)
        assert m.interrupt
        assert m.matches("101000103")
        assert not m.matches("101000102")

    def test_update_upgrades_only(self):
        m = rp.RelationMatrix()
        m.update(I, I, "0")
        assert m.get(I, I) == "0"
        m.update(I, I, "1")
        assert m.get(I, I) == "1"
        # Never downgraded
        m.update(I, I, "0")
        m.update(I, I, "F")
        assert m[I, I] == "1"

    def test_update_transposed(self):
        m = rp.RelationMatrix()
        m.update(I, B, "0", transpose=True)
        assert m.get(B, I) == "0"
        assert m.get(I, B) == "F"

    def test_set_overrides(self):
        m = rp.RelationMatrix()
        m.update(I, E, "1")
        m.set(I, E, "F")
        assert m.get(I, E) == "F"

    @pytest.mark.parametrize("code", ["3x", "A", ""])
    def test_unknown_code(self, code):
        m = rp.RelationMatrix()
        with pytest.raises(ValueError):
            m.update(I, I, code)

    def test_interrupt(self):
        m = rp.RelationMatrix()
        updates = [
            (I, I, "1"),
            (I, B, "0"),
            (I, E, "1"),
            (B, I, "0"),
            (B, B, "0"),
            (B, E, "0"),
            (E, I, "1"),
        ]
        for row, col, code in updates:
            m.update(row, col, code)
            assert not m.interrupt

        m.update(E, B, "0")
        assert m.interrupt
        assert str(m) == "101000102"

    def test_transpose(self):
        m = rp.RelationMatrix()
        m.update(I, B, "0")
        m.update(E, I, "1")
        mt = m.transpose()
        assert str(mt) == "FF1" + "0FF" + "FF2"
        # The original is unchanged
        assert str(m) == "F0FFFF1F2"

    def test_transposed_matrix_is_not_downgraded(self):
        m = rp.RelationMatrix()
        m.update(I, E, "1")
        mt = m.transpose()
        mt.update(E, I, "0")
        assert mt.get(E, I) == "1"
        mt.update(I, E, "0")
        assert mt.get(I, E) == "0"

    def test_equality(self):
        m = rp.RelationMatrix()
        m.update(I, I, "0")
        other = rp.RelationMatrix()
        other.update(I, I, "0")
        assert m == other
        assert m == "0FFFFFFF2"
        assert hash(m) == hash(other)
        assert repr(m) == "RelationMatrix('0FFFFFFF2')"


class TestMatches:
    @pytest.fixture
    def matrix(self):
        m = rp.RelationMatrix()
        m.update(I, I, "1")
        m.update(B, B, "0")
        return m

    @pytest.mark.parametrize(
        "mask, expected",
        [
            ("*********", True),
            ("1FFF0FFF2", True),
            ("T*F**FFF*", True),
            ("t*f**fff*", True),
            ("0********", False),
            ("F********", False),
            ("****1****", False),
            ("**T******", False),
        ],
    )
    def test_masks(self, matrix, mask, expected):
        assert matrix.matches(mask) == expected

    @pytest.mark.parametrize("mask", ["T*F", "T*F**FFF**", "T*F**FXF*"])
    def test_malformed_mask(self, matrix, mask):
        with pytest.raises(ValueError):
            matrix.matches(mask)
