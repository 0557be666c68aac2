import pytest

from topodombar.interval import Interval


class TestInterval:
    def test___init__error(self):
        with pytest.raises(AttributeError):
            Interval(4, 3)

    def test_zero_length(self):
        assert len(Interval(5, 5)) == 0

    def test___contains__(self):
        assert Interval(1, 2) in Interval(1, 7)
        assert not Interval(1, 7) in Interval(1, 2)
        assert Interval(0, 7) in Interval(0, 7)
        assert 1 in Interval(1, 7)
        assert 0 not in Interval(1, 7)
        assert 7 not in Interval(1, 7)

    def test_eq(self):
        assert Interval(1, 2) == Interval(1, 2)
        assert Interval(1, 2) == (1, 2)

    def test_ne(self):
        assert Interval(1, 2) != Interval(1, 3)
        assert Interval(1, 2) != 'x'

    def test___get_item__(self):
        temp = Interval(1, 2)
        assert temp[0] == 1
        assert temp[1] == 2
        with pytest.raises(IndexError):
            temp[3]
        with pytest.raises(IndexError):
            temp[-1]
        with pytest.raises(IndexError):
            temp['1b']

    def test___lt__(self):
        assert Interval(1, 4) < Interval(2, 3)
        assert Interval(1, 3) < Interval(1, 4)
        assert not Interval(1, 4) < Interval(1, 4)
        assert sorted([Interval(5, 6), Interval(1, 9), Interval(1, 2)]) == [
            Interval(1, 2),
            Interval(1, 9),
            Interval(5, 6),
        ]

    def test_overlaps(self):
        left = Interval(0, 4)
        middle = Interval(3, 10)
        right = Interval(10, 12)
        assert Interval.overlaps(left, middle)
        assert Interval.overlaps(middle, left)
        assert not Interval.overlaps(middle, right)
        assert not Interval.overlaps(right, middle)
        assert not Interval.overlaps(left, right)

    def test_overlaps_zero_length(self):
        assert Interval.overlaps((5, 5), (0, 10))
        assert not Interval.overlaps((0, 0), (0, 10))
        assert not Interval.overlaps((10, 10), (0, 10))

    def test_dist(self):
        assert Interval.dist((1, 4), (6, 7)) == 2
        assert Interval.dist((6, 7), (1, 4)) == 2
        assert Interval.dist((1, 4), (4, 7)) == 0
        assert Interval.dist((1, 10), (4, 7)) == 0

    def test_hash(self):
        assert len({Interval(1, 2), Interval(1, 2), Interval(1, 3)}) == 2
