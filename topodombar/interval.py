class Interval:
    """
    half-open integer interval using 0-based coordinates. The start is included and the end is not
    """

    def __init__(self, start: int, end: int):
        """
        Args:
            start: the start of the interval (inclusive)
            end: the end of the interval (exclusive)
        """
        self.start = int(start)
        self.end = int(end)
        if self.start > self.end:
            raise AttributeError('interval start > end is not allowed', self.start, self.end)

    def __getitem__(self, index):
        try:
            index = int(index)
        except ValueError:
            raise IndexError('index input accessor must be an integer', index)
        if index == 0:
            return self.start
        elif index == 1:
            return self.end
        raise IndexError('index input accessor is out of bounds: 0 or 1 only', index)

    def __len__(self):
        """
        the length of the interval

        Example:
            >>> len(Interval(1, 11))
            10
            >>> len(Interval(5, 5))
            0
        """
        return Interval.length(self)

    def length(self):
        return self[1] - self[0]

    def __eq__(self, other):
        try:
            return self[0] == other[0] and self[1] == other[1]
        except (TypeError, IndexError):
            return False

    def __hash__(self):
        return hash((self.start, self.end))

    def __lt__(self, other):
        if self[0] < other[0]:
            return True
        elif self[0] == other[0] and self[1] < other[1]:
            return True
        return False

    def __repr__(self):
        return '{}({}, {})'.format(self.__class__.__name__, self.start, self.end)

    def __contains__(self, other):
        """
        Example:
            >>> Interval(1, 7) in Interval(0, 7)
            True
            >>> 7 in Interval(0, 7)
            False
        """
        try:
            if other[0] >= self[0] and other[1] <= self[1]:
                return True
        except TypeError:
            if other >= self[0] and other < self[1]:
                return True
        return False

    @classmethod
    def overlaps(cls, first, other) -> bool:
        """
        checks if two intervals have any portion of their given ranges in common

        Example:
            >>> Interval.overlaps(Interval(1, 4), Interval(4, 7))
            False
            >>> Interval.overlaps(Interval(1, 10), Interval(9, 11))
            True
            >>> Interval.overlaps((5, 5), (0, 10))
            True
        """
        return first[0] < other[1] and other[0] < first[1]

    @classmethod
    def dist(cls, first, other) -> int:
        """
        the number of positions between two intervals, 0 if they overlap or abut

        Example:
            >>> Interval.dist((1, 4), (6, 7))
            2
            >>> Interval.dist((6, 7), (1, 4))
            2
            >>> Interval.dist((5, 8), (7, 9))
            0
        """
        return max(other[0] - first[1], first[0] - other[1], 0)
