import bisect
import re
from operator import attrgetter
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, TypeVar

from .constants import LIST_DELIM, STRAND
from .error import DifferentChromosomeError
from .interval import Interval

if TYPE_CHECKING:
    from .phenotype.ontology import Term


class ReferenceName(str):
    """
    Class for reference sequence names. Ensures that hg19/hg38 chromosome names match.

    Example:
        >>> ReferenceName('chr1') == ReferenceName('1')
        True
    """

    def __eq__(self, other):
        options = {str(self)}
        if self.startswith('chr'):
            options.add(str(self[3:]))
        else:
            options.add('chr' + str(self))
        return other in options

    def __ne__(self, other):
        return not self.__eq__(other)

    def __hash__(self):
        return hash(re.sub('^chr', '', str(self)))

    def __lt__(self, other):
        self_std_repr = self if not self.startswith('chr') else self[3:]
        other_std_repr = other if not other.startswith('chr') else other[3:]
        return str.__lt__(self_std_repr, other_std_repr)

    def __gt__(self, other):
        self_std_repr = self if not self.startswith('chr') else self[3:]
        other_std_repr = other if not other.startswith('chr') else other[3:]
        return str.__gt__(self_std_repr, other_std_repr)

    def __ge__(self, other):
        if self == other:
            return True
        return self.__gt__(other)

    def __le__(self, other):
        if self == other:
            return True
        return self.__lt__(other)


class GenomicElement:
    """
    a named region on a chromosome. Coordinates are 0-based and half-open
    """

    def __init__(self, chr: str, start: int, end: int, name: Optional[str] = None):
        """
        Args:
            chr: the chromosome the element is on
            start: start of the element (inclusive)
            end: end of the element (exclusive)
            name: unique name of the element within its set

        Example:
            >>> e = GenomicElement('chr1', 10, 20, 'd1')
            >>> len(e)
            10
        """
        self.chr = ReferenceName(chr)
        self.position = Interval(start, end)
        self.name = name

    @property
    def start(self) -> int:
        """*int*: the start position"""
        return self.position.start

    @property
    def end(self) -> int:
        """*int*: the end position"""
        return self.position.end

    def __getitem__(self, index):
        return Interval.__getitem__(self, index)

    def __len__(self):
        return self.position.length()

    def key(self):
        """:class:`tuple`: a tuple representing the items expected to be unique. for hashing and comparing"""
        return (self.__class__.__name__, self.chr, self.position, self.name)

    def __eq__(self, other):
        if not hasattr(other, 'key'):
            return False
        return self.key() == other.key()

    def __hash__(self):
        return hash(self.key())

    def __lt__(self, other):
        if other.chr != self.chr:
            return self.chr < other.chr
        return self.position < other.position

    def overlaps(self, other: 'GenomicElement') -> bool:
        """
        True if both elements are on the same chromosome and share at least one position

        Example:
            >>> GenomicElement('1', 0, 10).overlaps(GenomicElement('1', 9, 12))
            True
            >>> GenomicElement('1', 0, 10).overlaps(GenomicElement('1', 10, 12))
            False
        """
        return self.chr == other.chr and Interval.overlaps(self, other)

    def distance(self, other: 'GenomicElement') -> int:
        """
        the gap between the nearer ends of the two elements, 0 if they overlap

        Raises:
            DifferentChromosomeError: the elements are on different chromosomes
        """
        if self.chr != other.chr:
            raise DifferentChromosomeError(
                'cannot compute distance between elements on different chromosomes', self, other
            )
        return Interval.dist(self, other)

    def contains(self, other: 'GenomicElement') -> bool:
        """True if the other element lies completely within this element"""
        return self.chr == other.chr and other.position in self.position

    def is_contained_in(self, other: 'GenomicElement') -> bool:
        return other.contains(self)

    def region_string(self) -> str:
        """
        Example:
            >>> GenomicElement('chr1', 0, 9).region_string()
            'chr1:0-9'
        """
        return f'{self.chr}:{self.start}-{self.end}'

    def to_dict(self):
        return {'chr': str(self.chr), 'start': self.start, 'end': self.end, 'name': self.name}

    def __repr__(self):
        cls = self.__class__.__name__
        return '{}({}:{}-{}, name={})'.format(cls, self.chr, self.start, self.end, self.name)


START_COORDINATE_ORDER = attrgetter('start')
"""sort key ordering elements by their start coordinate"""


class Gene(GenomicElement):
    def __init__(
        self,
        chr: str,
        start: int,
        end: int,
        name: str,
        strand: str = STRAND.NS,
        symbol: Optional[str] = None,
        phenotypes: Iterable['Term'] = (),
    ):
        """
        Args:
            strand: the strand the gene is on
            symbol: the gene symbol
            phenotypes: the phenotype terms the gene has been annotated with
        """
        GenomicElement.__init__(self, chr, start, end, name)
        self.strand = STRAND.enforce(strand)
        self.symbol = symbol if symbol is not None else name
        self.phenotypes = frozenset(phenotypes)


class CNV(GenomicElement):
    """
    a copy number (or other structural) variant of a patient and the phenotypes observed in the patient
    """

    def __init__(
        self,
        chr: str,
        start: int,
        end: int,
        name: str,
        cnv_type: str = '.',
        phenotypes: Iterable['Term'] = (),
        target_term: Optional['Term'] = None,
    ):
        """
        Args:
            cnv_type: free-form variant type (ex. DEL, DUP, inversion)
            phenotypes: the phenotype terms observed in the patient
            target_term: the coarse phenotype category used to look up genes associated with the phenotype
        """
        GenomicElement.__init__(self, chr, start, end, name)
        self.cnv_type = cnv_type
        self.phenotypes = frozenset(phenotypes)
        self.target_term = target_term

    def to_dict(self):
        row = GenomicElement.to_dict(self)
        row.update(
            {
                'type': self.cnv_type,
                'phenotypes': LIST_DELIM.join(sorted([t.id for t in self.phenotypes])),
                'target_term': self.target_term.id if self.target_term else None,
            }
        )
        return row


T = TypeVar('T', bound=GenomicElement)


class GenomicSet(Dict[str, T]):
    """
    insertion-ordered mapping of element names to elements. Each element is stored under its own name

    Example:
        >>> gs = GenomicSet([GenomicElement('1', 0, 10, 'd1')])
        >>> gs['d1']
        GenomicElement(1:0-10, name=d1)
    """

    def __init__(self, elements: Iterable[T] = ()):
        dict.__init__(self)
        self._index: Optional[Dict[ReferenceName, List[T]]] = None
        for element in elements:
            self.add(element)

    def __setitem__(self, key, value):
        if key != value.name:
            raise KeyError('element name must match the key it is stored under', key, value.name)
        dict.__setitem__(self, key, value)
        self._index = None

    def __delitem__(self, key):
        dict.__delitem__(self, key)
        self._index = None

    def pop(self, *pos):
        self._index = None
        return dict.pop(self, *pos)

    def popitem(self):
        self._index = None
        return dict.popitem(self)

    def clear(self):
        dict.clear(self)
        self._index = None

    def setdefault(self, key, default=None):
        if key not in self:
            self[key] = default
        return self[key]

    def update(self, *pos, **kwargs):
        for key, value in dict(*pos, **kwargs).items():
            self[key] = value

    def add(self, element: T):
        self[element.name] = element

    def by_chromosome(self) -> Dict[ReferenceName, List[T]]:
        """
        elements grouped by chromosome and sorted by start coordinate. Elements with equal
        start positions keep their insertion order
        """
        if self._index is None:
            index: Dict[ReferenceName, List[T]] = {}
            for element in self.values():
                index.setdefault(element.chr, []).append(element)
            for chr_elements in index.values():
                chr_elements.sort(key=START_COORDINATE_ORDER)
            self._index = index
            self._starts = {chr: [e.start for e in elements] for chr, elements in index.items()}
            self._max_length = {
                chr: max([len(e) for e in elements]) for chr, elements in index.items()
            }
        return self._index

    def any_overlap(self, region: GenomicElement) -> List[T]:
        """
        all elements sharing at least one position with the input region, ordered by start
        """
        index = self.by_chromosome()
        chr = ReferenceName(region.chr)
        if chr not in index:
            return []
        starts = self._starts[chr]
        first = bisect.bisect_left(starts, region.start - self._max_length[chr])
        last = bisect.bisect_left(starts, region.end)
        return [e for e in index[chr][first:last] if Interval.overlaps(e, region)]

    def completely_overlapped_by(self, region: GenomicElement) -> List[T]:
        """
        all elements lying completely inside the input region, ordered by start
        """
        index = self.by_chromosome()
        chr = ReferenceName(region.chr)
        if chr not in index:
            return []
        starts = self._starts[chr]
        first = bisect.bisect_left(starts, region.start)
        last = bisect.bisect_right(starts, region.end)
        return [e for e in index[chr][first:last] if e.end <= region.end]
