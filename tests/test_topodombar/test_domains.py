import itertools

from topodombar.annotate.file_io import load_elements
from topodombar.domains import boundaries_from_domains
from topodombar.genomic import GenomicElement, GenomicSet

from ..util import get_data


def _domains(*coords, chr='chr1'):
    return GenomicSet(
        [GenomicElement(chr, start, end, f'd{i}') for i, (start, end) in enumerate(coords, 1)]
    )


class TestBoundariesFromDomains:
    def test_toy_example(self):
        domains = load_elements(get_data('toy_example', 'domains.tab'))
        boundaries = boundaries_from_domains(domains)
        assert list(boundaries.keys()) == ['b_1', 'b_2']
        assert (boundaries['b_1'].start, boundaries['b_1'].end) == (12, 15)
        assert (boundaries['b_2'].start, boundaries['b_2'].end) == (37, 40)

    def test_unsorted_input(self):
        boundaries = boundaries_from_domains(_domains((40, 60), (0, 12), (15, 37)))
        assert [(b.start, b.end) for b in boundaries.values()] == [(12, 15), (37, 40)]

    def test_gap_too_long(self):
        boundaries = boundaries_from_domains(_domains((0, 10), (20, 30), (31, 40)), max_length=5)
        assert [(b.start, b.end) for b in boundaries.values()] == [(30, 31)]
        assert list(boundaries.keys()) == ['b_1']

    def test_gap_equal_to_max_length(self):
        boundaries = boundaries_from_domains(_domains((0, 10), (15, 30)), max_length=5)
        assert len(boundaries) == 1

    def test_default_max_length(self):
        boundaries = boundaries_from_domains(_domains((0, 10), (400010, 400020)))
        assert [(b.start, b.end) for b in boundaries.values()] == [(10, 400010)]
        assert len(boundaries_from_domains(_domains((0, 10), (400011, 400020)))) == 0

    def test_adjacent_domains_extended(self):
        boundaries = boundaries_from_domains(_domains((0, 10), (10, 20)))
        assert [(b.start, b.end) for b in boundaries.values()] == [(10, 11)]

    def test_overlapping_domains_skipped(self):
        boundaries = boundaries_from_domains(_domains((0, 10), (8, 20), (25, 30)))
        assert [(b.start, b.end) for b in boundaries.values()] == [(20, 25)]

    def test_multiple_chromosomes(self):
        domains = _domains((0, 10), (12, 20))
        domains.add(GenomicElement('chr2', 0, 5, 'x1'))
        domains.add(GenomicElement('chr2', 7, 9, 'x2'))
        boundaries = boundaries_from_domains(domains)
        assert [(b.chr, b.start, b.end, b.name) for b in boundaries.values()] == [
            ('chr1', 10, 12, 'b_1'),
            ('chr2', 5, 7, 'b_2'),
        ]

    def test_shared_counter(self):
        counter = itertools.count(1)
        first = boundaries_from_domains(_domains((0, 10), (12, 20)), counter=counter)
        second = boundaries_from_domains(_domains((0, 10), (12, 20), chr='chr2'), counter=counter)
        assert list(first.keys()) == ['b_1']
        assert list(second.keys()) == ['b_2']

    def test_single_domain(self):
        assert len(boundaries_from_domains(_domains((0, 10)))) == 0
