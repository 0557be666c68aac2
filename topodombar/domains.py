"""
derivation of topological domain boundaries from a set of domains
"""
import itertools
from typing import Iterator, Optional

from .constants import MAX_BOUNDARY_LENGTH
from .genomic import START_COORDINATE_ORDER, GenomicElement, GenomicSet
from .util import logger


def boundaries_from_domains(
    domains: GenomicSet[GenomicElement],
    max_length: int = MAX_BOUNDARY_LENGTH,
    counter: Optional[Iterator[int]] = None,
) -> GenomicSet[GenomicElement]:
    """
    the boundaries are the gaps between consecutive domains on the same chromosome. Gaps
    longer than max_length are not considered boundaries. Boundaries of length zero are extended
    by one position so that they can still be overlapped

    Args:
        domains: non-overlapping topological domains
        max_length: the maximum gap between two domains which is still called a boundary
        counter: numbers the boundaries (b_1, b_2, ...) in the order they are found. The numbering
            continues across chromosomes. Pass an existing counter to continue a previous numbering

    Returns:
        the boundaries

    Example:
        >>> domains = GenomicSet([GenomicElement('1', 0, 12, 'd1'), GenomicElement('1', 15, 37, 'd2')])
        >>> boundaries_from_domains(domains)
        {'b_1': GenomicElement(1:12-15, name=b_1)}
    """
    if counter is None:
        counter = itertools.count(1)
    boundaries: GenomicSet[GenomicElement] = GenomicSet()

    domains_by_chr = {}
    for domain in domains.values():
        domains_by_chr.setdefault(domain.chr, []).append(domain)

    for chr, chr_domains in domains_by_chr.items():
        chr_domains = sorted(chr_domains, key=START_COORDINATE_ORDER)
        for left, right in zip(chr_domains, chr_domains[1:]):
            gap = right.start - left.end
            if gap < 0:
                logger.warning(f'skipping overlapping domains {left} and {right}')
                continue
            elif gap > max_length:
                continue
            end = right.start if gap > 0 else right.start + 1
            boundaries.add(GenomicElement(chr, left.end, end, f'b_{next(counter)}'))
    logger.info(f'derived {len(boundaries)} boundaries from {len(domains)} domains')
    return boundaries
