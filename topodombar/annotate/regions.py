"""
definition of the regions flanking a CNV and the parts of domains a CNV overlaps
"""
from typing import Dict, Optional

from ..genomic import CNV, GenomicElement, GenomicSet
from ..util import logger
from .base import CNVAnnotation


def _left_domain(cnv: CNV, domains: GenomicSet[GenomicElement]) -> Optional[GenomicElement]:
    """
    the domain the left edge of the CNV falls into, otherwise the closest domain ending before it
    """
    containing = domains.any_overlap(GenomicElement(cnv.chr, cnv.start, cnv.start + 1))
    if containing:
        return min(containing, key=lambda d: d.start)
    preceding = [d for d in domains.by_chromosome().get(cnv.chr, []) if d.end <= cnv.start]
    if not preceding:
        return None
    return max(preceding, key=lambda d: d.end)


def _right_domain(cnv: CNV, domains: GenomicSet[GenomicElement]) -> Optional[GenomicElement]:
    """
    the domain the right edge of the CNV falls into, otherwise the closest domain starting after it
    """
    containing = domains.any_overlap(GenomicElement(cnv.chr, cnv.end - 1, cnv.end))
    if containing:
        return max(containing, key=lambda d: d.end)
    following = [d for d in domains.by_chromosome().get(cnv.chr, []) if d.start >= cnv.end]
    if not following:
        return None
    return min(following, key=lambda d: d.start)


def define_adjacent_regions_by_domains(
    annotations: Dict[str, CNVAnnotation], domains: GenomicSet[GenomicElement]
):
    """
    the left adjacent region spans from the start of the domain the CNV starts in (or the closest
    domain before the CNV) up to the CNV start. The right adjacent region spans from the CNV end up
    to the end of the domain the CNV ends in (or the closest domain after the CNV). A side without
    any such domain has no adjacent region

    Args:
        annotations: annotations keyed by CNV name
        domains: the topological domains
    """
    for ann in annotations.values():
        cnv = ann.cnv
        left = _left_domain(cnv, domains)
        right = _right_domain(cnv, domains)
        ann.left_adjacent_region = (
            GenomicElement(cnv.chr, left.start, cnv.start, f'{cnv.name}_left')
            if left is not None
            else None
        )
        ann.right_adjacent_region = (
            GenomicElement(cnv.chr, cnv.end, right.end, f'{cnv.name}_right')
            if right is not None
            else None
        )
        logger.debug(
            f'{cnv.name} adjacent regions: {ann.left_adjacent_region} {ann.right_adjacent_region}'
        )


def define_adjacent_regions_by_distance(annotations: Dict[str, CNVAnnotation], region_size: int):
    """
    the adjacent regions are windows of region_size abutting the CNV on either side. The left
    window is clipped at position 0

    Args:
        annotations: annotations keyed by CNV name
        region_size: the length of each adjacent region
    """
    if region_size < 0:
        raise ValueError('region size must not be negative', region_size)
    for ann in annotations.values():
        cnv = ann.cnv
        ann.left_adjacent_region = GenomicElement(
            cnv.chr, max(0, cnv.start - region_size), cnv.start, f'{cnv.name}_left'
        )
        ann.right_adjacent_region = GenomicElement(
            cnv.chr, cnv.end, cnv.end + region_size, f'{cnv.name}_right'
        )


def define_overlapped_domain_regions(
    annotations: Dict[str, CNVAnnotation], domains: GenomicSet[GenomicElement]
):
    """
    the left overlapped domain region is the part of the domain containing the CNV start that lies
    within the CNV, the right one is the part of the domain containing the last position of the
    CNV. When no domain contains the edge the region is empty and sits at that edge of the CNV

    Args:
        annotations: annotations keyed by CNV name
        domains: the topological domains
    """
    for ann in annotations.values():
        cnv = ann.cnv
        left = domains.any_overlap(GenomicElement(cnv.chr, cnv.start, cnv.start + 1))
        right = domains.any_overlap(GenomicElement(cnv.chr, cnv.end - 1, cnv.end))
        if left:
            end = min(min([d.end for d in left]), cnv.end)
            ann.left_overlapped_domain_region = GenomicElement(
                cnv.chr, cnv.start, end, f'{cnv.name}_left_overlapped'
            )
        else:
            ann.left_overlapped_domain_region = GenomicElement(
                cnv.chr, cnv.start, cnv.start, f'{cnv.name}_left_overlapped'
            )
        if right:
            start = max(max([d.start for d in right]), cnv.start)
            ann.right_overlapped_domain_region = GenomicElement(
                cnv.chr, start, cnv.end, f'{cnv.name}_right_overlapped'
            )
        else:
            ann.right_overlapped_domain_region = GenomicElement(
                cnv.chr, cnv.end, cnv.end, f'{cnv.name}_right_overlapped'
            )
