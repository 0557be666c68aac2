"""
annotation of CNVs with the boundaries, genes and enhancers they overlap or are adjacent to
"""
from typing import Dict, Optional

from ..genomic import Gene, GenomicElement, GenomicSet
from ..phenotype.data import PhenotypeData
from ..util import logger
from .base import CNVAnnotation
from .scoring import adjacent_phenogram_score, overlap_phenogram_score


def _overlapping(elements: GenomicSet, region: Optional[GenomicElement]) -> GenomicSet:
    if region is None:
        return GenomicSet()
    return GenomicSet(elements.any_overlap(region))


def boundary_overlap(
    annotations: Dict[str, CNVAnnotation], boundaries: GenomicSet[GenomicElement]
):
    """
    sets the boundaries completely contained in each CNV. Boundaries only partially overlapped
    by the CNV are not disrupted and are not included
    """
    disrupting = 0
    for ann in annotations.values():
        ann.boundary_overlap = GenomicSet(boundaries.completely_overlapped_by(ann.cnv))
        if ann.boundary_overlap:
            disrupting += 1
    logger.info(f'{disrupting} of {len(annotations)} CNVs overlap a boundary completely')


def annotate_overlapped_genes(annotations: Dict[str, CNVAnnotation], genes: GenomicSet[Gene]):
    """
    sets the genes which overlap each CNV by at least one position
    """
    for ann in annotations.values():
        ann.genes_in_overlap = _overlapping(genes, ann.cnv)


def annotate_adjacent_genes(annotations: Dict[str, CNVAnnotation], genes: GenomicSet[Gene]):
    """
    sets the genes overlapping the left and right adjacent regions of each CNV. Sides without an
    adjacent region get an empty set
    """
    for ann in annotations.values():
        ann.genes_in_left_region = _overlapping(genes, ann.left_adjacent_region)
        ann.genes_in_right_region = _overlapping(genes, ann.right_adjacent_region)


def annotate_adjacent_enhancers(
    annotations: Dict[str, CNVAnnotation], enhancers: GenomicSet[GenomicElement]
):
    """
    sets the enhancers overlapping the left and right adjacent regions of each CNV
    """
    for ann in annotations.values():
        ann.enhancers_in_left_region = _overlapping(enhancers, ann.left_adjacent_region)
        ann.enhancers_in_right_region = _overlapping(enhancers, ann.right_adjacent_region)


def annotate_overlap(
    annotations: Dict[str, CNVAnnotation],
    boundaries: GenomicSet[GenomicElement],
    genes: GenomicSet[Gene],
    phenotype_data: PhenotypeData,
):
    """
    runs the boundary overlap, the overlapped gene annotation and the overlap phenogram scoring
    """
    boundary_overlap(annotations, boundaries)
    annotate_overlapped_genes(annotations, genes)
    overlap_phenogram_score(annotations, phenotype_data)


def annotate_adjacent_regions(
    annotations: Dict[str, CNVAnnotation],
    genes: GenomicSet[Gene],
    enhancers: GenomicSet[GenomicElement],
    phenotype_data: PhenotypeData,
):
    """
    runs the adjacent gene and enhancer annotations and the adjacent phenogram scoring. The
    adjacent regions must have been defined already
    """
    annotate_adjacent_genes(annotations, genes)
    annotate_adjacent_enhancers(annotations, enhancers)
    adjacent_phenogram_score(annotations, phenotype_data)
