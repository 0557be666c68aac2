"""
phenogram scores of the genes overlapped by and adjacent to each CNV
"""
from typing import Dict, Iterable

from ..genomic import Gene
from ..phenotype.data import PhenotypeData
from ..phenotype.ontology import Term
from .base import CNVAnnotation


def gene_set_score(
    phenotype_data: PhenotypeData, phenotypes: Iterable[Term], genes: Iterable[Gene]
) -> float:
    """
    the highest phenomatch score of any gene in the set, 0.0 for an empty set

    Args:
        phenotype_data: ontology and gene annotations used to compute term similarity
        phenotypes: the phenotype terms of the patient
        genes: the genes to score
    """
    phenotypes = list(phenotypes)
    return max(
        [phenotype_data.phenomatch_score(phenotypes, gene.phenotypes) for gene in genes],
        default=0.0,
    )


def overlap_phenogram_score(annotations: Dict[str, CNVAnnotation], phenotype_data: PhenotypeData):
    """
    sets the overlap phenogram score of each CNV from its overlapped genes
    """
    for ann in annotations.values():
        ann.overlap_phenogram_score = gene_set_score(
            phenotype_data, ann.cnv.phenotypes, ann.genes_in_overlap.values()
        )


def adjacent_phenogram_score(annotations: Dict[str, CNVAnnotation], phenotype_data: PhenotypeData):
    """
    sets the left and right adjacent phenogram scores of each CNV from the genes in its left and
    right adjacent regions
    """
    for ann in annotations.values():
        ann.left_adjacent_phenogram_score = gene_set_score(
            phenotype_data, ann.cnv.phenotypes, ann.genes_in_left_region.values()
        )
        ann.right_adjacent_phenogram_score = gene_set_score(
            phenotype_data, ann.cnv.phenotypes, ann.genes_in_right_region.values()
        )


def phenogram_score(annotations: Dict[str, CNVAnnotation], phenotype_data: PhenotypeData):
    """
    sets the overlap and the adjacent phenogram scores of each CNV
    """
    overlap_phenogram_score(annotations, phenotype_data)
    adjacent_phenogram_score(annotations, phenotype_data)
