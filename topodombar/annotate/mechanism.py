"""
classification of CNVs by the pathogenic mechanism which could explain the patient phenotype

Each classify_* function decides the effect of a single annotated CNV and has no side effects.
The annotate_* functions apply them to a collection of annotations and store the effect under
their own mechanism key only
"""
from typing import Dict, Iterable, Mapping, Optional, Set

from ..constants import (
    EA_EFFECT,
    EA_LOW_G_EFFECT,
    INV_EA_EFFECT,
    MECHANISM,
    TANDUP_EA_EFFECT,
    TDBD_EFFECT,
)
from ..error import NotSpecifiedError
from ..genomic import Gene, GenomicElement, GenomicSet
from ..phenotype.data import PhenotypeData
from ..phenotype.ontology import Term
from ..util import logger
from .base import CNVAnnotation

TargetTermGenes = Mapping[Term, Set[str]]


def _is_target_gene(gene: Gene, target_genes: Set[str]) -> bool:
    return gene.name in target_genes or gene.symbol in target_genes


def _any_target_gene(genes: Iterable[Gene], target_genes: Set[str]) -> bool:
    return any([_is_target_gene(gene, target_genes) for gene in genes])


def _target_genes(ann: CNVAnnotation, target_term_genes: TargetTermGenes) -> Set[str]:
    if ann.cnv.target_term is None:
        return set()
    return target_term_genes.get(ann.cnv.target_term, set())


def _elements_in(elements: GenomicSet, region: Optional[GenomicElement]):
    if region is None:
        return []
    return elements.any_overlap(region)


def _has_relevant_gene(
    genes: Iterable[Gene], phenotypes: Iterable[Term], phenotype_data: PhenotypeData
) -> bool:
    """True if any of the genes has a phenomatch score above zero"""
    phenotypes = list(phenotypes)
    return any([phenotype_data.phenomatch_score(phenotypes, g.phenotypes) > 0 for g in genes])


def _require(**inputs):
    for name, value in inputs.items():
        if value is None:
            raise NotSpecifiedError(f'missing required input: {name}')


def classify_tdbd(ann: CNVAnnotation, target_genes: Set[str]) -> str:
    """
    Args:
        ann: the annotated CNV
        target_genes: names of the genes associated with the target term of the CNV

    Returns:
        TDBD when the CNV disrupts a boundary and a target gene is adjacent to it (Mixed when a
        target gene is also overlapped), GDE when a target gene is overlapped, otherwise NoData
    """
    overlaps_target = _any_target_gene(ann.genes_in_overlap.values(), target_genes)
    if ann.has_boundary_overlap() and (
        _any_target_gene(ann.genes_in_left_region.values(), target_genes)
        or _any_target_gene(ann.genes_in_right_region.values(), target_genes)
    ):
        return TDBD_EFFECT.MIXED if overlaps_target else TDBD_EFFECT.TDBD
    elif overlaps_target:
        return TDBD_EFFECT.GDE
    return TDBD_EFFECT.NO_DATA


def classify_tdbd_by_score(ann: CNVAnnotation) -> str:
    """
    same outcomes as :func:`classify_tdbd` using the phenogram scores instead of the target genes
    """
    adjacent_score = max(ann.left_adjacent_phenogram_score, ann.right_adjacent_phenogram_score)
    overlap_score = ann.overlap_phenogram_score
    if ann.has_boundary_overlap():
        if adjacent_score > overlap_score:
            return TDBD_EFFECT.TDBD
        elif adjacent_score > 0 and overlap_score > 0:
            return TDBD_EFFECT.MIXED
    if overlap_score > 0:
        return TDBD_EFFECT.GDE
    return TDBD_EFFECT.NO_DATA


def _enhancer_adoption_sides(ann: CNVAnnotation, target_genes: Set[str]):
    """
    whether an enhancer on the left side meets a target gene on the right side and vice versa
    """
    left_to_right = bool(ann.enhancers_in_left_region) and _any_target_gene(
        ann.genes_in_right_region.values(), target_genes
    )
    right_to_left = bool(ann.enhancers_in_right_region) and _any_target_gene(
        ann.genes_in_left_region.values(), target_genes
    )
    return left_to_right, right_to_left


def classify_enhancer_adoption(ann: CNVAnnotation, target_genes: Set[str]) -> str:
    """
    EA when the CNV disrupts a boundary and brings an enhancer from one side together with a target
    gene on the other side. Otherwise GDE when a target gene is overlapped, else NoData
    """
    left_to_right, right_to_left = _enhancer_adoption_sides(ann, target_genes)
    if ann.has_boundary_overlap() and (left_to_right or right_to_left):
        return EA_EFFECT.EA
    elif _any_target_gene(ann.genes_in_overlap.values(), target_genes):
        return EA_EFFECT.GDE
    return EA_EFFECT.NO_DATA


def classify_enhancer_adoption_low_g(ann: CNVAnnotation, target_genes: Set[str]) -> str:
    """
    EAlowG when the enhancer adoption configuration holds, no target gene is overlapped and the
    overlapped genes score lower than the genes on the side of the adopted target gene
    """
    overlaps_target = _any_target_gene(ann.genes_in_overlap.values(), target_genes)
    if ann.has_boundary_overlap() and not overlaps_target:
        left_to_right, right_to_left = _enhancer_adoption_sides(ann, target_genes)
        if (left_to_right and ann.overlap_phenogram_score < ann.right_adjacent_phenogram_score) or (
            right_to_left and ann.overlap_phenogram_score < ann.left_adjacent_phenogram_score
        ):
            return EA_LOW_G_EFFECT.EA_LOW_G
    if overlaps_target:
        return EA_LOW_G_EFFECT.GDE
    return EA_LOW_G_EFFECT.NO_DATA


def classify_tandem_duplication_enhancer_adoption(
    ann: CNVAnnotation,
    genes: GenomicSet[Gene],
    enhancers: GenomicSet[GenomicElement],
    phenotype_data: PhenotypeData,
) -> str:
    """
    a tandem duplication of a boundary places the copy of the enhancers in the left overlapped domain
    region next to the copy of the genes in the right overlapped domain region (and vice versa)

    Returns:
        TanDupEA when the duplication disrupts a boundary and an enhancer in one overlapped domain
        region meets a gene with a non-zero phenomatch score in the other. Otherwise onlyGDE when the
        overlapped genes have a non-zero phenogram score, else NoData
    """
    if ann.has_boundary_overlap():
        phenotypes = ann.cnv.phenotypes
        left, right = ann.left_overlapped_domain_region, ann.right_overlapped_domain_region
        if (
            _elements_in(enhancers, left)
            and _has_relevant_gene(_elements_in(genes, right), phenotypes, phenotype_data)
        ) or (
            _elements_in(enhancers, right)
            and _has_relevant_gene(_elements_in(genes, left), phenotypes, phenotype_data)
        ):
            return TANDUP_EA_EFFECT.TANDUP_EA
    if ann.overlap_phenogram_score > 0:
        return TANDUP_EA_EFFECT.ONLY_GDE
    return TANDUP_EA_EFFECT.NO_DATA


def classify_inversion_enhancer_adoption(
    ann: CNVAnnotation,
    genes: GenomicSet[Gene],
    enhancers: GenomicSet[GenomicElement],
    phenotype_data: PhenotypeData,
) -> str:
    """
    an inversion moves the content of each overlapped domain region to the opposite side, next to
    the adjacent region on that side

    Returns:
        EnhancerInvEA when an enhancer is moved next to a gene with a non-zero phenomatch score,
        GeneInvEA when such a gene is moved next to an enhancer, otherwise noInvEA. Both require the
        inversion to disrupt a boundary
    """
    if not ann.has_boundary_overlap():
        return INV_EA_EFFECT.NO_INV_EA
    phenotypes = ann.cnv.phenotypes
    left, right = ann.left_overlapped_domain_region, ann.right_overlapped_domain_region

    if (
        _elements_in(enhancers, left)
        and _has_relevant_gene(ann.genes_in_right_region.values(), phenotypes, phenotype_data)
    ) or (
        _elements_in(enhancers, right)
        and _has_relevant_gene(ann.genes_in_left_region.values(), phenotypes, phenotype_data)
    ):
        return INV_EA_EFFECT.ENHANCER_INV_EA

    if (
        _has_relevant_gene(_elements_in(genes, left), phenotypes, phenotype_data)
        and ann.enhancers_in_right_region
    ) or (
        _has_relevant_gene(_elements_in(genes, right), phenotypes, phenotype_data)
        and ann.enhancers_in_left_region
    ):
        return INV_EA_EFFECT.GENE_INV_EA
    return INV_EA_EFFECT.NO_INV_EA


def _log_effects(annotations: Dict[str, CNVAnnotation], mechanism: str):
    counts: Dict[str, int] = {}
    for ann in annotations.values():
        effect = ann.effect_mechanisms.get(mechanism)
        counts[effect] = counts.get(effect, 0) + 1
    logger.info(
        f'{mechanism} effects: '
        + ', '.join([f'{effect}={count}' for effect, count in sorted(counts.items())])
    )


def annotate_tdbd(
    annotations: Dict[str, CNVAnnotation], target_term_genes: Optional[TargetTermGenes]
):
    """
    Args:
        annotations: annotations keyed by CNV name
        target_term_genes: names of the genes associated with each target term

    Raises:
        NotSpecifiedError: the target term genes were not given
    """
    _require(target_term_genes=target_term_genes)
    for ann in annotations.values():
        ann.effect_mechanisms[MECHANISM.TDBD] = classify_tdbd(
            ann, _target_genes(ann, target_term_genes)
        )
    _log_effects(annotations, MECHANISM.TDBD)


def annotate_tdbd_by_score(annotations: Dict[str, CNVAnnotation]):
    for ann in annotations.values():
        ann.effect_mechanisms[MECHANISM.NEW_TDBD] = classify_tdbd_by_score(ann)
    _log_effects(annotations, MECHANISM.NEW_TDBD)


def annotate_enhancer_adoption(
    annotations: Dict[str, CNVAnnotation], target_term_genes: Optional[TargetTermGenes]
):
    _require(target_term_genes=target_term_genes)
    for ann in annotations.values():
        ann.effect_mechanisms[MECHANISM.EA] = classify_enhancer_adoption(
            ann, _target_genes(ann, target_term_genes)
        )
    _log_effects(annotations, MECHANISM.EA)


def annotate_enhancer_adoption_low_g(
    annotations: Dict[str, CNVAnnotation], target_term_genes: Optional[TargetTermGenes]
):
    _require(target_term_genes=target_term_genes)
    for ann in annotations.values():
        ann.effect_mechanisms[MECHANISM.EA_LOW_G] = classify_enhancer_adoption_low_g(
            ann, _target_genes(ann, target_term_genes)
        )
    _log_effects(annotations, MECHANISM.EA_LOW_G)


def annotate_tandem_duplication_enhancer_adoption(
    annotations: Dict[str, CNVAnnotation],
    genes: Optional[GenomicSet[Gene]],
    enhancers: Optional[GenomicSet[GenomicElement]],
    phenotype_data: Optional[PhenotypeData],
):
    """
    Raises:
        NotSpecifiedError: the genes, enhancers or phenotype data were not given
    """
    _require(genes=genes, enhancers=enhancers, phenotype_data=phenotype_data)
    for ann in annotations.values():
        ann.effect_mechanisms[MECHANISM.TANDUP_EA] = classify_tandem_duplication_enhancer_adoption(
            ann, genes, enhancers, phenotype_data
        )
    _log_effects(annotations, MECHANISM.TANDUP_EA)


def annotate_inversion_enhancer_adoption(
    annotations: Dict[str, CNVAnnotation],
    genes: Optional[GenomicSet[Gene]],
    enhancers: Optional[GenomicSet[GenomicElement]],
    phenotype_data: Optional[PhenotypeData],
):
    _require(genes=genes, enhancers=enhancers, phenotype_data=phenotype_data)
    for ann in annotations.values():
        ann.effect_mechanisms[MECHANISM.INV_EA] = classify_inversion_enhancer_adoption(
            ann, genes, enhancers, phenotype_data
        )
    _log_effects(annotations, MECHANISM.INV_EA)
