import os
import time
from typing import Dict, Iterable, List, Optional, Tuple

from ..constants import DEFAULT_REGION_SIZE, MECHANISM, REGION_MODE
from ..domains import boundaries_from_domains
from ..genomic import CNV, Gene, GenomicElement, GenomicSet
from ..phenotype.data import PhenotypeData
from ..phenotype.file_io import load_phenotype_data
from ..util import generate_complete_stamp, logger, mkdirp, output_tabbed_file
from .base import CNVAnnotation, initialize_annotations
from .constants import PASS_FILENAME
from .file_io import (
    TargetTerm,
    load_cnvs,
    load_elements,
    load_genes,
    load_target_terms,
    target_terms_of,
)
from .mechanism import (
    annotate_enhancer_adoption,
    annotate_enhancer_adoption_low_g,
    annotate_inversion_enhancer_adoption,
    annotate_tandem_duplication_enhancer_adoption,
    annotate_tdbd,
    annotate_tdbd_by_score,
)
from .regions import (
    define_adjacent_regions_by_distance,
    define_adjacent_regions_by_domains,
    define_overlapped_domain_regions,
)
from .variant import annotate_adjacent_regions, annotate_overlap


def _by_type(annotations: Dict[str, CNVAnnotation], cnv_types: Iterable[str]):
    cnv_types = set(cnv_types)
    return {name: ann for name, ann in annotations.items() if ann.cnv.cnv_type in cnv_types}


def _enhancer_groups(
    annotations: Dict[str, CNVAnnotation],
    enhancers: GenomicSet[GenomicElement],
    target_terms: Optional[List[TargetTerm]] = None,
) -> List[Tuple[GenomicSet[GenomicElement], Dict[str, CNVAnnotation]]]:
    """
    groups the CNVs by the enhancer set they should be annotated with. CNVs with one of the target
    terms use the enhancers of that term, all others use the general enhancers
    """
    if not target_terms:
        return [(enhancers, annotations)]
    groups = []
    remaining = dict(annotations)
    for target in target_terms:
        subset = {
            name: ann for name, ann in remaining.items() if ann.cnv.target_term == target.term
        }
        for name in subset:
            del remaining[name]
        logger.info(f'{len(subset)} CNVs with target term {target.term.id} ({target.name})')
        groups.append((target.enhancers, subset))
    if remaining:
        groups.append((enhancers, remaining))
    return groups


def annotate_cnvs(
    cnvs: GenomicSet[CNV],
    domains: GenomicSet[GenomicElement],
    boundaries: GenomicSet[GenomicElement],
    genes: GenomicSet[Gene],
    enhancers: GenomicSet[GenomicElement],
    phenotype_data: PhenotypeData,
    mechanisms: Iterable[str] = MECHANISM.values(),
    region_mode: str = REGION_MODE.DOMAINS,
    region_size: int = DEFAULT_REGION_SIZE,
    duplication_types: Iterable[str] = (),
    inversion_types: Iterable[str] = (),
    target_terms: Optional[List[TargetTerm]] = None,
) -> Dict[str, CNVAnnotation]:
    """
    runs all annotation passes in order and classifies the CNVs by the given mechanisms

    Args:
        cnvs: the CNVs to annotate
        domains: topological domains
        boundaries: boundaries between the domains
        genes: genes with their phenotype terms
        enhancers: enhancers used for CNVs without a target term specific enhancer set
        phenotype_data: the ontology and gene annotations used for the phenogram scores
        mechanisms: the mechanisms to classify by
        region_mode: how the adjacent regions are defined
        region_size: size of the adjacent regions when defined by distance
        duplication_types: CNV types classified by tandem duplication enhancer adoption
        inversion_types: CNV types classified by inversion enhancer adoption
        target_terms: target terms and their enhancers

    Returns:
        the annotations keyed by CNV name, in the order of the input CNVs
    """
    mechanisms = [MECHANISM.enforce(m) for m in mechanisms]
    annotations = initialize_annotations(cnvs.values())

    logger.info(f'defining adjacent regions by {REGION_MODE.enforce(region_mode)}')
    if region_mode == REGION_MODE.DOMAINS:
        define_adjacent_regions_by_domains(annotations, domains)
    else:
        define_adjacent_regions_by_distance(annotations, region_size)
    define_overlapped_domain_regions(annotations, domains)

    logger.info('annotating overlapped boundaries and genes')
    annotate_overlap(annotations, boundaries, genes, phenotype_data)

    groups = _enhancer_groups(annotations, enhancers, target_terms)
    logger.info('annotating adjacent genes and enhancers')
    for group_enhancers, group in groups:
        annotate_adjacent_regions(group, genes, group_enhancers, phenotype_data)

    target_term_genes = phenotype_data.target_term_genes(target_terms_of(cnvs.values()))

    if MECHANISM.TDBD in mechanisms:
        annotate_tdbd(annotations, target_term_genes)
    if MECHANISM.NEW_TDBD in mechanisms:
        annotate_tdbd_by_score(annotations)
    if MECHANISM.EA in mechanisms:
        annotate_enhancer_adoption(annotations, target_term_genes)
    if MECHANISM.EA_LOW_G in mechanisms:
        annotate_enhancer_adoption_low_g(annotations, target_term_genes)
    for group_enhancers, group in groups:
        if MECHANISM.TANDUP_EA in mechanisms:
            annotate_tandem_duplication_enhancer_adoption(
                _by_type(group, duplication_types), genes, group_enhancers, phenotype_data
            )
        if MECHANISM.INV_EA in mechanisms:
            annotate_inversion_enhancer_adoption(
                _by_type(group, inversion_types), genes, group_enhancers, phenotype_data
            )
    return annotations


def read_cnv_inputs(inputs: List[str], phenotype_data: PhenotypeData, global_phenotype=None):
    """
    reads the CNVs from all input files

    Raises:
        KeyError: the same CNV name is used in more than one input file
    """
    cnvs: GenomicSet[CNV] = GenomicSet()
    for filename in inputs:
        for cnv in load_cnvs(filename, phenotype_data.ontology, global_phenotype).values():
            if cnv.name in cnvs:
                raise KeyError(f'duplicate CNV name ({cnv.name}) in input file: {filename}')
            cnvs.add(cnv)
    logger.info(f'read {len(cnvs)} CNVs')
    return cnvs


def main(
    inputs: List[str],
    output: str,
    config: Dict,
    start_time=int(time.time()),
    **kwargs,
):
    """
    Args:
        inputs: list of CNV input files to read
        output: path to the output directory
        config: the validated config
    """
    phenotype_data = load_phenotype_data(
        config['reference.ontology'], config['reference.gene_phenotypes']
    )
    global_phenotype = None
    if config['cnvs.global_phenotype']:
        global_phenotype = phenotype_data.get_term(config['cnvs.global_phenotype'])
        logger.info(f'using the global phenotype {global_phenotype} for all CNVs')
    cnvs = read_cnv_inputs(inputs, phenotype_data, global_phenotype)

    domains = load_elements(config['reference.domains'])
    if config['reference.boundaries']:
        boundaries = load_elements(config['reference.boundaries'])
    else:
        boundaries = boundaries_from_domains(domains, config['boundaries.max_length'])
    genes = load_genes(config['reference.genes'], phenotype_data.gene_phenotypes)
    enhancers: GenomicSet[GenomicElement] = GenomicSet()
    if config['reference.enhancers']:
        enhancers = load_elements(config['reference.enhancers'])
    target_terms = None
    if config['reference.target_terms']:
        target_terms = load_target_terms(config['reference.target_terms'], phenotype_data.ontology)

    annotations = annotate_cnvs(
        cnvs,
        domains,
        boundaries,
        genes,
        enhancers,
        phenotype_data,
        mechanisms=config['classify.mechanisms'],
        region_mode=config['regions.mode'],
        region_size=config['regions.size'],
        duplication_types=config['classify.duplication_types'],
        inversion_types=config['classify.inversion_types'],
        target_terms=target_terms,
    )

    mkdirp(output)
    output_tabbed_file(annotations.values(), os.path.join(output, PASS_FILENAME))
    generate_complete_stamp(output, start_time=start_time)
