"""
module which holds all functions relating to loading the tab-delimited input files

All files are tab-delimited without a header line. Lines starting with # are ignored and
coordinates are 0-based half-open. When the names in column 4 are missing or not unique, every
name is made unique by appending the number of times it has been seen (ex. ID_1, ID_2)
"""
import os
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Set, Tuple

import pandas as pd

from ..constants import DEFAULT_ELEMENT_NAME, LIST_DELIM, STRAND
from ..error import InputFormatError
from ..genomic import CNV, Gene, GenomicElement, GenomicSet
from ..phenotype.ontology import PhenotypeOntology, Term
from ..util import logger


@dataclass
class TargetTerm:
    """
    a coarse phenotype category and the enhancers active in the corresponding tissue
    """

    term: Term
    name: str
    enhancers: GenomicSet[GenomicElement]


def _read_tab(
    filename: str, min_columns: int, max_columns: int
) -> List[Tuple[int, List[str]]]:
    """
    read the records of a headerless tab-delimited file. Records may have any number of columns
    between min_columns and max_columns, columns beyond max_columns are ignored

    Returns:
        the record number and the list of non-empty fields of each record
    """
    try:
        df = pd.read_csv(
            filename,
            sep='\t',
            header=None,
            names=range(max_columns),
            usecols=range(max_columns),
            index_col=False,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
    except pd.errors.EmptyDataError:
        return []
    except pd.errors.ParserError as err:
        raise InputFormatError(filename, f'could not parse columns: {err}')
    df = df.fillna('')
    records = []
    for record_no, row in enumerate(df.itertuples(index=False, name=None), start=1):
        fields = [str(f).strip() for f in row]
        if fields[0].startswith('#'):
            continue
        while fields and not fields[-1]:
            fields.pop()
        if len(fields) < min_columns:
            raise InputFormatError(
                filename,
                f'wrong number of columns. Expected at least {min_columns} but found {len(fields)}',
                record_no,
            )
        records.append((record_no, fields))
    return records


def _parse_coordinates(filename: str, record_no: int, fields: List[str]) -> Tuple[str, int, int]:
    try:
        start = int(fields[1])
        end = int(fields[2])
    except ValueError:
        raise InputFormatError(filename, f'non-integer coordinates: {fields[1:3]}', record_no)
    if start >= end:
        raise InputFormatError(
            filename, f'start ({start}) must be less than end ({end})', record_no
        )
    return fields[0], start, end


def unique_names(names: Iterable[str]) -> List[str]:
    """
    leaves the names unchanged when they are all distinct, otherwise appends to each name the
    number of times that name has been seen so far

    Example:
        >>> unique_names(['a', 'b'])
        ['a', 'b']
        >>> unique_names(['a', 'b', 'a'])
        ['a_1', 'b_1', 'a_2']
    """
    names = list(names)
    if len(set(names)) == len(names):
        return names
    counts: Dict[str, int] = {}
    result = []
    for name in names:
        counts[name] = counts.get(name, 0) + 1
        result.append(f'{name}_{counts[name]}')
    return result


def _named_records(filename: str, min_columns: int, max_columns: int):
    records = _read_tab(filename, min_columns, max_columns)
    names = unique_names(
        [fields[3] if len(fields) > 3 else DEFAULT_ELEMENT_NAME for _, fields in records]
    )
    for (record_no, fields), name in zip(records, names):
        chr, start, end = _parse_coordinates(filename, record_no, fields)
        yield record_no, fields, chr, start, end, name


def _column(fields: List[str], index: int, default=None):
    if len(fields) > index and fields[index]:
        return fields[index]
    return default


def load_elements(filename: str) -> GenomicSet[GenomicElement]:
    """
    reads a file of genomic elements (domains, boundaries or enhancers) with the columns:
    chr, start, end, [name]
    """
    logger.info(f'loading: {filename}')
    elements: GenomicSet[GenomicElement] = GenomicSet()
    for _, _, chr, start, end, name in _named_records(filename, 3, 4):
        elements.add(GenomicElement(chr, start, end, name))
    logger.info(f'loaded {len(elements)} elements')
    return elements


def load_genes(
    filename: str, gene_phenotypes: Optional[Mapping[str, Iterable[Term]]] = None
) -> GenomicSet[Gene]:
    """
    reads a file of genes with the columns: chr, start, end, name, [strand], [symbol]

    Args:
        filename: path to the gene file
        gene_phenotypes: phenotype terms keyed by gene identifier (the name column). Genes without
            an entry have no phenotype terms
    """
    logger.info(f'loading: {filename}')
    gene_phenotypes = {} if gene_phenotypes is None else gene_phenotypes
    genes: GenomicSet[Gene] = GenomicSet()
    for record_no, fields, chr, start, end, name in _named_records(filename, 4, 6):
        strand = _column(fields, 4, STRAND.NS)
        if strand not in STRAND.values():
            raise InputFormatError(filename, f'invalid strand ({strand})', record_no)
        genes.add(
            Gene(
                chr,
                start,
                end,
                name,
                strand=strand,
                symbol=_column(fields, 5),
                phenotypes=gene_phenotypes.get(name, ()),
            )
        )
    logger.info(f'loaded {len(genes)} genes')
    return genes


def _resolve_term(ontology: PhenotypeOntology, term_id: str, filename: str) -> Optional[Term]:
    try:
        return ontology.get_term_including_alternatives(term_id)
    except KeyError:
        logger.warning(f'ignoring term {term_id} not found in the ontology ({filename})')
        return None


def load_cnvs(
    filename: str,
    ontology: Optional[PhenotypeOntology] = None,
    global_phenotype: Optional[Term] = None,
) -> GenomicSet[CNV]:
    """
    reads a file of CNVs with the columns: chr, start, end, name, [type], [phenotypes], [target term].
    The phenotypes column is a ; delimited list of term identifiers. Alternative and obsolete
    identifiers are resolved through the ontology and identifiers which cannot be resolved are ignored

    Args:
        filename: path to the CNV file
        ontology: used to resolve the phenotype and target term identifiers
        global_phenotype: when given, used as the only phenotype and as the target term of every CNV
            instead of the phenotype columns
    """
    logger.info(f'loading: {filename}')
    cnvs: GenomicSet[CNV] = GenomicSet()
    for _, fields, chr, start, end, name in _named_records(filename, 4, 7):
        cnv_type = _column(fields, 4, '.')
        phenotypes: Set[Term] = set()
        target_term = None
        if global_phenotype is not None:
            phenotypes.add(global_phenotype)
            target_term = global_phenotype
        elif ontology is not None:
            for term_id in _column(fields, 5, '').split(LIST_DELIM):
                term_id = term_id.strip()
                term = _resolve_term(ontology, term_id, filename) if term_id else None
                if term is not None:
                    phenotypes.add(term)
            target_id = _column(fields, 6)
            if target_id:
                target_term = _resolve_term(ontology, target_id, filename)
        cnvs.add(CNV(chr, start, end, name, cnv_type, phenotypes, target_term))
    logger.info(f'loaded {len(cnvs)} CNVs')
    return cnvs


def load_target_terms(filename: str, ontology: PhenotypeOntology) -> List[TargetTerm]:
    """
    reads a file of target terms with the columns: term identifier, name, enhancer file. Relative
    enhancer file paths are resolved against the directory of the target terms file
    """
    logger.info(f'loading: {filename}')
    result = []
    for record_no, fields in _read_tab(filename, 3, 3):
        term_id, name, enhancer_file = fields[:3]
        try:
            term = ontology.get_term_including_alternatives(term_id)
        except KeyError:
            raise InputFormatError(filename, f'unknown target term ({term_id})', record_no)
        if not os.path.isabs(enhancer_file):
            enhancer_file = os.path.join(os.path.dirname(os.path.abspath(filename)), enhancer_file)
        result.append(TargetTerm(term, name, load_elements(enhancer_file)))
    logger.info(f'loaded {len(result)} target terms')
    return result


def target_terms_of(cnvs: Iterable[CNV]) -> Set[Term]:
    """the distinct target terms of a set of CNVs"""
    return {cnv.target_term for cnv in cnvs if cnv.target_term is not None}
