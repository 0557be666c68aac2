"""
module which holds all functions relating to loading the phenotype ontology and gene phenotype annotations
"""
from typing import Dict, Set

import pandas as pd

from ..util import logger
from .data import PhenotypeData
from .ontology import PhenotypeOntology, Term

GENE_PHENOTYPE_COLUMNS = ['gene_id', 'gene_symbol', 'term_name', 'term_id']


def _parse_obo_stanzas(filename: str):
    stanza = None
    with open(filename, 'r') as fh:
        for line in fh:
            line = line.strip()
            if not line or line.startswith('!'):
                continue
            if line.startswith('['):
                if stanza is not None:
                    yield stanza
                stanza = {'_type': line} if line == '[Term]' else None
                continue
            if stanza is None or ':' not in line:
                continue
            tag, value = line.split(':', 1)
            value = value.split(' ! ')[0].strip()
            stanza.setdefault(tag.strip(), []).append(value)
    if stanza is not None:
        yield stanza


def load_ontology(filename: str) -> PhenotypeOntology:
    """
    reads an ontology in OBO format. Only [Term] stanzas are used. The tags read are id, name,
    alt_id, is_a, is_obsolete and replaced_by

    Args:
        filename: path to the OBO file

    Returns:
        the ontology
    """
    logger.info(f'loading: {filename}')
    ontology = PhenotypeOntology()
    obsolete = 0
    for stanza in _parse_obo_stanzas(filename):
        if 'id' not in stanza:
            raise KeyError(f'term stanza without an id in {filename}', stanza)
        term_id = stanza['id'][0]
        if stanza.get('is_obsolete', ['false'])[0] == 'true':
            ontology.add_obsolete(term_id, stanza.get('replaced_by', [None])[0])
            obsolete += 1
            continue
        ontology.add_term(
            Term(term_id, stanza.get('name', [''])[0]),
            parents=stanza.get('is_a', []),
            alternative_ids=stanza.get('alt_id', []),
        )
    logger.info(f'loaded {len(ontology.terms())} terms ({obsolete} obsolete) from: {filename}')
    return ontology


def load_gene_phenotypes(filename: str, ontology: PhenotypeOntology) -> Dict[str, Set[Term]]:
    """
    reads the phenotype annotations of genes. The file is tab-delimited without a header and
    has the columns: gene_id, gene_symbol, term_name, term_id. Lines starting with # are ignored

    Term identifiers which cannot be resolved in the ontology are skipped

    Returns:
        sets of phenotype terms keyed by gene identifier
    """
    logger.info(f'loading: {filename}')
    try:
        df = pd.read_csv(
            filename,
            sep='\t',
            header=None,
            names=GENE_PHENOTYPE_COLUMNS,
            usecols=range(len(GENE_PHENOTYPE_COLUMNS)),
            dtype=str,
        )
    except pd.errors.EmptyDataError:
        return {}
    df = df[~df['gene_id'].str.startswith('#', na=False)]
    for col in GENE_PHENOTYPE_COLUMNS:
        if df[col].isnull().any():
            raise KeyError(f'missing required column ({col}) in {filename}')

    result: Dict[str, Set[Term]] = {}
    unresolved = set()
    for row in df.to_dict('records'):
        try:
            term = ontology.get_term_including_alternatives(row['term_id'])
        except KeyError:
            unresolved.add(row['term_id'])
            continue
        result.setdefault(row['gene_id'], set()).add(term)
    if unresolved:
        logger.warning(f'skipped {len(unresolved)} term identifiers not found in the ontology')
    logger.info(f'loaded phenotypes for {len(result)} genes')
    return result


def load_phenotype_data(ontology_file: str, gene_phenotypes_file: str) -> PhenotypeData:
    ontology = load_ontology(ontology_file)
    return PhenotypeData(ontology, load_gene_phenotypes(gene_phenotypes_file, ontology))
