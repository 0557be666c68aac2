"""
phenotype similarity of patients and genes based on the information content of ontology terms
"""
import math
from collections import Counter
from typing import Dict, Iterable, Mapping, Optional, Set

from ..util import logger
from .ontology import PhenotypeOntology, Term


class PhenotypeData:
    """
    the phenotype ontology together with the phenotype annotations of genes. The information
    content of a term is computed from the fraction of annotated genes annotated to the term or
    to any of its descendants
    """

    def __init__(self, ontology: PhenotypeOntology, gene_phenotypes: Mapping[str, Iterable[Term]]):
        """
        Args:
            ontology: the phenotype ontology
            gene_phenotypes: phenotype terms of each gene keyed by gene identifier
        """
        self.ontology = ontology
        self.gene_phenotypes: Dict[str, frozenset] = {
            gene: frozenset(terms) for gene, terms in gene_phenotypes.items() if terms
        }
        self._ancestors: Dict[Term, Set[Term]] = {}
        self._similarity: Dict[frozenset, float] = {}

        counts: Counter = Counter()
        for terms in self.gene_phenotypes.values():
            counts.update(set().union(*[self.ancestors(t) for t in terms]))
        total = len(self.gene_phenotypes)
        self.information_content: Dict[Term, float] = {
            term: -1 * math.log(count / total) for term, count in counts.items()
        }
        logger.info(
            f'computed information content of {len(self.information_content)} terms '
            f'from {total} annotated genes'
        )

    def ancestors(self, term: Term) -> Set[Term]:
        if term not in self._ancestors:
            self._ancestors[term] = self.ontology.ancestors_of(term)
        return self._ancestors[term]

    def get_term(self, term_id: str) -> Term:
        return self.ontology.get_term_including_alternatives(term_id)

    def ic(self, term: Term) -> Optional[float]:
        """
        the information content of a term, None if no gene is annotated to the term or its descendants
        """
        return self.information_content.get(term)

    def similarity(self, first: Term, second: Term) -> float:
        """
        the information content of the most informative common ancestor of two terms (Resnik).
        0.0 when the terms have no common ancestor with annotated genes
        """
        key = frozenset([first, second])
        if key not in self._similarity:
            common = self.ancestors(first) & self.ancestors(second)
            self._similarity[key] = max(
                [self.information_content[t] for t in common if t in self.information_content],
                default=0.0,
            )
        return self._similarity[key]

    def phenomatch_score(self, terms: Iterable[Term], gene_terms: Iterable[Term]) -> float:
        """
        sum over the patient terms of the best similarity to any of the gene terms

        Args:
            terms: the phenotype terms of the patient
            gene_terms: the phenotype terms of the gene. The score is 0 when there are none
        """
        gene_terms = list(gene_terms)
        if not gene_terms:
            return 0.0
        return sum(
            [max([self.similarity(term, gene_term) for gene_term in gene_terms]) for term in terms],
            0.0,
        )

    def genes_annotated_to(self, term: Term) -> Set[str]:
        """
        identifiers of the genes annotated to the term or any of its descendants
        """
        return {
            gene
            for gene, terms in self.gene_phenotypes.items()
            if any([term in self.ancestors(t) for t in terms])
        }

    def target_term_genes(self, target_terms: Iterable[Term]) -> Dict[Term, Set[str]]:
        """
        map each target term to the identifiers of the genes associated with it
        """
        result = {}
        for term in target_terms:
            result[term] = self.genes_annotated_to(term)
            logger.debug(f'{len(result[term])} genes associated with target term {term.id}')
        return result
