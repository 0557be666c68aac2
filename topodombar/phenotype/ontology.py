from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Set

import networkx as nx


@dataclass(frozen=True)
class Term:
    """
    a term of the phenotype ontology. Terms compare and hash by their primary identifier and name
    """

    id: str
    name: str = ''

    def __repr__(self):
        return f'Term({self.id}, name={self.name})'


class PhenotypeOntology(nx.DiGraph):
    """
    directed acyclic graph of ontology terms keyed by their primary identifier. Edges point from
    a term to each of its parents (is_a relationships)
    """

    def __init__(self, *pos, **kwargs):
        nx.DiGraph.__init__(self, *pos, **kwargs)
        self.alternative_ids: Dict[str, str] = {}
        self.replaced_by: Dict[str, str] = {}

    def add_term(
        self,
        term: Term,
        parents: Iterable[str] = (),
        alternative_ids: Iterable[str] = (),
    ):
        """
        Args:
            term: the term to add
            parents: identifiers of the direct parents of the term
            alternative_ids: alternative identifiers which should resolve to this term
        """
        self.add_node(term.id, term=term)
        for parent in parents:
            self.add_edge(term.id, parent)
        for alt_id in alternative_ids:
            self.alternative_ids[alt_id] = term.id

    def add_obsolete(self, term_id: str, replaced_by: Optional[str] = None):
        """
        register an obsolete identifier. It resolves to its replacement when one is given
        """
        if replaced_by:
            self.replaced_by[term_id] = replaced_by

    def get_term(self, term_id: str) -> Term:
        """
        Raises:
            KeyError: the identifier is not a primary identifier of a term in the ontology
        """
        if term_id not in self or 'term' not in self.nodes[term_id]:
            raise KeyError('term is not in the ontology', term_id)
        return self.nodes[term_id]['term']

    def get_term_including_alternatives(self, term_id: str) -> Term:
        """
        resolves primary identifiers, alternative identifiers and obsolete identifiers which have a replacement

        Raises:
            KeyError: the identifier cannot be resolved to a term in the ontology
        """
        seen = set()
        while term_id not in seen:
            seen.add(term_id)
            if term_id in self and 'term' in self.nodes[term_id]:
                return self.nodes[term_id]['term']
            elif term_id in self.alternative_ids:
                term_id = self.alternative_ids[term_id]
            elif term_id in self.replaced_by:
                term_id = self.replaced_by[term_id]
            else:
                break
        raise KeyError('term identifier could not be resolved', term_id)

    def _terms_of(self, term_ids: Iterable[str]) -> Set[Term]:
        return {self.nodes[t]['term'] for t in term_ids if 'term' in self.nodes[t]}

    def parents(self, term: Term) -> Set[Term]:
        return self._terms_of(self.successors(term.id))

    def ancestors_of(self, term: Term) -> Set[Term]:
        """
        the term itself and all terms it is (indirectly) a child of
        """
        return self._terms_of(nx.descendants(self, term.id)) | {term}

    def descendants_of(self, term: Term) -> Set[Term]:
        """
        the term itself and all terms which are (indirectly) a child of it
        """
        return self._terms_of(nx.ancestors(self, term.id)) | {term}

    def terms(self) -> Set[Term]:
        return {data['term'] for _, data in self.nodes(data=True) if 'term' in data}
