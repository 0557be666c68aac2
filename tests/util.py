import os

from topodombar.annotate.file_io import load_cnvs, load_elements, load_genes
from topodombar.domains import boundaries_from_domains
from topodombar.phenotype.file_io import load_phenotype_data

DATA_DIR = os.path.join(os.path.dirname(__file__), 'data')


def get_data(*paths):
    return os.path.join(DATA_DIR, *paths)


class ToyExample:
    """
    the small example on chr1 with three domains, four genes and four enhancers
    """

    def __init__(self):
        self.phenotype_data = load_phenotype_data(
            get_data('toy_example', 'ontology.obo'),
            get_data('toy_example', 'gene_phenotypes.tab'),
        )
        self.domains = load_elements(get_data('toy_example', 'domains.tab'))
        self.boundaries = boundaries_from_domains(self.domains)
        self.genes = load_genes(
            get_data('toy_example', 'genes.tab'), self.phenotype_data.gene_phenotypes
        )
        self.enhancers = load_elements(get_data('toy_example', 'enhancers.tab'))

    def cnvs(self, filename='cnvs.tab'):
        return load_cnvs(get_data('toy_example', filename), self.phenotype_data.ontology)

    def term(self, term_id):
        return self.phenotype_data.get_term(term_id)
