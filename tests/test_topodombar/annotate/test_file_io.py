import pytest

from topodombar.annotate.file_io import (
    load_cnvs,
    load_elements,
    load_genes,
    load_target_terms,
    target_terms_of,
    unique_names,
)
from topodombar.error import InputFormatError
from topodombar.phenotype.file_io import load_ontology

from ...util import get_data


@pytest.fixture(scope='module')
def ontology():
    return load_ontology(get_data('toy_example', 'ontology.obo'))


def write_file(tmp_path, content, filename='input.tab'):
    path = tmp_path / filename
    path.write_text(content)
    return str(path)


class TestUniqueNames:
    def test_distinct(self):
        assert unique_names(['a', 'b', 'c']) == ['a', 'b', 'c']

    def test_duplicates(self):
        assert unique_names(['a', 'b', 'a']) == ['a_1', 'b_1', 'a_2']

    def test_empty(self):
        assert unique_names([]) == []


class TestLoadElements:
    def test_toy_domains(self):
        domains = load_elements(get_data('toy_example', 'domains.tab'))
        assert list(domains.keys()) == ['d1', 'd2', 'd3']
        assert (domains['d2'].chr, domains['d2'].start, domains['d2'].end) == ('chr1', 15, 37)

    def test_missing_names(self, tmp_path):
        filename = write_file(tmp_path, 'chr1\t0\t10\nchr1\t20\t30\n')
        assert list(load_elements(filename).keys()) == ['ID_1', 'ID_2']

    def test_duplicate_names(self, tmp_path):
        filename = write_file(tmp_path, 'chr1\t0\t10\tx\nchr1\t20\t30\tx\nchr1\t40\t50\ty\n')
        assert list(load_elements(filename).keys()) == ['x_1', 'x_2', 'y_1']

    def test_empty_file(self, tmp_path):
        filename = write_file(tmp_path, '')
        assert len(load_elements(filename)) == 0

    def test_only_comments(self, tmp_path):
        filename = write_file(tmp_path, '#chr\tstart\tend\n')
        assert len(load_elements(filename)) == 0

    def test_hash_inside_name(self, tmp_path):
        filename = write_file(tmp_path, '#chr\tstart\tend\tname\nchr1\t0\t10\tenh#1\n')
        assert list(load_elements(filename).keys()) == ['enh#1']

    def test_extra_columns_ignored(self, tmp_path):
        filename = write_file(tmp_path, 'chr1\t0\t10\td1\t0.5\t+\n')
        domains = load_elements(filename)
        assert list(domains.keys()) == ['d1']
        assert domains['d1'].end == 10

    def test_too_few_columns(self, tmp_path):
        filename = write_file(tmp_path, 'chr1\t0\n')
        with pytest.raises(InputFormatError):
            load_elements(filename)

    def test_non_integer_coordinates(self, tmp_path):
        filename = write_file(tmp_path, 'chr1\tzero\t10\td1\n')
        with pytest.raises(InputFormatError) as exc:
            load_elements(filename)
        assert 'record 1' in str(exc.value)

    def test_start_not_before_end(self, tmp_path):
        filename = write_file(tmp_path, 'chr1\t0\t10\td1\nchr1\t10\t10\td2\n')
        with pytest.raises(InputFormatError) as exc:
            load_elements(filename)
        assert 'record 2' in str(exc.value)


class TestLoadGenes:
    def test_toy_genes(self):
        genes = load_genes(get_data('toy_example', 'genes.tab'))
        assert list(genes.keys()) == ['geneA', 'geneB', 'geneC', 'geneD']
        assert genes['geneC'].strand == '-'
        assert genes['geneC'].symbol == 'geneC'
        assert genes['geneA'].phenotypes == frozenset()

    def test_phenotypes_by_name(self, ontology):
        heart = ontology.get_term('EX:0000006')
        genes = load_genes(get_data('toy_example', 'genes.tab'), {'geneA': {heart}})
        assert genes['geneA'].phenotypes == frozenset([heart])
        assert genes['geneB'].phenotypes == frozenset()

    def test_symbol_column(self, tmp_path):
        filename = write_file(tmp_path, 'chr1\t0\t10\tENSG1\t+\tSHH\n')
        assert load_genes(filename)['ENSG1'].symbol == 'SHH'

    def test_bad_strand(self, tmp_path):
        filename = write_file(tmp_path, 'chr1\t0\t10\tgeneA\tx\n')
        with pytest.raises(InputFormatError):
            load_genes(filename)

    def test_name_required(self, tmp_path):
        filename = write_file(tmp_path, 'chr1\t0\t10\n')
        with pytest.raises(InputFormatError):
            load_genes(filename)


class TestLoadCNVs:
    def test_toy_cnvs(self, ontology):
        cnvs = load_cnvs(get_data('toy_example', 'cnvs.tab'), ontology)
        assert list(cnvs.keys()) == ['cnv1', 'cnv2', 'cnv3', 'cnv4']
        cnv1 = cnvs['cnv1']
        assert cnv1.cnv_type == 'DEL'
        assert {t.id for t in cnv1.phenotypes} == {'EX:0000006', 'EX:0000002'}
        assert cnv1.target_term.id == 'EX:0000006'

    def test_alternative_identifier(self, ontology):
        cnvs = load_cnvs(get_data('toy_example', 'cnvs.tab'), ontology)
        assert {t.id for t in cnvs['cnv3'].phenotypes} == {'EX:0000006', 'EX:0000002'}

    def test_unresolved_phenotype_ignored(self, ontology, tmp_path):
        filename = write_file(tmp_path, 'chr1\t0\t10\tc1\tDEL\tEX:0000003;EX:9999999\tEX:9999999\n')
        cnv = load_cnvs(filename, ontology)['c1']
        assert {t.id for t in cnv.phenotypes} == {'EX:0000003'}
        assert cnv.target_term is None

    def test_optional_columns(self, ontology, tmp_path):
        filename = write_file(tmp_path, 'chr1\t0\t10\tc1\n')
        cnv = load_cnvs(filename, ontology)['c1']
        assert cnv.cnv_type == '.'
        assert cnv.phenotypes == frozenset()
        assert cnv.target_term is None

    def test_mixed_width_records(self, ontology, tmp_path):
        filename = write_file(
            tmp_path,
            'chr1\t0\t10\tc1\nchr1\t20\t30\tc2\tDEL\tEX:0000006\tEX:0000006\n',
        )
        cnvs = load_cnvs(filename, ontology)
        assert list(cnvs.keys()) == ['c1', 'c2']
        assert cnvs['c1'].cnv_type == '.'
        assert cnvs['c1'].phenotypes == frozenset()
        assert cnvs['c1'].target_term is None
        assert cnvs['c2'].cnv_type == 'DEL'
        assert {t.id for t in cnvs['c2'].phenotypes} == {'EX:0000006'}
        assert cnvs['c2'].target_term.id == 'EX:0000006'

    def test_global_phenotype(self, ontology):
        heart = ontology.get_term('EX:0000006')
        cnvs = load_cnvs(get_data('toy_example', 'dups.tab'), ontology, global_phenotype=heart)
        for cnv in cnvs.values():
            assert cnv.phenotypes == frozenset([heart])
            assert cnv.target_term == heart

    def test_target_terms_of(self, ontology):
        cnvs = load_cnvs(get_data('toy_example', 'cnvs.tab'), ontology)
        assert target_terms_of(cnvs.values()) == {ontology.get_term('EX:0000006')}


class TestLoadTargetTerms:
    def test_relative_enhancer_file(self, ontology):
        target_terms = load_target_terms(get_data('toy_example', 'target_terms.tab'), ontology)
        assert len(target_terms) == 1
        assert target_terms[0].term.id == 'EX:0000006'
        assert target_terms[0].name == 'heart'
        assert list(target_terms[0].enhancers.keys()) == ['e_1', 'e_2', 'e_3', 'e_4']

    def test_unknown_term(self, ontology, tmp_path):
        filename = write_file(
            tmp_path, 'EX:9999999\theart\t{}\n'.format(get_data('toy_example', 'enhancers.tab'))
        )
        with pytest.raises(InputFormatError):
            load_target_terms(filename, ontology)
