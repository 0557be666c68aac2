import pytest

from topodombar.annotate.file_io import load_target_terms
from topodombar.annotate.main import annotate_cnvs, read_cnv_inputs
from topodombar.constants import MECHANISM, REGION_MODE
from topodombar.genomic import GenomicElement, GenomicSet

from ...util import ToyExample, get_data


@pytest.fixture(scope='module')
def toy():
    return ToyExample()


@pytest.fixture(scope='module')
def cnvs(toy):
    return read_cnv_inputs(
        [
            get_data('toy_example', 'cnvs.tab'),
            get_data('toy_example', 'dups.tab'),
            get_data('toy_example', 'invs.tab'),
        ],
        toy.phenotype_data,
    )


def run(toy, cnvs, **kwargs):
    kwargs.setdefault('duplication_types', ['duplication'])
    kwargs.setdefault('inversion_types', ['inversion'])
    return annotate_cnvs(
        cnvs,
        toy.domains,
        toy.boundaries,
        toy.genes,
        toy.enhancers,
        toy.phenotype_data,
        **kwargs,
    )


class TestReadCNVInputs:
    def test_multiple_files(self, cnvs):
        assert list(cnvs.keys()) == [
            'cnv1',
            'cnv2',
            'cnv3',
            'cnv4',
            'dup1',
            'dup2',
            'inv1',
            'inv2',
            'inv3',
        ]

    def test_duplicate_names(self, toy):
        filename = get_data('toy_example', 'cnvs.tab')
        with pytest.raises(KeyError):
            read_cnv_inputs([filename, filename], toy.phenotype_data)

    def test_global_phenotype(self, toy):
        head = toy.term('EX:0000005')
        cnvs = read_cnv_inputs(
            [get_data('toy_example', 'cnvs.tab')], toy.phenotype_data, global_phenotype=head
        )
        assert all([cnv.target_term == head for cnv in cnvs.values()])


class TestAnnotateCNVs:
    def test_input_order_kept(self, toy, cnvs):
        annotations = run(toy, cnvs)
        assert list(annotations.keys()) == list(cnvs.keys())

    def test_all_mechanisms(self, toy, cnvs):
        annotations = run(toy, cnvs)
        assert annotations['cnv1'].effect_mechanisms == {
            MECHANISM.TDBD: 'TDBD',
            MECHANISM.NEW_TDBD: 'TDBD',
            MECHANISM.EA: 'EA',
            MECHANISM.EA_LOW_G: 'EAlowG',
        }
        assert annotations['dup1'].effect_mechanisms[MECHANISM.TANDUP_EA] == 'TanDupEA'
        assert annotations['dup2'].effect_mechanisms[MECHANISM.TANDUP_EA] == 'onlyGDE'
        assert annotations['inv1'].effect_mechanisms[MECHANISM.INV_EA] == 'EnhancerInvEA'
        assert annotations['inv2'].effect_mechanisms[MECHANISM.INV_EA] == 'GeneInvEA'
        assert annotations['inv3'].effect_mechanisms[MECHANISM.INV_EA] == 'noInvEA'
        assert MECHANISM.INV_EA not in annotations['dup1'].effect_mechanisms
        assert MECHANISM.TANDUP_EA not in annotations['inv1'].effect_mechanisms

    def test_selected_mechanisms(self, toy, cnvs):
        annotations = run(toy, cnvs, mechanisms=[MECHANISM.NEW_TDBD])
        assert set(annotations['cnv1'].effect_mechanisms.keys()) == {MECHANISM.NEW_TDBD}

    def test_bad_mechanism(self, toy, cnvs):
        with pytest.raises(KeyError):
            run(toy, cnvs, mechanisms=['other'])

    def test_regions_by_distance(self, toy, cnvs):
        annotations = run(
            toy, cnvs, mechanisms=[], region_mode=REGION_MODE.DISTANCE, region_size=20
        )
        region = annotations['cnv1'].right_adjacent_region
        assert (region.start, region.end) == (19, 39)

    def test_bad_region_mode(self, toy, cnvs):
        with pytest.raises(KeyError):
            run(toy, cnvs, region_mode='other')

    def test_target_term_enhancers(self, toy, cnvs):
        target_terms = load_target_terms(
            get_data('toy_example', 'target_terms.tab'), toy.phenotype_data.ontology
        )
        annotations = annotate_cnvs(
            cnvs,
            toy.domains,
            toy.boundaries,
            toy.genes,
            GenomicSet(),
            toy.phenotype_data,
            mechanisms=[MECHANISM.EA],
            target_terms=target_terms,
        )
        assert annotations['cnv1'].effect_mechanisms[MECHANISM.EA] == 'EA'
        assert list(annotations['cnv1'].enhancers_in_left_region.keys()) == ['e_1']

    def test_without_enhancers(self, toy, cnvs):
        annotations = annotate_cnvs(
            cnvs,
            toy.domains,
            toy.boundaries,
            toy.genes,
            GenomicSet(),
            toy.phenotype_data,
            mechanisms=[MECHANISM.EA],
        )
        assert annotations['cnv1'].effect_mechanisms[MECHANISM.EA] == 'NoData'

    def test_other_chromosome_enhancers_ignored(self, toy, cnvs):
        enhancers = GenomicSet([GenomicElement('chr2', 6, 7, 'e_x')])
        annotations = annotate_cnvs(
            cnvs,
            toy.domains,
            toy.boundaries,
            toy.genes,
            enhancers,
            toy.phenotype_data,
            mechanisms=[MECHANISM.EA],
        )
        assert len(annotations['cnv1'].enhancers_in_left_region) == 0
