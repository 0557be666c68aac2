import json
import os

import pytest

from topodombar.config import filepath, get_metavar, load_config, validate_config
from topodombar.constants import SUBCOMMAND
from topodombar.schemas import DEFAULTS

from ..util import get_data


def minimal_config():
    return {
        'reference.domains': 'domains.tab',
        'reference.genes': 'genes.tab',
        'reference.ontology': 'ontology.obo',
        'reference.gene_phenotypes': 'gene_phenotypes.tab',
    }


class TestDefaults:
    def test_values(self):
        assert DEFAULTS['boundaries.max_length'] == 400000
        assert DEFAULTS['regions.mode'] == 'domains'
        assert DEFAULTS['regions.size'] == 1000000
        assert DEFAULTS['reference.enhancers'] is None

    def test_immutable(self):
        with pytest.raises(TypeError):
            DEFAULTS['regions.mode'] = 'distance'


class TestValidateConfig:
    def test_fills_defaults(self):
        config = minimal_config()
        validate_config(config, SUBCOMMAND.ANNOTATE)
        assert config['regions.mode'] == 'domains'
        assert config['classify.mechanisms'] == [
            'TDBD',
            'newTDBD',
            'EA',
            'EAlowG',
            'TanDupEA',
            'InvEA',
        ]
        assert config['reference.boundaries'] is None

    def test_missing_required_key(self):
        config = minimal_config()
        del config['reference.ontology']
        with pytest.raises(KeyError):
            validate_config(config, SUBCOMMAND.ANNOTATE)

    @pytest.mark.parametrize(
        'key,value',
        [
            ['regions.mode', 'other'],
            ['regions.size', -1],
            ['boundaries.max_length', 'x'],
            ['classify.mechanisms', ['TDBD', 'other']],
        ],
    )
    def test_bad_value(self, key, value):
        config = minimal_config()
        config[key] = value
        with pytest.raises(AssertionError):
            validate_config(config, SUBCOMMAND.ANNOTATE)


class TestLoadConfig:
    def test_relative_paths(self):
        config = load_config(get_data('toy_example', 'config.json'))
        assert config['reference.domains'] == os.path.abspath(
            get_data('toy_example', 'domains.tab')
        )
        assert os.path.isabs(config['reference.genes'])
        assert config['reference.target_terms'] is None

    def test_absolute_paths_unchanged(self, tmp_path):
        config = minimal_config()
        config['reference.domains'] = get_data('toy_example', 'domains.tab')
        filename = tmp_path / 'config.json'
        filename.write_text(json.dumps(config))
        config = load_config(str(filename))
        assert config['reference.domains'] == get_data('toy_example', 'domains.tab')
        assert config['reference.genes'] == str(tmp_path / 'genes.tab')


class TestArgumentTypes:
    def test_filepath(self):
        assert filepath(get_data('toy_example', 'config.json'))
        with pytest.raises(TypeError):
            filepath(get_data('toy_example', 'missing.json'))

    def test_metavar(self):
        assert get_metavar(int) == 'INT'
        assert get_metavar(filepath) == 'FILEPATH'
        assert get_metavar(str) is None
