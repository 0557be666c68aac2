import argparse
import json
import os
from typing import Dict

from snakemake.utils import validate as snakemake_validate

from .constants import SUBCOMMAND
from .schemas import SCHEMA_FILE

REQUIRED_KEYS = {
    SUBCOMMAND.ANNOTATE: [
        'reference.domains',
        'reference.genes',
        'reference.ontology',
        'reference.gene_phenotypes',
    ]
}


def filepath(path):
    if not os.path.isfile(path):
        raise TypeError('File does not exist', path)
    return path


class CustomHelpFormatter(argparse.ArgumentDefaultsHelpFormatter):
    """
    subclass the default help formatter to stop default printing for required arguments
    """

    def _format_args(self, action, default_metavar):
        if action.metavar is None:
            action.metavar = get_metavar(action.type)
        return super(CustomHelpFormatter, self)._format_args(action, default_metavar)

    def _get_help_string(self, action):
        if action.required:
            return action.help
        return super(CustomHelpFormatter, self)._get_help_string(action)

    def add_arguments(self, actions):
        # sort the arguments alphanumerically so they print in the help that way
        actions = sorted(actions, key=lambda x: getattr(x, 'option_strings'))
        super(CustomHelpFormatter, self).add_arguments(actions)


def get_metavar(arg_type):
    """
    For a given argument type, returns the string to be used for the metavar argument in add_argument

    Example:
        >>> get_metavar(bool)
        '{True,False}'
    """
    if arg_type == bool:
        return '{True,False}'
    elif arg_type == float:
        return 'FLOAT'
    elif arg_type == int:
        return 'INT'
    elif arg_type == filepath:
        return 'FILEPATH'
    return None


def validate_config(config: Dict, command: str = SUBCOMMAND.ANNOTATE) -> None:
    """
    checks the config against the schema and fills in the default values in place

    Raises:
        AssertionError: the config does not match the schema
        KeyError: a key required by the command is missing
    """
    try:
        snakemake_validate(config, SCHEMA_FILE, set_default=True)
    except Exception as err:
        short_msg = '. '.join(
            [line for line in str(err).split('\n') if line.strip()][:3]
        )  # these can get super long
        raise AssertionError(short_msg)

    for key in REQUIRED_KEYS.get(command, []):
        if not config.get(key):
            raise KeyError(f'missing required config key: {key}')


def load_config(filename: str, command: str = SUBCOMMAND.ANNOTATE) -> Dict:
    """
    reads and validates a JSON config file. Relative reference file paths are resolved against the
    directory of the config file
    """
    with open(filename, 'r') as fh:
        config = json.load(fh)
    validate_config(config, command)
    config_dir = os.path.dirname(os.path.abspath(filename))
    for key, value in config.items():
        if key.startswith('reference.') and value and not os.path.isabs(value):
            config[key] = os.path.join(config_dir, value)
    return config
