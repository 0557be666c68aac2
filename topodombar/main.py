#!python
import argparse
import itertools
import logging
import os
import platform
import sys
import time
from typing import Dict, List, Optional

from . import __version__
from . import config as _config
from . import util as _util
from .annotate import main as annotate_main
from .annotate.file_io import load_elements
from .constants import SUBCOMMAND
from .domains import boundaries_from_domains
from .schemas import DEFAULTS


def boundaries_main(inputs: List[str], outputfile: str, max_boundary_length: int):
    """
    derive the boundaries between the domains of each input file and write them as a bed file.
    The boundary numbering continues across the input files
    """
    rows = []
    counter = itertools.count(1)
    for filename in inputs:
        domains = load_elements(filename)
        boundaries = boundaries_from_domains(domains, max_boundary_length, counter=counter)
        rows.extend([(b.chr, b.start, b.end, b.name) for b in boundaries.values()])
    if os.path.dirname(outputfile):
        _util.mkdirp(os.path.dirname(outputfile))
    _util.write_bed_file(outputfile, rows)


def create_parser(argv):
    parser = argparse.ArgumentParser(formatter_class=_config.CustomHelpFormatter)
    parser.add_argument(
        '-v',
        '--version',
        action='version',
        version='%(prog)s version ' + __version__,
        help='Outputs the version number',
    )
    subp = parser.add_subparsers(
        dest='command', help='specifies which step/stage in the pipeline or which subprogram to use'
    )
    subp.required = True
    required = {}  # hold required argument group by subparser command name
    optional = {}  # hold optional argument group by subparser command name
    for command in SUBCOMMAND.values():
        subparser = subp.add_parser(
            command, formatter_class=_config.CustomHelpFormatter, add_help=False
        )
        required[command] = subparser.add_argument_group('required arguments')
        optional[command] = subparser.add_argument_group('optional arguments')
        optional[command].add_argument(
            '-h', '--help', action='help', help='show this help message and exit'
        )
        optional[command].add_argument(
            '-v',
            '--version',
            action='version',
            version='%(prog)s version ' + __version__,
            help='Outputs the version number',
        )
        optional[command].add_argument('--log', help='redirect stdout to a log file', default=None)
        optional[command].add_argument(
            '--log_level',
            help='level of logging to output',
            choices=['INFO', 'DEBUG'],
            default='INFO',
        )
        required[command].add_argument(
            '-n',
            '--inputs',
            nargs='+',
            help='path to the input files',
            required=True,
            metavar='FILEPATH',
        )

    # annotate
    required[SUBCOMMAND.ANNOTATE].add_argument(
        '--config', '-c', help='path to the JSON config file', type=_config.filepath, required=True
    )
    required[SUBCOMMAND.ANNOTATE].add_argument(
        '-o', '--output', help='path to the output directory', required=True
    )

    # boundaries
    required[SUBCOMMAND.BOUNDARIES].add_argument(
        '--outputfile', '-o', required=True, help='path to the outputfile', metavar='FILEPATH'
    )
    optional[SUBCOMMAND.BOUNDARIES].add_argument(
        '--max_boundary_length',
        type=int,
        default=DEFAULTS['boundaries.max_length'],
        help='maximum gap between two adjacent domains for the gap to be called a boundary',
    )
    return parser, parser.parse_args(argv)


def main(argv: Optional[List[str]] = None):
    """
    sets up the parser and checks the validity of command line args
    loads the config and redirects into subcommand main functions

    Args:
        argv: List of arguments, defaults to command line arguments
    """
    if argv is None:  # need to do at run time or patching will not behave as expected
        argv = sys.argv[1:]
    start_time = int(time.time())
    parser, args = create_parser(argv)
    for filename in args.inputs:
        if not os.path.isfile(filename):
            parser.error(f'--inputs file(s) for {args.command} {args.inputs} do not exist')

    log_conf = {
        'format': '{asctime} [{levelname}] {message}',
        'style': '{',
        'level': args.log_level,
    }

    original_logging_handlers = logging.root.handlers[:]
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)
    if args.log:  # redirect stdout AND stderr to a log file
        log_conf['filename'] = args.log
    logging.basicConfig(**log_conf)

    _util.logger.info(f'TOPODOMBAR: {__version__}')
    _util.logger.info(f'hostname: {platform.node()}')
    _util.log_arguments(args)

    config: Dict = dict()
    try:
        if args.command == SUBCOMMAND.ANNOTATE:
            config = _config.load_config(args.config, args.command)
            annotate_main.main(
                inputs=args.inputs,
                output=args.output,
                config=config,
                start_time=start_time,
            )
        else:
            boundaries_main(args.inputs, args.outputfile, args.max_boundary_length)

        duration = int(time.time()) - start_time
        _util.logger.info(f'run time (hh/mm/ss): {_util.format_duration(duration)}')
        _util.logger.info(f'run time (s): {duration}')
    finally:
        for handler in logging.root.handlers[:]:
            logging.root.removeHandler(handler)
        for handler in original_logging_handlers:
            logging.root.addHandler(handler)


if __name__ == '__main__':
    main()
