"""
module responsible for the controlled vocabularies and constants used throughout the topodombar package
"""
from typing import Any, List, Tuple

COMPLETE_STAMP: str = 'TOPODOMBAR.COMPLETE'
"""Filename for all complete stamp files"""

MAX_BOUNDARY_LENGTH: int = 400000
"""the maximum gap between two adjacent domains for the gap to be considered a boundary"""

DEFAULT_REGION_SIZE: int = 1000000
"""the default size of adjacent regions defined by a fixed distance"""

DEFAULT_ELEMENT_NAME: str = 'ID'
"""name given to elements read from input files which have no name column"""

LIST_DELIM: str = ';'


class TopodombarNamespace:
    """
    Namespace to hold module constants. Members are the public non-callable class attributes

    Example:
        >>> class THING(TopodombarNamespace):
        ...     ONE = 'one'
        ...     TWO = 'two'
        >>> THING.values()
        ['one', 'two']
    """

    @classmethod
    def items(cls) -> List[Tuple[str, Any]]:
        return [
            (k, v)
            for k, v in cls.__dict__.items()
            if not k.startswith('_') and isinstance(v, (str, int, float))
        ]

    @classmethod
    def values(cls) -> List[Any]:
        return [v for k, v in cls.items()]

    @classmethod
    def enforce(cls, value):
        """
        checks that the current namespace has a given value

        Returns:
            the input value

        Raises:
            KeyError: the value did not exist

        Example:
            >>> STRAND.enforce('+')
            '+'
        """
        if value not in cls.values():
            raise KeyError(
                f'value {repr(value)} is not a valid member of {cls.__name__}', cls.values()
            )
        return value


class STRAND(TopodombarNamespace):
    """
    holds controlled vocabulary for allowed strand values

    Attributes:
        POS: the positive/forward strand
        NEG: the negative/reverse strand
        NS: strand is not specified
    """

    POS: str = '+'
    NEG: str = '-'
    NS: str = '.'


class REGION_MODE(TopodombarNamespace):
    """
    how the regions adjacent to a CNV are defined

    Attributes:
        DOMAINS: from the CNV edge up to the end of the next domain on either side
        DISTANCE: a window of fixed size abutting the CNV edge
    """

    DOMAINS: str = 'domains'
    DISTANCE: str = 'distance'


class SUBCOMMAND(TopodombarNamespace):
    ANNOTATE: str = 'annotate'
    BOUNDARIES: str = 'boundaries'


class MECHANISM(TopodombarNamespace):
    """
    holds controlled vocabulary for the pathogenic mechanisms a CNV can be classified by

    Attributes:
        TDBD: topological domain boundary disruption using target gene membership
        NEW_TDBD: topological domain boundary disruption using phenogram scores only
        EA: enhancer adoption
        EA_LOW_G: enhancer adoption with low gene dosage effect
        TANDUP_EA: enhancer adoption by tandem duplication
        INV_EA: enhancer adoption by inversion
    """

    TDBD: str = 'TDBD'
    NEW_TDBD: str = 'newTDBD'
    EA: str = 'EA'
    EA_LOW_G: str = 'EAlowG'
    TANDUP_EA: str = 'TanDupEA'
    INV_EA: str = 'InvEA'


class TDBD_EFFECT(TopodombarNamespace):
    """
    Attributes:
        TDBD: the boundary disruption places a target gene in a new regulatory context
        MIXED: both a boundary disruption and a gene dosage effect could explain the phenotype
        GDE: gene dosage effect of an overlapped gene
        NO_DATA: no gene could be associated with the phenotype
    """

    TDBD: str = 'TDBD'
    MIXED: str = 'Mixed'
    GDE: str = 'GDE'
    NO_DATA: str = 'NoData'


class EA_EFFECT(TopodombarNamespace):
    EA: str = 'EA'
    GDE: str = 'GDE'
    NO_DATA: str = 'NoData'


class EA_LOW_G_EFFECT(TopodombarNamespace):
    EA_LOW_G: str = 'EAlowG'
    GDE: str = 'GDE'
    NO_DATA: str = 'NoData'


class TANDUP_EA_EFFECT(TopodombarNamespace):
    """
    Attributes:
        TANDUP_EA: the duplicated enhancer and gene are joined in the new tandem copy
        ONLY_GDE: only the dosage of a duplicated relevant gene could explain the phenotype
        NO_DATA: neither configuration holds
    """

    TANDUP_EA: str = 'TanDupEA'
    ONLY_GDE: str = 'onlyGDE'
    NO_DATA: str = 'NoData'


class INV_EA_EFFECT(TopodombarNamespace):
    """
    Attributes:
        ENHANCER_INV_EA: the inversion moves an enhancer next to a relevant gene
        GENE_INV_EA: the inversion moves a relevant gene next to an enhancer
        NO_INV_EA: neither configuration holds
    """

    ENHANCER_INV_EA: str = 'EnhancerInvEA'
    GENE_INV_EA: str = 'GeneInvEA'
    NO_INV_EA: str = 'noInvEA'


MECHANISM_EFFECTS = {
    MECHANISM.TDBD: TDBD_EFFECT,
    MECHANISM.NEW_TDBD: TDBD_EFFECT,
    MECHANISM.EA: EA_EFFECT,
    MECHANISM.EA_LOW_G: EA_LOW_G_EFFECT,
    MECHANISM.TANDUP_EA: TANDUP_EA_EFFECT,
    MECHANISM.INV_EA: INV_EA_EFFECT,
}
"""the outcome vocabulary of each mechanism"""


class COLUMNS(TopodombarNamespace):
    """
    Column names for the annotated CNV output file
    """

    chr: str = 'chr'
    start: str = 'start'
    end: str = 'end'
    name: str = 'name'
    cnv_type: str = 'type'
    phenotypes: str = 'phenotypes'
    target_term: str = 'target_term'
    boundary_overlap: str = 'boundary_overlap'
    overlapped_genes: str = 'overlapped_genes'
    overlap_phenogram_score: str = 'overlap_phenogram_score'
    left_adjacent_region: str = 'left_adjacent_region'
    right_adjacent_region: str = 'right_adjacent_region'
    left_overlapped_domain_region: str = 'left_overlapped_domain_region'
    right_overlapped_domain_region: str = 'right_overlapped_domain_region'
    left_adjacent_genes: str = 'left_adjacent_genes'
    right_adjacent_genes: str = 'right_adjacent_genes'
    left_adjacent_enhancers: str = 'left_adjacent_enhancers'
    right_adjacent_enhancers: str = 'right_adjacent_enhancers'
    left_adjacent_phenogram_score: str = 'left_adjacent_phenogram_score'
    right_adjacent_phenogram_score: str = 'right_adjacent_phenogram_score'


def sort_columns(input_columns):
    """
    sorts the output columns so that the fixed columns come first in their defined order and
    the mechanism columns follow in their defined order. Any other columns are appended alphabetically
    """
    order = {col: i for i, col in enumerate(COLUMNS.values() + MECHANISM.values())}
    return sorted(input_columns, key=lambda x: (order.get(x, len(order)), x))
