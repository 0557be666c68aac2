from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional

from ..constants import COLUMNS, LIST_DELIM, MECHANISM, MECHANISM_EFFECTS
from ..genomic import CNV, Gene, GenomicElement, GenomicSet


class EffectMechanisms(Dict[str, str]):
    """
    the effect label of each mechanism a CNV has been classified by. Keys must be mechanisms and
    values must belong to the outcome vocabulary of their mechanism

    Example:
        >>> from topodombar.constants import MECHANISM, TDBD_EFFECT
        >>> effects = EffectMechanisms()
        >>> effects[MECHANISM.TDBD] = TDBD_EFFECT.GDE
        >>> effects
        {'TDBD': 'GDE'}
    """

    def __init__(self, *pos, **kwargs):
        dict.__init__(self)
        self.update(*pos, **kwargs)

    def __setitem__(self, mechanism, effect):
        MECHANISM.enforce(mechanism)
        MECHANISM_EFFECTS[mechanism].enforce(effect)
        dict.__setitem__(self, mechanism, effect)

    def update(self, *pos, **kwargs):
        for key, value in dict(*pos, **kwargs).items():
            self[key] = value

    def setdefault(self, key, default=None):
        if key not in self:
            self[key] = default
        return self[key]


def _join_names(elements: Iterable[GenomicElement]) -> str:
    return LIST_DELIM.join([e.name for e in elements])


def _region(region: Optional[GenomicElement]) -> Optional[str]:
    return region.region_string() if region is not None else None


@dataclass
class CNVAnnotation:
    """
    the annotation state of a single CNV. Each annotation pass fills in its own fields, fields of
    passes which have not been run keep their empty defaults
    """

    cnv: CNV
    boundary_overlap: GenomicSet[GenomicElement] = field(default_factory=GenomicSet)
    left_adjacent_region: Optional[GenomicElement] = None
    right_adjacent_region: Optional[GenomicElement] = None
    left_overlapped_domain_region: Optional[GenomicElement] = None
    right_overlapped_domain_region: Optional[GenomicElement] = None
    genes_in_overlap: GenomicSet[Gene] = field(default_factory=GenomicSet)
    genes_in_left_region: GenomicSet[Gene] = field(default_factory=GenomicSet)
    genes_in_right_region: GenomicSet[Gene] = field(default_factory=GenomicSet)
    enhancers_in_left_region: GenomicSet[GenomicElement] = field(default_factory=GenomicSet)
    enhancers_in_right_region: GenomicSet[GenomicElement] = field(default_factory=GenomicSet)
    overlap_phenogram_score: float = 0.0
    left_adjacent_phenogram_score: float = 0.0
    right_adjacent_phenogram_score: float = 0.0
    effect_mechanisms: EffectMechanisms = field(default_factory=EffectMechanisms)

    @property
    def name(self) -> str:
        return self.cnv.name

    def has_boundary_overlap(self) -> bool:
        return len(self.boundary_overlap) > 0

    def flatten(self) -> Dict:
        """
        the CNV and its annotations as a single row for output
        """
        row = self.cnv.to_dict()
        row.update(
            {
                COLUMNS.boundary_overlap: _join_names(self.boundary_overlap.values()),
                COLUMNS.overlapped_genes: _join_names(self.genes_in_overlap.values()),
                COLUMNS.overlap_phenogram_score: self.overlap_phenogram_score,
                COLUMNS.left_adjacent_region: _region(self.left_adjacent_region),
                COLUMNS.right_adjacent_region: _region(self.right_adjacent_region),
                COLUMNS.left_overlapped_domain_region: _region(self.left_overlapped_domain_region),
                COLUMNS.right_overlapped_domain_region: _region(
                    self.right_overlapped_domain_region
                ),
                COLUMNS.left_adjacent_genes: _join_names(self.genes_in_left_region.values()),
                COLUMNS.right_adjacent_genes: _join_names(self.genes_in_right_region.values()),
                COLUMNS.left_adjacent_enhancers: _join_names(
                    self.enhancers_in_left_region.values()
                ),
                COLUMNS.right_adjacent_enhancers: _join_names(
                    self.enhancers_in_right_region.values()
                ),
                COLUMNS.left_adjacent_phenogram_score: self.left_adjacent_phenogram_score,
                COLUMNS.right_adjacent_phenogram_score: self.right_adjacent_phenogram_score,
            }
        )
        row.update(self.effect_mechanisms)
        return row


def initialize_annotations(cnvs: Iterable[CNV]) -> Dict[str, CNVAnnotation]:
    """
    an empty annotation for each CNV keyed by the CNV name, in the order of the input CNVs
    """
    return {cnv.name: CNVAnnotation(cnv) for cnv in cnvs}
