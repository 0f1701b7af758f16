"""Data structures for ready exchange, related to mutation and copy-number alteration data."""

from enum import Enum

from pydantic import Field

from studyviewtoolbox.db.exchange_data_formats.base import CamelModel


class MolecularAlterationType(str, Enum):
    """The two classes of molecular data summarized by the study view."""
    MUTATION_EXTENDED = 'MUTATION_EXTENDED'
    COPY_NUMBER_ALTERATION = 'COPY_NUMBER_ALTERATION'


DISCRETE_CNA_DATATYPE = 'DISCRETE'
AMPLIFICATION = 2
DEEP_DELETION = -2


class MolecularProfileCaseIdentifier(CamelModel):
    """A sample paired with the molecular profile in which its data is looked up."""
    molecular_profile_id: str
    case_id: str


class AlterationCountByGene(CamelModel):
    """The number of samples altered in a given gene."""
    entrez_gene_id: int
    hugo_gene_symbol: str | None = None
    count_by_entity: int
    total_count: int = 0
    frequency: float | None = None
    q_value: float | None = None


class MutationCountByGene(AlterationCountByGene):
    model_config = {
        'json_schema_extra': {
            'examples': [
                {
                    'entrezGeneId': 7157,
                    'hugoGeneSymbol': 'TP53',
                    'countByEntity': 18,
                    'totalCount': 21,
                    'frequency': 19.8,
                    'qValue': 0.0,
                },
            ]
        }
    }


class CopyNumberCountByGene(AlterationCountByGene):
    """Counts are per gene and per alteration (amplification 2, deep deletion -2)."""
    alteration: int
    cytoband: str | None = None


class MutSig(CamelModel):
    """A gene flagged as significantly mutated in a study."""
    entrez_gene_id: int
    hugo_gene_symbol: str | None = None
    p_value: float | None = None
    q_value: float


class GisticGene(CamelModel):
    entrez_gene_id: int
    hugo_gene_symbol: str | None = None


class Gistic(CamelModel):
    """A region flagged as significantly amplified or deleted in a study, with the genes in it."""
    gistic_roi_id: int | None = None
    cytoband: str | None = None
    amp: bool | None = None
    q_value: float
    genes: list[GisticGene] = []


class GenePanelData(CamelModel):
    """Whether a sample was assayed in a given molecular profile."""
    molecular_profile_id: str
    sample_id: str
    study_id: str | None = None
    gene_panel_id: str | None = None
    profiled: bool


class MolecularProfileSampleCount(CamelModel):
    """The number of cohort samples profiled, and not profiled, for mutations and for CNA."""
    number_of_mutation_profiled_samples: int = 0
    number_of_mutation_unprofiled_samples: int = 0
    number_of_cna_profiled_samples: int = Field(default=0, alias='numberOfCNAProfiledSamples')
    number_of_cna_unprofiled_samples: int = Field(default=0, alias='numberOfCNAUnprofiledSamples')
