"""
Per-gene alteration counts across a filtered cohort, annotated with the study's significance
scores (MutSig for mutations, GISTIC for copy-number alterations) when the cohort is drawn from a
single study.
"""

from typing import Sequence
from typing import TypeVar

from studyviewtoolbox.db.exchange_data_formats.cohort import StudyViewFilter
from studyviewtoolbox.db.exchange_data_formats.genes import AlterationCountByGene
from studyviewtoolbox.db.exchange_data_formats.genes import CopyNumberCountByGene
from studyviewtoolbox.db.exchange_data_formats.genes import DEEP_DELETION
from studyviewtoolbox.db.exchange_data_formats.genes import AMPLIFICATION
from studyviewtoolbox.db.exchange_data_formats.genes import Gistic
from studyviewtoolbox.db.exchange_data_formats.genes import MutSig
from studyviewtoolbox.db.exchange_data_formats.genes import MutationCountByGene
from studyviewtoolbox.studyview.interfaces import CohortResolver
from studyviewtoolbox.studyview.interfaces import DiscreteCopyNumberSource
from studyviewtoolbox.studyview.interfaces import MolecularProfileSource
from studyviewtoolbox.studyview.interfaces import MutationSource
from studyviewtoolbox.studyview.interfaces import SignificanceSource
from studyviewtoolbox.studyview.filter_util import extract_study_and_sample_ids
from studyviewtoolbox.standalone_utilities.log_formats import colorized_logger

logger = colorized_logger(__name__)

CountByGene = TypeVar('CountByGene', bound=AlterationCountByGene)


def sort_by_count(counts: list[CountByGene]) -> list[CountByGene]:
    """Most frequently altered first, ties broken by ascending Entrez gene identifier."""
    return sorted(counts, key=lambda c: (-c.count_by_entity, c.entrez_gene_id))


def mutsig_q_values(mutsig: Sequence[MutSig]) -> dict[int, float]:
    return {record.entrez_gene_id: record.q_value for record in mutsig}


def gistic_q_values(regions: Sequence[Gistic]) -> dict[int, float]:
    """For each gene, the smallest q-value of any region containing it."""
    q_values: dict[int, float] = {}
    for region in regions:
        for gene in region.genes:
            current = q_values.get(gene.entrez_gene_id)
            if current is None or region.q_value < current:
                q_values[gene.entrez_gene_id] = region.q_value
    return q_values


def annotate_q_values(counts: list[CountByGene], q_values: dict[int, float]) -> list[CountByGene]:
    for count in counts:
        if count.entrez_gene_id in q_values:
            count.q_value = q_values[count.entrez_gene_id]
    return counts


def single_study(study_ids: list[str]) -> str | None:
    distinct = list(dict.fromkeys(study_ids))
    if len(distinct) == 1:
        return distinct[0]
    return None


class AlteredGenesCounter:
    """Counts altered samples per gene, for mutations and for copy-number alterations."""
    cohort_resolver: CohortResolver
    molecular_profile_source: MolecularProfileSource
    mutation_source: MutationSource
    discrete_copy_number_source: DiscreteCopyNumberSource
    significance_source: SignificanceSource

    def __init__(self,
        cohort_resolver: CohortResolver,
        molecular_profile_source: MolecularProfileSource,
        mutation_source: MutationSource,
        discrete_copy_number_source: DiscreteCopyNumberSource,
        significance_source: SignificanceSource,
    ):
        self.cohort_resolver = cohort_resolver
        self.molecular_profile_source = molecular_profile_source
        self.mutation_source = mutation_source
        self.discrete_copy_number_source = discrete_copy_number_source
        self.significance_source = significance_source

    def mutated_genes(self, study_view_filter: StudyViewFilter) -> list[MutationCountByGene]:
        identifiers = self.cohort_resolver.apply(study_view_filter).unwrap()
        if len(identifiers) == 0:
            return []
        study_ids, sample_ids = extract_study_and_sample_ids(identifiers)
        case_identifiers = self.molecular_profile_source.get_first_mutation_profile_case_identifiers(
            study_ids,
            sample_ids,
        )
        counts = sort_by_count(self.mutation_source.get_sample_count_in_multiple_molecular_profiles(
            case_identifiers,
            include_frequency=True,
        ))
        study_id = single_study(study_ids)
        if study_id is None:
            logger.debug('Cohort spans several studies, omitting MutSig q-values.')
            return counts
        mutsig = self.significance_source.get_significantly_mutated_genes(study_id)
        return annotate_q_values(counts, mutsig_q_values(mutsig))

    def cna_genes(self, study_view_filter: StudyViewFilter) -> list[CopyNumberCountByGene]:
        identifiers = self.cohort_resolver.apply(study_view_filter).unwrap()
        if len(identifiers) == 0:
            return []
        study_ids, sample_ids = extract_study_and_sample_ids(identifiers)
        case_identifiers = self.molecular_profile_source.get_first_discrete_cna_profile_case_identifiers(
            study_ids,
            sample_ids,
        )
        counts = sort_by_count(self.discrete_copy_number_source.get_sample_count_in_multiple_molecular_profiles(
            case_identifiers,
            alteration_types=[DEEP_DELETION, AMPLIFICATION],
            include_frequency=True,
        ))
        study_id = single_study(study_ids)
        if study_id is None:
            logger.debug('Cohort spans several studies, omitting GISTIC q-values.')
            return counts
        regions = self.significance_source.get_significant_copy_number_regions(study_id)
        return annotate_q_values(counts, gistic_q_values(regions))
