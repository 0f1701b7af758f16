"""Numbers of cohort samples profiled for mutations and for copy-number alterations."""

from studyviewtoolbox.db.exchange_data_formats.cohort import StudyViewFilter
from studyviewtoolbox.db.exchange_data_formats.genes import MolecularProfileCaseIdentifier
from studyviewtoolbox.db.exchange_data_formats.genes import MolecularProfileSampleCount
from studyviewtoolbox.studyview.interfaces import CohortResolver
from studyviewtoolbox.studyview.interfaces import GenePanelSource
from studyviewtoolbox.studyview.interfaces import MolecularProfileSource
from studyviewtoolbox.studyview.filter_util import extract_study_and_sample_ids


class ProfiledSamplesCounter:
    cohort_resolver: CohortResolver
    molecular_profile_source: MolecularProfileSource
    gene_panel_source: GenePanelSource

    def __init__(self,
        cohort_resolver: CohortResolver,
        molecular_profile_source: MolecularProfileSource,
        gene_panel_source: GenePanelSource,
    ):
        self.cohort_resolver = cohort_resolver
        self.molecular_profile_source = molecular_profile_source
        self.gene_panel_source = gene_panel_source

    def count(self, study_view_filter: StudyViewFilter) -> MolecularProfileSampleCount:
        identifiers = self.cohort_resolver.apply(study_view_filter).unwrap()
        sample_count = MolecularProfileSampleCount()
        if len(identifiers) == 0:
            return sample_count
        study_ids, sample_ids = extract_study_and_sample_ids(identifiers)
        total = len(sample_ids)

        mutation_cases = self.molecular_profile_source.get_first_mutation_profile_case_identifiers(
            study_ids,
            sample_ids,
        )
        if len(mutation_cases) > 0:
            profiled = self._count_profiled(mutation_cases)
            sample_count.number_of_mutation_profiled_samples = profiled
            sample_count.number_of_mutation_unprofiled_samples = total - profiled

        cna_cases = self.molecular_profile_source.get_first_discrete_cna_profile_case_identifiers(
            study_ids,
            sample_ids,
        )
        if len(cna_cases) > 0:
            profiled = self._count_profiled(cna_cases)
            sample_count.number_of_cna_profiled_samples = profiled
            sample_count.number_of_cna_unprofiled_samples = total - profiled
        return sample_count

    def _count_profiled(self, case_identifiers: list[MolecularProfileCaseIdentifier]) -> int:
        panel_data = self.gene_panel_source.fetch_gene_panel_data_in_multiple_molecular_profiles(
            case_identifiers,
        )
        return sum(1 for datum in panel_data if datum.profiled)
