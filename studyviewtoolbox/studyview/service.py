"""The study view queries, each computed over the cohort selected by a filter."""

from studyviewtoolbox.db.exchange_data_formats.cohort import ClinicalDataType
from studyviewtoolbox.db.exchange_data_formats.cohort import Sample
from studyviewtoolbox.db.exchange_data_formats.cohort import StudyViewFilter
from studyviewtoolbox.db.exchange_data_formats.clinical import ClinicalDataBinFilter
from studyviewtoolbox.db.exchange_data_formats.clinical import ClinicalDataCountItem
from studyviewtoolbox.db.exchange_data_formats.clinical import ClinicalDataFilter
from studyviewtoolbox.db.exchange_data_formats.clinical import DataBin
from studyviewtoolbox.db.exchange_data_formats.clinical import DataBinMethod
from studyviewtoolbox.db.exchange_data_formats.clinical import DensityPlotBin
from studyviewtoolbox.db.exchange_data_formats.genes import CopyNumberCountByGene
from studyviewtoolbox.db.exchange_data_formats.genes import MolecularProfileSampleCount
from studyviewtoolbox.db.exchange_data_formats.genes import MutationCountByGene
from studyviewtoolbox.studyview.sources import StudyViewSources
from studyviewtoolbox.studyview.clinical_counts import ClinicalDataCounter
from studyviewtoolbox.studyview.data_bins import ClinicalDataBinCounter
from studyviewtoolbox.studyview.density_plot import AxisSpecification
from studyviewtoolbox.studyview.density_plot import ClinicalDataDensityPlotter
from studyviewtoolbox.studyview.significance import AlteredGenesCounter
from studyviewtoolbox.studyview.profile_counts import ProfiledSamplesCounter
from studyviewtoolbox.studyview.filter_util import extract_study_and_sample_ids


class StudyViewService:
    """
    Entry point for all study view queries. Each query resolves the filter to a cohort of samples
    first; a filter naming a study that does not exist raises StudyNotFoundError.
    """
    sources: StudyViewSources

    def __init__(self, sources: StudyViewSources):
        self.sources = sources

    def fetch_clinical_data_counts(
        self,
        attributes: list[ClinicalDataFilter],
        study_view_filter: StudyViewFilter,
    ) -> list[ClinicalDataCountItem]:
        counter = ClinicalDataCounter(self.sources.cohort_resolver, self.sources.clinical_data_source)
        return counter.count(attributes, study_view_filter)

    def fetch_clinical_data_bin_counts(
        self,
        attributes: list[ClinicalDataBinFilter],
        study_view_filter: StudyViewFilter,
        data_bin_method: DataBinMethod = DataBinMethod.DYNAMIC,
    ) -> list[DataBin] | None:
        counter = ClinicalDataBinCounter(
            self.sources.cohort_resolver,
            self.sources.clinical_data_source,
            self.sources.patient_source,
            self.sources.data_binner,
        )
        return counter.count(attributes, study_view_filter, data_bin_method)

    def fetch_mutated_genes(self, study_view_filter: StudyViewFilter) -> list[MutationCountByGene]:
        return self._altered_genes_counter().mutated_genes(study_view_filter)

    def fetch_cna_genes(self, study_view_filter: StudyViewFilter) -> list[CopyNumberCountByGene]:
        return self._altered_genes_counter().cna_genes(study_view_filter)

    def fetch_filtered_samples(
        self,
        study_view_filter: StudyViewFilter,
        negate_filters: bool = False,
    ) -> list[Sample]:
        identifiers = self.sources.cohort_resolver.apply(study_view_filter, negate=negate_filters).unwrap()
        if len(identifiers) == 0:
            return []
        study_ids, sample_ids = extract_study_and_sample_ids(identifiers)
        return self.sources.sample_source.fetch_samples(study_ids, sample_ids)

    def fetch_molecular_profile_sample_counts(
        self,
        study_view_filter: StudyViewFilter,
    ) -> MolecularProfileSampleCount:
        counter = ProfiledSamplesCounter(
            self.sources.cohort_resolver,
            self.sources.molecular_profile_source,
            self.sources.gene_panel_source,
        )
        return counter.count(study_view_filter)

    def fetch_clinical_data_density_plot(
        self,
        x_axis: AxisSpecification,
        y_axis: AxisSpecification,
        clinical_data_type: ClinicalDataType,
        study_view_filter: StudyViewFilter,
    ) -> list[DensityPlotBin]:
        plotter = ClinicalDataDensityPlotter(
            self.sources.cohort_resolver,
            self.sources.clinical_data_source,
            self.sources.patient_source,
        )
        return plotter.plot(x_axis, y_axis, clinical_data_type, study_view_filter)

    def _altered_genes_counter(self) -> AlteredGenesCounter:
        return AlteredGenesCounter(
            self.sources.cohort_resolver,
            self.sources.molecular_profile_source,
            self.sources.mutation_source,
            self.sources.discrete_copy_number_source,
            self.sources.significance_source,
        )
