"""Histogram bins of clinical attributes across a filtered cohort, with static or dynamic edges."""

from attrs import define
from attrs import field

from studyviewtoolbox.db.exchange_data_formats.cohort import ClinicalDataType
from studyviewtoolbox.db.exchange_data_formats.cohort import StudyViewFilter
from studyviewtoolbox.db.exchange_data_formats.clinical import ClinicalData
from studyviewtoolbox.db.exchange_data_formats.clinical import ClinicalDataBinFilter
from studyviewtoolbox.db.exchange_data_formats.clinical import DataBin
from studyviewtoolbox.db.exchange_data_formats.clinical import DataBinMethod
from studyviewtoolbox.studyview.interfaces import ClinicalDataSource
from studyviewtoolbox.studyview.interfaces import CohortResolver
from studyviewtoolbox.studyview.interfaces import DataBinner
from studyviewtoolbox.studyview.interfaces import PatientSource
from studyviewtoolbox.studyview.clinical_counts import partition_attribute_ids
from studyviewtoolbox.studyview.clinical_counts import remove_self_if_single_attribute
from studyviewtoolbox.studyview.filter_util import baseline_filter
from studyviewtoolbox.studyview.filter_util import extract_ids
from studyviewtoolbox.standalone_utilities.log_formats import colorized_logger

logger = colorized_logger(__name__)


@define
class CohortClinicalData:
    """The values of some attributes across a cohort, and the cohort's identifiers per data type."""
    data: list[ClinicalData] = field(factory=list)
    ids: dict[ClinicalDataType, list[str]] = field(factory=dict)

    def is_empty(self) -> bool:
        return len(self.data) == 0

    def by_attribute(self) -> dict[str, list[ClinicalData]]:
        grouped: dict[str, list[ClinicalData]] = {}
        for datum in self.data:
            grouped.setdefault(datum.attribute_id, []).append(datum)
        return grouped

    def ids_of(self, clinical_data_type: ClinicalDataType) -> list[str]:
        return self.ids.get(clinical_data_type, [])


class ClinicalDataBinCounter:
    """Bins clinical attribute values, delegating the choice of edges to a DataBinner."""
    cohort_resolver: CohortResolver
    clinical_data_source: ClinicalDataSource
    patient_source: PatientSource
    data_binner: DataBinner

    def __init__(self,
        cohort_resolver: CohortResolver,
        clinical_data_source: ClinicalDataSource,
        patient_source: PatientSource,
        data_binner: DataBinner,
    ):
        self.cohort_resolver = cohort_resolver
        self.clinical_data_source = clinical_data_source
        self.patient_source = patient_source
        self.data_binner = data_binner

    def count(
        self,
        attributes: list[ClinicalDataBinFilter],
        study_view_filter: StudyViewFilter,
        data_bin_method: DataBinMethod = DataBinMethod.DYNAMIC,
    ) -> list[DataBin] | None:
        """
        None signals that there is nothing to bin: the filtered cohort has no values (dynamic), or
        the unfiltered cohort has no values (static).
        """
        study_view_filter = remove_self_if_single_attribute(attributes, study_view_filter)
        filtered = self.fetch_clinical_data(attributes, study_view_filter)
        if data_bin_method == DataBinMethod.STATIC:
            unfiltered = self.fetch_clinical_data(attributes, baseline_filter(study_view_filter))
            if unfiltered.is_empty():
                return None
            return self._static_bins(attributes, filtered, unfiltered)
        if filtered.is_empty():
            return None
        return self._dynamic_bins(attributes, filtered)

    def _dynamic_bins(
        self,
        attributes: list[ClinicalDataBinFilter],
        filtered: CohortClinicalData,
    ) -> list[DataBin]:
        filtered_by_attribute = filtered.by_attribute()
        bins: list[DataBin] = []
        for attribute in attributes:
            data_bins = self.data_binner.calculate_clinical_data_bins(
                attribute.attribute_id,
                attribute.clinical_data_type,
                filtered_by_attribute.get(attribute.attribute_id, []),
                filtered.ids_of(attribute.clinical_data_type),
                disable_log_scale=attribute.disable_log_scale,
            )
            bins.extend(_tagged(data_bins, attribute.clinical_data_type))
        return bins

    def _static_bins(
        self,
        attributes: list[ClinicalDataBinFilter],
        filtered: CohortClinicalData,
        unfiltered: CohortClinicalData,
    ) -> list[DataBin]:
        filtered_by_attribute = filtered.by_attribute()
        unfiltered_by_attribute = unfiltered.by_attribute()
        bins: list[DataBin] = []
        for attribute in attributes:
            baseline = unfiltered_by_attribute.get(attribute.attribute_id, [])
            if len(baseline) == 0:
                logger.debug('No unfiltered values of %s, so no static bins.', attribute.attribute_id)
                continue
            data_bins = self.data_binner.calculate_clinical_data_bins(
                attribute.attribute_id,
                attribute.clinical_data_type,
                filtered_by_attribute.get(attribute.attribute_id, []),
                filtered.ids_of(attribute.clinical_data_type),
                disable_log_scale=attribute.disable_log_scale,
                unfiltered_clinical_data=baseline,
                unfiltered_ids=unfiltered.ids_of(attribute.clinical_data_type),
            )
            bins.extend(_tagged(data_bins, attribute.clinical_data_type))
        return bins

    def fetch_clinical_data(
        self,
        attributes: list[ClinicalDataBinFilter],
        study_view_filter: StudyViewFilter,
    ) -> CohortClinicalData:
        """Values of the attributes over the cohort, fetched once per data type."""
        identifiers = self.cohort_resolver.apply(study_view_filter).unwrap()
        result = CohortClinicalData()
        if len(identifiers) == 0:
            return result
        for clinical_data_type, attribute_ids in partition_attribute_ids(attributes).items():
            if len(attribute_ids) == 0:
                continue
            study_ids, ids = extract_ids(clinical_data_type, identifiers, self.patient_source)
            result.ids[clinical_data_type] = ids
            result.data.extend(self.clinical_data_source.fetch_clinical_data(
                study_ids,
                ids,
                attribute_ids,
                clinical_data_type,
            ))
        return result


def _tagged(data_bins: list[DataBin], clinical_data_type: ClinicalDataType) -> list[DataBin]:
    for data_bin in data_bins:
        data_bin.clinical_data_type = clinical_data_type
    return data_bins
