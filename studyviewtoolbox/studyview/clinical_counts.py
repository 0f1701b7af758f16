"""Value counts of clinical attributes across a filtered cohort."""

from studyviewtoolbox.db.exchange_data_formats.cohort import ClinicalDataType
from studyviewtoolbox.db.exchange_data_formats.cohort import StudyViewFilter
from studyviewtoolbox.db.exchange_data_formats.clinical import ClinicalDataCountItem
from studyviewtoolbox.db.exchange_data_formats.clinical import ClinicalDataFilter
from studyviewtoolbox.studyview.interfaces import ClinicalDataSource
from studyviewtoolbox.studyview.interfaces import CohortResolver
from studyviewtoolbox.studyview.filter_util import extract_study_and_sample_ids
from studyviewtoolbox.studyview.filter_util import remove_self_from_filter
from studyviewtoolbox.standalone_utilities.log_formats import colorized_logger

logger = colorized_logger(__name__)


def partition_attribute_ids(
    attributes: list[ClinicalDataFilter],
) -> dict[ClinicalDataType, list[str]]:
    """Attribute identifiers by data type, sample-level first."""
    return {
        clinical_data_type: [
            a.attribute_id for a in attributes if a.clinical_data_type == clinical_data_type
        ]
        for clinical_data_type in (ClinicalDataType.SAMPLE, ClinicalDataType.PATIENT)
    }


def remove_self_if_single_attribute(
    attributes: list[ClinicalDataFilter],
    study_view_filter: StudyViewFilter,
) -> StudyViewFilter:
    if len(attributes) == 1:
        return remove_self_from_filter(attributes[0].attribute_id, study_view_filter)
    return study_view_filter


class ClinicalDataCounter:
    """Counts, for each requested attribute, the samples or patients having each value."""
    cohort_resolver: CohortResolver
    clinical_data_source: ClinicalDataSource

    def __init__(self, cohort_resolver: CohortResolver, clinical_data_source: ClinicalDataSource):
        self.cohort_resolver = cohort_resolver
        self.clinical_data_source = clinical_data_source

    def count(
        self,
        attributes: list[ClinicalDataFilter],
        study_view_filter: StudyViewFilter,
    ) -> list[ClinicalDataCountItem]:
        study_view_filter = remove_self_if_single_attribute(attributes, study_view_filter)
        identifiers = self.cohort_resolver.apply(study_view_filter).unwrap()
        if len(identifiers) == 0:
            return []
        study_ids, sample_ids = extract_study_and_sample_ids(identifiers)
        combined: list[ClinicalDataCountItem] = []
        for clinical_data_type, attribute_ids in partition_attribute_ids(attributes).items():
            if len(attribute_ids) == 0:
                continue
            logger.debug('Counting %s %s attributes over %s samples.', len(attribute_ids), clinical_data_type.value, len(sample_ids))
            combined.extend(self.clinical_data_source.fetch_clinical_data_counts(
                study_ids,
                sample_ids,
                attribute_ids,
                clinical_data_type,
            ))
        return combined
