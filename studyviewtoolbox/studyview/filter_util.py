"""Manipulations of cohort filters and of the identifier lists they resolve to."""

from studyviewtoolbox.db.exchange_data_formats.cohort import ClinicalDataType
from studyviewtoolbox.db.exchange_data_formats.cohort import SampleIdentifier
from studyviewtoolbox.db.exchange_data_formats.cohort import StudyViewFilter
from studyviewtoolbox.studyview.interfaces import PatientSource


def extract_study_and_sample_ids(
    identifiers: list[SampleIdentifier],
) -> tuple[list[str], list[str]]:
    study_ids = [identifier.study_id for identifier in identifiers]
    sample_ids = [identifier.sample_id for identifier in identifiers]
    return study_ids, sample_ids


def extract_ids(
    clinical_data_type: ClinicalDataType,
    identifiers: list[SampleIdentifier],
    patient_source: PatientSource,
) -> tuple[list[str], list[str]]:
    """The identifiers of the entities that data of the given type is recorded for (the samples
    themselves, or the distinct patients owning them), with the paired study identifiers.
    """
    study_ids, sample_ids = extract_study_and_sample_ids(identifiers)
    if clinical_data_type == ClinicalDataType.SAMPLE:
        return study_ids, sample_ids
    patients = patient_source.get_patients_of_samples(study_ids, sample_ids)
    return [p.study_id for p in patients], [p.patient_id for p in patients]


def remove_self_from_filter(attribute_id: str, study_view_filter: StudyViewFilter) -> StudyViewFilter:
    """
    A copy of the filter without the constraints on the given attribute, so that the counts for
    that attribute show the alternatives to the current selection.
    """
    reduced = study_view_filter.model_copy(deep=True)
    equality = [
        f for f in (reduced.clinical_data_equality_filters or [])
        if f.attribute_id != attribute_id
    ]
    interval = [
        f for f in (reduced.clinical_data_interval_filters or [])
        if f.attribute_id != attribute_id
    ]
    reduced.clinical_data_equality_filters = equality if len(equality) > 0 else None
    reduced.clinical_data_interval_filters = interval if len(interval) > 0 else None
    return reduced


def baseline_filter(study_view_filter: StudyViewFilter) -> StudyViewFilter:
    """The filter's scope alone, with every attribute constraint dropped."""
    sample_identifiers = None
    if study_view_filter.sample_identifiers is not None:
        sample_identifiers = [i.model_copy() for i in study_view_filter.sample_identifiers]
    study_ids = None
    if study_view_filter.study_ids is not None:
        study_ids = list(study_view_filter.study_ids)
    return StudyViewFilter(study_ids=study_ids, sample_identifiers=sample_identifiers)
