import pytest

from studyviewtoolbox.db.exchange_data_formats.cohort import ClinicalDataEqualityFilter
from studyviewtoolbox.db.exchange_data_formats.cohort import ClinicalDataType
from studyviewtoolbox.db.exchange_data_formats.cohort import StudyNotFoundError
from studyviewtoolbox.db.exchange_data_formats.cohort import StudyViewFilter


def test_unconstrained_filter_returns_study_samples(service):
    samples = service.fetch_filtered_samples(StudyViewFilter(study_ids=['study_b']))
    assert [(s.sample_id, s.patient_id) for s in samples] == [('S1', 'Q1'), ('T2', 'Q1')]


def test_negated_filter(service):
    study_view_filter = StudyViewFilter(
        study_ids=['study_a'],
        clinical_data_equality_filters=[
            ClinicalDataEqualityFilter(
                attribute_id='SEX',
                clinical_data_type=ClinicalDataType.PATIENT,
                values=['Female'],
            ),
        ],
    )
    samples = service.fetch_filtered_samples(study_view_filter, negate_filters=True)
    assert [(s.sample_id, s.patient_id) for s in samples] == [('S3', 'P2')]


def test_unknown_study(service):
    with pytest.raises(StudyNotFoundError):
        service.fetch_filtered_samples(StudyViewFilter(study_ids=['no_such_study']))
