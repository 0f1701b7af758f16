import pytest

from studyviewtoolbox.db.exchange_data_formats.cohort import ClinicalDataEqualityFilter
from studyviewtoolbox.db.exchange_data_formats.cohort import ClinicalDataType
from studyviewtoolbox.db.exchange_data_formats.cohort import StudyNotFoundError
from studyviewtoolbox.db.exchange_data_formats.cohort import StudyViewFilter
from studyviewtoolbox.db.exchange_data_formats.clinical import ClinicalDataFilter
from studyviewtoolbox.studyview.clinical_counts import partition_attribute_ids

CANCER_TYPE = ClinicalDataFilter(attribute_id='CANCER_TYPE', clinical_data_type=ClinicalDataType.SAMPLE)
SEX = ClinicalDataFilter(attribute_id='SEX', clinical_data_type=ClinicalDataType.PATIENT)


def breast_only() -> StudyViewFilter:
    return StudyViewFilter(
        study_ids=['study_a'],
        clinical_data_equality_filters=[
            ClinicalDataEqualityFilter(
                attribute_id='CANCER_TYPE',
                clinical_data_type=ClinicalDataType.SAMPLE,
                values=['Breast'],
            ),
        ],
    )


def as_dict(item):
    return {count.value: count.count for count in item.counts}


def test_partition_puts_sample_attributes_first():
    partition = partition_attribute_ids([SEX, CANCER_TYPE])
    assert list(partition.keys()) == [ClinicalDataType.SAMPLE, ClinicalDataType.PATIENT]
    assert partition[ClinicalDataType.SAMPLE] == ['CANCER_TYPE']
    assert partition[ClinicalDataType.PATIENT] == ['SEX']


def test_counts_include_missing_values(service):
    items = service.fetch_clinical_data_counts([CANCER_TYPE], StudyViewFilter(study_ids=['study_a']))
    assert len(items) == 1
    assert as_dict(items[0]) == {'Breast': 2, 'Lung': 2, 'NA': 1}


def test_single_attribute_ignores_its_own_filter(service, recording_resolver):
    items = service.fetch_clinical_data_counts([CANCER_TYPE], breast_only())
    assert as_dict(items[0]) == {'Breast': 2, 'Lung': 2, 'NA': 1}
    applied = recording_resolver.applied[-1]
    assert applied.clinical_data_equality_filters is None
    assert applied.study_ids == ['study_a']


def test_self_filter_kept_with_several_attributes(service):
    items = service.fetch_clinical_data_counts([CANCER_TYPE, SEX], breast_only())
    by_attribute = {item.attribute_id: as_dict(item) for item in items}
    assert by_attribute['CANCER_TYPE'] == {'Breast': 2}
    assert by_attribute['SEX'] == {'Female': 1}


def test_sample_results_precede_patient_results(service):
    items = service.fetch_clinical_data_counts([SEX, CANCER_TYPE], StudyViewFilter(study_ids=['study_a']))
    assert [item.attribute_id for item in items] == ['CANCER_TYPE', 'SEX']
    assert [item.clinical_data_type for item in items] == [ClinicalDataType.SAMPLE, ClinicalDataType.PATIENT]
    assert as_dict(items[1]) == {'Female': 3, 'Male': 1}


def test_empty_cohort_skips_data_store(service, clinical_store):
    study_view_filter = breast_only()
    study_view_filter.clinical_data_equality_filters[0].values = ['Nonexistent']
    assert service.fetch_clinical_data_counts([CANCER_TYPE, SEX], study_view_filter) == []
    assert 'fetch_clinical_data_counts' not in clinical_store.calls


def test_unknown_study(service):
    with pytest.raises(StudyNotFoundError):
        service.fetch_clinical_data_counts([CANCER_TYPE], StudyViewFilter(study_ids=['no_such_study']))
