import pytest
from fastapi.testclient import TestClient

from studyviewtoolbox.apiserver.app.main import app
from studyviewtoolbox.apiserver.app.main import get_study_view_service


@pytest.fixture
def client(service):
    app.dependency_overrides[get_study_view_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


def study_a_filter():
    return {'studyIds': ['study_a']}


def test_root(client):
    response = client.get('/')
    assert response.status_code == 200
    assert response.json()['title'] == 'Study view aggregation API'
    assert response.headers['x-content-type-options'] == 'nosniff'


def test_clinical_data_counts(client):
    body = {
        'attributes': [{'attributeId': 'CANCER_TYPE', 'clinicalDataType': 'SAMPLE'}],
        'studyViewFilter': study_a_filter(),
    }
    response = client.post('/clinical-data-counts/fetch', json=body)
    assert response.status_code == 200
    items = response.json()
    assert items[0]['attributeId'] == 'CANCER_TYPE'
    assert {c['value']: c['count'] for c in items[0]['counts']} == {'Breast': 2, 'Lung': 2, 'NA': 1}


def test_clinical_data_bin_counts_null_when_nothing_to_bin(client):
    body = {
        'attributes': [{'attributeId': 'NOT_RECORDED', 'clinicalDataType': 'SAMPLE'}],
        'studyViewFilter': study_a_filter(),
    }
    response = client.post('/clinical-data-bin-counts/fetch', json=body, params={'dataBinMethod': 'STATIC'})
    assert response.status_code == 200
    assert response.json() is None


def test_clinical_data_bin_counts(client):
    body = {
        'attributes': [{'attributeId': 'AGE', 'clinicalDataType': 'PATIENT', 'disableLogScale': True}],
        'studyViewFilter': study_a_filter(),
    }
    response = client.post('/clinical-data-bin-counts/fetch', json=body)
    assert response.status_code == 200
    bins = response.json()
    assert all(b['clinicalDataType'] == 'PATIENT' for b in bins)
    assert {'attributeId': 'AGE', 'clinicalDataType': 'PATIENT', 'specialValue': 'NA', 'start': None, 'end': None, 'count': 1} in bins


def test_mutated_genes(client):
    response = client.post('/mutated-genes/fetch', json=study_a_filter())
    assert response.status_code == 200
    assert [g['entrezGeneId'] for g in response.json()] == [5728, 7157, 672]


def test_cna_genes(client):
    response = client.post('/cna-genes/fetch', json=study_a_filter())
    assert response.status_code == 200
    assert [g['alteration'] for g in response.json()] == [2, -2]


def test_filtered_samples(client):
    response = client.post('/filtered-samples/fetch', json={'studyIds': ['study_b']})
    assert response.json() == [
        {'studyId': 'study_b', 'sampleId': 'S1', 'patientId': 'Q1'},
        {'studyId': 'study_b', 'sampleId': 'T2', 'patientId': 'Q1'},
    ]
    negated = client.post('/filtered-samples/fetch', json={'studyIds': ['study_b']}, params={'negateFilters': True})
    assert negated.json() == []


def test_sample_counts(client):
    response = client.post('/sample-counts/fetch', json=study_a_filter())
    assert response.json()['numberOfCNAProfiledSamples'] == 4


def test_density_plot(client):
    params = {
        'xAxisAttributeId': 'MUTATION_COUNT',
        'yAxisAttributeId': 'TMB',
        'xAxisBinCount': 2,
        'yAxisBinCount': 3,
        'clinicalDataType': 'SAMPLE',
    }
    response = client.post('/clinical-data-density-plot/fetch', json=study_a_filter(), params=params)
    assert response.status_code == 200
    bins = response.json()
    assert len(bins) == 6
    assert sum(b['count'] for b in bins) == 3


def test_density_plot_rejects_zero_bin_count(client):
    params = {
        'xAxisAttributeId': 'MUTATION_COUNT',
        'yAxisAttributeId': 'TMB',
        'xAxisBinCount': 0,
        'clinicalDataType': 'SAMPLE',
    }
    response = client.post('/clinical-data-density-plot/fetch', json=study_a_filter(), params=params)
    assert response.status_code == 422


def test_density_plot_empty_range(client):
    params = {
        'xAxisAttributeId': 'MUTATION_COUNT',
        'yAxisAttributeId': 'TMB',
        'xAxisStart': 5,
        'xAxisEnd': 5,
        'clinicalDataType': 'SAMPLE',
    }
    response = client.post('/clinical-data-density-plot/fetch', json=study_a_filter(), params=params)
    assert response.status_code == 400


def test_unknown_study(client):
    response = client.post('/mutated-genes/fetch', json={'studyIds': ['no_such_study']})
    assert response.status_code == 404
    assert 'no_such_study' in response.json()['detail']
