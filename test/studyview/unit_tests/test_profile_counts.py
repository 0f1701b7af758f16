from studyviewtoolbox.db.exchange_data_formats.cohort import CohortResolution
from studyviewtoolbox.db.exchange_data_formats.cohort import SampleIdentifier
from studyviewtoolbox.db.exchange_data_formats.cohort import StudyViewFilter
from studyviewtoolbox.studyview.profile_counts import ProfiledSamplesCounter


class TenSamples:
    def apply(self, study_view_filter, negate=False):
        return CohortResolution(identifiers=[
            SampleIdentifier(study_id='study_a', sample_id=f'sample_{i}') for i in range(10)
        ])


def test_no_mutation_profile_and_partly_profiled_cna(molecular_profiles, gene_panels):
    molecular_profiles.mutation_profiles = {}
    gene_panels.profiled = set(('study_a_gistic', f'sample_{i}') for i in range(7))
    counter = ProfiledSamplesCounter(TenSamples(), molecular_profiles, gene_panels)
    counts = counter.count(StudyViewFilter(study_ids=['study_a']))
    assert counts.number_of_mutation_profiled_samples == 0
    assert counts.number_of_mutation_unprofiled_samples == 0
    assert counts.number_of_cna_profiled_samples == 7
    assert counts.number_of_cna_unprofiled_samples == 3


def test_counts_over_filtered_cohort(service):
    counts = service.fetch_molecular_profile_sample_counts(StudyViewFilter(study_ids=['study_a']))
    assert counts.model_dump(by_alias=True) == {
        'numberOfMutationProfiledSamples': 3,
        'numberOfMutationUnprofiledSamples': 2,
        'numberOfCNAProfiledSamples': 4,
        'numberOfCNAUnprofiledSamples': 1,
    }


def test_study_without_cna_profile(service):
    counts = service.fetch_molecular_profile_sample_counts(StudyViewFilter(study_ids=['study_b']))
    assert counts.number_of_mutation_profiled_samples == 0
    assert counts.number_of_mutation_unprofiled_samples == 2
    assert counts.number_of_cna_profiled_samples == 0
    assert counts.number_of_cna_unprofiled_samples == 0
