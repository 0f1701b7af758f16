"""In-memory data sources standing in for the database, and fixtures assembling them."""
from itertools import chain

import pytest

from studyviewtoolbox.db.exchange_data_formats.cohort import ClinicalDataType
from studyviewtoolbox.db.exchange_data_formats.cohort import PatientIdentifier
from studyviewtoolbox.db.exchange_data_formats.cohort import Sample
from studyviewtoolbox.db.exchange_data_formats.cohort import SampleIdentifier
from studyviewtoolbox.db.exchange_data_formats.cohort import StudyViewFilter
from studyviewtoolbox.db.exchange_data_formats.clinical import ClinicalData
from studyviewtoolbox.db.exchange_data_formats.clinical import ClinicalDataCount
from studyviewtoolbox.db.exchange_data_formats.clinical import ClinicalDataCountItem
from studyviewtoolbox.db.exchange_data_formats.genes import CopyNumberCountByGene
from studyviewtoolbox.db.exchange_data_formats.genes import GenePanelData
from studyviewtoolbox.db.exchange_data_formats.genes import Gistic
from studyviewtoolbox.db.exchange_data_formats.genes import MolecularProfileCaseIdentifier
from studyviewtoolbox.db.exchange_data_formats.genes import MutSig
from studyviewtoolbox.db.exchange_data_formats.genes import MutationCountByGene
from studyviewtoolbox.studyview.interfaces import ClinicalDataSource
from studyviewtoolbox.studyview.interfaces import CohortResolver
from studyviewtoolbox.studyview.interfaces import DiscreteCopyNumberSource
from studyviewtoolbox.studyview.interfaces import GenePanelSource
from studyviewtoolbox.studyview.interfaces import MolecularProfileSource
from studyviewtoolbox.studyview.interfaces import MutationSource
from studyviewtoolbox.studyview.interfaces import PatientSource
from studyviewtoolbox.studyview.interfaces import SampleSource
from studyviewtoolbox.studyview.interfaces import SignificanceSource
from studyviewtoolbox.studyview.data_binner import LinearLogDataBinner
from studyviewtoolbox.studyview.filter_applier import StudyViewFilterApplier
from studyviewtoolbox.studyview.sources import StudyViewSources
from studyviewtoolbox.studyview.service import StudyViewService
from studyviewtoolbox.studyview.values import NA_VALUE

# (study, sample, patient)
SAMPLES = [
    ('study_a', 'S1', 'P1'),
    ('study_a', 'S2', 'P1'),
    ('study_a', 'S3', 'P2'),
    ('study_a', 'S4', 'P3'),
    ('study_a', 'S5', 'P4'),
    ('study_b', 'S1', 'Q1'),
    ('study_b', 'T2', 'Q1'),
]

SAMPLE_DATA = {
    ('study_a', 'S1'): {'CANCER_TYPE': 'Breast', 'MUTATION_COUNT': '10', 'TMB': '1'},
    ('study_a', 'S2'): {'CANCER_TYPE': 'Breast', 'MUTATION_COUNT': '20', 'TMB': '3'},
    ('study_a', 'S3'): {'CANCER_TYPE': 'Lung', 'MUTATION_COUNT': '30', 'TMB': '5'},
    ('study_a', 'S4'): {'CANCER_TYPE': 'Lung', 'MUTATION_COUNT': '40'},
    ('study_a', 'S5'): {'MUTATION_COUNT': 'unknown', 'TMB': '9'},
    ('study_b', 'S1'): {'CANCER_TYPE': 'Melanoma', 'MUTATION_COUNT': '100'},
    ('study_b', 'T2'): {'CANCER_TYPE': 'Melanoma'},
}

PATIENT_DATA = {
    ('study_a', 'P1'): {'AGE': '45', 'SEX': 'Female'},
    ('study_a', 'P2'): {'AGE': '60', 'SEX': 'Male'},
    ('study_a', 'P3'): {'AGE': '70', 'SEX': 'Female'},
    ('study_a', 'P4'): {'SEX': 'Female'},
    ('study_b', 'Q1'): {'AGE': '52', 'SEX': 'Male'},
}


class InMemoryClinicalStore(SampleSource, PatientSource, ClinicalDataSource):
    """Samples, patients and their clinical values held in dictionaries. Records calls by name."""

    def __init__(self, samples=None, sample_data=None, patient_data=None):
        self.samples = [
            Sample(study_id=study, sample_id=sample, patient_id=patient)
            for study, sample, patient in (samples if samples is not None else SAMPLES)
        ]
        self.sample_data = sample_data if sample_data is not None else SAMPLE_DATA
        self.patient_data = patient_data if patient_data is not None else PATIENT_DATA
        self.calls: list[str] = []

    def get_study_ids(self, study_ids):
        known = set(s.study_id for s in self.samples)
        return [study_id for study_id in study_ids if study_id in known]

    def get_sample_identifiers_of_studies(self, study_ids):
        return [
            SampleIdentifier(study_id=s.study_id, sample_id=s.sample_id)
            for study_id in dict.fromkeys(study_ids)
            for s in self.samples
            if s.study_id == study_id
        ]

    def fetch_samples(self, study_ids, sample_ids):
        lookup = {(s.study_id, s.sample_id): s for s in self.samples}
        return [
            lookup[(study_id, sample_id)]
            for study_id, sample_id in zip(study_ids, sample_ids)
            if (study_id, sample_id) in lookup
        ]

    def get_patients_of_samples(self, study_ids, sample_ids):
        patients = dict.fromkeys(
            (s.study_id, s.patient_id) for s in self.fetch_samples(study_ids, sample_ids)
        )
        return [PatientIdentifier(study_id=study_id, patient_id=patient_id) for study_id, patient_id in patients]

    def fetch_clinical_data_counts(self, study_ids, sample_ids, attribute_ids, clinical_data_type):
        self.calls.append('fetch_clinical_data_counts')
        entities = self._entities(study_ids, sample_ids, clinical_data_type)
        items = []
        for attribute_id in attribute_ids:
            counts: dict[str, int] = {}
            for entity in entities:
                value = self._values(clinical_data_type).get(entity, {}).get(attribute_id, NA_VALUE)
                counts[value] = counts.get(value, 0) + 1
            items.append(ClinicalDataCountItem(
                attribute_id=attribute_id,
                clinical_data_type=clinical_data_type,
                counts=[
                    ClinicalDataCount(value=value, count=count)
                    for value, count in sorted(counts.items(), key=lambda item: (-item[1], item[0]))
                ],
            ))
        return items

    def fetch_clinical_data(self, study_ids, ids, attribute_ids, clinical_data_type):
        self.calls.append('fetch_clinical_data')
        patient_of_sample = {(s.study_id, s.sample_id): s.patient_id for s in self.samples}
        data = []
        for study_id, entity_id in zip(study_ids, ids):
            values = self._values(clinical_data_type).get((study_id, entity_id), {})
            for attribute_id in attribute_ids:
                if attribute_id not in values:
                    continue
                if clinical_data_type == ClinicalDataType.SAMPLE:
                    sample_id = entity_id
                    patient_id = patient_of_sample[(study_id, entity_id)]
                else:
                    sample_id = None
                    patient_id = entity_id
                data.append(ClinicalData(
                    study_id=study_id,
                    sample_id=sample_id,
                    patient_id=patient_id,
                    attribute_id=attribute_id,
                    value=values[attribute_id],
                ))
        return data

    def _entities(self, study_ids, sample_ids, clinical_data_type):
        if clinical_data_type == ClinicalDataType.SAMPLE:
            return list(zip(study_ids, sample_ids))
        return [(p.study_id, p.patient_id) for p in self.get_patients_of_samples(study_ids, sample_ids)]

    def _values(self, clinical_data_type):
        if clinical_data_type == ClinicalDataType.SAMPLE:
            return self.sample_data
        return self.patient_data


class RecordingCohortResolver(CohortResolver):
    """Delegates to another resolver, keeping every filter it was asked to apply."""

    def __init__(self, delegate: CohortResolver):
        self.delegate = delegate
        self.applied: list[StudyViewFilter] = []

    def apply(self, study_view_filter, negate=False):
        self.applied.append(study_view_filter)
        return self.delegate.apply(study_view_filter, negate=negate)


class InMemoryMolecularProfiles(MolecularProfileSource):
    """First mutation and discrete CNA profile of each study, keyed by study identifier."""

    def __init__(self, mutation_profiles=None, cna_profiles=None):
        self.mutation_profiles = mutation_profiles or {}
        self.cna_profiles = cna_profiles or {}

    def get_first_mutation_profile_case_identifiers(self, study_ids, sample_ids):
        return self._pair(study_ids, sample_ids, self.mutation_profiles)

    def get_first_discrete_cna_profile_case_identifiers(self, study_ids, sample_ids):
        return self._pair(study_ids, sample_ids, self.cna_profiles)

    @staticmethod
    def _pair(study_ids, sample_ids, profiles):
        return [
            MolecularProfileCaseIdentifier(molecular_profile_id=profiles[study_id], case_id=sample_id)
            for study_id, sample_id in zip(study_ids, sample_ids)
            if study_id in profiles
        ]


class CannedMutationCounts(MutationSource):
    def __init__(self, counts=None):
        self.counts = counts or []
        self.requests: list[list[MolecularProfileCaseIdentifier]] = []

    def get_sample_count_in_multiple_molecular_profiles(self, case_identifiers, entrez_gene_ids=None, include_frequency=True):
        self.requests.append(case_identifiers)
        return [MutationCountByGene(**c.model_dump()) for c in self.counts]


class CannedCopyNumberCounts(DiscreteCopyNumberSource):
    def __init__(self, counts=None):
        self.counts = counts or []
        self.alteration_types: list[list[int] | None] = []

    def get_sample_count_in_multiple_molecular_profiles(self, case_identifiers, entrez_gene_ids=None, alteration_types=None, include_frequency=True):
        self.alteration_types.append(alteration_types)
        return [CopyNumberCountByGene(**c.model_dump()) for c in self.counts]


class InMemoryGenePanels(GenePanelSource):
    """Profiled (profile, sample) pairs. Every other pair is reported as not profiled."""

    def __init__(self, profiled=None):
        self.profiled = set(profiled or [])

    def fetch_gene_panel_data_in_multiple_molecular_profiles(self, case_identifiers):
        return [
            GenePanelData(
                molecular_profile_id=c.molecular_profile_id,
                sample_id=c.case_id,
                profiled=(c.molecular_profile_id, c.case_id) in self.profiled,
            )
            for c in case_identifiers
        ]


class InMemorySignificance(SignificanceSource):
    def __init__(self, mutsig=None, gistic=None):
        self.mutsig: dict[str, list[MutSig]] = mutsig or {}
        self.gistic: dict[str, list[Gistic]] = gistic or {}
        self.studies_queried: list[str] = []

    def get_significantly_mutated_genes(self, study_id):
        self.studies_queried.append(study_id)
        return self.mutsig.get(study_id, [])

    def get_significant_copy_number_regions(self, study_id):
        self.studies_queried.append(study_id)
        return self.gistic.get(study_id, [])


@pytest.fixture
def clinical_store() -> InMemoryClinicalStore:
    return InMemoryClinicalStore()


@pytest.fixture
def filter_applier(clinical_store) -> StudyViewFilterApplier:
    return StudyViewFilterApplier(clinical_store, clinical_store)


@pytest.fixture
def recording_resolver(filter_applier) -> RecordingCohortResolver:
    return RecordingCohortResolver(filter_applier)


@pytest.fixture
def molecular_profiles() -> InMemoryMolecularProfiles:
    return InMemoryMolecularProfiles(
        mutation_profiles={'study_a': 'study_a_mutations', 'study_b': 'study_b_mutations'},
        cna_profiles={'study_a': 'study_a_gistic'},
    )


@pytest.fixture
def gene_panels() -> InMemoryGenePanels:
    profiled_mutations = [('study_a_mutations', s) for s in ('S1', 'S2', 'S3')]
    profiled_cna = [('study_a_gistic', s) for s in ('S1', 'S2', 'S3', 'S4')]
    return InMemoryGenePanels(profiled=chain(profiled_mutations, profiled_cna))


@pytest.fixture
def mutation_counts() -> CannedMutationCounts:
    return CannedMutationCounts([
        MutationCountByGene(entrez_gene_id=7157, hugo_gene_symbol='TP53', count_by_entity=2, total_count=3),
        MutationCountByGene(entrez_gene_id=672, hugo_gene_symbol='BRCA1', count_by_entity=1, total_count=1),
        MutationCountByGene(entrez_gene_id=5728, hugo_gene_symbol='PTEN', count_by_entity=2, total_count=2),
    ])


@pytest.fixture
def copy_number_counts() -> CannedCopyNumberCounts:
    return CannedCopyNumberCounts([
        CopyNumberCountByGene(entrez_gene_id=2064, hugo_gene_symbol='ERBB2', alteration=2, count_by_entity=3),
        CopyNumberCountByGene(entrez_gene_id=1029, hugo_gene_symbol='CDKN2A', alteration=-2, count_by_entity=1),
    ])


@pytest.fixture
def significance() -> InMemorySignificance:
    return InMemorySignificance()


@pytest.fixture
def sources(
    recording_resolver,
    clinical_store,
    molecular_profiles,
    mutation_counts,
    copy_number_counts,
    gene_panels,
    significance,
) -> StudyViewSources:
    return StudyViewSources(
        cohort_resolver=recording_resolver,
        sample_source=clinical_store,
        patient_source=clinical_store,
        clinical_data_source=clinical_store,
        molecular_profile_source=molecular_profiles,
        mutation_source=mutation_counts,
        discrete_copy_number_source=copy_number_counts,
        gene_panel_source=gene_panels,
        significance_source=significance,
        data_binner=LinearLogDataBinner(),
    )


@pytest.fixture
def service(sources) -> StudyViewService:
    return StudyViewService(sources)
