"""Data structures for ready exchange, related to the selection of a cohort of samples."""

from enum import Enum

from studyviewtoolbox.db.exchange_data_formats.base import CamelModel


class ClinicalDataType(str, Enum):
    """Whether a clinical attribute is recorded per sample or per patient."""
    SAMPLE = 'SAMPLE'
    PATIENT = 'PATIENT'


class SampleIdentifier(CamelModel):
    """One sample, qualified by the study it belongs to."""
    study_id: str
    sample_id: str
    model_config = {
        'json_schema_extra': {
            'examples': [
                {'studyId': 'acc_tcga', 'sampleId': 'TCGA-OR-A5J1-01'},
            ]
        }
    }


class PatientIdentifier(CamelModel):
    """One patient, qualified by the study they belong to."""
    study_id: str
    patient_id: str


class Sample(CamelModel):
    """A sample together with the patient it was taken from."""
    study_id: str
    sample_id: str
    patient_id: str


class ClinicalDataEqualityFilter(CamelModel):
    """Keep samples whose value for the attribute is one of the listed values."""
    attribute_id: str
    clinical_data_type: ClinicalDataType
    values: list[str]


class DataFilterValue(CamelModel):
    """Either a half-open numeric interval (start, end], or a special non-numeric value."""
    start: float | None = None
    end: float | None = None
    value: str | None = None


class ClinicalDataIntervalFilter(CamelModel):
    """Keep samples whose value for the attribute falls in any one of the listed intervals."""
    attribute_id: str
    clinical_data_type: ClinicalDataType
    values: list[DataFilterValue]


class StudyViewFilter(CamelModel):
    """
    The constraints defining a cohort. The scope is given by explicit sample identifiers when
    present, otherwise by all samples of the listed studies. Clinical data filters narrow the scope.
    """
    study_ids: list[str] | None = None
    sample_identifiers: list[SampleIdentifier] | None = None
    clinical_data_equality_filters: list[ClinicalDataEqualityFilter] | None = None
    clinical_data_interval_filters: list[ClinicalDataIntervalFilter] | None = None
    model_config = {
        'json_schema_extra': {
            'examples': [
                {
                    'studyIds': ['acc_tcga'],
                    'clinicalDataEqualityFilters': [
                        {
                            'attributeId': 'SEX',
                            'clinicalDataType': 'PATIENT',
                            'values': ['Female'],
                        },
                    ],
                },
            ]
        }
    }


class CohortResolution(CamelModel):
    """
    The result of applying a filter: the matching sample identifiers in order, or the identifier of
    a study referenced by the filter that does not exist.
    """
    identifiers: list[SampleIdentifier] = []
    missing_study: str | None = None

    def is_found(self) -> bool:
        return self.missing_study is None

    def unwrap(self) -> list[SampleIdentifier]:
        if self.missing_study is not None:
            raise StudyNotFoundError(self.missing_study)
        return self.identifiers


class StudyNotFoundError(ValueError):
    study: str

    def __init__(self, study: str):
        self.study = study
        super().__init__(self.verbalize())

    def verbalize(self) -> str:
        return f'Did not find study: "{self.study}"'
