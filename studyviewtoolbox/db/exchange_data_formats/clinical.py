"""Data structures for ready exchange, related to clinical attribute values and their summaries."""

from enum import Enum

from studyviewtoolbox.db.exchange_data_formats.base import CamelModel
from studyviewtoolbox.db.exchange_data_formats.cohort import ClinicalDataType
from studyviewtoolbox.db.exchange_data_formats.cohort import StudyViewFilter


class DataBinMethod(str, Enum):
    """STATIC bins keep their edges from the unfiltered cohort, DYNAMIC bins are recomputed."""
    STATIC = 'STATIC'
    DYNAMIC = 'DYNAMIC'


class ClinicalData(CamelModel):
    """One recorded value of one clinical attribute, for a sample or for a patient."""
    study_id: str
    sample_id: str | None = None
    patient_id: str
    attribute_id: str
    value: str


class ClinicalDataFilter(CamelModel):
    """A clinical attribute, and whether it is recorded per sample or per patient."""
    attribute_id: str
    clinical_data_type: ClinicalDataType


class ClinicalDataBinFilter(ClinicalDataFilter):
    disable_log_scale: bool = False


class ClinicalDataCountFilter(CamelModel):
    """Request for value counts of some attributes across a filtered cohort."""
    attributes: list[ClinicalDataFilter]
    study_view_filter: StudyViewFilter
    model_config = {
        'json_schema_extra': {
            'examples': [
                {
                    'attributes': [{'attributeId': 'CANCER_TYPE', 'clinicalDataType': 'SAMPLE'}],
                    'studyViewFilter': {'studyIds': ['acc_tcga']},
                },
            ]
        }
    }


class ClinicalDataBinCountFilter(CamelModel):
    """Request for histogram bins of some attributes across a filtered cohort."""
    attributes: list[ClinicalDataBinFilter]
    study_view_filter: StudyViewFilter


class ClinicalDataCount(CamelModel):
    value: str
    count: int


class ClinicalDataCountItem(CamelModel):
    """The number of samples or patients having each value of a given attribute."""
    attribute_id: str
    clinical_data_type: ClinicalDataType | None = None
    counts: list[ClinicalDataCount]
    model_config = {
        'json_schema_extra': {
            'examples': [
                {
                    'attributeId': 'SEX',
                    'clinicalDataType': 'PATIENT',
                    'counts': [
                        {'value': 'Female', 'count': 48},
                        {'value': 'Male', 'count': 31},
                        {'value': 'NA', 'count': 2},
                    ],
                },
            ]
        }
    }


class DataBin(CamelModel):
    """
    One bar of the histogram of an attribute. Numeric bins carry start and end; bins of special
    values (non-numeric values, missing data, or values beyond the outer edges) carry
    special_value.
    """
    attribute_id: str
    clinical_data_type: ClinicalDataType | None = None
    special_value: str | None = None
    start: float | None = None
    end: float | None = None
    count: int = 0
    model_config = {
        'json_schema_extra': {
            'examples': [
                {'attributeId': 'AGE', 'clinicalDataType': 'PATIENT', 'start': 40, 'end': 50, 'count': 7},
                {'attributeId': 'AGE', 'clinicalDataType': 'PATIENT', 'specialValue': 'NA', 'count': 2},
            ]
        }
    }


class DensityPlotBin(CamelModel):
    """One cell of the 2D histogram of two numeric attributes, keyed by its lower x and y edges."""
    x: float
    y: float
    count: int = 0
