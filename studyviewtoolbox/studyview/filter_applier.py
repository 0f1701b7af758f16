"""
A basic cohort resolver: scope by studies or explicit samples, then narrow by clinical attribute
values.
"""

from studyviewtoolbox.db.exchange_data_formats.cohort import ClinicalDataEqualityFilter
from studyviewtoolbox.db.exchange_data_formats.cohort import ClinicalDataIntervalFilter
from studyviewtoolbox.db.exchange_data_formats.cohort import ClinicalDataType
from studyviewtoolbox.db.exchange_data_formats.cohort import CohortResolution
from studyviewtoolbox.db.exchange_data_formats.cohort import DataFilterValue
from studyviewtoolbox.db.exchange_data_formats.cohort import SampleIdentifier
from studyviewtoolbox.db.exchange_data_formats.cohort import StudyViewFilter
from studyviewtoolbox.studyview.interfaces import ClinicalDataSource
from studyviewtoolbox.studyview.interfaces import CohortResolver
from studyviewtoolbox.studyview.interfaces import SampleSource
from studyviewtoolbox.studyview.filter_util import extract_study_and_sample_ids
from studyviewtoolbox.studyview.values import NA_VALUE
from studyviewtoolbox.studyview.values import parse_number
from studyviewtoolbox.standalone_utilities.log_formats import colorized_logger

logger = colorized_logger(__name__)

ClinicalFilter = ClinicalDataEqualityFilter | ClinicalDataIntervalFilter
EntityKey = tuple[str, str]


class StudyViewFilterApplier(CohortResolver):
    """Applies the scope and the clinical data filters of a study view filter."""
    sample_source: SampleSource
    clinical_data_source: ClinicalDataSource

    def __init__(self, sample_source: SampleSource, clinical_data_source: ClinicalDataSource):
        self.sample_source = sample_source
        self.clinical_data_source = clinical_data_source

    def apply(self, study_view_filter: StudyViewFilter, negate: bool = False) -> CohortResolution:
        missing = self._find_missing_study(study_view_filter)
        if missing is not None:
            logger.warning('Filter references unknown study "%s".', missing)
            return CohortResolution(missing_study=missing)
        scope = self._get_scope(study_view_filter)
        filters: list[ClinicalFilter] = [
            *(study_view_filter.clinical_data_equality_filters or []),
            *(study_view_filter.clinical_data_interval_filters or []),
        ]
        if len(filters) == 0 or len(scope) == 0:
            selected = scope
        else:
            selected = self._apply_clinical_filters(scope, filters)
        if negate:
            kept = set(_key(identifier) for identifier in selected)
            selected = [identifier for identifier in scope if _key(identifier) not in kept]
        logger.debug('Resolved %s of %s samples in scope.', len(selected), len(scope))
        return CohortResolution(identifiers=selected)

    def _find_missing_study(self, study_view_filter: StudyViewFilter) -> str | None:
        referenced: list[str] = []
        for study_id in study_view_filter.study_ids or []:
            if study_id not in referenced:
                referenced.append(study_id)
        for identifier in study_view_filter.sample_identifiers or []:
            if identifier.study_id not in referenced:
                referenced.append(identifier.study_id)
        if len(referenced) == 0:
            return None
        existing = set(self.sample_source.get_study_ids(referenced))
        for study_id in referenced:
            if study_id not in existing:
                return study_id
        return None

    def _get_scope(self, study_view_filter: StudyViewFilter) -> list[SampleIdentifier]:
        if study_view_filter.sample_identifiers is not None:
            study_ids, sample_ids = extract_study_and_sample_ids(study_view_filter.sample_identifiers)
            samples = self.sample_source.fetch_samples(study_ids, sample_ids)
            return [
                SampleIdentifier(study_id=sample.study_id, sample_id=sample.sample_id)
                for sample in samples
            ]
        if study_view_filter.study_ids is not None:
            return self.sample_source.get_sample_identifiers_of_studies(study_view_filter.study_ids)
        return []

    def _apply_clinical_filters(
        self,
        scope: list[SampleIdentifier],
        filters: list[ClinicalFilter],
    ) -> list[SampleIdentifier]:
        study_ids, sample_ids = extract_study_and_sample_ids(scope)
        samples = self.sample_source.fetch_samples(study_ids, sample_ids)
        patient_of_sample = {(s.study_id, s.sample_id): s.patient_id for s in samples}
        selected = scope
        for clinical_filter in filters:
            matching = self._matching_entities(clinical_filter, study_ids, sample_ids, patient_of_sample)

            def entity_key(identifier: SampleIdentifier, _filter=clinical_filter) -> EntityKey:
                if _filter.clinical_data_type == ClinicalDataType.SAMPLE:
                    return _key(identifier)
                return (identifier.study_id, patient_of_sample.get(_key(identifier), ''))
            selected = [identifier for identifier in selected if entity_key(identifier) in matching]
        return selected

    def _matching_entities(
        self,
        clinical_filter: ClinicalFilter,
        study_ids: list[str],
        sample_ids: list[str],
        patient_of_sample: dict[EntityKey, str],
    ) -> set[EntityKey]:
        if clinical_filter.clinical_data_type == ClinicalDataType.SAMPLE:
            entities = list(zip(study_ids, sample_ids))
        else:
            entities = list(dict.fromkeys(
                (study_id, patient_of_sample[(study_id, sample_id)])
                for study_id, sample_id in zip(study_ids, sample_ids)
                if (study_id, sample_id) in patient_of_sample
            ))
        data = self.clinical_data_source.fetch_clinical_data(
            [study_id for study_id, _ in entities],
            [entity_id for _, entity_id in entities],
            [clinical_filter.attribute_id],
            clinical_filter.clinical_data_type,
        )
        values: dict[EntityKey, str] = {}
        for datum in data:
            if clinical_filter.clinical_data_type == ClinicalDataType.SAMPLE:
                values[(datum.study_id, datum.sample_id or '')] = datum.value
            else:
                values[(datum.study_id, datum.patient_id)] = datum.value
        return set(
            entity for entity in entities
            if _matches(clinical_filter, values.get(entity))
        )


def _key(identifier: SampleIdentifier) -> EntityKey:
    return (identifier.study_id, identifier.sample_id)


def _matches(clinical_filter: ClinicalFilter, value: str | None) -> bool:
    if isinstance(clinical_filter, ClinicalDataEqualityFilter):
        accepted = set(v.upper() for v in clinical_filter.values)
        if value is None:
            return NA_VALUE in accepted
        return value.upper() in accepted
    return any(_in_interval(interval, value) for interval in clinical_filter.values)


def _in_interval(interval: DataFilterValue, value: str | None) -> bool:
    if value is None:
        return interval.value is not None and interval.value.upper() == NA_VALUE
    number = parse_number(value)
    if number is None:
        return interval.value is not None and interval.value.upper() == value.upper()
    if interval.start is None and interval.end is None:
        return False
    above_start = interval.start is None or number > interval.start
    below_end = interval.end is None or number <= interval.end
    return above_start and below_end
