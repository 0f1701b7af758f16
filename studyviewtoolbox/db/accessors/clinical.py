"""Convenience accessors of clinical attribute values."""

from studyviewtoolbox.db.database_connection import SimpleReadOnlyProvider
from studyviewtoolbox.db.exchange_data_formats.cohort import ClinicalDataType
from studyviewtoolbox.db.exchange_data_formats.clinical import ClinicalData
from studyviewtoolbox.db.exchange_data_formats.clinical import ClinicalDataCount
from studyviewtoolbox.db.exchange_data_formats.clinical import ClinicalDataCountItem
from studyviewtoolbox.db.accessors.samples import COHORT_SAMPLES_CTE
from studyviewtoolbox.studyview.interfaces import ClinicalDataSource
from studyviewtoolbox.studyview.values import NA_VALUE
from studyviewtoolbox.standalone_utilities.log_formats import colorized_logger

logger = colorized_logger(__name__)

ENTITIES_CTE = {
    ClinicalDataType.SAMPLE: '''
    , entities AS (
        SELECT DISTINCT sample_internal_id AS internal_id FROM cohort_samples
    )
    ''',
    ClinicalDataType.PATIENT: '''
    , entities AS (
        SELECT DISTINCT patient_internal_id AS internal_id FROM cohort_samples
    )
    ''',
}

CLINICAL_TABLE = {
    ClinicalDataType.SAMPLE: 'clinical_sample',
    ClinicalDataType.PATIENT: 'clinical_patient',
}


class ClinicalDataAccess(SimpleReadOnlyProvider, ClinicalDataSource):
    """Provide clinical attribute values and value counts."""

    def fetch_clinical_data_counts(
        self,
        study_ids: list[str],
        sample_ids: list[str],
        attribute_ids: list[str],
        clinical_data_type: ClinicalDataType,
    ) -> list[ClinicalDataCountItem]:
        prefix = COHORT_SAMPLES_CTE + ENTITIES_CTE[clinical_data_type]
        self.cursor.execute(prefix + 'SELECT COUNT(*) FROM entities;', (study_ids, sample_ids))
        total = int(self.cursor.fetchall()[0][0])
        query = prefix + f'''
        SELECT cd.attr_id, cd.attr_value, COUNT(*)
        FROM {CLINICAL_TABLE[clinical_data_type]} cd
        JOIN entities e ON e.internal_id=cd.internal_id
        WHERE cd.attr_id=ANY(%s)
        GROUP BY cd.attr_id, cd.attr_value
        ORDER BY cd.attr_id, COUNT(*) DESC, cd.attr_value
        ;
        '''
        self.cursor.execute(query, (study_ids, sample_ids, attribute_ids))
        counts: dict[str, list[ClinicalDataCount]] = {attribute_id: [] for attribute_id in attribute_ids}
        for attribute_id, value, count in self.cursor.fetchall():
            counts[attribute_id].append(ClinicalDataCount(value=value, count=int(count)))
        items = []
        for attribute_id, attribute_counts in counts.items():
            missing = total - sum(c.count for c in attribute_counts)
            if missing > 0:
                attribute_counts.append(ClinicalDataCount(value=NA_VALUE, count=missing))
            items.append(ClinicalDataCountItem(
                attribute_id=attribute_id,
                clinical_data_type=clinical_data_type,
                counts=attribute_counts,
            ))
        return items

    def fetch_clinical_data(
        self,
        study_ids: list[str],
        ids: list[str],
        attribute_ids: list[str],
        clinical_data_type: ClinicalDataType,
    ) -> list[ClinicalData]:
        if clinical_data_type == ClinicalDataType.SAMPLE:
            query = '''
            WITH cohort AS (
                SELECT * FROM unnest(%s::text[], %s::text[]) AS c(study_id, entity_id)
            )
            SELECT cs.cancer_study_identifier, s.stable_id, p.stable_id, cd.attr_id, cd.attr_value
            FROM cohort c
            JOIN cancer_study cs ON cs.cancer_study_identifier=c.study_id
            JOIN patient p ON p.cancer_study_id=cs.cancer_study_id
            JOIN sample s ON s.patient_id=p.internal_id AND s.stable_id=c.entity_id
            JOIN clinical_sample cd ON cd.internal_id=s.internal_id
            WHERE cd.attr_id=ANY(%s)
            ;
            '''
        else:
            query = '''
            WITH cohort AS (
                SELECT * FROM unnest(%s::text[], %s::text[]) AS c(study_id, entity_id)
            )
            SELECT cs.cancer_study_identifier, NULL, p.stable_id, cd.attr_id, cd.attr_value
            FROM cohort c
            JOIN cancer_study cs ON cs.cancer_study_identifier=c.study_id
            JOIN patient p ON p.cancer_study_id=cs.cancer_study_id AND p.stable_id=c.entity_id
            JOIN clinical_patient cd ON cd.internal_id=p.internal_id
            WHERE cd.attr_id=ANY(%s)
            ;
            '''
        self.cursor.execute(query, (study_ids, ids, attribute_ids))
        rows = self.cursor.fetchall()
        logger.debug('Retrieved %s %s clinical values.', len(rows), clinical_data_type.value)
        return [
            ClinicalData(
                study_id=row[0],
                sample_id=row[1],
                patient_id=row[2],
                attribute_id=row[3],
                value=row[4],
            )
            for row in rows
        ]
