"""Convenience accessors of studies, samples and patients."""

from studyviewtoolbox.db.database_connection import SimpleReadOnlyProvider
from studyviewtoolbox.db.exchange_data_formats.cohort import PatientIdentifier
from studyviewtoolbox.db.exchange_data_formats.cohort import Sample
from studyviewtoolbox.db.exchange_data_formats.cohort import SampleIdentifier
from studyviewtoolbox.studyview.interfaces import PatientSource
from studyviewtoolbox.studyview.interfaces import SampleSource

COHORT_SAMPLES_CTE = '''
WITH cohort AS (
    SELECT * FROM unnest(%s::text[], %s::text[]) WITH ORDINALITY AS c(study_id, sample_id, position)
),
cohort_samples AS (
    SELECT c.position, cs.cancer_study_identifier AS study_id, s.stable_id AS sample_id,
        p.stable_id AS patient_id, s.internal_id AS sample_internal_id,
        p.internal_id AS patient_internal_id
    FROM cohort c
    JOIN cancer_study cs ON cs.cancer_study_identifier=c.study_id
    JOIN patient p ON p.cancer_study_id=cs.cancer_study_id
    JOIN sample s ON s.patient_id=p.internal_id AND s.stable_id=c.sample_id
)
'''


class SampleAccess(SimpleReadOnlyProvider, SampleSource, PatientSource):
    """Provide study membership of samples and patients."""

    def get_study_ids(self, study_ids: list[str]) -> list[str]:
        self.cursor.execute(
            'SELECT cancer_study_identifier FROM cancer_study WHERE cancer_study_identifier=ANY(%s);',
            (study_ids,),
        )
        return [str(row[0]) for row in self.cursor.fetchall()]

    def get_sample_identifiers_of_studies(self, study_ids: list[str]) -> list[SampleIdentifier]:
        query = '''
        SELECT cs.cancer_study_identifier, s.stable_id
        FROM sample s
        JOIN patient p ON s.patient_id=p.internal_id
        JOIN cancer_study cs ON p.cancer_study_id=cs.cancer_study_id
        WHERE cs.cancer_study_identifier=ANY(%s)
        ORDER BY array_position(%s::text[], cs.cancer_study_identifier), s.internal_id
        ;
        '''
        self.cursor.execute(query, (study_ids, study_ids))
        return [
            SampleIdentifier(study_id=row[0], sample_id=row[1])
            for row in self.cursor.fetchall()
        ]

    def fetch_samples(self, study_ids: list[str], sample_ids: list[str]) -> list[Sample]:
        query = COHORT_SAMPLES_CTE + '''
        SELECT study_id, sample_id, patient_id FROM cohort_samples ORDER BY position;
        '''
        self.cursor.execute(query, (study_ids, sample_ids))
        return [
            Sample(study_id=row[0], sample_id=row[1], patient_id=row[2])
            for row in self.cursor.fetchall()
        ]

    def get_patients_of_samples(
        self,
        study_ids: list[str],
        sample_ids: list[str],
    ) -> list[PatientIdentifier]:
        query = COHORT_SAMPLES_CTE + '''
        SELECT study_id, patient_id
        FROM cohort_samples
        GROUP BY study_id, patient_id
        ORDER BY MIN(position)
        ;
        '''
        self.cursor.execute(query, (study_ids, sample_ids))
        return [
            PatientIdentifier(study_id=row[0], patient_id=row[1])
            for row in self.cursor.fetchall()
        ]
