"""Convenience accessors of molecular profiles, mutation and copy-number data, and gene panels."""

from studyviewtoolbox.db.database_connection import SimpleReadOnlyProvider
from studyviewtoolbox.db.exchange_data_formats.genes import CopyNumberCountByGene
from studyviewtoolbox.db.exchange_data_formats.genes import DISCRETE_CNA_DATATYPE
from studyviewtoolbox.db.exchange_data_formats.genes import GenePanelData
from studyviewtoolbox.db.exchange_data_formats.genes import MolecularAlterationType
from studyviewtoolbox.db.exchange_data_formats.genes import MolecularProfileCaseIdentifier
from studyviewtoolbox.db.exchange_data_formats.genes import MutationCountByGene
from studyviewtoolbox.db.accessors.samples import COHORT_SAMPLES_CTE
from studyviewtoolbox.studyview.interfaces import DiscreteCopyNumberSource
from studyviewtoolbox.studyview.interfaces import GenePanelSource
from studyviewtoolbox.studyview.interfaces import MolecularProfileSource
from studyviewtoolbox.studyview.interfaces import MutationSource
from studyviewtoolbox.standalone_utilities.log_formats import colorized_logger

logger = colorized_logger(__name__)

CASES_CTE = '''
WITH cases AS (
    SELECT * FROM unnest(%s::text[], %s::text[]) AS c(profile_stable_id, sample_stable_id)
),
case_samples AS (
    SELECT DISTINCT gp.genetic_profile_id, s.internal_id AS sample_internal_id
    FROM cases c
    JOIN genetic_profile gp ON gp.stable_id=c.profile_stable_id
    JOIN patient p ON p.cancer_study_id=gp.cancer_study_id
    JOIN sample s ON s.patient_id=p.internal_id AND s.stable_id=c.sample_stable_id
)
'''


def _unzip(case_identifiers: list[MolecularProfileCaseIdentifier]) -> tuple[list[str], list[str]]:
    return (
        [c.molecular_profile_id for c in case_identifiers],
        [c.case_id for c in case_identifiers],
    )


def _frequency(count: int, total: int, include_frequency: bool) -> float | None:
    if not include_frequency or total == 0:
        return None
    return 100 * count / total


class MolecularProfileAccess(SimpleReadOnlyProvider, MolecularProfileSource):
    """Pairs cohort samples with the first profile of a given kind in their study."""

    def get_first_mutation_profile_case_identifiers(
        self,
        study_ids: list[str],
        sample_ids: list[str],
    ) -> list[MolecularProfileCaseIdentifier]:
        return self._first_profile_case_identifiers(
            study_ids,
            sample_ids,
            MolecularAlterationType.MUTATION_EXTENDED,
            None,
        )

    def get_first_discrete_cna_profile_case_identifiers(
        self,
        study_ids: list[str],
        sample_ids: list[str],
    ) -> list[MolecularProfileCaseIdentifier]:
        return self._first_profile_case_identifiers(
            study_ids,
            sample_ids,
            MolecularAlterationType.COPY_NUMBER_ALTERATION,
            DISCRETE_CNA_DATATYPE,
        )

    def _first_profile_case_identifiers(
        self,
        study_ids: list[str],
        sample_ids: list[str],
        alteration_type: MolecularAlterationType,
        datatype: str | None,
    ) -> list[MolecularProfileCaseIdentifier]:
        query = COHORT_SAMPLES_CTE + '''
        , first_profiles AS (
            SELECT DISTINCT ON (cs.cancer_study_identifier)
                cs.cancer_study_identifier AS study_id, gp.stable_id AS profile_id
            FROM genetic_profile gp
            JOIN cancer_study cs ON cs.cancer_study_id=gp.cancer_study_id
            WHERE gp.genetic_alteration_type=%s
                AND (%s::text IS NULL OR gp.datatype=%s::text)
            ORDER BY cs.cancer_study_identifier, gp.genetic_profile_id
        )
        SELECT fp.profile_id, cs.sample_id
        FROM cohort_samples cs
        JOIN first_profiles fp ON fp.study_id=cs.study_id
        ORDER BY cs.position
        ;
        '''
        parameters = (study_ids, sample_ids, alteration_type.value, datatype, datatype)
        self.cursor.execute(query, parameters)
        rows = self.cursor.fetchall()
        logger.debug('Found %s samples in %s profiles.', len(rows), alteration_type.value)
        return [
            MolecularProfileCaseIdentifier(molecular_profile_id=row[0], case_id=row[1])
            for row in rows
        ]


class MutationAccess(SimpleReadOnlyProvider, MutationSource):
    """Counts of mutated samples per gene."""

    def get_sample_count_in_multiple_molecular_profiles(
        self,
        case_identifiers: list[MolecularProfileCaseIdentifier],
        entrez_gene_ids: list[int] | None = None,
        include_frequency: bool = True,
    ) -> list[MutationCountByGene]:
        if len(case_identifiers) == 0:
            return []
        query = CASES_CTE + '''
        SELECT g.entrez_gene_id, g.hugo_gene_symbol,
            COUNT(DISTINCT m.sample_id), COUNT(*)
        FROM mutation m
        JOIN case_samples c ON c.genetic_profile_id=m.genetic_profile_id
            AND c.sample_internal_id=m.sample_id
        JOIN gene g ON g.entrez_gene_id=m.entrez_gene_id
        WHERE (%s::int[] IS NULL OR m.entrez_gene_id=ANY(%s::int[]))
        GROUP BY g.entrez_gene_id, g.hugo_gene_symbol
        ;
        '''
        profile_ids, case_ids = _unzip(case_identifiers)
        self.cursor.execute(query, (profile_ids, case_ids, entrez_gene_ids, entrez_gene_ids))
        total = len(case_identifiers)
        return [
            MutationCountByGene(
                entrez_gene_id=row[0],
                hugo_gene_symbol=row[1],
                count_by_entity=int(row[2]),
                total_count=int(row[3]),
                frequency=_frequency(int(row[2]), total, include_frequency),
            )
            for row in self.cursor.fetchall()
        ]


class DiscreteCopyNumberAccess(SimpleReadOnlyProvider, DiscreteCopyNumberSource):
    """Counts of samples with a given discrete copy-number alteration, per gene."""

    def get_sample_count_in_multiple_molecular_profiles(
        self,
        case_identifiers: list[MolecularProfileCaseIdentifier],
        entrez_gene_ids: list[int] | None = None,
        alteration_types: list[int] | None = None,
        include_frequency: bool = True,
    ) -> list[CopyNumberCountByGene]:
        if len(case_identifiers) == 0:
            return []
        query = CASES_CTE + '''
        SELECT g.entrez_gene_id, g.hugo_gene_symbol, ce.alteration, MIN(rgg.cytoband),
            COUNT(DISTINCT sce.sample_id), COUNT(*)
        FROM sample_cna_event sce
        JOIN case_samples c ON c.genetic_profile_id=sce.genetic_profile_id
            AND c.sample_internal_id=sce.sample_id
        JOIN cna_event ce ON ce.cna_event_id=sce.cna_event_id
        JOIN gene g ON g.entrez_gene_id=ce.entrez_gene_id
        LEFT JOIN reference_genome_gene rgg ON rgg.entrez_gene_id=g.entrez_gene_id
        WHERE (%s::int[] IS NULL OR ce.entrez_gene_id=ANY(%s::int[]))
            AND (%s::int[] IS NULL OR ce.alteration=ANY(%s::int[]))
        GROUP BY g.entrez_gene_id, g.hugo_gene_symbol, ce.alteration
        ;
        '''
        profile_ids, case_ids = _unzip(case_identifiers)
        parameters = (
            profile_ids,
            case_ids,
            entrez_gene_ids,
            entrez_gene_ids,
            alteration_types,
            alteration_types,
        )
        self.cursor.execute(query, parameters)
        total = len(case_identifiers)
        return [
            CopyNumberCountByGene(
                entrez_gene_id=row[0],
                hugo_gene_symbol=row[1],
                alteration=int(row[2]),
                cytoband=row[3],
                count_by_entity=int(row[4]),
                total_count=int(row[5]),
                frequency=_frequency(int(row[4]), total, include_frequency),
            )
            for row in self.cursor.fetchall()
        ]


class GenePanelAccess(SimpleReadOnlyProvider, GenePanelSource):
    """Whether each sample was assayed in the paired profile, and with which gene panel."""

    def fetch_gene_panel_data_in_multiple_molecular_profiles(
        self,
        case_identifiers: list[MolecularProfileCaseIdentifier],
    ) -> list[GenePanelData]:
        if len(case_identifiers) == 0:
            return []
        query = '''
        WITH cases AS (
            SELECT * FROM unnest(%s::text[], %s::text[]) WITH ORDINALITY
                AS c(profile_stable_id, sample_stable_id, position)
        )
        SELECT c.profile_stable_id, c.sample_stable_id, cs.cancer_study_identifier,
            panel.stable_id, sp.sample_id IS NOT NULL
        FROM cases c
        JOIN genetic_profile gp ON gp.stable_id=c.profile_stable_id
        JOIN cancer_study cs ON cs.cancer_study_id=gp.cancer_study_id
        JOIN patient p ON p.cancer_study_id=gp.cancer_study_id
        JOIN sample s ON s.patient_id=p.internal_id AND s.stable_id=c.sample_stable_id
        LEFT JOIN sample_profile sp ON sp.sample_id=s.internal_id
            AND sp.genetic_profile_id=gp.genetic_profile_id
        LEFT JOIN gene_panel panel ON panel.internal_id=sp.panel_id
        ORDER BY c.position
        ;
        '''
        profile_ids, case_ids = _unzip(case_identifiers)
        self.cursor.execute(query, (profile_ids, case_ids))
        return [
            GenePanelData(
                molecular_profile_id=row[0],
                sample_id=row[1],
                study_id=row[2],
                gene_panel_id=row[3],
                profiled=bool(row[4]),
            )
            for row in self.cursor.fetchall()
        ]
