"""Assembles the study view data sources over one database cursor."""

from psycopg import Cursor as PsycopgCursor

from studyviewtoolbox.db.accessors import SampleAccess
from studyviewtoolbox.db.accessors import ClinicalDataAccess
from studyviewtoolbox.db.accessors import MolecularProfileAccess
from studyviewtoolbox.db.accessors import MutationAccess
from studyviewtoolbox.db.accessors import DiscreteCopyNumberAccess
from studyviewtoolbox.db.accessors import GenePanelAccess
from studyviewtoolbox.db.accessors import SignificanceAccess
from studyviewtoolbox.studyview.data_binner import LinearLogDataBinner
from studyviewtoolbox.studyview.filter_applier import StudyViewFilterApplier
from studyviewtoolbox.studyview.sources import StudyViewSources


def database_sources(cursor: PsycopgCursor) -> StudyViewSources:
    samples = SampleAccess(cursor)
    clinical = ClinicalDataAccess(cursor)
    return StudyViewSources(
        cohort_resolver=StudyViewFilterApplier(samples, clinical),
        sample_source=samples,
        patient_source=samples,
        clinical_data_source=clinical,
        molecular_profile_source=MolecularProfileAccess(cursor),
        mutation_source=MutationAccess(cursor),
        discrete_copy_number_source=DiscreteCopyNumberAccess(cursor),
        gene_panel_source=GenePanelAccess(cursor),
        significance_source=SignificanceAccess(cursor),
        data_binner=LinearLogDataBinner(),
    )
