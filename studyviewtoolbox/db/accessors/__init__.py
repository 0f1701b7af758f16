"""Accessors of the cBioPortal-style database, one per data source of the study view."""
from studyviewtoolbox.db.accessors.samples import SampleAccess
from studyviewtoolbox.db.accessors.clinical import ClinicalDataAccess
from studyviewtoolbox.db.accessors.molecular import MolecularProfileAccess
from studyviewtoolbox.db.accessors.molecular import MutationAccess
from studyviewtoolbox.db.accessors.molecular import DiscreteCopyNumberAccess
from studyviewtoolbox.db.accessors.molecular import GenePanelAccess
from studyviewtoolbox.db.accessors.significance import SignificanceAccess

__all__ = [
    'SampleAccess',
    'ClinicalDataAccess',
    'MolecularProfileAccess',
    'MutationAccess',
    'DiscreteCopyNumberAccess',
    'GenePanelAccess',
    'SignificanceAccess',
]
