"""The set of collaborators that a study view service draws on."""

from attrs import define

from studyviewtoolbox.studyview.interfaces import ClinicalDataSource
from studyviewtoolbox.studyview.interfaces import CohortResolver
from studyviewtoolbox.studyview.interfaces import DataBinner
from studyviewtoolbox.studyview.interfaces import DiscreteCopyNumberSource
from studyviewtoolbox.studyview.interfaces import GenePanelSource
from studyviewtoolbox.studyview.interfaces import MolecularProfileSource
from studyviewtoolbox.studyview.interfaces import MutationSource
from studyviewtoolbox.studyview.interfaces import PatientSource
from studyviewtoolbox.studyview.interfaces import SampleSource
from studyviewtoolbox.studyview.interfaces import SignificanceSource


@define
class StudyViewSources:
    cohort_resolver: CohortResolver
    sample_source: SampleSource
    patient_source: PatientSource
    clinical_data_source: ClinicalDataSource
    molecular_profile_source: MolecularProfileSource
    mutation_source: MutationSource
    discrete_copy_number_source: DiscreteCopyNumberSource
    gene_panel_source: GenePanelSource
    significance_source: SignificanceSource
    data_binner: DataBinner
