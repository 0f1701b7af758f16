"""
Abstract interfaces of the collaborators that the study view aggregations are computed over. The
aggregations only see these interfaces, so that a database-backed implementation and an in-memory
one are interchangeable.
"""

from abc import ABC
from abc import abstractmethod

from studyviewtoolbox.db.exchange_data_formats.cohort import ClinicalDataType
from studyviewtoolbox.db.exchange_data_formats.cohort import CohortResolution
from studyviewtoolbox.db.exchange_data_formats.cohort import PatientIdentifier
from studyviewtoolbox.db.exchange_data_formats.cohort import Sample
from studyviewtoolbox.db.exchange_data_formats.cohort import SampleIdentifier
from studyviewtoolbox.db.exchange_data_formats.cohort import StudyViewFilter
from studyviewtoolbox.db.exchange_data_formats.clinical import ClinicalData
from studyviewtoolbox.db.exchange_data_formats.clinical import ClinicalDataCountItem
from studyviewtoolbox.db.exchange_data_formats.clinical import DataBin
from studyviewtoolbox.db.exchange_data_formats.genes import CopyNumberCountByGene
from studyviewtoolbox.db.exchange_data_formats.genes import GenePanelData
from studyviewtoolbox.db.exchange_data_formats.genes import Gistic
from studyviewtoolbox.db.exchange_data_formats.genes import MolecularProfileCaseIdentifier
from studyviewtoolbox.db.exchange_data_formats.genes import MutSig
from studyviewtoolbox.db.exchange_data_formats.genes import MutationCountByGene


class CohortResolver(ABC):
    """Turns a filter into the ordered list of matching (study, sample) identifiers."""

    @abstractmethod
    def apply(self, study_view_filter: StudyViewFilter, negate: bool = False) -> CohortResolution:
        raise NotImplementedError


class SampleSource(ABC):
    @abstractmethod
    def get_study_ids(self, study_ids: list[str]) -> list[str]:
        """The subset of the given study identifiers that exist."""
        raise NotImplementedError

    @abstractmethod
    def get_sample_identifiers_of_studies(self, study_ids: list[str]) -> list[SampleIdentifier]:
        raise NotImplementedError

    @abstractmethod
    def fetch_samples(self, study_ids: list[str], sample_ids: list[str]) -> list[Sample]:
        """The samples given by the positionally paired study and sample identifiers."""
        raise NotImplementedError


class PatientSource(ABC):
    @abstractmethod
    def get_patients_of_samples(
        self,
        study_ids: list[str],
        sample_ids: list[str],
    ) -> list[PatientIdentifier]:
        """The distinct patients owning the given samples, in order of first appearance."""
        raise NotImplementedError


class ClinicalDataSource(ABC):
    @abstractmethod
    def fetch_clinical_data_counts(
        self,
        study_ids: list[str],
        sample_ids: list[str],
        attribute_ids: list[str],
        clinical_data_type: ClinicalDataType,
    ) -> list[ClinicalDataCountItem]:
        raise NotImplementedError

    @abstractmethod
    def fetch_clinical_data(
        self,
        study_ids: list[str],
        ids: list[str],
        attribute_ids: list[str],
        clinical_data_type: ClinicalDataType,
    ) -> list[ClinicalData]:
        """Values of the attributes, for sample ids or patient ids depending on the data type."""
        raise NotImplementedError


class MolecularProfileSource(ABC):
    @abstractmethod
    def get_first_mutation_profile_case_identifiers(
        self,
        study_ids: list[str],
        sample_ids: list[str],
    ) -> list[MolecularProfileCaseIdentifier]:
        """Each sample paired with the first mutation profile of its study, when there is one."""
        raise NotImplementedError

    @abstractmethod
    def get_first_discrete_cna_profile_case_identifiers(
        self,
        study_ids: list[str],
        sample_ids: list[str],
    ) -> list[MolecularProfileCaseIdentifier]:
        """Each sample paired with the first discrete CNA profile of its study, when there is one.
        """
        raise NotImplementedError


class MutationSource(ABC):
    @abstractmethod
    def get_sample_count_in_multiple_molecular_profiles(
        self,
        case_identifiers: list[MolecularProfileCaseIdentifier],
        entrez_gene_ids: list[int] | None = None,
        include_frequency: bool = True,
    ) -> list[MutationCountByGene]:
        raise NotImplementedError


class DiscreteCopyNumberSource(ABC):
    @abstractmethod
    def get_sample_count_in_multiple_molecular_profiles(
        self,
        case_identifiers: list[MolecularProfileCaseIdentifier],
        entrez_gene_ids: list[int] | None = None,
        alteration_types: list[int] | None = None,
        include_frequency: bool = True,
    ) -> list[CopyNumberCountByGene]:
        raise NotImplementedError


class GenePanelSource(ABC):
    @abstractmethod
    def fetch_gene_panel_data_in_multiple_molecular_profiles(
        self,
        case_identifiers: list[MolecularProfileCaseIdentifier],
    ) -> list[GenePanelData]:
        raise NotImplementedError


class SignificanceSource(ABC):
    @abstractmethod
    def get_significantly_mutated_genes(self, study_id: str) -> list[MutSig]:
        raise NotImplementedError

    @abstractmethod
    def get_significant_copy_number_regions(self, study_id: str) -> list[Gistic]:
        raise NotImplementedError


class DataBinner(ABC):
    """Computes histogram bins for one attribute."""

    @abstractmethod
    def calculate_clinical_data_bins(
        self,
        attribute_id: str,
        clinical_data_type: ClinicalDataType,
        filtered_clinical_data: list[ClinicalData],
        filtered_ids: list[str],
        disable_log_scale: bool = False,
        unfiltered_clinical_data: list[ClinicalData] | None = None,
        unfiltered_ids: list[str] | None = None,
    ) -> list[DataBin]:
        """
        Bins of the filtered values. When unfiltered values are provided, the bin edges are
        derived from them instead of from the filtered values.
        """
        raise NotImplementedError
