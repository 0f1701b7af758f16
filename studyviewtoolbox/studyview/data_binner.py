"""Default choice of histogram edges for clinical attribute values."""

import numpy as np
import pandas as pd

from studyviewtoolbox.db.exchange_data_formats.cohort import ClinicalDataType
from studyviewtoolbox.db.exchange_data_formats.clinical import ClinicalData
from studyviewtoolbox.db.exchange_data_formats.clinical import DataBin
from studyviewtoolbox.studyview.interfaces import DataBinner
from studyviewtoolbox.studyview.values import NA_VALUE

DEFAULT_MAXIMUM_BIN_COUNT = 10
LOG_SCALE_MINIMUM_RATIO = 1000.0
BELOW_RANGE = '<='
ABOVE_RANGE = '>'


class LinearLogDataBinner(DataBinner):
    """
    Equal-width bins, or decade bins when the (positive) values span at least three orders of
    magnitude. Values that are not numbers, and entities with no value, get special-value bins.
    """
    maximum_bin_count: int

    def __init__(self, maximum_bin_count: int = DEFAULT_MAXIMUM_BIN_COUNT):
        self.maximum_bin_count = maximum_bin_count

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
        values = _as_frame(filtered_clinical_data, clinical_data_type)
        numeric = values['number'].dropna().to_numpy()
        if unfiltered_clinical_data is not None:
            baseline = _as_frame(unfiltered_clinical_data, clinical_data_type)
            edges = self.compute_edges(baseline['number'].dropna().to_numpy(), disable_log_scale)
        else:
            edges = self.compute_edges(numeric, disable_log_scale)
        bins = []
        if edges is not None:
            bins.extend(self._numeric_bins(attribute_id, numeric, edges))
        bins.extend(self._special_value_bins(attribute_id, values, filtered_ids))
        return bins

    def compute_edges(self, values: np.ndarray, disable_log_scale: bool) -> np.ndarray | None:
        if len(values) == 0:
            return None
        minimum = float(values.min())
        maximum = float(values.max())
        if minimum == maximum:
            return np.array([minimum, maximum])
        if not disable_log_scale and minimum > 0 and maximum / minimum >= LOG_SCALE_MINIMUM_RATIO:
            exponents = np.arange(np.floor(np.log10(minimum)), np.ceil(np.log10(maximum)) + 1)
            return np.power(10.0, exponents)
        bin_count = min(self.maximum_bin_count, len(np.unique(values)))
        return np.histogram_bin_edges(values, bins=bin_count)

    @staticmethod
    def _numeric_bins(attribute_id: str, numeric: np.ndarray, edges: np.ndarray) -> list[DataBin]:
        first = float(edges[0])
        last = float(edges[-1])
        bins = []
        below = int((numeric < first).sum())
        if below > 0:
            bins.append(DataBin(attribute_id=attribute_id, special_value=BELOW_RANGE, end=first, count=below))
        if first == last:
            count = int((numeric == first).sum())
            bins.append(DataBin(attribute_id=attribute_id, start=first, end=last, count=count))
        else:
            counts, _ = np.histogram(numeric, bins=edges)
            for index, count in enumerate(counts):
                bins.append(DataBin(
                    attribute_id=attribute_id,
                    start=float(edges[index]),
                    end=float(edges[index + 1]),
                    count=int(count),
                ))
        above = int((numeric > last).sum())
        if above > 0:
            bins.append(DataBin(attribute_id=attribute_id, special_value=ABOVE_RANGE, start=last, count=above))
        return bins

    @staticmethod
    def _special_value_bins(
        attribute_id: str,
        values: pd.DataFrame,
        filtered_ids: list[str],
    ) -> list[DataBin]:
        special = values[values['number'].isna()]
        counts = special['value'].str.strip().str.upper().value_counts().to_dict()
        with_value = set(values['entity'])
        missing = len(set(filtered_ids).difference(with_value))
        if missing > 0:
            counts[NA_VALUE] = counts.get(NA_VALUE, 0) + missing
        return [
            DataBin(attribute_id=attribute_id, special_value=value, count=int(count))
            for value, count in sorted(counts.items())
        ]


def _as_frame(data: list[ClinicalData], clinical_data_type: ClinicalDataType) -> pd.DataFrame:
    def entity(datum: ClinicalData) -> str | None:
        if clinical_data_type == ClinicalDataType.SAMPLE:
            return datum.sample_id
        return datum.patient_id
    frame = pd.DataFrame({
        'entity': pd.Series([entity(d) for d in data], dtype=object),
        'value': pd.Series([d.value for d in data], dtype=object),
    })
    number = pd.to_numeric(frame['value'].str.strip(), errors='coerce').astype(float)
    frame['number'] = number.where(np.isfinite(number))
    return frame
