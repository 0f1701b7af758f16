"""Two-dimensional histogram of a pair of numeric clinical attributes across a filtered cohort."""

from math import floor
from math import isfinite

from attrs import define

from studyviewtoolbox.db.exchange_data_formats.cohort import ClinicalDataType
from studyviewtoolbox.db.exchange_data_formats.cohort import StudyViewFilter
from studyviewtoolbox.db.exchange_data_formats.clinical import ClinicalData
from studyviewtoolbox.db.exchange_data_formats.clinical import DensityPlotBin
from studyviewtoolbox.studyview.interfaces import ClinicalDataSource
from studyviewtoolbox.studyview.interfaces import CohortResolver
from studyviewtoolbox.studyview.interfaces import PatientSource
from studyviewtoolbox.studyview.filter_util import extract_ids
from studyviewtoolbox.studyview.values import parse_number
from studyviewtoolbox.standalone_utilities.log_formats import colorized_logger

logger = colorized_logger(__name__)

DEFAULT_BIN_COUNT = 50


class InvalidRangeError(ValueError):
    axis: str

    def __init__(self, axis: str, reason: str):
        self.axis = axis
        super().__init__(f'Invalid range for {axis} axis: {reason}')


@define
class AxisSpecification:
    """An attribute plotted along one axis, the number of bins, and optional explicit bounds."""
    attribute_id: str
    bin_count: int = DEFAULT_BIN_COUNT
    start: float | None = None
    end: float | None = None


def validate_bin_count(name: str, axis: AxisSpecification) -> None:
    if axis.bin_count <= 0:
        raise InvalidRangeError(name, f'bin count must be positive, got {axis.bin_count}')


@define
class AxisBinning:
    name: str
    start: float
    end: float
    bin_count: int
    interval: float

    @classmethod
    def create(cls, name: str, axis: AxisSpecification, values: list[float]) -> 'AxisBinning':
        validate_bin_count(name, axis)
        start = axis.start if axis.start is not None else min(values)
        end = axis.end if axis.end is not None else max(values)
        if start == end:
            raise InvalidRangeError(name, f'start and end are both {start}')
        interval = (end - start) / axis.bin_count
        if not isfinite(interval) or interval == 0:
            raise InvalidRangeError(name, f'bin interval is {interval}')
        return cls(name, start, end, axis.bin_count, interval)

    def lower_edge(self, index: int) -> float:
        return self.start + index * self.interval

    def bin_index(self, value: float) -> int:
        """
        The bin is floor(value / interval), not offset by the axis start. A value exactly on the
        upper bound belongs to the last bin. Other indices outside the grid are clamped into it.
        """
        index = floor(value / self.interval)
        if index == self.bin_count:
            return index - 1
        if index < 0 or index > self.bin_count:
            clamped = min(max(index, 0), self.bin_count - 1)
            logger.warning('Value %s has %s bin index %s outside of the grid, using %s.', value, self.name, index, clamped)
            return clamped
        return index


def pair_numeric_values(
    clinical_data: list[ClinicalData],
    x_attribute_id: str,
    y_attribute_id: str,
    clinical_data_type: ClinicalDataType,
) -> list[tuple[float, float]]:
    """
    One (x, y) pair per sample or patient having exactly one value of each attribute, both numeric.
    Entities with a missing, extra, or non-numeric value are left out.
    """
    groups: dict[tuple[str, str], list[ClinicalData]] = {}
    for datum in clinical_data:
        if clinical_data_type == ClinicalDataType.SAMPLE:
            entity = datum.sample_id or ''
        else:
            entity = datum.patient_id
        groups.setdefault((entity, datum.study_id), []).append(datum)
    pairs = []
    for group in groups.values():
        if len(group) != 2:
            continue
        by_attribute = {datum.attribute_id: parse_number(datum.value) for datum in group}
        x = by_attribute.get(x_attribute_id)
        y = by_attribute.get(y_attribute_id)
        if x is None or y is None:
            continue
        pairs.append((x, y))
    return pairs


def compute_density_bins(
    pairs: list[tuple[float, float]],
    x_axis: AxisSpecification,
    y_axis: AxisSpecification,
) -> list[DensityPlotBin]:
    """
    The full grid of x_axis.bin_count * y_axis.bin_count cells, x-major, with each pair counted in
    exactly one cell.
    """
    x_binning = AxisBinning.create('x', x_axis, [x for x, _ in pairs])
    y_binning = AxisBinning.create('y', y_axis, [y for _, y in pairs])
    grid = [
        DensityPlotBin(x=x_binning.lower_edge(i), y=y_binning.lower_edge(j), count=0)
        for i in range(x_binning.bin_count)
        for j in range(y_binning.bin_count)
    ]
    for x, y in pairs:
        index = x_binning.bin_index(x) * y_binning.bin_count + y_binning.bin_index(y)
        grid[index].count += 1
    return grid


def _has_explicit_bounds(axis: AxisSpecification) -> bool:
    return axis.start is not None and axis.end is not None


class ClinicalDataDensityPlotter:
    """Computes the density plot grid over the filtered cohort."""
    cohort_resolver: CohortResolver
    clinical_data_source: ClinicalDataSource
    patient_source: PatientSource

    def __init__(self,
        cohort_resolver: CohortResolver,
        clinical_data_source: ClinicalDataSource,
        patient_source: PatientSource,
    ):
        self.cohort_resolver = cohort_resolver
        self.clinical_data_source = clinical_data_source
        self.patient_source = patient_source

    def plot(
        self,
        x_axis: AxisSpecification,
        y_axis: AxisSpecification,
        clinical_data_type: ClinicalDataType,
        study_view_filter: StudyViewFilter,
    ) -> list[DensityPlotBin]:
        identifiers = self.cohort_resolver.apply(study_view_filter).unwrap()
        if len(identifiers) == 0:
            return []
        validate_bin_count('x', x_axis)
        validate_bin_count('y', y_axis)
        study_ids, ids = extract_ids(clinical_data_type, identifiers, self.patient_source)
        clinical_data = self.clinical_data_source.fetch_clinical_data(
            study_ids,
            ids,
            [x_axis.attribute_id, y_axis.attribute_id],
            clinical_data_type,
        )
        pairs = pair_numeric_values(clinical_data, x_axis.attribute_id, y_axis.attribute_id, clinical_data_type)
        logger.debug('%s of %s entities have numeric values of both %s and %s.', len(pairs), len(ids), x_axis.attribute_id, y_axis.attribute_id)
        # Unlike the cBioPortal endpoint, which returns no bins here, a fully bounded grid is still returned with zero counts.
        if len(pairs) == 0 and not (_has_explicit_bounds(x_axis) and _has_explicit_bounds(y_axis)):
            return []
        return compute_density_bins(pairs, x_axis, y_axis)
