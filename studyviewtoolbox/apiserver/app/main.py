"""The API service's endpoint handlers."""
from typing import Annotated
from typing import Iterator

from fastapi import FastAPI
from fastapi import Depends
from fastapi import Request
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse

from studyviewtoolbox import __version__
from studyviewtoolbox.db.database_connection import DBCursor
from studyviewtoolbox.db.sources import database_sources
from studyviewtoolbox.db.exchange_data_formats.base import CamelModel
from studyviewtoolbox.db.exchange_data_formats.cohort import Sample
from studyviewtoolbox.db.exchange_data_formats.cohort import StudyNotFoundError
from studyviewtoolbox.db.exchange_data_formats.cohort import StudyViewFilter
from studyviewtoolbox.db.exchange_data_formats.clinical import ClinicalDataBinCountFilter
from studyviewtoolbox.db.exchange_data_formats.clinical import ClinicalDataCountFilter
from studyviewtoolbox.db.exchange_data_formats.clinical import ClinicalDataCountItem
from studyviewtoolbox.db.exchange_data_formats.clinical import DataBin
from studyviewtoolbox.db.exchange_data_formats.clinical import DataBinMethod
from studyviewtoolbox.db.exchange_data_formats.clinical import DensityPlotBin
from studyviewtoolbox.db.exchange_data_formats.cohort import ClinicalDataType
from studyviewtoolbox.db.exchange_data_formats.genes import CopyNumberCountByGene
from studyviewtoolbox.db.exchange_data_formats.genes import MolecularProfileSampleCount
from studyviewtoolbox.db.exchange_data_formats.genes import MutationCountByGene
from studyviewtoolbox.studyview.density_plot import AxisSpecification
from studyviewtoolbox.studyview.density_plot import InvalidRangeError
from studyviewtoolbox.studyview.service import StudyViewService
from studyviewtoolbox.apiserver.app.headers import headers_for_path
from studyviewtoolbox.apiserver.app.validation import (
    abbreviate_string,
    DEFAULT_BIN_COUNT,
    XAxisAttributeId,
    YAxisAttributeId,
    XAxisBinCount,
    YAxisBinCount,
    XAxisStart,
    XAxisEnd,
    YAxisStart,
    YAxisEnd,
    ClinicalDataTypeParameter,
    DataBinMethodParameter,
    NegateFilters,
)
from studyviewtoolbox.standalone_utilities.log_formats import colorized_logger

logger = colorized_logger(__name__)

VERSION = '1.0.0'

TITLE = 'Study view aggregation API'

DESCRIPTION = """
# What's available

This API computes the summary statistics shown on a cancer genomics **study view**, over a cohort
of samples selected by a filter.

A filter names either whole studies or an explicit list of samples, optionally narrowed by clinical
attribute values (categorical equality, or numeric intervals). Given a filter you can request:

* **Clinical data counts**: how many samples or patients take each value of a clinical attribute
* **Clinical data bins**: histograms of numeric attributes, with bins either recomputed for the
  filtered cohort (`DYNAMIC`) or fixed by the unfiltered cohort (`STATIC`)
* **Density plot**: a two-dimensional histogram of a pair of numeric attributes
* **Mutated genes** and **copy-number altered genes**, with MutSig and GISTIC q-values when the
  cohort is drawn from a single study
* **Sample counts**: how many samples were profiled for mutations and for copy-number alterations
* **Filtered samples**: the samples selected by the filter, or those excluded by it

# Reading this documentation

This API was created using [FastAPI](https://fastapi.tiangolo.com) and
[Pydantic](https://docs.pydantic.dev/latest/). All JSON field names are camelCase.

Requests naming a study that does not exist are answered with status 404. An unusable density plot
configuration (for example an empty value range on one axis) is answered with status 400.
"""

app = FastAPI(
    title=TITLE,
    description=DESCRIPTION,
    version=VERSION,
)


def custom_openapi():
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title=TITLE,
        version=VERSION,
        servers=[
            {
                'url': '/api'
            }
        ],
        summary=TITLE,
        description=DESCRIPTION,
        routes=app.routes,
    )
    app.openapi_schema = openapi_schema
    return app.openapi_schema


setattr(app, 'openapi', custom_openapi)


@app.middleware("http")
async def set_secure_headers(request: Request, call_next):
    response = await call_next(request)
    await headers_for_path(request.url.path).set_headers_async(response)
    return response


@app.exception_handler(StudyNotFoundError)
async def handle_study_not_found(request: Request, exception: StudyNotFoundError) -> JSONResponse:
    logger.info('Request to %s named unknown study.', request.url.path)
    return JSONResponse(
        status_code=404,
        content={'detail': f'Did not find study: "{abbreviate_string(exception.study)}"'},
    )


@app.exception_handler(InvalidRangeError)
async def handle_invalid_range(request: Request, exception: InvalidRangeError) -> JSONResponse:
    return JSONResponse(status_code=400, content={'detail': str(exception)})


def get_study_view_service() -> Iterator[StudyViewService]:
    with DBCursor() as cursor:
        yield StudyViewService(database_sources(cursor))


Service = Annotated[StudyViewService, Depends(get_study_view_service)]


class ServerDescription(CamelModel):
    title: str
    api_version: str
    software_version: str


@app.get("/")
async def get_root() -> ServerDescription:
    """Name and version of this server."""
    return ServerDescription(title=TITLE, api_version=VERSION, software_version=__version__)


@app.post("/clinical-data-counts/fetch")
def fetch_clinical_data_counts(
    clinical_data_count_filter: ClinicalDataCountFilter,
    service: Service,
) -> list[ClinicalDataCountItem]:
    """
    For each requested attribute, the number of samples (or patients, for patient attributes) in
    the filtered cohort taking each value. Entities without a value are counted under "NA".

    When a single attribute is requested, the filter's own conditions on that attribute are
    ignored, so that the counts show the alternatives to the current selection.
    """
    return service.fetch_clinical_data_counts(
        clinical_data_count_filter.attributes,
        clinical_data_count_filter.study_view_filter,
    )


@app.post("/clinical-data-bin-counts/fetch")
def fetch_clinical_data_bin_counts(
    clinical_data_bin_count_filter: ClinicalDataBinCountFilter,
    service: Service,
    data_bin_method: DataBinMethodParameter = DataBinMethod.DYNAMIC,
) -> list[DataBin] | None:
    """
    Histogram bins of numeric attributes over the filtered cohort. Non-numeric values get their own
    special bins.

    * `STATIC`: bin edges are computed from the cohort without the clinical data filters, then the
      filtered values are counted in them.
    * `DYNAMIC`: bin edges are computed from the filtered values.
    """
    return service.fetch_clinical_data_bin_counts(
        clinical_data_bin_count_filter.attributes,
        clinical_data_bin_count_filter.study_view_filter,
        data_bin_method,
    )


@app.post("/mutated-genes/fetch")
def fetch_mutated_genes(
    study_view_filter: StudyViewFilter,
    service: Service,
) -> list[MutationCountByGene]:
    """
    Number of mutated samples per gene, most frequently mutated first. When every sample belongs to
    one study, genes found significant by MutSig carry their q-value.
    """
    return service.fetch_mutated_genes(study_view_filter)


@app.post("/cna-genes/fetch")
def fetch_cna_genes(
    study_view_filter: StudyViewFilter,
    service: Service,
) -> list[CopyNumberCountByGene]:
    """
    Number of samples with an amplification (2) or deep deletion (-2) per gene. When every sample
    belongs to one study, each gene carries the smallest q-value of the GISTIC regions containing
    it.
    """
    return service.fetch_cna_genes(study_view_filter)


@app.post("/filtered-samples/fetch")
def fetch_filtered_samples(
    study_view_filter: StudyViewFilter,
    service: Service,
    negate_filters: NegateFilters = False,
) -> list[Sample]:
    """The samples selected by the filter. With `negateFilters`, the in-scope samples it excludes.
    """
    return service.fetch_filtered_samples(study_view_filter, negate_filters=negate_filters)


@app.post("/sample-counts/fetch")
def fetch_molecular_profile_sample_counts(
    study_view_filter: StudyViewFilter,
    service: Service,
) -> MolecularProfileSampleCount:
    """Numbers of samples in the filtered cohort profiled, and not profiled, for mutations and for
    copy-number alterations."""
    return service.fetch_molecular_profile_sample_counts(study_view_filter)


@app.post("/clinical-data-density-plot/fetch")
def fetch_clinical_data_density_plot(  # pylint: disable=too-many-arguments
    study_view_filter: StudyViewFilter,
    service: Service,
    x_axis_attribute_id: XAxisAttributeId,
    y_axis_attribute_id: YAxisAttributeId,
    clinical_data_type: ClinicalDataTypeParameter,
    x_axis_bin_count: XAxisBinCount = DEFAULT_BIN_COUNT,
    x_axis_start: XAxisStart = None,
    x_axis_end: XAxisEnd = None,
    y_axis_bin_count: YAxisBinCount = DEFAULT_BIN_COUNT,
    y_axis_start: YAxisStart = None,
    y_axis_end: YAxisEnd = None,
) -> list[DensityPlotBin]:
    """
    Two-dimensional histogram of a pair of numeric attributes. The grid always has exactly
    `xAxisBinCount * yAxisBinCount` cells, listed by x then y, each giving the lower-left corner
    of the cell and the number of samples (or patients) in it.

    Axis bounds default to the smallest and largest value present.
    """
    return service.fetch_clinical_data_density_plot(
        AxisSpecification(x_axis_attribute_id, x_axis_bin_count, x_axis_start, x_axis_end),
        AxisSpecification(y_axis_attribute_id, y_axis_bin_count, y_axis_start, y_axis_end),
        ClinicalDataType(clinical_data_type),
        study_view_filter,
    )
