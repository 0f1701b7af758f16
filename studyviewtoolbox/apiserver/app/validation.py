"""Strict query parameter validation."""
from typing import Annotated

from fastapi import Query

from studyviewtoolbox.db.exchange_data_formats.cohort import ClinicalDataType
from studyviewtoolbox.db.exchange_data_formats.clinical import DataBinMethod
from studyviewtoolbox.studyview.density_plot import DEFAULT_BIN_COUNT

MAXIMUM_ATTRIBUTE_ID_LENGTH = 255


def abbreviate_string(string: str) -> str:
    abbreviation = string[0:40]
    if len(string) > 40:
        abbreviation = abbreviation + '...'
    return abbreviation


def attribute_id_query(alias: str):
    return Query(alias=alias, min_length=1, max_length=MAXIMUM_ATTRIBUTE_ID_LENGTH)


def bin_count_query(alias: str):
    return Query(alias=alias, ge=1)


XAxisAttributeId = Annotated[str, attribute_id_query('xAxisAttributeId')]
YAxisAttributeId = Annotated[str, attribute_id_query('yAxisAttributeId')]
XAxisBinCount = Annotated[int, bin_count_query('xAxisBinCount')]
YAxisBinCount = Annotated[int, bin_count_query('yAxisBinCount')]
XAxisStart = Annotated[float | None, Query(alias='xAxisStart')]
XAxisEnd = Annotated[float | None, Query(alias='xAxisEnd')]
YAxisStart = Annotated[float | None, Query(alias='yAxisStart')]
YAxisEnd = Annotated[float | None, Query(alias='yAxisEnd')]
ClinicalDataTypeParameter = Annotated[ClinicalDataType, Query(alias='clinicalDataType')]
DataBinMethodParameter = Annotated[DataBinMethod, Query(alias='dataBinMethod')]
NegateFilters = Annotated[bool, Query(alias='negateFilters')]
