"""Utilities for loading expected phone numbers from spreadsheets."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List, MutableMapping, Optional, Union

import pandas as pd

from ..normalize import Normalizer, normalize_phone
from .models import ExpectedPhoneRecord, ExpectedPhones

LOGGER = logging.getLogger(__name__)

PathLike = Union[str, Path]

_DELIMITED_SUFFIXES = {".csv", ".tsv"}
_EXCEL_SUFFIXES = {".xls", ".xlsx", ".xlsm", ".xlsb"}


class SetupError(RuntimeError):
    """Raised when the expected phone numbers cannot be used to run an audit."""


class UnsupportedFileTypeError(SetupError, ValueError):
    """Raised when an unsupported file format is passed to the loader."""


def load_expected_phones(
    path: PathLike,
    *,
    phone_column: str = "phone",
    country_column: Optional[str] = "country",
    normalizer: Normalizer = normalize_phone,
    loader_kwargs: Optional[MutableMapping[str, Any]] = None,
) -> ExpectedPhones:
    """Load the expected phone numbers listed in ``path``.

    Parameters
    ----------
    path:
        Path to the CSV/TSV/XLSX file holding a ``phone`` column.
    phone_column:
        Header of the column holding phone numbers. Matched by name, ignoring
        case and surrounding whitespace, so column order does not matter.
    country_column:
        Optional header of the informational country column.
    normalizer:
        Callable turning raw cell text into a canonical phone number. Defaults to
        :func:`~site_phone_audit.normalize.normalize_phone`, the same function the
        page extractor uses.
    loader_kwargs:
        Extra keyword arguments forwarded to :func:`pandas.read_csv` or
        :func:`pandas.read_excel`.

    Rows are returned in file order with duplicates retained. Rows whose phone
    does not normalize to a number are skipped with a warning.
    """

    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"Expected phone numbers file not found at {file_path}")

    dataframe = _read_dataframe(file_path, loader_kwargs=loader_kwargs)
    resolved_phone = _resolve_column(dataframe.columns, phone_column)
    if resolved_phone is None:
        raise SetupError(
            f"Column '{phone_column}' is missing from {file_path}. Found columns: {list(dataframe.columns)}"
        )
    resolved_country = _resolve_column(dataframe.columns, country_column) if country_column else None

    records: List[ExpectedPhoneRecord] = []
    # Data rows start after the header line.
    for offset, (_, row) in enumerate(dataframe.iterrows(), start=2):
        if _row_is_empty(row):
            continue
        raw_phone = _clean_text(row[resolved_phone]) or ""
        phone = normalizer(raw_phone)
        if not phone:
            LOGGER.warning("Skipping row %s in %s: %r holds no phone number", offset, file_path, raw_phone)
            continue
        country = _clean_text(row[resolved_country]) if resolved_country else None
        records.append(ExpectedPhoneRecord(phone=phone, raw_phone=raw_phone, country=country, row=offset))

    LOGGER.info("Loaded %s expected phone numbers from %s", len(records), file_path)
    return ExpectedPhones(records=tuple(records), source=file_path)


def ensure_expected_phones(path: PathLike, **kwargs: Any) -> ExpectedPhones:
    """Load expected phone numbers for suite setup, failing loudly.

    Any file that cannot provide at least one phone number raises
    :class:`SetupError`, since an empty expected list would make every
    containment check pass vacuously.
    """

    try:
        expected = load_expected_phones(path, **kwargs)
    except FileNotFoundError as exc:
        raise SetupError(f"CSV file not found at: {path}. Please check the path.") from exc
    except pd.errors.EmptyDataError as exc:
        raise SetupError(f"Expected phone numbers file {path} is empty.") from exc
    except UnicodeDecodeError as exc:
        raise SetupError(f"Expected phone numbers file {path} is not valid UTF-8: {exc}") from exc
    except pd.errors.ParserError as exc:
        raise SetupError(f"Expected phone numbers file {path} could not be parsed: {exc}") from exc

    if not expected:
        raise SetupError(f"Expected phone numbers list is empty. Please check the CSV file at {path}.")
    return expected


def _read_dataframe(
    path: Path,
    *,
    loader_kwargs: Optional[MutableMapping[str, Any]] = None,
) -> pd.DataFrame:
    loader_kwargs = dict(loader_kwargs or {})
    loader_kwargs.setdefault("dtype", str)
    loader_kwargs.setdefault("keep_default_na", False)
    suffix = path.suffix.lower()

    if suffix in _DELIMITED_SUFFIXES:
        if suffix == ".tsv":
            loader_kwargs.setdefault("sep", "\t")
        loader_kwargs.setdefault("encoding", "utf-8-sig")
        loader_kwargs.setdefault("skip_blank_lines", True)
        return pd.read_csv(path, **loader_kwargs)

    if suffix in _EXCEL_SUFFIXES:
        engine = loader_kwargs.pop("engine", None) or "openpyxl"
        return pd.read_excel(path, engine=engine, **loader_kwargs)

    raise UnsupportedFileTypeError(f"Unsupported file extension: {path.suffix}")


def _resolve_column(columns: Any, wanted: str) -> Optional[str]:
    target = wanted.strip().lower()
    for column in columns:
        if str(column).strip().lower() == target:
            return column
    return None


def _row_is_empty(row: pd.Series) -> bool:
    return all(_clean_text(value) is None for value in row.values)


def _clean_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str) and pd.isna(value):
        return None
    text = str(value).strip()
    return text or None


__all__ = [
    "load_expected_phones",
    "ensure_expected_phones",
    "SetupError",
    "UnsupportedFileTypeError",
]
