"""
Data loading utilities.

Handles:
- Loading the municipality gazetteer (once per process, read-only)
- Loading traveler batch files (CSV or Excel) with case-insensitive columns
"""

import os
import logging
from functools import lru_cache
from pathlib import Path

import pandas as pd

from config import MUNICIPALITY_COLUMNS, INE_CODE_PATTERN, TRAVELER_COLUMNS
from utils.normalization import normalize_text, standardize_column_names, find_column

logger = logging.getLogger(__name__)

GAZETTEER_FILE = Path(__file__).resolve().parent / 'gazetteer' / 'municipalities.csv'


def _check_gazetteer(df, filepath):
    """Validate gazetteer structure: columns, code shape, province prefix, uniqueness."""
    missing = [col for col in MUNICIPALITY_COLUMNS if col not in df.columns]
    if missing:
        raise ValueError(f"Gazetteer {filepath} is missing columns: {missing}")

    bad_codes = df.loc[~df['ine_code'].str.match(INE_CODE_PATTERN), 'ine_code']
    if not bad_codes.empty:
        raise ValueError(f"Gazetteer {filepath} has malformed INE codes: {list(bad_codes)}")

    mismatched = df.loc[df['ine_code'].str[:2] != df['province_code'], 'ine_code']
    if not mismatched.empty:
        raise ValueError(f"Gazetteer {filepath} has codes outside their province: {list(mismatched)}")

    duplicated = df.loc[df['ine_code'].duplicated(), 'ine_code']
    if not duplicated.empty:
        raise ValueError(f"Gazetteer {filepath} has duplicate INE codes: {list(duplicated)}")


def read_municipalities(filepath=GAZETTEER_FILE):
    """
    Read a municipality gazetteer file.

    Expected columns: ine_code, name, province, province_code, region.
    Codes are kept as strings so leading zeros survive ("04003").

    Args:
        filepath: Path to the gazetteer CSV

    Returns:
        pd.DataFrame: Gazetteer rows in file order, plus a `normalized_name`
        column used for searching

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If the file is malformed
    """
    if not os.path.exists(filepath):
        raise FileNotFoundError(f"Gazetteer file not found: {filepath}")

    df = pd.read_csv(filepath, dtype=str, keep_default_na=False, encoding='utf-8')
    df.columns = [str(col).strip().lower() for col in df.columns]
    _check_gazetteer(df, filepath)

    df = df[MUNICIPALITY_COLUMNS].reset_index(drop=True)
    df['normalized_name'] = df['name'].map(normalize_text)

    logger.info(f"Loaded {len(df)} municipalities from {filepath}")
    return df


@lru_cache(maxsize=1)
def load_municipalities():
    """
    Bundled gazetteer, loaded on first use and shared afterwards.

    Callers must treat the returned frame as read-only.
    """
    return read_municipalities(GAZETTEER_FILE)


def load_travelers(filepath):
    """
    Load a traveler batch file with case-insensitive column handling.

    Accepted columns are listed in config.TRAVELER_COLUMNS (e.g. "First Name",
    "Document Number", "Postal Code"); snake_case headers are accepted too.
    Columns that are not recognised are kept untouched.

    Args:
        filepath: Path to a .csv or .xlsx file

    Returns:
        pd.DataFrame: Rows with recognised columns renamed to draft field names

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If the extension is unsupported or no column is recognised
    """
    if not os.path.exists(filepath):
        raise FileNotFoundError(f"Traveler file not found: {filepath}")

    logger.info(f"Loading travelers from: {filepath}")

    suffix = Path(filepath).suffix.lower()
    if suffix == '.csv':
        df = pd.read_csv(filepath, dtype=str)
    elif suffix in ('.xlsx', '.xls'):
        df = pd.read_excel(filepath, dtype=str)
    else:
        raise ValueError(f"Unsupported traveler file type: {suffix}")

    logger.info(f"Loaded {len(df)} rows from traveler file")

    column_map = standardize_column_names(df)
    rename = {}
    for field_name, header in TRAVELER_COLUMNS.items():
        actual_col = find_column(column_map, header, field_name)
        if actual_col is not None:
            rename[actual_col] = field_name

    if not rename:
        raise ValueError(f"No traveler columns recognised in {filepath}")

    missing = [header for field_name, header in TRAVELER_COLUMNS.items() if field_name not in rename.values()]
    if missing:
        logger.info(f"Traveler file has no column for: {missing}")

    return df.rename(columns=rename)
