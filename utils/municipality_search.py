"""
Municipality search over the bundled gazetteer.

Matching is accent- and case-insensitive ("malaga" finds "Málaga").
Results are ranked in three tiers: exact name, name starting with the
query, name containing the query. Inside a tier, gazetteer order is kept.
"""

import logging

from config import MUNICIPALITY_MIN_QUERY_LENGTH, MUNICIPALITY_MAX_RESULTS
import data_loader
from models import Municipality
from utils.normalization import normalize_text

logger = logging.getLogger(__name__)


def _to_municipality(row):
    return Municipality(
        ine_code=row['ine_code'],
        name=row['name'],
        province=row['province'],
        province_code=row['province_code'],
        region=row['region'],
    )


def _records(df):
    return [_to_municipality(row) for _, row in df.iterrows()]


def search_municipalities(query, max_results=MUNICIPALITY_MAX_RESULTS, gazetteer=None):
    """
    Search municipalities by name with tiered ranking.

    Ranking:
    1. Exact normalized match (e.g. "malaga" -> "Málaga")
    2. Starts with the query (e.g. "torre" -> "Torremolinos", "Torre del Mar")
    3. Contains the query (e.g. "villa" -> "Sevilla")

    Args:
        query: Text typed by the user
        max_results: Maximum number of results
        gazetteer: Optional gazetteer frame (defaults to the bundled one)

    Returns:
        list: Municipality records, best matches first
    """
    if query is None or len(query) < MUNICIPALITY_MIN_QUERY_LENGTH:
        return []

    df = data_loader.load_municipalities() if gazetteer is None else gazetteer
    normalized_query = normalize_text(query)
    if not normalized_query:
        return []

    names = df['normalized_name']

    exact = names == normalized_query
    starts_with = names.str.startswith(normalized_query) & ~exact
    contains = names.str.contains(normalized_query, regex=False) & ~exact & ~starts_with

    ranked = (
        _records(df[exact])
        + _records(df[starts_with])
        + _records(df[contains])
    )
    return ranked[:max_results]


def find_municipality_by_name(name, gazetteer=None):
    """
    Exact (normalized) name lookup.

    Used to auto-correct autofilled values that lost their accents.

    Example:
        "CORDOBA" -> Municipality(name="Córdoba", ine_code="14021", ...)
        "Atlantis" -> None
    """
    df = data_loader.load_municipalities() if gazetteer is None else gazetteer
    matches = df[df['normalized_name'] == normalize_text(name)]
    if matches.empty:
        return None
    return _to_municipality(matches.iloc[0])


def find_municipality_by_code(ine_code, gazetteer=None):
    """Lookup by 5-digit INE code, or None."""
    df = data_loader.load_municipalities() if gazetteer is None else gazetteer
    matches = df[df['ine_code'] == str(ine_code).strip()]
    if matches.empty:
        return None
    return _to_municipality(matches.iloc[0])


def list_provinces(gazetteer=None):
    """
    Provinces present in the gazetteer, in first-seen order.

    Returns:
        list: (province_code, province) tuples
    """
    df = data_loader.load_municipalities() if gazetteer is None else gazetteer
    provinces = df[['province_code', 'province']].drop_duplicates()
    return list(provinces.itertuples(index=False, name=None))
