"""
Country of origin lookup.

Resolves a free-text origin (English or French, with or without accents)
to its ISO 3166-1 alpha-2 code using the bundled ``countries.json`` table.
"""
import json
import logging
import re
import unicodedata
from functools import lru_cache
from typing import Dict, Optional

from config import COUNTRIES_FILE

logger = logging.getLogger(__name__)

_ISO_CODE = re.compile(r"^[A-Z]{2}$")

# Normalized French names mapped to the English names used in countries.json
FR_TO_EN: Dict[str, str] = {
    "etats-unis": "United States",
    "royaume-uni": "United Kingdom",
    "france": "France",
    "espagne": "Spain",
    "allemagne": "Germany",
    "italie": "Italy",
    "bresil": "Brazil",
    "chine": "China",
    "japon": "Japan",
    "canada": "Canada",
    "russie": "Russian Federation",
    "inde": "India",
    "mexique": "Mexico",
    "moldavie": "Moldova, Republic of",
    "moldova": "Moldova, Republic of",
    "argentine": "Argentina",
    "australie": "Australia",
    "maroc": "Morocco",
    "tunisie": "Tunisia",
    "algerie": "Algeria",
    "egypte": "Egypt",
    "portugal": "Portugal",
    "belgique": "Belgium",
    "suisse": "Switzerland",
    "suede": "Sweden",
    "pays-bas": "Netherlands",
    "norvege": "Norway",
    "grece": "Greece",
    "autriche": "Austria",
    "irlande": "Ireland",
    "danemark": "Denmark",
    "pologne": "Poland",
    "finlande": "Finland",
    "islande": "Iceland",
    "hongrie": "Hungary",
    "roumanie": "Romania",
    "ukraine": "Ukraine",
    "turquie": "Turkey",
    "cote d'ivoire": "Cote D'ivoire",
    "coree du sud": "Korea, Republic of",
    "indonesie": "Indonesia",
    "philippines": "Philippines",
    "thailande": "Thailand",
    "vietnam": "Viet Nam",
    "pakistan": "Pakistan",
    "israel": "Israel",
    "liban": "Lebanon",
    "singapour": "Singapore",
    "nouvelle-zelande": "New Zealand",
    "afrique du sud": "South Africa",
    "colombie": "Colombia",
    "perou": "Peru",
}


def normalize_name(name: str) -> str:
    """Strip accents, lowercase and trim a country name."""
    decomposed = unicodedata.normalize("NFD", name)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.lower().strip()


@lru_cache(maxsize=1)
def _load_countries() -> Dict[str, str]:
    """Return a mapping of normalized English name -> ISO code."""
    with open(COUNTRIES_FILE, encoding="utf-8") as fh:
        countries = json.load(fh)["countries"]
    logger.debug(f"Loaded {len(countries)} countries", extra={"file_path": COUNTRIES_FILE})
    return {normalize_name(c["name"]): c["acronym"] for c in countries}


def get_country_acronym(input_name: str) -> Optional[str]:
    """
    Get the ISO 3166-1 alpha-2 code for a country name.

    Args:
        input_name: Country name in English or French, or an ISO code

    Returns:
        Optional[str]: The two-letter code, or None when the name is unknown
    """
    if not input_name:
        return None

    countries = _load_countries()

    # Already an ISO code
    if _ISO_CODE.match(input_name) and input_name in countries.values():
        return input_name

    normalized = normalize_name(input_name)
    translated = FR_TO_EN.get(normalized, input_name)
    return countries.get(normalize_name(translated))
