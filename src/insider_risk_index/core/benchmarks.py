"""Cohort benchmark reference data and lookup for the Insider Risk Index.

Holds pre-computed average IRI scores per industry, per company-size bracket
and globally, together with the single bidirectional mapping between the
free-text values clients send ("financial-services", "5,000+", ...) and the
canonical ``Industry`` / ``CompanySize`` keys.

Benchmarks are advisory context. Every lookup degrades to the global average
instead of raising: an absent, unrecognised or unseeded cohort simply
resolves to ``OVERALL_BENCHMARK`` for that dimension.

Reference figures are seeded from published insider-threat cost research
(Ponemon 2024/2025, Verizon DBIR 2024) and are refreshed offline.
"""

import re
from dataclasses import dataclass, field
from enum import Enum

from insider_risk_index.observability import get_logger

logger = get_logger(__name__)


class Industry(str, Enum):
    """Canonical industry keys."""

    TECHNOLOGY = "TECHNOLOGY"
    HEALTHCARE = "HEALTHCARE"
    FINANCIAL_SERVICES = "FINANCIAL_SERVICES"
    RETAIL = "RETAIL"
    MANUFACTURING = "MANUFACTURING"
    GOVERNMENT = "GOVERNMENT"
    EDUCATION = "EDUCATION"
    NON_PROFIT = "NON_PROFIT"
    ENERGY = "ENERGY"
    TELECOMMUNICATIONS = "TELECOMMUNICATIONS"
    MEDIA_ENTERTAINMENT = "MEDIA_ENTERTAINMENT"


class CompanySize(str, Enum):
    """Canonical company-size brackets (employee counts)."""

    STARTUP_1_50 = "STARTUP_1_50"
    SMALL_51_250 = "SMALL_51_250"
    MID_251_1000 = "MID_251_1000"
    LARGE_1001_5000 = "LARGE_1001_5000"
    ENTERPRISE_5000_PLUS = "ENTERPRISE_5000_PLUS"


# ---------------------------------------------------------------------------
# Bidirectional mapping: canonical key <-> UI slug, plus accepted aliases
# ---------------------------------------------------------------------------

INDUSTRY_SLUGS: dict[Industry, str] = {
    Industry.TECHNOLOGY: "technology",
    Industry.HEALTHCARE: "healthcare",
    Industry.FINANCIAL_SERVICES: "financial-services",
    Industry.RETAIL: "retail",
    Industry.MANUFACTURING: "manufacturing",
    Industry.GOVERNMENT: "government",
    Industry.EDUCATION: "education",
    Industry.NON_PROFIT: "non-profit",
    Industry.ENERGY: "energy",
    Industry.TELECOMMUNICATIONS: "telecommunications",
    Industry.MEDIA_ENTERTAINMENT: "media-entertainment",
}

INDUSTRY_LABELS: dict[Industry, str] = {
    Industry.TECHNOLOGY: "Technology",
    Industry.HEALTHCARE: "Healthcare",
    Industry.FINANCIAL_SERVICES: "Financial Services",
    Industry.RETAIL: "Retail",
    Industry.MANUFACTURING: "Manufacturing",
    Industry.GOVERNMENT: "Government",
    Industry.EDUCATION: "Education",
    Industry.NON_PROFIT: "Non-Profit",
    Industry.ENERGY: "Energy",
    Industry.TELECOMMUNICATIONS: "Telecommunications",
    Industry.MEDIA_ENTERTAINMENT: "Media & Entertainment",
}

COMPANY_SIZE_SLUGS: dict[CompanySize, str] = {
    CompanySize.STARTUP_1_50: "1-50",
    CompanySize.SMALL_51_250: "51-250",
    CompanySize.MID_251_1000: "251-1000",
    CompanySize.LARGE_1001_5000: "1001-5000",
    CompanySize.ENTERPRISE_5000_PLUS: "5000+",
}

COMPANY_SIZE_LABELS: dict[CompanySize, str] = {
    CompanySize.STARTUP_1_50: "1-50 employees",
    CompanySize.SMALL_51_250: "51-250 employees",
    CompanySize.MID_251_1000: "251-1,000 employees",
    CompanySize.LARGE_1001_5000: "1,001-5,000 employees",
    CompanySize.ENTERPRISE_5000_PLUS: "5,000+ employees",
}

# Extra spellings seen from clients, keyed by normalised form.
_INDUSTRY_ALIASES: dict[str, Industry] = {
    "tech": Industry.TECHNOLOGY,
    "software": Industry.TECHNOLOGY,
    "health-care": Industry.HEALTHCARE,
    "finance": Industry.FINANCIAL_SERVICES,
    "financial": Industry.FINANCIAL_SERVICES,
    "banking": Industry.FINANCIAL_SERVICES,
    "public-sector": Industry.GOVERNMENT,
    "nonprofit": Industry.NON_PROFIT,
    "not-for-profit": Industry.NON_PROFIT,
    "utilities": Industry.ENERGY,
    "telecom": Industry.TELECOMMUNICATIONS,
    "media": Industry.MEDIA_ENTERTAINMENT,
    "media-and-entertainment": Industry.MEDIA_ENTERTAINMENT,
}

_COMPANY_SIZE_ALIASES: dict[str, CompanySize] = {
    "startup": CompanySize.STARTUP_1_50,
    "51-200": CompanySize.SMALL_51_250,
    "small": CompanySize.SMALL_51_250,
    "smb": CompanySize.SMALL_51_250,
    "201-1000": CompanySize.MID_251_1000,
    "mid": CompanySize.MID_251_1000,
    "mid-market": CompanySize.MID_251_1000,
    "large": CompanySize.LARGE_1001_5000,
    "5001+": CompanySize.ENTERPRISE_5000_PLUS,
    "enterprise": CompanySize.ENTERPRISE_5000_PLUS,
}

_NON_KEY_CHARS = re.compile(r"[^a-z0-9+]+")


def _normalise_key(value: str) -> str:
    """Fold a free-text value to a lowercase hyphenated lookup key."""
    text = value.strip().lower().replace(",", "").replace("&", " and ")
    key = _NON_KEY_CHARS.sub("-", text).strip("-")
    if key.endswith("-employees"):
        key = key[: -len("-employees")]
    return key


def _build_lookup(
    slugs: dict,
    aliases: dict,
) -> dict:
    lookup = dict(aliases)
    for member, slug in slugs.items():
        lookup[_normalise_key(member.value)] = member
        lookup[_normalise_key(slug)] = member
    return lookup


_INDUSTRY_LOOKUP: dict[str, Industry] = _build_lookup(INDUSTRY_SLUGS, _INDUSTRY_ALIASES)
_COMPANY_SIZE_LOOKUP: dict[str, CompanySize] = _build_lookup(
    COMPANY_SIZE_SLUGS, _COMPANY_SIZE_ALIASES
)


def normalize_industry(value: "Industry | str | None") -> Industry | None:
    """Map a free-text industry to its canonical key.

    Returns:
        The matching Industry, or None when the value is empty, unknown or
        not a string.
    """
    if isinstance(value, Industry):
        return value
    if not isinstance(value, str):
        return None
    return _INDUSTRY_LOOKUP.get(_normalise_key(value))


def normalize_company_size(value: "CompanySize | str | None") -> CompanySize | None:
    """Map a free-text company size to its canonical bracket.

    Returns:
        The matching CompanySize, or None when the value is empty, unknown or
        not a string.
    """
    if isinstance(value, CompanySize):
        return value
    if not isinstance(value, str):
        return None
    return _COMPANY_SIZE_LOOKUP.get(_normalise_key(value))


def industry_slug(industry: Industry) -> str:
    return INDUSTRY_SLUGS[industry]


def company_size_slug(company_size: CompanySize) -> str:
    return COMPANY_SIZE_SLUGS[company_size]


# ---------------------------------------------------------------------------
# Reference tables
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CohortBenchmark:
    """Average scores for one peer cohort.

    Attributes:
        name: Display name of the cohort.
        average_score: Average overall IRI for the cohort.
        pillar_averages: Average normalised score per pillar id.
        sample_size: Number of organisations behind the averages.
    """

    name: str
    average_score: float
    pillar_averages: dict[str, float] = field(default_factory=dict)
    sample_size: int = 0


def _pillars(
    visibility: float,
    prevention: float,
    investigation: float,
    identity: float,
    phishing: float,
) -> dict[str, float]:
    return {
        "visibility": visibility,
        "prevention-coaching": prevention,
        "investigation-evidence": investigation,
        "identity-saas": identity,
        "phishing-resilience": phishing,
    }


OVERALL_BENCHMARK: CohortBenchmark = CohortBenchmark(
    name="All organizations",
    average_score=64.2,
    pillar_averages=_pillars(63.0, 60.0, 68.0, 65.0, 67.0),
    sample_size=14170,
)

# Energy, telecommunications and media have no seeded cohort yet and resolve
# to the global average.
INDUSTRY_BENCHMARKS: dict[Industry, CohortBenchmark] = {
    Industry.FINANCIAL_SERVICES: CohortBenchmark(
        name="Financial Services",
        average_score=74.0,
        pillar_averages=_pillars(78.0, 71.0, 82.0, 76.0, 73.0),
        sample_size=3280,
    ),
    Industry.HEALTHCARE: CohortBenchmark(
        name="Healthcare",
        average_score=58.0,
        pillar_averages=_pillars(54.0, 52.0, 62.0, 56.0, 64.0),
        sample_size=2890,
    ),
    Industry.TECHNOLOGY: CohortBenchmark(
        name="Technology",
        average_score=79.0,
        pillar_averages=_pillars(82.0, 76.0, 81.0, 85.0, 74.0),
        sample_size=2140,
    ),
    Industry.MANUFACTURING: CohortBenchmark(
        name="Manufacturing",
        average_score=61.0,
        pillar_averages=_pillars(59.0, 56.0, 64.0, 61.0, 65.0),
        sample_size=1560,
    ),
    Industry.RETAIL: CohortBenchmark(
        name="Retail",
        average_score=64.0,
        pillar_averages=_pillars(62.0, 60.0, 67.0, 65.0, 68.0),
        sample_size=1840,
    ),
    Industry.GOVERNMENT: CohortBenchmark(
        name="Government",
        average_score=72.0,
        pillar_averages=_pillars(75.0, 69.0, 78.0, 71.0, 73.0),
        sample_size=980,
    ),
    Industry.EDUCATION: CohortBenchmark(
        name="Education",
        average_score=56.0,
        pillar_averages=_pillars(53.0, 51.0, 59.0, 57.0, 61.0),
        sample_size=1240,
    ),
    Industry.NON_PROFIT: CohortBenchmark(
        name="Non-Profit",
        average_score=52.0,
        pillar_averages=_pillars(49.0, 47.0, 55.0, 51.0, 58.0),
        sample_size=680,
    ),
}

SIZE_BENCHMARKS: dict[CompanySize, CohortBenchmark] = {
    CompanySize.STARTUP_1_50: CohortBenchmark(
        name="1-50 employees",
        average_score=48.0,
        pillar_averages=_pillars(44.0, 42.0, 51.0, 46.0, 57.0),
        sample_size=4230,
    ),
    CompanySize.SMALL_51_250: CohortBenchmark(
        name="51-250 employees",
        average_score=58.0,
        pillar_averages=_pillars(55.0, 53.0, 61.0, 57.0, 63.0),
        sample_size=3870,
    ),
    CompanySize.MID_251_1000: CohortBenchmark(
        name="251-1,000 employees",
        average_score=66.0,
        pillar_averages=_pillars(63.0, 62.0, 69.0, 67.0, 67.0),
        sample_size=2940,
    ),
    CompanySize.LARGE_1001_5000: CohortBenchmark(
        name="1,001-5,000 employees",
        average_score=73.0,
        pillar_averages=_pillars(72.0, 70.0, 76.0, 75.0, 70.0),
        sample_size=1890,
    ),
    CompanySize.ENTERPRISE_5000_PLUS: CohortBenchmark(
        name="5,000+ employees",
        average_score=79.0,
        pillar_averages=_pillars(81.0, 77.0, 83.0, 84.0, 75.0),
        sample_size=1240,
    ),
}


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Benchmark:
    """Comparative average IRI for the respondent's cohorts.

    Attributes:
        industry: Industry cohort average (global average when unavailable).
        company_size: Size-bracket average (global average when unavailable).
        overall: Global average across all organisations.
    """

    industry: float
    company_size: float
    overall: float


@dataclass(frozen=True)
class PercentileEstimate:
    """Approximate percentile position against each cohort.

    Cohort fields are None when the cohort could not be resolved.
    """

    overall: int
    industry: int | None = None
    company_size: int | None = None


def get_industry_benchmark(industry: "Industry | str | None") -> CohortBenchmark | None:
    """Return the seeded cohort for an industry, or None."""
    canonical = normalize_industry(industry)
    if canonical is None:
        return None
    return INDUSTRY_BENCHMARKS.get(canonical)


def get_size_benchmark(company_size: "CompanySize | str | None") -> CohortBenchmark | None:
    """Return the seeded cohort for a company-size bracket, or None."""
    canonical = normalize_company_size(company_size)
    if canonical is None:
        return None
    return SIZE_BENCHMARKS.get(canonical)


def resolve_benchmark(
    industry: "Industry | str | None" = None,
    company_size: "CompanySize | str | None" = None,
) -> Benchmark:
    """Look up the cohort averages for an organisation.

    Never raises. Each dimension falls back to the global average when the
    input is absent, unrecognised, or has no seeded cohort.

    Args:
        industry: Canonical Industry or free-text industry.
        company_size: Canonical CompanySize or free-text size bracket.

    Returns:
        Benchmark with industry, company_size and overall averages, all > 0.
    """
    industry_cohort = get_industry_benchmark(industry)
    size_cohort = get_size_benchmark(company_size)

    if industry_cohort is None or size_cohort is None:
        logger.debug(
            "Benchmark cohort unavailable, using global average",
            industry=str(industry) if industry is not None else None,
            company_size=str(company_size) if company_size is not None else None,
            industry_resolved=industry_cohort is not None,
            company_size_resolved=size_cohort is not None,
        )

    overall = OVERALL_BENCHMARK.average_score
    return Benchmark(
        industry=industry_cohort.average_score if industry_cohort else overall,
        company_size=size_cohort.average_score if size_cohort else overall,
        overall=overall,
    )


def resolve_pillar_benchmarks(
    industry: "Industry | str | None" = None,
    company_size: "CompanySize | str | None" = None,
) -> dict[str, float]:
    """Return the most specific available average for every pillar.

    Prefers the industry cohort, then the size cohort, then the global
    averages.
    """
    cohorts = [
        cohort
        for cohort in (
            get_industry_benchmark(industry),
            get_size_benchmark(company_size),
            OVERALL_BENCHMARK,
        )
        if cohort is not None
    ]
    resolved: dict[str, float] = {}
    for pillar_id in OVERALL_BENCHMARK.pillar_averages:
        for cohort in cohorts:
            if pillar_id in cohort.pillar_averages:
                resolved[pillar_id] = cohort.pillar_averages[pillar_id]
                break
    return resolved


def _position(score: float, average: float) -> int:
    # Respondents at the cohort average sit at the 50th percentile.
    return round(min(100.0, max(0.0, (score / average) * 50.0)))


def calculate_percentile(
    score: float,
    industry: "Industry | str | None" = None,
    company_size: "CompanySize | str | None" = None,
) -> PercentileEstimate:
    """Estimate the respondent's percentile position against each cohort.

    A linear approximation anchored at the cohort average (50th percentile)
    until real distribution data is available.

    Args:
        score: Overall IRI (0-100).
        industry: Canonical or free-text industry.
        company_size: Canonical or free-text size bracket.

    Returns:
        PercentileEstimate with integer positions in 0-100.
    """
    industry_cohort = get_industry_benchmark(industry)
    size_cohort = get_size_benchmark(company_size)
    return PercentileEstimate(
        overall=_position(score, OVERALL_BENCHMARK.average_score),
        industry=_position(score, industry_cohort.average_score) if industry_cohort else None,
        company_size=_position(score, size_cohort.average_score) if size_cohort else None,
    )
