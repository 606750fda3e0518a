"""FastAPI server — HTTP access to the pricing engine for the marketing site.

Run with:
    uvicorn usage_pricing.api.server:app --reload --port 8000

Or:
    python -m usage_pricing.api.server

Endpoints:
    GET  /health          — liveness probe
    GET  /currencies      — supported currencies (code, symbol, locale, rate)
    GET  /tiers           — generated Scale tier ladder, formatted in a currency
    POST /quote/launch    — Launch plan cost for an annual revenue
    POST /quote/scale     — Scale plan cost for an annual revenue + departments
    POST /quote/compare   — both plans + recommendation
    POST /convert         — amount to/from the base currency
"""

from __future__ import annotations

import logging
from typing import Any, Literal

from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, ValidationError

from usage_pricing.api.settings import get_settings
from usage_pricing.config.pricing import PricingConfig
from usage_pricing.config.schedule import MAX_TIER_COUNT
from usage_pricing.config.types import Money
from usage_pricing.engine.calculator import (
    calculate_launch_pricing,
    calculate_scale_pricing,
    compare_pricing,
)
from usage_pricing.engine.conversion import convert_from_base, convert_to_base
from usage_pricing.engine.formatting import format_currency, format_percentage
from usage_pricing.engine.tiers import generate_scale_tiers

logger = logging.getLogger(__name__)

API_VERSION = "1.0"


# ═══════════════════════════════════════════════════════════════════════════
# App setup
# ═══════════════════════════════════════════════════════════════════════════

app = FastAPI(
    title="Usage Pricing API",
    version=API_VERSION,
    description=(
        "Pricing engine for the Launch (flat) and Scale (tiered) plans. "
        "Generates the Scale tier ladder, prices annual revenue on either plan, "
        "and converts/formats amounts across the supported currencies."
    ),
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ValueError)
async def handle_value_error(request: Request, exc: ValueError):
    """Engine validation failures (bad revenue, empty ladder, bad overrides) → 422."""
    code = "VALIDATION_ERROR" if isinstance(exc, ValidationError) else "INVALID_INPUT"
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=422, content={"detail": str(exc), "code": code})


# ═══════════════════════════════════════════════════════════════════════════
# Request / response models
# ═══════════════════════════════════════════════════════════════════════════

class QuoteRequest(BaseModel):
    """Request body for the /quote endpoints."""
    annual_revenue: Money = Field(description="Annual revenue, in ``currency`` units")
    department_count: int = Field(default=1, ge=0, description="Departments (Scale plan only)")
    currency: str | None = Field(
        default=None,
        description="Currency of ``annual_revenue`` and of formatted output. "
                    "Unknown codes fall back to the base currency.",
    )
    pricing: dict[str, Any] = Field(
        default_factory=dict,
        description="Partial PricingConfig overrides. "
                    "Example: {'scale': {'base_take_rate': 0.02}, 'tier_count': 10}",
    )


class QuoteResponse(BaseModel):
    """Response from /quote/launch and /quote/scale. ``result`` is in the base currency."""
    currency: str
    result: dict[str, Any]
    formatted: dict[str, str]


class CompareResponse(BaseModel):
    """Response from /quote/compare."""
    currency: str
    recommendation: Literal["launch", "scale"]
    result: dict[str, Any]
    formatted: dict[str, str]


class ConvertRequest(BaseModel):
    """Request body for /convert."""
    amount: float = Field(allow_inf_nan=False)
    currency: str
    direction: Literal["from_base", "to_base"] = "from_base"


# ═══════════════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════════════

def _deep_merge(base: dict, overrides: dict) -> dict:
    """Recursively merge overrides into base dict."""
    for key, val in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(val, dict):
            _deep_merge(base[key], val)
        else:
            base[key] = val
    return base


def _build_pricing(overrides: dict[str, Any]) -> PricingConfig:
    """Build a PricingConfig from partial overrides merged onto defaults."""
    defaults = PricingConfig().model_dump()
    _deep_merge(defaults, overrides)
    return PricingConfig(**defaults)


def _resolve_currency(pricing: PricingConfig, code: str | None) -> str:
    return pricing.currencies.get(code or get_settings().default_currency).code


def _money(pricing: PricingConfig, amount_base: float, currency: str) -> str:
    """Base-currency amount → formatted string in ``currency``."""
    converted = convert_from_base(amount_base, currency, pricing.currencies)
    return format_currency(converted, currency, registry=pricing.currencies)


def _prepare_quote(req: QuoteRequest) -> tuple[PricingConfig, str, float]:
    pricing = _build_pricing(req.pricing)
    currency = _resolve_currency(pricing, req.currency)
    revenue_base = convert_to_base(req.annual_revenue, currency, pricing.currencies)
    return pricing, currency, revenue_base


# ═══════════════════════════════════════════════════════════════════════════
# Endpoints
# ═══════════════════════════════════════════════════════════════════════════

@app.get("/health")
def health_check():
    """Health check for deployment platforms."""
    return {"status": "ok"}


@app.get("/")
def root():
    """API root — name, version, and a pointer to the docs."""
    return {
        "name": "Usage Pricing API",
        "version": API_VERSION,
        "docs": "GET /docs (interactive Swagger UI)",
    }


@app.get("/currencies")
def list_currencies():
    """Supported currencies. ``base_code`` is the currency all prices are defined in."""
    return PricingConfig().currencies.model_dump()


@app.get("/tiers")
def list_tiers(
    tier_count: int = Query(default=15, ge=0, le=MAX_TIER_COUNT),
    base_take_rate: float | None = Query(default=None, ge=0, le=1),
    currency: str | None = Query(default=None),
):
    """The Scale plan's tier ladder, with thresholds formatted in ``currency``."""
    overrides: dict[str, Any] = {"tier_count": tier_count}
    if base_take_rate is not None:
        overrides["scale"] = {"base_take_rate": base_take_rate}
    pricing = _build_pricing(overrides)
    code = _resolve_currency(pricing, currency)
    tiers = generate_scale_tiers(pricing.scale, pricing.tier_count, pricing.schedule)
    return {
        "currency": code,
        "tiers": [
            {
                **t.model_dump(),
                "threshold_formatted": _money(pricing, t.revenue_threshold, code),
                "take_rate_formatted": format_percentage(t.take_rate, 2),
            }
            for t in tiers
        ],
    }


@app.post("/quote/launch", response_model=QuoteResponse)
def quote_launch(req: QuoteRequest):
    """Launch plan: fixed monthly fee + flat share of revenue."""
    pricing, currency, revenue_base = _prepare_quote(req)
    result = calculate_launch_pricing(revenue_base, pricing.launch)
    return QuoteResponse(
        currency=currency,
        result=result.model_dump(),
        formatted={
            "total_monthly": _money(pricing, result.total_monthly, currency),
            "total_yearly": _money(pricing, result.total_yearly, currency),
            "effective_rate": format_percentage(result.effective_rate, 2),
        },
    )


@app.post("/quote/scale", response_model=QuoteResponse)
def quote_scale(req: QuoteRequest):
    """Scale plan: fixed + per-department fees + the tier's take rate on revenue."""
    pricing, currency, revenue_base = _prepare_quote(req)
    tiers = generate_scale_tiers(pricing.scale, pricing.tier_count, pricing.schedule)
    result = calculate_scale_pricing(revenue_base, req.department_count, pricing.scale, tiers)
    return QuoteResponse(
        currency=currency,
        result=result.model_dump(),
        formatted={
            "total_fixed_monthly": _money(pricing, result.total_fixed_monthly, currency),
            "total_yearly": _money(pricing, result.total_yearly, currency),
            "tier_take_rate": format_percentage(result.tier_take_rate, 2),
            "effective_rate": format_percentage(result.effective_rate, 2),
        },
    )


@app.post("/quote/compare", response_model=CompareResponse)
def quote_compare(req: QuoteRequest):
    """Price both plans and recommend the cheaper one."""
    pricing, currency, revenue_base = _prepare_quote(req)
    tiers = generate_scale_tiers(pricing.scale, pricing.tier_count, pricing.schedule)
    comparison = compare_pricing(
        revenue_base, req.department_count, pricing.launch, pricing.scale, tiers,
    )
    return CompareResponse(
        currency=currency,
        recommendation=comparison.recommendation,
        result=comparison.model_dump(),
        formatted={
            "launch_total_yearly": _money(pricing, comparison.launch.total_yearly, currency),
            "scale_total_yearly": _money(pricing, comparison.scale.total_yearly, currency),
            "savings_amount": _money(pricing, comparison.savings_amount, currency),
            "savings_percentage": format_percentage(comparison.savings_percentage, 1),
        },
    )


@app.post("/convert")
def convert(req: ConvertRequest):
    """Convert ``amount`` from the base currency into ``currency`` or back."""
    pricing = PricingConfig()
    code = _resolve_currency(pricing, req.currency)
    if req.direction == "from_base":
        amount = convert_from_base(req.amount, code, pricing.currencies)
        target = code
    else:
        amount = convert_to_base(req.amount, code, pricing.currencies)
        target = pricing.currencies.base_code
    return {
        "amount": amount,
        "currency": target,
        "formatted": format_currency(amount, target, max_fraction_digits=2, registry=pricing.currencies),
    }


# ═══════════════════════════════════════════════════════════════════════════
# CLI entry point
# ═══════════════════════════════════════════════════════════════════════════

def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def main():
    """Run the API server."""
    import uvicorn

    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("Starting Usage Pricing API on %s:%d", settings.host, settings.port)
    uvicorn.run(
        "usage_pricing.api.server:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
    )


if __name__ == "__main__":
    main()
