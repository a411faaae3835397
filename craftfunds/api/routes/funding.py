"""Funding status and donation link endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from craftfunds.core.config import Settings, get_settings
from craftfunds.core.logging import get_logger
from craftfunds.schemas.funding import DonationLink, FundingReport, FundStatusView
from craftfunds.services.funding.presenter import FundStatusPresenter, ViewContext
from craftfunds.services.funding.service import FundingService, get_funding_service

logger = get_logger(__name__)

router = APIRouter()


@router.get("/fund", response_model=FundStatusView)
async def get_fund_status(
    context: ViewContext = Query(
        ViewContext.COMMAND,
        description="'command' for /fund, 'join' for the greeting on login",
    ),
    service: FundingService = Depends(get_funding_service),
    settings: Settings = Depends(get_settings),
) -> FundStatusView:
    """Funding summary with goal messages and the unspent-donation breakdown.

    Always answers 200: failures come back as a degraded report with an
    error headline.
    """
    logger.info("Funding status requested (context=%s)", context.value)

    report = await service.build_report()
    return FundStatusPresenter(settings).present(report, context)


@router.get("/fund/report", response_model=FundingReport)
async def get_funding_report(
    service: FundingService = Depends(get_funding_service),
) -> FundingReport:
    """The raw reconciliation report, without presentation."""
    return await service.build_report()


@router.get("/donate", response_model=DonationLink)
def get_donation_link(
    settings: Settings = Depends(get_settings),
) -> DonationLink:
    """Link players can click to donate."""
    url = settings.donation_url.strip()
    if not url:
        raise HTTPException(status_code=503, detail="Donation link not configured")

    logger.info("Donation link requested")
    return DonationLink(
        label="Click here to donate!",
        url=url,
        hover_text="Click to Open Link!",
    )
