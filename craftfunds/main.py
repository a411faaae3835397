"""CraftFunds server funding service - Main Application."""

from fastapi import FastAPI

from craftfunds.api.routes import funding
from craftfunds.core.config import get_settings
from craftfunds.core.logging import setup_logging

logger = setup_logging(get_settings().log_level)

tags_metadata = [
    {
        "name": "Health",
        "description": "Service health and readiness checks.",
    },
    {
        "name": "Funding",
        "description": (
            "Server funding status: donations reconciled against spending, "
            "oldest donation first, plus the donation link."
        ),
    },
]


app = FastAPI(
    title="CraftFunds",
    description=(
        "## Community Server Funding API\n\n"
        "Reports how much donated money is still unspent after covering "
        "the server's running costs.\n\n"
        "### How the numbers work\n"
        "- Spending is taken from the **oldest** donations first.\n"
        "- A donation partly covered by spending shows only its remainder.\n"
        "- Net amount = total donations - total spending.\n"
        "- Each full funding goal of net amount covers one period of costs.\n\n"
        "### Quick Start\n"
        "```bash\n"
        "curl /api/v1/fund\n"
        "curl '/api/v1/fund?context=join'\n"
        "curl /api/v1/donate\n"
        "```\n"
    ),
    version="1.0.0",
    openapi_tags=tags_metadata,
    license_info={
        "name": "MIT",
    },
    docs_url="/docs",
    redoc_url="/redoc",
)

app.include_router(funding.router, prefix="/api/v1", tags=["Funding"])

logger.info("CraftFunds API ready - routes registered")


@app.get("/health", tags=["Health"])
def health_check():
    """Health check endpoint.

    Returns a simple JSON object confirming the service is running.
    """
    return {"status": "healthy", "service": "craftfunds"}
