from fastapi import FastAPI

from label_owners import __version__
from label_owners.core.config import config
from label_owners.core.utils.logging import configure_logging
from label_owners.integrations.github import github_client
from label_owners.webhooks.dispatcher import WebhookDispatcher, build_handler_table
from label_owners.webhooks.router import router as webhook_router

# --- Application Setup ---

configure_logging(config.logging)

app = FastAPI(
    title="Label Code Owners",
    description="Assigns CODEOWNERS to issues when a label is applied.",
    version=__version__,
)

# --- Include Routers ---

app.include_router(webhook_router, prefix="/webhooks", tags=["GitHub Webhooks"])

# --- Root Endpoint ---


@app.get("/", tags=["Health Check"])
async def read_root():
    """A simple health check endpoint to confirm the service is running."""
    return {"status": "ok", "message": "Label code owners is running."}


# --- Application Lifecycle ---


@app.on_event("startup")
async def startup_event():
    """Build the handler registration table."""
    config.validate()
    app.state.dispatcher = WebhookDispatcher(build_handler_table(github_client))


@app.on_event("shutdown")
async def shutdown_event():
    """Close the GitHub client session."""
    await github_client.close()
