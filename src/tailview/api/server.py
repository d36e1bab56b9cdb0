from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tailview.api.routers import info, status
from tailview.config.settings import config
from tailview.status.poller import StatusPoller
from tailview.status.view import TailscaleStatusView
from tailview.version import get_version


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.view = TailscaleStatusView.from_config(config)
    app.state.poller = StatusPoller(app.state.view, interval=config.poll_interval)
    app.state.poller.start()
    try:
        yield
    finally:
        app.state.poller.stop()


app = FastAPI(
    title="Tailview API",
    description="Read-only status of the Tailscale interface and its peers.",
    version=get_version(),
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(info.router)
app.include_router(status.router)
