import logging
import traceback

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import HTMLResponse

from tailview.api.dtos import InterfaceResponse, PeerStatusResponse, StatusResponse
from tailview.config.settings import config
from tailview.status.models import StatusView
from tailview.status.poller import StatusPoller
from tailview.status.render import render_page
from tailview.status.view import TailscaleStatusView

router = APIRouter(prefix="/status", tags=["Status"])
logger = logging.getLogger(__name__)


def get_poller(request: Request) -> StatusPoller:
    """The app's poller; created unstarted when the app has no lifespan."""
    poller = getattr(request.app.state, "poller", None)
    if poller is None:
        view = getattr(request.app.state, "view", None) or TailscaleStatusView.from_config(config)
        poller = StatusPoller(view, interval=config.poll_interval)
        request.app.state.poller = poller
    return poller


async def current_status(request: Request) -> StatusView:
    """Latest polled status; concurrent requests before the first tick share one load."""
    return await get_poller(request).ensure_latest()


@router.get("", response_model=StatusResponse)
async def get_status(request: Request):
    """Interface statistics and peer list."""
    try:
        return StatusResponse(data=await current_status(request))
    except Exception as e:
        logger.error(f"Error loading status: {e}\n{traceback.format_exc()}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/interface", response_model=InterfaceResponse)
async def get_interface(request: Request):
    try:
        status = await current_status(request)
        if status.interface_info is None:
            return InterfaceResponse(message="No interface online.")
        return InterfaceResponse(data=status.interface_info)
    except Exception as e:
        logger.error(f"Error loading interface info: {e}\n{traceback.format_exc()}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/peers", response_model=PeerStatusResponse)
async def get_peers(request: Request):
    try:
        status = await current_status(request)
        return PeerStatusResponse(data=status.peer_status)
    except Exception as e:
        logger.error(f"Error loading peer status: {e}\n{traceback.format_exc()}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/view", response_class=HTMLResponse)
async def get_status_page(request: Request):
    """The status page, reloading itself at the poll interval."""
    try:
        status = await current_status(request)
        return HTMLResponse(render_page(status, refresh=config.poll_interval))
    except Exception as e:
        logger.error(f"Error rendering status page: {e}\n{traceback.format_exc()}")
        raise HTTPException(status_code=500, detail=str(e))
