from typing import Optional

from pydantic import BaseModel

from tailview.status.models import InterfaceInfo, PeerStatus, StatusView


class BaseResponse(BaseModel):
    status: str = "success"
    message: Optional[str] = None


class ErrorResponse(BaseResponse):
    status: str = "error"


class VersionInfo(BaseModel):
    version: str


class VersionResponse(BaseResponse):
    data: VersionInfo


class StatusResponse(BaseResponse):
    data: StatusView


class InterfaceResponse(BaseResponse):
    data: Optional[InterfaceInfo] = None


class PeerStatusResponse(BaseResponse):
    data: PeerStatus
