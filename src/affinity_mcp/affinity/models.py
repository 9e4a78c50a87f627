"""Request and result models of the Affinity actions."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class AffinityApp(str, Enum):
    """Affinity applications an action can target."""

    PHOTO = "Photo"
    DESIGNER = "Designer"
    PUBLISHER = "Publisher"

    @property
    def app_name(self) -> str:
        """Application name as known to the operating system."""
        return f"Affinity {self.value}"


class ExportFormat(str, Enum):
    """Export file formats."""

    PDF = "pdf"
    PNG = "png"
    JPG = "jpg"
    TIFF = "tiff"
    SVG = "svg"


class OpenFileRequest(BaseModel):
    path: str = Field(description="Path of the file to open (absolute or relative).")
    app: Optional[AffinityApp] = Field(
        default=None, description="Affinity app to open the file in. Inferred from the file extension when omitted."
    )


class CreateNewRequest(BaseModel):
    app: AffinityApp = Field(description="Affinity app to create the document in.")
    width: Optional[int] = Field(default=None, ge=1, description="Document width in pixels. Defaults to 1920.")
    height: Optional[int] = Field(default=None, ge=1, description="Document height in pixels. Defaults to 1080.")


class ExportRequest(BaseModel):
    """One export of the front document."""

    path: str = Field(description="Destination file path.")
    format: ExportFormat = Field(description="Export format.")
    quality: Optional[int] = Field(
        default=None, ge=1, le=100, description="Quality from 1 to 100 for image formats. Defaults to 90."
    )


class ApplyFilterRequest(BaseModel):
    filter_name: str = Field(description="Filter to apply, e.g. blur, sharpen, desaturate.")
    intensity: Optional[int] = Field(default=None, ge=0, le=100, description="Intensity from 0 to 100.")


class DocumentRequest(BaseModel):
    """Request of actions that act on the front document and take no input."""

    pass


class DrawArtworkRequest(BaseModel):
    output_path: Optional[str] = Field(
        default=None, description="Where to write the SVG. Defaults to a file in the temp directory."
    )
    width: Optional[int] = Field(default=None, ge=1, description="Canvas width in pixels. Defaults to 800.")
    height: Optional[int] = Field(default=None, ge=1, description="Canvas height in pixels. Defaults to 800.")


class OpenFileResult(BaseModel):
    opened: bool
    app: str
    path: str


class CreateNewResult(BaseModel):
    created: bool
    app: str


class ExportResult(BaseModel):
    exported: bool
    path: str


class ApplyFilterResult(BaseModel):
    applied: bool
    filter_name: str


class ActiveDocumentInfo(BaseModel):
    is_open: bool
    name: Optional[str] = None
    path: Optional[str] = None


class CloseDocumentResult(BaseModel):
    closed: bool


class DrawArtworkResult(BaseModel):
    created: bool
    file_path: str
    app: str
