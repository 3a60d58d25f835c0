import logging
from pathlib import Path

import httpx
from fastapi import HTTPException, status

from zuhri.core.config import settings
from zuhri.services.cloudinary import cloudinary_service

logger = logging.getLogger(__name__)


class CertificateStorage:
    """Keeps rendered certificate PNGs on Cloudinary when configured, on local disk otherwise."""

    def save(self, png_bytes: bytes, name: str) -> str:
        if settings.cloudinary_enabled:
            url = cloudinary_service.upload_certificate_image(png_bytes, public_id=name)
            logger.info(f"Uploaded certificate image {name} to Cloudinary")
            return url

        directory = Path(settings.CERTIFICATE_STORAGE_DIR)
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / f"{name}.png"
        path.write_bytes(png_bytes)
        logger.info(f"Stored certificate image {name} at {path}")
        return path.as_posix()

    def load(self, image_url: str) -> bytes:
        if image_url.startswith(("http://", "https://")):
            try:
                response = httpx.get(image_url, timeout=30.0)
                response.raise_for_status()
            except httpx.HTTPError as e:
                logger.error(f"Failed to fetch certificate image {image_url}: {e}")
                raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Certificate image unavailable.")
            return response.content

        path = Path(image_url)
        if not path.is_file():
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Certificate image file not found.")
        return path.read_bytes()

certificate_storage = CertificateStorage()
