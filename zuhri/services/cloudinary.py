from zuhri.core.config import settings
import cloudinary
import cloudinary.uploader

cloudinary.config(
    cloud_name=settings.CLOUDINARY_CLOUD_NAME,
    api_key=settings.CLOUDINARY_API_KEY,
    api_secret=settings.CLOUDINARY_API_SECRET,
)

class CloudinaryService:

    def upload_certificate_image(self, file: bytes, public_id: str) -> str:
        result = cloudinary.uploader.upload(
            file,
            resource_type="image",
            folder="certificates",
            public_id=public_id,
            format="png",
            overwrite=True,
        )
        return result["secure_url"]

cloudinary_service = CloudinaryService()
