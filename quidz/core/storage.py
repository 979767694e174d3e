"""
File uploads for avatars, documents, project images and skill proofs.
Files go to Supabase Storage buckets, or to S3 when AWS credentials are configured.
Every upload returns the public URL that is then stored on the owning row.
"""
import logging
import os
import uuid
from typing import Optional

from fastapi import HTTPException, UploadFile
from supabase import Client

from quidz.config import settings
from quidz.core.s3_storage import S3Storage

logger = logging.getLogger(__name__)

AVATARS = "avatars"
DOCUMENTS = "documents"
PROJECT_IMAGES = "project-images"
SKILL_PROOFS = "skill-proofs"

BUCKETS = (AVATARS, DOCUMENTS, PROJECT_IMAGES, SKILL_PROOFS)


def build_object_path(owner_id: str, filename: Optional[str]) -> str:
    """<owner>/<random>.<ext>; the uploaded file name only contributes its extension."""
    file_extension = os.path.splitext(filename or "")[1].lower()
    return f"{owner_id}/{uuid.uuid4().hex}{file_extension}"


class FileStorage:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.s3_storage = None
        if settings.s3_configured:
            try:
                self.s3_storage = S3Storage()
            except Exception as e:
                logger.warning(f"S3 storage initialization failed ({str(e)}), will use Supabase Storage")
                self.s3_storage = None

    async def upload(self, bucket: str, owner_id: str, file: UploadFile, image_only: bool = False) -> str:
        """Upload an UploadFile into bucket and return its public URL"""
        if bucket not in BUCKETS:
            raise HTTPException(status_code=400, detail=f"Unknown bucket: {bucket}")
        content_type = file.content_type or "application/octet-stream"
        if image_only and not content_type.startswith("image/"):
            raise HTTPException(status_code=400, detail="Only image files are accepted")

        file_content = await file.read()
        if not file_content:
            raise HTTPException(status_code=400, detail="Uploaded file is empty")
        if len(file_content) > settings.max_upload_bytes:
            raise HTTPException(status_code=413, detail="Uploaded file is too large")

        path = build_object_path(owner_id, file.filename)
        return self.upload_bytes(bucket, path, file_content, content_type)

    def upload_bytes(self, bucket: str, path: str, file_content: bytes, content_type: str) -> str:
        if self.s3_storage:
            try:
                return self.s3_storage.put(bucket, path, file_content, content_type)
            except Exception as e:
                logger.error(f"S3 upload failed: {str(e)}")
                raise HTTPException(status_code=500, detail=f"Failed to upload to S3: {str(e)}")

        try:
            self.supabase.storage.from_(bucket).upload(
                path,
                file_content,
                file_options={"content-type": content_type}
            )
            public_url = self.supabase.storage.from_(bucket).get_public_url(path)
            logger.info(f"Uploaded to Supabase Storage: {bucket}/{path}")
            return public_url
        except Exception as e:
            logger.error(f"Supabase Storage upload failed: {str(e)}")
            raise HTTPException(status_code=500, detail=f"Failed to upload to storage: {str(e)}")
