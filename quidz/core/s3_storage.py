import boto3
from botocore.exceptions import ClientError
from quidz.config import settings
import logging

logger = logging.getLogger(__name__)


class S3Storage:
    """
    S3 stand-in for the Supabase Storage buckets.
    All app buckets share one S3 bucket; the app bucket name becomes the first key segment.
    """

    def __init__(self):
        if not settings.s3_configured:
            raise ValueError("S3 upload needs aws_access_key_id, aws_secret_access_key and s3_bucket_name")

        self.client = boto3.client(
            "s3",
            aws_access_key_id=settings.aws_access_key_id,
            aws_secret_access_key=settings.aws_secret_access_key,
            region_name=settings.aws_region,
        )
        self.bucket_name = settings.s3_bucket_name
        base = settings.s3_public_base_url or f"https://{self.bucket_name}.s3.{settings.aws_region}.amazonaws.com"
        self.public_base_url = base.rstrip("/")

    @staticmethod
    def object_key(app_bucket: str, path: str) -> str:
        return f"{app_bucket}/{path.lstrip('/')}"

    def public_url(self, key: str) -> str:
        return f"{self.public_base_url}/{key}"

    def put(self, app_bucket: str, path: str, content: bytes, content_type: str) -> str:
        """Store an object and return the URL saved on the owning row"""
        key = self.object_key(app_bucket, path)
        try:
            self.client.put_object(Bucket=self.bucket_name, Key=key, Body=content, ContentType=content_type)
        except ClientError as e:
            logger.error(f"S3 put_object failed for {key}: {e}")
            raise
        logger.info(f"Stored s3://{self.bucket_name}/{key}")
        return self.public_url(key)
