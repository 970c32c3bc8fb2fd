"""Report upload: Azure Blob Storage, S3 or GCS, returning a time-limited read link."""

from __future__ import annotations

import os
import time
from datetime import datetime, timedelta, timezone
from typing import Any

import boto3
from azure.core.credentials import TokenCredential
from azure.core.exceptions import AzureError
from azure.identity import DefaultAzureCredential, ClientSecretCredential
from azure.storage.blob import (
    BlobSasPermissions, BlobServiceClient, ContentSettings, generate_blob_sas,
)
from botocore.exceptions import BotoCoreError, ClientError
from google.api_core.exceptions import GoogleAPIError
from google.auth.exceptions import GoogleAuthError
from google.cloud import storage

from tfs.exceptions import UploadError

CONTENT_TYPE = "text/html"
DEFAULT_EXPIRATION = timedelta(minutes=15)


def report_key(now: float | None = None) -> str:
    """Object name for an uploaded report, e.g. tfs-plan-1700000000.html."""
    return f"tfs-plan-{int(time.time() if now is None else now)}.html"


class AzureBlobUploader:
    """Upload to a blob container and sign a read-only user delegation SAS."""

    provider = "azure"

    def __init__(self, storage_account: str, container: str,
                 client_id: str | None = None, client_secret: str | None = None,
                 tenant_id: str | None = None) -> None:
        credential: TokenCredential
        if client_id and client_secret and tenant_id:
            credential = ClientSecretCredential(tenant_id, client_id, client_secret)
        else:
            credential = DefaultAzureCredential()
        self.storage_account = storage_account
        self.container = container
        account_url = f"https://{storage_account}.blob.core.windows.net"
        try:
            self._blob_service = BlobServiceClient(account_url, credential=credential)
        except (AzureError, ValueError) as e:
            raise UploadError(str(e), provider=self.provider)

    def upload(self, name: str, data: bytes, expiration: timedelta = DEFAULT_EXPIRATION) -> str:
        blob_client = self._blob_service.get_blob_client(self.container, name)
        try:
            blob_client.upload_blob(
                data, overwrite=True,
                content_settings=ContentSettings(content_type=CONTENT_TYPE),
            )
            start = datetime.now(timezone.utc)
            expiry = start + expiration
            delegation_key = self._blob_service.get_user_delegation_key(start, expiry)
            sas = generate_blob_sas(
                account_name=self.storage_account,
                container_name=self.container,
                blob_name=name,
                user_delegation_key=delegation_key,
                permission=BlobSasPermissions(read=True),
                start=start,
                expiry=expiry,
            )
        except AzureError as e:
            raise UploadError(str(e), provider=self.provider)
        return f"{blob_client.url}?{sas}"


class S3Uploader:
    """Upload with put_object and presign a get_object URL."""

    provider = "s3"

    def __init__(self, bucket: str, region: str | None = None) -> None:
        self.bucket = bucket
        try:
            self._client = boto3.client("s3", region_name=region) if region else boto3.client("s3")
        except BotoCoreError as e:
            raise UploadError(str(e), provider=self.provider)

    def upload(self, name: str, data: bytes, expiration: timedelta = DEFAULT_EXPIRATION) -> str:
        try:
            self._client.put_object(
                Bucket=self.bucket, Key=name, Body=data, ContentType=CONTENT_TYPE,
            )
            url: str = self._client.generate_presigned_url(
                "get_object",
                Params={"Bucket": self.bucket, "Key": name},
                ExpiresIn=int(expiration.total_seconds()),
            )
        except (BotoCoreError, ClientError) as e:
            raise UploadError(str(e), provider=self.provider)
        return url


class GCSUploader:
    """Upload to a GCS bucket and sign a v4 GET URL.

    Signing needs credentials that can sign (a service account key or the
    IAM signBlob permission); plain user credentials fail with UploadError.
    """

    provider = "gcs"

    def __init__(self, bucket: str) -> None:
        self.bucket = bucket
        try:
            self._client = storage.Client()
        except (GoogleAPIError, GoogleAuthError) as e:
            raise UploadError(str(e), provider=self.provider)

    def upload(self, name: str, data: bytes, expiration: timedelta = DEFAULT_EXPIRATION) -> str:
        blob = self._client.bucket(self.bucket).blob(name)
        try:
            blob.upload_from_string(data, content_type=CONTENT_TYPE)
            url: str = blob.generate_signed_url(version="v4", expiration=expiration, method="GET")
        except (GoogleAPIError, GoogleAuthError, AttributeError) as e:
            raise UploadError(str(e), provider=self.provider)
        return url


def get_uploader(args: Any) -> AzureBlobUploader | S3Uploader | GCSUploader | None:
    """Create the uploader selected by CLI args or env vars, or None for no upload."""
    azure_account = getattr(args, "azure_storage_account", None) or os.environ.get("TFS_AZURE_STORAGE_ACCOUNT")
    s3_bucket = getattr(args, "s3_bucket", None) or os.environ.get("TFS_S3_BUCKET")
    gcs_bucket = getattr(args, "gcs_bucket", None) or os.environ.get("TFS_GCS_BUCKET")

    selected = [name for name, value in
                (("azure", azure_account), ("s3", s3_bucket), ("gcs", gcs_bucket)) if value]
    if len(selected) > 1:
        raise ValueError(f"Only one upload target may be set, got: {', '.join(selected)}")

    if azure_account:
        container = getattr(args, "azure_container", None) or os.environ.get("TFS_AZURE_CONTAINER")
        if not container:
            raise ValueError(
                "Azure upload requires --azure-container or TFS_AZURE_CONTAINER"
            )
        return AzureBlobUploader(
            storage_account=azure_account,
            container=container,
            client_id=getattr(args, "client_id", None) or os.environ.get("AZURE_CLIENT_ID"),
            client_secret=getattr(args, "client_secret", None) or os.environ.get("AZURE_CLIENT_SECRET"),
            tenant_id=getattr(args, "tenant_id", None) or os.environ.get("AZURE_TENANT_ID"),
        )
    if s3_bucket:
        region = getattr(args, "region", None) or os.environ.get("AWS_REGION")
        return S3Uploader(s3_bucket, region=region)
    if gcs_bucket:
        return GCSUploader(gcs_bucket)
    return None
