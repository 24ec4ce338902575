"""boto3 object-store transport."""

from pathlib import Path
from typing import Any

import boto3
from boto3.exceptions import S3UploadFailedError
from botocore.exceptions import BotoCoreError, ClientError

from ..core.errors import BackendUnavailableError
from ..core.models import ObjectInfo


class Boto3Transport:
    """S3 implementation of ObjectTransportPort using boto3.

    Attributes:
        client: boto3 S3 client
    """

    def __init__(
        self,
        endpoint_url: str | None = None,
        region: str | None = None,
        profile: str | None = None,
        client: Any = None,
    ):
        """Initialize the transport.

        Args:
            endpoint_url: Custom S3 endpoint, e.g. for MinIO
            region: AWS region
            profile: AWS profile name from the shared credentials file
            client: Preconfigured boto3 client, skips session creation
        """
        if client is None:
            session = boto3.Session(profile_name=profile, region_name=region)
            client = session.client("s3", endpoint_url=endpoint_url)
        self.client = client

    def list_objects(self, bucket: str, prefix: str) -> list[ObjectInfo]:
        objects = []
        try:
            paginator = self.client.get_paginator("list_objects_v2")
            for page in paginator.paginate(Bucket=bucket, Prefix=prefix):
                for obj in page.get("Contents", []):
                    objects.append(
                        ObjectInfo(
                            key=obj["Key"],
                            size=obj["Size"],
                            last_modified=obj["LastModified"],
                        )
                    )
        except (BotoCoreError, ClientError) as e:
            raise BackendUnavailableError(f"Failed to list s3://{bucket}/{prefix}: {e}") from e
        return objects

    def download(self, bucket: str, key: str, dest: Path) -> None:
        dest.parent.mkdir(parents=True, exist_ok=True)
        try:
            self.client.download_file(bucket, key, str(dest))
        except (BotoCoreError, ClientError) as e:
            raise BackendUnavailableError(f"Failed to download s3://{bucket}/{key}: {e}") from e

    def upload(self, src: Path, bucket: str, key: str) -> None:
        try:
            self.client.upload_file(str(src), bucket, key)
        except (BotoCoreError, ClientError, S3UploadFailedError) as e:
            raise BackendUnavailableError(f"Failed to upload s3://{bucket}/{key}: {e}") from e

    def delete(self, bucket: str, key: str) -> None:
        try:
            self.client.delete_object(Bucket=bucket, Key=key)
        except (BotoCoreError, ClientError) as e:
            raise BackendUnavailableError(f"Failed to delete s3://{bucket}/{key}: {e}") from e
