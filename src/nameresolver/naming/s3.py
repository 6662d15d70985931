from __future__ import annotations

import json
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from nameresolver.naming.base import (
    SEPARATOR,
    NamingError,
    NamingRegistry,
    normalize_context,
    normalize_name,
)
from nameresolver.utils import get_logger

logger = get_logger(__name__)

_MISSING_CODES = {"NoSuchKey", "404", "NotFound"}


class S3Registry(NamingRegistry):
    """
    Bindings stored as JSON documents in an S3 bucket, one object per name.
    Name ``a/b`` lives at key ``<prefix>a/b``.
    Requires AWS credentials in environment unless a client is injected.
    """

    def __init__(
        self,
        bucket: str,
        prefix: str = "",
        *,
        client: Any | None = None,
        region_name: str | None = None,
        endpoint_url: str | None = None,
    ) -> None:
        if not bucket:
            raise ValueError("bucket must not be empty")
        self.bucket = bucket
        self.prefix = normalize_context(prefix)
        if self.prefix:
            self.prefix += SEPARATOR
        self._client = client or boto3.client(
            "s3", region_name=region_name, endpoint_url=endpoint_url
        )

    def _key(self, name: str) -> str:
        return self.prefix + normalize_name(name)

    def lookup(self, name: str) -> Any | None:
        key = self._key(name)
        try:
            response = self._client.get_object(Bucket=self.bucket, Key=key)
            body = response["Body"].read()
        except ClientError as e:
            code = str(e.response.get("Error", {}).get("Code", ""))
            if code in _MISSING_CODES:
                return None
            raise NamingError(
                f"Could not read s3://{self.bucket}/{key}: {code or e}", name=name
            ) from e
        except BotoCoreError as e:
            raise NamingError(f"Could not reach S3 for {key}: {e}", name=name) from e
        try:
            return json.loads(body)
        except ValueError as e:
            raise NamingError(
                f"Binding at s3://{self.bucket}/{key} is not valid JSON",
                code="EDECODE",
                name=name,
            ) from e

    def bind(self, name: str, value: Any) -> None:
        key = self._key(name)
        try:
            payload = json.dumps(value)
        except (TypeError, ValueError) as e:
            raise NamingError(
                f"Value for {name} is not JSON serializable", code="EENCODE", name=name
            ) from e
        self._call("put_object", name, Bucket=self.bucket, Key=key, Body=payload.encode("utf-8"))
        logger.debug(f"Bound {name} at s3://{self.bucket}/{key}")

    def unbind(self, name: str) -> None:
        self._call("delete_object", name, Bucket=self.bucket, Key=self._key(name))

    def list(self, context: str = "") -> list[str]:
        ctx = normalize_context(context)
        prefix = self.prefix + (ctx + SEPARATOR if ctx else "")
        names: list[str] = []
        try:
            paginator = self._client.get_paginator("list_objects_v2")
            for page in paginator.paginate(
                Bucket=self.bucket, Prefix=prefix, Delimiter=SEPARATOR
            ):
                for obj in page.get("Contents", []):
                    names.append(obj["Key"][len(self.prefix):])
        except (ClientError, BotoCoreError) as e:
            raise NamingError(
                f"Could not list s3://{self.bucket}/{prefix}: {e}", name=context
            ) from e
        return sorted(names)

    def _call(self, operation: str, name: str, **params: Any) -> Any:
        try:
            return getattr(self._client, operation)(**params)
        except (ClientError, BotoCoreError) as e:
            raise NamingError(f"S3 {operation} failed for {name}: {e}", name=name) from e

    def close(self) -> None:
        close = getattr(self._client, "close", None)
        if close is not None:
            close()
