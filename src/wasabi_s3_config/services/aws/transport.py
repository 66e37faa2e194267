"""Default transport: SigV4 signing and HTTP through botocore."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from urllib.parse import quote, urlsplit, urlunsplit

from botocore.auth import S3SigV4Auth
from botocore.awsrequest import AWSRequest
from botocore.credentials import Credentials
from botocore.httpsession import URLLib3Session

from ...exceptions import OperationCancelled
from ...utils.errors import sanitize_dict
from ..s3.models import RequestDescriptor, TransportResponse

logger = logging.getLogger(__name__)


class BotocoreTransport:
    """Executes request descriptors with botocore's signer and HTTP session.

    No retries are performed. Cancellation is cooperative: when a cancel
    event is supplied the exchange runs on a worker thread and the caller
    stops waiting as soon as the event is set.
    """

    def __init__(
        self,
        endpoint: str,
        region: str,
        access_key: str | None = None,
        secret_key: str | None = None,
        session_token: str | None = None,
        path_style: bool = True,
        insecure_skip_verify: bool = False,
        connect_timeout: float = 10.0,
        read_timeout: float = 60.0,
        max_workers: int = 4,
        poll_interval: float = 0.05,
    ) -> None:
        """Initialize the transport.

        Args:
            endpoint: S3 endpoint URL
            region: Signing region
            access_key: Access key ID; anonymous requests when unset
            secret_key: Secret access key
            session_token: Optional session token for temporary credentials
            path_style: Use path-style addressing
            insecure_skip_verify: Skip TLS verification
            connect_timeout: Connect timeout in seconds
            read_timeout: Read timeout in seconds
            max_workers: Worker threads used for cancellable requests
            poll_interval: Seconds between cancellation checks
        """
        if "://" not in endpoint:
            endpoint = f"https://{endpoint}"
        self.endpoint = endpoint.rstrip("/")
        self.region = region
        self.path_style = path_style
        self.poll_interval = poll_interval

        self.credentials = None
        if access_key and secret_key:
            self.credentials = Credentials(access_key, secret_key, session_token)

        self.session = URLLib3Session(
            verify=not insecure_skip_verify,
            timeout=(connect_timeout, read_timeout),
        )
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="s3-config")

    def build_url(self, descriptor: RequestDescriptor) -> str:
        """Full request URL for a descriptor."""
        if self.path_style:
            return self.endpoint + descriptor.url_path

        scheme, netloc, base_path, _, _ = urlsplit(self.endpoint)
        path = base_path
        if descriptor.object_name:
            path += "/" + quote(descriptor.object_name, safe="/~")
        return urlunsplit(
            (scheme, f"{descriptor.bucket_name}.{netloc}", path or "/", descriptor.query_string, "")
        )

    def _prepare(self, descriptor: RequestDescriptor) -> AWSRequest:
        request = AWSRequest(
            method=descriptor.method,
            url=self.build_url(descriptor),
            data=descriptor.body or b"",
            headers=descriptor.all_headers,
        )
        if self.credentials is not None:
            S3SigV4Auth(self.credentials, "s3", self.region).add_auth(request)
        return request

    def _send(self, request: AWSRequest) -> TransportResponse:
        response = self.session.send(request.prepare())
        return TransportResponse(
            status_code=response.status_code,
            headers=dict(response.headers),
            body=response.content or b"",
            reason=getattr(response.raw, "reason", "") or "",
        )

    def execute(
        self,
        descriptor: RequestDescriptor,
        cancel_event: threading.Event | None = None,
    ) -> TransportResponse:
        """Send the request described by descriptor.

        Raises:
            OperationCancelled: If cancel_event is set before a response arrives
            botocore.exceptions.HTTPClientError: On connection failures
        """
        name = f"{descriptor.method} {descriptor.url_path}"
        if cancel_event is not None and cancel_event.is_set():
            raise OperationCancelled(name)

        request = self._prepare(descriptor)
        logger.debug(f"Sending {name} with headers {sanitize_dict(dict(request.headers))}")

        if cancel_event is None:
            return self._send(request)

        future: Future[TransportResponse] = self._executor.submit(self._send, request)
        while True:
            try:
                return future.result(timeout=self.poll_interval)
            except FutureTimeoutError:
                if cancel_event.is_set():
                    future.cancel()
                    raise OperationCancelled(name) from None

    def close(self) -> None:
        """Release pooled connections and worker threads."""
        self._executor.shutdown(wait=False, cancel_futures=True)
        self.session.close()
