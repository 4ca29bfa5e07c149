"""HTTP client for the cluster admin gateway."""

import time
import uuid
from typing import Optional

import httpx
from pydantic import ValidationError

from common.exceptions import (
    CreateFailedError,
    DispatchError,
    ParentNotFoundError,
    SessionError,
)
from common.logging_config import get_logger
from common.params import ParameterSpec
from common.types import Ack, Attributes, Credential, FilesystemIdentity, ObjectRef, ServerAddress
from sysint.config import Config
from sysint.schemas import (
    AttrPayload,
    CredentialPayload,
    ErrorResponse,
    LookupRequest,
    LookupResponse,
    MkdirRequest,
    MkdirResponse,
    ParamPayload,
    ServerRosterResponse,
    SetParamRequest,
    SetParamResponse,
)

logger = get_logger(__name__)


ERROR_MESSAGES = {
    'ENOENT': 'No such file or directory',
    'ENOTDIR': 'Not a directory',
    'EEXIST': 'File exists',
    'EACCES': 'Permission denied',
    'EPERM': 'Operation not permitted',
    'EINVAL': 'Invalid argument',
    'ENAMETOOLONG': 'File name too long',
    'EHOSTDOWN': 'Server is down',
    'ETIMEDOUT': 'Server request timed out',
    'ENOSPC': 'No space left on device',
    'UNKNOWN_SERVER': 'Server is not part of this filesystem',
}

STATUS_MESSAGES = {
    400: 'Bad request',
    401: 'Not authenticated',
    403: 'Access forbidden',
    404: 'Not found',
    409: 'Conflict',
    500: 'Server error',
    502: 'Bad gateway',
    503: 'Service unavailable',
    504: 'Gateway timeout',
}


def credential_payload(credential: Credential) -> CredentialPayload:
    return CredentialPayload(
        user_id=credential.user_id,
        group_ids=list(credential.group_ids),
        issuer=credential.issuer,
        expires_at=credential.expires_at,
    )


def attr_payload(attr: Attributes) -> AttrPayload:
    return AttrPayload(
        owner=attr.owner,
        group=attr.group,
        perms=attr.perms,
        atime=attr.atime,
        mtime=attr.mtime,
        ctime=attr.ctime,
        mask=attr.mask_names(),
    )


class ClusterClient:
    """HTTP client for the cluster gateway with retry logic for read requests."""

    def __init__(self, config: Config):
        """
        Initialize cluster client.

        Args:
            config: Configuration instance
        """
        self.config = config
        self.session = httpx.Client(
            base_url=config.get_base_url(),
            timeout=config.get_timeout()
        )
        self.request_id = None
        logger.debug(f"Initialized ClusterClient [base_url={config.get_base_url()}]")

    def _request_with_retry(
        self,
        method: str,
        endpoint: str,
        max_retries: Optional[int] = None,
        **kwargs
    ) -> httpx.Response:
        """
        Make HTTP request with retry logic on 5xx errors and network failures.

        Args:
            method: HTTP method (GET, POST, etc.)
            endpoint: API endpoint path
            max_retries: Max retry attempts (uses config default if None, 0 for mutations)
            **kwargs: Additional arguments to pass to httpx request

        Returns:
            HTTP response object

        Raises:
            ConnectionError: If max retries exceeded or connection fails
        """
        retry_config = self.config.get_retry_config()
        max_retries = max_retries if max_retries is not None else retry_config['max_retries']
        backoff = retry_config['retry_backoff_multiplier']

        last_exception = None

        self.request_id = str(uuid.uuid4())
        kwargs.setdefault('headers', {})
        kwargs['headers']['X-Request-ID'] = self.request_id

        logger.debug(f"Making request: {method} {endpoint} [request_id={self.request_id}]")

        for attempt in range(max_retries + 1):
            try:
                response = self.session.request(method, endpoint, **kwargs)

                logger.debug(
                    f"Response received: {method} {endpoint} status={response.status_code} [request_id={self.request_id}]"
                )

                if 400 <= response.status_code < 500:
                    logger.warning(
                        f"Client error: {method} {endpoint} status={response.status_code} [request_id={self.request_id}]"
                    )
                    return response

                if response.status_code >= 500 and attempt < max_retries:
                    delay = backoff ** attempt
                    logger.warning(
                        f"Server error (attempt {attempt + 1}/{max_retries + 1}): "
                        f"{method} {endpoint} status={response.status_code}, retrying in {delay}s [request_id={self.request_id}]"
                    )
                    time.sleep(delay)
                    continue

                return response

            except httpx.TransportError as e:
                last_exception = e
                if attempt < max_retries:
                    delay = backoff ** attempt
                    logger.warning(
                        f"Network error (attempt {attempt + 1}/{max_retries + 1}): "
                        f"{method} {endpoint} error={type(e).__name__}, retrying in {delay}s [request_id={self.request_id}]"
                    )
                    time.sleep(delay)
                    continue
                logger.error(
                    f"Network error (max retries exceeded): {method} {endpoint} error={e} [request_id={self.request_id}]"
                )

        if isinstance(last_exception, httpx.TimeoutException):
            raise ConnectionError("Request timed out. Cluster gateway may be overloaded.")
        if isinstance(last_exception, httpx.ConnectError):
            raise ConnectionError("Cannot connect to cluster gateway. Is it running?")
        raise ConnectionError(f"Connection to cluster gateway failed: {last_exception}")

    def _error_details(self, response: httpx.Response) -> tuple[str, str]:
        """
        Map a failed response to (code, user-friendly message).

        Args:
            response: HTTP response object

        Returns:
            Tuple of error code and message
        """
        try:
            error = ErrorResponse.model_validate(response.json())
            detail, code = error.detail, error.code
        except (ValueError, ValidationError):
            detail = response.text if response.text else 'Unknown error'
            code = 'UNKNOWN'

        if code in ERROR_MESSAGES:
            return code, ERROR_MESSAGES[code]

        message = STATUS_MESSAGES.get(response.status_code, detail)
        return code, f"{message} (Code: {code})" if code != 'UNKNOWN' else message

    def _decode(self, schema, response: httpx.Response):
        """
        Validate a successful response body against its schema.

        Raises:
            ValueError: If the body is not JSON or does not match the schema
        """
        try:
            return schema.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.error(f"Malformed {schema.__name__} from gateway [request_id={self.request_id}]: {e}")
            raise ValueError(f"malformed response from cluster gateway ({schema.__name__})") from e

    def get_server_roster(self, fs: FilesystemIdentity) -> ServerRosterResponse:
        """
        Fetch the servers configured for a filesystem.

        Raises:
            SessionError: If the gateway cannot be reached or returns an error
        """
        try:
            response = self._request_with_retry(
                'GET',
                f'/filesystems/{fs.fs_name}/servers',
                params={'config_server': fs.config_server},
            )
        except ConnectionError as e:
            raise SessionError(f"cannot load server configuration for {fs}: {e}")

        if response.status_code != 200:
            code, message = self._error_details(response)
            raise SessionError(f"cannot load server configuration for {fs}: {message}", code)

        try:
            return self._decode(ServerRosterResponse, response)
        except ValueError as e:
            raise SessionError(f"cannot load server configuration for {fs}: {e}")

    def _set_param(self, endpoint: str, target: str, request: SetParamRequest) -> Ack:
        try:
            response = self._request_with_retry(
                'POST',
                endpoint,
                max_retries=0,
                json=request.model_dump(),
            )
        except ConnectionError as e:
            raise DispatchError(str(e), target)

        if response.status_code != 200:
            code, message = self._error_details(response)
            raise DispatchError(message, target, code)

        try:
            ack = self._decode(SetParamResponse, response)
        except ValueError as e:
            raise DispatchError(str(e), target)
        logger.info(f"Set {request.param.kind} on {target}: status={ack.status} servers={ack.servers}")
        return Ack(target=target, servers=ack.servers)

    def setparam_single(
        self,
        fs: FilesystemIdentity,
        credential: Credential,
        param: ParameterSpec,
        server: ServerAddress,
    ) -> Ack:
        """
        Set a parameter on one validated server.

        Raises:
            DispatchError: If the request fails
        """
        request = SetParamRequest(
            fs_name=fs.fs_name,
            config_server=fs.config_server,
            credential=credential_payload(credential),
            param=ParamPayload(**param.to_wire()),
            server=server.uri,
        )
        return self._set_param('/mgmt/setparam/single', server.uri, request)

    def setparam_all(
        self,
        fs: FilesystemIdentity,
        credential: Credential,
        param: ParameterSpec,
    ) -> Ack:
        """
        Set a parameter on every server of a filesystem.

        Raises:
            DispatchError: If the request fails on the gateway's terms
        """
        request = SetParamRequest(
            fs_name=fs.fs_name,
            config_server=fs.config_server,
            credential=credential_payload(credential),
            param=ParamPayload(**param.to_wire()),
        )
        return self._set_param('/mgmt/setparam/all', fs.mount_dir, request)

    def lookup(self, fs: FilesystemIdentity, path: str, credential: Credential) -> int:
        """
        Resolve a cluster-relative directory path to its handle.

        Raises:
            ParentNotFoundError: If a segment is missing, is not a directory, or the lookup fails
        """
        request = LookupRequest(
            fs_name=fs.fs_name,
            config_server=fs.config_server,
            path=path,
            credential=credential_payload(credential),
        )
        try:
            response = self._request_with_retry('POST', '/sys/lookup', json=request.model_dump())
        except ConnectionError as e:
            raise ParentNotFoundError(path, str(e))

        if response.status_code != 200:
            code, message = self._error_details(response)
            raise ParentNotFoundError(path, message, code)

        try:
            result = self._decode(LookupResponse, response)
        except ValueError as e:
            raise ParentNotFoundError(path, str(e))
        if result.type != 'directory':
            raise ParentNotFoundError(path, ERROR_MESSAGES['ENOTDIR'], 'ENOTDIR')
        return result.handle

    def mkdir(
        self,
        name: str,
        parent: ObjectRef,
        attr: Attributes,
        credential: Credential,
    ) -> ObjectRef:
        """
        Create a directory entry under a parent handle.

        Raises:
            CreateFailedError: If the gateway refuses the creation
        """
        request = MkdirRequest(
            fs_name=parent.fs.fs_name,
            config_server=parent.fs.config_server,
            parent_handle=parent.handle,
            name=name,
            attr=attr_payload(attr),
            credential=credential_payload(credential),
        )
        try:
            response = self._request_with_retry(
                'POST',
                '/sys/mkdir',
                max_retries=0,
                json=request.model_dump(),
            )
        except ConnectionError as e:
            raise CreateFailedError(name, str(e))

        if response.status_code not in (200, 201):
            code, message = self._error_details(response)
            raise CreateFailedError(name, message, code)

        try:
            result = self._decode(MkdirResponse, response)
        except ValueError as e:
            raise CreateFailedError(name, str(e))
        logger.info(f"Created directory {name} under handle {parent.handle}: handle={result.handle}")
        return ObjectRef(fs=parent.fs, handle=result.handle)

    def close(self) -> None:
        """Close the HTTP session."""
        self.session.close()
