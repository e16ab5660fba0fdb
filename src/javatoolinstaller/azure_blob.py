# Copyright (c) 2026 - 2026, Oracle and/or its affiliates. All rights reserved.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/.

"""This module downloads JDK archives from an Azure blob storage container."""

import fnmatch
import logging
import ntpath
import os
import urllib.parse
from xml.etree.ElementTree import Element  # nosec B405

import requests
from defusedxml.ElementTree import fromstring
from defusedxml.common import DefusedXmlException

from javatoolinstaller.config.defaults import defaults
from javatoolinstaller.config.task_inputs import AzureStorageDescriptor
from javatoolinstaller.errors import ArtifactDownloadError

logger: logging.Logger = logging.getLogger(__name__)


def blob_service_url(descriptor: AzureStorageDescriptor) -> str:
    """Return the base URL of the blob service of the storage account.

    The endpoint is used as is when it is an HTTP(S) URL, which allows emulators and
    sovereign clouds. Otherwise the public blob endpoint of the account is used.

    >>> blob_service_url(AzureStorageDescriptor("", "myaccount", "jdks", "jdk-11.zip"))
    'https://myaccount.blob.core.windows.net'
    """
    if descriptor.endpoint.startswith(("http://", "https://")):
        return descriptor.endpoint.rstrip("/")
    return f"https://{descriptor.account}.blob.core.windows.net"


def _with_sas(url: str, descriptor: AzureStorageDescriptor, query: dict[str, str] | None = None) -> str:
    parts = [urllib.parse.urlencode(query)] if query else []
    if descriptor.sas_token:
        parts.append(descriptor.sas_token.lstrip("?"))
    return f"{url}?{'&'.join(parts)}" if parts else url


def _find_text(element: Element, tag: str) -> str:
    child = element.find(tag)
    return (child.text or "") if child is not None else ""


class AzureStorageArtifactDownloader:
    """Fetch blobs matching a name pattern from one container."""

    def __init__(self, descriptor: AzureStorageDescriptor) -> None:
        self.descriptor = descriptor
        self.base_url = f"{blob_service_url(descriptor)}/{urllib.parse.quote(descriptor.container)}"
        self.timeout = defaults.getint("remote", "request_timeout", fallback=60)
        self.chunk_size = defaults.getint("remote", "chunk_size", fallback=65536)

    def list_blobs(self) -> list[str]:
        """Return the names of all blobs in the container.

        Raises
        ------
        ArtifactDownloadError
            If the listing cannot be retrieved or parsed.
        """
        names: list[str] = []
        marker = ""
        while True:
            query = {"restype": "container", "comp": "list"}
            if marker:
                query["marker"] = marker
            url = _with_sas(self.base_url, self.descriptor, query)
            logger.debug("GET - %s", self.base_url)
            try:
                response = requests.get(url=url, timeout=self.timeout)
            except requests.RequestException as error:
                raise ArtifactDownloadError(f"Cannot list the blobs of {self.base_url}.") from error
            if response.status_code != 200:
                raise ArtifactDownloadError(
                    f"Cannot list the blobs of {self.base_url}: the server returned {response.status_code}."
                )

            try:
                root = fromstring(response.content)
            except (DefusedXmlException, SyntaxError) as error:
                raise ArtifactDownloadError(f"Invalid blob listing returned by {self.base_url}.") from error

            names.extend(_find_text(blob, "Name") for blob in root.iterfind("./Blobs/Blob"))
            marker = _find_text(root, "NextMarker")
            if not marker:
                return names

    def download_blob(self, blob_name: str, dest: str) -> None:
        """Stream one blob into ``dest``.

        The file is flushed and synced to disk before this function returns, so it can be
        extracted right away.

        Raises
        ------
        ArtifactDownloadError
            If an error happens while streaming the blob.
        """
        url = f"{self.base_url}/{urllib.parse.quote(blob_name)}"
        logger.info("Downloading %s to %s.", blob_name, dest)
        try:
            response = requests.get(url=_with_sas(url, self.descriptor), stream=True, timeout=self.timeout)
        except requests.RequestException as error:
            raise ArtifactDownloadError(f"Cannot download {blob_name} from {self.base_url}.") from error

        if response.status_code != 200:
            response.close()
            raise ArtifactDownloadError(
                f"Cannot download {blob_name} from {self.base_url}: the server returned {response.status_code}."
            )

        try:
            with open(dest, "wb") as fd:
                for chunk in response.iter_content(chunk_size=self.chunk_size, decode_unicode=False):
                    fd.write(chunk)
                fd.flush()
                os.fsync(fd.fileno())
        except (requests.RequestException, OSError) as error:
            # Remove the partial archive.
            if os.path.isfile(dest):
                os.remove(dest)
            raise ArtifactDownloadError(f"Error while downloading {blob_name} to {dest}.") from error
        finally:
            response.close()

    def download_artifacts(self, download_to: str, pattern: str) -> list[str]:
        """Download every blob whose name matches ``pattern`` into ``download_to``.

        Parameters
        ----------
        download_to : str
            The local directory to download into. It is created if missing.
        pattern : str
            A shell-style pattern matched against the full blob names.

        Returns
        -------
        list[str]
            The local paths of the downloaded files.

        Raises
        ------
        ArtifactDownloadError
            If no blob matches or a download fails.
        """
        matching = [name for name in self.list_blobs() if fnmatch.fnmatchcase(name, pattern)]
        if not matching:
            raise ArtifactDownloadError(f"No blob in {self.base_url} matches {pattern}.")

        os.makedirs(download_to, exist_ok=True)
        downloaded = []
        for blob_name in matching:
            dest = build_file_path(download_to, blob_name)
            self.download_blob(blob_name, dest)
            downloaded.append(dest)
        return downloaded


def build_file_path(local_root: str, file_name_and_path: str) -> str:
    """Return the path of ``file_name_and_path``'s base name inside ``local_root``.

    Both ``/`` and ``\\`` are treated as path separators.

    >>> build_file_path("/tmp/jdks", "java/11/jdk-11.tar.gz")
    '/tmp/jdks/jdk-11.tar.gz'
    """
    file_name = ntpath.basename(file_name_and_path.replace("/", "\\"))
    return os.path.join(local_root, file_name)
