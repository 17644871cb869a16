import logging
from pathlib import Path
from xml.sax import SAXException

import overpy
import requests

from geo_document.exceptions import GeoDocumentFetchError
from geo_document.geo_node import GeoNode

logger = logging.getLogger(__name__)


class GeoDocumentParser:
    """
    Parses OpenStreetMap XML documents into GeoNode mappings keyed by node id.

    Only node elements are taken into account; ways and relations are read by
    the underlying parser but ignored. The document is expected to be
    well-formed, a document that cannot be parsed at all results in an empty
    mapping and a logged error instead of an exception.
    """

    _OVERPASS = overpy.Overpass()

    @classmethod
    def parse(cls, text: str | bytes) -> dict[str, GeoNode]:
        try:
            result = cls._OVERPASS.parse_xml(text)
        except (
            SAXException,
            KeyError,
            ValueError,
            ArithmeticError,
            overpy.exception.OverPyException,
        ) as exc:
            logger.error("Unable to parse geo document: %s", exc)
            return {}

        geo_nodes: dict[str, GeoNode] = {}
        for node in result.get_nodes():
            if node.id is None:
                logger.warning("Skipping geo node without id, tags: %s", node.tags)
                continue

            node_id = str(node.id)
            geo_nodes[node_id] = GeoNode(
                id=node_id,
                lat=float(node.lat) if node.lat is not None else 0.0,
                lon=float(node.lon) if node.lon is not None else 0.0,
                tags=dict(node.tags),
            )

        return geo_nodes


class GeoDocumentLoader:
    """
    Reads raw geo documents from a file path or an HTTP(S) URL. Decoding is
    left to GeoDocumentParser, so undecodable content counts as unparsable.
    """

    def __init__(self, timeout: float = 10.0) -> None:
        self._timeout = timeout

    def fetch(self, source: str) -> bytes:
        if source.startswith(("http://", "https://")):
            return self._fetch_url(source)

        return self._fetch_path(Path(source))

    def _fetch_url(self, url: str) -> bytes:
        try:
            response = requests.get(url, timeout=self._timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise GeoDocumentFetchError(url, str(exc)) from exc

        return response.content

    @staticmethod
    def _fetch_path(path: Path) -> bytes:
        try:
            return path.read_bytes()
        except OSError as exc:
            raise GeoDocumentFetchError(str(path), str(exc)) from exc

    def load(self, source: str) -> dict[str, GeoNode]:
        return GeoDocumentParser.parse(self.fetch(source))
