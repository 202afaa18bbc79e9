# app/services/network_manager.py
import threading
from pathlib import Path
from time import perf_counter
from typing import Optional

from pydantic import ValidationError

from app.core.config import settings
from app.core.logger import logger
from app.models.network import NetworkFile
from app.services.graph_builder import NetworkDataError, Node, PathNetwork


def load_network(path: Path) -> PathNetwork:
    """
    Read and validate a path network JSON file.

    Any problem with the file (missing, bad JSON, bad node references) is a
    configuration error and raises NetworkDataError.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise NetworkDataError(f"Cannot read network file {path}: {exc}") from exc

    try:
        data = NetworkFile.model_validate_json(raw)
    except ValidationError as exc:
        raise NetworkDataError(f"Invalid network file {path}: {exc}") from exc

    nodes = [
        Node(index=i, lat=n.lat, lng=n.lng, name=n.name)
        for i, n in enumerate(data.nodes)
    ]
    return PathNetwork.build(
        nodes,
        ((e.from_node, e.to_node, e.coords) for e in data.edges),
    )


class NetworkManager:
    # Holds the static path network, loaded once on first use.

    def __init__(
        self,
        network_file: Optional[Path] = None,
        network: Optional[PathNetwork] = None,
    ) -> None:
        self.network_file = network_file
        # Current network (or None if not loaded yet)
        self._network: Optional[PathNetwork] = network
        self._lock = threading.Lock()
        logger.info("NetworkManager initialised (network will be loaded on demand).")

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    def get_network(self) -> PathNetwork:
        """
        Return the shared read-only network, loading it on first call.
        """
        if self._network is not None:
            return self._network

        with self._lock:
            if self._network is None:
                self._network = self._load()
        return self._network

    def is_loaded(self) -> bool:
        return self._network is not None

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    def _load(self) -> PathNetwork:
        path = self.network_file or settings.network_path()
        logger.info(f"Loading path network from {path}")

        t0 = perf_counter()
        try:
            network = load_network(path)
        except NetworkDataError as exc:
            logger.error(f"Path network could not be loaded: {exc}")
            raise
        t1 = perf_counter()

        components = network.component_count()
        logger.info(
            f"Path network ready: {len(network.nodes)} nodes, {len(network.edges)} edges, "
            f"{network.total_length_m():.1f} m of paths, {components} component(s); "
            f"loaded in {(t1 - t0) * 1000.0:.2f} ms"
        )
        if components > 1:
            logger.warning(
                f"Path network is split into {components} components; "
                "some destinations will be unreachable from some positions."
            )
        return network
