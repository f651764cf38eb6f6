"""
Hue bridge poller - runs the fetch-then-correlate pipeline for every configured bridge
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Dict, List, Tuple

from exceptions import BridgeConfigError, HueBridgeError
from metrics import CycleReport, MetricAccumulator, ResourceCorrelator
from resources import ResourceFetcher
from topology import RoomAssignments, TopologyIndex

logger = logging.getLogger(__name__)

# Reading kinds fetched after devices and rooms: (resource kind, label, correlator method)
READING_KINDS: List[Tuple[str, str, str]] = [
    ("light", "lights", "eval_lights"),
    ("temperature", "temperatures", "eval_temperatures"),
    ("light_level", "light levels", "eval_light_levels"),
    ("motion", "motions", "eval_motions"),
    ("device_power", "device powers", "eval_device_powers"),
]

class HueBridgePoller:
    """Polls the configured bridges; one instance lives for the whole process"""

    def __init__(self, config: Dict):
        self.bridges = config.get('bridges', [])
        self.timeout = config.get('timeout', 10)
        self.debug = config.get('debug', False)
        self.assignments = RoomAssignments(config.get('room_assignments', []))
        self.fetcher = ResourceFetcher(self.timeout, self.debug)

    async def close(self):
        await self.fetcher.close()

    def _validate_bridges(self) -> List[Tuple[str, str]]:
        """Check the whole bridge list before any bridge is contacted"""
        if not self.bridges:
            raise BridgeConfigError("huebridge: Empty bridge list")

        targets = []
        for bridge in self.bridges:
            if not isinstance(bridge, (list, tuple)) or len(bridge) != 2:
                raise BridgeConfigError(f"huebridge: Invalid bridge entry: {bridge}")
            targets.append((bridge[0], bridge[1]))
        return targets

    async def gather(self, accumulator: MetricAccumulator):
        """
        Poll all bridges once
        Raises BridgeConfigError for an empty or malformed bridge list; all other
        failures are added to the accumulator as errors
        """
        targets = self._validate_bridges()

        for bridge_url, application_key in targets:
            try:
                await self.process_bridge(accumulator, bridge_url, application_key)
            except HueBridgeError as e:
                accumulator.add_error(e)

    async def process_bridge(self, accumulator: MetricAccumulator, bridge_url: str, application_key: str):
        """
        Fetch devices and rooms (both required), then fetch and emit the reading kinds
        A failing reading kind only drops that kind's metrics for this bridge
        """
        if self.debug:
            logger.info(f"Processing bridge: {bridge_url}")

        devices = await self.fetcher.fetch(bridge_url, application_key, "device")
        rooms = await self.fetcher.fetch(bridge_url, application_key, "room")

        topology = TopologyIndex(devices.data, rooms.data)
        correlator = ResourceCorrelator(bridge_url, topology, self.assignments, accumulator)

        # Reading kinds are independent of each other - fetch concurrently, emit in order
        results = await asyncio.gather(
            *(self.fetcher.fetch(bridge_url, application_key, kind) for kind, _, _ in READING_KINDS),
            return_exceptions=True
        )

        for (kind, label, method), result in zip(READING_KINDS, results):
            if isinstance(result, HueBridgeError):
                accumulator.add_error(HueBridgeError(f"failed to eval {label} (cause: {result})"))
                continue
            if isinstance(result, BaseException):
                raise result
            getattr(correlator, method)(result.data)

        if self.debug:
            logger.info(f"Finished bridge: {bridge_url} ({len(topology)} devices)")

    async def run_cycle(self) -> CycleReport:
        """Run one poll cycle and summarize it"""
        started = datetime.now(timezone.utc)
        accumulator = MetricAccumulator()
        config_error = None

        try:
            await self.gather(accumulator)
        except BridgeConfigError as e:
            config_error = str(e)

        return CycleReport(
            started=started,
            finished=datetime.now(timezone.utc),
            records=accumulator.records,
            errors=[str(error) for error in accumulator.errors],
            config_error=config_error
        )

    def get_bridge_urls(self) -> List[str]:
        """Configured bridge URLs (application keys are never exposed)"""
        return [bridge[0] for bridge in self.bridges if isinstance(bridge, (list, tuple)) and bridge]
