"""
Collector Server - Main orchestrator for polling and the local API
"""

import asyncio
import logging
import time
from typing import Dict, List, Optional
import uvicorn

from config_loader import load_config, setup_logging
from api.main_api import CollectorAPI
from metrics import CycleReport, MetricsStore
from .hue_bridge_poller import HueBridgePoller

logger = logging.getLogger(__name__)

class CollectorServer:
    """Main server running the poll loop and serving the latest metrics"""

    def __init__(self, config_path: str = "config/config.yaml", config: Optional[Dict] = None):
        self.config = config if config is not None else load_config(config_path)
        setup_logging(self.config)

        self.poller = HueBridgePoller(self.config['huebridge'])
        self.store = MetricsStore()
        self.api = CollectorAPI(self.store, self.poller, self.config)

        self.running = False
        self.tasks: List[asyncio.Task] = []

    async def start(self):
        """Start the polling loop and, if enabled, the API server"""
        logger.info("Starting Hue bridge collector...")
        logger.info(f"Bridges configured: {len(self.poller.bridges)}, "
                    f"room assignments: {len(self.poller.assignments.rules)}")

        self.running = True
        self.tasks = [asyncio.create_task(self._polling_service())]

        try:
            if self.config['api']['enabled']:
                await self._start_api_server()
            else:
                logger.info("API server disabled - polling only")
                await asyncio.gather(*self.tasks)
        except Exception as e:
            logger.error(f"Server failed: {e}")
            await self.stop()
            raise

    async def stop(self):
        """Stop all services gracefully"""
        if not self.running and not self.tasks:
            return
        logger.info("Stopping server...")
        self.running = False

        for task in self.tasks:
            task.cancel()

        if self.tasks:
            await asyncio.gather(*self.tasks, return_exceptions=True)
        self.tasks = []

        await self.poller.close()
        logger.info(f"Server stopped after {self.store.cycle_count} cycles")

    async def poll_once(self) -> CycleReport:
        """Run one cycle, log its outcome and store it"""
        report = await self.poller.run_cycle()

        if report.config_error:
            logger.error(f"Poll cycle aborted: {report.config_error}")
        for error in report.errors:
            logger.warning(f"Poll cycle error: {error}")

        logger.debug(f"Poll cycle: {len(report.records)} records, {len(report.errors)} errors "
                     f"in {report.duration_seconds:.2f}s")

        self.store.update(report)
        return report

    async def _polling_service(self):
        """Background service running one cycle per interval"""
        poll_interval = self.config['polling']['interval_seconds']

        logger.info(f"Polling service started ({poll_interval}s intervals)")

        while self.running:
            cycle_start_time = time.time()

            try:
                await self.poll_once()
            except Exception as e:
                logger.error(f"Polling service error: {e}")

            elapsed_time = time.time() - cycle_start_time
            remaining_time = poll_interval - elapsed_time

            # Start next cycle immediately if this one overran
            if remaining_time <= 0:
                logger.warning(
                    f"Polling cycle took {elapsed_time:.1f}s (>{poll_interval}s configured) - "
                    f"skipping sleep. Consider increasing polling.interval_seconds or lowering huebridge.timeout."
                )
                continue

            await asyncio.sleep(remaining_time)

    async def _start_api_server(self):
        """Start the FastAPI server"""
        config = uvicorn.Config(
            self.api.app,
            host=self.config['api']['host'],
            port=self.config['api']['port'],
            log_level="info",
            access_log=False  # We handle our own logging
        )

        server = uvicorn.Server(config)

        logger.info(f"Starting API server on {self.config['api']['host']}:{self.config['api']['port']}")
        logger.info(f"API documentation: http://localhost:{self.config['api']['port']}/docs")

        await server.serve()
