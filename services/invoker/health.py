"""Health check implementations for the invoke service."""

from enum import Enum
import asyncio
import time
from typing import Optional

# Seconds between model-visibility probes on the readiness path
VISIBILITY_CHECK_INTERVAL = 30


class ServiceState(Enum):
    STARTING = "starting"
    READY = "ready"


class HealthChecker:
    """Manages service health state."""

    def __init__(self, bedrock_client):
        self.state = ServiceState.STARTING
        self.bedrock_client = bedrock_client
        self.last_visibility_check: Optional[float] = None
        self.model_visible: bool = False

    async def startup_check(self) -> bool:
        """
        Check if service startup is complete.
        Returns True once the target model is visible to our credentials.
        """
        if self.state == ServiceState.STARTING:
            if await self.bedrock_client.check_model_visible():
                self.state = ServiceState.READY
                self.model_visible = True
                self.last_visibility_check = time.time()
                return True
            return False
        return self.state == ServiceState.READY

    async def readiness_check(self) -> bool:
        """
        Check if service is ready to handle traffic.
        Re-probes model visibility at most every VISIBILITY_CHECK_INTERVAL seconds.
        """
        if self.state == ServiceState.STARTING:
            return False

        now = time.time()
        if self.last_visibility_check is None or (now - self.last_visibility_check) > VISIBILITY_CHECK_INTERVAL:
            self.model_visible = await self.bedrock_client.check_model_visible()
            self.last_visibility_check = now

        return self.model_visible

    async def liveness_check(self) -> bool:
        """Check if the event loop is still responsive."""
        await asyncio.sleep(0)
        return True
