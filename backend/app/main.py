import asyncio
import json
import logging
from pathlib import Path

from redis.asyncio import Redis

from config import settings
from hmi_status.card_config import HmiCardConfig, load_card_config, normalize_device_name
from hmi_status.orchestrator import worst_level
from hmi_status.panel import PanelView
from services.panel_refresher import PanelRefresher

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
)
logger = logging.getLogger("scada.hmi.main")


def load_config() -> HmiCardConfig:
    """Card config from HMI_CONFIG_FILE (JSON) or from env settings."""
    if settings.HMI_CONFIG_FILE:
        path = Path(settings.HMI_CONFIG_FILE)
        raw = json.loads(path.read_text(encoding="utf-8"))
        logger.info("HMI card config file: %s", path)
    else:
        raw = {"title": settings.HMI_TITLE, "device_name": settings.HMI_DEVICE_NAME}
    return load_card_config(raw)


def log_view(view: PanelView) -> None:
    if not logger.isEnabledFor(logging.DEBUG):
        return
    summary = " ".join(f"{key}={res.label}" for key, res in view.snapshot.items())
    logger.debug("%s [%s] %s", view.title, worst_level(view.snapshot).name, summary)


async def main() -> None:
    logger.info("HMI status service starting... DEBUG=%s", settings.DEBUG)
    config = load_config()

    redis = None
    if settings.DEMO_MODE:
        from services.demo_source import DemoStateSource
        source = DemoStateSource(config.entity_prefix)
        logger.info("DEMO_MODE enabled — using DemoStateSource")
    else:
        from services.state_source import RedisStateSource
        redis = Redis.from_url(settings.REDIS_URL, decode_responses=False)
        device = normalize_device_name(config.device_name or settings.HMI_DEVICE_NAME)
        key = settings.HMI_STATE_KEY.format(device=device)
        source = RedisStateSource(redis, key, config.entity_prefix)
        logger.info("Redis connected: %s (state key %s)", settings.REDIS_URL, key)

    refresher = PanelRefresher(source, config, log_view, interval=settings.REFRESH_INTERVAL)
    task = asyncio.create_task(refresher.start())
    try:
        await task
    except asyncio.CancelledError:
        pass
    finally:
        logger.info("HMI status service shutting down...")
        await refresher.stop()
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        if redis is not None:
            await redis.close()
        logger.info("Shutdown complete")


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
