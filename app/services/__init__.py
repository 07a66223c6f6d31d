# Service layer for the irrigation panel
# - device_client:  aiohttp client for the controller's REST API
# - notifications:  single-slot message bar with timed dismissal
# - preferences:    persisted theme and poll cadence
# - status_sync:    recurring /status poll and rendering, one-shot /config fetch
# - commands:       start/stop/set-time with feedback and re-sync
