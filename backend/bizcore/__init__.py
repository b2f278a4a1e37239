"""Back-office data service: attendance, sales pipeline, task bot and jobFms masters."""
