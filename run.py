#!/usr/bin/env python3
"""Run script for meetingscheduler."""

import logging

import uvicorn

from meetingscheduler.config import HOST, LOG_LEVEL, PORT

if __name__ == "__main__":
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        "meetingscheduler.api.app:app",
        host=HOST,
        port=PORT,
        reload=True
    )
